# Copyright (c) 2025 Nick Stockton
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

# Future Modules:
from __future__ import annotations

# Built-in Modules:
from unittest import TestCase
from unittest.mock import Mock

# Net Telnet Modules:
from nettelnet.client import TelnetClient
from nettelnet.config import LoginProfile, TelnetConfig
from nettelnet.errors import ConfigurationError, InvalidPortError, LoginError, LoginFailedError
from nettelnet.telnet_constants import DO, ECHO, GA, IAC, SGA, TRANSMIT_BINARY, WILL
from nettelnet.transport import ReadEvent

from . import FakeTransport


class TestTelnetClient(TestCase):
	def setUp(self) -> None:
		self.transport: FakeTransport = FakeTransport()
		self.factory: Mock = Mock(return_value=self.transport)
		self.config: TelnetConfig = TelnetConfig(host="example.com", prompt="$ ", timeout=0.1)
		self.client: TelnetClient = TelnetClient(self.config, transport_factory=self.factory)
		self.client.connect()
		self.initial: bytes = self.transport.take_written()
		# Peer agreed to suppress go ahead, and nothing we send is echoed.
		self.client.mode.tx_sga = True
		self.client.mode.echo_local = False

	def tearDown(self) -> None:
		del self.client

	def test_connect(self) -> None:
		self.factory.assert_called_once_with("example.com", 23, 0.1)
		self.assertTrue(self.client.online)
		self.assertEqual(
			self.initial,
			IAC + WILL + SGA + IAC + DO + ECHO + IAC + DO + SGA + IAC + DO + TRANSMIT_BINARY + IAC + WILL + TRANSMIT_BINARY,
		)

	def test_connect_replaces_connection(self) -> None:
		new_transport: FakeTransport = FakeTransport()
		self.factory.return_value = new_transport
		self.client.connect("other.example.com", "2323", 5)
		self.factory.assert_called_with("other.example.com", 2323, 5.0)
		self.assertEqual(self.client.timeout, 5.0)
		self.assertTrue(self.transport.closed)
		self.assertIs(self.client.transport, new_transport)
		self.assertEqual(new_transport.read_timeout, 5.0)

	def test_connect_without_host(self) -> None:
		client: TelnetClient = TelnetClient(transport_factory=self.factory)
		with self.assertRaises(ConfigurationError):
			client.connect()
		with self.assertRaises(InvalidPortError):
			client.connect("example.com", 0)
		self.factory.assert_called_once()

	def test_disconnect(self) -> None:
		self.client.put_data(b"bye", echo=False)
		self.client.disconnect()
		self.assertEqual(self.transport.written, b"bye")
		self.assertTrue(self.transport.closed)
		self.assertIsNone(self.client.transport)
		self.assertFalse(self.client.online)
		self.client.disconnect()
		self.client.close()

	def test_disconnect_keeps_pending_input(self) -> None:
		self.transport.feed(b"last words")
		self.client.disconnect()
		self.assertEqual(self.client.get_data(), b"last words")

	def test_context_manager(self) -> None:
		transport: FakeTransport = FakeTransport()
		factory: Mock = Mock(return_value=transport)
		with TelnetClient(self.config, transport_factory=factory) as client:
			self.assertTrue(client.online)
		self.assertTrue(transport.closed)
		self.assertFalse(client.online)
		with TelnetClient(transport_factory=factory) as client:
			self.assertFalse(client.online)
		factory.assert_called_once()

	def test_settings(self) -> None:
		self.assertEqual(self.client.prompt, b"$ ")
		self.client.prompt = "# "
		self.assertEqual(self.client.prompt, b"# ")
		self.assertTrue(self.client.linefeeds)
		self.client.linefeeds = False
		self.assertFalse(self.client.mode.linefeeds)
		self.assertFalse(self.client.pager)
		self.client.pager = True
		self.assertTrue(self.client.mode.pager)
		self.client.set_page_prompt("-- more --")
		self.assertEqual((self.client.page_prompt, self.client.page_continue), (b"-- more --", b" "))
		self.client.set_page_prompt("[q] ", "q")
		self.assertEqual((self.client.page_prompt, self.client.page_continue), (b"[q] ", b"q"))

	def test_println(self) -> None:
		self.assertTrue(self.client.println("ls"))
		self.assertEqual(self.transport.take_written(), b"ls\r\n")
		self.assertTrue(self.client.println(["a", b"b\n"]))
		self.assertEqual(self.transport.take_written(), b"a\r\nb\r\n")
		self.client.linefeeds = False
		self.assertTrue(self.client.println("ls"))
		self.assertEqual(self.transport.take_written(), b"ls\n")

	def test_println_while_peer_has_the_line(self) -> None:
		self.client.mode.tx_sga = False
		self.client._go_ahead = False
		self.assertFalse(self.client.println("ls"))
		self.assertEqual(self.transport.written, b"")

	def test_send(self) -> None:
		self.assertTrue(self.client.send(b""))
		self.assertTrue(self.client.send(None))
		self.assertEqual(self.transport.written, b"")
		self.assertTrue(self.client.send("hi\xff"))
		self.assertEqual(self.transport.take_written(), b"hi\xff\xff")
		self.assertTrue(self.client.send(b"\xff", escape=False))
		self.assertEqual(self.transport.take_written(), b"\xff")

	def test_send_with_telnet_bugs(self) -> None:
		transport: FakeTransport = FakeTransport()
		client: TelnetClient = TelnetClient(
			TelnetConfig(host="example.com", telnet_bugs=True, timeout=0.1),
			transport_factory=Mock(return_value=transport),
		)
		client.connect()
		self.assertTrue(client.send("hi"))
		transport.close()
		self.assertFalse(client.send("lost"))

	def test_waitfor(self) -> None:
		self.transport.feed(b"output\r\n$ more")
		self.assertEqual(self.client.waitfor(), b"output\n$ ")
		self.assertIsNone(self.client.waitfor(timeout=0.05))
		self.assertEqual(self.client.get_data(), b"more")
		self.transport.feed(b"ok> ")
		self.assertEqual(self.client.waitfor("> "), b"ok> ")

	def test_waitfor_without_pattern(self) -> None:
		self.client.prompt = None
		self.transport.feed(b"ignored")
		self.assertEqual(self.client.waitfor(), b"")
		self.client.disconnect()
		self.assertIsNone(self.client.waitfor())

	def test_waitfor_offline(self) -> None:
		client: TelnetClient = TelnetClient(TelnetConfig(prompt="$ "))
		self.assertIsNone(client.waitfor())

	def test_waitfor_end_of_stream(self) -> None:
		self.transport.feed(b"bye", ReadEvent.END_OF_STREAM)
		self.assertEqual(self.client.waitfor(), b"bye")
		self.assertFalse(self.client.online)

	def test_waitfor_end_of_stream_with_local_echo(self) -> None:
		self.client.mode.echo_local = True
		self.transport.feed(ReadEvent.END_OF_STREAM)
		self.client.println("exit")
		self.assertIsNone(self.client.waitfor())
		self.assertFalse(self.client.online)
		self.assertEqual(self.client.get_data(), b"exit\r\n")

	def test_reconnect_after_truncated_command(self) -> None:
		self.transport.feed(b"bye" + IAC, ReadEvent.END_OF_STREAM)
		self.assertTrue(self.client.read())
		self.assertFalse(self.client.online)
		self.assertEqual(self.client.get_data(), b"bye")
		new_transport: FakeTransport = FakeTransport(b"Login: ")
		self.factory.return_value = new_transport
		self.client.connect()
		self.assertEqual(self.client.waitfor("Login: "), b"Login: ")

	def test_cmd(self) -> None:
		self.transport.feed(b"one\r\n$ two\r\n$ ")
		self.assertEqual(self.client.cmd(["first", "second"]), b"one\n$ two\n$ ")
		self.assertEqual(self.transport.take_written(), b"first\r\nsecond\r\n")

	def test_cmd_partial(self) -> None:
		self.transport.feed(b"one\r\n$ tw")
		self.assertEqual(self.client.cmd(["first", "second", "third"], timeout=0.05), b"one\n$ ")
		self.assertEqual(self.transport.take_written(), b"first\r\nsecond\r\n")

	def test_cmd_no_output(self) -> None:
		self.assertIsNone(self.client.cmd("first", timeout=0.05))
		self.assertEqual(self.transport.take_written(), b"first\r\n")

	def test_expect(self) -> None:
		self.transport.feed(b"Name: ")
		self.assertTrue(self.client.expect({"Password: ": "secret\r", b"Name: ": "bob\r"}))
		self.assertEqual(self.client.last_match, b"Name: ")
		self.assertEqual(self.transport.take_written(), b"bob\r")
		self.transport.feed(b"Continue? ")
		self.assertTrue(self.client.expect("Continue? ", "y"))
		self.assertEqual(self.transport.take_written(), b"y")

	def test_expect_not_found(self) -> None:
		self.transport.feed(b"Something else")
		self.assertFalse(self.client.expect({"Name: ": "bob\r"}, timeout=0.05))
		self.assertEqual(self.transport.written, b"")

	def test_expect_empty_pattern(self) -> None:
		self.transport.feed(b"banner")
		self.assertTrue(self.client.expect({"": "hello"}))
		self.assertEqual(self.transport.take_written(), b"hello")
		self.assertEqual(self.client.get_data(), b"banner")

	def test_expect_invalid_arguments(self) -> None:
		with self.assertRaises(ValueError):
			self.client.expect("Name: ")
		with self.assertRaises(ValueError):
			self.client.expect({})

	def test_login(self) -> None:
		self.transport.feed(b"Login: ", b"Password: ", b"$ ")
		self.assertEqual(self.client.login("bob", "secret"), b"Login: Password: $ ")
		self.assertEqual(self.transport.take_written(), b"bob\rsecret\r")

	def test_login_with_success_pattern(self) -> None:
		self.client.prompt = None
		self.transport.feed(b"Login: ", b"Password: ", b"$ ")
		profile: LoginProfile = LoginProfile(
			login_prompt="Login: ",
			password_prompt="Password: ",
			login="bob",
			password="secret",
			login_success="$",
		)
		self.assertEqual(self.client.login(profile=profile), b"Login: Password: $")
		self.assertEqual(self.transport.take_written(), b"bob\rsecret\r")
		self.assertTrue(self.client.read())
		self.assertEqual(self.client.get_data(), b" ")

	def test_login_with_profile(self) -> None:
		self.transport.feed(b"Username: Last login: today\r\n$ ")
		profile: LoginProfile = LoginProfile(
			login_prompt="Username: ",
			password_prompt=None,
			login_success="Last login",
			login="bob",
		)
		self.assertEqual(self.client.login(profile=profile), b"Username: Last login: today\n$ ")
		self.assertEqual(self.transport.take_written(), b"bob\r")

	def test_login_with_profile_prompt(self) -> None:
		self.transport.feed(b"Login: Password: bob@host> ")
		profile: LoginProfile = LoginProfile(login="bob", password="secret", prompt="> ")
		self.assertEqual(self.client.login(profile=profile), b"Login: Password: bob@host> ")
		self.assertEqual(self.client.prompt, b"> ")

	def test_login_failed(self) -> None:
		self.transport.feed(b"Login: Password: Login incorrect\r\nLogin: ")
		profile: LoginProfile = LoginProfile(login="bob", password="wrong", login_fail="Login incorrect")
		with self.assertRaises(LoginFailedError) as cm:
			self.client.login(profile=profile)
		self.assertEqual(cm.exception.output, b"Login: Password: Login incorrect")

	def test_login_prompt_not_found(self) -> None:
		self.transport.feed(b"Welcome")
		with self.assertRaises(LoginError) as cm:
			self.client.login("bob", "secret")
		self.assertNotIsInstance(cm.exception, LoginFailedError)
		self.assertEqual(cm.exception.output, b"Welcome")

	def test_login_command_prompt_not_found(self) -> None:
		self.transport.feed(b"Login: Password: Last login")
		with self.assertRaises(LoginError):
			self.client.login(profile=LoginProfile(login_success="Last login"))

	def test_login_without_success_pattern(self) -> None:
		self.client.prompt = None
		with self.assertRaises(ConfigurationError):
			self.client.login("bob", "secret")
		self.assertEqual(self.transport.written, b"")

	def test_login_connects_when_offline(self) -> None:
		# Default session flags: local echo on, and peer has not agreed to suppress go ahead.
		transport: FakeTransport = FakeTransport(b"Login: ", b"Password: ", b"$ ")
		factory: Mock = Mock(return_value=transport)
		client: TelnetClient = TelnetClient(self.config, transport_factory=factory)
		self.assertEqual(client.login("bob", "secret"), b"Login: bob\rPassword: secret\r$ ")
		factory.assert_called_once_with("example.com", 23, 0.1)
		# The line is ours after connecting, so the first send hands it back with IAC GA.
		self.assertEqual(transport.take_written(), self.initial + b"bob\r" + IAC + GA + b"secret\r")
