# Copyright (c) 2025 Nick Stockton
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""Scripted Telnet client."""

# Future Modules:
from __future__ import annotations

# Built-in Modules:
import logging
from collections.abc import Mapping, Sequence
from types import TracebackType
from typing import Any, Optional, Union

# Third-party Modules:
from knickknacks.typedef import Self

# Local Modules:
from .config import LoginProfile, TelnetConfig, resolve_port, validate_timeout
from .echo import EchoMixIn
from .errors import ConfigurationError, LoginError, LoginFailedError, TelnetError
from .telnet import ReadResult, TelnetProtocol
from .telnet_constants import CR, LF
from .transport import SocketTransport, TransportInterface
from .typedef import BytesOrStr, ExpectMapType, TransportFactoryType
from .utils import expand_newlines


logger: logging.Logger = logging.getLogger(__name__)


class TelnetClient(EchoMixIn, TelnetProtocol):
	"""
	A Telnet client for scripted interaction.

	Example:
		with TelnetClient(TelnetConfig(host="localhost", prompt="$ ")) as client:
			client.login("bob", "secret")
			output = client.cmd("uptime")
	"""

	def __init__(
		self,
		config: Optional[TelnetConfig] = None,
		*,
		transport_factory: TransportFactoryType = SocketTransport.open,
		**kwargs: Any,
	) -> None:
		"""
		Defines the constructor.

		Args:
			config: The session configuration. Defaults are used if None.
			transport_factory: Called with host, port, and timeout to open a transport.
			**kwargs: Key-word only arguments passed to the parent classes.
		"""
		super().__init__(config=config, **kwargs)
		self._transport_factory: TransportFactoryType = transport_factory
		self._prompt: Union[bytes, None] = None
		if self.config.prompt is not None:
			self.prompt = self.config.prompt
		self.login_profile: LoginProfile = self.config.login
		"""Settings used by `login`."""

	def __enter__(self) -> Self:
		if not self.online and self.config.host is not None:
			self.connect()
		return self

	def __exit__(
		self,
		exc_type: Optional[type[BaseException]],
		exc_value: Optional[BaseException],
		exc_traceback: Optional[TracebackType],
	) -> None:
		self.disconnect()

	@property
	def prompt(self) -> Union[bytes, None]:
		"""The command interpreter prompt, or None if unset."""
		return self._prompt

	@prompt.setter
	def prompt(self, value: Optional[BytesOrStr]) -> None:
		self._prompt = None if value is None else self.encode(value)
		logger.debug(f"Prompt set to {self._prompt!r}.")

	@property
	def linefeeds(self) -> bool:
		"""Translate CR LF to LF on input and LF to CR LF on output."""
		return self.mode.linefeeds

	@linefeeds.setter
	def linefeeds(self, value: bool) -> None:
		self.mode.linefeeds = value

	@property
	def pager(self) -> bool:
		"""Answer page prompts automatically."""
		return self.mode.pager

	@pager.setter
	def pager(self, value: bool) -> None:
		self.mode.pager = value

	def set_page_prompt(self, page_prompt: BytesOrStr, page_continue: Optional[BytesOrStr] = None) -> None:
		"""
		Changes the page prompt, and optionally the response to it.

		Args:
			page_prompt: Printed by peer when a page full of output has been sent.
			page_continue: Sent to peer in response to the page prompt.
		"""
		self.page_prompt = self.encode(page_prompt)
		if page_continue is not None:
			self.page_continue = self.encode(page_continue)

	def close(self) -> None:
		"""Calls `disconnect`."""
		self.disconnect()

	def connect(
		self,
		host: Optional[str] = None,
		port: Optional[Union[int, str]] = None,
		timeout: Optional[float] = None,
	) -> None:
		"""
		Connects to peer and starts the initial negotiation.

		Arguments which are None are taken from the configuration.
		An existing connection is closed first.

		Args:
			host: The remote host.
			port: The remote TCP port, or a service name.
			timeout: The connect timeout, and new default timeout of blocking reads, in seconds.

		Raises:
			ConfigurationError: No host was given, or port or timeout are invalid.
			TransportError: Unable to connect.
		"""
		host = self.config.host if host is None else host
		if not host:
			raise ConfigurationError("A remote host is required.")
		port_number: int = resolve_port(self.config.port if port is None else port)
		if timeout is not None:
			self.timeout = validate_timeout(timeout)
		if self.transport is not None:
			self.disconnect()
		transport: TransportInterface = self._transport_factory(host, port_number, self.timeout)
		logger.debug(f"Connected to {host}:{port_number}.")
		self.make_connection(transport)

	def disconnect(self) -> None:
		"""
		Flushes pending output, drains pending input, and closes the connection.

		Raises:
			TransportError: The transport could not be closed cleanly.
		"""
		if self.transport is None:
			return None
		try:
			self.flush()
			self.read()
		except TelnetError as e:
			logger.debug(f"Error while disconnecting: {e}")
		# The drain closes the transport itself if it reaches the end of the stream.
		transport, self.transport = self.transport, None
		if transport is not None:
			transport.close()
			self.on_connection_lost()

	def println(self, data: Union[BytesOrStr, Sequence[BytesOrStr]] = b"") -> bool:
		"""
		Sends one or more lines to peer.

		A line feed is added to every line which lacks one.

		Args:
			data: A line, or a sequence of lines.

		Returns:
			True if the write buffer was flushed, False if peer still has the line.
		"""
		lines: Sequence[BytesOrStr] = [data] if isinstance(data, (bytes, bytearray, str)) else data
		for line in lines:
			encoded: bytes = self.encode(line)
			if not encoded.endswith(LF):
				encoded += LF
			if self.mode.linefeeds:
				encoded = expand_newlines(encoded)
			self.put_data(encoded)
		return self.go_ahead()

	def send(self, data: Optional[BytesOrStr], *, escape: bool = True, echo: bool = True) -> bool:
		"""
		Sends data to peer.

		Args:
			data: The data to be sent.
			escape: Escape special bytes.
			echo: Copy the data into the read buffer if local echo is enabled.

		Returns:
			False if the data could not be written, True otherwise.
		"""
		if not data:
			return True
		self.put_data(data, escape=escape, echo=echo)
		result: bool = True
		if self.mode.telnet_bugs:
			# Some peers never send go ahead.
			self.flush()
			result = not self._write_buffer
		self.go_ahead()
		return result

	def waitfor(self, pattern: Optional[BytesOrStr] = None, timeout: Optional[float] = None) -> Union[bytes, None]:
		"""
		Reads until the data ends with a pattern.

		Args:
			pattern: The pattern. Defaults to the prompt.
			timeout: Seconds to wait. Defaults to the default read timeout.

		Returns:
			Everything in the read buffer, or None if the pattern was not found.
		"""
		if pattern is None:
			pattern = self.prompt
		if not pattern:
			return self.get_data() if self.online else None
		elif self.transport is None:
			return None
		elif self.transport.at_eof:
			self.disconnect()
			return self.get_data()
		result: ReadResult = self.read(pattern, timeout=timeout)
		# Local echo of our own output does not count as data from peer.
		if result or (not self.online and result.count > 0):
			return self.get_data()
		logger.debug(f"Pattern {pattern!r} not found.")
		return None

	def cmd(self, commands: Union[BytesOrStr, Sequence[BytesOrStr]], timeout: Optional[float] = None) -> Union[bytes, None]:
		"""
		Sends commands and waits for the prompt after each.

		Remaining commands are skipped after the first one whose prompt is not found.

		Args:
			commands: A command, or a sequence of commands.
			timeout: Seconds to wait for each prompt. Defaults to the default read timeout.

		Returns:
			The output of the commands, or None if nothing was read.
		"""
		if isinstance(commands, (bytes, bytearray, str)):
			commands = [commands]
		output: bytearray = bytearray()
		for command in commands:
			self.println(command)
			result: Union[bytes, None] = self.waitfor(self.prompt, timeout=timeout)
			if result is None:
				logger.debug(f"Prompt not found after {command!r}, skipping remaining commands.")
				return bytes(output) if output else None
			output.extend(result)
		return bytes(output)

	def expect(
		self,
		patterns: Union[ExpectMapType, BytesOrStr],
		response: Optional[BytesOrStr] = None,
		timeout: Optional[float] = None,
	) -> bool:
		"""
		Reads until one of several patterns is found, and sends the response for it.

		A single empty pattern drains pending input then sends its response unconditionally.

		Args:
			patterns: A mapping of patterns to responses, or a single pattern.
			response: The response, when patterns is a single pattern.
			timeout: Seconds to wait. Defaults to the default read timeout.

		Returns:
			True if a pattern was found and the response sent, False otherwise.

		Raises:
			ValueError: Invalid arguments.
		"""
		responses: dict[bytes, BytesOrStr]
		if isinstance(patterns, Mapping):
			responses = {self.encode(k): v for k, v in patterns.items()}
		elif response is not None:
			responses = {self.encode(patterns): response}
		else:
			raise ValueError("Expected a mapping of patterns to responses, or a pattern and a response.")
		if len(responses) == 1 and b"" in responses:
			logger.debug("Reading with nothing to watch for.")
			if not self.read():
				return False
			return self.send(responses[b""])
		search_for: list[bytes] = [pattern for pattern in responses if pattern]
		if not search_for:
			raise ValueError("No patterns to watch for.")
		result: ReadResult = self.read(search_for, timeout=timeout)
		if not result or result.match is None:
			logger.debug(f"None of {search_for!r} found.")
			return False
		logger.debug(f"Found {result.match!r}, sending {responses[result.match]!r}.")
		return self.send(responses[result.match])

	def login(
		self,
		login: Optional[BytesOrStr] = None,
		password: Optional[BytesOrStr] = None,
		*,
		profile: Optional[LoginProfile] = None,
	) -> bytes:
		"""
		Logs in to peer.

		Connects first if offline. Prompts which are not set are not waited for.

		Args:
			login: Overrides the login name of the profile.
			password: Overrides the password of the profile.
			profile: Login settings to use instead of `login_profile`.

		Returns:
			The data received after the success pattern, or up to the command prompt.

		Raises:
			ConfigurationError: Neither a success pattern nor a command prompt is set.
			LoginError: A prompt or pattern was not found.
			LoginFailedError: Peer sent the failure pattern.
		"""
		profile = self.login_profile if profile is None else profile
		if login is not None:
			profile = profile.merge(login=login)
		if password is not None:
			profile = profile.merge(password=password)
		if profile.prompt is not None:
			self.prompt = profile.prompt
		success: Union[bytes, None] = (
			self.prompt if profile.login_success is None else self.encode(profile.login_success)
		)
		if not success:
			raise ConfigurationError("Login requires a success pattern or a command prompt.")
		fail: Union[bytes, None] = None if not profile.login_fail else self.encode(profile.login_fail)
		if not self.online:
			self.connect()
		self.flush()
		if profile.login_prompt:
			logger.debug(f"Waiting for login prompt {profile.login_prompt!r}.")
			name: bytes = b"" if profile.login is None else self.encode(profile.login)
			if not self.expect(profile.login_prompt, name + CR):
				raise LoginError("Login prompt not found.", output=self.get_data())
		if profile.password_prompt:
			logger.debug(f"Waiting for password prompt {profile.password_prompt!r}.")
			secret: bytes = b"" if profile.password is None else self.encode(profile.password)
			if not self.expect(profile.password_prompt, secret + CR):
				raise LoginError("Password prompt not found.", output=self.get_data())
		result: ReadResult = self.read([success] if fail is None else [success, fail])
		if not result:
			raise LoginError("Unable to complete login.", output=self.get_data())
		elif result.match == fail and fail != success:
			raise LoginFailedError("Login failed.", output=self.get_data())
		logger.debug("Login successful.")
		if self.prompt and success != self.prompt:
			output: Union[bytes, None] = self.waitfor(self.prompt)
			if output is None:
				raise LoginError("Command prompt not found after login.", output=self.get_data())
			return output
		return self.get_data()
