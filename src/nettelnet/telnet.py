# Copyright (c) 2025 Nick Stockton
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""
Telnet protocol.

A blocking Telnet engine which reads from a transport one byte at a time,
separates NVT data from in-band commands, answers option negotiation,
and encodes outgoing data and commands.
"""

# Future Modules:
from __future__ import annotations

# Built-in Modules:
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, auto
from time import monotonic
from typing import Any, Optional, Union

# Local Modules:
from .config import TelnetConfig
from .errors import (
	InvalidCommandError,
	InvalidOptionError,
	PeerInterruptError,
	ProtocolError,
	TransportError,
)
from .ledger import NegotiationLedger
from .mode import SessionMode
from .telnet_constants import (
	AO,
	BRK,
	COMMAND_BYTES,
	COMMAND_RANGE,
	CR,
	DO,
	DONT,
	EXOPL,
	GA,
	IAC,
	IP,
	NEGOTIATION_BYTES,
	NULL,
	SB,
	SE,
	SGA,
	STATUS,
	TIMING_MARK,
	TRANSMIT_BINARY,
	WILL,
	WONT,
	describe_command,
	describe_option,
	is_valid_option,
)
from .transport import ReadEvent, TransportInterface
from .typedef import (
	BytesOrStr,
	SearchPatternsType,
	TelnetCommandMapType,
	TelnetNegotiationMapType,
	TelnetSubnegotiationMapType,
)
from .utils import collapse_newlines, escape_iac, to_bytes


DRAIN_TIMEOUT: float = 0.2
WRITE_CHUNK_SIZE: int = 4096


logger: logging.Logger = logging.getLogger(__name__)


class TelnetState(Enum):
	"""
	Valid states for the state machine.
	"""

	DATA = auto()
	COMMAND = auto()
	NEGOTIATION = auto()
	SUBNEGOTIATION = auto()
	SUBNEGOTIATION_ESCAPED = auto()


@dataclass(frozen=True)
class ReadResult:
	"""The outcome of a read."""

	found: bool
	"""True if the criteria of the read were met."""
	count: int = 0
	"""The number of data bytes read."""
	match: Optional[bytes] = None
	"""The search pattern which ended the read, if any."""

	def __bool__(self) -> bool:
		return self.found


class TelnetInterface(ABC):
	mode: SessionMode
	"""The flags of the session."""
	ledger: NegotiationLedger
	"""The negotiation commands exchanged with peer."""
	command_map: TelnetCommandMapType
	"""A mapping of simple command bytes to callables."""
	will_map: TelnetNegotiationMapType
	"""A mapping of option bytes to callables, called when peer sends WILL."""
	wont_map: TelnetNegotiationMapType
	"""A mapping of option bytes to callables, called when peer sends WONT."""
	do_map: TelnetNegotiationMapType
	"""A mapping of option bytes to callables, called when peer sends DO."""
	dont_map: TelnetNegotiationMapType
	"""A mapping of option bytes to callables, called when peer sends DONT."""
	subnegotiation_map: TelnetSubnegotiationMapType
	"""A mapping of option bytes to callables, called with the subnegotiation payload."""

	@abstractmethod
	def send_command(
		self, command: bytes, option: Optional[bytes] = None, payload: Optional[bytes] = None
	) -> None:
		"""
		Queues a Telnet command for peer.

		Args:
			command: The command.
			option: The option, for WILL, WONT, DO, DONT, and SB.
			payload: The subnegotiation payload, for SB.

		Raises:
			InvalidCommandError: The command can not be sent.
			InvalidOptionError: The option is not a known Telnet option.
		"""

	@abstractmethod
	def reply(self, command: bytes, option: bytes) -> bool:
		"""
		Queues a negotiation command for peer, unless it was already sent for the option.

		Args:
			command: One of WILL, WONT, DO, or DONT.
			option: The option.

		Returns:
			True if the command was queued, False if it was already sent.
		"""

	@abstractmethod
	def put_data(self, data: BytesOrStr, *, escape: bool = True, echo: bool = True) -> None:
		"""
		Adds data to the write buffer.

		Args:
			data: The data to be written.
			escape: Escape special bytes.
			echo: Copy the data into the read buffer if local echo is enabled.
		"""

	@abstractmethod
	def flush(self) -> int:
		"""
		Writes the write buffer to peer.

		Returns:
			The number of bytes written.
		"""

	@abstractmethod
	def on_connection_made(self) -> None:
		"""Called by `make_connection` when a connection to peer has been established."""

	@abstractmethod
	def on_connection_lost(self) -> None:
		"""Called when the connection to peer has been lost."""

	@abstractmethod
	def on_request_initial_echo(self) -> None:
		"""Called during the initial negotiation, between the SGA offer and the BINARY requests."""

	@abstractmethod
	def on_sga_lost(self) -> None:
		"""Called when suppression of go ahead has been turned off."""

	@abstractmethod
	def on_unhandled_command(self, command: bytes) -> None:
		"""
		Called for simple commands for which no handler is installed.

		Args:
			command: The command byte.
		"""

	@abstractmethod
	def on_unhandled_negotiation(self, command: bytes, option: bytes) -> None:
		"""
		Called for negotiation commands for which no handler is installed.

		Args:
			command: One of WILL, WONT, DO, or DONT.
			option: The option.
		"""


class TelnetProtocol(TelnetInterface):
	"""
	Implements the Telnet protocol.
	"""

	def __init__(self, *args: Any, config: Optional[TelnetConfig] = None, **kwargs: Any) -> None:
		super().__init__(*args, **kwargs)
		self.config: TelnetConfig = TelnetConfig() if config is None else config
		self.mode = SessionMode(
			telnet=self.config.telnet,
			telnet_bugs=self.config.telnet_bugs,
			linefeeds=self.config.linefeeds,
			echomode=self.config.echo_mode,  # type: ignore[arg-type]
			pager=self.config.pager,
		)
		self.ledger = NegotiationLedger()
		self.transport: Union[TransportInterface, None] = None
		self.timeout: float = self.config.timeout
		"""Default timeout of blocking reads, in seconds."""
		self.page_prompt: bytes = self.encode(self.config.page_prompt)
		"""Printed by peer when a page full of output has been sent."""
		self.page_continue: bytes = self.encode(self.config.page_continue)
		"""Sent to peer in response to the page prompt."""
		self.state: TelnetState = TelnetState.DATA
		"""The state of the state machine."""
		self._command: bytes = b""
		self._subnegotiation: bytearray = bytearray()
		self._previous_byte: bytes = b""
		self._run: bytearray = bytearray()
		self._read_buffer: bytearray = bytearray()
		self._write_buffer: bytearray = bytearray()
		self._go_ahead: bool = False
		self._last_match: Union[bytes, None] = None
		self.command_map = {
			GA: self.on_go_ahead,
			AO: self.on_abort_output,
			IP: self.on_interrupt_process,
		}
		self.will_map = {
			TRANSMIT_BINARY: self._on_will_binary,
			SGA: self._on_will_sga,
			STATUS: self._ignore,
			TIMING_MARK: self._ignore,
			EXOPL: lambda: self._refuse(DONT, EXOPL),
		}
		self.wont_map = {
			TRANSMIT_BINARY: self._on_wont_binary,
			SGA: self._on_wont_sga,
		}
		self.do_map = {
			TRANSMIT_BINARY: self._on_do_binary,
			SGA: self._on_do_sga,
			STATUS: lambda: self._refuse(WONT, STATUS),
			TIMING_MARK: lambda: self.reply(WILL, TIMING_MARK),
			EXOPL: lambda: self._refuse(WONT, EXOPL),
		}
		self.dont_map = {
			TRANSMIT_BINARY: self._on_dont_binary,
			SGA: self._on_dont_sga,
		}
		self.subnegotiation_map = {}

	def encode(self, value: BytesOrStr) -> bytes:
		"""
		Converts a string argument to bytes using the configured encoding.

		Args:
			value: The value to convert.

		Returns:
			The value as bytes.
		"""
		return to_bytes(value, self.config.encoding)

	@property
	def online(self) -> bool:
		"""True if the transport is open and has not reached the end of the stream."""
		return self.transport is not None and not self.transport.at_eof

	@property
	def last_match(self) -> Union[bytes, None]:
		"""The search pattern which ended the most recent read, or None."""
		return self._last_match

	@property
	def buffered(self) -> int:
		"""The number of bytes in the read buffer."""
		return len(self._read_buffer)

	def make_connection(self, transport: TransportInterface) -> None:
		"""
		Starts a session over an established transport.

		Args:
			transport: The transport.
		"""
		self.transport = transport
		transport.set_read_timeout(self.timeout)
		# A previous stream may have ended in the middle of a command sequence.
		self.state = TelnetState.DATA
		self._command = b""
		self._subnegotiation.clear()
		self._previous_byte = b""
		# Peer has not sent anything yet, so the line is ours.
		self._go_ahead = True
		self.on_connection_made()

	def on_connection_made(self) -> None:
		logger.debug("Connection made.")
		if not self.mode.telnet:
			return None
		if not self.mode.telnet_bugs:
			# RFC 858 suppresses go ahead in each direction independently.
			self.send_command(WILL, SGA)
		self.on_request_initial_echo()
		if not self.mode.telnet_bugs:
			self.send_command(DO, TRANSMIT_BINARY)
			self.send_command(WILL, TRANSMIT_BINARY)
		self.flush()

	def on_connection_lost(self) -> None:
		logger.debug("Connection lost.")

	def on_request_initial_echo(self) -> None:
		return None

	def on_sga_lost(self) -> None:
		return None

	def on_unhandled_command(self, command: bytes) -> None:
		logger.debug(f"No handler for IAC {describe_command(command)}, ignoring.")

	def on_unhandled_negotiation(self, command: bytes, option: bytes) -> None:
		if command == DO:
			# Refuse every option we do not implement.
			self._refuse(WONT, option)

	def send_command(
		self, command: bytes, option: Optional[bytes] = None, payload: Optional[bytes] = None
	) -> None:
		if command in NEGOTIATION_BYTES or command == SB:
			if option is None or not is_valid_option(option):
				raise InvalidOptionError(f"Invalid Telnet option: {option!r}.")
		if command in NEGOTIATION_BYTES:
			logger.debug(f"Send to peer: IAC {describe_command(command)} {describe_option(option)}")  # type: ignore[arg-type]
			self.ledger.record_sent(option, command)  # type: ignore[arg-type]
			self.put_data(IAC + command + option, escape=False, echo=False)  # type: ignore[operator]
		elif command == SB:
			payload = b"" if payload is None else bytes(payload)
			logger.debug(f"Send to peer: IAC SB {describe_option(option)} {payload!r} IAC SE")  # type: ignore[arg-type]
			self.ledger.record_sent_subnegotiation(option, payload)  # type: ignore[arg-type]
			self.put_data(
				IAC + SB + option + escape_iac(payload) + IAC + SE,  # type: ignore[operator]
				escape=False,
				echo=False,
			)
		elif command in COMMAND_BYTES:
			logger.debug(f"Send to peer: IAC {describe_command(command)}")
			self.put_data(IAC + command, escape=False, echo=False)
		elif command == SE:
			raise InvalidCommandError("SE is only sent as the end of a subnegotiation.")
		else:
			raise InvalidCommandError(f"Can not send Telnet command {describe_command(command)}.")

	def reply(self, command: bytes, option: bytes) -> bool:
		if self.ledger.was_sent(option, command):
			logger.debug(f"Already sent IAC {describe_command(command)} {describe_option(option)}, not resending.")
			return False
		self.send_command(command, option)
		return True

	def _refuse(self, command: bytes, option: bytes) -> None:
		logger.debug(f"Refusing option {describe_option(option)}.")
		self.reply(command, option)

	def _ignore(self) -> None:
		return None

	def put_data(self, data: BytesOrStr, *, escape: bool = True, echo: bool = True) -> None:
		data = self.encode(data)
		if self.mode.telnet and escape and not self.mode.tx_binmode:
			data = data.translate(None, COMMAND_RANGE)
		if echo and self.mode.echo_local:
			self._read_buffer.extend(data)
		if self.mode.telnet and escape:
			data = escape_iac(data)
		self._write_buffer.extend(data)
		if self.mode.echo_remote:
			# Peer echoes what it receives.
			self.flush()

	def flush(self) -> int:
		if not self._write_buffer or self.transport is None:
			return 0
		total: int = 0
		while self._write_buffer:
			written: int = self.transport.write(bytes(self._write_buffer[:WRITE_CHUNK_SIZE]))
			if written <= 0:
				logger.debug("Unable to write to peer, end of stream reached.")
				break
			del self._write_buffer[:written]
			total += written
		return total

	def go_ahead(self) -> bool:
		"""
		Flushes the write buffer and gives the line back to peer if needed.

		Returns:
			True if the write buffer was flushed, False if peer still has the line.
		"""
		if self.mode.tx_sga:
			self.flush()
			return True
		elif not self._go_ahead:
			return False
		self.flush()
		if self.mode.telnet:
			logger.debug("Send to peer: IAC GA")
			self._write_buffer.extend(IAC + GA)
			self.flush()
			self._go_ahead = False
		return True

	def send_break(self) -> bool:
		"""
		Sends the NVT break character to peer.

		Returns:
			True if anything was written, False otherwise.
		"""
		self.send_command(BRK)
		return self.flush() > 0

	def get_data(self, count: int = 0) -> bytes:
		"""
		Removes data from the read buffer.

		Args:
			count: The maximum number of bytes to remove, or 0 for everything.

		Returns:
			The removed data.
		"""
		if count <= 0 or count >= len(self._read_buffer):
			data: bytes = bytes(self._read_buffer)
			self._read_buffer.clear()
		else:
			data = bytes(self._read_buffer[:count])
			del self._read_buffer[:count]
		return data

	def _search_patterns(self, search_for: SearchPatternsType) -> list[bytes]:
		if search_for is None:
			return []
		elif isinstance(search_for, (bytes, bytearray, str)):
			search_for = [search_for]
		patterns: list[bytes] = [self.encode(pattern) for pattern in search_for]
		return [pattern for pattern in patterns if pattern]

	def _tail_matches(self, pattern: bytes) -> bool:
		if len(self._run) >= len(pattern):
			return self._run.endswith(pattern)
		return (self._read_buffer[-len(pattern) :] + self._run).endswith(pattern)

	def read(  # NOQA: C901
		self,
		search_for: SearchPatternsType = None,
		max_bytes: int = 0,
		timeout: Optional[float] = None,
	) -> ReadResult:
		"""
		Reads from peer, interpreting Telnet commands, until the criteria are met.

		Called without arguments, reads whatever peer has already sent and returns
		as soon as nothing more arrives within a short poll interval.

		Args:
			search_for: One or more literal patterns. The read ends when the data ends with one of them.
			max_bytes: End the read after this many data bytes. 0 means no limit.
			timeout: Seconds to wait. Defaults to the configured timeout.

		Returns:
			The outcome of the read.

		Raises:
			ProtocolError: A malformed command sequence was received and peer bugs are not tolerated.
			PeerInterruptError: Peer sent IAC IP.
			TransportError: The transport failed.
		"""
		patterns: list[bytes] = self._search_patterns(search_for)
		draining: bool = not patterns and max_bytes <= 0 and timeout is None
		self._last_match = None
		if self.transport is None:
			return ReadResult(found=False)
		self.flush()
		deadline: float = monotonic() + (self.timeout if timeout is None else timeout)
		count: int = 0
		end_of_stream: bool = False
		try:
			while True:
				if draining:
					wait: float = DRAIN_TIMEOUT
				else:
					wait = deadline - monotonic()
					if wait <= 0:
						break
				try:
					byte: Union[bytes, ReadEvent] = self.transport.read_byte(wait)
				except TransportError as e:
					if self.state is TelnetState.DATA:
						raise
					elif not self.mode.telnet_bugs:
						raise ProtocolError(f"Read failed inside a command sequence: {e}") from e
					logger.warning(f"Read failed inside a command sequence, skipping it: {e}")
					self.state = TelnetState.DATA
					break
				if byte is ReadEvent.TIMEOUT:
					if draining:
						break
					continue
				elif byte is ReadEvent.END_OF_STREAM:
					end_of_stream = True
					break
				try:
					appended: bool = self._parse_byte(byte)  # type: ignore[arg-type]
				except ProtocolError as e:
					if not self.mode.telnet_bugs:
						raise
					logger.warning(f"Skipping malformed command sequence: {e}")
					self.state = TelnetState.DATA
					continue
				if not appended:
					continue
				if not draining:
					match: Union[bytes, None] = next(
						(pattern for pattern in patterns if self._tail_matches(pattern)), None
					)
					if match is not None:
						self._last_match = match
						break
				if self.mode.pager and self.page_prompt and self._tail_matches(self.page_prompt):
					self._answer_page_prompt()
				# Abort output and the pager both remove bytes from the run.
				if max_bytes > 0 and len(self._run) >= max_bytes:
					break
		finally:
			count = len(self._run)
			self._commit_run()
		if self._last_match is not None:
			found: bool = True
		elif patterns:
			found = False
		elif max_bytes > 0:
			found = count >= max_bytes
		else:
			# Drain, or read until timeout.
			found = not end_of_stream or count > 0
		if end_of_stream:
			self._on_end_of_stream()
		return ReadResult(found=found, count=count, match=self._last_match)

	def _commit_run(self) -> None:
		if self._run:
			self._read_buffer.extend(collapse_newlines(self._run) if self.mode.linefeeds else self._run)
			self._run.clear()

	def _answer_page_prompt(self) -> None:
		logger.debug("Answering page prompt.")
		self.put_data(self.page_continue, echo=False)
		if not self.go_ahead():
			self.flush()
		# Bytes already in the read buffer stay where they are.
		del self._run[-len(self.page_prompt) :]

	def _on_end_of_stream(self) -> None:
		logger.debug("End of stream reached.")
		self.flush()
		if self._write_buffer:
			logger.debug(f"Discarding {len(self._write_buffer)} unsent bytes.")
			self._write_buffer.clear()
		transport, self.transport = self.transport, None
		if transport is not None:
			transport.close()
		self.on_connection_lost()

	def _parse_byte(self, byte: bytes) -> bool:
		"""
		Feeds one byte to the state machine.

		Args:
			byte: The received byte.

		Returns:
			True if a data byte was added to the current run, False otherwise.

		Raises:
			ProtocolError: Malformed command sequence.
			PeerInterruptError: Peer sent IAC IP.
		"""
		if self.state is TelnetState.DATA:
			if byte == IAC and self.mode.telnet:
				self.state = TelnetState.COMMAND
				return False
			return self._on_data_byte(byte)
		elif self.state is TelnetState.COMMAND:
			return self._on_command_byte(byte)
		elif self.state is TelnetState.NEGOTIATION:
			self.state = TelnetState.DATA
			self.on_negotiation(self._command, byte)
		elif self.state is TelnetState.SUBNEGOTIATION:
			if byte == IAC:
				self.state = TelnetState.SUBNEGOTIATION_ESCAPED
			else:
				self._subnegotiation.extend(byte)
		elif self.state is TelnetState.SUBNEGOTIATION_ESCAPED:
			if byte == SE:
				self.state = TelnetState.DATA
				payload: bytes = bytes(self._subnegotiation)
				self._subnegotiation.clear()
				self.on_subnegotiation(payload[:1], payload[1:])
			else:
				if byte != IAC:
					logger.warning(f"Unexpected IAC {describe_command(byte)} inside subnegotiation.")
				self.state = TelnetState.SUBNEGOTIATION
				self._subnegotiation.extend(byte)
		return False

	def _on_data_byte(self, byte: bytes) -> bool:
		previous: bytes = self._previous_byte
		self._previous_byte = byte
		if self.mode.telnet:
			if byte == NULL and previous == CR:
				return False
			elif byte[0] > 0x7F and not self.mode.rx_binmode:
				logger.debug(f"Discarding non-ASCII byte {byte!r}.")
				return False
		self._run.extend(byte)
		return True

	def _on_command_byte(self, byte: bytes) -> bool:
		if byte == IAC:
			# Escaped IAC.
			self.state = TelnetState.DATA
			self._previous_byte = byte
			self._run.extend(byte)
			return True
		elif byte in NEGOTIATION_BYTES:
			self.state = TelnetState.NEGOTIATION
			self._command = byte
			return False
		elif byte == SB:
			self.state = TelnetState.SUBNEGOTIATION
			self._subnegotiation.clear()
			return False
		self.state = TelnetState.DATA
		if byte == SE:
			logger.warning("IAC SE received outside of subnegotiation.")
		elif byte in COMMAND_BYTES:
			logger.debug(f"Received from peer: IAC {describe_command(byte)}")
			self.on_command(byte)
		else:
			raise ProtocolError(f"Unknown Telnet command received: {byte!r}.")
		return False

	def on_command(self, command: bytes) -> None:
		"""
		Called when a simple two byte command is received.

		Args:
			command: The command byte.
		"""
		if command in self.command_map:
			self.command_map[command]()
		else:
			self.on_unhandled_command(command)

	def on_negotiation(self, command: bytes, option: bytes) -> None:
		"""
		Called when a WILL, WONT, DO, or DONT command is received.

		Args:
			command: The negotiation command.
			option: The option byte.

		Raises:
			InvalidOptionError: The option is not a known Telnet option.
		"""
		if not is_valid_option(option):
			raise InvalidOptionError(
				f"Invalid Telnet option received: IAC {describe_command(command)} {option!r}."
			)
		logger.debug(f"Received from peer: IAC {describe_command(command)} {describe_option(option)}")
		self.ledger.record_received(option, command)
		handlers: TelnetNegotiationMapType = {
			WILL: self.will_map,
			WONT: self.wont_map,
			DO: self.do_map,
			DONT: self.dont_map,
		}[command]
		if option in handlers:
			handlers[option]()
		else:
			self.on_unhandled_negotiation(command, option)
		# Peer may be waiting on our answer.
		self.flush()

	def on_subnegotiation(self, option: bytes, payload: bytes) -> None:
		"""
		Called when a subnegotiation is received.

		Args:
			option: The option byte.
			payload: The payload, with escaped IAC bytes already collapsed.

		Raises:
			InvalidOptionError: The option is not a known Telnet option.
		"""
		if not is_valid_option(option):
			raise InvalidOptionError(f"Invalid Telnet option received: IAC SB {option!r}.")
		logger.debug(f"Received from peer: IAC SB {describe_option(option)} {payload!r} IAC SE")
		self.ledger.record_received_subnegotiation(option, payload)
		if option in self.subnegotiation_map:
			self.subnegotiation_map[option](payload)
		else:
			logger.debug(f"No handler for subnegotiation of {describe_option(option)}, ignoring.")

	def on_go_ahead(self) -> None:
		"""Called when peer cedes the line."""
		self._go_ahead = True
		self.flush()

	def on_abort_output(self) -> None:
		"""Called when peer sends IAC AO."""
		logger.debug("Peer aborted output, clearing read buffers.")
		self._run.clear()
		self._read_buffer.clear()

	def on_interrupt_process(self) -> None:
		"""
		Called when peer sends IAC IP.

		Raises:
			PeerInterruptError: Always.
		"""
		raise PeerInterruptError("Peer sent IAC IP.")

	def _on_will_binary(self) -> None:
		if self.mode.rx_binmode:
			return None
		elif self.ledger.was_sent(TRANSMIT_BINARY, DO):
			logger.debug("Enabling binary mode on receive.")
			self.mode.rx_binmode = True
		else:
			self._refuse(DONT, TRANSMIT_BINARY)

	def _on_wont_binary(self) -> None:
		if not self.mode.rx_binmode:
			return None
		logger.debug("Disabling binary mode on receive.")
		self.mode.rx_binmode = False
		self.reply(DONT, TRANSMIT_BINARY)

	def _on_do_binary(self) -> None:
		if self.mode.tx_binmode:
			return None
		elif self.ledger.was_sent(TRANSMIT_BINARY, WILL):
			logger.debug("Enabling binary mode on transmit.")
			self.mode.tx_binmode = True
		else:
			self._refuse(WONT, TRANSMIT_BINARY)

	def _on_dont_binary(self) -> None:
		if not self.mode.tx_binmode:
			return None
		logger.debug("Disabling binary mode on transmit.")
		self.mode.tx_binmode = False
		self.reply(WONT, TRANSMIT_BINARY)

	def _on_will_sga(self) -> None:
		if self.mode.rx_sga:
			return None
		logger.debug("Enabling suppress go ahead on receive.")
		self.mode.rx_sga = True
		if self.mode.telnet_bugs and not self.mode.tx_sga:
			logger.debug("Enabling suppress go ahead on transmit, working around peer bugs.")
			self.mode.tx_sga = True
			self.reply(WILL, SGA)
		self.reply(DO, SGA)

	def _on_wont_sga(self) -> None:
		if not self.mode.rx_sga:
			return None
		logger.debug("Disabling suppress go ahead on receive.")
		self.mode.rx_sga = False
		self.on_sga_lost()
		if self.mode.telnet_bugs and self.mode.tx_sga:
			logger.debug("Disabling suppress go ahead on transmit, working around peer bugs.")
			self.mode.tx_sga = False
			self.reply(WONT, SGA)
		self.reply(DONT, SGA)

	def _on_do_sga(self) -> None:
		if self.mode.tx_sga:
			return None
		logger.debug("Enabling suppress go ahead on transmit.")
		self.mode.tx_sga = True
		if self.mode.telnet_bugs and not self.mode.rx_sga:
			logger.debug("Enabling suppress go ahead on receive, working around peer bugs.")
			self.mode.rx_sga = True
			self.reply(DO, SGA)
		self.reply(WILL, SGA)

	def _on_dont_sga(self) -> None:
		if not self.mode.tx_sga:
			return None
		logger.debug("Disabling suppress go ahead on transmit.")
		self.mode.tx_sga = False
		if self.mode.telnet_bugs and self.mode.rx_sga:
			logger.debug("Disabling suppress go ahead on receive, working around peer bugs.")
			self.mode.rx_sga = False
			self.reply(DONT, SGA)
			self.on_sga_lost()
		self.reply(WONT, SGA)
