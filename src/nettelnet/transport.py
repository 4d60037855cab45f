# Copyright (c) 2025 Nick Stockton
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""Byte stream transports."""

# Future Modules:
from __future__ import annotations

# Built-in Modules:
import logging
import socket
from abc import ABC, abstractmethod
from enum import Enum, auto
from typing import Optional, Union

# Third-party Modules:
from knickknacks.typedef import Self

# Local Modules:
from .errors import TransportError


READ_CHUNK_SIZE: int = 4096


logger: logging.Logger = logging.getLogger(__name__)


class ReadEvent(Enum):
	"""Outcomes of a byte read which did not produce a byte."""

	TIMEOUT = auto()
	END_OF_STREAM = auto()


class TransportInterface(ABC):
	"""A duplex byte stream to peer."""

	@property
	@abstractmethod
	def at_eof(self) -> bool:
		"""True if the end of the stream has been reached, False otherwise."""

	@abstractmethod
	def read_byte(self, timeout: Optional[float] = None) -> Union[bytes, ReadEvent]:
		"""
		Reads a single byte.

		Args:
			timeout: Seconds to wait for the byte, or None to use the read timeout of the transport.

		Returns:
			The byte, ReadEvent.TIMEOUT, or ReadEvent.END_OF_STREAM.

		Raises:
			TransportError: The stream failed.
		"""

	@abstractmethod
	def write(self, data: bytes) -> int:
		"""
		Writes data to peer.

		Args:
			data: The bytes to be written.

		Returns:
			The number of bytes written. Zero means end of stream.

		Raises:
			TransportError: The stream failed.
		"""

	@abstractmethod
	def set_read_timeout(self, seconds: float, microseconds: int = 0) -> None:
		"""
		Sets the default timeout of `read_byte`.

		Args:
			seconds: Whole or fractional seconds.
			microseconds: Added to seconds.
		"""

	@abstractmethod
	def close(self) -> None:
		"""
		Closes the stream.

		Raises:
			TransportError: The stream could not be closed cleanly.
		"""


class SocketTransport(TransportInterface):
	"""A TCP transport."""

	def __init__(self, sock: socket.socket) -> None:
		"""
		Defines the constructor.

		Args:
			sock: A connected socket.
		"""
		self._sock: Union[socket.socket, None] = sock
		self._buffer: bytearray = bytearray()
		self._eof: bool = False
		self._read_timeout: Union[float, None] = sock.gettimeout()

	@classmethod
	def open(cls: type[Self], host: str, port: int, timeout: float) -> Self:
		"""
		Connects to peer.

		Every address `host` resolves to is tried in turn.

		Args:
			host: The remote host.
			port: The remote TCP port.
			timeout: The connect timeout in seconds.

		Returns:
			The new transport.

		Raises:
			TransportError: Unable to connect.
		"""
		logger.debug(f"Connecting to {host}:{port} with a timeout of {timeout} seconds.")
		try:
			sock: socket.socket = socket.create_connection((host, port), timeout=timeout)
		except OSError as e:
			raise TransportError(f"Unable to connect to {host}:{port}: {e}") from e
		return cls(sock)

	@property
	def at_eof(self) -> bool:
		return self._eof and not self._buffer

	def _fill(self, timeout: Union[float, None]) -> Union[ReadEvent, None]:
		if self._sock is None or self._eof:
			self._eof = True
			return ReadEvent.END_OF_STREAM
		try:
			self._sock.settimeout(timeout)
			data: bytes = self._sock.recv(READ_CHUNK_SIZE)
		except socket.timeout:
			return ReadEvent.TIMEOUT
		except (ConnectionResetError, ConnectionAbortedError, BrokenPipeError):
			logger.debug("Connection reset by peer.")
			self._eof = True
			return ReadEvent.END_OF_STREAM
		except OSError as e:
			raise TransportError(f"Read failed: {e}") from e
		if not data:
			logger.debug("Peer closed the connection.")
			self._eof = True
			return ReadEvent.END_OF_STREAM
		self._buffer.extend(data)
		return None

	def read_byte(self, timeout: Optional[float] = None) -> Union[bytes, ReadEvent]:
		if not self._buffer:
			event = self._fill(self._read_timeout if timeout is None else timeout)
			if event is not None:
				return event
		byte: bytes = bytes(self._buffer[:1])
		del self._buffer[:1]
		return byte

	def write(self, data: bytes) -> int:
		if self._sock is None or self._eof:
			return 0
		try:
			return self._sock.send(data)
		except (ConnectionResetError, ConnectionAbortedError, BrokenPipeError):
			logger.debug("Connection reset by peer while writing.")
			self._eof = True
			return 0
		except OSError as e:
			raise TransportError(f"Write failed: {e}") from e

	def set_read_timeout(self, seconds: float, microseconds: int = 0) -> None:
		self._read_timeout = seconds + microseconds / 1_000_000

	def close(self) -> None:
		if self._sock is None:
			return
		sock, self._sock = self._sock, None
		self._eof = True
		try:
			sock.close()
		except OSError as e:
			raise TransportError(f"Close failed: {e}") from e
		logger.debug("Connection closed.")
