# Copyright (c) 2025 Nick Stockton
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.


# Future Modules:
from __future__ import annotations

# Built-in Modules:
from collections import deque
from typing import Optional, Union

# Net Telnet Modules:
from nettelnet.transport import ReadEvent, TransportInterface


if "unittest.util" in __import__("sys").modules:
	# Show full diff in self.assertEqual.
	# https://stackoverflow.com/questions/43842675/how-to-prevent-truncating-of-string-in-unit-test-python
	__import__("sys").modules["unittest.util"]._MAX_LENGTH = 1000000000


class FakeTransport(TransportInterface):
	"""
	An in-memory transport which replays scripted input.

	Queued bytes are handed out one at a time. An empty queue reads as a timeout.
	A queued exception is raised by the read which reaches it.
	"""

	def __init__(self, *items: Union[bytes, ReadEvent, Exception]) -> None:
		self.incoming: deque[Union[bytes, ReadEvent, Exception]] = deque()
		self.written: bytearray = bytearray()
		self.write_sizes: list[int] = []
		self.write_limit: Optional[int] = None
		self.read_timeout: Optional[float] = None
		self.closed: bool = False
		self._eof: bool = False
		self.feed(*items)

	def feed(self, *items: Union[bytes, ReadEvent, Exception]) -> None:
		for item in items:
			if isinstance(item, (bytes, bytearray)):
				self.incoming.extend(bytes([i]) for i in item)
			else:
				self.incoming.append(item)

	@property
	def at_eof(self) -> bool:
		return self._eof or self.closed

	def read_byte(self, timeout: Optional[float] = None) -> Union[bytes, ReadEvent]:
		if self.at_eof:
			return ReadEvent.END_OF_STREAM
		elif not self.incoming:
			return ReadEvent.TIMEOUT
		item = self.incoming.popleft()
		if isinstance(item, Exception):
			raise item
		elif item is ReadEvent.END_OF_STREAM:
			self._eof = True
		return item

	def write(self, data: bytes) -> int:
		if self.at_eof:
			return 0
		size: int = len(data) if self.write_limit is None else min(len(data), self.write_limit)
		self.written.extend(data[:size])
		self.write_sizes.append(size)
		return size

	def set_read_timeout(self, seconds: float, microseconds: int = 0) -> None:
		self.read_timeout = seconds + microseconds / 1_000_000

	def close(self) -> None:
		self.closed = True

	def take_written(self) -> bytes:
		"""Returns and clears everything written so far."""
		data: bytes = bytes(self.written)
		self.written.clear()
		self.write_sizes.clear()
		return data
