# Copyright (c) 2025 Nick Stockton
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""Record of the negotiation commands exchanged with peer."""

# Future Modules:
from __future__ import annotations

# Built-in Modules:
import logging
from typing import Union

# Local Modules:
from .telnet_constants import NEGOTIATION_BYTES, describe_command, describe_option


logger: logging.Logger = logging.getLogger(__name__)


class _Direction:
	"""
	Represents the traffic about an option in one direction of the Telnet connection.

	Attributes:
		commands: The negotiation commands (WILL, WONT, DO, DONT) seen in this direction.
		subnegotiation: The most recent raw subnegotiation payload seen in this direction.
	"""

	def __init__(self) -> None:
		self.commands: set[bytes] = set()
		self.subnegotiation: Union[bytes, None] = None

	def __str__(self) -> str:
		commands: str = ", ".join(sorted(describe_command(i) for i in self.commands))
		return f"Commands: [{commands}], Subnegotiation: {self.subnegotiation!r}"


class _OptionRecord:
	"""
	Represents the traffic about an option in both directions of a Telnet connection.

	Attributes:
		sent: What we sent to peer.
		received: What peer sent to us.
	"""

	def __init__(self) -> None:
		self.sent: _Direction = _Direction()
		self.received: _Direction = _Direction()

	def __repr__(self) -> str:
		return f"<_OptionRecord sent={self.sent} received={self.received}>"


class NegotiationLedger:
	"""
	Tracks, per option, which negotiation commands were sent and received.

	Entries are only ever added or overwritten for the life of a connection.
	The negotiation logic consults the ledger before replying to peer,
	so that a given command is never sent twice for the same option.
	"""

	def __init__(self) -> None:
		self._options: dict[bytes, _OptionRecord] = {}

	def __contains__(self, option: object) -> bool:
		return option in self._options

	def __repr__(self) -> str:
		records: str = ", ".join(f"{describe_option(k)}: {v!r}" for k, v in self._options.items())
		return f"<NegotiationLedger {records}>"

	def get_record(self, option: bytes) -> _OptionRecord:
		"""
		Gets the record of an option, creating it if needed.

		Args:
			option: The option.

		Returns:
			The record of traffic about the option.
		"""
		if option not in self._options:
			self._options[option] = _OptionRecord()
		return self._options[option]

	def record_sent(self, option: bytes, command: bytes) -> None:
		if command not in NEGOTIATION_BYTES:
			raise ValueError(f"{describe_command(command)} is not a negotiation command.")
		self.get_record(option).sent.commands.add(command)

	def record_received(self, option: bytes, command: bytes) -> None:
		if command not in NEGOTIATION_BYTES:
			raise ValueError(f"{describe_command(command)} is not a negotiation command.")
		self.get_record(option).received.commands.add(command)

	def was_sent(self, option: bytes, command: bytes) -> bool:
		"""
		Determines whether we already sent a negotiation command for an option.

		Args:
			option: The option.
			command: One of WILL, WONT, DO, or DONT.

		Returns:
			True if the command was sent, False otherwise.
		"""
		return option in self._options and command in self._options[option].sent.commands

	def was_received(self, option: bytes, command: bytes) -> bool:
		"""
		Determines whether peer already sent a negotiation command for an option.

		Args:
			option: The option.
			command: One of WILL, WONT, DO, or DONT.

		Returns:
			True if the command was received, False otherwise.
		"""
		return option in self._options and command in self._options[option].received.commands

	def record_sent_subnegotiation(self, option: bytes, payload: bytes) -> None:
		self.get_record(option).sent.subnegotiation = payload

	def record_received_subnegotiation(self, option: bytes, payload: bytes) -> None:
		self.get_record(option).received.subnegotiation = payload

	def sent_subnegotiation(self, option: bytes) -> Union[bytes, None]:
		"""The last subnegotiation payload we sent for an option, or None."""
		return self._options[option].sent.subnegotiation if option in self._options else None

	def received_subnegotiation(self, option: bytes) -> Union[bytes, None]:
		"""The last subnegotiation payload peer sent for an option, or None."""
		return self._options[option].received.subnegotiation if option in self._options else None
