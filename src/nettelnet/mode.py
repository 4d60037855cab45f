# Copyright (c) 2025 Nick Stockton
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""Session operating modes."""

# Future Modules:
from __future__ import annotations

# Built-in Modules:
from dataclasses import dataclass
from enum import Enum


class EchoMode(Enum):
	"""
	The preferred echo behavior.

	LOCAL echoes data we send into our own read buffer, REMOTE asks peer to echo and
	falls back to local echo if peer refuses, NONE disables both.
	DEFAULT negotiates like REMOTE without having been chosen explicitly.
	"""

	LOCAL = "local"
	REMOTE = "remote"
	NONE = "none"
	DEFAULT = "default"


@dataclass
class SessionMode:
	"""
	The flags of one Telnet session.

	Only the negotiation logic and the echo mode controller change these after construction.
	"""

	telnet: bool = True
	"""Send and interpret Telnet commands."""
	telnet_bugs: bool = False
	"""Work around peers with broken Telnet implementations."""
	linefeeds: bool = True
	"""Translate CR LF to LF on input and LF to CR LF on output."""
	tx_binmode: bool = False
	"""We transmit in binary mode."""
	rx_binmode: bool = False
	"""Peer transmits in binary mode."""
	tx_sga: bool = False
	"""We suppress go ahead."""
	rx_sga: bool = False
	"""Peer suppresses go ahead."""
	echo_local: bool = True
	"""We echo data we send into our own read buffer."""
	echo_remote: bool = False
	"""Peer echoes data we send."""
	echo_net: bool = False
	"""We echo data back to peer."""
	echomode: EchoMode = EchoMode.DEFAULT
	"""The preferred echo behavior."""
	pager: bool = False
	"""Answer page prompts automatically."""

	def __str__(self) -> str:
		flags: str = ", ".join(f"{k}={v}" for k, v in vars(self).items())
		return f"SessionMode({flags})"
