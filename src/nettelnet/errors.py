# Copyright (c) 2025 Nick Stockton
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""Telnet exceptions."""

# Future Modules:
from __future__ import annotations

# Built-in Modules:
from typing import Any


class TelnetError(Exception):
	"""Implements the base class for Telnet exceptions."""


class ConfigurationError(TelnetError, ValueError):
	"""Raised when a configuration value is invalid."""


class InvalidPortError(ConfigurationError):
	"""Raised when a port is neither a valid number nor a known TCP service name."""


class InvalidTimeoutError(ConfigurationError):
	"""Raised when a timeout is not a positive number."""


class InvalidCommandError(TelnetError, ValueError):
	"""Raised when a byte is not a Telnet command which can be sent."""


class ProtocolError(TelnetError):
	"""Raised when a malformed command sequence is received from peer."""


class InvalidOptionError(ProtocolError, ValueError):
	"""Raised when a byte is not a known Telnet option."""


class TransportError(TelnetError):
	"""Raised when the underlying byte stream fails for a reason other than a timeout or end of stream."""


class PeerInterruptError(TelnetError):
	"""Raised when peer sends IAC IP."""


class LoginError(TelnetError):
	"""
	Raised when a login step could not be completed.

	Attributes:
		output: The data received before the failure.
	"""

	def __init__(self, *args: Any, output: bytes = b"") -> None:
		super().__init__(*args)
		self.output: bytes = output


class LoginFailedError(LoginError):
	"""Raised when peer responds to a login attempt with the failure pattern."""
