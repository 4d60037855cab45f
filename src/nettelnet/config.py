# Copyright (c) 2025 Nick Stockton
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""Session configuration."""

# Future Modules:
from __future__ import annotations

# Built-in Modules:
import logging
import socket
from dataclasses import dataclass, field, replace
from typing import Optional, Union

# Third-party Modules:
from knickknacks.typedef import Self

# Local Modules:
from .errors import ConfigurationError, InvalidPortError, InvalidTimeoutError
from .mode import EchoMode
from .typedef import BytesOrStr


DEFAULT_PORT: int = 23
DEFAULT_TIMEOUT: float = 10.0
MAX_PORT: int = 0xFFFF


logger: logging.Logger = logging.getLogger(__name__)


def resolve_port(port: Union[int, str]) -> int:
	"""
	Converts a port number or TCP service name to a port number.

	Args:
		port: A port number, a numeric string, or a service name such as 'telnet'.

	Returns:
		The port number.

	Raises:
		InvalidPortError: The port is out of range or the service name is unknown.
	"""
	if isinstance(port, bool):
		raise InvalidPortError(f"Invalid port: {port!r}.")
	if isinstance(port, str) and port.strip().isdigit():
		port = int(port)
	if isinstance(port, int):
		if not 0 < port <= MAX_PORT:
			raise InvalidPortError(f"Port must be in range 1 - {MAX_PORT}, not {port}.")
		return port
	if isinstance(port, str) and port:
		try:
			return socket.getservbyname(port, "tcp")
		except OSError as e:
			raise InvalidPortError(f"Unknown TCP service name: {port!r}.") from e
	raise InvalidPortError(f"Invalid port: {port!r}.")


def validate_timeout(timeout: float) -> float:
	"""
	Makes sure a timeout is a positive number of seconds.

	Args:
		timeout: The timeout in seconds.

	Returns:
		The timeout as a float.

	Raises:
		InvalidTimeoutError: The timeout is not a positive number.
	"""
	if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
		raise InvalidTimeoutError(f"Timeout must be a positive number of seconds, not {timeout!r}.")
	return float(timeout)


@dataclass(frozen=True)
class LoginProfile:
	"""
	The prompts, patterns, and credentials used by automatic login.

	Every field is optional. A missing prompt or pattern skips the step which waits for it.
	"""

	login_prompt: Optional[BytesOrStr] = "Login: "
	"""Wait for this before sending the login name."""
	password_prompt: Optional[BytesOrStr] = "Password: "
	"""Wait for this before sending the password."""
	login_success: Optional[BytesOrStr] = None
	"""Seen after a successful login. Defaults to the command prompt."""
	login_fail: Optional[BytesOrStr] = None
	"""Seen after a failed login."""
	login: Optional[BytesOrStr] = None
	"""The login name."""
	password: Optional[BytesOrStr] = None
	"""The password."""
	prompt: Optional[BytesOrStr] = None
	"""If set, replaces the command prompt of the session."""

	def __repr__(self) -> str:
		# Never show the password in logs.
		password: str = "None" if self.password is None else "'***'"
		return (
			f"LoginProfile(login_prompt={self.login_prompt!r}, password_prompt={self.password_prompt!r}, "
			+ f"login_success={self.login_success!r}, login_fail={self.login_fail!r}, "
			+ f"login={self.login!r}, password={password}, prompt={self.prompt!r})"
		)

	def merge(self, **kwargs: Optional[BytesOrStr]) -> Self:
		"""
		Creates a copy of the profile with some fields replaced.

		Args:
			**kwargs: The fields to replace.

		Returns:
			The new profile.

		Raises:
			ConfigurationError: An unknown field was given.
		"""
		try:
			return replace(self, **kwargs)
		except TypeError as e:
			raise ConfigurationError(str(e)) from e


@dataclass(frozen=True)
class TelnetConfig:
	"""Every recognized setting of a Telnet session."""

	host: Optional[str] = None
	"""The remote host."""
	port: Union[int, str] = DEFAULT_PORT
	"""The remote TCP port, or a service name."""
	timeout: float = DEFAULT_TIMEOUT
	"""Connect timeout, and default timeout of blocking reads, in seconds."""
	prompt: Optional[BytesOrStr] = None
	"""The command interpreter prompt."""
	page_prompt: BytesOrStr = " --More-- "
	"""Printed by peer when a page full of output has been sent."""
	page_continue: BytesOrStr = " "
	"""Sent to peer in response to the page prompt."""
	encoding: str = "latin-1"
	"""The encoding used to convert string arguments to bytes."""
	telnet: bool = True
	"""Send and interpret Telnet commands."""
	telnet_bugs: bool = False
	"""Work around peers with broken Telnet implementations."""
	linefeeds: bool = True
	"""Translate between CR LF and LF."""
	pager: bool = False
	"""Answer page prompts automatically."""
	echo_mode: Union[EchoMode, str] = EchoMode.DEFAULT
	"""The preferred echo behavior."""
	login: LoginProfile = field(default_factory=LoginProfile)
	"""Settings used by automatic login."""

	def __post_init__(self) -> None:
		"""
		Performs additional processing after dataclass initialization.

		Raises:
			InvalidPortError: Invalid port.
			InvalidTimeoutError: Invalid timeout.
			ConfigurationError: Invalid echo mode or encoding.
		"""
		# Frozen dataclass, so normalized values must be set through object.
		object.__setattr__(self, "port", resolve_port(self.port))
		object.__setattr__(self, "timeout", validate_timeout(self.timeout))
		try:
			object.__setattr__(self, "echo_mode", EchoMode(self.echo_mode))
		except ValueError as e:
			raise ConfigurationError(f"Invalid echo mode: {self.echo_mode!r}.") from e
		try:
			"".encode(self.encoding)
		except LookupError as e:
			raise ConfigurationError(f"Unknown encoding: {self.encoding!r}.") from e
		logger.debug(f"Configured {self!r}.")
