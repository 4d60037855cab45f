# Copyright (c) 2025 Nick Stockton
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""Echo option and echo mode controller."""

# Future Modules:
from __future__ import annotations

# Built-in Modules:
import logging
from typing import Any, Union

# Local Modules:
from .errors import ConfigurationError
from .mode import EchoMode
from .telnet import TelnetInterface
from .telnet_constants import DO, DONT, ECHO, SGA, WILL, WONT


logger: logging.Logger = logging.getLogger(__name__)


class EchoMixIn(TelnetInterface):
	"""
	Echo support (RFC 857).

	The echo mode expresses a preference. What peer agrees to decides whether
	echo is actually performed locally or remotely.
	"""

	def __init__(self, *args: Any, **kwargs: Any) -> None:
		super().__init__(*args, **kwargs)
		self.will_map[ECHO] = self._on_will_echo
		self.wont_map[ECHO] = self._on_wont_echo
		self.do_map[ECHO] = self._on_do_echo
		self.dont_map[ECHO] = self._on_dont_echo

	@property
	def echo_mode(self) -> EchoMode:
		"""
		The preferred echo behavior.

		Switching to local or none turns off remote echo if it is engaged.
		Switching to remote asks peer to echo and enables local echo until peer agrees.
		"""
		return self.mode.echomode

	@echo_mode.setter
	def echo_mode(self, value: Union[EchoMode, str]) -> None:
		try:
			value = EchoMode(value)
		except ValueError as e:
			raise ConfigurationError(f"Invalid echo mode: {value!r}.") from e
		if value is EchoMode.DEFAULT:
			raise ConfigurationError("The echo mode must be one of local, remote, or none.")
		elif value is EchoMode.LOCAL:
			self._disable_remote_echo()
			if not self.mode.echo_local:
				logger.debug("Enabling local echo.")
				self.mode.echo_local = True
		elif value is EchoMode.REMOTE:
			if not self.mode.echo_remote:
				logger.debug("Requesting remote echo.")
				self.send_command(DO, ECHO)
				if not self.mode.echo_local:
					logger.debug("Enabling local echo until peer agrees.")
					self.mode.echo_local = True
		elif value is EchoMode.NONE:
			if self.mode.echo_local:
				logger.debug("Disabling local echo.")
				self.mode.echo_local = False
			self._disable_remote_echo()
		self.mode.echomode = value
		self.flush()

	def _disable_remote_echo(self) -> None:
		if self.mode.echo_remote:
			logger.debug("Disabling remote echo.")
			self.send_command(DONT, ECHO)
			self.mode.echo_remote = False

	def on_request_initial_echo(self) -> None:
		if self.mode.echomode in (EchoMode.REMOTE, EchoMode.DEFAULT):
			self.send_command(DO, ECHO)
			self.send_command(DO, SGA)
		return super().on_request_initial_echo()

	def on_sga_lost(self) -> None:
		if self.mode.echo_remote:
			logger.debug("Disabling remote echo.")
			self.mode.echo_remote = False
			self.reply(DONT, ECHO)
			if self.mode.echomode is EchoMode.REMOTE:
				logger.debug("Enabling local echo.")
				self.mode.echo_local = True
		return super().on_sga_lost()

	def _on_will_echo(self) -> None:
		if self.mode.echo_remote:
			return None
		elif self.mode.echomode in (EchoMode.LOCAL, EchoMode.NONE):
			logger.debug("Refusing remote echo.")
			self.reply(DONT, ECHO)
			return None
		logger.debug("Enabling remote echo.")
		self.mode.echo_remote = True
		if self.mode.echo_net:
			logger.debug("Disabling local network echo.")
			self.mode.echo_net = False
			self.reply(WONT, ECHO)
		self.reply(DO, ECHO)

	def _on_wont_echo(self) -> None:
		if not self.mode.echo_remote:
			return None
		logger.debug("Peer will not echo.")
		self.mode.echo_remote = False
		if self.mode.echomode is EchoMode.REMOTE:
			logger.debug("Falling back to local echo.")
			self.mode.echo_local = True
		self.reply(DONT, ECHO)

	def _on_do_echo(self) -> None:
		if self.mode.echo_net:
			return None
		elif self.mode.echo_remote:
			logger.debug("Disabling remote echo to prevent an echo loop.")
			self.mode.echo_remote = False
			self.reply(DONT, ECHO)
		if self.mode.echomode in (EchoMode.LOCAL, EchoMode.REMOTE):
			logger.debug("Enabling local echo.")
			self.mode.echo_local = True
		logger.debug("Enabling local network echo.")
		self.mode.echo_net = True
		self.reply(WILL, ECHO)

	def _on_dont_echo(self) -> None:
		if not self.mode.echo_net:
			return None
		logger.debug("Disabling local network echo.")
		self.mode.echo_net = False
		self.reply(WONT, ECHO)
