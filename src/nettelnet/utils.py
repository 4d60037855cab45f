# Copyright (c) 2025 Nick Stockton
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""Byte handling helpers."""

# Future Modules:
from __future__ import annotations

# Built-in Modules:
import re
from typing import Union

# Local Modules:
from .telnet_constants import CR_LF, IAC, IAC_IAC, LF
from .typedef import BytesOrStr


BARE_LF_REGEX: re.Pattern[bytes] = re.compile(rb"(?<!\r)\n")


def escape_iac(data: bytes) -> bytes:
	"""
	Escapes IAC bytes of a bytes-like object.

	Args:
		data: The data to be escaped.

	Returns:
		The data with IAC bytes escaped.
	"""
	return data.replace(IAC, IAC_IAC)


def unescape_iac(data: bytes) -> bytes:
	"""
	Reverses `escape_iac`.

	Args:
		data: The data to be unescaped.

	Returns:
		The data with doubled IAC bytes collapsed.
	"""
	return data.replace(IAC_IAC, IAC)


def to_bytes(value: BytesOrStr, encoding: str) -> bytes:
	"""
	Converts a string to bytes, leaving bytes-like objects alone.

	Args:
		value: The value to convert.
		encoding: The encoding used for strings.

	Returns:
		The value as bytes.
	"""
	if isinstance(value, str):
		return value.encode(encoding)
	return bytes(value)


def expand_newlines(data: bytes) -> bytes:
	"""
	Expands every LF which is not already preceded by CR to CR LF.

	Args:
		data: The data to process.

	Returns:
		The data with NVT line endings.
	"""
	return BARE_LF_REGEX.sub(CR_LF, data)


def collapse_newlines(data: Union[bytes, bytearray]) -> bytes:
	"""
	Collapses every CR LF pair to LF.

	Args:
		data: The data to process.

	Returns:
		The data with local line endings.
	"""
	return bytes(data).replace(CR_LF, LF)
