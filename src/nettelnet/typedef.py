# Copyright (c) 2025 Nick Stockton
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""Shared type definitions."""

# Future Modules:
from __future__ import annotations

# Built-in Modules:
from collections.abc import Callable, Iterable, Mapping
from typing import Union

# Third-party Modules:
from knickknacks.typedef import TypeAlias

# Local Modules:
from .transport import TransportInterface


BytesOrStr: TypeAlias = Union[bytes, str]
SearchPatternsType: TypeAlias = Union[BytesOrStr, Iterable[BytesOrStr], None]
ExpectMapType: TypeAlias = Mapping[BytesOrStr, BytesOrStr]
TelnetCommandMapValueType: TypeAlias = Callable[[], None]
TelnetCommandMapType: TypeAlias = dict[bytes, TelnetCommandMapValueType]
TelnetNegotiationMapValueType: TypeAlias = Callable[[], None]
TelnetNegotiationMapType: TypeAlias = dict[bytes, TelnetNegotiationMapValueType]
TelnetSubnegotiationMapValueType: TypeAlias = Callable[[bytes], None]
TelnetSubnegotiationMapType: TypeAlias = dict[bytes, TelnetSubnegotiationMapValueType]
TransportFactoryType: TypeAlias = Callable[[str, int, float], TransportInterface]


__all__: list[str] = [
	"BytesOrStr",
	"ExpectMapType",
	"SearchPatternsType",
	"TelnetCommandMapType",
	"TelnetCommandMapValueType",
	"TelnetNegotiationMapType",
	"TelnetNegotiationMapValueType",
	"TelnetSubnegotiationMapType",
	"TelnetSubnegotiationMapValueType",
	"TransportFactoryType",
]
