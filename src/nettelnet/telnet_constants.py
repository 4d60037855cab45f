# Copyright (c) 2025 Nick Stockton
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""
Telnet Constants.

Definitions for various command and option negotiation bytes.

---
ASCII Definitions

Attributes:
	NULL: No operation.
	LF: Moves the printer to the next print line, keeping the same horizontal position.
	CR: Moves the printer to the left margin of the current line.

---
Telnet Command Definitions

Attributes:
	IAC: (Interpret As Command) Indicates the start of a Telnet command.
	NOP: No operation.
	DM: (Data Mark) The data stream portion of a Synch.
	BRK: NVT character Break.
	IP: The function Interrupt Process.
	AO: The function Abort Output
	AYT: The function Are You There.
	EC: The function Erase Character.
	EL: The function Erase Line
	GA: The Go Ahead signal.
	WILL: Indicates the desire to begin performing, or confirmation that you are now performing,
		the indicated option.
	WONT: Indicates the refusal to perform, or refusal to continue performing, the indicated option.
	DO: Indicates the request that the other party perform, or confirmation that you are
		expecting the other party to perform, the indicated option.
	DONT: Indicates the demand that the other party stop performing, or confirmation that you
		are no longer expecting the other party to perform, the indicated option.
	SB: Indicates what follows is a subnegotiation of the indicated option.
	SE: End of subnegotiation parameters.

---
Telnet Option Definitions

Attributes:
	TRANSMIT_BINARY: 8-bit data path.
	ECHO: (User-to-Server) Asks the server to send Echos of the transmitted data.
	SGA: Suppress Go Ahead.
	STATUS: Give status.
	TIMING_MARK: Timing mark.
	EXOPL: Extended options list.
"""

# Future Modules:
from __future__ import annotations


COMMAND_DESCRIPTIONS: dict[bytes, str] = {}
OPTION_DESCRIPTIONS: dict[bytes, str] = {}


def describe(description: str, value: int, registry: dict[bytes, str]) -> bytes:
	"""
	Stores the description of a negotiation.

	Args:
		description: The negotiation description.
		value: The ordinal value of the negotiation.
		registry: The mapping the description is stored in.

	Returns:
		The negotiation byte.
	"""
	byte: bytes = bytes([value])
	registry[byte] = description
	return byte


def command(description: str, value: int) -> bytes:
	return describe(description, value, COMMAND_DESCRIPTIONS)


def option(description: str, value: int) -> bytes:
	return describe(description, value, OPTION_DESCRIPTIONS)


# ASCII characters.
NULL: bytes = bytes([0])
LF: bytes = bytes([10])
CR: bytes = bytes([13])
CR_LF: bytes = CR + LF
CR_NULL: bytes = CR + NULL

# Telnet Commands.
XEOF: bytes = command("EOF", 236)  # End Of File.
SUSP: bytes = command("SUSP", 237)  # Suspend Process.
ABORT: bytes = command("ABORT", 238)  # Abort Process.
EOR: bytes = command("EOR", 239)  # RFC 885.
SE: bytes = command("SE", 240)  # End Subnegotiation.
NOP: bytes = command("NOP", 241)  # No Operation.
DM: bytes = command("DM", 242)  # Data Mark.
BRK: bytes = command("BRK", 243)  # Break.
IP: bytes = command("IP", 244)  # Interrupt Process permanently.
AO: bytes = command("AO", 245)  # Abort output but let prog finish.
AYT: bytes = command("AYT", 246)  # Are You There?
EC: bytes = command("EC", 247)  # Erase Character.
EL: bytes = command("EL", 248)  # Erase Line.
GA: bytes = command("GA", 249)  # Go Ahead.
SB: bytes = command("SB", 250)  # Begin Subnegotiation.
WILL: bytes = command("WILL", 251)
WONT: bytes = command("WONT", 252)
DO: bytes = command("DO", 253)
DONT: bytes = command("DONT", 254)
IAC: bytes = command("IAC", 255)
IAC_IAC: bytes = IAC + IAC
COMMAND_BYTES: frozenset[bytes] = frozenset((XEOF, SUSP, ABORT, EOR, NOP, DM, BRK, IP, AO, AYT, EC, EL, GA))
NEGOTIATION_BYTES: frozenset[bytes] = frozenset((WILL, WONT, DO, DONT))
# Bytes which must never appear unescaped in NVT output outside of binary mode.
COMMAND_RANGE: bytes = bytes(range(ord(SE), ord(IAC)))

# Telnet Options.
# See https://www.iana.org/assignments/telnet-options
TRANSMIT_BINARY: bytes = option("BINARY", 0)  # RFC 856.
ECHO: bytes = option("ECHO", 1)  # RFC 857.
RECONNECT: bytes = option("RECONNECT", 2)  # RFC 671.
SGA: bytes = option("SUPPRESS GO AHEAD", 3)  # RFC 858.
APPROX_MESSAGE_SIZE: bytes = option("APPROX MESSAGE SIZE", 4)
STATUS: bytes = option("STATUS", 5)  # RFC 859.
TIMING_MARK: bytes = option("TIMING MARK", 6)  # RFC 860.
RCTE: bytes = option("RCTE", 7)  # RFC 563, 581, 726.
OUTPUT_LINE_WIDTH: bytes = option("NAOL", 8)
OUTPUT_PAGE_SIZE: bytes = option("NAOP", 9)
NAOCRD: bytes = option("NAOCRD", 10)  # RFC 652.
NAOHTS: bytes = option("NAOHTS", 11)  # RFC 653.
NAOHTD: bytes = option("NAOHTD", 12)  # RFC 654.
NAOFFD: bytes = option("NAOFFD", 13)  # RFC 655.
NAOVTS: bytes = option("NAOVTS", 14)  # RFC 656.
NAOVTD: bytes = option("NAOVTD", 15)  # RFC 657.
NAOLFD: bytes = option("NAOLFD", 16)  # RFC 658.
EXTENDED_ASCII: bytes = option("EXTEND ASCII", 17)  # RFC 698.
LOGOUT: bytes = option("LOGOUT", 18)  # RFC 727.
BM: bytes = option("BYTE MACRO", 19)  # RFC 735.
DATA_ENTRY_TERMINAL: bytes = option("DATA ENTRY TERMINAL", 20)  # RFC 732, 1043.
SUPDUP: bytes = option("SUPDUP", 21)  # RFC 734, 736.
SUPDUP_OUTPUT: bytes = option("SUPDUP OUTPUT", 22)  # RFC 749.
SEND_LOCATION: bytes = option("SEND LOCATION", 23)  # RFC 779.
TTYPE: bytes = option("TERMINAL TYPE", 24)  # RFC 1091.
END_OF_RECORD: bytes = option("END OF RECORD", 25)  # RFC 885
TUID: bytes = option("TACACS UID", 26)  # RFC 927.
OUTMRK: bytes = option("OUTPUT MARKING", 27)  # RFC 933.
TTYLOC: bytes = option("TTYLOC", 28)  # RFC 946.
TELNET_3270_REGIME: bytes = option("3270 REGIME", 29)  # RFC 1041.
X3_PAD: bytes = option("X.3 PAD", 30)  # RFC 1053.
NAWS: bytes = option("NAWS", 31)  # RFC 1073.
TERMINAL_SPEED: bytes = option("TSPEED", 32)  # RFC 1079.
REMOTE_FLOW_CONTROL: bytes = option("LFLOW", 33)  # RFC 1372.
LINEMODE: bytes = option("LINEMODE", 34)  # RFC 1116, 1184.
X_DISPLAY_LOCATION: bytes = option("XDISPLOC", 35)  # RFC 1096.
ENVIRON: bytes = option("OLD-ENVIRON", 36)  # RFC 1408.
AUTHENTICATION: bytes = option("AUTHENTICATION", 37)  # RFC 1416, 2941, 2942, 2943, 2951.
ENCRYPTION: bytes = option("ENCRYPT", 38)  # RFC 2946.
NEW_ENVIRON: bytes = option("NEW-ENVIRON", 39)  # RFC 1571, 1572.
TN3270E: bytes = option("TN3270E", 40)  # RFC 2355.
XAUTH: bytes = option("XAUTH", 41)
CHARSET: bytes = option("CHARSET", 42)  # RFC 2066.
RSP: bytes = option("RSP", 43)
COM_PORT_CONTROL: bytes = option("COM PORT CONTROL", 44)  # RFC 2217.
SUPPRESS_LOCAL_ECHO: bytes = option("SUPPRESS LOCAL ECHO", 45)
START_TLS: bytes = option("START TLS", 46)
KERMIT: bytes = option("KERMIT", 47)  # RFC 2840.
SEND_URL: bytes = option("SEND URL", 48)
FORWARD_X: bytes = option("FORWARD X", 49)
PRAGMA_LOGON: bytes = option("PRAGMA LOGON", 138)
SSPI_LOGON: bytes = option("SSPI LOGON", 139)
PRAGMA_HEARTBEAT: bytes = option("PRAGMA HEARTBEAT", 140)
EXOPL: bytes = option("EXTENDED OPTIONS LIST", 255)  # RFC 861.


def is_valid_command(byte: bytes) -> bool:
	"""
	Determines whether a byte is a known Telnet command.

	Args:
		byte: The byte to test.

	Returns:
		True if the byte is a Telnet command, False otherwise.
	"""
	return byte in COMMAND_DESCRIPTIONS


def is_valid_option(byte: bytes) -> bool:
	"""
	Determines whether a byte is a known Telnet option.

	Args:
		byte: The byte to test.

	Returns:
		True if the byte is a Telnet option, False otherwise.
	"""
	return byte in OPTION_DESCRIPTIONS


def describe_command(byte: bytes) -> str:
	return COMMAND_DESCRIPTIONS.get(byte, repr(byte))


def describe_option(byte: bytes) -> str:
	return OPTION_DESCRIPTIONS.get(byte, repr(byte))
