"""KDE Connect packet type strings and body typing.

Packets are identified by a dotted type string. The identity packet is the
one every connection starts with; the others listed here are the types the
core itself knows by name. Plugins define many more, and the core treats any
non-empty string as a valid type.

Packet Type Overview:
- kdeconnect.identity: Device announcement (discovery broadcast and TCP handshake)
- kdeconnect.pair: Pairing request/response
- kdeconnect.ping: Keep-alive / user-visible ping
"""

from typing import Final

# Packet Type Constants
PACKET_TYPE_IDENTITY: Final[str] = "kdeconnect.identity"
PACKET_TYPE_PAIR: Final[str] = "kdeconnect.pair"
PACKET_TYPE_PING: Final[str] = "kdeconnect.ping"

# Sent in every identity packet
PROTOCOL_VERSION: Final[int] = 7

# Default KDE Connect TCP listening port
DEFAULT_TCP_PORT: Final[int] = 1716

# Packets are framed by a single newline on the stream
PACKET_TERMINATOR: Final[bytes] = b"\n"

type JSONValue = str | int | float | bool | None | list[JSONValue] | dict[str, JSONValue]
type Body = dict[str, JSONValue]
type PayloadInfo = dict[str, JSONValue]

# Plugin capability identifier, e.g. "kdeconnect.ping"
type Capability = str
