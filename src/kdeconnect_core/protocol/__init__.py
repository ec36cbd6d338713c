"""KDE Connect protocol package - packets, identity validation and framing.

Public API:
- Packet type constants (PACKET_TYPE_*, PROTOCOL_VERSION)
- Packet value with parse/decode/serialize
- Identity packet builder and typed accessors
- Stream framer and async packet reader
- Schema validator registry
"""

from kdeconnect_core.protocol.exceptions import (
    IdentityError,
    InvalidDeviceIdError,
    InvalidDeviceNameError,
    InvalidDeviceTypeError,
    InvalidIncomingCapabilitiesError,
    InvalidOutgoingCapabilitiesError,
    InvalidProtocolVersionError,
    InvalidTCPPortError,
    KdeConnectProtocolError,
    PacketDecodeError,
    PacketEncodeError,
    PacketFramingError,
    WrongTypeError,
)
from kdeconnect_core.protocol.identity import (
    IdentityProperty,
    build_identity_packet,
    get_device_id,
    get_device_name,
    get_device_type,
    get_incoming_capabilities,
    get_outgoing_capabilities,
    get_protocol_version,
    get_tcp_port,
    read_identity,
    validate_identity_packet,
    validate_identity_type,
)
from kdeconnect_core.protocol.packet import Packet
from kdeconnect_core.protocol.packet_framer import PacketFramer, read_packets
from kdeconnect_core.protocol.packet_types import (
    DEFAULT_TCP_PORT,
    PACKET_TYPE_IDENTITY,
    PACKET_TYPE_PAIR,
    PACKET_TYPE_PING,
    PROTOCOL_VERSION,
)
from kdeconnect_core.protocol.registry import PacketSchemaRegistry, default_registry

__all__ = [
    # Constants
    "DEFAULT_TCP_PORT",
    "PACKET_TYPE_IDENTITY",
    "PACKET_TYPE_PAIR",
    "PACKET_TYPE_PING",
    "PROTOCOL_VERSION",
    # Packet
    "Packet",
    "PacketFramer",
    "PacketSchemaRegistry",
    "default_registry",
    "read_packets",
    # Identity
    "IdentityProperty",
    "build_identity_packet",
    "get_device_id",
    "get_device_name",
    "get_device_type",
    "get_incoming_capabilities",
    "get_outgoing_capabilities",
    "get_protocol_version",
    "get_tcp_port",
    "read_identity",
    "validate_identity_packet",
    "validate_identity_type",
    # Exceptions
    "IdentityError",
    "InvalidDeviceIdError",
    "InvalidDeviceNameError",
    "InvalidDeviceTypeError",
    "InvalidIncomingCapabilitiesError",
    "InvalidOutgoingCapabilitiesError",
    "InvalidProtocolVersionError",
    "InvalidTCPPortError",
    "KdeConnectProtocolError",
    "PacketDecodeError",
    "PacketEncodeError",
    "PacketFramingError",
    "WrongTypeError",
]
