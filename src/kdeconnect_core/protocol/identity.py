"""Identity packet construction and typed field access.

An identity packet is an ordinary ``Packet`` whose type is
"kdeconnect.identity". Nothing is validated when it is parsed; each accessor
below checks the packet type first and then the one body field it reads, so a
caller only pays for (and only fails on) the fields it actually uses.

Whether a device type or capability string is *recognized* is not checked
here. That belongs to the configuration layer and the plugin registry.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Mapping
from enum import StrEnum
from typing import Final, TypeVar

from kdeconnect_core.logging_abstraction import get_logger
from kdeconnect_core.metrics import record_identity_error
from kdeconnect_core.protocol.exceptions import (
    IdentityError,
    InvalidDeviceIdError,
    InvalidDeviceNameError,
    InvalidDeviceTypeError,
    InvalidIncomingCapabilitiesError,
    InvalidOutgoingCapabilitiesError,
    InvalidProtocolVersionError,
    InvalidTCPPortError,
    WrongTypeError,
)
from kdeconnect_core.protocol.packet import Packet
from kdeconnect_core.protocol.packet_types import (
    PACKET_TYPE_IDENTITY,
    PROTOCOL_VERSION,
    Body,
    Capability,
    JSONValue,
)
from kdeconnect_core.structs import DeviceIdentity, HostConfigurationProtocol

__all__ = [
    "IdentityProperty",
    "build_identity_packet",
    "capability_list",
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
]

MAX_TCP_PORT: Final[int] = 0xFFFF

E = TypeVar("E", bound=IdentityError)

logger = get_logger(__name__)


class IdentityProperty(StrEnum):
    """Body keys of the identity packet."""

    DEVICE_ID = "deviceId"
    DEVICE_NAME = "deviceName"
    DEVICE_TYPE = "deviceType"
    INCOMING_CAPABILITIES = "incomingCapabilities"
    OUTGOING_CAPABILITIES = "outgoingCapabilities"
    PROTOCOL_VERSION = "protocolVersion"
    TCP_PORT = "tcpPort"


def _failed(error: E) -> E:
    record_identity_error(type(error).__name__)
    logger.debug("Identity validation failed: %s", error)
    return error


def _as_unsigned(value: JSONValue, upper: int | None = None) -> int | None:
    """Return value as a non-negative int (integral floats allowed), or None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, float):
        if not value.is_integer():
            return None
        value = int(value)
    if not isinstance(value, int) or value < 0:
        return None
    if upper is not None and value > upper:
        return None
    return value


def _capabilities(packet: Packet, key: IdentityProperty, error: type[IdentityError]) -> frozenset[Capability]:
    validate_identity_type(packet)
    value = packet.body.get(key)
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise _failed(error())
    return frozenset(value)


def _string_field(packet: Packet, key: IdentityProperty, error: type[IdentityError]) -> str:
    validate_identity_type(packet)
    value = packet.body.get(key)
    if not isinstance(value, str):
        raise _failed(error())
    return value


def build_identity_packet(
    config: HostConfigurationProtocol,
    additional_properties: Mapping[str, JSONValue] | None = None,
) -> Packet:
    """Build the identity packet announcing the local device.

    Capability sets are sent as sorted arrays so the same configuration always
    produces the same body.

    Args:
        config: Local host configuration
        additional_properties: Extra body entries applied after the base
            fields; they win on key collision (e.g. {"tcpPort": 1716} for a
            discovery broadcast)

    Returns:
        New identity packet

    Example:
        >>> from kdeconnect_core.structs import LocalDeviceConfig
        >>> config = LocalDeviceConfig(device_id="abc", device_name="Laptop")
        >>> packet = build_identity_packet(config, {"tcpPort": 1716})
        >>> packet.body["protocolVersion"], packet.body["tcpPort"]
        (7, 1716)

    """
    body: Body = {
        IdentityProperty.DEVICE_ID.value: config.device_id,
        IdentityProperty.DEVICE_NAME.value: config.device_name,
        IdentityProperty.DEVICE_TYPE.value: str(config.device_type),
        IdentityProperty.PROTOCOL_VERSION.value: PROTOCOL_VERSION,
        IdentityProperty.OUTGOING_CAPABILITIES.value: capability_list(config.outgoing_capabilities),
        IdentityProperty.INCOMING_CAPABILITIES.value: capability_list(config.incoming_capabilities),
    }
    if additional_properties:
        body.update(additional_properties)

    packet = Packet.create(PACKET_TYPE_IDENTITY, body)
    logger.debug(
        "Built identity packet",
        extra={"packet_id": packet.id, "device_id": config.device_id, "fields": len(body)},
    )
    return packet


def validate_identity_type(packet: Packet) -> None:
    """Raise WrongTypeError unless packet is an identity packet."""
    if packet.type != PACKET_TYPE_IDENTITY:
        raise _failed(WrongTypeError(packet.type))


def get_device_id(packet: Packet) -> str:
    return _string_field(packet, IdentityProperty.DEVICE_ID, InvalidDeviceIdError)


def get_device_name(packet: Packet) -> str:
    return _string_field(packet, IdentityProperty.DEVICE_NAME, InvalidDeviceNameError)


def get_device_type(packet: Packet) -> str:
    """Return the announced device type string, unchecked against DeviceType."""
    return _string_field(packet, IdentityProperty.DEVICE_TYPE, InvalidDeviceTypeError)


def get_protocol_version(packet: Packet) -> int:
    validate_identity_type(packet)
    version = _as_unsigned(packet.body.get(IdentityProperty.PROTOCOL_VERSION))
    if version is None:
        raise _failed(InvalidProtocolVersionError())
    return version


def get_tcp_port(packet: Packet) -> int:
    """Return the announced TCP port (0-65535).

    Raises InvalidTCPPortError when the key is absent as well; callers that
    accept identities without a port should check ``IdentityProperty.TCP_PORT
    in packet.body`` first, as ``read_identity`` does.
    """
    validate_identity_type(packet)
    port = _as_unsigned(packet.body.get(IdentityProperty.TCP_PORT), upper=MAX_TCP_PORT)
    if port is None:
        raise _failed(InvalidTCPPortError())
    return port


def get_incoming_capabilities(packet: Packet) -> frozenset[Capability]:
    return _capabilities(packet, IdentityProperty.INCOMING_CAPABILITIES, InvalidIncomingCapabilitiesError)


def get_outgoing_capabilities(packet: Packet) -> frozenset[Capability]:
    return _capabilities(packet, IdentityProperty.OUTGOING_CAPABILITIES, InvalidOutgoingCapabilitiesError)


def read_identity(packet: Packet) -> DeviceIdentity:
    """Validate every identity field and return them together.

    Raises:
        IdentityError: The first failing check, WrongTypeError before any field

    """
    identity = DeviceIdentity(
        device_id=get_device_id(packet),
        device_name=get_device_name(packet),
        device_type=get_device_type(packet),
        protocol_version=get_protocol_version(packet),
        incoming_capabilities=get_incoming_capabilities(packet),
        outgoing_capabilities=get_outgoing_capabilities(packet),
    )
    if IdentityProperty.TCP_PORT in packet.body:
        identity = dataclasses.replace(identity, tcp_port=get_tcp_port(packet))
    return identity


def validate_identity_packet(packet: Packet) -> None:
    """Schema validator for the packet registry."""
    read_identity(packet)


def capability_list(capabilities: Iterable[Capability]) -> list[Capability]:
    """Wire form of a capability set: a sorted, duplicate-free array."""
    return sorted(set(capabilities))
