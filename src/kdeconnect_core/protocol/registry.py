"""Per-type schema validation for packets.

``Packet`` itself only knows id/type/body. Packet kinds with a body schema
register a validator here, keyed by type string, so adding a packet kind
never touches the packet class.
"""

from __future__ import annotations

from collections.abc import Callable

from kdeconnect_core.logging_abstraction import get_logger
from kdeconnect_core.protocol.identity import validate_identity_packet
from kdeconnect_core.protocol.packet import Packet
from kdeconnect_core.protocol.packet_types import PACKET_TYPE_IDENTITY

type PacketValidator = Callable[[Packet], None]

logger = get_logger(__name__)


class PacketSchemaRegistry:
    """Map of packet type string to body validator.

    A validator raises (typically a KdeConnectProtocolError subclass) when the
    packet body does not match its schema, and returns None otherwise.

    Example:
        registry = PacketSchemaRegistry()
        registry.register("kdeconnect.identity", validate_identity_packet)
        registry.validate(packet)  # raises IdentityError on a bad identity

    """

    def __init__(self) -> None:
        self._validators: dict[str, PacketValidator] = {}

    def register(self, packet_type: str, validator: PacketValidator) -> None:
        """Register validator for packet_type.

        Raises:
            ValueError: packet_type is empty or already registered

        """
        if not packet_type:
            msg = "packet type must be a non-empty string"
            raise ValueError(msg)
        if packet_type in self._validators:
            msg = f"validator already registered for {packet_type!r}"
            raise ValueError(msg)
        self._validators[packet_type] = validator
        logger.debug("Registered packet validator", extra={"packet_type": packet_type})

    def unregister(self, packet_type: str) -> None:
        """Remove the validator for packet_type (no-op when absent)."""
        self._validators.pop(packet_type, None)

    def is_registered(self, packet_type: str) -> bool:
        return packet_type in self._validators

    def validate(self, packet: Packet) -> None:
        """Run the validator registered for packet.type.

        Packets of unregistered types pass unchecked.
        """
        validator = self._validators.get(packet.type)
        if validator is None:
            return
        validator(packet)

    @property
    def packet_types(self) -> frozenset[str]:
        return frozenset(self._validators)


def default_registry() -> PacketSchemaRegistry:
    """Return a new registry with the built-in packet schemas registered."""
    registry = PacketSchemaRegistry()
    registry.register(PACKET_TYPE_IDENTITY, validate_identity_packet)
    return registry
