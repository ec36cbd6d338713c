"""Host configuration structures and typing protocols for the packet core."""

from __future__ import annotations

from collections.abc import Set
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DeviceType(StrEnum):
    """Enumerate the device types announced in identity packets."""

    DESKTOP = "desktop"
    LAPTOP = "laptop"
    PHONE = "phone"
    TABLET = "tablet"
    TV = "tv"
    UNKNOWN = "unknown"


class HostConfigurationProtocol(Protocol):
    """What the identity helper reads from the local host configuration.

    The configuration store itself lives outside this package; any object
    with these attributes can feed ``build_identity_packet``.
    """

    @property
    def device_id(self) -> str: ...

    @property
    def device_name(self) -> str: ...

    @property
    def device_type(self) -> StrEnum | str: ...

    @property
    def incoming_capabilities(self) -> Set[str]: ...

    @property
    def outgoing_capabilities(self) -> Set[str]: ...


class LocalDeviceConfig(BaseModel):
    """Identity of the local device, validated on construction.

    Capability sets are frozensets: order carries no meaning and duplicates
    collapse.
    """

    model_config = ConfigDict(frozen=True)

    device_id: str = Field(min_length=1)
    device_name: str = Field(min_length=1)
    device_type: DeviceType = DeviceType.DESKTOP
    incoming_capabilities: frozenset[str] = frozenset()
    outgoing_capabilities: frozenset[str] = frozenset()

    @field_validator("device_name")
    @classmethod
    def _strip_device_name(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            msg = "device_name must not be blank"
            raise ValueError(msg)
        return stripped


@dataclass(frozen=True)
class DeviceIdentity:
    """Typed fields of a validated identity packet.

    tcp_port is None when the packet did not carry one (UDP discovery
    broadcasts carry it, TCP handshake identities may not).
    """

    device_id: str
    device_name: str
    device_type: str
    protocol_version: int
    incoming_capabilities: frozenset[str]
    outgoing_capabilities: frozenset[str]
    tcp_port: int | None = None
