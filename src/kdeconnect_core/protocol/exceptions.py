"""Exception types for KDE Connect packet errors.

Three families share one base class:

- decode/framing errors for inbound bytes,
- encode errors for packets whose body cannot be represented as JSON,
- identity errors raised by the typed identity accessors.

None of them is fatal; each is scoped to a single packet or handshake attempt.
"""

from __future__ import annotations

from typing import ClassVar


class KdeConnectProtocolError(Exception):
    """Base exception for all KDE Connect protocol errors.

    Catching this class handles every packet-level failure while the
    subclasses keep the specific reason available for detailed handling.
    """


class PacketDecodeError(KdeConnectProtocolError):
    """Inbound bytes are not a valid packet.

    Attributes:
        reason: Coarse failure reason ("empty", "malformed_json", "wrong_shape",
            "missing_field" or "invalid_field")
        field: Top-level field that failed, for the field-level reasons
        data_preview: First 16 bytes of the input (keeps secrets out of logs/tracebacks)

    """

    def __init__(self, reason: str, data: bytes = b"", field: str | None = None) -> None:
        self.reason: str = reason
        self.field: str | None = field
        self.data_preview: bytes = data[:16] if data else b""
        detail = f"{reason} ({field})" if field else reason
        super().__init__(f"Packet decode failed: {detail}")


class PacketEncodeError(KdeConnectProtocolError):
    """Packet body cannot be serialized to JSON.

    This is a contract error on the producing side (a bug in packet
    construction), not a transient condition.

    Attributes:
        reason: What made the body unrepresentable
        packet_type: Type of the packet being serialized

    """

    def __init__(self, reason: str, packet_type: str = "") -> None:
        self.reason: str = reason
        self.packet_type: str = packet_type
        super().__init__(f"Packet encode failed: {reason}")


class PacketFramingError(KdeConnectProtocolError):
    """Stream framing error.

    Attributes:
        reason: Specific failure reason (e.g., "line_too_long")
        buffer_size: Size of the framing buffer when the error occurred
        lines: Complete lines extracted by the same feed before the error

    """

    def __init__(self, reason: str, buffer_size: int = 0, lines: list[bytes] | None = None) -> None:
        self.reason: str = reason
        self.buffer_size: int = buffer_size
        self.lines: list[bytes] = lines or []
        super().__init__(f"Packet framing failed: {reason}")


class IdentityError(KdeConnectProtocolError):
    """Identity packet failed validation.

    Subclasses name the body field that was absent or had the wrong shape.
    """

    field: ClassVar[str | None] = None

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or f"Invalid identity packet field: {self.field}")


class WrongTypeError(IdentityError):
    """Packet is not an identity packet.

    Attributes:
        actual_type: Type string of the packet that was inspected

    """

    def __init__(self, actual_type: str) -> None:
        self.actual_type: str = actual_type
        super().__init__(f"Expected identity packet, got {actual_type!r}")


class InvalidDeviceIdError(IdentityError):
    field = "deviceId"


class InvalidDeviceNameError(IdentityError):
    field = "deviceName"


class InvalidDeviceTypeError(IdentityError):
    field = "deviceType"


class InvalidProtocolVersionError(IdentityError):
    field = "protocolVersion"


class InvalidTCPPortError(IdentityError):
    field = "tcpPort"


class InvalidIncomingCapabilitiesError(IdentityError):
    field = "incomingCapabilities"


class InvalidOutgoingCapabilitiesError(IdentityError):
    field = "outgoingCapabilities"
