r"""KDE Connect packet value, parsing and serialization.

A packet on the wire is one UTF-8 JSON object followed by a newline:

    {"id": 1700000000000, "type": "kdeconnect.ping", "body": {}}\n

Only ``id``, ``type`` and ``body`` travel in that object. Payload metadata
(stream, size, transfer info) is negotiated out of band by the transport and
attached to the packet afterwards with ``Packet.with_payload``.
"""

from __future__ import annotations

import dataclasses
import json
import math
import time
from dataclasses import dataclass, field
from typing import BinaryIO, Final, override

from kdeconnect_core.logging_abstraction import get_logger
from kdeconnect_core.metrics import (
    record_decode_error,
    record_encode_error,
    record_packet_parsed,
    record_packet_serialized,
)
from kdeconnect_core.protocol.exceptions import PacketDecodeError, PacketEncodeError
from kdeconnect_core.protocol.packet_types import PACKET_TERMINATOR, Body, JSONValue, PayloadInfo

INT64_MIN: Final[int] = -(2**63)
INT64_MAX: Final[int] = 2**63 - 1
PRETTY_INDENT: Final[int] = 2

logger = get_logger(__name__)


def _reject_constant(name: str) -> float:
    # json.loads accepts NaN/Infinity literals by default; they are not JSON
    msg = f"non-standard JSON constant {name}"
    raise ValueError(msg)


type _PathNode = tuple[_PathNode | None, str]


def _format_path(node: _PathNode) -> str:
    segments: list[str] = []
    current: _PathNode | None = node
    while current is not None:
        current, segment = current
        segments.append(segment)
    return "".join(reversed(segments))


def _check_json_value(value: object, path: str) -> None:
    """Raise PacketEncodeError if value is not representable as JSON.

    Iterative, so nesting depth is not capped by the recursion limit.
    """
    # Path segments link to their parent; joined only when reporting an error
    stack: list[tuple[object, _PathNode, bool]] = [(value, (None, path), False)]
    ancestors: set[int] = set()
    while stack:
        current, node, leaving = stack.pop()
        if leaving:
            ancestors.discard(id(current))
            continue
        if current is None or isinstance(current, (str, bool, int)):
            continue
        if isinstance(current, float):
            if not math.isfinite(current):
                msg = f"non-finite number at {_format_path(node)}"
                raise PacketEncodeError(msg)
            continue
        if not isinstance(current, (list, tuple, dict)):
            msg = f"unsupported type {type(current).__name__} at {_format_path(node)}"
            raise PacketEncodeError(msg)
        if id(current) in ancestors:
            msg = f"circular reference at {_format_path(node)}"
            raise PacketEncodeError(msg)
        ancestors.add(id(current))
        stack.append((current, node, True))
        children: list[tuple[object, _PathNode, bool]] = []
        if isinstance(current, dict):
            for key, item in current.items():
                if not isinstance(key, str):
                    msg = f"non-string key {key!r} at {_format_path(node)}"
                    raise PacketEncodeError(msg)
                children.append((item, (node, f".{key}"), False))
        else:
            children.extend((item, (node, f"[{index}]"), False) for index, item in enumerate(current))
        stack.extend(reversed(children))


def _coerce_id(value: object) -> int | None:
    """Return the packet id as int64, or None if the JSON value cannot be one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        packet_id = value
    elif isinstance(value, float) and math.isfinite(value):
        packet_id = int(value)
    else:
        return None
    if not INT64_MIN <= packet_id <= INT64_MAX:
        return None
    return packet_id


def current_packet_id() -> int:
    """Milliseconds since the epoch, used as the id of new packets."""
    return int(time.time() * 1000)


@dataclass(frozen=True)
class Packet:
    """One KDE Connect protocol message.

    Packets are values: build them with ``create`` or ``parse``/``decode`` and
    derive modified copies instead of mutating them.

    Attributes:
        id: Millisecond timestamp taken at construction; informational, used
            for logging and correlation only
        type: Packet type string, e.g. "kdeconnect.identity"
        body: Type-specific JSON object
        payload: Readable binary stream of an attached transfer. Owned by the
            transport, which opens, limits to payload_size and closes it
        payload_size: Declared payload length in bytes
        payload_info: Transport-specific description of how to fetch the payload

    """

    # body is a dict, so packets compare by value but are not hashable
    __hash__ = None  # type: ignore[assignment]

    id: int
    type: str
    body: Body = field(default_factory=dict)
    payload: BinaryIO | None = field(default=None, compare=False, repr=False)
    payload_size: int | None = None
    payload_info: PayloadInfo | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.type, str) or not self.type:
            msg = "packet type must be a non-empty string"
            raise ValueError(msg)
        if self.payload_size is not None and self.payload_size < 0:
            msg = f"payload_size must be non-negative, got {self.payload_size}"
            raise ValueError(msg)
        if self.payload is not None and self.payload_size is None:
            msg = "payload_size is required when a payload is attached"
            raise ValueError(msg)

    @classmethod
    def create(cls, packet_type: str, body: Body | None = None) -> Packet:
        """Build a new outbound packet stamped with the current time.

        The body is copied (shallowly) and is not checked here; an
        unrepresentable body surfaces as PacketEncodeError from ``serialize``.

        Example:
            >>> packet = Packet.create("kdeconnect.ping")
            >>> packet.type, packet.body
            ('kdeconnect.ping', {})

        """
        return cls(id=current_packet_id(), type=packet_type, body=dict(body or {}))

    @classmethod
    def decode(cls, data: bytes | bytearray | str) -> Packet:
        """Decode one packet, raising PacketDecodeError with a reason code.

        Accepts the line with or without its trailing newline. Top-level keys
        other than id/type/body are ignored; in particular payloadSize and
        payloadTransferInfo are never read here.

        Args:
            data: One JSON document

        Returns:
            Decoded packet (without payload metadata)

        Raises:
            PacketDecodeError: reason is one of "empty", "malformed_json",
                "wrong_shape", "missing_field", "invalid_field"

        """
        raw = data.encode("utf-8", "surrogatepass") if isinstance(data, str) else bytes(data)

        try:
            if not raw.strip():
                raise PacketDecodeError("empty", raw)

            try:
                obj = json.loads(raw, parse_constant=_reject_constant)
            except (ValueError, RecursionError) as err:
                raise PacketDecodeError("malformed_json", raw) from err

            if not isinstance(obj, dict):
                raise PacketDecodeError("wrong_shape", raw)

            for key in ("id", "type", "body"):
                if key not in obj:
                    raise PacketDecodeError("missing_field", raw, field=key)

            packet_id = _coerce_id(obj["id"])
            if packet_id is None:
                raise PacketDecodeError("invalid_field", raw, field="id")

            packet_type = obj["type"]
            if not isinstance(packet_type, str) or not packet_type:
                raise PacketDecodeError("invalid_field", raw, field="type")

            body = obj["body"]
            if not isinstance(body, dict):
                raise PacketDecodeError("invalid_field", raw, field="body")
        except PacketDecodeError as err:
            logger.debug(
                "Dropping malformed packet: %s",
                err.reason,
                extra={"field": err.field, "bytes": len(raw), "preview": err.data_preview.hex(" ")},
            )
            record_decode_error(err.reason)
            raise

        record_packet_parsed(packet_type)
        return cls(id=packet_id, type=packet_type, body=body)

    @classmethod
    def parse(cls, data: bytes | bytearray | str) -> Packet | None:
        """Decode one packet, returning None for any malformed input.

        Callers treat None as "drop this packet and keep reading the stream".
        Use ``decode`` when the failure reason matters.
        """
        try:
            return cls.decode(data)
        except PacketDecodeError:
            return None

    @property
    def has_payload(self) -> bool:
        return self.payload is not None and bool(self.payload_size)

    def with_payload(
        self,
        payload: BinaryIO | None,
        payload_size: int | None,
        payload_info: PayloadInfo | None = None,
    ) -> Packet:
        """Return a copy of this packet carrying payload metadata."""
        return dataclasses.replace(
            self,
            payload=payload,
            payload_size=payload_size,
            payload_info=payload_info,
        )

    def to_dict(self) -> dict[str, JSONValue]:
        """Return the wire mapping (id, type, body); payload fields are excluded."""
        return {"id": self.id, "type": self.type, "body": self.body}

    def _encode(self, pretty: bool) -> bytes:
        _check_json_value(self.body, "body")
        try:
            if pretty:
                text = json.dumps(self.to_dict(), ensure_ascii=False, allow_nan=False, indent=PRETTY_INDENT)
            else:
                text = json.dumps(self.to_dict(), ensure_ascii=False, allow_nan=False, separators=(",", ":"))
            return text.encode("utf-8") + PACKET_TERMINATOR
        except RecursionError as err:
            # The indenting encoder may recurse once per nesting level
            raise PacketEncodeError("nesting too deep") from err
        except (TypeError, ValueError) as err:
            raise PacketEncodeError(str(err)) from err

    def serialize(self, pretty: bool = False) -> bytes:
        """Serialize to one newline-terminated UTF-8 JSON line.

        Args:
            pretty: Indent the JSON for human-readable logging. The content is
                the same as the compact form; only whitespace differs.

        Returns:
            Encoded packet, ending in exactly one b"\\n"

        Raises:
            PacketEncodeError: body holds a non-finite number, a non-string
                key, a circular reference or a non-JSON type, or (pretty
                only) is nested too deeply for the indenting encoder

        """
        try:
            encoded = self._encode(pretty)
        except PacketEncodeError as err:
            err.packet_type = self.type
            logger.error(
                "Cannot serialize %s packet: %s",
                self.type,
                err.reason,
                extra={"packet_id": self.id},
            )
            record_encode_error(self.type)
            raise

        record_packet_serialized(self.type)
        return encoded

    @override
    def __str__(self) -> str:
        try:
            return self._encode(pretty=True).decode("utf-8").rstrip("\n")
        except PacketEncodeError as err:
            return f"Could not serialize packet: {err}"
