"""Prometheus metrics registry for packet encoding and decoding."""

import threading
from typing import Final

from prometheus_client import (  # type: ignore[import-untyped]
    Counter,
    start_http_server,
)

from kdeconnect_core.const import KDECONNECT_METRICS_PORT

kdeconnect_packet_parsed_total: Final = Counter(  # type: ignore[assignment]
    "kdeconnect_packet_parsed_total",
    "Total packets parsed from the wire",
    ["packet_type"],
)

kdeconnect_decode_errors_total: Final = Counter(  # type: ignore[assignment]
    "kdeconnect_decode_errors_total",
    "Total inbound packets dropped as malformed",
    ["reason"],
)

kdeconnect_packet_serialized_total: Final = Counter(  # type: ignore[assignment]
    "kdeconnect_packet_serialized_total",
    "Total packets serialized for the wire",
    ["packet_type"],
)

kdeconnect_encode_errors_total: Final = Counter(  # type: ignore[assignment]
    "kdeconnect_encode_errors_total",
    "Total packets whose body could not be serialized",
    ["packet_type"],
)

kdeconnect_identity_errors_total: Final = Counter(  # type: ignore[assignment]
    "kdeconnect_identity_errors_total",
    "Total identity packet validation failures",
    ["error"],
)

kdeconnect_framing_overflow_total: Final = Counter(  # type: ignore[assignment]
    "kdeconnect_framing_overflow_total",
    "Total oversized lines discarded by the stream framer",
)

_server_state = {"started": False}
_server_lock = threading.Lock()


def start_metrics_server(port: int = KDECONNECT_METRICS_PORT) -> None:
    """Start Prometheus HTTP metrics server (idempotent)."""
    with _server_lock:
        if not _server_state["started"]:
            start_http_server(port)  # type: ignore[no-untyped-call]
            _server_state["started"] = True


def record_packet_parsed(packet_type: str) -> None:
    """Record a packet parsed from the wire."""
    kdeconnect_packet_parsed_total.labels(packet_type=packet_type).inc()  # type: ignore[no-untyped-call]


def record_decode_error(reason: str) -> None:
    """Record a malformed inbound packet."""
    kdeconnect_decode_errors_total.labels(reason=reason).inc()  # type: ignore[no-untyped-call]


def record_packet_serialized(packet_type: str) -> None:
    """Record a serialized packet."""
    kdeconnect_packet_serialized_total.labels(packet_type=packet_type).inc()  # type: ignore[no-untyped-call]


def record_encode_error(packet_type: str) -> None:
    """Record a serialization failure."""
    kdeconnect_encode_errors_total.labels(packet_type=packet_type).inc()  # type: ignore[no-untyped-call]


def record_identity_error(error: str) -> None:
    """Record an identity accessor failure, labelled by exception class name."""
    kdeconnect_identity_errors_total.labels(error=error).inc()  # type: ignore[no-untyped-call]


def record_framing_overflow() -> None:
    """Record an oversized line discarded by the framer."""
    kdeconnect_framing_overflow_total.inc()  # type: ignore[no-untyped-call]
