"""Metrics module."""

from .registry import (
    record_decode_error,
    record_encode_error,
    record_framing_overflow,
    record_identity_error,
    record_packet_parsed,
    record_packet_serialized,
    start_metrics_server,
)

__all__ = [
    "record_decode_error",
    "record_encode_error",
    "record_framing_overflow",
    "record_identity_error",
    "record_packet_parsed",
    "record_packet_serialized",
    "start_metrics_server",
]
