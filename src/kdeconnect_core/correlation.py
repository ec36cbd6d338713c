"""
Correlation ID tracking for packet-level log tracing.

Every inbound or outbound packet can be logged under a correlation ID so the
lines emitted while framing, decoding and validating one packet group together.
The ID lives in a contextvar, so it is safe across asyncio tasks.
"""

from __future__ import annotations

import contextvars
import uuid
from collections.abc import Generator
from contextlib import contextmanager

__all__ = [
    "correlation_context",
    "generate_correlation_id",
    "get_correlation_id",
    "packet_correlation_id",
    "set_correlation_id",
]

_correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "correlation_id",
    default=None,
)


def generate_correlation_id() -> str:
    """
    Generate a new correlation ID.

    Returns:
        UUID4 hex string without dashes
    """
    return uuid.uuid4().hex


def packet_correlation_id(packet_id: int, packet_type: str) -> str:
    """
    Build a correlation ID from a packet's identity on the wire.

    Packet ids are millisecond timestamps, so two devices can produce the same
    value. The type is folded in to keep IDs of unrelated packets apart.

    Example:
        >>> packet_correlation_id(1700000000000, "kdeconnect.ping")
        'kdeconnect.ping:1700000000000'
    """
    return f"{packet_type}:{packet_id}"


def get_correlation_id() -> str | None:
    """Return the correlation ID of the current context, if any."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None) -> None:
    """Set (or clear with None) the correlation ID of the current context."""
    _correlation_id.set(correlation_id)


@contextmanager
def correlation_context(
    correlation_id: str | None = None,
    auto_generate: bool = True,
) -> Generator[str | None]:
    """
    Scope a correlation ID to a block, restoring the previous one on exit.

    Args:
        correlation_id: ID to use (None to auto-generate)
        auto_generate: Generate a fresh ID when correlation_id is None

    Yields:
        The correlation ID active inside the block

    Example:
        with correlation_context(packet_correlation_id(packet.id, packet.type)):
            logger.debug("Validating identity packet")
    """
    token = _correlation_id.set(
        correlation_id if correlation_id is not None or not auto_generate else generate_correlation_id(),
    )
    try:
        yield _correlation_id.get()
    finally:
        _correlation_id.reset(token)
