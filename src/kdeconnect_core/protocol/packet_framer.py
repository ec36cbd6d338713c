"""Newline stream framing with oversized-line protection.

This module provides PacketFramer for splitting a TCP byte stream into packet
lines, and read_packets for consuming an asyncio stream reader as packets.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Protocol

from kdeconnect_core.const import KDECONNECT_MAX_PACKET_SIZE
from kdeconnect_core.correlation import correlation_context, packet_correlation_id
from kdeconnect_core.logging_abstraction import get_logger
from kdeconnect_core.metrics import record_framing_overflow
from kdeconnect_core.protocol.exceptions import PacketFramingError
from kdeconnect_core.protocol.packet import Packet
from kdeconnect_core.protocol.packet_types import PACKET_TERMINATOR

DEFAULT_READ_CHUNK_SIZE = 4096

logger = get_logger(__name__)


class AsyncByteReader(Protocol):
    """The part of asyncio.StreamReader that read_packets uses."""

    async def read(self, n: int = -1) -> bytes: ...


class PacketFramer:
    r"""Extract newline-terminated packet lines from a byte stream.

    TCP reads may return partial lines, several lines, or exact boundaries.
    PacketFramer buffers incoming bytes and hands back every complete line
    (terminator stripped). JSON escapes newlines inside strings, so a raw
    b"\n" only ever appears as the packet terminator.

    Security: a line that grows past max_packet_size without a terminator is
    discarded up to the next b"\n" so a peer cannot exhaust memory. With
    strict=True the framer raises PacketFramingError instead, for callers that
    drop the connection on a misbehaving peer; lines completed before the
    oversized one travel on the error, the rest of the buffer is dropped.

    Example:
        framer = PacketFramer()
        lines = framer.feed(b'{"id":1,"type":"kdeconnect.ping",')
        assert lines == []  # Incomplete

        lines = framer.feed(b'"body":{}}\n')
        assert len(lines) == 1  # Now complete

    """

    def __init__(self, max_packet_size: int = KDECONNECT_MAX_PACKET_SIZE, strict: bool = False) -> None:
        self.max_packet_size: int = max_packet_size
        self.strict: bool = strict
        self.buffer: bytearray = bytearray()
        # True while skipping the rest of an oversized line
        self._discarding: bool = False

    def feed(self, data: bytes) -> list[bytes]:
        """Add data to the buffer and return the complete lines.

        Blank lines are skipped.

        Args:
            data: Incoming bytes from a stream read

        Returns:
            Complete lines without terminator (may be empty)

        Raises:
            PacketFramingError: strict framer saw an oversized line. Lines
                completed earlier in this call are on the error's ``lines``;
                everything still buffered, including later complete lines,
                is dropped

        """
        self.buffer.extend(data)
        return self._extract_lines()

    def feed_packets(self, data: bytes) -> list[Packet]:
        """Add data to the buffer and return the complete, well-formed packets.

        Malformed lines are logged and dropped; the stream keeps going.
        """
        packets: list[Packet] = []
        for line in self.feed(data):
            packet = Packet.parse(line)
            if packet is None:
                logger.warning(
                    "Dropped malformed packet line",
                    extra={"bytes": len(line), "preview": line[:16].hex(" ")},
                )
                continue
            with correlation_context(packet_correlation_id(packet.id, packet.type)):
                logger.debug("Received %s packet", packet.type, extra={"body_keys": len(packet.body)})
            packets.append(packet)
        return packets

    def reset(self) -> None:
        """Drop any buffered partial line."""
        self.buffer = bytearray()
        self._discarding = False

    def _overflow(self, size: int, lines: list[bytes]) -> None:
        record_framing_overflow()
        if self.strict:
            self.reset()
            raise PacketFramingError("line_too_long", buffer_size=size, lines=lines)
        logger.warning(
            "Discarding oversized packet line: %d bytes (max %d)",
            size,
            self.max_packet_size,
        )

    def _extract_lines(self) -> list[bytes]:
        lines: list[bytes] = []

        while True:
            end = self.buffer.find(PACKET_TERMINATOR)
            if end < 0:
                if len(self.buffer) > self.max_packet_size:
                    if not self._discarding:
                        self._overflow(len(self.buffer), lines)
                    self._discarding = True
                    self.buffer = bytearray()
                break

            line = bytes(self.buffer[:end])
            del self.buffer[: end + len(PACKET_TERMINATOR)]

            if self._discarding:
                # Tail of a line already reported as oversized
                self._discarding = False
                continue
            if len(line) > self.max_packet_size:
                self._overflow(len(line), lines)
                continue
            if line.strip():
                lines.append(line)

        return lines


async def read_packets(
    reader: AsyncByteReader,
    chunk_size: int = DEFAULT_READ_CHUNK_SIZE,
    max_packet_size: int = KDECONNECT_MAX_PACKET_SIZE,
) -> AsyncIterator[Packet]:
    """Yield packets read from reader until EOF.

    Bytes left after the last terminator at EOF are an incomplete packet and
    are discarded. Closing the reader remains the caller's job.
    """
    framer = PacketFramer(max_packet_size=max_packet_size)
    while True:
        chunk = await reader.read(chunk_size)
        if not chunk:
            break
        for packet in framer.feed_packets(chunk):
            yield packet

    if framer.buffer:
        logger.debug("Discarding %d trailing bytes at EOF", len(framer.buffer))
