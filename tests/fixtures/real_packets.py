"""Sample KDE Connect packets for protocol testing.

Lines are shaped after traffic between an Android phone and a desktop peer
(device ids and names replaced). Each sample carries metadata for
traceability and test parameterization.
"""

from dataclasses import dataclass

__all__ = [
    "ALL_SAMPLES",
    "ANDROID_IDENTITY_BROADCAST",
    "DESKTOP_IDENTITY_HANDSHAKE",
    "PAIR_REQUEST",
    "PING",
    "SHARE_WITH_PAYLOAD",
    "PacketSample",
]


@dataclass
class PacketSample:
    """One captured packet line and what it should decode to."""

    raw: bytes  # Complete line including the b"\n" terminator
    packet_type: str
    packet_id: int
    source: str  # e.g., "android", "desktop"
    notes: str = ""


ANDROID_IDENTITY_BROADCAST = PacketSample(
    raw=(
        b'{"id":1700000000123,"type":"kdeconnect.identity","body":{'
        b'"deviceId":"a1b2c3d4e5f60718","deviceName":"Pixel 7","protocolVersion":7,'
        b'"deviceType":"phone","tcpPort":1716,'
        b'"incomingCapabilities":["kdeconnect.ping","kdeconnect.share.request","kdeconnect.battery"],'
        b'"outgoingCapabilities":["kdeconnect.ping","kdeconnect.share.request","kdeconnect.battery"]}}\n'
    ),
    packet_type="kdeconnect.identity",
    packet_id=1700000000123,
    source="android",
    notes="UDP discovery broadcast; carries tcpPort",
)

DESKTOP_IDENTITY_HANDSHAKE = PacketSample(
    raw=(
        b'{"id":1700000000456,"type":"kdeconnect.identity","body":{'
        b'"deviceId":"f0e1d2c3b4a59687","deviceName":"workstation","protocolVersion":7,'
        b'"deviceType":"desktop",'
        b'"incomingCapabilities":["kdeconnect.ping","kdeconnect.ping"],'
        b'"outgoingCapabilities":[]}}\n'
    ),
    packet_type="kdeconnect.identity",
    packet_id=1700000000456,
    source="desktop",
    notes="TCP handshake identity without tcpPort; duplicate incoming capability",
)

PAIR_REQUEST = PacketSample(
    raw=b'{"id":1700000001000,"type":"kdeconnect.pair","body":{"pair":true}}\n',
    packet_type="kdeconnect.pair",
    packet_id=1700000001000,
    source="desktop",
)

PING = PacketSample(
    raw=b'{"id":1700000002000,"type":"kdeconnect.ping","body":{}}\n',
    packet_type="kdeconnect.ping",
    packet_id=1700000002000,
    source="android",
)

SHARE_WITH_PAYLOAD = PacketSample(
    raw=(
        b'{"id":1700000003000,"type":"kdeconnect.share.request","body":{"filename":"photo.jpg"},'
        b'"payloadSize":52311,"payloadTransferInfo":{"port":1739}}\n'
    ),
    packet_type="kdeconnect.share.request",
    packet_id=1700000003000,
    source="android",
    notes="Payload fields sit beside the body on the wire and are ignored by decoding",
)

ALL_SAMPLES: list[PacketSample] = [
    ANDROID_IDENTITY_BROADCAST,
    DESKTOP_IDENTITY_HANDSHAKE,
    PAIR_REQUEST,
    PING,
    SHARE_WITH_PAYLOAD,
]
