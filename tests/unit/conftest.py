"""
Shared fixtures for unit tests.

This module provides reusable host configurations and packets for testing the
packet core.
"""

import pytest

from kdeconnect_core.protocol.identity import build_identity_packet
from kdeconnect_core.protocol.packet import Packet
from kdeconnect_core.structs import DeviceType, LocalDeviceConfig


@pytest.fixture
def local_config() -> LocalDeviceConfig:
    """
    Local laptop configuration with overlapping capability sets.
    """
    return LocalDeviceConfig(
        device_id="7c9e6679f4b64b3c",
        device_name="Test Laptop",
        device_type=DeviceType.LAPTOP,
        incoming_capabilities=frozenset({"kdeconnect.ping", "kdeconnect.share.request"}),
        outgoing_capabilities=frozenset({"kdeconnect.ping", "kdeconnect.battery"}),
    )


@pytest.fixture
def identity_packet(local_config: LocalDeviceConfig) -> Packet:
    """Identity packet built from local_config with a TCP port attached."""
    return build_identity_packet(local_config, {"tcpPort": 1716})


@pytest.fixture
def ping_packet() -> Packet:
    return Packet(id=1700000002000, type="kdeconnect.ping", body={})

