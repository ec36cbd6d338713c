"""Unit tests for structs module.

Tests the local device configuration model, DeviceType and DeviceIdentity.
"""

import dataclasses

import pytest
from pydantic import ValidationError

from kdeconnect_core.protocol.identity import get_device_type
from kdeconnect_core.protocol.packet import Packet
from kdeconnect_core.structs import DeviceIdentity, DeviceType, HostConfigurationProtocol, LocalDeviceConfig
from tests.fixtures.real_packets import ANDROID_IDENTITY_BROADCAST, DESKTOP_IDENTITY_HANDSHAKE
from tests.helpers.builders import identity_with


class TestDeviceType:
    """Tests for DeviceType enum."""

    def test_values_are_wire_strings(self):
        assert str(DeviceType.PHONE) == "phone"
        assert DeviceType("tv") is DeviceType.TV

    def test_unknown_value_rejected(self):
        with pytest.raises(ValueError, match="smartphone"):
            _ = DeviceType("smartphone")

    def test_peer_device_types_recognized(self):
        """Test that the device types peers announce map onto DeviceType."""
        for sample in (ANDROID_IDENTITY_BROADCAST, DESKTOP_IDENTITY_HANDSHAKE):
            packet = Packet.parse(sample.raw)
            assert packet is not None
            _ = DeviceType(get_device_type(packet))

        assert DeviceType(get_device_type(identity_with(deviceType="phone"))) is DeviceType.PHONE


class TestLocalDeviceConfig:
    """Tests for LocalDeviceConfig Pydantic model."""

    def test_defaults(self):
        """Test that LocalDeviceConfig has sensible default values."""
        config = LocalDeviceConfig(device_id="abc", device_name="Desk")

        assert config.device_type is DeviceType.DESKTOP
        assert config.incoming_capabilities == frozenset()
        assert config.outgoing_capabilities == frozenset()

    def test_capabilities_deduplicated(self):
        """Test that capability lists collapse into sets."""
        config = LocalDeviceConfig(
            device_id="abc",
            device_name="Desk",
            incoming_capabilities=["kdeconnect.ping", "kdeconnect.ping"],  # pyright: ignore[reportArgumentType]
        )

        assert config.incoming_capabilities == frozenset({"kdeconnect.ping"})

    def test_device_type_from_string(self):
        config = LocalDeviceConfig(device_id="abc", device_name="Tab", device_type="tablet")  # pyright: ignore[reportArgumentType]

        assert config.device_type is DeviceType.TABLET

    def test_device_name_stripped(self):
        config = LocalDeviceConfig(device_id="abc", device_name="  Desk  ")

        assert config.device_name == "Desk"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"device_id": ""},
            {"device_name": ""},
            {"device_name": "   "},
            {"device_type": "smartphone"},
        ],
    )
    def test_invalid_values_rejected(self, overrides: dict[str, str]):
        """Test that invalid local configuration fails validation."""
        kwargs = {"device_id": "abc", "device_name": "Desk", **overrides}

        with pytest.raises(ValidationError):
            _ = LocalDeviceConfig(**kwargs)  # pyright: ignore[reportArgumentType]

    def test_frozen(self, local_config: LocalDeviceConfig):
        with pytest.raises(ValidationError):
            local_config.device_name = "Renamed"  # pyright: ignore[reportAttributeAccessIssue]

    def test_satisfies_host_configuration_protocol(self, local_config: LocalDeviceConfig):
        """Test that the model can feed the identity builder."""
        host: HostConfigurationProtocol = local_config

        assert host.device_id == "7c9e6679f4b64b3c"


class TestDeviceIdentity:
    """Tests for DeviceIdentity dataclass."""

    def test_tcp_port_defaults_to_none(self):
        identity = DeviceIdentity(
            device_id="abc",
            device_name="Phone",
            device_type="phone",
            protocol_version=7,
            incoming_capabilities=frozenset(),
            outgoing_capabilities=frozenset(),
        )

        assert identity.tcp_port is None

    def test_frozen(self):
        identity = DeviceIdentity("abc", "Phone", "phone", 7, frozenset(), frozenset(), 1716)

        with pytest.raises(dataclasses.FrozenInstanceError):
            identity.tcp_port = 1717  # pyright: ignore[reportAttributeAccessIssue]
