"""Tests for Holmes device variant resolution."""

from __future__ import annotations

import pytest

from wemo_holmes.device_types import (
    DeviceVariant,
    HeaterDevice,
    HumidifierDevice,
    PurifierDevice,
    resolve_device,
)


@pytest.mark.parametrize(
    ("thing_type", "expected"),
    [
        ("purifier", PurifierDevice),
        ("heater", HeaterDevice),
        (DeviceVariant.HUMIDIFIER, HumidifierDevice),
    ],
)
def test_resolve_device_by_thing_type(thing_type: str, expected: type) -> None:
    """Thing types should resolve to their device description."""

    device = resolve_device(thing_type, "uuid:Holmes-1")

    assert isinstance(device, expected)
    assert device.udn == "uuid:Holmes-1"
    assert device.variant is DeviceVariant(thing_type)


def test_resolve_device_rejects_unknown_type() -> None:
    """Unknown thing types should raise KeyError."""

    with pytest.raises(KeyError):
        resolve_device("insight")


def test_capability_sets() -> None:
    """Each variant only exposes its own channels."""

    purifier = PurifierDevice()
    heater = HeaterDevice()
    humidifier = HumidifierDevice()

    assert purifier.supports("airQuality")
    assert not purifier.supports("heaterMode")
    assert heater.supports("targetTemperature")
    assert not heater.supports("filterLife")
    assert humidifier.supports("desiredHumidity")
    assert humidifier.supports("filterLife")
    assert not humidifier.supports("heaterMode")
    assert repr(heater) == "HeaterDevice(udn=None)"
