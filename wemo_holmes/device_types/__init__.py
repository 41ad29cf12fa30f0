"""Holmes appliance variants and their capability sets."""

from __future__ import annotations

from .base import BaseDevice, DeviceVariant
from .heater import HeaterDevice
from .humidifier import HumidifierDevice
from .purifier import PurifierDevice

_VARIANT_FACTORIES: tuple[tuple[DeviceVariant, type[BaseDevice]], ...] = (
    (DeviceVariant.PURIFIER, PurifierDevice),
    (DeviceVariant.HEATER, HeaterDevice),
    (DeviceVariant.HUMIDIFIER, HumidifierDevice),
)


def resolve_device(thing_type: str | DeviceVariant, udn: str | None = None) -> BaseDevice:
    """Return the device description matching ``thing_type``.

    Raises ``KeyError`` when the thing type is not a Holmes appliance.
    """

    try:
        variant = DeviceVariant(thing_type)
    except ValueError as exc:
        raise KeyError(thing_type) from exc
    for candidate, factory in _VARIANT_FACTORIES:
        if candidate is variant:
            return factory(udn)
    raise KeyError(thing_type)  # pragma: no cover - every variant is registered


__all__ = [
    "BaseDevice",
    "DeviceVariant",
    "HeaterDevice",
    "HumidifierDevice",
    "PurifierDevice",
    "resolve_device",
]
