"""Device model helpers shared by the Holmes appliance variants."""

from __future__ import annotations

from enum import Enum


class DeviceVariant(str, Enum):
    """Holmes appliance sub-types served by the handler."""

    PURIFIER = "purifier"
    HEATER = "heater"
    HUMIDIFIER = "humidifier"


class BaseDevice:
    """Describe the channels a Holmes appliance variant exposes."""

    variant: DeviceVariant
    channels: frozenset[str] = frozenset()

    def __init__(self, udn: str | None = None) -> None:
        """Bind the device description to the appliance UDN."""

        self.udn = udn

    def supports(self, channel: str) -> bool:
        """Return True when ``channel`` belongs to this variant's capability set."""

        return channel in self.channels

    def __repr__(self) -> str:
        return f"{type(self).__name__}(udn={self.udn!r})"
