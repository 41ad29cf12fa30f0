"""Air purifier device support."""

from __future__ import annotations

from ..const import (
    CHANNEL_AIR_QUALITY,
    CHANNEL_EXPIRED_FILTER_TIME,
    CHANNEL_FILTER_LIFE,
    CHANNEL_FILTER_PRESENT,
    CHANNEL_IONIZER,
    CHANNEL_PURIFIER_MODE,
)
from .base import BaseDevice, DeviceVariant


class PurifierDevice(BaseDevice):
    """Holmes air purifier with ionizer and filter monitoring."""

    variant = DeviceVariant.PURIFIER
    channels = frozenset(
        {
            CHANNEL_PURIFIER_MODE,
            CHANNEL_IONIZER,
            CHANNEL_AIR_QUALITY,
            CHANNEL_FILTER_LIFE,
            CHANNEL_EXPIRED_FILTER_TIME,
            CHANNEL_FILTER_PRESENT,
        }
    )
