"""Humidifier device support."""

from __future__ import annotations

from ..const import (
    CHANNEL_CURRENT_HUMIDITY,
    CHANNEL_DESIRED_HUMIDITY,
    CHANNEL_EXPIRED_FILTER_TIME,
    CHANNEL_FILTER_LIFE,
    CHANNEL_HUMIDIFIER_MODE,
)
from .base import BaseDevice, DeviceVariant


class HumidifierDevice(BaseDevice):
    """Holmes humidifier with fan speed and target humidity control."""

    variant = DeviceVariant.HUMIDIFIER
    channels = frozenset(
        {
            CHANNEL_HUMIDIFIER_MODE,
            CHANNEL_DESIRED_HUMIDITY,
            CHANNEL_CURRENT_HUMIDITY,
            CHANNEL_FILTER_LIFE,
            CHANNEL_EXPIRED_FILTER_TIME,
        }
    )
