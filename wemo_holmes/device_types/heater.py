"""Space heater device support."""

from __future__ import annotations

from ..const import (
    CHANNEL_AUTO_OFF_TIME,
    CHANNEL_CURRENT_TEMPERATURE,
    CHANNEL_HEATER_MODE,
    CHANNEL_HEATING_REMAINING,
    CHANNEL_TARGET_TEMPERATURE,
)
from .base import BaseDevice, DeviceVariant


class HeaterDevice(BaseDevice):
    """Holmes heater exposing mode, temperatures and the auto-off timer."""

    variant = DeviceVariant.HEATER
    channels = frozenset(
        {
            CHANNEL_HEATER_MODE,
            CHANNEL_CURRENT_TEMPERATURE,
            CHANNEL_TARGET_TEMPERATURE,
            CHANNEL_AUTO_OFF_TIME,
            CHANNEL_HEATING_REMAINING,
        }
    )
