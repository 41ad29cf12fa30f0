"""Synchronisation engine for Belkin WeMo Holmes appliances."""

from __future__ import annotations

from .config import HolmesConfig, InvalidConfig
from .device_types.base import DeviceVariant
from .handler import HolmesHandler, UnsupportedCommand
from .status import DeviceStatus, StatusDetail, ThingStatus

__all__ = [
    "DeviceStatus",
    "DeviceVariant",
    "HolmesConfig",
    "HolmesHandler",
    "InvalidConfig",
    "StatusDetail",
    "ThingStatus",
    "UnsupportedCommand",
]
