"""Configuration schema for a Holmes appliance handler."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

import voluptuous as vol

from .const import (
    DEFAULT_REFRESH_INTERVAL,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_SUBSCRIPTION_DURATION,
)
from .device_types.base import DeviceVariant


class InvalidConfig(ValueError):
    """Raised when a handler configuration fails validation."""


def _as_timedelta(value: Any) -> timedelta:
    """Coerce seconds or a ``timedelta`` into a positive ``timedelta``."""

    if isinstance(value, timedelta):
        delta = value
    else:
        try:
            delta = timedelta(seconds=float(value))
        except (OverflowError, TypeError, ValueError) as exc:
            raise vol.Invalid(f"expected seconds, got {value!r}") from exc
    if delta.total_seconds() < 1:
        raise vol.Invalid("interval must be at least one second")
    return delta


def _optional_udn(value: Any) -> str | None:
    """Normalise blank UDNs to ``None``."""

    if value is None:
        return None
    text = str(value).strip()
    return text or None


CONFIG_SCHEMA = vol.Schema(
    {
        vol.Optional("udn", default=None): _optional_udn,
        vol.Optional("thing_type", default=DeviceVariant.PURIFIER.value): vol.In(
            [variant.value for variant in DeviceVariant]
        ),
        vol.Optional("host", default=""): vol.Any(None, str),
        vol.Optional("port", default=None): vol.Any(
            None, vol.All(vol.Coerce(int), vol.Range(min=1, max=65535))
        ),
        vol.Optional("refresh_interval", default=DEFAULT_REFRESH_INTERVAL): _as_timedelta,
        vol.Optional(
            "subscription_duration", default=DEFAULT_SUBSCRIPTION_DURATION
        ): _as_timedelta,
        vol.Optional("request_timeout", default=DEFAULT_REQUEST_TIMEOUT): vol.All(
            vol.Coerce(float), vol.Range(min=0, min_included=False)
        ),
        vol.Optional("strict_commands", default=False): bool,
    }
)


@dataclass(frozen=True, slots=True)
class HolmesConfig:
    """Validated settings for one Holmes appliance."""

    udn: str | None = None
    thing_type: DeviceVariant = DeviceVariant.PURIFIER
    host: str = ""
    port: int | None = None
    refresh_interval: timedelta = DEFAULT_REFRESH_INTERVAL
    subscription_duration: timedelta = DEFAULT_SUBSCRIPTION_DURATION
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    strict_commands: bool = False

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> HolmesConfig:
        """Validate ``payload`` and build a configuration object."""

        try:
            data = CONFIG_SCHEMA(dict(payload))
        except vol.Invalid as err:
            raise InvalidConfig(str(err)) from err

        return cls(
            udn=data["udn"],
            thing_type=DeviceVariant(data["thing_type"]),
            host=(data["host"] or "").strip(),
            port=data["port"],
            refresh_interval=data["refresh_interval"],
            subscription_duration=data["subscription_duration"],
            request_timeout=data["request_timeout"],
            strict_commands=data["strict_commands"],
        )
