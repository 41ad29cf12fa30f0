"""Thread-safe channel state container for a Holmes appliance."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable

from ..codec import ChannelValue
from ..device_types.base import BaseDevice

_LOGGER = logging.getLogger(__name__)

StateListener = Callable[[str, ChannelValue], None]


class ChannelState:
    """Latest decoded value per channel, limited to the device's capabilities."""

    def __init__(self, device: BaseDevice) -> None:
        """Initialise an empty state map bound to ``device``."""

        self.device = device
        self._values: dict[str, ChannelValue] = {}
        self._lock = threading.Lock()
        self._listeners: list[StateListener] = []

    def add_listener(self, callback: StateListener) -> None:
        """Register ``callback`` for every accepted channel update."""

        self._listeners.append(callback)

    def update(self, channel: str, value: ChannelValue) -> bool:
        """Store ``value`` for ``channel`` when the device supports it."""

        if not self.device.supports(channel):
            _LOGGER.debug(
                "Dropping %s=%r; channel not supported by %s",
                channel,
                value,
                self.device,
            )
            return False
        with self._lock:
            self._values[channel] = value
        for listener in list(self._listeners):
            listener(channel, value)
        return True

    def merge(self, updates: Iterable[tuple[str, ChannelValue]]) -> list[str]:
        """Apply ``updates`` and return the channels that were stored.

        Channels absent from ``updates`` keep their previous value.
        """

        return [channel for channel, value in updates if self.update(channel, value)]

    def get(self, channel: str) -> ChannelValue | None:
        """Return the last value for ``channel``."""

        with self._lock:
            return self._values.get(channel)

    def clear(self) -> None:
        """Forget every stored value."""

        with self._lock:
            self._values.clear()

    @property
    def values(self) -> dict[str, ChannelValue]:
        """Return a snapshot of all stored channel values."""

        with self._lock:
            return dict(self._values)

    def __contains__(self, channel: object) -> bool:
        with self._lock:
            return channel in self._values
