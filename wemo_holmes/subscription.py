"""GENA event subscription bookkeeping for a Holmes appliance."""

from __future__ import annotations

import logging
import threading
from datetime import timedelta

from .const import BASIC_EVENT_SERVICE, DEFAULT_SUBSCRIPTION_DURATION
from .registry import DeviceRegistry, SubscriptionParticipant


class SubscriptionManager:
    """Keep the basic event subscription of one participant alive.

    Subscription state is guarded by its own lock because registry callbacks
    arrive on registry-owned threads.
    """

    def __init__(
        self,
        *,
        registry: DeviceRegistry,
        participant: SubscriptionParticipant,
        service: str = BASIC_EVENT_SERVICE,
        duration: timedelta = DEFAULT_SUBSCRIPTION_DURATION,
        logger: logging.Logger | None = None,
    ) -> None:
        """Bind the registry, participant and subscription parameters."""

        self._registry = registry
        self._participant = participant
        self._service = service
        self._duration = duration
        self._logger = logger or logging.getLogger(__name__)
        self._lock = threading.RLock()
        self._state: dict[str, bool] = {}

    @property
    def service(self) -> str:
        """Return the subscribed service name."""

        return self._service

    @property
    def subscriptions(self) -> dict[str, bool]:
        """Return a copy of the recorded subscription outcomes."""

        with self._lock:
            return dict(self._state)

    def add_subscription(self) -> None:
        """Subscribe to the event service unless a subscription is recorded."""

        with self._lock:
            if not self._registry.is_registered(self._participant):
                self._logger.debug(
                    "Cannot subscribe for %s: device not registered",
                    self._participant.udn,
                )
                return
            if self._service in self._state:
                return
            self._logger.debug(
                "Subscribing %s to service %s for %s",
                self._participant.udn,
                self._service,
                self._duration,
            )
            self._registry.add_subscription(
                self._participant, self._service, int(self._duration.total_seconds())
            )
            # Corrected by record_result once the registry reports back.
            self._state[self._service] = True

    def remove_subscription(self) -> None:
        """Cancel the subscription and unregister the participant.

        Recorded subscription state is always cleared; the registry is only
        contacted while it still sees the device.
        """

        with self._lock:
            registered = self._registry.is_registered(self._participant)
            if registered and self._service in self._state:
                self._logger.debug(
                    "Unsubscribing %s from service %s",
                    self._participant.udn,
                    self._service,
                )
                self._registry.remove_subscription(self._participant, self._service)
            self._state = {}
            if registered:
                self._registry.unregister_participant(self._participant)

    def record_result(self, service: str, succeeded: bool) -> None:
        """Record the registry's verdict on a subscription request."""

        self._logger.debug(
            "Subscription of %s to service %s %s",
            self._participant.udn,
            service,
            "succeeded" if succeeded else "failed",
        )
        with self._lock:
            self._state[service] = succeeded

    def reset(self) -> None:
        """Forget every recorded subscription."""

        with self._lock:
            self._state = {}
