"""Interfaces of the UPnP registry the handler relies on.

The registry tracks device presence on the network, owns GENA event
subscriptions and delivers pushed values. It is provided by the host
application; the handler only depends on the protocols below.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class SubscriptionParticipant(Protocol):
    """Receiver of registry callbacks for one device."""

    @property
    def udn(self) -> str | None:
        """Return the unique device name the participant represents."""

    def on_subscription_result(self, service: str | None, succeeded: bool) -> None:
        """Handle the asynchronous outcome of a subscription request."""

    def on_value_received(
        self, variable: str | None, value: str | None, service: str | None = None
    ) -> None:
        """Handle a value pushed by the device."""


@runtime_checkable
class DeviceRegistry(Protocol):
    """Registry operations used by the poll loop and subscription manager."""

    def register_participant(self, participant: SubscriptionParticipant) -> None:
        """Start delivering events for ``participant``."""

    def unregister_participant(self, participant: SubscriptionParticipant) -> None:
        """Stop delivering events for ``participant``."""

    def is_registered(self, participant: SubscriptionParticipant) -> bool:
        """Return True when the participant's device is visible on the network."""

    def add_subscription(
        self, participant: SubscriptionParticipant, service: str, duration: int
    ) -> None:
        """Request an event subscription lasting ``duration`` seconds."""

    def remove_subscription(self, participant: SubscriptionParticipant, service: str) -> None:
        """Cancel an event subscription."""

    def get_descriptor_url(self, participant: SubscriptionParticipant) -> str | None:
        """Return the device description URL, when known."""
