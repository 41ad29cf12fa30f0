"""Pytest configuration for the WeMo Holmes test suite."""

from __future__ import annotations

import html
import sys
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

import pytest

root_path = Path(__file__).resolve().parent.parent
if str(root_path) not in sys.path:
    sys.path.insert(0, str(root_path))


class FakeParticipant:
    """Registry participant exposing only a UDN."""

    def __init__(self, udn: str | None = "uuid:Holmes-1_0-TEST") -> None:
        """Store the participant identity."""

        self.udn = udn

    def on_subscription_result(self, service: str | None, succeeded: bool) -> None:
        """Ignore subscription outcomes."""

    def on_value_received(
        self, variable: str | None, value: str | None, service: str | None = None
    ) -> None:
        """Ignore pushed values."""


class FakeRegistry:
    """Test double recording every registry interaction."""

    def __init__(self, *, registered: bool = True, descriptor_url: str | None = None) -> None:
        """Initialise reachability and call journals."""

        self.registered = registered
        self.descriptor_url = descriptor_url
        self.participants: list[Any] = []
        self.unregistered: list[Any] = []
        self.subscribe_calls: list[tuple[str, int]] = []
        self.unsubscribe_calls: list[str] = []

    def register_participant(self, participant: Any) -> None:
        """Record a registration."""

        self.participants.append(participant)

    def unregister_participant(self, participant: Any) -> None:
        """Record an unregistration."""

        self.unregistered.append(participant)
        if participant in self.participants:
            self.participants.remove(participant)

    def is_registered(self, participant: Any) -> bool:
        """Return the configured reachability."""

        return self.registered

    def add_subscription(self, participant: Any, service: str, duration: int) -> None:
        """Record a subscription request."""

        self.subscribe_calls.append((service, duration))

    def remove_subscription(self, participant: Any, service: str) -> None:
        """Record an unsubscribe request."""

        self.unsubscribe_calls.append(service)

    def get_descriptor_url(self, participant: Any) -> str | None:
        """Return the configured descriptor URL."""

        return self.descriptor_url


class FakeTimer:
    """Timer that only runs its callback when fired by the test."""

    def __init__(self, delay: float, callback: Callable[[], None]) -> None:
        """Capture the delay and callback."""

        self.delay = delay
        self.callback = callback
        self.started = False
        self.cancelled = False

    def start(self) -> None:
        """Mark the timer as armed."""

        self.started = True

    def cancel(self) -> None:
        """Mark the timer as cancelled."""

        self.cancelled = True

    def fire(self) -> None:
        """Run the callback as the timer thread would."""

        self.callback()


class TimerRecorder:
    """Timer factory keeping every timer it creates."""

    def __init__(self) -> None:
        """Start with no timers."""

        self.timers: list[FakeTimer] = []

    def __call__(self, delay: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def last(self) -> FakeTimer:
        """Return the most recently created timer."""

        return self.timers[-1]


def build_attribute_response(pairs: Iterable[tuple[str, str]]) -> str:
    """Return a GetAttributes response carrying ``pairs`` double escaped."""

    inner = "".join(
        f"<attribute><name>{name}</name><value>{value}</value></attribute>"
        for name, value in pairs
    )
    escaped = html.escape(html.escape(inner, quote=False), quote=False)
    return (
        '<s:Envelope xmlns:s="http://schemas.xmlsoap.org/soap/envelope/"'
        ' s:encodingStyle="http://schemas.xmlsoap.org/soap/encoding/"><s:Body>'
        '<u:GetAttributesResponse xmlns:u="urn:Belkin:service:deviceevent:1">'
        f"<attributeList>{escaped}</attributeList>"
        "</u:GetAttributesResponse></s:Body></s:Envelope>"
    )


@pytest.fixture
def attribute_response() -> Callable[[Iterable[tuple[str, str]]], str]:
    """Return the GetAttributes response builder."""

    return build_attribute_response


@pytest.fixture
def registry() -> FakeRegistry:
    """Return a registry that sees the device."""

    return FakeRegistry()


@pytest.fixture
def participant() -> FakeParticipant:
    """Return a participant with a UDN."""

    return FakeParticipant()


@pytest.fixture
def timers() -> TimerRecorder:
    """Return a recording timer factory."""

    return TimerRecorder()
