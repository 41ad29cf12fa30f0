"""Poll loop keeping a Holmes appliance and its subscription in sync."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from datetime import timedelta
from enum import Enum
from typing import Any, Protocol

from .const import DEFAULT_REFRESH_INTERVAL
from .registry import DeviceRegistry, SubscriptionParticipant
from .status import DeviceStatus, StatusDetail
from .subscription import SubscriptionManager


class TimerHandle(Protocol):
    """Subset of ``threading.Timer`` used by the poll loop."""

    def start(self) -> None:
        """Arm the timer."""

    def cancel(self) -> None:
        """Stop the timer if it has not fired yet."""


TimerFactory = Callable[[float, Callable[[], None]], TimerHandle]


def _create_timer(delay: float, callback: Callable[[], None]) -> TimerHandle:
    """Return a daemon ``threading.Timer`` running ``callback`` after ``delay``."""

    timer = threading.Timer(delay, callback)
    timer.daemon = True
    return timer


class PollState(str, Enum):
    """Lifecycle of the poll loop."""

    UNINITIALIZED = "uninitialized"
    SCHEDULED = "scheduled"
    DISPOSED = "disposed"
    CONFIGURATION_ERROR = "configuration_error"


class HolmesPollCoordinator:
    """Own the periodic poll of one appliance.

    Each tick checks that the registry sees the device, refreshes the channel
    state and keeps the event subscription alive. Ticks and the unsubscribe
    performed on dispose are serialised by a single job lock.
    """

    def __init__(
        self,
        *,
        participant: SubscriptionParticipant,
        registry: DeviceRegistry,
        subscriptions: SubscriptionManager,
        refresh: Callable[[], Any],
        resolve_host: Callable[[], str],
        report_status: Callable[[DeviceStatus], None],
        refresh_interval: timedelta | None = None,
        timer_factory: TimerFactory | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialise the poll loop with its collaborators."""

        self._participant = participant
        self._registry = registry
        self._subscriptions = subscriptions
        self._refresh = refresh
        self._resolve_host = resolve_host
        self._report_status = report_status
        self.update_interval = refresh_interval or DEFAULT_REFRESH_INTERVAL
        self._timer_factory = timer_factory or _create_timer
        self._logger = logger or logging.getLogger(__name__)

        self._job_lock = threading.RLock()
        self._handle_lock = threading.RLock()
        self._job: TimerHandle | None = None
        self._state = PollState.UNINITIALIZED

    @property
    def state(self) -> PollState:
        """Return the lifecycle state of the loop."""

        return self._state

    @property
    def is_scheduled(self) -> bool:
        """Return True while a poll timer is armed."""

        return self._job is not None

    @property
    def _refresh_interval_seconds(self) -> float:
        """Expose the refresh interval as seconds."""

        return self.update_interval.total_seconds()

    def initialize(self) -> bool:
        """Register with the registry and start polling.

        Returns False when the device identity is missing; the loop then stays
        in the configuration error state.
        """

        udn = self._participant.udn
        if not udn:
            self._logger.debug("Cannot initialize poll loop: UDN not set")
            self._state = PollState.CONFIGURATION_ERROR
            self._report_status(
                DeviceStatus.offline(StatusDetail.CONFIGURATION_ERROR, "missing UDN")
            )
            return False

        with self._handle_lock:
            if self._state is PollState.SCHEDULED:
                return True
            self._logger.debug("Initializing poll loop for UDN '%s'", udn)
            self._registry.register_participant(self._participant)
            self._resolve_host()
            self._report_status(DeviceStatus.online())
            self._state = PollState.SCHEDULED
            self._schedule(0)
        return True

    def dispose(self) -> None:
        """Stop polling, drop the subscription and leave the registry."""

        self._logger.debug("Disposing poll loop for UDN '%s'", self._participant.udn)
        with self._handle_lock:
            job = self._job
            if job is not None:
                job.cancel()
            self._job = None
            if self._state is PollState.SCHEDULED:
                self._state = PollState.DISPOSED

        with self._job_lock:
            self._subscriptions.remove_subscription()

    def poll(self) -> None:
        """Run one tick; skipped once the loop is disposed."""

        with self._job_lock:
            if self._job is None:
                return
            udn = self._participant.udn
            try:
                self._logger.debug("Polling %s", udn)
                self._resolve_host()
                if not self._registry.is_registered(self._participant):
                    self._logger.debug("UPnP device %s not yet registered", udn)
                    self._report_status(DeviceStatus.pending(udn))
                    self._subscriptions.reset()
                    return
                self._report_status(DeviceStatus.online())
                self._refresh()
                self._subscriptions.add_subscription()
            except Exception as err:  # noqa: BLE001
                self._logger.warning("Poll of %s failed: %s", udn, err, exc_info=True)

    def _schedule(self, delay: float) -> None:
        timer: TimerHandle | None = None

        def _tick() -> None:
            self._run(timer)

        timer = self._timer_factory(delay, _tick)
        self._job = timer
        timer.start()

    def _run(self, timer: TimerHandle | None) -> None:
        # Only the timer currently held as the job may poll and re-arm.
        if self._job is not timer:
            return
        self.poll()
        with self._handle_lock:
            if self._state is PollState.SCHEDULED and self._job is timer:
                self._schedule(self._refresh_interval_seconds)
