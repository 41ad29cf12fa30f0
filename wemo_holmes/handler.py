"""Handler façade for a single Holmes appliance."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from enum import Enum
from typing import Any
from urllib.parse import urlparse

from .catalog import AttributeCatalog
from .codec import (
    AttributeListError,
    build_set_attributes_request,
    build_soap_action,
    build_state_request,
    decode_response,
    encode_command,
)
from .config import HolmesConfig
from .const import DEVICE_ACTION_SERVICE, GET_ATTRIBUTES_ACTION, SET_ATTRIBUTES_ACTION
from .coordinator import HolmesPollCoordinator, TimerFactory
from .device_types import BaseDevice, DeviceVariant, resolve_device
from .http_client import WemoCommunicationError, WemoHttpClient
from .registry import DeviceRegistry
from .state import ChannelState, StateListener
from .status import UNKNOWN_STATUS, DeviceStatus, StatusDetail
from .subscription import SubscriptionManager

_LOGGER = logging.getLogger(__name__)

StatusListener = Callable[[DeviceStatus], None]


class RefreshType(Enum):
    """Marker command asking the handler to re-read the device state."""

    REFRESH = "REFRESH"


REFRESH = RefreshType.REFRESH


class UnsupportedCommand(ValueError):
    """Raised in strict mode when a command has no attribute mapping."""


class HolmesHandler:
    """Synchronise one Holmes purifier, heater or humidifier.

    The handler is the registry participant for its device: it receives
    subscription outcomes and pushed values, runs the poll loop and turns
    channel commands into SetAttributes calls.
    """

    def __init__(
        self,
        config: HolmesConfig,
        *,
        registry: DeviceRegistry,
        http_client: WemoHttpClient | None = None,
        on_status: StatusListener | None = None,
        on_state: StateListener | None = None,
        timer_factory: TimerFactory | None = None,
        catalog: AttributeCatalog | None = None,
    ) -> None:
        """Wire the handler to its registry, transport and listeners."""

        self.config = config
        self.device: BaseDevice = resolve_device(config.thing_type, config.udn)
        self._registry = registry
        self._http = http_client or WemoHttpClient(timeout=config.request_timeout)
        self._catalog = catalog
        self._on_status = on_status
        self._status = UNKNOWN_STATUS
        self._status_lock = threading.Lock()
        self._host = config.host
        self._state_map: dict[str, str] = {}
        self._state_map_lock = threading.Lock()

        self.channel_state = ChannelState(self.device)
        if on_state is not None:
            self.channel_state.add_listener(on_state)

        self.subscriptions = SubscriptionManager(
            registry=registry,
            participant=self,
            duration=config.subscription_duration,
            logger=_LOGGER,
        )
        self.coordinator = HolmesPollCoordinator(
            participant=self,
            registry=registry,
            subscriptions=self.subscriptions,
            refresh=self.refresh_state,
            resolve_host=self.resolve_host,
            report_status=self._update_status,
            refresh_interval=config.refresh_interval,
            timer_factory=timer_factory,
            logger=_LOGGER,
        )

    @property
    def udn(self) -> str | None:
        """Return the unique device name of the appliance."""

        return self.config.udn

    @property
    def variant(self) -> DeviceVariant:
        """Return the appliance variant."""

        return self.device.variant

    @property
    def status(self) -> DeviceStatus:
        """Return the last reported status."""

        return self._status

    @property
    def host(self) -> str:
        """Return the host address last resolved for the device."""

        return self._host

    @property
    def channel_states(self) -> dict[str, Any]:
        """Return a snapshot of the decoded channel values."""

        return self.channel_state.values

    @property
    def state_map(self) -> dict[str, str]:
        """Return a copy of the raw values pushed by the device."""

        with self._state_map_lock:
            return dict(self._state_map)

    def initialize(self) -> bool:
        """Start the poll loop; False when the UDN is missing."""

        return self.coordinator.initialize()

    def dispose(self) -> None:
        """Stop polling, unsubscribe, discard state and release the HTTP client."""

        self.coordinator.dispose()
        self.channel_state.clear()
        with self._state_map_lock:
            self._state_map.clear()
        self._http.close()

    def resolve_host(self) -> str:
        """Return the device host, preferring the registry's descriptor URL."""

        descriptor = self._registry.get_descriptor_url(self)
        host = urlparse(descriptor).hostname if descriptor else None
        self._host = host or self.config.host
        return self._host

    def refresh_state(self) -> bool:
        """Read every attribute from the device and update the channels."""

        host = self._host
        if not host:
            _LOGGER.error(
                "Failed to get actual state for device %s: IP address missing", self.udn
            )
            self._update_status(
                DeviceStatus.offline(StatusDetail.COMMUNICATION_ERROR, "missing IP")
            )
            return False

        url = self._control_url(host)
        if url is None:
            return False

        try:
            response = self._http.execute(
                url,
                build_soap_action(DEVICE_ACTION_SERVICE, GET_ATTRIBUTES_ACTION),
                build_state_request(GET_ATTRIBUTES_ACTION, DEVICE_ACTION_SERVICE),
            )
            updates = decode_response(response, self.variant, catalog=self._catalog)
        except (WemoCommunicationError, AttributeListError) as err:
            _LOGGER.debug("Failed to get attributes for device %s at %s: %s", self.udn, url, err)
            self._update_status(
                DeviceStatus.offline(StatusDetail.COMMUNICATION_ERROR, str(err))
            )
            return False

        changed = self.channel_state.merge(updates)
        _LOGGER.debug("Updated channels %s for device %s", changed, self.udn)
        self._update_status(DeviceStatus.online())
        return True

    def handle_command(self, channel: str, command: Any) -> None:
        """Send ``command`` for ``channel`` to the device.

        ``REFRESH`` re-reads the device state. Commands without an attribute
        mapping send an empty attribute list unless ``strict_commands`` is set,
        in which case ``UnsupportedCommand`` is raised.
        """

        host = self.resolve_host()
        if not host:
            _LOGGER.error(
                "Failed to send command '%s' for device %s: IP address missing",
                command,
                self.udn,
            )
            self._update_status(
                DeviceStatus.offline(StatusDetail.COMMUNICATION_ERROR, "missing IP")
            )
            return

        if isinstance(command, RefreshType):
            self.refresh_state()
            return

        pair = encode_command(channel, command, self.variant, catalog=self._catalog)
        if pair is None:
            if self.config.strict_commands:
                _LOGGER.warning(
                    "Rejecting command %r for channel %s on %s device %s",
                    command,
                    channel,
                    self.variant.value,
                    self.udn,
                )
                raise UnsupportedCommand(
                    f"{channel}={command!r} is not supported by {self.variant.value}"
                )
            _LOGGER.debug(
                "No attribute mapped for %s=%r on %s; sending empty attribute",
                channel,
                command,
                self.udn,
            )

        url = self._control_url(host)
        if url is None:
            return

        try:
            self._http.execute(
                url,
                build_soap_action(DEVICE_ACTION_SERVICE, SET_ATTRIBUTES_ACTION),
                build_set_attributes_request(pair, DEVICE_ACTION_SERVICE),
            )
        except WemoCommunicationError as err:
            _LOGGER.debug("Failed to send command '%s' to %s: %s", command, url, err)
            self._update_status(
                DeviceStatus.offline(StatusDetail.COMMUNICATION_ERROR, str(err))
            )
            return
        self._update_status(DeviceStatus.online())

    def on_subscription_result(self, service: str | None, succeeded: bool) -> None:
        """Record the registry's answer to a subscription request."""

        if service is None:
            return
        self.subscriptions.record_result(service, succeeded)

    def on_value_received(
        self, variable: str | None, value: str | None, service: str | None = None
    ) -> None:
        """Store a pushed value verbatim and mark the device online."""

        _LOGGER.debug(
            "Received pair '%s':'%s' (service '%s') for device %s",
            variable,
            value,
            service,
            self.udn,
        )
        self._update_status(DeviceStatus.online())
        if variable is None or value is None:
            return
        with self._state_map_lock:
            self._state_map[variable] = value

    def _control_url(self, host: str) -> str | None:
        url = self._http.build_url(host, DEVICE_ACTION_SERVICE, self.config.port)
        if url is None:
            _LOGGER.error("Failed to build control URL for device %s at %s", self.udn, host)
            self._update_status(
                DeviceStatus.offline(
                    StatusDetail.COMMUNICATION_ERROR, "URL cannot be created"
                )
            )
        return url

    def _update_status(self, status: DeviceStatus) -> None:
        with self._status_lock:
            if status == self._status:
                return
            self._status = status
        _LOGGER.debug("Device %s status changed to %s", self.udn, status)
        if self._on_status is not None:
            self._on_status(status)
