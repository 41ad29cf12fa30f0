"""HTTP transport for SOAP calls to WeMo devices."""

from __future__ import annotations

import logging
import socket
from collections.abc import Callable

import httpx

from .const import DEFAULT_REQUEST_TIMEOUT, HTTP_CONTENT_TYPE, PORT_RANGE

_LOGGER = logging.getLogger(__name__)

PortProbe = Callable[[str, int], bool]


class WemoCommunicationError(RuntimeError):
    """Raised when a SOAP call to the device fails."""


def _create_http_client(timeout: float) -> httpx.Client:
    """Return an httpx client configured for local device calls."""

    return httpx.Client(timeout=timeout)


def _probe_port(host: str, port: int, timeout: float = DEFAULT_REQUEST_TIMEOUT) -> bool:
    """Return True when a TCP connection to ``host:port`` succeeds."""

    try:
        with socket.create_connection((host, port), timeout=timeout):
            return True
    except OSError:
        return False


class WemoHttpClient:
    """Send SOAP envelopes to the device control endpoints."""

    def __init__(
        self,
        *,
        client: httpx.Client | None = None,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        port_probe: PortProbe | None = None,
    ) -> None:
        """Bind an optional httpx client and the port probing strategy."""

        self._timeout = timeout
        self._client = client
        self._owns_client = client is None
        self._port_probe = port_probe or _probe_port

    def _require_http_client(self) -> httpx.Client:
        if self._client is None:
            self._client = _create_http_client(self._timeout)
        return self._client

    def build_url(self, host: str, service: str, port: int | None = None) -> str | None:
        """Return the control URL for ``service`` or ``None`` if unreachable.

        When ``port`` is not given the WeMo port range is probed in order.
        """

        if not host:
            return None
        if port is None:
            port = next(
                (candidate for candidate in PORT_RANGE if self._port_probe(host, candidate)),
                None,
            )
            if port is None:
                _LOGGER.debug("No WeMo control port answered on %s", host)
                return None
        return f"http://{host}:{port}/upnp/control/{service}1"

    def execute(self, url: str, soap_action: str, content: str) -> str:
        """POST ``content`` to ``url`` and return the response body."""

        client = self._require_http_client()
        headers = {"Content-Type": HTTP_CONTENT_TYPE, "SOAPACTION": soap_action}
        try:
            response = client.post(
                url,
                content=content.encode("utf-8"),
                headers=headers,
                timeout=self._timeout,
            )
            response.raise_for_status()
        except httpx.HTTPError as err:
            _LOGGER.debug("SOAP call %s to %s failed: %s", soap_action, url, err)
            raise WemoCommunicationError(f"SOAP call to {url} failed: {err}") from err

        if _LOGGER.isEnabledFor(logging.DEBUG):
            _LOGGER.debug("SOAP call %s to %s returned %s", soap_action, url, response.text)
        return response.text

    def close(self) -> None:
        """Close the underlying httpx client if this instance created it."""

        if self._client is not None and self._owns_client:
            self._client.close()
            self._client = None
