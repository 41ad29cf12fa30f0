"""Tests for the SOAP HTTP transport."""

from __future__ import annotations

import httpx
import pytest

from wemo_holmes.http_client import WemoCommunicationError, WemoHttpClient


def _client(handler) -> tuple[WemoHttpClient, httpx.Client]:
    http = httpx.Client(transport=httpx.MockTransport(handler))
    return WemoHttpClient(client=http, port_probe=lambda host, port: False), http


def test_execute_posts_soap_request() -> None:
    """Requests should carry the SOAP headers and body."""

    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, text="<ok/>")

    client, _ = _client(handler)

    body = client.execute(
        "http://192.168.1.40:49153/upnp/control/deviceevent1",
        '"urn:Belkin:service:deviceevent:1#GetAttributes"',
        "<envelope/>",
    )

    assert body == "<ok/>"
    request = captured[0]
    assert request.method == "POST"
    assert request.headers["SOAPACTION"] == '"urn:Belkin:service:deviceevent:1#GetAttributes"'
    assert request.headers["Content-Type"] == 'text/xml; charset="utf-8"'
    assert request.content == b"<envelope/>"


def test_http_errors_are_wrapped() -> None:
    """Non-success responses surface as communication errors."""

    client, _ = _client(lambda request: httpx.Response(500))

    with pytest.raises(WemoCommunicationError):
        client.execute("http://192.168.1.40:49153/upnp/control/deviceevent1", "a", "b")


def test_connection_errors_are_wrapped() -> None:
    """Transport failures surface as communication errors."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    client, _ = _client(handler)

    with pytest.raises(WemoCommunicationError, match="unreachable"):
        client.execute("http://192.168.1.40:49153/upnp/control/deviceevent1", "a", "b")


def test_build_url_with_configured_port() -> None:
    """A configured port is used without probing."""

    client = WemoHttpClient(port_probe=lambda host, port: pytest.fail("probed"))

    assert (
        client.build_url("192.168.1.40", "deviceevent", 49153)
        == "http://192.168.1.40:49153/upnp/control/deviceevent1"
    )


def test_build_url_probes_port_range() -> None:
    """The first answering WeMo port is used."""

    probed: list[int] = []

    def probe(host: str, port: int) -> bool:
        probed.append(port)
        return port == 49154

    client = WemoHttpClient(port_probe=probe)

    assert (
        client.build_url("192.168.1.40", "deviceevent")
        == "http://192.168.1.40:49154/upnp/control/deviceevent1"
    )
    assert probed == [49151, 49152, 49153, 49154]


def test_build_url_without_host_or_port() -> None:
    """No URL can be built without a host or an answering port."""

    client = WemoHttpClient(port_probe=lambda host, port: False)

    assert client.build_url("", "deviceevent", 49153) is None
    assert client.build_url("192.168.1.40", "deviceevent") is None


def test_close_leaves_injected_client_open() -> None:
    """Injected httpx clients belong to the caller."""

    client, http = _client(lambda request: httpx.Response(200))

    client.close()

    assert not http.is_closed
