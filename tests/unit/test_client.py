"""Tests for the Targon deploy client."""

import json

import httpx
import pytest
import respx

from openclaw_installer.client.auth import BearerAuth
from openclaw_installer.client.errors import (
    ConfigurationError,
    DeployAPIError,
    DeployConnectionError,
)
from openclaw_installer.client.targon import TargonClient
from openclaw_installer.config.models import DeploymentRequest, PortSpec
from openclaw_installer.config.settings import InstallerSettings

URL = "https://api.targon.com/v1/deployments"


class ChunkedStream(httpx.SyncByteStream):
    def __init__(self, chunks: list[bytes]) -> None:
        self.chunks = chunks

    def __iter__(self):
        yield from self.chunks


def _ticking_clock(step: int):
    ticks = iter(range(0, 10_000, step))
    return lambda: float(next(ticks))


def _request() -> DeploymentRequest:
    return DeploymentRequest(
        name="my-bot", resource_name="cpu-small", ports=[PortSpec(port=18789)],
    )


class TestAuth:
    def test_bearer_auth(self):
        auth = BearerAuth("tk-123")
        request = httpx.Request("GET", "https://example.com")
        modified = next(auth.auth_flow(request))
        assert modified.headers["Authorization"] == "Bearer tk-123"


class TestClientSetup:
    def test_requires_api_key(self):
        with pytest.raises(ConfigurationError, match="API key"):
            TargonClient(InstallerSettings())

    def test_timeouts(self, settings):
        with TargonClient(settings) as client:
            timeout = client._client.timeout
            assert timeout.connect == 10.0
            assert timeout.read == 60.0


class TestSubmit:
    @respx.mock
    def test_submit_success(self, settings):
        route = respx.post(URL).mock(
            return_value=httpx.Response(201, json={"DeploymentUID": "abc123"})
        )
        with TargonClient(settings) as client:
            resp = client.submit(_request())
        assert resp.status_code == 201
        assert resp.body == {"DeploymentUID": "abc123"}
        sent = route.calls.last.request
        assert sent.headers["Authorization"] == "Bearer targon-test-key"
        assert sent.headers["Content-Type"] == "application/json"
        body = json.loads(sent.content)
        assert body["ports"] == [{"port": 18789, "protocol": "TCP", "routingType": "Proxy"}]
        assert body["image"] == "ghcr.io/manifold-inc/openclaw/openclaw:latest"

    @respx.mock
    def test_submit_non_json_body(self, settings):
        respx.post(URL).mock(return_value=httpx.Response(200, text="ok"))
        with TargonClient(settings) as client:
            resp = client.submit(_request())
        assert resp.body == {}
        assert resp.text == "ok"

    @respx.mock
    def test_submit_server_error(self, settings):
        respx.post(URL).mock(
            return_value=httpx.Response(500, json={"error": "quota exceeded"})
        )
        with TargonClient(settings) as client, pytest.raises(DeployAPIError) as exc_info:
            client.submit(_request())
        assert exc_info.value.status_code == 500
        assert "quota exceeded" in str(exc_info.value)
        assert "HTTP 500" in str(exc_info.value)

    @respx.mock
    def test_submit_raw_error_body(self, settings):
        respx.post(URL).mock(return_value=httpx.Response(502, text="Bad Gateway"))
        with TargonClient(settings) as client, pytest.raises(
            DeployAPIError, match="Bad Gateway",
        ):
            client.submit(_request())

    @respx.mock
    def test_submit_connect_error(self, settings):
        respx.post(URL).mock(side_effect=httpx.ConnectError("refused"))
        with TargonClient(settings) as client, pytest.raises(
            DeployConnectionError, match="Network error",
        ):
            client.submit(_request())

    @respx.mock
    def test_submit_timeout(self, settings):
        respx.post(URL).mock(side_effect=httpx.ReadTimeout("slow"))
        with TargonClient(settings) as client, pytest.raises(
            DeployConnectionError, match="timed out",
        ):
            client.submit(_request())

    @respx.mock
    def test_slow_body_hits_overall_deadline(self, settings):
        respx.post(URL).mock(
            return_value=httpx.Response(
                201, stream=ChunkedStream([b'{"Deployment', b'UID": ', b'"abc"}']),
            )
        )
        # Every chunk arrives 40s after the previous one.
        client = TargonClient(settings, clock=_ticking_clock(40))
        with client, pytest.raises(DeployConnectionError, match="timed out"):
            client.submit(_request())

    @respx.mock
    def test_chunked_body_within_deadline(self, settings):
        respx.post(URL).mock(
            return_value=httpx.Response(
                201, stream=ChunkedStream([b'{"Deployment', b'UID": ', b'"abc"}']),
            )
        )
        with TargonClient(settings, clock=_ticking_clock(1)) as client:
            response = client.submit(_request())
        assert response.body == {"DeploymentUID": "abc"}

    @respx.mock
    def test_no_retry(self, settings):
        route = respx.post(URL).mock(side_effect=httpx.ConnectError("refused"))
        with TargonClient(settings) as client, pytest.raises(DeployConnectionError):
            client.submit(_request())
        assert route.call_count == 1


class TestStatus:
    @respx.mock
    def test_get_status(self, settings):
        route = respx.get(f"{URL}/abc123").mock(
            return_value=httpx.Response(
                200, json={"PortToDNSMapping": {"18789": "foo.example.com"}},
            )
        )
        with TargonClient(settings) as client:
            data = client.get_status("abc123")
        assert data["PortToDNSMapping"] == {"18789": "foo.example.com"}
        assert route.calls.last.request.headers["Authorization"] == "Bearer targon-test-key"

    @respx.mock
    def test_get_status_not_found(self, settings):
        respx.get(f"{URL}/nope").mock(return_value=httpx.Response(404, text="missing"))
        with TargonClient(settings) as client, pytest.raises(DeployAPIError):
            client.get_status("nope")

    @respx.mock
    def test_fetch_status_http_error_is_warning(self, settings, capsys):
        respx.get(f"{URL}/abc").mock(return_value=httpx.Response(503))
        with TargonClient(settings) as client:
            assert client.fetch_status("abc") is None
        assert "HTTP 503" in capsys.readouterr().err

    @respx.mock
    def test_fetch_status_transport_error_is_warning(self, settings, capsys):
        respx.get(f"{URL}/abc").mock(side_effect=httpx.ConnectError("down"))
        with TargonClient(settings) as client:
            assert client.fetch_status("abc") is None
        assert "Could not fetch deployment status" in capsys.readouterr().err

    @respx.mock
    def test_status_url_strips_trailing_slash(self):
        settings = InstallerSettings(deploy_url=f"{URL}/", api_key="k")
        respx.get(f"{URL}/abc").mock(return_value=httpx.Response(200, json={}))
        with TargonClient(settings) as client:
            assert client.get_status("abc") == {}
