"""
Tests for the HTTP request layer.
"""

import httpx
import pytest

from devfleet.api.request import AsyncRequest
from devfleet.config import SDKSettings
from devfleet.exceptions import DevFleetError, RequestError

API_URL = "https://api.devfleet.test"


@pytest.fixture
def request_layer(fake_api, settings) -> AsyncRequest:
    return AsyncRequest(settings, transport=httpx.MockTransport(fake_api.handler))


class TestBuildUrl:
    """Tests for URL building."""

    def test_relative_to_api_url(self, settings):
        request = AsyncRequest(settings)
        assert request.build_url("/config") == f"{API_URL}/config"
        assert request.build_url("config") == f"{API_URL}/config"

    def test_custom_base_url(self, settings):
        request = AsyncRequest(settings)
        url = request.build_url("/7cf/resinhup", base_url="https://actions.devices.test/v1/")
        assert url == "https://actions.devices.test/v1/7cf/resinhup"

    def test_absolute_url_kept(self, settings):
        request = AsyncRequest(settings)
        assert request.build_url("https://other.test/x") == "https://other.test/x"


class TestSend:
    """Tests for AsyncRequest.send."""

    @pytest.mark.asyncio
    async def test_json_response(self, fake_api, request_layer):
        fake_api.add("GET", "/config", json={"deviceUrlsBase": "devices.test"})

        response = await request_layer.send("GET", "/config")

        assert response.status_code == 200
        assert response.body == {"deviceUrlsBase": "devices.test"}

    @pytest.mark.asyncio
    async def test_text_response(self, fake_api, request_layer):
        fake_api.add("POST", "/api-key/device/5/device-key", text="abcdef")

        response = await request_layer.send("POST", "/api-key/device/5/device-key")

        assert response.body == "abcdef"

    @pytest.mark.asyncio
    async def test_bearer_token_and_body(self, fake_api, request_layer):
        fake_api.add("POST", "/supervisor/v1/blink", text="OK")

        await request_layer.send("POST", "/supervisor/v1/blink", body={"uuid": "abc"})

        sent = fake_api.last("POST")
        assert sent.headers["Authorization"] == "Bearer test-key"
        assert fake_api.body(sent) == {"uuid": "abc"}

    @pytest.mark.asyncio
    async def test_no_token_without_api_key(self, fake_api):
        request = AsyncRequest(
            SDKSettings(api_url=API_URL, api_key=None),
            transport=httpx.MockTransport(fake_api.handler),
        )
        fake_api.add("GET", "/config", json={})

        await request.send("GET", "/config")

        assert "Authorization" not in fake_api.last().headers

    @pytest.mark.asyncio
    async def test_header_override(self, fake_api, request_layer):
        fake_api.add("POST", "/device/register", json={"id": 1})

        await request_layer.send(
            "POST",
            "/device/register",
            headers={"Authorization": "Bearer provisioning-key"},
        )

        assert fake_api.last().headers["Authorization"] == "Bearer provisioning-key"

    @pytest.mark.asyncio
    async def test_error_status_raises(self, fake_api, request_layer):
        fake_api.add("GET", "/config", status=500, text="internal")

        with pytest.raises(RequestError) as exc_info:
            await request_layer.send("GET", "/config")

        error = exc_info.value
        assert error.status_code == 500
        assert error.body == "internal"
        assert error.method == "GET"
        assert error.url == f"{API_URL}/config"

    @pytest.mark.asyncio
    async def test_network_error_wrapped(self, settings):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        request = AsyncRequest(settings, transport=httpx.MockTransport(handler))

        with pytest.raises(DevFleetError) as exc_info:
            await request.send("GET", "/config")

        assert "Request failed" in str(exc_info.value)
        assert isinstance(exc_info.value._original_cause, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_timeout_wrapped(self, settings):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        request = AsyncRequest(settings, transport=httpx.MockTransport(handler))

        with pytest.raises(DevFleetError) as exc_info:
            await request.send("GET", "/config")

        assert "timed out" in str(exc_info.value)
