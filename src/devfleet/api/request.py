"""
HTTP request layer.

AsyncRequest sends authenticated JSON requests to the API (or to any other
base URL, such as the OS update actions service) with httpx. A fresh
AsyncClient is opened per call, so one instance can be driven from several
event loops (the synchronous client runs each call in its own loop).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import httpx

from devfleet.exceptions import DevFleetError, RequestError
from devfleet.logging import get_logger

if TYPE_CHECKING:
    from devfleet.config import SDKSettings

logger = get_logger(__name__)


@dataclass
class Response:
    """Decoded HTTP response."""

    status_code: int
    body: Any = None
    headers: dict[str, str] = field(default_factory=dict)


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    content_type = response.headers.get("content-type", "")
    if "json" in content_type:
        try:
            return response.json()
        except ValueError:
            return response.text
    return response.text


class AsyncRequest:
    """
    Authenticated request sender.

    Example:
        >>> request = AsyncRequest(settings)
        >>> response = await request.send("GET", "/config")
        >>> response.body["deviceUrlsBase"]
        'devices.devfleet.io'
    """

    def __init__(
        self,
        settings: SDKSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize request sender.

        Args:
            settings: SDK settings (api_url, api_key, request_timeout)
            transport: Optional httpx transport, e.g. httpx.MockTransport in tests
        """
        self._settings = settings
        self._transport = transport

    @property
    def api_url(self) -> str:
        return self._settings.api_url.rstrip("/")

    def build_url(self, url: str, base_url: str | None = None) -> str:
        if url.startswith(("http://", "https://")):
            return url
        base = (base_url or self.api_url).rstrip("/")
        return f"{base}/{url.lstrip('/')}"

    def _headers(self, extra: dict[str, str] | None) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._settings.api_key:
            headers["Authorization"] = f"Bearer {self._settings.api_key}"
        if extra:
            headers.update(extra)
        return headers

    async def send(
        self,
        method: str,
        url: str,
        *,
        base_url: str | None = None,
        body: Any = None,
        params: dict[str, Any] | None = None,
        timeout: float | None = None,
        headers: dict[str, str] | None = None,
    ) -> Response:
        """
        Send a request and decode the response.

        Args:
            method: HTTP method
            url: Path relative to base_url, or an absolute URL
            base_url: Base URL, defaults to settings.api_url
            body: JSON body
            params: Query parameters
            timeout: Timeout in seconds, defaults to settings.request_timeout
            headers: Extra headers (override the default Authorization)

        Returns:
            Response with decoded body

        Raises:
            RequestError: On a non-2xx status code
            DevFleetError: On network failures
        """
        full_url = self.build_url(url, base_url)
        method = method.upper()
        logger.debug("%s %s", method, full_url)

        try:
            async with httpx.AsyncClient(
                timeout=timeout or self._settings.request_timeout,
                transport=self._transport,
            ) as client:
                response = await client.request(
                    method,
                    full_url,
                    json=body,
                    params=params,
                    headers=self._headers(headers),
                )
        except httpx.TimeoutException as e:
            raise DevFleetError(f"Request timed out: {method} {full_url}", cause=e) from e
        except httpx.TransportError as e:
            raise DevFleetError(f"Request failed: {method} {full_url}: {e}", cause=e) from e

        decoded = _decode_body(response)
        if not response.is_success:
            logger.debug("%s %s -> %s", method, full_url, response.status_code)
            raise RequestError(
                response.status_code,
                decoded,
                method=method,
                url=full_url,
            )

        return Response(
            status_code=response.status_code,
            body=decoded,
            headers=dict(response.headers),
        )


__all__ = ["AsyncRequest", "Response"]
