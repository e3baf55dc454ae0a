"""HTTP transport for the OneSignal REST API.

The dispatcher only depends on the Transport protocol, so tests and
hosts can supply their own implementation.
"""

import logging
from typing import Any, Optional, Protocol, runtime_checkable

import httpx

from src.push_adapter.config import DEFAULT_PUSH_ADAPTER_CONFIG, PushAdapterConfig
from src.push_adapter.exceptions import TransportError
from src.push_adapter.models import TransportResponse

logger = logging.getLogger(__name__)


@runtime_checkable
class Transport(Protocol):
    """Sends a JSON body and reports the upstream status and raw body."""

    async def post(
        self,
        host: str,
        path: str,
        headers: dict[str, str],
        body: dict[str, Any],
    ) -> TransportResponse: ...


class HttpxTransport:
    """Transport backed by httpx.AsyncClient over HTTPS.

    Example:
        transport = HttpxTransport()
        resp = await transport.post("onesignal.com", "/api/v1/notifications", headers, body)
        await transport.aclose()
    """

    def __init__(
        self,
        config: Optional[PushAdapterConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._config = config or DEFAULT_PUSH_ADAPTER_CONFIG
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._config.request_timeout)
        return self._client

    def _url(self, host: str, path: str) -> str:
        if self._config.port == 443:
            return f"https://{host}{path}"
        return f"https://{host}:{self._config.port}{path}"

    async def post(
        self,
        host: str,
        path: str,
        headers: dict[str, str],
        body: dict[str, Any],
    ) -> TransportResponse:
        try:
            resp = await self._get_client().post(
                self._url(host, path), headers=headers, json=body
            )
        except httpx.HTTPError as e:
            logger.error(f"Error connecting to OneSignal: {e}")
            raise TransportError(f"Error connecting to OneSignal: {e}") from e
        return TransportResponse(status_code=resp.status_code, text=resp.text)

    async def aclose(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
        self._client = None
