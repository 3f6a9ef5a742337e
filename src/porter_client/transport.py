"""HTTP transport: one pooled httpx.AsyncClient shared by every endpoint function."""

from __future__ import annotations

import asyncio
from typing import Any

import httpx
import structlog

from porter_client.config import ClientConfig, load_client_config, validate_client_config

log = structlog.get_logger()


class ApiClient:
    """Wrapper around ``httpx.AsyncClient`` bound to one backend base URL.

    Cookies the backend sets (the session cookie) are kept on the client and sent
    with later requests, so calls made without a bearer token still authenticate
    through the session.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        cookies: dict[str, str] | None = None,
    ) -> None:
        self._config = config or load_client_config()
        validate_client_config(self._config)
        self._transport = transport
        self._cookies = cookies
        self._http: httpx.AsyncClient | None = None

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def cookies(self) -> httpx.Cookies:
        return self._get_http().cookies

    def _get_http(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient(
                base_url=self._config.base_url,
                timeout=httpx.Timeout(self._config.timeout_seconds),
                verify=self._config.verify_tls,
                headers={"User-Agent": self._config.user_agent},
                cookies=self._cookies,
                transport=self._transport,
            )
        return self._http

    async def send(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str],
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> httpx.Response:
        """Issue exactly one request and return the raw response.

        The whole exchange is bounded by ``timeout_seconds``, on top of httpx's
        per-phase timeouts, so a backend that trickles bytes cannot hold the call open.

        Raises:
            httpx.TimeoutException: If the request does not complete in time.
            httpx.TransportError: On any other transport failure.
        """
        http = self._get_http()
        request = http.build_request(method, url, headers=headers, params=params, json=json)
        try:
            async with asyncio.timeout(self._config.timeout_seconds):
                return await http.send(request)
        except TimeoutError:
            raise httpx.TimeoutException(
                f"no response within {self._config.timeout_seconds}s", request=request
            ) from None

    async def aclose(self) -> None:
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


_default_client: ApiClient | None = None


def get_default_client() -> ApiClient:
    """Return the process-wide client, creating it from configuration on first use."""
    global _default_client
    if _default_client is None:
        _default_client = ApiClient()
        log.debug("default_client_created", base_url=_default_client.config.base_url)
    return _default_client


def set_default_client(client: ApiClient | None) -> None:
    """Replace the process-wide client. The previous one is not closed."""
    global _default_client
    _default_client = client


async def close_default_client() -> None:
    global _default_client
    if _default_client is not None:
        await _default_client.aclose()
        _default_client = None
