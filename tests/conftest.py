"""Shared test fixtures: a recording fake backend and clients wired to it."""

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable, Iterator
from typing import Any

import httpx
import pytest

from porter_client.config import ClientConfig
from porter_client.transport import ApiClient, set_default_client

TEST_BASE_URL = "http://porter.test"

Handler = Callable[[httpx.Request], httpx.Response | Awaitable[httpx.Response]]


class RecordingBackend:
    """Fake backend for httpx.MockTransport that records every request it receives.

    Responses are served from a queue; when the queue is empty the backend
    answers 200 with an empty JSON object. Setting ``error`` makes every request
    raise that exception instead.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.responses: list[httpx.Response] = []
        self.error: Exception | None = None

    def reply(self, status: int = 200, *, json: Any = None, content: bytes | None = None, **kwargs: Any) -> None:
        if content is not None:
            self.responses.append(httpx.Response(status, content=content, **kwargs))
        elif json is not None:
            self.responses.append(httpx.Response(status, json=json, **kwargs))
        else:
            self.responses.append(httpx.Response(status, **kwargs))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.responses:
            return self.responses.pop(0)
        return httpx.Response(200, json={})

    @property
    def last(self) -> httpx.Request:
        assert self.requests, "backend received no requests"
        return self.requests[-1]


def make_config(**overrides: Any) -> ClientConfig:
    """Create a ClientConfig pointing at the fake backend."""
    values: dict[str, Any] = {
        "base_url": TEST_BASE_URL,
        "timeout_seconds": 5.0,
        "verify_tls": True,
        "user_agent": "porter-client-tests",
    }
    values.update(overrides)
    return ClientConfig(**values)


def make_api_client(handler: Handler, **config_overrides: Any) -> ApiClient:
    """Create an ApiClient whose transport is served by ``handler``."""
    return ApiClient(make_config(**config_overrides), transport=httpx.MockTransport(handler))


@pytest.fixture
def backend() -> RecordingBackend:
    return RecordingBackend()


@pytest.fixture
async def api_client(backend: RecordingBackend) -> AsyncIterator[ApiClient]:
    client = make_api_client(backend)
    yield client
    await client.aclose()


@pytest.fixture
def default_client(api_client: ApiClient) -> Iterator[ApiClient]:
    """Install ``api_client`` as the process-wide default for the duration of a test."""
    set_default_client(api_client)
    yield api_client
    set_default_client(None)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove every PORTER_* environment variable the configuration reads."""
    for name in (
        "PORTER_API_URL",
        "PORTER_API_TIMEOUT",
        "PORTER_API_VERIFY_TLS",
        "PORTER_API_USER_AGENT",
        "PORTER_CLIENT_CONFIG",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
