"""Error taxonomy shared by every endpoint function."""

from __future__ import annotations

from typing import Any


class ApiError(Exception):
    """Base class for every failure an endpoint function can deliver."""

    kind: str = "api"


class ClientConstructionError(ApiError):
    """The request could not be built; no network I/O was attempted."""

    kind = "construction"

    def __init__(self, endpoint: str, message: str) -> None:
        self.endpoint = endpoint
        self.message = message
        super().__init__(f"{endpoint}: {message}")


class NetworkError(ApiError):
    """Transport failure (DNS, refused, reset) or timeout."""

    kind = "network"

    def __init__(self, url: str, message: str, *, timeout: bool = False) -> None:
        self.url = url
        self.message = message
        self.timeout = timeout
        label = "timed out" if timeout else "network error"
        super().__init__(f"{label} for {url}: {message}")


class RequestFailedError(ApiError):
    """The backend answered with a status outside [200, 300).

    ``body`` holds the parsed JSON payload, the raw text when the payload is not
    JSON, or None when the response was empty.
    """

    kind = "request_failed"

    def __init__(self, status: int, body: Any, url: str = "") -> None:
        self.status = status
        self.body = body
        self.url = url
        super().__init__(f"request to {url or '<unknown>'} failed with HTTP {status}")


class DecodeError(ApiError):
    """A successful response carried a body that is not valid JSON."""

    kind = "decode"

    def __init__(self, status: int, raw: str, message: str, url: str = "") -> None:
        self.status = status
        self.raw = raw
        self.message = message
        self.url = url
        super().__init__(f"could not decode HTTP {status} response from {url or '<unknown>'}: {message}")
