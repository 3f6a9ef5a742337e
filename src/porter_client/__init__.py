"""Typed asyncio client for the Porter deployment platform REST API."""

__version__ = "0.1.0"

from porter_client.base_api import EndpointFunction, EndpointSpec, base_api  # noqa: E402
from porter_client.errors import (  # noqa: E402
    ApiError,
    ClientConstructionError,
    DecodeError,
    NetworkError,
    RequestFailedError,
)
from porter_client.models import ApiResponse  # noqa: E402
from porter_client.transport import ApiClient  # noqa: E402

__all__ = [
    "ApiClient",
    "ApiError",
    "ApiResponse",
    "ClientConstructionError",
    "DecodeError",
    "EndpointFunction",
    "EndpointSpec",
    "NetworkError",
    "RequestFailedError",
    "base_api",
]
