"""Request builder: turns an endpoint description into a typed, independently invokable function.

Every backend operation is declared once with :func:`base_api`. Calling the
resulting :class:`EndpointFunction` performs exactly one HTTP round trip and
delivers the outcome through one of two conventions:

* promise style: no callback is given and the call returns an ``asyncio.Future``
  that resolves with an :class:`ApiResponse` or rejects with an :class:`ApiError`;
* callback style: ``callback(error, response)`` is invoked exactly once from the
  event loop, after the call has returned.

Both conventions share the same request construction, execution and error
normalization; they differ only in how the result is handed back.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, Literal, TypeVar

import httpx
import structlog
from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from porter_client.errors import ApiError, ClientConstructionError, DecodeError, NetworkError, RequestFailedError
from porter_client.models import ApiResponse, EmptyParams, ParamsModel
from porter_client.transport import ApiClient, get_default_client
from porter_client.urls import UrlTemplate, resolve_url

log = structlog.get_logger()

HttpMethod = Literal["GET", "POST", "PUT", "DELETE"]
_METHODS = {"GET", "POST", "PUT", "DELETE"}

BodyT = TypeVar("BodyT", bound=ParamsModel)
PathT = TypeVar("PathT", bound=ParamsModel)

Callback = Callable[[Exception | None, ApiResponse | None], None]

# Strong references to callback-style calls, which nobody else awaits.
_in_flight: set[asyncio.Future[ApiResponse]] = set()


@dataclass(frozen=True)
class EndpointSpec(Generic[BodyT, PathT]):
    """Immutable description of one backend operation."""

    name: str
    method: HttpMethod
    url_template: UrlTemplate
    body_model: type[BodyT]
    path_model: type[PathT]


@dataclass(frozen=True)
class PreparedRequest:
    """Everything needed to issue one request, computed before any I/O."""

    method: str
    url: str
    headers: dict[str, str]
    params: dict[str, Any] | None
    json: Any


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


def _describe_validation_error(error: ValidationError) -> str:
    parts = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail["loc"]) or "<root>"
        parts.append(f"{location}: {detail['msg']}")
    return "; ".join(parts)


def build_headers(token: str | None, *, has_body: bool) -> dict[str, str]:
    """Build request headers. The bearer credential is sent only for a non-empty token."""
    headers = {"Accept": "application/json"}
    if has_body:
        headers["Content-Type"] = "application/json"
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def _decode_error_body(response: httpx.Response) -> Any:
    if not response.content.strip():
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def normalize_response(response: httpx.Response, url: str) -> ApiResponse:
    """Reduce a raw response to an ApiResponse or raise the matching ApiError.

    Raises:
        RequestFailedError: If the status is outside [200, 300).
        DecodeError: If a successful response carries malformed JSON.
    """
    status = response.status_code
    if not 200 <= status < 300:
        raise RequestFailedError(status, _decode_error_body(response), url)

    if not response.content.strip():
        return ApiResponse(status=status, data=None)
    try:
        data = response.json()
    except ValueError as e:
        raise DecodeError(status, response.text, str(e), url) from e
    return ApiResponse(status=status, data=data)


class EndpointFunction(Generic[BodyT, PathT]):
    """Callable bound to one EndpointSpec. Holds no mutable state."""

    __slots__ = ("_spec",)

    def __init__(self, spec: EndpointSpec[BodyT, PathT]) -> None:
        self._spec = spec

    @property
    def spec(self) -> EndpointSpec[BodyT, PathT]:
        return self._spec

    @property
    def name(self) -> str:
        return self._spec.name

    def __repr__(self) -> str:
        return f"<EndpointFunction {self._spec.name} {self._spec.method}>"

    def _coerce(self, model: type[ParamsModel], value: Any, role: str) -> Any:
        if value is None:
            value = {}
        if isinstance(value, model):
            return value
        if not isinstance(value, Mapping):
            msg = f"{role} parameters must be a mapping or {model.__name__}, got {type(value).__name__}"
            raise ClientConstructionError(self._spec.name, msg)
        try:
            return model.model_validate(dict(value))
        except ValidationError as e:
            msg = f"invalid {role} parameters: {_describe_validation_error(e)}"
            raise ClientConstructionError(self._spec.name, msg) from e

    def prepare(
        self,
        token: str | None,
        body_params: BodyT | Mapping[str, Any] | None,
        path_params: PathT | Mapping[str, Any] | None,
    ) -> PreparedRequest:
        """Validate parameters, resolve the URL and lay out headers and body.

        GET sends body parameters as the query string. POST and PUT always send a
        JSON body; DELETE sends one only when it is non-empty.

        Raises:
            ClientConstructionError: If a parameter is missing or invalid, the URL template
                fails, or the body cannot be serialized to JSON.
        """
        spec = self._spec
        body = self._coerce(spec.body_model, body_params, "body")
        path = self._coerce(spec.path_model, path_params, "path")
        url = resolve_url(spec.url_template, path, spec.name)

        try:
            wire = body.to_wire()
        except (PydanticSerializationError, ValueError) as e:
            raise ClientConstructionError(spec.name, f"body could not be serialized: {e}") from e
        params: dict[str, Any] | None = None
        payload: Any = None
        if spec.method == "GET":
            params = wire or None
        elif spec.method != "DELETE" or wire:
            payload = wire

        return PreparedRequest(
            method=spec.method,
            url=url,
            headers=build_headers(token, has_body=payload is not None),
            params=params,
            json=payload,
        )

    async def _execute(self, request: PreparedRequest, client: ApiClient) -> ApiResponse:
        start = time.monotonic()
        try:
            response = await client.send(
                request.method,
                request.url,
                headers=request.headers,
                params=request.params,
                json=request.json,
            )
        except httpx.TimeoutException as e:
            log.warning(
                "request_failed",
                endpoint=self._spec.name,
                method=request.method,
                url=request.url,
                kind=NetworkError.kind,
                timeout=True,
                latency_ms=_elapsed_ms(start),
            )
            raise NetworkError(request.url, str(e) or type(e).__name__, timeout=True) from e
        except httpx.InvalidURL as e:
            raise ClientConstructionError(self._spec.name, f"invalid URL {request.url!r}: {e}") from e
        except httpx.RequestError as e:
            log.warning(
                "request_failed",
                endpoint=self._spec.name,
                method=request.method,
                url=request.url,
                kind=NetworkError.kind,
                error=f"{type(e).__name__}: {e}",
                latency_ms=_elapsed_ms(start),
            )
            raise NetworkError(request.url, f"{type(e).__name__}: {e}") from e
        except (TypeError, ValueError) as e:
            log.warning("request_construction_failed", endpoint=self._spec.name, error=str(e))
            raise ClientConstructionError(self._spec.name, f"request could not be encoded: {e}") from e

        try:
            result = normalize_response(response, request.url)
        except ApiError as e:
            log.warning(
                "request_failed",
                endpoint=self._spec.name,
                method=request.method,
                url=request.url,
                kind=e.kind,
                status=response.status_code,
                latency_ms=_elapsed_ms(start),
            )
            raise
        log.info(
            "request_completed",
            endpoint=self._spec.name,
            method=request.method,
            url=request.url,
            status=result.status,
            latency_ms=_elapsed_ms(start),
        )
        return result

    def __call__(
        self,
        token: str | None,
        body_params: BodyT | Mapping[str, Any] | None = None,
        path_params: PathT | Mapping[str, Any] | None = None,
        callback: Callback | None = None,
        *,
        client: ApiClient | None = None,
    ) -> asyncio.Future[ApiResponse] | None:
        """Invoke the endpoint once.

        Args:
            token: Bearer token. Empty or None sends the request without an
                Authorization header, relying on the session cookie.
            body_params: Body parameters, as the declared model or a mapping.
            path_params: Path parameters, as the declared model or a mapping.
            callback: Optional ``(error, response)`` function. When given, it is
                called exactly once from the event loop and the call returns None.
            client: Transport to use; defaults to the process-wide client.

        Returns:
            A future resolving to the ApiResponse when no callback is given.

        Must be called with a running event loop.
        """
        loop = asyncio.get_running_loop()
        try:
            request = self.prepare(token, body_params, path_params)
        except ClientConstructionError as e:
            log.warning("request_construction_failed", endpoint=self._spec.name, error=e.message)
            url = ""
            future: asyncio.Future[ApiResponse] = loop.create_future()
            future.set_exception(e)
        else:
            url = request.url
            future = asyncio.ensure_future(self._execute(request, client or get_default_client()))

        if callback is None:
            return future

        _in_flight.add(future)
        future.add_done_callback(_callback_adapter(callback, url))
        return None


def _callback_adapter(callback: Callback, url: str) -> Callable[[asyncio.Future[ApiResponse]], None]:
    def _on_done(future: asyncio.Future[ApiResponse]) -> None:
        _in_flight.discard(future)
        if future.cancelled():
            callback(NetworkError(url, "request cancelled"), None)
            return
        error = future.exception()
        if error is not None:
            callback(error if isinstance(error, Exception) else ApiError(str(error)), None)
        else:
            callback(None, future.result())

    return _on_done


def base_api(
    method: str,
    url_template: UrlTemplate,
    *,
    body: type[BodyT] = EmptyParams,  # type: ignore[assignment]
    path: type[PathT] = EmptyParams,  # type: ignore[assignment]
    name: str | None = None,
) -> EndpointFunction[BodyT, PathT]:
    """Declare one backend operation.

    Args:
        method: GET, POST, PUT or DELETE.
        url_template: A literal path, or a pure function of the path parameters
            model returning the path. Segments that may contain reserved
            characters must be encoded with :func:`porter_client.urls.segment`.
        body: Model describing the body parameters.
        path: Model describing the path parameters. Never sent as a body.
        name: Name used in logs and errors.

    Raises:
        ValueError: If the method is unsupported or the template is neither a
            string nor callable.
    """
    verb = method.upper()
    if verb not in _METHODS:
        valid = ", ".join(sorted(_METHODS))
        msg = f"Invalid method: {method!r}. Must be one of: {valid}"
        raise ValueError(msg)
    if not isinstance(url_template, str) and not callable(url_template):
        msg = f"url_template must be a string or a callable, got {type(url_template).__name__}"
        raise ValueError(msg)

    if name is None:
        name = f"{verb} {url_template}" if isinstance(url_template, str) else f"{verb} <template>"
    spec = EndpointSpec(
        name=name,
        method=verb,  # type: ignore[arg-type]
        url_template=url_template,
        body_model=body,
        path_model=path,
    )
    return EndpointFunction(spec)
