"""httpx backend implementing IBackend."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx
from pydantic import BaseModel

from pipekit.backend.auth import guarantee_bearer_prefix, token_provider_from_settings
from pipekit.backend.codec import decode_into, encode_body, raise_for_status
from pipekit.backend.routing import build_url, check_base_uri
from pipekit.core.config import DEFAULT_BASE_URI, DEFAULT_CLUSTER_BASE_URI, PipekitSettings
from pipekit.core.context import RequestContext
from pipekit.core.exceptions import (
    AuthenticationError,
    ConfigurationError,
    RequestTimeoutError,
    TransportError,
)
from pipekit.core.protocols import IParamsContainer, ITokenProvider
from pipekit.models.meta import Route
from pipekit.models.response import APIResponse

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"


class HTTPBackend:
    """Production IBackend backed by ``httpx.AsyncClient``.

    Holds only immutable configuration and a shared client, so one instance
    can serve concurrent calls from any number of resource clients.
    """

    def __init__(
        self,
        base_uri: str = DEFAULT_BASE_URI,
        cluster_base_uri: str = DEFAULT_CLUSTER_BASE_URI,
        *,
        token_provider: ITokenProvider,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
        connect_timeout: float = 5.0,
    ) -> None:
        check_base_uri(base_uri)
        check_base_uri(cluster_base_uri)
        if timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {timeout}")
        self._base_uri = base_uri
        self._cluster_base_uri = cluster_base_uri
        self._token_provider = token_provider
        self._timeout = timeout
        self._connect_timeout = connect_timeout
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout, connect=connect_timeout),
        )

    @classmethod
    def from_settings(
        cls,
        settings: PipekitSettings,
        *,
        token_provider: ITokenProvider | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> HTTPBackend:
        return cls(
            settings.endpoint.base_uri,
            settings.endpoint.cluster_base_uri,
            token_provider=token_provider or token_provider_from_settings(settings.auth),
            http_client=http_client,
            timeout=settings.http.timeout,
            connect_timeout=settings.http.connect_timeout,
        )

    @property
    def base_uri(self) -> str:
        return self._base_uri

    @property
    def cluster_base_uri(self) -> str:
        return self._cluster_base_uri

    def base_uri_for(self, route: Route) -> str:
        match route:
            case Route.IN_CLUSTER:
                return self._cluster_base_uri
            case Route.HOSTED:
                return self._base_uri
        raise ConfigurationError(f"Unknown route {route!r}")

    def format_url(self, route: Route, path: str, params: IParamsContainer | None = None) -> str:
        """Prepend the route's base URI to ``path`` and append the query params."""
        return build_url(self.base_uri_for(route), path, params)

    async def call(
        self,
        ctx: RequestContext | None,
        method: str,
        route: Route,
        path: str,
        params: IParamsContainer | None = None,
        body: Any = None,
        *,
        into: BaseModel | dict[str, Any] | None = None,
    ) -> APIResponse:
        """Invoke the Pipekit API.

        Failures surface in pipeline order: URL, serialization, authorization,
        transport, decode, then status.

        Raises:
            ConfigurationError: Malformed base URI, path or request.
            SerializationError: ``body`` is not JSON-encodable.
            AuthenticationError: The token provider yielded no token.
            TransportError: Network failure; ``RequestTimeoutError`` on deadline.
            DecodeError: Response body does not decode into ``into``.
            APIError: Status code >= 400.
        """
        url = self.format_url(route, path, params)
        content = encode_body(body)
        headers = self._headers(ctx)
        timeout = self._timeout_for(ctx)

        try:
            request = self._client.build_request(
                method,
                url,
                content=content,
                headers=headers,
                timeout=httpx.Timeout(timeout, connect=min(self._connect_timeout, timeout)),
            )
        except httpx.InvalidURL as exc:
            raise ConfigurationError(f"Cannot build {method} request for {url}: {exc}") from exc

        try:
            async with asyncio.timeout(timeout):
                return await self._execute(request, into, timeout)
        except TimeoutError as exc:
            raise RequestTimeoutError(timeout, url) from exc

    async def _execute(
        self,
        request: httpx.Request,
        into: BaseModel | dict[str, Any] | None,
        timeout: float,
    ) -> APIResponse:
        url = str(request.url)
        try:
            response = await self._client.send(request, stream=True)
        except httpx.TimeoutException as exc:
            raise RequestTimeoutError(timeout, url) from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"{request.method} {url} failed: {exc}") from exc

        try:
            raw = await response.aread()
        except httpx.TimeoutException as exc:
            raise RequestTimeoutError(timeout, url) from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"Reading response from {url} failed: {exc}") from exc
        finally:
            await _release(response)

        logger.debug("%s %s -> %d", request.method, url, response.status_code)

        if into is not None and raw.strip():
            decode_into(into, raw)
        raise_for_status(response.status_code, request.method, url, raw)

        return APIResponse(
            status_code=response.status_code,
            headers=dict(response.headers),
            content=raw,
        )

    def _headers(self, ctx: RequestContext | None) -> dict[str, str]:
        token = self._token_provider.get_token(ctx)
        if not token or not token.strip():
            raise AuthenticationError("No authorization token available for the call")
        headers = dict(ctx.headers) if ctx is not None else {}
        headers.update({
            "Content-Type": JSON_CONTENT_TYPE,
            "Accept": JSON_CONTENT_TYPE,
            "Authorization": guarantee_bearer_prefix(token),
            "Connection": "close",
        })
        return headers

    def _timeout_for(self, ctx: RequestContext | None) -> float:
        if ctx is not None and ctx.timeout is not None:
            if ctx.timeout <= 0:
                raise ConfigurationError(f"timeout must be positive, got {ctx.timeout}")
            return ctx.timeout
        return self._timeout

    async def aclose(self) -> None:
        """Close the underlying client if this backend created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> HTTPBackend:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


async def _release(response: httpx.Response) -> None:
    """Close the response; a failure here never replaces the call's outcome."""
    try:
        await response.aclose()
    except Exception as exc:
        logger.warning("Failed to release response from %s: %s", response.request.url, exc)
