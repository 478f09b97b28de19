"""Composite API wiring every resource client to one shared backend."""

from __future__ import annotations

import httpx

from pipekit.backend.http_backend import HTTPBackend
from pipekit.core.config import PipekitSettings
from pipekit.core.protocols import IBackend, ITokenProvider
from pipekit.pipes.client import PipesClient


class PipekitAPI:
    """Holds a composite of all Pipekit APIs."""

    def __init__(self, *, backend: IBackend) -> None:
        self.backend = backend
        self.pipes = PipesClient(backend=backend)

    async def aclose(self) -> None:
        await self.backend.aclose()

    async def __aenter__(self) -> PipekitAPI:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


def create_api(
    settings: PipekitSettings | None = None,
    *,
    token_provider: ITokenProvider | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> PipekitAPI:
    """Create a wired-up API from client settings.

    Without a ``token_provider`` the token is taken from each call's
    ``RequestContext``, falling back to ``PIPEKIT_AUTH_TOKEN``.
    """
    if settings is None:
        settings = PipekitSettings()

    backend = HTTPBackend.from_settings(
        settings, token_provider=token_provider, http_client=http_client,
    )
    return PipekitAPI(backend=backend)
