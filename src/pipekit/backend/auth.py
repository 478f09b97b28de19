"""Authorization token providers."""

from __future__ import annotations

from collections.abc import Callable

from pipekit.core.config import AuthConfig
from pipekit.core.context import RequestContext
from pipekit.core.protocols import ITokenProvider

BEARER_PREFIX = "Bearer "


def guarantee_bearer_prefix(token: str) -> str:
    """Return ``token`` with a ``Bearer`` scheme, adding one if missing."""
    token = token.strip()
    if token[: len(BEARER_PREFIX)].lower() == BEARER_PREFIX.lower():
        return BEARER_PREFIX + token[len(BEARER_PREFIX):].lstrip()
    return BEARER_PREFIX + token


class StaticTokenProvider:
    """ITokenProvider that always yields the same token."""

    def __init__(self, token: str) -> None:
        self._token = token

    def get_token(self, ctx: RequestContext | None) -> str:
        return self._token


class ContextTokenProvider:
    """ITokenProvider reading the token carried on the request context.

    Falls back to ``fallback`` when the context has no token.
    """

    def __init__(self, fallback: ITokenProvider | None = None) -> None:
        self._fallback = fallback

    def get_token(self, ctx: RequestContext | None) -> str:
        if ctx is not None and ctx.token:
            return ctx.token
        if self._fallback is not None:
            return self._fallback.get_token(ctx)
        return ""


class CallableTokenProvider:
    """Adapts a plain function into an ITokenProvider."""

    def __init__(self, fn: Callable[[RequestContext | None], str]) -> None:
        self._fn = fn

    def get_token(self, ctx: RequestContext | None) -> str:
        return self._fn(ctx)


def token_provider_from_settings(auth: AuthConfig) -> ITokenProvider:
    """Per-call context token first, then the configured static token."""
    return ContextTokenProvider(fallback=StaticTokenProvider(auth.token))
