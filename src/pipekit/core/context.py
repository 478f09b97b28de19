"""Per-call request context."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True)
class RequestContext:
    """Call-scoped values threaded from the caller down to the backend.

    Attributes:
        token: Bearer token for this call; read by ``ContextTokenProvider``.
        timeout: Deadline in seconds for the whole exchange. ``None`` uses the
            configured default.
        headers: Extra request headers, e.g. a correlation id.
    """

    token: str | None = None
    timeout: float | None = None
    headers: Mapping[str, str] = field(default_factory=dict)
