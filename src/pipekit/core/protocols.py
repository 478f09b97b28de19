"""Protocol interfaces for all Pipekit client abstractions.

Resource clients depend on these Protocols, not on concrete backends, so
tests can swap in the in-memory backend without patching.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pydantic import BaseModel

    from pipekit.core.context import RequestContext
    from pipekit.models.meta import CreateOptions, DeleteOptions, Route
    from pipekit.models.params import Params
    from pipekit.models.pipe import Pipe
    from pipekit.models.response import APIResponse


# ---------------------------------------------------------------------------
# Query parameters
# ---------------------------------------------------------------------------

@runtime_checkable
class IParamsContainer(Protocol):
    """Anything that can supply a query-parameter bag for a call."""

    def get_params(self) -> Params: ...


# ---------------------------------------------------------------------------
# Authorization
# ---------------------------------------------------------------------------

@runtime_checkable
class ITokenProvider(Protocol):
    """Supplies the current authorization token for a call."""

    def get_token(self, ctx: RequestContext | None) -> str: ...


# ---------------------------------------------------------------------------
# Backend
# ---------------------------------------------------------------------------

@runtime_checkable
class IBackend(Protocol):
    """Single chokepoint for every outbound Pipekit call."""

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
    ) -> APIResponse: ...

    async def aclose(self) -> None: ...


# ---------------------------------------------------------------------------
# Resource clients
# ---------------------------------------------------------------------------

@runtime_checkable
class IPipesClient(Protocol):
    """Start and stop pipe runs."""

    async def create(self, ctx: RequestContext | None, pipe: Pipe, opts: CreateOptions) -> Pipe: ...

    async def stop(
        self, ctx: RequestContext | None, user_id: str, pipe_id: str, run_id: str,
        opts: DeleteOptions,
    ) -> None: ...
