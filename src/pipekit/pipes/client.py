"""Pipes client: start and stop pipe runs."""

from __future__ import annotations

from pipekit.backend.routing import format_url_path
from pipekit.core.context import RequestContext
from pipekit.core.exceptions import InvalidPipeError
from pipekit.core.protocols import IBackend
from pipekit.core.types import PipeId, RunId, UserId
from pipekit.models.meta import CreateOptions, DeleteOptions
from pipekit.models.pipe import Pipe

RUNS_PATH = "v1/users/{user}/pipes/{pipe}/runs"
RUN_PATH = "v1/users/{user}/pipes/{pipe}/runs/{run}"


class PipesClient:
    """Runs pipes either through the hosted Pipekit API or directly on the
    cluster's execution engine.
    """

    def __init__(self, *, backend: IBackend) -> None:
        self._backend = backend

    async def create(
        self, ctx: RequestContext | None, pipe: Pipe, opts: CreateOptions | None = None,
    ) -> Pipe:
        """Start a run of ``pipe``.

        The user and pipe ids come from ``pipe.pipekit``. The response is
        decoded back into ``pipe``, which is returned as the same object.

        Raises:
            InvalidPipeError: If the pipe's user or pipe id is empty.
            PipekitError: Any failure reported by the backend.
        """
        opts = opts or CreateOptions()
        if not isinstance(pipe, Pipe):
            raise InvalidPipeError(f"Expected a Pipe, got {type(pipe).__name__}")
        path = format_url_path(opts.route, RUNS_PATH, user=pipe.user_id, pipe=pipe.pipe_id)
        await self._backend.call(ctx, "POST", opts.route, path, None, pipe, into=pipe)
        return pipe

    async def stop(
        self,
        ctx: RequestContext | None,
        user_id: UserId,
        pipe_id: PipeId,
        run_id: RunId,
        opts: DeleteOptions | None = None,
    ) -> None:
        """Stop a running pipe; ``opts.should_kill`` forces termination.

        The ``should-kill`` query parameter is sent on every call.
        """
        opts = opts or DeleteOptions()
        path = format_url_path(opts.route, RUN_PATH, user=user_id, pipe=pipe_id, run=run_id)
        await self._backend.call(ctx, "DELETE", opts.route, path, opts)
