"""In-memory backend for unit tests: records calls, replays scripted responses."""

from __future__ import annotations

import json
from collections import deque
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from pipekit.backend.codec import decode_into, encode_body, raise_for_status
from pipekit.core.context import RequestContext
from pipekit.core.protocols import IParamsContainer
from pipekit.models.meta import Route
from pipekit.models.params import Params
from pipekit.models.response import APIResponse


@dataclass
class RecordedCall:
    """One call as seen by the backend."""

    ctx: RequestContext | None
    method: str
    route: Route
    path: str
    params: Params | None
    body: Any

    @property
    def query(self) -> str:
        return self.params.encode() if self.params is not None else ""


class RecordingBackend:
    """Dict-backed IBackend for unit tests.

    Responses queued with ``respond()`` are replayed in order; once the queue
    is empty every call succeeds with an empty 200.
    """

    def __init__(self) -> None:
        self.calls: list[RecordedCall] = []
        self.closed = False
        self._responses: deque[APIResponse | Exception] = deque()

    def respond(self, status_code: int = 200, json_body: Any = None) -> None:
        content = json.dumps(json_body).encode() if json_body is not None else b""
        self._responses.append(APIResponse(status_code=status_code, content=content))

    def fail_with(self, exc: Exception) -> None:
        self._responses.append(exc)

    @property
    def last_call(self) -> RecordedCall:
        return self.calls[-1]

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
        content = encode_body(body)
        self.calls.append(RecordedCall(
            ctx=ctx,
            method=method,
            route=route,
            path=path,
            params=params.get_params() if params is not None else None,
            body=json.loads(content) if content is not None else None,
        ))

        response = self._responses.popleft() if self._responses else APIResponse(status_code=200)
        if isinstance(response, Exception):
            raise response
        if into is not None and response.content.strip():
            decode_into(into, response.content)
        raise_for_status(response.status_code, method, path, response.content)
        return response

    async def aclose(self) -> None:
        self.closed = True
