"""FastAPI fake of the Pipekit service, mounted in-process via httpx.ASGITransport."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

import httpx
from fastapi import FastAPI, Request, Response


@dataclass
class ReceivedRequest:
    """What the fake service saw for one request."""

    method: str
    host: str
    raw_path: str
    query: dict[str, str]
    headers: dict[str, str]
    body: Any


@dataclass
class FakePipekitService:
    """Records every request. POST mirrors the body back with a run id;
    DELETE answers 204. ``status_override`` forces a status on every reply.
    """

    run_id: str = "r1"
    status_override: int | None = None
    requests: list[ReceivedRequest] = field(default_factory=list)

    def app(self) -> FastAPI:
        app = FastAPI(title="Fake Pipekit")

        @app.api_route("/{full_path:path}", methods=["POST", "DELETE"])
        async def handle(full_path: str, request: Request) -> Response:
            raw = await request.body()
            body = json.loads(raw) if raw else None
            self.requests.append(ReceivedRequest(
                method=request.method,
                host=request.url.hostname or "",
                raw_path=request.scope["raw_path"].decode().split("?")[0],
                query=dict(request.query_params),
                headers=dict(request.headers),
                body=body,
            ))
            if self.status_override is not None:
                return Response(status_code=self.status_override)
            if request.method == "DELETE":
                return Response(status_code=204)
            mirrored = dict(body or {})
            mirrored.setdefault("Pipekit", {})["RunId"] = self.run_id
            return Response(
                content=json.dumps(mirrored),
                status_code=200,
                media_type="application/json",
            )

        return app

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.ASGITransport(app=self.app()))
