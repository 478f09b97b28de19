"""End-to-end tests against a FastAPI fake of the Pipekit service."""

from __future__ import annotations

import pytest
import pytest_asyncio

from pipekit.backend.auth import StaticTokenProvider
from pipekit.client import create_api
from pipekit.core.config import EndpointConfig, PipekitSettings
from pipekit.core.context import RequestContext
from pipekit.core.exceptions import APIError
from pipekit.models.meta import CreateOptions, DeleteOptions, PipekitMeta
from pipekit.models.pipe import Pipe
from tests.fakes import FakePipekitService

SETTINGS = PipekitSettings(endpoint=EndpointConfig(
    base_uri="http://hosted.test/api",
    cluster_base_uri="http://cluster.test/api",
))

WORKFLOW = {"kind": "Workflow", "spec": {"entrypoint": "main", "arguments": {"parameters": []}}}


@pytest.fixture
def service():
    return FakePipekitService(run_id="r1")


@pytest_asyncio.fixture
async def api(service):
    async with service.client() as http_client:
        async with create_api(SETTINGS, token_provider=StaticTokenProvider("tok"), http_client=http_client) as api:
            yield api


@pytest.mark.asyncio
async def test_create_through_hosted_endpoint(api, service):
    pipe = Pipe(pipekit=PipekitMeta(user_id="u1", pipe_id="p1"), argo=WORKFLOW)

    result = await api.pipes.create(None, pipe, CreateOptions(is_in_cluster=False))

    received = service.requests[0]
    assert received.method == "POST"
    assert received.host == "hosted.test"
    assert received.raw_path == "/api/events-handler/v1/users/u1/pipes/p1/runs"
    assert received.body["Pipekit"]["UserId"] == "u1"
    assert received.headers["content-type"] == "application/json"
    assert received.headers["authorization"] == "Bearer tok"
    assert result is pipe
    assert pipe.run_id == "r1"
    assert pipe.user_id == "u1"
    assert pipe.argo == WORKFLOW


@pytest.mark.asyncio
async def test_stop_in_cluster_with_kill(api, service):
    await api.pipes.stop(None, "u1", "p1", "r1", DeleteOptions(is_in_cluster=True, should_kill=True))

    received = service.requests[0]
    assert received.method == "DELETE"
    assert received.host == "cluster.test"
    assert received.raw_path == "/api/plumbing/v1/users/u1/pipes/p1/runs/r1"
    assert received.query == {"should-kill": "true"}
    assert received.body is None


@pytest.mark.asyncio
async def test_escaped_ids_reach_service_intact(api, service):
    pipe = Pipe(pipekit=PipekitMeta(user_id="a b", pipe_id="c/d"), argo=WORKFLOW)
    await api.pipes.create(None, pipe, CreateOptions(is_in_cluster=True))
    assert service.requests[0].raw_path == "/api/plumbing/v1/users/a%20b/pipes/c%2Fd/runs"


@pytest.mark.asyncio
async def test_service_error_surfaces_status(api, service):
    service.status_override = 404
    with pytest.raises(APIError) as exc_info:
        await api.pipes.stop(RequestContext(token="ctx"), "u1", "p1", "missing", DeleteOptions())
    assert exc_info.value.status_code == 404
