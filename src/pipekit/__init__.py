"""Client library for the Pipekit workflow-orchestration service."""

from __future__ import annotations

from pipekit.client import PipekitAPI, create_api
from pipekit.core.config import PipekitSettings
from pipekit.core.context import RequestContext
from pipekit.core.exceptions import APIError, PipekitError
from pipekit.models.meta import CreateOptions, DeleteOptions, PipekitMeta, Route
from pipekit.models.pipe import Pipe

__all__ = [
    "APIError",
    "CreateOptions",
    "DeleteOptions",
    "Pipe",
    "PipekitAPI",
    "PipekitError",
    "PipekitMeta",
    "PipekitSettings",
    "RequestContext",
    "Route",
    "create_api",
]
