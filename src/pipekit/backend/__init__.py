"""Backends that execute Pipekit API calls behind the IBackend Protocol."""

from __future__ import annotations

from pipekit.backend.auth import (
    CallableTokenProvider,
    ContextTokenProvider,
    StaticTokenProvider,
    guarantee_bearer_prefix,
)
from pipekit.backend.http_backend import HTTPBackend
from pipekit.backend.memory_backend import RecordingBackend
from pipekit.backend.routing import build_url, format_url_path

__all__ = [
    "CallableTokenProvider",
    "ContextTokenProvider",
    "HTTPBackend",
    "RecordingBackend",
    "StaticTokenProvider",
    "build_url",
    "format_url_path",
    "guarantee_bearer_prefix",
]
