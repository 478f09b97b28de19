"""Shared test doubles — re-export the in-memory backend and the fake service."""

from __future__ import annotations

from pipekit.backend.memory_backend import RecordedCall, RecordingBackend
from tests.fakes.service import FakePipekitService, ReceivedRequest

__all__ = ["FakePipekitService", "ReceivedRequest", "RecordedCall", "RecordingBackend"]
