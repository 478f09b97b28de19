"""Type aliases used across the Pipekit client."""

from __future__ import annotations

from typing import Any

JsonDict = dict[str, Any]
UserId = str
PipeId = str
RunId = str
