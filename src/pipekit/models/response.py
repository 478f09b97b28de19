"""Response envelope returned by backend calls."""

from __future__ import annotations

from pydantic import BaseModel, Field


class APIResponse(BaseModel):
    """Status, headers and raw body of a completed exchange."""

    status_code: int
    headers: dict[str, str] = Field(default_factory=dict)
    content: bytes = b""

    @property
    def ok(self) -> bool:
        return self.status_code < 400
