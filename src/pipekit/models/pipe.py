"""Pipe: Pipekit metadata plus the workflow definition to be run."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from pipekit.core.types import JsonDict
from pipekit.models.meta import PipekitMeta


class Pipe(BaseModel):
    """A workflow submission unit.

    ``argo`` is the workflow document. It is opaque to the client: never
    inspected, only serialized and sent.
    """

    model_config = ConfigDict(populate_by_name=True)

    pipekit: PipekitMeta = Field(default_factory=PipekitMeta, alias="Pipekit")
    argo: Optional[JsonDict] = Field(default=None, alias="Argo")

    @property
    def user_id(self) -> str:
        return self.pipekit.user_id

    @property
    def pipe_id(self) -> str:
        return self.pipekit.pipe_id

    @property
    def run_id(self) -> str:
        return self.pipekit.run_id
