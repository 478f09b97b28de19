"""Ownership metadata, routing targets and per-call options."""

from __future__ import annotations

from enum import StrEnum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from pipekit.models.params import Params


class Route(StrEnum):
    """Which backend a call targets. The value is the leading path segment."""

    HOSTED = "events-handler"
    IN_CLUSTER = "plumbing"

    @classmethod
    def for_cluster(cls, is_in_cluster: bool) -> Route:
        return cls.IN_CLUSTER if is_in_cluster else cls.HOSTED


class PipekitMeta(BaseModel):
    """Metadata specific to interacting with the Pipekit API."""

    model_config = ConfigDict(populate_by_name=True)

    pipe_name: str = Field(default="", alias="PipeName")
    user_id: str = Field(default="", alias="UserId")
    pipe_id: str = Field(default="", alias="PipeId")
    run_id: str = Field(default="", alias="RunId")
    cluster: str = Field(default="", alias="Cluster")
    secrets_environment: str = Field(default="", alias="SecretsEnvironment")
    namespace: str = Field(default="", alias="Namespace")
    tags: Optional[list[str]] = Field(default=None, alias="Tags")


class CreateOptions(BaseModel):
    """Options that may be provided when creating an API object."""

    model_config = ConfigDict(frozen=True)

    is_in_cluster: bool = False

    @property
    def route(self) -> Route:
        return Route.for_cluster(self.is_in_cluster)


class DeleteOptions(BaseModel):
    """Options that may be provided when deleting an API object.

    ``should_kill`` asks for forceful termination instead of a graceful stop.
    """

    model_config = ConfigDict(frozen=True)

    is_in_cluster: bool = False
    should_kill: bool = False

    @property
    def route(self) -> Route:
        return Route.for_cluster(self.is_in_cluster)

    def get_params(self) -> Params:
        params = Params()
        params.add("should-kill", self.should_kill)
        return params
