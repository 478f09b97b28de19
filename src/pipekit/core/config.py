"""Client configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from urllib.parse import urlsplit

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

DEFAULT_BASE_URI = "https://pipekit.io/api"
DEFAULT_CLUSTER_BASE_URI = "http://localhost:8080/api"


class EndpointConfig(BaseSettings):
    """Hosted control-plane and in-cluster base URIs."""

    model_config = {"env_prefix": "PIPEKIT_ENDPOINT_", "frozen": True}

    base_uri: str = DEFAULT_BASE_URI
    cluster_base_uri: str = DEFAULT_CLUSTER_BASE_URI

    @field_validator("base_uri", "cluster_base_uri")
    @classmethod
    def _must_be_absolute(cls, value: str) -> str:
        parts = urlsplit(value)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValueError(f"base URI must be an absolute http(s) URL, got {value!r}")
        if parts.query or parts.fragment:
            raise ValueError(f"base URI must not carry a query or fragment, got {value!r}")
        return value


class HTTPConfig(BaseSettings):
    """Transport timeouts."""

    model_config = {"env_prefix": "PIPEKIT_HTTP_", "frozen": True}

    timeout: float = 30.0
    connect_timeout: float = 5.0


class AuthConfig(BaseSettings):
    """Static credentials used when no per-call token is supplied."""

    model_config = {"env_prefix": "PIPEKIT_AUTH_", "frozen": True}

    token: str = ""


class PipekitSettings(BaseSettings):
    """Root client settings aggregating all sub-configs."""

    model_config = {"env_prefix": "PIPEKIT_", "frozen": True}

    log_level: str = "INFO"

    endpoint: EndpointConfig = Field(default_factory=EndpointConfig)
    http: HTTPConfig = Field(default_factory=HTTPConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
