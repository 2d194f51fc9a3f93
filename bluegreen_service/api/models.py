"""
Response models for the pool service API.

Field names are snake_case in Python and serialized camelCase on the wire
(releaseId, wasEnabled, runtimeVersion) to match what the failover harness
and proxy health checks already parse.
"""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a Z suffix."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class CamelModel(BaseModel):
    """Base model serialized with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RuntimeEnvironment(CamelModel):
    runtime_version: str
    platform: str


class VersionResponse(CamelModel):
    """Identity report for the gated /version route."""

    pool: str
    release_id: str
    version: str
    status: str
    timestamp: str
    uptime: float
    environment: RuntimeEnvironment


class HealthResponse(CamelModel):
    """Liveness report; never affected by chaos mode."""

    status: str
    pool: str
    timestamp: str


class EndpointDirectory(CamelModel):
    version: str
    health: str
    chaos_start: str
    chaos_stop: str


class RootResponse(CamelModel):
    message: str
    pool: str
    release_id: str
    endpoints: EndpointDirectory


class ChaosStartResponse(CamelModel):
    message: str
    mode: str
    pool: str
    timestamp: str


class ChaosStopResponse(CamelModel):
    message: str
    was_enabled: bool
    pool: str
    timestamp: str
