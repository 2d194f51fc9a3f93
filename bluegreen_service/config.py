"""
Configuration management for the blue/green pool service.

Uses pydantic-settings for type-safe environment variable handling.
Values are read once at startup and never looked up again by handlers.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Service settings loaded from environment variables.

    Variable names follow the deployment manifests (APP_POOL, RELEASE_ID, ...)
    so the same compose/env files drive both pools.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
        populate_by_name=True,
        env_ignore_empty=True,
    )

    # Server configuration
    host: str = Field(default="0.0.0.0", alias="APP_HOST", description="Bind host")
    port: int = Field(default=3000, alias="APP_PORT", ge=1, le=65535, description="Bind port")

    # Identity
    pool: str = Field(
        default="unknown",
        alias="APP_POOL",
        description="Pool identity reported in bodies and X-App-Pool",
    )
    release_id: str = Field(
        default="unknown",
        alias="RELEASE_ID",
        description="Release identifier reported in bodies and X-Release-Id",
    )

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL", description="Logging level")
    log_json: bool = Field(default=False, alias="LOG_JSON", description="Emit JSON log lines")

    # Chaos / lifecycle bounds
    chaos_max_hang_s: float | None = Field(
        default=None,
        alias="CHAOS_MAX_HANG_S",
        gt=0,
        description="Upper bound for simulated timeouts (unset hangs until the caller leaves)",
    )
    shutdown_grace_s: float = Field(
        default=10.0,
        alias="SHUTDOWN_GRACE_S",
        ge=0,
        le=300,
        description="Seconds to wait for in-flight requests on shutdown",
    )
    max_connections: int | None = Field(
        default=None,
        alias="MAX_CONNECTIONS",
        ge=1,
        description="Concurrent connection limit handed to uvicorn",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return upper_v

    @field_validator("pool", "release_id")
    @classmethod
    def strip_identity(cls, v: str) -> str:
        # Header values cannot carry surrounding whitespace or newlines
        v = v.strip()
        if any(ch in v for ch in "\r\n"):
            raise ValueError("Identity values must be a single line")
        return v or "unknown"

    @property
    def identity_headers(self) -> dict[str, str]:
        """Headers stamped on every response."""
        return {"X-App-Pool": self.pool, "X-Release-Id": self.release_id}

    def get_redacted_config(self) -> dict[str, str | int | float | bool | None]:
        """Configuration dict safe for logging."""
        return {
            "host": self.host,
            "port": self.port,
            "pool": self.pool,
            "release_id": self.release_id,
            "log_level": self.log_level,
            "chaos_max_hang_s": self.chaos_max_hang_s,
            "shutdown_grace_s": self.shutdown_grace_s,
            "max_connections": self.max_connections,
        }


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Only the process entry point calls this; the app receives the instance
    explicitly.
    """
    return Settings()
