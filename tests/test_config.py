"""
Tests for environment-driven settings.
"""

import pytest
from pydantic import ValidationError

from bluegreen_service.config import Settings, get_settings


class TestDefaults:
    """Defaults with an empty environment."""

    def test_defaults(self) -> None:
        """Settings should use documented defaults with an empty environment."""
        settings = Settings(_env_file=None)
        assert settings.host == "0.0.0.0"
        assert settings.port == 3000
        assert settings.pool == "unknown"
        assert settings.release_id == "unknown"
        assert settings.log_level == "INFO"
        assert settings.log_json is False
        assert settings.chaos_max_hang_s is None
        assert settings.shutdown_grace_s == 10.0
        assert settings.max_connections is None

    def test_identity_headers(self) -> None:
        """Identity headers should come from pool and release settings."""
        settings = Settings(_env_file=None)
        assert settings.identity_headers == {"X-App-Pool": "unknown", "X-Release-Id": "unknown"}


class TestEnvironment:
    """Values read from deployment environment variables."""

    def test_reads_deployment_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Settings should read the deployment variable names."""
        monkeypatch.setenv("APP_HOST", "127.0.0.1")
        monkeypatch.setenv("APP_PORT", "8081")
        monkeypatch.setenv("APP_POOL", "green")
        monkeypatch.setenv("RELEASE_ID", "green-2024.06")
        settings = Settings(_env_file=None)
        assert settings.host == "127.0.0.1"
        assert settings.port == 8081
        assert settings.pool == "green"
        assert settings.release_id == "green-2024.06"

    def test_reads_dotenv_file(self, tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Settings should read values from an env file."""
        env_file = tmp_path / "pool.env"
        env_file.write_text("APP_POOL=blue\nCHAOS_MAX_HANG_S=2.5\n")
        settings = Settings(_env_file=env_file)
        assert settings.pool == "blue"
        assert settings.chaos_max_hang_s == 2.5

    def test_empty_values_use_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Empty environment values should fall back to defaults."""
        monkeypatch.setenv("CHAOS_MAX_HANG_S", "")
        monkeypatch.setenv("APP_POOL", "")
        settings = Settings(_env_file=None)
        assert settings.chaos_max_hang_s is None
        assert settings.pool == "unknown"

    def test_log_level_normalized(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Log level should be upper-cased."""
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert Settings(_env_file=None).log_level == "DEBUG"

    def test_get_settings_is_cached(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """get_settings should return the same instance on repeat calls."""
        monkeypatch.setenv("APP_POOL", "blue")
        first = get_settings()
        monkeypatch.setenv("APP_POOL", "green")
        assert get_settings() is first
        assert get_settings().pool == "blue"


class TestValidation:
    """Invalid configuration fails fast."""

    @pytest.mark.parametrize(
        "var,value",
        [
            ("APP_PORT", "not-a-port"),
            ("APP_PORT", "0"),
            ("APP_PORT", "70000"),
            ("LOG_LEVEL", "LOUD"),
            ("CHAOS_MAX_HANG_S", "0"),
            ("CHAOS_MAX_HANG_S", "-1"),
            ("SHUTDOWN_GRACE_S", "-5"),
            ("MAX_CONNECTIONS", "0"),
        ],
    )
    def test_rejects_invalid_values(self, monkeypatch: pytest.MonkeyPatch, var: str, value: str) -> None:
        """Out-of-range or malformed values should fail validation."""
        monkeypatch.setenv(var, value)
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_rejects_multiline_identity(self) -> None:
        """Identity values containing newlines should be rejected."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, pool="blue\nX-Injected: 1")

    def test_identity_is_stripped(self) -> None:
        """Identity values should be stripped of surrounding whitespace."""
        assert Settings(_env_file=None, pool="  blue ").pool == "blue"

    def test_settings_are_immutable(self) -> None:
        """Settings should be frozen after loading."""
        settings = Settings(_env_file=None)
        with pytest.raises(ValidationError):
            settings.pool = "green"
