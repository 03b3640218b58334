"""Tests for settings and logging setup."""

import pytest
import structlog
from pydantic import ValidationError

from shopadmin.infrastructure.config import Settings
from shopadmin.infrastructure.logging import configure_logging


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Defaults apply without environment overrides."""
        monkeypatch.delenv("SHOPADMIN_API_URL", raising=False)
        settings = Settings(_env_file=None)
        assert settings.api_url == "http://localhost:5000/api"
        assert settings.sku_token_digits == 4
        assert settings.max_images == 5
        assert settings.token_path is None

    def test_env_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """SHOPADMIN_ variables override defaults."""
        monkeypatch.setenv("SHOPADMIN_API_URL", "https://shop.example/api")
        monkeypatch.setenv("SHOPADMIN_MAX_IMAGES", "8")
        settings = Settings(_env_file=None)
        assert settings.api_url == "https://shop.example/api"
        assert settings.max_images == 8

    def test_token_digits_bounded(self) -> None:
        """SKU token digits must fit a millisecond clock."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, sku_token_digits=0)


def test_configure_logging_console() -> None:
    """Logging can be configured for human-readable output."""
    configure_logging(Settings(_env_file=None, log_json=False, log_level="DEBUG"))
    logger = structlog.get_logger()
    logger.info("Configured", mode="console")
