"""
Bookmark Checker v1 - Configuration Tests

Tests for environment-driven settings.
"""

import logging

import pytest

import config
from config import Config, configure_logging, load_env


@pytest.fixture(autouse=True)
def restore_config():
    """Keep the cached configuration from leaking between tests."""
    saved = config._config
    yield
    config._config = saved


@pytest.mark.unit
class TestSettings:
    """Tests for defaults and environment overrides."""

    def test_defaults(self, monkeypatch):
        for name in ("CHECK_TIMEOUT", "CHECK_BATCH_SIZE", "CHECKER_SERVICE_URL", "MAX_UPLOAD_BYTES"):
            monkeypatch.delenv(name, raising=False)
        cfg = Config()

        assert cfg.checker.timeout == 10.0
        assert cfg.checker.batch_size == 5
        assert cfg.checker.service_url is None
        assert cfg.upload.max_bytes == 10 * 1024 * 1024

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("CHECK_TIMEOUT", "2.5")
        monkeypatch.setenv("CHECK_BATCH_SIZE", "8")
        monkeypatch.setenv("CHECKER_SERVICE_URL", "http://checker.local:8001")
        cfg = Config()

        assert cfg.checker.timeout == 2.5
        assert cfg.checker.batch_size == 8
        assert cfg.checker.service_url == "http://checker.local:8001"

    def test_invalid_batch_size(self, monkeypatch):
        monkeypatch.setenv("CHECK_BATCH_SIZE", "0")
        with pytest.raises(ValueError):
            Config()

    def test_is_development(self, monkeypatch):
        monkeypatch.setenv("APP_ENV", "production")
        assert Config().is_development is False

    def test_get_config_is_cached(self):
        assert config.get_config() is config.get_config()
        assert config.reload_config() is config.get_config()


@pytest.mark.unit
class TestHelpers:
    """Tests for env file loading and logging setup."""

    def test_load_env(self, tmp_path, monkeypatch):
        # Registered first so the value written by load_dotenv is undone
        monkeypatch.setenv("CHECK_BATCH_SIZE", "")
        monkeypatch.delenv("CHECK_BATCH_SIZE")
        env_file = tmp_path / "test.env"
        env_file.write_text("CHECK_BATCH_SIZE=3\n", encoding="utf-8")

        assert load_env(str(env_file)) is True
        assert Config().checker.batch_size == 3

    def test_load_env_missing(self, tmp_path):
        assert load_env(str(tmp_path / "missing.env")) is False

    def test_debug_forces_debug_level(self, monkeypatch):
        monkeypatch.setenv("APP_DEBUG", "true")
        root = logging.getLogger()
        monkeypatch.setattr(root, "handlers", [])
        monkeypatch.setattr(root, "level", root.level)

        configure_logging(Config())

        assert root.level == logging.DEBUG
