"""
Bookmark Checker v1 - Shared Configuration Module

This module provides centralized configuration management for all services.
It loads settings from environment variables and provides typed access.
Every setting has a default, so nothing needs to be configured to run.
"""

import logging
from pathlib import Path
from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class CheckerSettings(BaseSettings):
    """URL checking configuration"""
    timeout: float = Field(default=10.0, gt=0, alias="CHECK_TIMEOUT")
    batch_size: int = Field(default=5, ge=1, alias="CHECK_BATCH_SIZE")
    user_agent: str = Field(default=DEFAULT_USER_AGENT, alias="CHECK_USER_AGENT")
    service_url: Optional[str] = Field(default=None, alias="CHECKER_SERVICE_URL")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


class UploadSettings(BaseSettings):
    """Bookmark file upload limits"""
    max_bytes: int = Field(default=10 * 1024 * 1024, ge=1, alias="MAX_UPLOAD_BYTES")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


class AppSettings(BaseSettings):
    """General application settings"""
    env: str = Field(default="development", alias="APP_ENV")
    debug: bool = Field(default=False, alias="APP_DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default=LOG_FORMAT, alias="LOG_FORMAT")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


class Config:
    """Main configuration class that combines all settings"""

    def __init__(self):
        self.checker = CheckerSettings()
        self.upload = UploadSettings()
        self.app = AppSettings()

    @property
    def is_development(self) -> bool:
        return self.app.env == "development"


_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance, creating it on first use"""
    global _config
    if _config is None:
        _config = Config()
    return _config


def reload_config() -> Config:
    """Re-read settings, e.g. after loading an env file"""
    global _config
    _config = Config()
    return _config


def configure_logging(cfg: Optional[Config] = None) -> None:
    """Configure root logging from the application settings"""
    cfg = cfg or get_config()
    level = "DEBUG" if cfg.app.debug else cfg.app.log_level.upper()
    logging.basicConfig(
        level=level,
        format=cfg.app.log_format,
    )


def load_env(env_file: str = ".env") -> bool:
    """Load environment variables from file, returning whether it existed"""
    from dotenv import load_dotenv
    env_path = Path(env_file)
    if env_path.exists():
        load_dotenv(env_path)
        return True
    logger.warning(f"{env_file} not found")
    return False
