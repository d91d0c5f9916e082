"""
Settings for addgitignore.

Values come from keyword overrides, then ADDGITIGNORE_* environment
variables, then defaults. Read once per process via get_settings().
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_BASE_URL = "https://api.github.com"
DEFAULT_CACHE_EXPIRATION_INTERVAL = 3600  # 1 hour
DEFAULT_CATALOG_PATHS = ["", "Global"]

USER_AGENT = "addgitignore"


class Settings(BaseSettings):
    """
    Process-wide configuration.

    Example:
        >>> settings = Settings(cache_expiration_interval=60)
        >>> settings.catalog_paths
        ['', 'Global']
    """

    model_config = SettingsConfigDict(
        env_prefix="ADDGITIGNORE_",
        extra="ignore",
    )

    # Catalog
    cache_expiration_interval: int = Field(
        default=DEFAULT_CACHE_EXPIRATION_INTERVAL,
        ge=0,
        description="Seconds a fetched catalog stays valid (0 disables caching)",
    )
    catalog_paths: list[str] = Field(
        default_factory=lambda: list(DEFAULT_CATALOG_PATHS),
        description="Repository sub-paths merged into the catalog",
    )

    # Remote repository
    api_base_url: str = DEFAULT_API_BASE_URL
    repository_owner: str = "github"
    repository_name: str = "gitignore"
    github_token: str | None = None
    request_timeout: float = Field(default=5.0, gt=0.0, le=120.0)

    # Network
    proxy: str | None = Field(
        default=None,
        description="Proxy URL; HTTPS_PROXY / HTTP_PROXY are used when unset",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_json: bool = False


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def configure_settings(**overrides: Any) -> Settings:
    """Replace the process-wide settings with a new instance."""
    global _settings
    _settings = Settings(**overrides)
    return _settings


def reset_settings() -> None:
    """Forget loaded settings (next get_settings() reloads them)."""
    global _settings
    _settings = None


__all__ = [
    "Settings",
    "get_settings",
    "configure_settings",
    "reset_settings",
    "USER_AGENT",
]
