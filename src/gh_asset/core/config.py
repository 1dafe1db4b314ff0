"""Configuration for gh-asset.

- Environment variables (pydantic-settings), prefix `GH_ASSET_`.
- Read from a project `.env` first, then the per-user config directory.
- CLI flags override individual values for one invocation.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from gh_asset import __version__
from gh_asset.core.domain.source_mode import SourceMode

DEFAULT_ASSET_URL_TEMPLATE = "https://github.com/user-attachments/assets/{asset_id}"


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no extra dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "gh-asset"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "gh-asset"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "gh-asset"
    return Path.home() / ".config" / "gh-asset"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Central application settings."""

    model_config = SettingsConfigDict(
        env_prefix="GH_ASSET_",
        extra="ignore",
        case_sensitive=False,
        # Project first (dev), then the global user config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    gh_executable: str = Field(
        default="gh",
        min_length=1,
        description="GitHub CLI executable used to obtain the auth token.",
    )
    http_timeout_seconds: float = Field(
        default=300.0,
        gt=0,
        description="Timeout for the asset download request (seconds).",
    )
    probe_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout for the HEAD request used to infer the file extension (seconds).",
    )
    user_agent: str = Field(
        default=f"gh-asset/{__version__}",
        min_length=1,
        description="User-Agent sent with every request.",
    )
    accept: str = Field(
        default="application/vnd.github.v3+json",
        min_length=1,
        description="Accept header sent with every request.",
    )
    asset_url_template: str = Field(
        default=DEFAULT_ASSET_URL_TEMPLATE,
        description="URL template an asset ID is embedded into.",
    )
    source_mode: SourceMode = Field(
        default=SourceMode.AUTO,
        description="How the download source is interpreted (auto/id/url).",
    )
    strict_asset_ids: bool = Field(
        default=False,
        description="Only accept canonical UUID-shaped asset IDs.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Logging level for the CLI (DEBUG, INFO, WARNING, ...).",
    )

    @field_validator("asset_url_template")
    @classmethod
    def _template_has_placeholder(cls, value: str) -> str:
        if "{asset_id}" not in value:
            raise ValueError("asset_url_template must contain '{asset_id}'")
        return value

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"unknown log level: {value!r}")
        return level
