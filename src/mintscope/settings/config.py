"""Configuration loader for mintscope using Pydantic settings.

Config precedence (highest wins):
  1. CLI flags (where applicable)
  2. Environment variables (MINTSCOPE_* with __ for nesting)
  3. settings.local.toml
  4. settings.<env>.toml
  5. settings.default.toml

The resolution engine itself takes no configuration; these settings govern
the outer surfaces (logging, live page loading, CLI retries and fallback).
"""

from __future__ import annotations

import os
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------

_THIS_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = Path(os.getenv("MINTSCOPE_PROJECT_ROOT", _THIS_DIR.parents[2]))
CONFIG_DIR = PROJECT_ROOT / "config"

ENV_VAR_NAME = "MINTSCOPE_ENV"
DEFAULT_ENV = "local"


def _resolve_env() -> str:
    return (os.getenv(ENV_VAR_NAME) or DEFAULT_ENV).strip()


def _load_toml(path: Path) -> dict[str, Any]:
    if path.is_file():
        with open(path, "rb") as f:
            return tomllib.load(f)
    return {}


# ---------------------------------------------------------------------------
# Section models
# ---------------------------------------------------------------------------


class LoggingSettings(BaseSettings):
    """Root logger configuration."""

    model_config = SettingsConfigDict(env_prefix="MINTSCOPE_LOGGING__")

    level: str = "INFO"
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        return v.strip().upper()


class BrowserSettings(BaseSettings):
    """Playwright settings for resolving against live pages."""

    model_config = SettingsConfigDict(env_prefix="MINTSCOPE_BROWSER__")

    headless: bool = True
    timeout_ms: int = 30_000
    user_agent: str = ""
    wait_until: Literal["commit", "domcontentloaded", "load", "networkidle"] = "domcontentloaded"


class ScanSettings(BaseSettings):
    """Caller-side scan behaviour around ``resolve``."""

    model_config = SettingsConfigDict(env_prefix="MINTSCOPE_SCAN__")

    max_attempts: int = Field(default=6, ge=1)
    retry_backoff_ms: int = Field(default=500, ge=0)
    url_fallback: bool = True


# ---------------------------------------------------------------------------
# Root settings
# ---------------------------------------------------------------------------


class Settings(BaseSettings):
    """Root mintscope settings with nested sections."""

    model_config = SettingsConfigDict(
        env_prefix="MINTSCOPE_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    env: str = Field(default_factory=_resolve_env)
    project_root: Path = Field(default=PROJECT_ROOT)

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    browser: BrowserSettings = Field(default_factory=BrowserSettings)
    scan: ScanSettings = Field(default_factory=ScanSettings)

    @model_validator(mode="before")
    @classmethod
    def _merge_toml_files(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Layer TOML config files before env var overrides."""
        defaults = _load_toml(CONFIG_DIR / "settings.default.toml")
        env_name = (values.get("env") or os.getenv(ENV_VAR_NAME) or DEFAULT_ENV).strip()
        env_overrides = _load_toml(CONFIG_DIR / f"settings.{env_name}.toml")
        local_overrides = _load_toml(CONFIG_DIR / "settings.local.toml")

        # Merge: defaults < env-specific < local < explicit values
        merged: dict[str, Any] = {}
        for layer in (defaults, env_overrides, local_overrides, values):
            for key, val in layer.items():
                if isinstance(val, dict) and isinstance(merged.get(key), dict):
                    merged[key] = {**merged[key], **val}
                else:
                    merged[key] = val
        return merged


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton settings instance (cached)."""
    return Settings()
