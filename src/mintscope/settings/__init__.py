"""Layered mintscope configuration (TOML files + ``MINTSCOPE_*`` env vars)."""

from mintscope.settings.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
