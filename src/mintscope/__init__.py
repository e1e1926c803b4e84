"""mintscope — resolve which token (mint) and chain a trading-site page is about."""

from __future__ import annotations

try:
    from importlib.metadata import version

    __version__ = version("mintscope")
except Exception:
    __version__ = "0.0.0"
