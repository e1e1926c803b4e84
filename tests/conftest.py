"""mintscope test configuration — shared fixtures for unit and integration tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from mintscope.dom.soup import SoupDocument

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------

FIXTURES_DIR = Path(__file__).parent / "fixtures"
PAGES_DIR = FIXTURES_DIR / "pages"


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    """Clear the settings LRU cache between tests."""
    from mintscope.settings.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------


@pytest.fixture()
def make_doc() -> Callable[[str], SoupDocument]:
    """Return a factory building a ``SoupDocument`` from a body HTML fragment."""

    def _make(body: str) -> SoupDocument:
        return SoupDocument(f"<html><head></head><body>{body}</body></html>")

    return _make


@pytest.fixture()
def page_fixture() -> Callable[[str], Path]:
    """Return a factory resolving a file name under ``tests/fixtures/pages``."""

    def _path(name: str) -> Path:
        return PAGES_DIR / name

    return _path
