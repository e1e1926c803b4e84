"""BeautifulSoup adapter for resolving against saved HTML snapshots."""

from __future__ import annotations

import logging
from pathlib import Path

from bs4 import BeautifulSoup
from bs4.element import Tag

from mintscope.exceptions import SnapshotReadError

logger = logging.getLogger(__name__)

_NON_TEXT_TAGS = frozenset({"script", "style", "noscript", "template"})


class SoupElement:
    """``PageElement`` view of a BeautifulSoup ``Tag``."""

    __slots__ = ("_tag",)

    def __init__(self, tag: Tag) -> None:
        self._tag = tag

    def get_attribute(self, name: str) -> str | None:
        value = self._tag.get(name)
        if value is None:
            return None
        # Multi-valued attributes (class, rel) come back as lists.
        if isinstance(value, list):
            return " ".join(value)
        return value

    def text_content(self) -> str | None:
        text = self._tag.get_text()
        # Older bs4 releases skip <script> bodies in get_text().
        if not text and self._tag.string is not None:
            return str(self._tag.string)
        return text

    def __repr__(self) -> str:
        return f"SoupElement(<{self._tag.name}>)"


class SoupDocument:
    """``PageDocument`` over a parsed HTML string.

    Usage::

        doc = SoupDocument.from_file("dexscreener_pair.html")
        result = resolve(SiteContext(hostname="dexscreener.com", url=url, document=doc))
    """

    def __init__(self, html: str, parser: str = "html.parser") -> None:
        self._soup = BeautifulSoup(html, parser)

    @classmethod
    def from_file(cls, path: str | Path) -> "SoupDocument":
        """Parse an HTML snapshot from disk."""
        filepath = Path(path)
        try:
            html = filepath.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            raise SnapshotReadError(str(filepath), exc.strerror or str(exc)) from exc
        logger.debug("Loaded HTML snapshot %s (%d chars)", filepath, len(html))
        return cls(html)

    def query_selector_all(self, selector: str) -> list[SoupElement]:
        return [SoupElement(tag) for tag in self._soup.select(selector)]

    def text(self) -> str:
        """Visible text of the whole document, for caller-side scanning."""
        chunks = (
            str(node)
            for node in self._soup.find_all(string=True)
            if node.parent is None or node.parent.name not in _NON_TEXT_TAGS
        )
        return " ".join(chunks)
