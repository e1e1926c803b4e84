"""The document interface the resolution tactics read from.

Tactics only ever need three reads: select elements by CSS selector, read an
attribute, read an element's text. A Playwright sync ``Page`` (and its
``ElementHandle`` objects) already provides exactly these methods, so a live
browser page can be passed to ``resolve`` unchanged. ``SoupDocument`` offers
the same surface over a static HTML snapshot.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable


@runtime_checkable
class PageElement(Protocol):
    """A single element of the page."""

    def get_attribute(self, name: str) -> str | None: ...

    def text_content(self) -> str | None: ...


@runtime_checkable
class PageDocument(Protocol):
    """A readable DOM tree."""

    def query_selector_all(self, selector: str) -> Sequence[PageElement]: ...


def element_text(element: PageElement) -> str:
    """Return the element's text content, trimmed; empty string if it has none."""
    return (element.text_content() or "").strip()
