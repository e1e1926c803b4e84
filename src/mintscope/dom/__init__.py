"""Document access for the resolution engine.

* ``document`` — the ``PageDocument`` / ``PageElement`` protocols (a
  Playwright sync ``Page`` satisfies them directly).
* ``soup`` — ``SoupDocument``, a BeautifulSoup-backed snapshot document.
* ``live`` — Playwright page loading for the CLI.
"""

from mintscope.dom.document import PageDocument, PageElement, element_text
from mintscope.dom.soup import SoupDocument, SoupElement

__all__ = [
    "PageDocument",
    "PageElement",
    "SoupDocument",
    "SoupElement",
    "element_text",
]
