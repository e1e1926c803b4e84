"""Extraction tactics — each proposes raw address strings from one page signal.

A tactic is a generator ``(context, family) -> Iterator[str]`` that yields
addresses in the order the page presents them. Tactics do not decide
acceptance; the owning ``Strategy`` filters every proposal through the address
grammar and the exclusion registry. The embedded-data tactic is the one
exception: choosing between the two sides of a pair *is* its contract, so it
consults the registry itself and yields at most one address.

Site markup constants live at the top of this module so they can be updated
when a site changes its pages.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Callable
from urllib.parse import urlsplit

from mintscope.address.exclusions import is_excluded
from mintscope.address.grammar import is_valid_address
from mintscope.dom.document import element_text
from mintscope.models.chain import ChainFamily
from mintscope.models.resolution import SiteContext

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Site markup constants
# ---------------------------------------------------------------------------

# (explorer host, path prefixes that precede an address segment)
EXPLORER_LINKS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("solscan.io", ("/token/", "/account/")),
    ("explorer.solana.com", ("/address/",)),
    ("solana.fm", ("/address/",)),
    ("etherscan.io", ("/token/", "/address/")),
    ("basescan.org", ("/token/", "/address/")),
    ("bscscan.com", ("/token/", "/address/")),
    ("polygonscan.com", ("/token/", "/address/")),
    ("snowtrace.io", ("/token/", "/address/")),
    ("arbiscan.io", ("/token/", "/address/")),
)

EMBEDDED_DATA_SELECTOR = '[id="__NEXT_DATA__"]'

# Known locations of the pair object inside the embedded payload, most specific first.
EMBEDDED_PAIR_PATHS: tuple[tuple[str | int, ...], ...] = (
    ("props", "pageProps", "pair"),
    ("props", "pageProps", "pairs", 0),
)

DATA_ATTRIBUTES: tuple[str, ...] = ("data-address", "data-token-address", "data-mint")

COPY_CONTROL_SELECTORS: tuple[str, ...] = (
    'button[class*="copy"]',
    "[data-clipboard]",
    '[class*="address"]',
)

# Launch-platform paths: /<mint> or /coin/<mint>, optionally followed by more segments.
LAUNCH_PATH_RE = re.compile(r"/(?:coin/)?([^/]+)")


# ---------------------------------------------------------------------------
# Tactic wrapper
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Tactic:
    """A named extraction step.

    Attributes:
        name: Identifier used in logs.
        extract: Generator proposing raw addresses for a context and family.
        needs_document: ``False`` for tactics that only read the URL.
    """

    name: str
    extract: Callable[[SiteContext, ChainFamily], Iterator[str]]
    needs_document: bool = True


# ---------------------------------------------------------------------------
# Outbound explorer links
# ---------------------------------------------------------------------------


def explorer_address_segment(href: str | None) -> str | None:
    """Return the address segment of a block-explorer link, or ``None``.

    Only the single path segment right after a known prefix is returned;
    query strings and trailing segments are discarded.
    """
    if not href:
        return None
    try:
        parts = urlsplit(href.strip())
    except ValueError:
        return None
    host = parts.hostname or ""
    for domain, prefixes in EXPLORER_LINKS:
        if host != domain and not host.endswith("." + domain):
            continue
        for prefix in prefixes:
            if parts.path.startswith(prefix):
                segment = parts.path[len(prefix) :].split("/", 1)[0]
                return segment or None
    return None


def explorer_links(context: SiteContext, family: ChainFamily) -> Iterator[str]:
    """Yield addresses linked from block-explorer anchors, in document order."""
    for anchor in context.document.query_selector_all("a[href]"):
        segment = explorer_address_segment(anchor.get_attribute("href"))
        if segment:
            yield segment


# ---------------------------------------------------------------------------
# Embedded data blob
# ---------------------------------------------------------------------------


def _walk(data: Any, path: tuple[str | int, ...]) -> Any:
    node = data
    for key in path:
        if isinstance(key, int):
            if not isinstance(node, list) or len(node) <= key:
                return None
            node = node[key]
        else:
            if not isinstance(node, dict):
                return None
            node = node.get(key)
    return node


def _member_address(pair: dict[str, Any], side: str) -> str | None:
    token = pair.get(side)
    if isinstance(token, dict) and isinstance(token.get("address"), str):
        return token["address"]
    return None


def find_pair(data: Any) -> dict[str, Any] | None:
    """Return the first pair object found along ``EMBEDDED_PAIR_PATHS``."""
    for path in EMBEDDED_PAIR_PATHS:
        node = _walk(data, path)
        if isinstance(node, dict):
            return node
    return None


def pick_pair_member(pair: dict[str, Any], family: ChainFamily) -> str | None:
    """Return the single pair member that is a valid, non-excluded address.

    When both members qualify the pair is ambiguous (neither side is a base
    asset) and ``None`` is returned, as it is when neither qualifies.
    """
    members = [_member_address(pair, "baseToken"), _member_address(pair, "quoteToken")]
    qualifying = list(
        dict.fromkeys(
            addr for addr in members if addr and is_valid_address(addr, family) and not is_excluded(addr, family)
        )
    )
    if len(qualifying) == 1:
        return qualifying[0]
    if qualifying:
        logger.debug("Embedded pair is ambiguous: both members look like target tokens %s", qualifying)
    return None


def embedded_pair(context: SiteContext, family: ChainFamily) -> Iterator[str]:
    """Yield the target token of the pair object in the embedded JSON payload.

    A missing element, malformed JSON or an unexpected shape all yield nothing.
    """
    elements = context.document.query_selector_all(EMBEDDED_DATA_SELECTOR)
    if not elements:
        return
    raw = element_text(elements[0])
    if not raw:
        return
    try:
        data = json.loads(raw)
    except (ValueError, RecursionError) as exc:
        logger.debug("Embedded data blob is not valid JSON: %s", exc)
        return
    pair = find_pair(data)
    if pair is None:
        logger.debug("Embedded data blob has no pair object at known paths")
        return
    address = pick_pair_member(pair, family)
    if address:
        yield address


# ---------------------------------------------------------------------------
# Data attributes
# ---------------------------------------------------------------------------


def data_attributes(context: SiteContext, family: ChainFamily) -> Iterator[str]:
    """Yield marker-attribute values, element by element in document order."""
    selector = ", ".join(f"[{attr}]" for attr in DATA_ATTRIBUTES)
    for element in context.document.query_selector_all(selector):
        for attr in DATA_ATTRIBUTES:
            value = element.get_attribute(attr)
            if value:
                yield value


# ---------------------------------------------------------------------------
# Clipboard affordances
# ---------------------------------------------------------------------------


def copy_controls(context: SiteContext, family: ChainFamily) -> Iterator[str]:
    """Yield the trimmed full text of "copy address" controls.

    The whole text is proposed as-is; since acceptance is an anchored grammar
    match, labels such as ``"CA: <address>"`` or truncated ``"7xKX…gAsU"``
    displays never qualify.
    """
    for element in context.document.query_selector_all(", ".join(COPY_CONTROL_SELECTORS)):
        text = element_text(element)
        if text:
            yield text


# ---------------------------------------------------------------------------
# URL path (launch platforms)
# ---------------------------------------------------------------------------


def launch_path(context: SiteContext, family: ChainFamily) -> Iterator[str]:
    """Yield the mint embedded in a launch-platform URL path."""
    try:
        path = urlsplit(context.url).path
    except ValueError:
        return
    match = LAUNCH_PATH_RE.match(path)
    if match:
        yield match.group(1)


EXPLORER_LINKS_TACTIC = Tactic("explorer_links", explorer_links)
EMBEDDED_PAIR_TACTIC = Tactic("embedded_pair", embedded_pair)
DATA_ATTRIBUTES_TACTIC = Tactic("data_attributes", data_attributes)
COPY_CONTROLS_TACTIC = Tactic("copy_controls", copy_controls)
LAUNCH_PATH_TACTIC = Tactic("launch_path", launch_path, needs_document=False)
