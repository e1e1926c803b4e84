"""Caller-side fallbacks for pages the resolution engine has no strategy for.

These heuristics carry no site-specific reliability guarantee and therefore
live outside ``resolve``: a caller opts in after receiving a result whose
``needs_fallback`` is set.

* ``extract_mint_from_url`` — URL-only mint extraction for known swap and
  token sites, with a generic path-segment rule last.
* ``detect_addresses_in_text`` — candidate addresses in free page text.
* ``selected_address`` — a user's text selection, if it is exactly an address.
* ``resolve_with_fallback`` — ``resolve`` followed by the URL rules.
"""

from __future__ import annotations

import logging
import re
from urllib.parse import parse_qs, urlsplit

from mintscope.address.exclusions import is_excluded
from mintscope.address.grammar import SOLANA_GRAMMAR, detect_family, is_valid_address
from mintscope.models.chain import ChainFamily
from mintscope.models.resolution import ResolutionResult, SiteContext
from mintscope.resolution.chain import classify_chain
from mintscope.resolution.dispatcher import resolve

logger = logging.getLogger(__name__)

# Aggregator URLs carry pair addresses; taking one for a mint is the classic bug.
PAIR_URL_HOSTS: tuple[str, ...] = ("dexscreener.com",)

# (host substring, path regex with one group for the mint)
_PATH_RULES: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("pump.fun", re.compile(r"/(?:coin/)?([^/]+)")),
    ("jup.ag", re.compile(r"/swap/[^/-]+-([^/]+)")),
    ("gmgn.ai", re.compile(r"/[^/]+/token/([^/]+)")),
    ("birdeye.so", re.compile(r"/token/([^/]+)")),
    ("tinyastro.io", re.compile(r"(?:/[^/]+)?/lp/([^/]+)")),
)

# (host substring, query parameters checked in order)
_QUERY_RULES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("bullx.io", ("address",)),
    ("raydium.io", ("outputCurrency", "inputCurrency")),
)

_TOKEN_SPLIT_RE = re.compile(r"[^0-9A-Za-z]+")


def _is_target_mint(value: str) -> bool:
    return is_valid_address(value, ChainFamily.SOLANA) and not is_excluded(value, ChainFamily.SOLANA)


def extract_mint_from_url(url: str) -> str | None:
    """Return a Solana mint taken from *url* alone, or ``None``.

    Site-specific rules are tried first, then any path segment that is a
    valid Solana address. Registry addresses never qualify, so a swap URL
    quoting USDC falls through to its other currency. Pair-explorer URLs
    always return ``None``.
    """
    if not url:
        return None
    try:
        parts = urlsplit(url)
    except ValueError:
        return None
    host = (parts.hostname or "").lower()
    if not host:
        return None
    if any(needle in host for needle in PAIR_URL_HOSTS):
        return None

    for needle, pattern in _PATH_RULES:
        if needle in host:
            match = pattern.match(parts.path)
            if match and _is_target_mint(match.group(1)):
                return match.group(1)

    query = parse_qs(parts.query)
    for needle, params in _QUERY_RULES:
        if needle in host:
            for param in params:
                for value in query.get(param, []):
                    if _is_target_mint(value):
                        return value

    for segment in parts.path.split("/"):
        if _is_target_mint(segment):
            return segment
    return None


def detect_addresses_in_text(text: str, limit: int = 20) -> list[str]:
    """Return distinct Solana-looking addresses from free page text.

    Tokens are whitespace/punctuation-delimited and must be full grammar
    matches. Registry entries and single-case strings (usually words or
    hashes, rarely real mints) are dropped. At most *limit* are returned, in
    order of first appearance.
    """
    found: list[str] = []
    seen: set[str] = set()
    for token in _TOKEN_SPLIT_RE.split(text or ""):
        if token in seen or not SOLANA_GRAMMAR.accepts(token):
            continue
        seen.add(token)
        if is_excluded(token, ChainFamily.SOLANA):
            continue
        if token == token.lower() or token == token.upper():
            continue
        found.append(token)
        if len(found) >= limit:
            break
    return found


def selected_address(selection: str | None) -> str | None:
    """Return the trimmed *selection* if it is exactly an address of any family."""
    if not selection:
        return None
    text = selection.strip()
    return text if detect_family(text) is not None else None


def resolve_with_fallback(context: SiteContext) -> ResolutionResult:
    """Run ``resolve``; for hosts without a strategy, fall back to URL rules."""
    result = resolve(context)
    if not result.needs_fallback:
        return result
    mint = extract_mint_from_url(context.url)
    if mint is None:
        return result
    logger.info("URL fallback matched %s on %s", mint, context.hostname)
    return ResolutionResult.resolved(mint, classify_chain(context.url))
