"""Resolution dispatcher — host-based strategy selection and the public entry point.

``resolve`` is the engine's only boundary. It never raises: hosts without a
strategy, exhausted tactics and failing document handles all come back as a
not-found ``ResolutionResult``.
"""

from __future__ import annotations

import logging
from urllib.parse import urlsplit

from mintscope.dom.document import PageDocument
from mintscope.models.resolution import NotFoundReason, ResolutionResult, SiteContext
from mintscope.resolution.chain import classify_chain
from mintscope.resolution.strategies import AGGREGATOR_STRATEGY, LAUNCHPAD_STRATEGY, Strategy

logger = logging.getLogger(__name__)

# Checked in order; the first host substring contained in the hostname wins.
HOST_RULES: tuple[tuple[str, Strategy], ...] = (
    ("dexscreener.com", AGGREGATOR_STRATEGY),
    ("pump.fun", LAUNCHPAD_STRATEGY),
)


def select_strategy(hostname: str) -> Strategy | None:
    """Return the strategy registered for *hostname*, or ``None``."""
    host = (hostname or "").lower()
    for needle, strategy in HOST_RULES:
        if needle in host:
            return strategy
    return None


def resolve(context: SiteContext) -> ResolutionResult:
    """Resolve the token address and chain a page is about.

    Args:
        context: Hostname, URL and document of the page at call time.

    Returns:
        ``ResolutionResult.resolved(address, chain)`` on success. Otherwise a
        not-found result; ``needs_fallback`` is set when the host has no
        strategy and the caller may apply its own URL heuristics.
    """
    strategy = select_strategy(context.hostname)
    if strategy is None:
        logger.debug("No resolution strategy for host %r", context.hostname)
        return ResolutionResult.not_found(NotFoundReason.NO_STRATEGY)

    chain = classify_chain(context.url)
    family = strategy.family_for(chain)
    logger.debug("Resolving %s with %s strategy (chain=%s, family=%s)", context.url, strategy.name, chain.value, family.value)

    try:
        candidate = strategy.run(context, family)
    except Exception as exc:
        logger.warning("%s strategy could not read the document for %s: %s", strategy.name, context.url, exc)
        return ResolutionResult.not_found(NotFoundReason.DOCUMENT_ERROR)

    if candidate is None:
        logger.info("%s strategy found no token on %s", strategy.name, context.url)
        return ResolutionResult.not_found(NotFoundReason.EXHAUSTED)

    logger.info(
        "Resolved %s on %s via %s (rank %d)",
        candidate.address,
        chain.value,
        candidate.tactic,
        candidate.rank,
    )
    return ResolutionResult.resolved(candidate.address, chain)


def resolve_page(url: str, document: PageDocument | None = None) -> ResolutionResult:
    """Convenience wrapper deriving the hostname from *url*."""
    try:
        hostname = urlsplit(url).hostname or ""
    except ValueError:
        hostname = ""
    return resolve(SiteContext(hostname=hostname, url=url, document=document))
