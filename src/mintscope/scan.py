"""Caller-side scanning: fresh resolutions against snapshots and live pages.

``resolve`` reads the document exactly once per tactic and never retries.
Single-page apps, however, render their token panel some time after
navigation, so the live scan below calls ``resolve`` again with a brand-new
``SiteContext`` on each attempt, backing off linearly between attempts. A
document error (a client-side navigation destroying the execution context)
is retried the same way as an exhausted strategy.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from urllib.parse import urlsplit

from mintscope.fallback import resolve_with_fallback
from mintscope.models.resolution import NotFoundReason, ResolutionResult, SiteContext
from mintscope.resolution.dispatcher import resolve

if TYPE_CHECKING:
    from mintscope.dom.document import PageDocument
    from mintscope.settings.config import Settings

logger = logging.getLogger(__name__)

# Outcomes that can change while a single-page app renders or re-navigates.
_SETTLING_REASONS = frozenset({NotFoundReason.EXHAUSTED, NotFoundReason.DOCUMENT_ERROR})


def build_context(url: str, document: PageDocument | None) -> SiteContext:
    """Build a ``SiteContext`` for *url*, deriving the hostname."""
    try:
        hostname = urlsplit(url).hostname or ""
    except ValueError:
        hostname = ""
    return SiteContext(hostname=hostname, url=url, document=document)


def scan_document(url: str, document: PageDocument | None, use_fallback: bool = True) -> ResolutionResult:
    """Resolve once against an already-loaded document."""
    context = build_context(url, document)
    return resolve_with_fallback(context) if use_fallback else resolve(context)


def scan_live(url: str, settings: Settings, use_fallback: bool = True) -> ResolutionResult:
    """Load *url* in a browser and resolve, retrying while the page settles.

    Raises:
        PageLoadError: If the page cannot be loaded at all.
    """
    from mintscope.dom.live import open_live_page

    attempts = settings.scan.max_attempts
    backoff_ms = settings.scan.retry_backoff_ms

    with open_live_page(url, settings.browser) as page:
        result = ResolutionResult.not_found(NotFoundReason.EXHAUSTED)
        for attempt in range(1, attempts + 1):
            result = scan_document(page.url, page, use_fallback=use_fallback)
            if result.found or result.reason not in _SETTLING_REASONS:
                return result
            if attempt < attempts:
                delay = backoff_ms * attempt
                logger.debug("Attempt %d/%d found nothing on %s, retrying in %dms", attempt, attempts, page.url, delay)
                page.wait_for_timeout(delay)
        logger.info("No token resolved on %s after %d attempts", url, attempts)
        return result
