"""Playwright-backed live pages for command-line resolution.

The resolution engine reads a Playwright ``Page`` directly; this module only
owns the browser lifecycle around it. Requires ``playwright install chromium``
to have been run at least once.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from mintscope.exceptions import PageLoadError

if TYPE_CHECKING:
    from playwright.sync_api import Page

    from mintscope.settings.config import BrowserSettings

logger = logging.getLogger(__name__)


@contextmanager
def open_live_page(url: str, browser_settings: BrowserSettings) -> Iterator[Page]:
    """Launch Chromium, navigate to *url* and yield the page.

    Args:
        url: The page to load.
        browser_settings: Headless mode, navigation timeout, user agent and
            the load state to wait for.

    Raises:
        PageLoadError: If the browser cannot launch or navigation fails.
    """
    from playwright.sync_api import Error as PlaywrightError
    from playwright.sync_api import sync_playwright

    with sync_playwright() as pw:
        try:
            browser = pw.chromium.launch(headless=browser_settings.headless)
        except PlaywrightError as exc:
            raise PageLoadError(url, f"browser launch failed: {exc}") from exc

        context_args = {}
        if browser_settings.user_agent:
            context_args["user_agent"] = browser_settings.user_agent
        try:
            try:
                context = browser.new_context(**context_args)
                page = context.new_page()
                response = page.goto(
                    url,
                    wait_until=browser_settings.wait_until,
                    timeout=browser_settings.timeout_ms,
                )
            except PlaywrightError as exc:
                raise PageLoadError(url, str(exc)) from exc
            logger.info("Loaded %s (status=%s)", page.url, response.status if response else "n/a")
            yield page
        finally:
            # Closing the browser also closes any context it opened.
            browser.close()
