"""Playwright page loader for MCH arena and tournament pages."""

from __future__ import annotations

import logging

from playwright.sync_api import Page, sync_playwright
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from tap_mch_users import config
from tap_mch_users.layouts import LAYOUTS

logger = logging.getLogger(__name__)

# Either roster container means the page has rendered its user list.
ROSTER_READY_SELECTOR = ", ".join(layout.container_selector for layout in LAYOUTS)


def read_saved_page(path: str) -> str:
    """Read a page saved from the browser ("Save page as... / HTML only")."""
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def load_page_html(
    page_url: str | None = None,
    html_file: str | None = None,
    headless: bool = True,
    wait_timeout_ms: int = config.PAGE_WAIT_TIMEOUT_MS,
) -> str:
    """Return page HTML from a saved file if given, else by rendering the URL."""
    if html_file:
        logger.info("Reading saved page: %s", html_file)
        return read_saved_page(html_file)
    if page_url:
        return RosterPageScraper(page_url, headless, wait_timeout_ms).scrape()
    raise ValueError("Either page_url or html_file must be provided")


class RosterPageScraper:
    """Renders an MCH page in headless Chromium and returns its HTML."""

    def __init__(
        self,
        page_url: str,
        headless: bool = True,
        wait_timeout_ms: int = config.PAGE_WAIT_TIMEOUT_MS,
    ) -> None:
        self.page_url = page_url
        self.headless = headless
        self.wait_timeout_ms = int(wait_timeout_ms)
        self.resolved_url: str | None = None

    def scrape(self) -> str:
        """Load the page and return the rendered HTML."""
        logger.info("Loading roster page: %s", self.page_url)
        with sync_playwright() as p:
            browser = p.chromium.launch(
                headless=self.headless,
                args=[
                    "--disable-blink-features=AutomationControlled",
                    "--disable-dev-shm-usage",
                    "--no-sandbox",
                ],
            )
            try:
                context = browser.new_context(
                    user_agent="Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36",
                    viewport={"width": 1920, "height": 1080},
                    locale="ja-JP",
                    timezone_id="Asia/Tokyo",
                )
                page = context.new_page()
                self._navigate(page)
                self._wait_for_roster(page)
                return page.content()
            finally:
                browser.close()

    def _navigate(self, page: Page) -> None:
        try:
            page.goto(self.page_url, wait_until="domcontentloaded", timeout=60000)
        except PlaywrightTimeoutError as e:
            logger.warning("domcontentloaded failed: %s, trying load...", e)
            page.goto(self.page_url, wait_until="load", timeout=60000)

        self.resolved_url = page.url
        logger.info("Resolved URL: %s", self.resolved_url)

    def _wait_for_roster(self, page: Page) -> None:
        """Wait until a league list or tournament bracket is in the DOM.

        A timeout is not fatal here; the extractor decides whether the page
        holds a roster.
        """
        try:
            page.wait_for_selector(ROSTER_READY_SELECTOR, timeout=self.wait_timeout_ms)
        except PlaywrightTimeoutError:
            logger.warning(
                "No roster container appeared within %d ms on %s",
                self.wait_timeout_ms,
                self.resolved_url or self.page_url,
            )
