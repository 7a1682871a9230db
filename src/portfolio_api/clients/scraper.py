"""Render a job posting URL with a headless browser and return its visible text."""

from __future__ import annotations

import asyncio
import logging

from portfolio_api.errors import ScrapeError
from portfolio_api.utils.url_validator import validate_url

logger = logging.getLogger(__name__)


class PageScraper:
    """Playwright-backed scraper. Handles SPA/JS-rendered job boards."""

    def __init__(self, timeout_ms: int = 30000, settle_ms: int = 2000):
        self.timeout_ms = timeout_ms
        self.settle_ms = settle_ms

    async def scrape(self, url: str) -> str:
        """Return ``document.body.innerText`` for ``url``.

        Raises:
            ScrapeError: the URL is rejected, the page cannot be loaded,
                or the browser fails.
        """
        try:
            # getaddrinfo blocks; keep it off the event loop
            await asyncio.to_thread(validate_url, url)
        except ValueError as exc:
            logger.warning("Refusing to scrape %s: %s", url, exc)
            raise ScrapeError() from exc

        from playwright.async_api import Error as PlaywrightError
        from playwright.async_api import async_playwright

        logger.info("Scraping job description: %s", url)
        try:
            async with async_playwright() as p:
                browser = await p.chromium.launch(headless=True)
                try:
                    page = await browser.new_page()
                    await page.goto(url, wait_until="networkidle", timeout=self.timeout_ms)
                    # Wait a bit for dynamic content
                    await page.wait_for_timeout(self.settle_ms)
                    text = await page.evaluate("() => document.body ? document.body.innerText : ''")
                finally:
                    await browser.close()
        except PlaywrightError as exc:
            logger.warning("Scrape failed for %s: %s", url, exc)
            raise ScrapeError() from exc

        return text or ""
