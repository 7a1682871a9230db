"""Resolve a job-description input that may be a URL into plain text."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable

from portfolio_api.errors import ScrapeError
from portfolio_api.models.plan import is_url
from portfolio_api.parsers.jd_parser import parse_jd

logger = logging.getLogger(__name__)

Scraper = Callable[[str], Awaitable[str]]


class ContentFetcher:
    """Turns URL input into scraped text; passes any other text through.

    Near-empty extractions are treated as failures because sites that
    block automated access usually return a stub page rather than an error.
    """

    def __init__(self, scrape: Scraper, min_text_length: int = 50):
        self.scrape = scrape
        self.min_text_length = min_text_length

    async def resolve(self, text: str) -> str:
        if not is_url(text):
            return text

        url = text.strip()
        try:
            raw = await self.scrape(url)
        except ScrapeError:
            raise
        except Exception as exc:
            logger.warning("Scraper raised for %s", url, exc_info=True)
            raise ScrapeError() from exc

        cleaned = parse_jd(raw or "")
        if len(cleaned) < self.min_text_length:
            logger.info(
                "Scraped text too short for %s (%d chars)", url, len(cleaned)
            )
            raise ScrapeError(error="Could not extract job description from URL")
        return cleaned
