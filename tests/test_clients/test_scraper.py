"""Tests for the page scraper's URL guard."""

from __future__ import annotations

import asyncio
import socket
import time
from unittest.mock import patch

import pytest

from portfolio_api.clients.scraper import PageScraper
from portfolio_api.errors import MANUAL_PASTE_HINT, ScrapeError
from portfolio_api.pipeline.content_fetcher import ContentFetcher
from portfolio_api.utils.url_validator import SSRFError


class TestPageScraperGuard:
    async def test_rejects_private_address(self):
        with pytest.raises(ScrapeError) as exc_info:
            await PageScraper().scrape("http://127.0.0.1/jobs")
        assert exc_info.value.message == MANUAL_PASTE_HINT
        assert isinstance(exc_info.value.__cause__, SSRFError)

    async def test_rejects_unsupported_scheme(self):
        with pytest.raises(ScrapeError):
            await PageScraper().scrape("file:///etc/passwd")

    async def test_unresolvable_host_suggests_pasting(self):
        with patch("socket.getaddrinfo", side_effect=socket.gaierror("Name or service not known")):
            with pytest.raises(ScrapeError) as exc_info:
                await PageScraper().scrape("https://jobs.acme-typo.example/42")
        assert "copy and paste" in exc_info.value.message

    async def test_rejected_url_through_fetcher_suggests_pasting(self):
        fetcher = ContentFetcher(PageScraper().scrape)
        with pytest.raises(ScrapeError) as exc_info:
            await fetcher.resolve("http://localhost/jobs/1")
        assert "copy and paste" in exc_info.value.message

    async def test_dns_lookup_does_not_block_event_loop(self):
        def slow_lookup(*args, **kwargs):
            time.sleep(0.3)
            return [(socket.AF_INET, socket.SOCK_STREAM, 6, "", ("10.0.0.8", 0))]

        ticks = 0

        async def ticker():
            nonlocal ticks
            while True:
                await asyncio.sleep(0.02)
                ticks += 1

        tick_task = asyncio.create_task(ticker())
        try:
            with patch("socket.getaddrinfo", side_effect=slow_lookup):
                with pytest.raises(ScrapeError):
                    await PageScraper().scrape("https://careers.acme.example/42")
        finally:
            tick_task.cancel()
        assert ticks >= 5

    def test_defaults(self):
        scraper = PageScraper()
        assert scraper.timeout_ms == 30000
        assert scraper.settle_ms == 2000
