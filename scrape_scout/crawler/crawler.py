from __future__ import annotations

import asyncio
import logging
import time
from typing import List, Optional, Protocol, Sequence

from aiohttp import ClientSession, ClientTimeout

from scrape_scout.config import ScraperConfig
from scrape_scout.crawler.antibot import detect_anti_bot
from scrape_scout.crawler.domain_filter import DomainFilter
from scrape_scout.crawler.fetcher import Fetcher
from scrape_scout.crawler.frontier import Frontier
from scrape_scout.crawler.models import FetchResponse, PageResult
from scrape_scout.crawler.status import classify_http_status
from scrape_scout.errors import AntiBotDetectedError, DepthExceededError, PageError
from scrape_scout.parser.html_parser import PageExtractor, extract_title, parse_document
from scrape_scout.utils import validate_seed_url

__all__ = ("AsyncCrawler", "FetcherProtocol")


class FetcherProtocol(Protocol):
    async def fetch(self, url: str) -> FetchResponse: ...


class AsyncCrawler:
    """Sequential breadth-first crawler: one request in flight, fixed delay between requests."""

    def __init__(self, config: ScraperConfig, fetcher: Optional[FetcherProtocol] = None) -> None:
        self.config = config
        self.extractor = PageExtractor(config)
        self.fetcher: Optional[FetcherProtocol] = fetcher
        self.session: Optional[ClientSession] = None
        self.logger = logging.getLogger("ScrapeScout")
        self.frontier: Optional[Frontier] = None

    async def __aenter__(self) -> AsyncCrawler:
        if self.fetcher is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                headers={"User-Agent": self.config.user_agent},
                raise_for_status=False,
            )
            self.fetcher = Fetcher(self.session, self.config)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    # ------------------------------------------------------------------ #
    # Single page                                                        #
    # ------------------------------------------------------------------ #

    async def scrape_page(self, url: str, depth: Optional[int] = None) -> PageResult:
        """Fetch, classify, screen for bot walls and extract one page.

        Per-page problems raise a PageError subclass; InvalidSelectorError
        propagates untouched.
        """
        if self.fetcher is None:
            raise RuntimeError("Crawler not started; use 'async with AsyncCrawler(...)'")
        response = await self.fetcher.fetch(url)

        error = classify_http_status(response.status_code, url)
        if error is not None:
            raise error

        soup = parse_document(response.body)
        title = extract_title(soup)
        reason = detect_anti_bot(response.body, title)
        if reason is not None:
            self.logger.warning("Anti-bot detection for %s: %s", url, reason)
            raise AntiBotDetectedError(reason, url)

        return self.extractor.extract(soup, url, response.status_code, depth, title=title)

    # ------------------------------------------------------------------ #
    # Modes                                                              #
    # ------------------------------------------------------------------ #

    async def scrape_many(self, urls: Sequence[str]) -> List[PageResult]:
        """Non-crawl mode: every URL fetched once, no link following."""
        for url in urls:
            validate_seed_url(url)

        results: List[PageResult] = []
        for index, url in enumerate(urls):
            self.logger.info("Scraping: %s", url)
            try:
                results.append(await self.scrape_page(url))
            except PageError as exc:
                self.logger.warning("Failed to scrape %s: %s", url, exc)
            if index < len(urls) - 1:
                await self._throttle()
        return results

    async def crawl(self, start_url: str) -> List[PageResult]:
        """Breadth-first traversal from *start_url* within depth/page/domain limits."""
        root = validate_seed_url(start_url)
        cfg = self.config
        domain_filter = DomainFilter(root, cfg.domain_filter)
        frontier = Frontier(cfg.max_depth)
        self.frontier = frontier
        frontier.push(root, 0)

        self.logger.info("Starting crawl from: %s", root)
        self.logger.info("Max depth: %d, Max pages: %d", cfg.max_depth, cfg.max_pages)
        if cfg.allow_domains:
            self.logger.info("Allow domains: %s", ", ".join(sorted(cfg.allow_domains)))
        if cfg.block_domains:
            self.logger.info("Block domains: %s", ", ".join(sorted(cfg.block_domains)))
        if cfg.cross_domain:
            self.logger.info("Cross-domain crawling enabled")
        elif not cfg.allow_domains and not cfg.block_domains:
            self.logger.info("Same-domain only (default)")

        start = time.monotonic()
        results: List[PageResult] = []
        while frontier and len(results) < cfg.max_pages:
            url, depth = frontier.pop()
            if frontier.is_visited(url):
                continue
            try:
                frontier.check_depth(depth)
            except DepthExceededError as exc:
                self.logger.debug("Skipping %s (depth %d): %s", url, depth, exc)
                continue

            frontier.mark_visited(url)
            self.logger.info("Crawling: %s (depth: %d)", url, depth)
            try:
                page = await self.scrape_page(url, depth)
            except PageError as exc:
                self.logger.warning("Failed to crawl %s: %s", url, exc)
            else:
                results.append(page)
                if depth < cfg.max_depth:
                    for link in page.links:
                        accepted = domain_filter(link.url, frontier.visited)
                        if accepted is not None:
                            frontier.push(accepted, depth + 1)
            await self._throttle()

        duration = time.monotonic() - start
        self.logger.info("Crawl finished: %d page(s) in %.2f s", len(results), duration)
        return results

    async def _throttle(self) -> None:
        delay = self.config.delay_seconds
        if delay > 0:
            self.logger.debug("Waiting %dms before next request", self.config.delay_ms)
            await asyncio.sleep(delay)
