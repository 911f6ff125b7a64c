# scrape_scout/crawler/fetcher.py
"""
Fetcher module: performs exactly one HTTP GET per URL and maps transport
failures onto the ScrapeScout error taxonomy.

No retries, no backoff: a failed request is abandoned for the rest of the run.
"""
from __future__ import annotations

import asyncio
import logging

from aiohttp import ClientConnectionError, ClientError, ClientSession
from scrape_scout.config import ScraperConfig
from scrape_scout.crawler.models import FetchResponse
from scrape_scout.errors import NetworkError, RequestTimeoutError

log = logging.getLogger("ScrapeScout")


class Fetcher:
    """Single-attempt HTTP fetcher on top of a shared aiohttp session."""

    def __init__(self, session: ClientSession, config: ScraperConfig) -> None:
        self.session = session
        self.config = config

    async def fetch(self, url: str) -> FetchResponse:
        """
        GET *url* and return its status and decoded body.

        Raises RequestTimeoutError or NetworkError; HTTP error statuses are
        returned as-is and classified by the caller.
        """
        log.debug("Fetching: %s", url)
        if self.config.proxy:
            log.debug("Using proxy: %s", self.config.proxy)
        try:
            async with self.session.get(
                url, proxy=self.config.proxy, raise_for_status=False
            ) as resp:
                status = resp.status
                try:
                    body = await resp.text(errors="replace")
                except asyncio.TimeoutError:
                    raise RequestTimeoutError(self.config.timeout) from None
                except (ClientError, UnicodeDecodeError, LookupError) as exc:
                    raise NetworkError(
                        f"Failed to read response body from {url}: {exc}"
                    ) from exc
        except asyncio.TimeoutError:
            raise RequestTimeoutError(self.config.timeout) from None
        except ClientConnectionError as exc:
            raise NetworkError(f"Connection failed to {url}: {exc}") from exc
        except ClientError as exc:
            raise NetworkError(f"Request error for {url}: {exc}") from exc
        return FetchResponse(url=url, status_code=status, body=body)
