# File: scrape_scout/errors.py
"""scrape_scout.errors: exception hierarchy for fetch, extraction and configuration failures.

Two families:

* configuration errors (:class:`InvalidUrlError`, :class:`InvalidSelectorError`)
  abort the whole run;
* :class:`PageError` subclasses are local to one URL: the crawler logs them
  and moves on to the next frontier entry.
"""
from __future__ import annotations

from typing import Optional

__all__ = [
    "ScraperError",
    "InvalidUrlError",
    "InvalidSelectorError",
    "DepthExceededError",
    "PageError",
    "RequestTimeoutError",
    "NetworkError",
    "HttpStatusError",
    "RateLimitedError",
    "AntiBotDetectedError",
]


class ScraperError(Exception):
    """Base class for every error raised by ScrapeScout."""


class InvalidUrlError(ScraperError):
    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Invalid URL: {detail}")


class InvalidSelectorError(ScraperError):
    def __init__(self, selector: str, reason: str) -> None:
        self.selector = selector
        self.reason = reason
        super().__init__(f"Invalid CSS selector: {selector}: {reason}")


class DepthExceededError(ScraperError):
    def __init__(self, max_depth: int) -> None:
        self.max_depth = max_depth
        super().__init__(f"Crawl depth exceeded maximum: {max_depth}")


class PageError(ScraperError):
    """A failure confined to a single URL."""


class RequestTimeoutError(PageError):
    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(f"Timeout: Request took longer than {timeout:g} seconds")


class NetworkError(PageError):
    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Network error: {detail}")


class HttpStatusError(PageError):
    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"HTTP {status_code}: {message}")


class RateLimitedError(HttpStatusError):
    """429 Too Many Requests; kept apart from generic HTTP failures."""

    def __init__(self, message: str, status_code: int = 429) -> None:
        super().__init__(status_code, message)

    def __str__(self) -> str:
        return f"Rate limited: {self.message}"


class AntiBotDetectedError(PageError):
    def __init__(self, reason: str, url: Optional[str] = None) -> None:
        self.reason = reason
        self.url = url
        super().__init__(f"Anti-bot protection detected: {reason}")
