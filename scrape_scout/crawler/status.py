"""
HTTP status classification: maps a response code to a human-readable failure.

The messages are meant for the operator, so a 403 or a 429 reads as probable
blocking rather than as a bare transport error.
"""
from __future__ import annotations

from typing import Dict, Optional

from scrape_scout.errors import HttpStatusError, PageError, RateLimitedError

__all__ = ["classify_http_status", "STATUS_MESSAGES"]

STATUS_MESSAGES: Dict[int, str] = {
    400: "Bad Request - The server couldn't understand the request to {url}",
    401: "Unauthorized - Authentication required to access {url}",
    403: "Forbidden - Access denied to {url}. This may indicate bot protection.",
    404: "Not Found - The page {url} does not exist",
    500: "Internal Server Error - The server at {url} encountered an error",
    502: "Bad Gateway - The server at {url} received an invalid response",
    503: "Service Unavailable - The server at {url} is temporarily unavailable",
    504: "Gateway Timeout - The server at {url} took too long to respond",
}


def classify_http_status(status_code: int, url: str) -> Optional[PageError]:
    """Return ``None`` for 2xx, otherwise the error describing the failure.

    The error is returned, not raised, so callers decide whether the status
    is fatal for them.
    """
    if 200 <= status_code <= 299:
        return None
    if status_code == 429:
        return RateLimitedError(
            f"Too many requests to {url}. Please slow down and try again later."
        )
    template = STATUS_MESSAGES.get(status_code)
    if template is not None:
        return HttpStatusError(status_code, template.format(url=url))
    return HttpStatusError(status_code, f"HTTP error {status_code} while accessing {url}")
