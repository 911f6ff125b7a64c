# scrape_scout/crawler/domain_filter.py
"""
Domain filtering: decides whether a discovered link may enter the crawl frontier.

Rule order is the policy: block list, then allow list (base domain always
allowed), then the cross-domain switch, then same-domain fallback.
"""
from __future__ import annotations

import logging
from typing import AbstractSet, Optional
from urllib.parse import urljoin

from scrape_scout.config import DomainFilterConfig
from scrape_scout.utils import (
    canonicalize_url,
    extract_domain,
    is_absolute_url,
    is_same_domain,
)

__all__ = ["should_enqueue", "DomainFilter"]

log = logging.getLogger("ScrapeScout")


def _resolve(link: str, base_url: str) -> Optional[str]:
    """Absolute parse first, then resolution against *base_url*."""
    try:
        candidate = link if is_absolute_url(link) else urljoin(base_url, link)
        if not is_absolute_url(candidate):
            return None
        return canonicalize_url(candidate)
    except ValueError:
        return None


def should_enqueue(
    link: str,
    base_url: str,
    base_domain: str,
    visited: AbstractSet[str],
    allow_domains: AbstractSet[str],
    block_domains: AbstractSet[str],
    cross_domain: bool,
) -> Optional[str]:
    """Return the canonical absolute URL if *link* may be crawled, else ``None``."""
    url = _resolve(link, base_url)
    if url is None:
        log.debug("Skipping invalid URL: %s", link)
        return None

    if url in visited:
        log.debug("Skipping already visited: %s", url)
        return None

    domain = extract_domain(url)
    if not domain:
        log.debug("Skipping URL with no domain: %s", url)
        return None

    if block_domains and domain in block_domains:
        log.debug("Blocked domain: %s (%s)", url, domain)
        return None

    if allow_domains:
        if domain == base_domain or domain in allow_domains:
            log.debug("Allowed domain: %s (%s)", url, domain)
            return url
        log.debug("Not in allow list: %s (%s)", url, domain)
        return None

    if cross_domain:
        log.debug("Cross-domain enabled: %s (%s)", url, domain)
        return url

    if is_same_domain(url, base_domain):
        log.debug("Same domain: %s (%s)", url, domain)
        return url
    log.debug("Different domain blocked: %s (%s)", url, domain)
    return None


class DomainFilter:
    """:func:`should_enqueue` bound to one crawl's seed and filter config."""

    def __init__(self, base_url: str, config: DomainFilterConfig) -> None:
        self.base_url = base_url
        self.base_domain = extract_domain(base_url)
        self.config = config

    def __call__(self, link: str, visited: AbstractSet[str]) -> Optional[str]:
        return should_enqueue(
            link,
            self.base_url,
            self.base_domain,
            visited,
            self.config.allow_domains,
            self.config.block_domains,
            self.config.cross_domain,
        )
