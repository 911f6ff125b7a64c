"""scrape_scout.crawler: fetching, filtering and breadth-first traversal."""
from scrape_scout.crawler.crawler import AsyncCrawler
from scrape_scout.crawler.models import PageResult

__all__ = ["AsyncCrawler", "PageResult"]
