# === FILE: scrape_scout/scanner.py ===
"""
Модуль-обёртка для функции запуска сканирования.
"""
from typing import List, Sequence

from scrape_scout.config import ScraperConfig
from scrape_scout.crawler.crawler import AsyncCrawler
from scrape_scout.crawler.models import PageResult
from scrape_scout.logger import logger


async def start_scan(cfg: ScraperConfig, urls: Sequence[str]) -> List[PageResult]:
    """
    Запускает краулер в контексте и возвращает список PageResult.

    Parameters
    ----------
    cfg : ScraperConfig
        Конфигурация запуска.
    urls : Sequence[str]
        Стартовые URL. В режиме crawl используется только первый.

    Returns
    -------
    List[PageResult]
        Успешно обработанные страницы в порядке обхода.
    """
    if not urls:
        raise ValueError("No URLs provided")
    async with AsyncCrawler(cfg) as crawler:
        if cfg.crawl:
            if len(urls) > 1:
                logger.warning("Crawl mode only uses the first URL provided")
            return await crawler.crawl(urls[0])
        return await crawler.scrape_many(urls)

__all__ = ["start_scan"]
