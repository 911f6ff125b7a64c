# File: scrape_scout/report/__init__.py
"""scrape_scout.report: rendering of crawl results (JSON, CSV, text) for the CLI and tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, List, Sequence, Union

from scrape_scout.crawler.models import PageResult
from scrape_scout.logger import logger
from scrape_scout.report.csv_report import format_csv
from scrape_scout.report.json_report import format_json
from scrape_scout.report.text_report import format_text

Formatter = Callable[[Sequence[PageResult]], str]

FORMATTERS: Dict[str, Formatter] = {
    "json": format_json,
    "csv": format_csv,
    "text": format_text,
    "txt": format_text,
}

EXTENSIONS: Dict[str, str] = {"json": "json", "csv": "csv", "text": "txt", "txt": "txt"}


def _formatter(fmt: str) -> Formatter:
    try:
        return FORMATTERS[fmt.lower()]
    except KeyError:
        raise ValueError(f"Unknown format '{fmt}'. Use: json, csv, or text") from None


def render(results: Sequence[PageResult], fmt: str) -> str:
    """Render all *results* into one string in format *fmt*."""
    return _formatter(fmt)(results)


def write_report(
    results: Sequence[PageResult],
    fmt: str,
    output: Union[str, Path],
    per_page: bool = False,
) -> List[Path]:
    """Write *results* to *output*; with *per_page*, *output* is a filename prefix.

    Per-page files are named ``{prefix}_{NNN}.{ext}`` (1-based, zero-padded).
    Returns the written paths.
    """
    formatter = _formatter(fmt)
    if not per_page:
        path = Path(output)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(formatter(results), encoding="utf-8")
        logger.info("Output saved to: %s", path)
        return [path]

    ext = EXTENSIONS[fmt.lower()]
    logger.info("Writing %d pages to individual files with prefix '%s'", len(results), output)
    written: List[Path] = []
    for index, page in enumerate(results, start=1):
        path = Path(f"{output}_{index:03d}.{ext}")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(formatter([page]), encoding="utf-8")
        logger.info("Saved: %s", path)
        written.append(path)
    return written


__all__ = [
    "FORMATTERS",
    "render",
    "write_report",
    "format_json",
    "format_csv",
    "format_text",
]
