# scrape_scout/report/csv_report.py
"""CSV summary: one row per page with facet counts."""
from __future__ import annotations

import csv
import io
from typing import Sequence

from scrape_scout.crawler.models import PageResult

CSV_HEADER = (
    "url",
    "status_code",
    "title",
    "headings_count",
    "paragraphs_count",
    "links_count",
    "images_count",
    "tables_count",
    "code_blocks_count",
    "depth",
)


def format_csv(results: Sequence[PageResult]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for page in results:
        writer.writerow(
            (
                page.url,
                page.status_code,
                page.title or "",
                len(page.headings),
                len(page.paragraphs),
                len(page.links),
                len(page.images),
                len(page.tables),
                len(page.code_blocks),
                "" if page.depth is None else page.depth,
            )
        )
    return buffer.getvalue()
