"""scrape_scout.report.text_report: human-readable report rendered with Jinja2."""

from __future__ import annotations

from typing import Sequence

from jinja2 import Environment, PackageLoader, select_autoescape

from scrape_scout.crawler.models import PageResult

TEMPLATE_NAME = "report.txt.j2"


def truncate_text(text: str, max_len: int) -> str:
    """``"abcdef", 3`` → ``"abc..."``; shorter strings are returned as-is."""
    if len(text) > max_len:
        return f"{text[:max_len]}..."
    return text


def _environment() -> Environment:
    env = Environment(
        loader=PackageLoader("scrape_scout", "templates"),
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters["truncate_text"] = truncate_text
    return env


def format_text(results: Sequence[PageResult]) -> str:
    """Render *results* as the plain-text report (pages separated by a rule).

    Пример:
    ```python
    from scrape_scout.report.text_report import format_text
    print(format_text(pages))
    ```
    """
    template = _environment().get_template(TEMPLATE_NAME)
    return template.render(pages=results, rule="=" * 80)
