"""HTML extraction pipeline for ScrapeScout.

Turns a fetched document into a :class:`~scrape_scout.crawler.models.PageResult`.
Every facet has its own ``extract_*`` function so it can be tested (and can
fail) on its own:

* title: first ``<title>`` text, trimmed, ``None`` if absent;
* headings: ``h1`` … ``h6``, level by level, blanks dropped;
* paragraphs: ``<p>`` texts, blanks dropped;
* links / images: resolved to absolute URLs via :func:`normalize_url`;
* tables: headers and per-row cells, each table queried in isolation;
* code blocks: ``<pre><code>``, bare ``<pre>`` and inline ``<code>``;
* metadata: meta description/keywords/author, Open Graph, canonical, favicon;
* custom selectors: user CSS selectors, in request order.

:class:`PageExtractor` runs them all. A bug in one facet is logged and the
facet comes back empty; an invalid custom selector, however, is a user
mistake and raises :class:`~scrape_scout.errors.InvalidSelectorError`.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Callable, List, Optional, TypeVar

from bs4 import BeautifulSoup
from bs4.element import Tag
from soupsieve import SelectorSyntaxError

from scrape_scout.config import ScraperConfig
from scrape_scout.crawler.models import (
    CodeBlock,
    CustomSelectorResult,
    Image,
    Link,
    Metadata,
    PageResult,
    Table,
)
from scrape_scout.errors import InvalidSelectorError
from scrape_scout.utils import normalize_url

__all__: Sequence[str] = (
    "PageExtractor",
    "parse_document",
    "extract_title",
    "extract_headings",
    "extract_paragraphs",
    "extract_links",
    "extract_images",
    "extract_tables",
    "extract_code_blocks",
    "extract_metadata",
    "process_custom_selectors",
)

log = logging.getLogger("ScrapeScout")

_PARSER = "lxml"
_HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")
_LANGUAGE_PREFIXES = ("language-", "lang-")

_META_FIELDS = {
    "description": "description",
    "keywords": "keywords",
    "author": "author",
    "og:title": "og_title",
    "og:description": "og_description",
    "og:image": "og_image",
    "og:url": "og_url",
}

T = TypeVar("T")


def parse_document(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, _PARSER)


def _text(tag: Tag) -> str:
    return tag.get_text()


def _attr(tag: Tag, name: str) -> Optional[str]:
    """Attribute as a plain string (bs4 returns lists for multi-valued ones)."""
    value = tag.get(name)
    if value is None:
        return None
    if isinstance(value, list):
        return " ".join(value)
    return str(value)


# ---------------------------------------------------------------------------
# Facets
# ---------------------------------------------------------------------------


def extract_title(soup: BeautifulSoup) -> Optional[str]:
    tag = soup.find("title")
    return _text(tag).strip() if tag is not None else None


def extract_headings(soup: BeautifulSoup) -> List[str]:
    headings: List[str] = []
    for name in _HEADING_TAGS:
        for tag in soup.find_all(name):
            text = _text(tag).strip()
            if text:
                headings.append(text)
    return headings


def extract_paragraphs(soup: BeautifulSoup) -> List[str]:
    return [text for text in (_text(p).strip() for p in soup.find_all("p")) if text]


def extract_links(soup: BeautifulSoup, base_url: str) -> List[Link]:
    links: List[Link] = []
    for tag in soup.find_all("a"):
        href = _attr(tag, "href")
        if href is None:
            continue
        absolute = normalize_url(base_url, href.strip())
        if absolute is None:
            continue
        text = _text(tag).strip()
        links.append(Link(text=text or href, url=absolute))
    return links


def extract_images(soup: BeautifulSoup, base_url: str) -> List[Image]:
    images: List[Image] = []
    for tag in soup.find_all("img"):
        src = _attr(tag, "src")
        if src is None:
            continue
        absolute = normalize_url(base_url, src.strip())
        if absolute is None:
            continue
        images.append(Image(alt=_attr(tag, "alt") or "", src=absolute))
    return images


def extract_tables(soup: BeautifulSoup) -> List[Table]:
    """One :class:`Table` per ``<table>`` that has a header or a data row.

    The table's inner markup is re-parsed as its own fragment before
    querying, so ``th``/``tr``/``td`` lookups stay inside it. Cells of a
    nested table still belong to the enclosing table's subtree and are
    reported with it.
    """
    tables: List[Table] = []
    for table in soup.find_all("table"):
        fragment = parse_document(f"<table>{table.decode_contents()}</table>")
        headers = [t for t in (_text(th).strip() for th in fragment.find_all("th")) if t]
        rows: List[List[str]] = []
        for tr in fragment.find_all("tr"):
            cells = [_text(td).strip() for td in tr.find_all("td")]
            if cells:
                rows.append(cells)
        if headers or rows:
            tables.append(Table(headers=headers, rows=rows))
    return tables


def _code_language(tag: Tag) -> Optional[str]:
    classes = tag.get("class") or []
    if isinstance(classes, str):
        classes = classes.split()
    for cls in classes:
        for prefix in _LANGUAGE_PREFIXES:
            if cls.startswith(prefix):
                return cls[len(prefix):]
    return None


def extract_code_blocks(soup: BeautifulSoup) -> List[CodeBlock]:
    """Code from ``<pre><code>``, bare ``<pre>`` and inline ``<code>``.

    Content is kept exactly as in the document (whitespace included); blocks
    that are blank once trimmed are skipped.
    """
    blocks: List[CodeBlock] = []

    for pre in soup.find_all("pre"):
        codes = pre.find_all("code")
        if codes:
            for code in codes:
                content = _text(code)
                if content.strip():
                    blocks.append(CodeBlock(content=content, language=_code_language(code)))
        else:
            content = _text(pre)
            if content.strip():
                blocks.append(CodeBlock(content=content))

    for code in soup.find_all("code"):
        if code.find_parent("pre") is not None:
            continue
        content = _text(code)
        if content.strip():
            blocks.append(CodeBlock(content=content, language=_code_language(code)))

    return blocks


def extract_metadata(soup: BeautifulSoup) -> Metadata:
    found: dict[str, str] = {}

    for meta in soup.find_all("meta"):
        key = _attr(meta, "name")
        if key is None:
            key = _attr(meta, "property")
        content = _attr(meta, "content")
        if key is None or content is None:
            continue
        field_name = _META_FIELDS.get(key.lower())
        if field_name:
            found[field_name] = content

    for link in soup.find_all("link"):
        rel = _attr(link, "rel")
        href = _attr(link, "href")
        if rel is None or href is None:
            continue
        rel = rel.lower()
        if rel == "canonical":
            found["canonical_url"] = href
        elif rel in ("icon", "shortcut icon"):
            found["favicon"] = href

    return Metadata(**found)


def process_custom_selectors(
    soup: BeautifulSoup, selectors: Sequence[str]
) -> List[CustomSelectorResult]:
    results: List[CustomSelectorResult] = []
    for selector in selectors:
        try:
            elements = soup.select(selector)
        except (SelectorSyntaxError, NotImplementedError) as exc:
            log.error("Invalid selector '%s': %s", selector, exc)
            raise InvalidSelectorError(selector, str(exc)) from exc
        matches = [t for t in (_text(el).strip() for el in elements) if t]
        log.debug("Custom selector '%s' found %d matches", selector, len(matches))
        results.append(CustomSelectorResult(selector=selector, matches=matches))
    return results


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


class PageExtractor:
    """Runs every facet over one document, driven by the run's config."""

    def __init__(self, config: ScraperConfig) -> None:
        self.config = config

    @staticmethod
    def _guarded(name: str, fn: Callable[..., T], default: T, *args: Any) -> T:
        try:
            return fn(*args)
        except Exception as exc:  # noqa: BLE001
            log.warning("Extraction of %s failed: %s", name, exc)
            return default

    def extract(
        self,
        soup: BeautifulSoup,
        url: str,
        status_code: int,
        depth: Optional[int] = None,
        title: Optional[str] = None,
    ) -> PageResult:
        """Build the PageResult for *soup*; *title* may be passed if already known."""
        g = self._guarded
        if title is None:
            title = g("title", extract_title, None, soup)
        metadata = g("metadata", extract_metadata, Metadata(), soup) if self.config.metadata else None
        return PageResult(
            url=url,
            status_code=status_code,
            title=title,
            headings=g("headings", extract_headings, [], soup),
            paragraphs=g("paragraphs", extract_paragraphs, [], soup),
            links=g("links", extract_links, [], soup, url),
            images=g("images", extract_images, [], soup, url),
            tables=g("tables", extract_tables, [], soup),
            code_blocks=g("code blocks", extract_code_blocks, [], soup),
            metadata=metadata,
            custom_selectors=process_custom_selectors(soup, self.config.selectors),
            depth=depth,
        )

    def extract_html(
        self, html: str, url: str, status_code: int = 200, depth: Optional[int] = None
    ) -> PageResult:
        return self.extract(parse_document(html), url, status_code, depth)
