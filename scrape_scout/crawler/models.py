"""
Data models for the ScrapeScout crawler.

Records are frozen: a PageResult is built once by the extraction pipeline and
then only read (by the crawler and the report writers).
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True, slots=True)
class FetchResponse:
    """Raw outcome of one HTTP request."""

    url: str
    status_code: int
    body: str


@dataclass(frozen=True, slots=True)
class Link:
    text: str
    url: str


@dataclass(frozen=True, slots=True)
class Image:
    alt: str
    src: str


@dataclass(frozen=True, slots=True)
class Table:
    headers: List[str] = field(default_factory=list)
    rows: List[List[str]] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class CodeBlock:
    content: str
    language: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Metadata:
    """Meta tags and Open Graph properties; every field may be missing."""

    description: Optional[str] = None
    keywords: Optional[str] = None
    author: Optional[str] = None
    og_title: Optional[str] = None
    og_description: Optional[str] = None
    og_image: Optional[str] = None
    og_url: Optional[str] = None
    canonical_url: Optional[str] = None
    favicon: Optional[str] = None


@dataclass(frozen=True, slots=True)
class CustomSelectorResult:
    selector: str
    matches: List[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class PageResult:
    """Everything extracted from one successfully fetched page."""

    url: str
    status_code: int
    title: Optional[str] = None
    headings: List[str] = field(default_factory=list)
    paragraphs: List[str] = field(default_factory=list)
    links: List[Link] = field(default_factory=list)
    images: List[Image] = field(default_factory=list)
    tables: List[Table] = field(default_factory=list)
    code_blocks: List[CodeBlock] = field(default_factory=list)
    metadata: Optional[Metadata] = None
    custom_selectors: List[CustomSelectorResult] = field(default_factory=list)
    depth: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready dict; empty optional facets are left out."""
        data = asdict(self)
        for key in ("tables", "code_blocks", "custom_selectors"):
            if not data[key]:
                del data[key]
        for key in ("metadata", "depth"):
            if data[key] is None:
                del data[key]
        return data
