"""scrape_scout.parser: structured extraction from HTML documents."""
from scrape_scout.parser.html_parser import PageExtractor, parse_document

__all__ = ["PageExtractor", "parse_document"]
