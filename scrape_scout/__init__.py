# scrape_scout/__init__.py
"""
ScrapeScout package initializer.
Defines package version and exposes CLI.
"""
__version__ = "0.2.0"

from scrape_scout.cli import cli  # noqa: E402

__all__ = ["__version__", "cli"]
