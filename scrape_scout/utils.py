# File: scrape_scout/utils.py
"""scrape_scout.utils: URL helpers (normalization, canonical form, domains) and the URL-list loader."""

from __future__ import annotations

import ipaddress
from pathlib import Path
from typing import FrozenSet, List, Optional, Sequence, Union
from urllib.parse import urljoin, urlsplit, urlunsplit

from scrape_scout.errors import InvalidUrlError
from scrape_scout.logger import logger

__all__: Sequence[str] = (
    "normalize_url",
    "canonicalize_url",
    "extract_domain",
    "is_same_domain",
    "is_absolute_url",
    "validate_seed_url",
    "parse_domain_list",
    "read_url_file",
)

_DEFAULT_PORTS = {"http": 80, "https": 443}


def normalize_url(base_url: str, candidate: str) -> Optional[str]:
    """Resolve *candidate* (possibly relative) against *base_url*.

    Absolute http(s) references pass through untouched, protocol-relative
    ``//host/...`` references get ``https:``, everything else goes through
    RFC 3986 resolution. Returns ``None`` instead of a relative URL.
    """
    if candidate.startswith(("http://", "https://")):
        return candidate
    if candidate.startswith("//"):
        return f"https:{candidate}"
    try:
        joined = urljoin(base_url, candidate)
        scheme = urlsplit(joined).scheme
    except ValueError as exc:
        logger.debug("Cannot resolve %r against %s: %s", candidate, base_url, exc)
        return None
    if not scheme:
        return None
    return joined


def canonicalize_url(url: str) -> str:
    """Canonical string form used for deduplication.

    Lower-cases scheme and host, drops default ports and turns an empty path
    into ``/``. Query and fragment are preserved. Raises ``ValueError`` for
    URLs whose port or host cannot be parsed.
    """
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    host = parts.hostname or ""
    if ":" in host:
        host = f"[{host}]"
    netloc = host
    if parts.username is not None:
        userinfo = parts.username
        if parts.password is not None:
            userinfo += f":{parts.password}"
        netloc = f"{userinfo}@{netloc}"
    port = parts.port
    if port is not None and _DEFAULT_PORTS.get(scheme) != port:
        netloc += f":{port}"
    path = parts.path or ("/" if netloc else "")
    return urlunsplit((scheme, netloc, path, parts.query, parts.fragment))


def extract_domain(url: str) -> str:
    """Lower-cased host name of *url*; ``""`` when it has none or the host is an IP literal."""
    try:
        host = urlsplit(url).hostname or ""
    except ValueError:
        return ""
    try:
        ipaddress.ip_address(host)
    except ValueError:
        return host
    return ""


def is_same_domain(url: str, base_domain: str) -> bool:
    """Exact host comparison: subdomains count as different domains."""
    domain = extract_domain(url)
    return bool(domain) and domain == base_domain.lower()


def is_absolute_url(url: str) -> bool:
    try:
        parts = urlsplit(url)
    except ValueError:
        return False
    return bool(parts.scheme and parts.netloc)


def validate_seed_url(url: str) -> str:
    """Check a user-supplied start URL; returns its canonical form.

    Raises :class:`InvalidUrlError` for anything that is not an absolute
    http(s) URL with a host.
    """
    try:
        parts = urlsplit(url)
        host = parts.hostname
        parts.port  # noqa: B018 - raises ValueError on a malformed port
    except ValueError as exc:
        raise InvalidUrlError(f"{url}: {exc}") from exc
    if parts.scheme.lower() not in _DEFAULT_PORTS:
        raise InvalidUrlError(f"{url}: scheme must be http or https")
    if not host:
        raise InvalidUrlError(f"{url}: URL has no domain")
    return canonicalize_url(url)


def parse_domain_list(domains: Union[str, Sequence[str], None]) -> FrozenSet[str]:
    """``"A.com, b.com,,"`` → ``frozenset({"a.com", "b.com"})``."""
    if domains is None:
        return frozenset()
    items = domains.split(",") if isinstance(domains, str) else domains
    return frozenset(d.strip().lower() for d in items if d and d.strip())


def read_url_file(path: Union[str, Path]) -> List[str]:
    """Read one URL per line, skipping blanks and ``#`` comments.

    Invalid lines are dropped with a warning. Raises ``ValueError`` when the
    file yields no valid URL at all.
    """
    p = Path(path).expanduser()
    try:
        text = p.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise FileNotFoundError(f"Failed to open URL file '{p}': {exc.strerror}") from exc
    except OSError as exc:
        raise OSError(f"Failed to open URL file '{p}': {exc}") from exc

    urls: List[str] = []
    for line_num, line in enumerate(text.splitlines(), start=1):
        trimmed = line.strip()
        if not trimmed or trimmed.startswith("#"):
            continue
        if not is_absolute_url(trimmed):
            logger.warning("Skipping invalid URL on line %d in '%s': %s", line_num, p, trimmed)
            continue
        urls.append(trimmed)

    if not urls:
        raise ValueError(f"No valid URLs found in file '{p}'")
    logger.info("Loaded %d URL(s) from file '%s'", len(urls), p)
    return urls
