"""
Anti-bot detection: spots challenge pages served instead of real content.

Detection is a table of :class:`AntiBotRule` entries evaluated in order; the
first match wins. Adding a signature means appending a rule, not touching
:func:`detect_anti_bot`.
"""
from __future__ import annotations

from typing import Callable, NamedTuple, Optional, Sequence

__all__ = ["AntiBotRule", "ANTI_BOT_RULES", "detect_anti_bot"]

Predicate = Callable[[str, Optional[str]], bool]


class AntiBotRule(NamedTuple):
    name: str
    matches: Predicate
    # may reference {title}
    reason: str


def _contains_any(*needles: str) -> Predicate:
    def predicate(html: str, title: Optional[str]) -> bool:
        return any(n in html for n in needles)

    return predicate


def _cloudflare_challenge(html: str, title: Optional[str]) -> bool:
    return "cf-browser-verification" in html or (
        "Cloudflare" in html and "challenge-platform" in html
    )


def _akamai(html: str, title: Optional[str]) -> bool:
    return "akamai" in html and ("bot" in html or "challenge" in html)


_BLOCKED_TITLE_WORDS = ("access denied", "blocked", "forbidden", "captcha")


def _blocked_title(html: str, title: Optional[str]) -> bool:
    if title is None:
        return False
    lowered = title.lower()
    return any(word in lowered for word in _BLOCKED_TITLE_WORDS)


ANTI_BOT_RULES: Sequence[AntiBotRule] = (
    AntiBotRule(
        "cloudflare-challenge",
        _cloudflare_challenge,
        "Cloudflare protection detected. The site is checking if you're a bot.",
    ),
    AntiBotRule(
        "cloudflare-error",
        _contains_any("Cloudflare Ray ID", "cf-ray"),
        "Cloudflare error page detected. Access may be restricted.",
    ),
    AntiBotRule(
        "recaptcha",
        _contains_any("recaptcha", "g-recaptcha"),
        "reCAPTCHA detected. Human verification required.",
    ),
    AntiBotRule(
        "hcaptcha",
        _contains_any("hcaptcha", "h-captcha"),
        "hCaptcha detected. Human verification required.",
    ),
    AntiBotRule(
        "perimeterx",
        _contains_any("PerimeterX", "px-captcha"),
        "PerimeterX bot detection detected.",
    ),
    AntiBotRule(
        "datadome",
        _contains_any("datadome", "DataDome"),
        "DataDome bot protection detected.",
    ),
    AntiBotRule("akamai", _akamai, "Akamai bot protection detected."),
    AntiBotRule("blocked-title", _blocked_title, "Access restriction detected: '{title}'"),
    AntiBotRule(
        "js-challenge",
        _contains_any("Just a moment", "Checking your browser"),
        "Cloudflare JavaScript challenge detected.",
    ),
)


def detect_anti_bot(
    html: str,
    title: Optional[str] = None,
    rules: Sequence[AntiBotRule] = ANTI_BOT_RULES,
) -> Optional[str]:
    """Return the reason of the first matching rule, or ``None``."""
    for rule in rules:
        if rule.matches(html, title):
            return rule.reason.format(title=title or "")
    return None
