# File: tests/test_detection.py
"""Классификация HTTP-статусов и обнаружение анти-бот страниц."""
import pytest

from scrape_scout.crawler.antibot import ANTI_BOT_RULES, AntiBotRule, detect_anti_bot
from scrape_scout.crawler.status import classify_http_status
from scrape_scout.errors import HttpStatusError, PageError, RateLimitedError

URL = "https://example.com/page"


# --------------------------------------------------------------------------- #
#                                HTTP statuses                                #
# --------------------------------------------------------------------------- #


@pytest.mark.parametrize("code", [200, 201, 204, 299])
def test_success_statuses(code):
    assert classify_http_status(code, URL) is None


@pytest.mark.parametrize(
    "code,message",
    [
        (400, f"Bad Request - The server couldn't understand the request to {URL}"),
        (401, f"Unauthorized - Authentication required to access {URL}"),
        (403, f"Forbidden - Access denied to {URL}. This may indicate bot protection."),
        (404, f"Not Found - The page {URL} does not exist"),
        (500, f"Internal Server Error - The server at {URL} encountered an error"),
        (502, f"Bad Gateway - The server at {URL} received an invalid response"),
        (503, f"Service Unavailable - The server at {URL} is temporarily unavailable"),
        (504, f"Gateway Timeout - The server at {URL} took too long to respond"),
        (418, f"HTTP error 418 while accessing {URL}"),
        (301, f"HTTP error 301 while accessing {URL}"),
    ],
)
def test_error_statuses(code, message):
    error = classify_http_status(code, URL)
    assert type(error) is HttpStatusError
    assert error.status_code == code
    assert error.message == message
    assert str(error) == f"HTTP {code}: {message}"


def test_rate_limited_is_its_own_kind():
    error = classify_http_status(429, URL)
    assert isinstance(error, RateLimitedError)
    assert isinstance(error, PageError)
    assert error.status_code == 429
    assert str(error) == (
        f"Rate limited: Too many requests to {URL}. Please slow down and try again later."
    )


# --------------------------------------------------------------------------- #
#                                  Anti-bot                                   #
# --------------------------------------------------------------------------- #


@pytest.mark.parametrize(
    "html,title,reason",
    [
        (
            '<div id="cf-browser-verification"></div>',
            None,
            "Cloudflare protection detected. The site is checking if you're a bot.",
        ),
        (
            "<p>Cloudflare</p><script src='/cdn-cgi/challenge-platform/x.js'></script>",
            None,
            "Cloudflare protection detected. The site is checking if you're a bot.",
        ),
        (
            "<footer>Cloudflare Ray ID: 123abc</footer>",
            None,
            "Cloudflare error page detected. Access may be restricted.",
        ),
        (
            '<div class="g-recaptcha"></div>',
            None,
            "reCAPTCHA detected. Human verification required.",
        ),
        (
            '<div class="h-captcha"></div>',
            None,
            "hCaptcha detected. Human verification required.",
        ),
        ('<div id="px-captcha"></div>', None, "PerimeterX bot detection detected."),
        ("<script>window.DataDome = {}</script>", None, "DataDome bot protection detected."),
        ("<p>akamai bot manager</p>", None, "Akamai bot protection detected."),
        ("<p>hello</p>", "Access Denied", "Access restriction detected: 'Access Denied'"),
        ("<p>hello</p>", "Please solve the CAPTCHA", "Access restriction detected: 'Please solve the CAPTCHA'"),
        ("<h1>Just a moment...</h1>", None, "Cloudflare JavaScript challenge detected."),
        ("<p>Checking your browser</p>", None, "Cloudflare JavaScript challenge detected."),
    ],
)
def test_detect_anti_bot(html, title, reason):
    assert detect_anti_bot(html, title) == reason


@pytest.mark.parametrize(
    "html,title",
    [
        ("<h1>Welcome</h1><p>Regular content</p>", "Welcome"),
        ("<p>Cloudflare CDN is great</p>", None),
        ("<p>akamai edge</p>", None),
        ("", None),
    ],
)
def test_regular_pages_pass(html, title):
    assert detect_anti_bot(html, title) is None


def test_matching_is_case_sensitive_for_markup():
    assert detect_anti_bot("<p>RECAPTCHA</p>") is None


def test_first_matching_rule_wins():
    html = '<div class="g-recaptcha"></div><div class="h-captcha"></div>Just a moment'
    assert detect_anti_bot(html, "Blocked") == "reCAPTCHA detected. Human verification required."


def test_blocked_title_precedes_js_challenge():
    assert detect_anti_bot("Just a moment", "Forbidden") == "Access restriction detected: 'Forbidden'"


def test_rules_are_evaluated_in_declared_order():
    assert [rule.name for rule in ANTI_BOT_RULES] == [
        "cloudflare-challenge",
        "cloudflare-error",
        "recaptcha",
        "hcaptcha",
        "perimeterx",
        "datadome",
        "akamai",
        "blocked-title",
        "js-challenge",
    ]


def test_custom_rule_table():
    rules = (AntiBotRule("paywall", lambda html, title: "paywall" in html, "Paywall for {title}"),)
    assert detect_anti_bot("<div class='paywall'>", "News", rules=rules) == "Paywall for News"
    assert detect_anti_bot("<p>free</p>", "News", rules=rules) is None
