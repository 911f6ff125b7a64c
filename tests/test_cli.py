# File: tests/test_cli.py
"""Тесты для CLI (`scrape_scout/cli.py`) с использованием click.testing.CliRunner.
Проверяют команды `scan`, `config`, `--version`, а также обработку ошибок.
"""
import json

import pytest
from click.testing import CliRunner

import importlib

cli_module = importlib.import_module("scrape_scout.cli")
from scrape_scout.cli import cli
from scrape_scout.crawler.models import PageResult
from scrape_scout.errors import InvalidSelectorError
from scrape_scout.parser.html_parser import parse_document, process_custom_selectors

QUIET_LOGS = ["--log-level", "CRITICAL"]


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Без ./scrape_scout.yaml из рабочего каталога разработчика."""
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def patch_start_scan(monkeypatch):
    """Патчим start_scan: фиктивные страницы без сетевых запросов, аргументы сохраняются."""
    calls = []

    async def fake_scan(cfg, urls):
        calls.append((cfg, list(urls)))
        return [
            PageResult(url=url, status_code=200, title="Test", headings=["H"], depth=None)
            for url in urls
        ]

    monkeypatch.setattr(cli_module, "start_scan", fake_scan)
    return calls


def invoke(*args):
    return CliRunner().invoke(cli, [*QUIET_LOGS, *args])


def test_version_option():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "ScrapeScout" in result.output
    assert "0.2.0" in result.output


def test_show_config(tmp_path):
    cfg_file = tmp_path / "settings.json"
    cfg_file.write_text(json.dumps({"max_pages": 3, "allow_domains": "a.com"}), encoding="utf-8")

    result = invoke("--config", str(cfg_file), "config")
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["max_pages"] == 3
    assert data["allow_domains"] == ["a.com"]
    assert data["output_format"] == "json"


def test_bad_config_file(tmp_path):
    cfg_file = tmp_path / "bad.yaml"
    cfg_file.write_text("- a\n- b\n", encoding="utf-8")
    result = invoke("--config", str(cfg_file), "config")
    assert result.exit_code == 1


def test_scan_stdout_json(patch_start_scan):
    result = invoke("scan", "https://example.com")
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data[0]["url"] == "https://example.com"
    assert data[0]["title"] == "Test"
    cfg, urls = patch_start_scan[0]
    assert urls == ["https://example.com"]
    assert cfg.crawl is False


def test_scan_options_reach_config(patch_start_scan):
    result = invoke(
        "scan",
        "https://example.com",
        "--crawl",
        "--max-depth", "1",
        "--max-pages", "5",
        "--delay", "0",
        "--timeout", "3",
        "-s", ".price",
        "-s", "h1",
        "--allow-domains", "docs.example.com, api.example.com",
        "--block-domains", "ads.example.com",
        "--metadata",
        "--user-agent", "Bot/2.0",
        "--format", "csv",
    )
    assert result.exit_code == 0
    cfg, _ = patch_start_scan[0]
    assert cfg.crawl is True
    assert cfg.max_depth == 1
    assert cfg.max_pages == 5
    assert cfg.delay_ms == 0
    assert cfg.timeout == 3.0
    assert cfg.selectors == (".price", "h1")
    assert cfg.allow_domains == frozenset({"docs.example.com", "api.example.com"})
    assert cfg.block_domains == frozenset({"ads.example.com"})
    assert cfg.metadata is True
    assert cfg.user_agent == "Bot/2.0"
    assert result.output.startswith("url,status_code,title,")


def test_cli_overrides_config_file(tmp_path, patch_start_scan):
    cfg_file = tmp_path / "scrape_scout.yaml"
    cfg_file.write_text("max_pages: 3\ndelay_ms: 50\n", encoding="utf-8")
    result = invoke("--config", str(cfg_file), "scan", "https://example.com", "--max-pages", "8")
    assert result.exit_code == 0
    cfg, _ = patch_start_scan[0]
    assert cfg.max_pages == 8
    assert cfg.delay_ms == 50


def test_scan_output_file(tmp_path):
    out = tmp_path / "out.json"
    result = invoke("scan", "https://example.com", "-o", str(out))
    assert result.exit_code == 0
    assert out.exists()
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data[0]["url"] == "https://example.com"


def test_scan_output_per_page(tmp_path):
    prefix = tmp_path / "page"
    result = invoke(
        "scan", "https://a.example.com", "https://b.example.com",
        "-f", "text", "-o", str(prefix), "--output-per-page",
    )
    assert result.exit_code == 0
    first = tmp_path / "page_001.txt"
    second = tmp_path / "page_002.txt"
    assert "URL: https://a.example.com" in first.read_text(encoding="utf-8")
    assert "URL: https://b.example.com" in second.read_text(encoding="utf-8")


def test_output_per_page_requires_output():
    result = invoke("scan", "https://example.com", "--output-per-page")
    assert result.exit_code != 0
    assert "--output-per-page requires --output" in result.output


def test_scan_url_file(tmp_path, patch_start_scan):
    url_file = tmp_path / "urls.txt"
    url_file.write_text("# list\nhttps://a.example.com\n\nhttps://b.example.com\n", encoding="utf-8")
    result = invoke("scan", "https://first.example.com", "--url-file", str(url_file))
    assert result.exit_code == 0
    _, urls = patch_start_scan[0]
    assert urls == ["https://first.example.com", "https://a.example.com", "https://b.example.com"]


def test_scan_url_file_missing(tmp_path):
    result = invoke("scan", "--url-file", str(tmp_path / "nope.txt"))
    assert result.exit_code == 1
    assert "Failed to open URL file" in result.output


def test_scan_without_urls(patch_start_scan):
    result = invoke("scan")
    assert result.exit_code == 1
    assert "No URLs provided" in result.output
    assert patch_start_scan == []


def test_scan_invalid_seed(patch_start_scan):
    result = invoke("scan", "ftp://example.com/file")
    assert result.exit_code == 1
    assert "Invalid URL" in result.output
    assert patch_start_scan == []


def test_scan_invalid_option_value():
    result = invoke("scan", "https://example.com", "--max-pages", "0")
    assert result.exit_code == 1


def test_scan_invalid_selector(monkeypatch):
    async def failing_scan(cfg, urls):
        raise InvalidSelectorError("div[[", "Malformed attribute selector")

    monkeypatch.setattr(cli_module, "start_scan", failing_scan)
    result = invoke("scan", "https://example.com", "-s", "div[[")
    assert result.exit_code == 1
    assert "Invalid CSS selector: div[[" in result.output


def test_scan_pseudo_element_selector(monkeypatch):
    async def extracting_scan(cfg, urls):
        process_custom_selectors(parse_document("<p><a>x</a></p>"), cfg.selectors)
        return []

    monkeypatch.setattr(cli_module, "start_scan", extracting_scan)
    result = invoke("scan", "https://example.com", "-s", "a::after")
    assert result.exit_code == 1
    assert "Invalid CSS selector: a::after" in result.output


def test_quiet_suppresses_report():
    result = CliRunner().invoke(cli, ["--quiet", "scan", "https://example.com"])
    assert result.exit_code == 0
    assert "https://example.com" not in result.output
