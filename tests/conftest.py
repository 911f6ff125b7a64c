# File: tests/conftest.py
import pytest

from scrape_scout.config import ScraperConfig
from scrape_scout.logger import configure

SAMPLE_HTML = """
<html>
<head>
  <title>  Test Page  </title>
  <meta name="description" content="A test page">
  <meta name="keywords" content="test, scraping">
  <meta name="author" content="Jane Doe">
  <meta property="og:title" content="OG Test">
  <meta property="og:image" content="https://example.com/og.png">
  <link rel="canonical" href="https://example.com/canonical">
  <link rel="icon" href="/favicon.ico">
</head>
<body>
  <h2>Second level</h2>
  <h1>Main heading</h1>
  <h1>   </h1>
  <p>First paragraph.</p>
  <p>   </p>
  <p>Second paragraph.</p>
  <a href="/about">About us</a>
  <a href="https://other.com/page">  </a>
  <a>no href</a>
  <img src="/logo.png" alt="Logo">
  <img src="//cdn.example.com/pic.jpg">
  <table>
    <tr><th>Name</th><th>Age</th></tr>
    <tr><td>Alice</td><td>30</td></tr>
    <tr><td>Bob</td><td>25</td></tr>
  </table>
  <pre><code class="language-python">print("hi")</code></pre>
  <p>Use <code>pip install</code> here.</p>
  <div class="price">$10</div>
  <div class="price">$20</div>
</body>
</html>
"""


@pytest.fixture(autouse=True)
def reset_logging():
    """
    Возвращает логгер к stderr-обработчику после каждого теста
    (CliRunner подменяет sys.stderr на время вызова).
    """
    yield
    configure(level="INFO")


@pytest.fixture()
def basic_config() -> ScraperConfig:
    """
    Return a fast ScraperConfig for crawler tests: no delay, short timeout.
    """
    return ScraperConfig(
        timeout=2.0,
        user_agent="TestAgent/1.0",
        delay_ms=0,
        max_depth=2,
        max_pages=10,
    )


@pytest.fixture()
def sample_html() -> str:
    return SAMPLE_HTML

