# setup.py
from setuptools import setup, find_packages

setup(
    name="scrape_scout",
    version="0.2.0",
    description="Веб-скрейпер ScrapeScout: извлечение структурированного контента и обход сайтов",
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={"scrape_scout": ["templates/*.j2"]},
    include_package_data=True,
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "soupsieve>=2.5",
        "lxml>=4.9",
        "pydantic>=2.5",
        "PyYAML>=6.0",
        "click>=8.1",
        "Jinja2>=3.1",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "scrape-scout=scrape_scout.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
