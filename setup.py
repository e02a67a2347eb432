# setup.py
from setuptools import setup, find_packages

setup(
    name="site_search",
    version="0.1.0",
    description="Асинхронный поисковый стек SiteSearch: краулер, индексатор и булевы запросы",
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={"site_search.report": ["templates/*.j2"]},
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "click>=8.1",
        "jinja2>=3.1",
        "pydantic>=2.5",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "site-search=site_search.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
