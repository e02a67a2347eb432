# site_search/__init__.py
"""
SiteSearch package initializer.
Defines package version and exposes the CLI.
"""
__version__ = "0.1.0"

from site_search.cli import cli  # noqa: E402

__all__ = ["__version__", "cli"]
