"""CLI command modules for saga."""

from .config_cmd import app as config_app

__all__ = ["config_app"]
