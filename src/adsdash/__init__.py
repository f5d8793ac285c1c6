"""Ads client dashboard: admin ledgers and a read-only client portal."""

from __future__ import annotations

from .config import BaseConfig, load_config
from .desktop.context import create_app_context

__version__ = "0.1.0"

__all__ = ["BaseConfig", "create_app_context", "load_config"]
