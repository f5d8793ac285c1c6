"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import flet as ft
import httpx

from ..api import ApiClient
from ..config import BaseConfig, load_config


@dataclass
class AppContext:
    """Configuration and the shared API client, handed to every view builder."""

    config: BaseConfig
    api: ApiClient

    theme_mode: ft.ThemeMode = ft.ThemeMode.LIGHT

    # Page reference (set after initialization)
    page: Optional[ft.Page] = None
    dev_mode: bool = False


def create_app_context(
    config: Optional[BaseConfig] = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> AppContext:
    """Create the application context; no network call happens here."""

    if config is None:
        config = load_config()

    return AppContext(
        config=config,
        api=ApiClient(config, transport=transport),
        dev_mode=config.DEV_MODE,
    )
