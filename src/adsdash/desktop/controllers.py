"""Controller helpers for navigation and the small page-level actions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

import flet as ft

from ..devtools import dev_log
from ..logging_config import get_logger
from .navigation_helpers import (
    NavigationDestination,
    client_route,
    handle_navigation_selection,
    normalize_client_code,
)

if TYPE_CHECKING:
    from .context import AppContext

logger = get_logger(__name__)


def show_snack(page: ft.Page, message: str) -> None:
    """Display a snack bar message."""

    page.open(ft.SnackBar(content=ft.Text(message)))


def navigate(page: ft.Page, route: str) -> None:
    """Navigate to a route and update the page."""

    clean = route if route.startswith("/") else f"/{route}"
    page.go(clean)
    page.update()


def handle_nav_selection(
    page: ft.Page, destinations: Sequence[NavigationDestination], selected_index: int
) -> None:
    """Delegate navigation rail selection to the helpers and update."""

    handle_navigation_selection(page, destinations, selected_index)
    page.update()


def open_client_preview(page: ft.Page, raw_code: str | None) -> bool:
    """Open the client dashboard for a typed code; blank input does nothing."""

    code = normalize_client_code(raw_code)
    if code is None:
        return False
    navigate(page, client_route(code))
    return True


def dashboard_link(page: ft.Page, code: str) -> str:
    """Absolute dashboard URL in web mode, the bare route on desktop."""

    origin = (getattr(page, "url", None) or "").rstrip("/")
    if not origin.startswith("http"):
        origin = ""
    return f"{origin}{client_route(code)}"


def copy_dashboard_link(ctx: AppContext, page: ft.Page, code: str) -> str:
    """Copy the client dashboard link and confirm with a snack bar."""

    link = dashboard_link(page, code)
    page.set_clipboard(link)
    dev_log(ctx.config, "Dashboard link copied", context={"code": code, "link": link})
    logger.info("Dashboard link copied", extra={"org_client_code": code})
    show_snack(page, f"Copied {link}")
    return link
