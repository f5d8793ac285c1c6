"""Navigation metadata and helpers for the admin and client layouts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence
from urllib.parse import quote, unquote

import flet as ft

HOME_ROUTE = "/"
ADMIN_HOME_ROUTE = "/admin/org-clients"


class PageLike(Protocol):
    """Minimal subset of `ft.Page` needed for navigation helpers."""

    def go(self, route: str) -> None: ...


@dataclass(frozen=True)
class NavigationDestination:
    """Metadata for a navigation rail entry."""

    route: str
    label: str
    icon: str
    selected_icon: str


ADMIN_DESTINATIONS: List[NavigationDestination] = [
    NavigationDestination(
        ADMIN_HOME_ROUTE,
        "Clients",
        ft.Icons.PEOPLE_OUTLINE,
        ft.Icons.PEOPLE,
    ),
    NavigationDestination(
        "/admin/campaign-reports",
        "Campaign Reports",
        ft.Icons.CAMPAIGN_OUTLINED,
        ft.Icons.CAMPAIGN,
    ),
    NavigationDestination(
        "/admin/topups",
        "Topups",
        ft.Icons.ACCOUNT_BALANCE_WALLET_OUTLINED,
        ft.Icons.ACCOUNT_BALANCE_WALLET,
    ),
]


def normalize_client_code(raw: Optional[str]) -> Optional[str]:
    """Trimmed org client code, or None when blank."""

    code = (raw or "").strip()
    return code or None


def client_route(code: str, section: str = "") -> str:
    """Route for a client page; ``section`` is ``campaign-reports`` or ``topups``."""

    base = f"/client/{quote(code.strip(), safe='')}"
    return f"{base}/{section}" if section else base


def client_destinations(code: str) -> List[NavigationDestination]:
    return [
        NavigationDestination(
            client_route(code),
            "Dashboard",
            ft.Icons.DASHBOARD_OUTLINED,
            ft.Icons.DASHBOARD,
        ),
        NavigationDestination(
            client_route(code, "campaign-reports"),
            "Campaign Reports",
            ft.Icons.RECEIPT_LONG_OUTLINED,
            ft.Icons.RECEIPT_LONG,
        ),
        NavigationDestination(
            client_route(code, "topups"),
            "Topups",
            ft.Icons.SAVINGS_OUTLINED,
            ft.Icons.SAVINGS,
        ),
    ]


def client_code_from_route(route: str) -> Optional[str]:
    """Return the decoded org client code of a ``/client/...`` route."""

    parts = [part for part in (route or "").split("?", 1)[0].split("/") if part]
    if len(parts) >= 2 and parts[0] == "client":
        return normalize_client_code(unquote(parts[1]))
    return None


def is_admin_route(route: str) -> bool:
    return (route or "").startswith("/admin")


def destinations_for_route(route: str) -> List[NavigationDestination]:
    """Rail entries for the section the route belongs to (none for the landing page)."""

    if is_admin_route(route):
        return ADMIN_DESTINATIONS
    code = client_code_from_route(route)
    if code:
        return client_destinations(code)
    return []


def route_for_index(
    destinations: Sequence[NavigationDestination], selected_index: int
) -> Optional[str]:
    """Return the route that corresponds to the selected navigation index."""
    if 0 <= selected_index < len(destinations):
        return destinations[selected_index].route
    return None


def index_for_route(destinations: Sequence[NavigationDestination], route: str) -> int:
    """Return the index of the destination matching the requested route."""
    for index, dest in enumerate(destinations):
        if dest.route == route:
            return index
    return 0


def handle_navigation_selection(
    page: PageLike, destinations: Sequence[NavigationDestination], selected_index: int
) -> None:
    """Go to the route that was selected in the navigation rail."""
    if route := route_for_index(destinations, selected_index):
        page.go(route)


__all__ = [
    "ADMIN_DESTINATIONS",
    "ADMIN_HOME_ROUTE",
    "HOME_ROUTE",
    "NavigationDestination",
    "client_code_from_route",
    "client_destinations",
    "client_route",
    "destinations_for_route",
    "handle_navigation_selection",
    "index_for_route",
    "is_admin_route",
    "normalize_client_code",
    "route_for_index",
]
