"""Tests for navigation metadata, routing and page-level actions."""

from __future__ import annotations

from dataclasses import dataclass, field

import flet as ft
import pytest

from adsdash.desktop import controllers
from adsdash.desktop.context import create_app_context
from adsdash.desktop.navigation import Router
from adsdash.desktop.navigation_helpers import (
    ADMIN_DESTINATIONS,
    client_code_from_route,
    client_destinations,
    client_route,
    destinations_for_route,
    handle_navigation_selection,
    index_for_route,
    normalize_client_code,
    route_for_index,
)


@dataclass
class _PageSpy:
    """Minimal fake page that records navigation actions."""

    navigated_to: list[str] = field(default_factory=list)
    opened: list[ft.Control] = field(default_factory=list)
    views: list[ft.View] = field(default_factory=list)
    clipboard: str | None = None
    url: str | None = None
    updates: int = 0

    def go(self, route: str) -> None:
        self.navigated_to.append(route)

    def update(self) -> None:
        self.updates += 1

    def open(self, control: ft.Control) -> None:
        self.opened.append(control)

    def close(self, control: ft.Control) -> None:
        return None

    def set_clipboard(self, value: str) -> None:
        self.clipboard = value


def test_admin_rail_selection_drives_page_route() -> None:
    page = _PageSpy()

    handle_navigation_selection(page, ADMIN_DESTINATIONS, 1)

    assert page.navigated_to == ["/admin/campaign-reports"]


def test_navigation_selection_out_of_bounds_does_nothing() -> None:
    page = _PageSpy()

    handle_navigation_selection(page, ADMIN_DESTINATIONS, 99)

    assert page.navigated_to == []


def test_client_destinations_are_scoped_to_code() -> None:
    routes = [dest.route for dest in client_destinations("ACME")]

    assert routes == ["/client/ACME", "/client/ACME/campaign-reports", "/client/ACME/topups"]
    assert [dest.label for dest in client_destinations("ACME")] == [
        "Dashboard",
        "Campaign Reports",
        "Topups",
    ]


def test_index_and_route_round_trip() -> None:
    for destinations in (ADMIN_DESTINATIONS, client_destinations("ACME")):
        for index, dest in enumerate(destinations):
            assert route_for_index(destinations, index) == dest.route
            assert index_for_route(destinations, dest.route) == index


def test_unknown_route_selects_first_entry() -> None:
    assert index_for_route(ADMIN_DESTINATIONS, "/elsewhere") == 0


@pytest.mark.parametrize(
    ("route", "expected"),
    [
        ("/admin/topups", ADMIN_DESTINATIONS),
        ("/", []),
        ("/unknown", []),
    ],
)
def test_destinations_for_route(route, expected) -> None:
    assert destinations_for_route(route) == expected


def test_destinations_for_client_route() -> None:
    assert destinations_for_route("/client/ACME/topups") == client_destinations("ACME")


def test_client_code_round_trip_with_special_characters() -> None:
    route = client_route("  Acme Co/2 ")

    assert route == "/client/Acme%20Co%2F2"
    assert client_code_from_route(route) == "Acme Co/2"
    assert client_code_from_route(f"{route}/topups?x=1") == "Acme Co/2"
    assert client_code_from_route("/admin/org-clients") is None


def test_normalize_client_code() -> None:
    assert normalize_client_code("  ACME ") == "ACME"
    assert normalize_client_code("   ") is None
    assert normalize_client_code(None) is None


def test_client_preview_ignores_blank_codes() -> None:
    page = _PageSpy()

    assert controllers.open_client_preview(page, "   ") is False
    assert controllers.open_client_preview(page, " ACME ") is True

    assert page.navigated_to == ["/client/ACME"]


def test_copy_dashboard_link_uses_page_origin(config) -> None:
    ctx = create_app_context(config)
    page = _PageSpy(url="http://localhost:8550/")

    link = controllers.copy_dashboard_link(ctx, page, "ACME")

    assert link == "http://localhost:8550/client/ACME"
    assert page.clipboard == link
    assert isinstance(page.opened[-1], ft.SnackBar)


def test_copy_dashboard_link_without_origin(config) -> None:
    ctx = create_app_context(config)
    page = _PageSpy()

    assert controllers.copy_dashboard_link(ctx, page, "ACME") == "/client/ACME"


def _builder(name: str):
    seen: list[dict[str, str]] = []

    def build(ctx, page, params):
        seen.append(params)
        return ft.View(route=name)

    build.seen = seen
    return build


@pytest.fixture
def router(config) -> Router:
    page = _PageSpy()
    router = Router(page, create_app_context(config))
    router.register("/", _builder("/"))
    router.register("/admin/org-clients", _builder("/admin/org-clients"))
    router.register("/client/:code", _builder("/client/:code"))
    router.register("/client/:code/topups", _builder("/client/:code/topups"))
    return router


def test_router_resolves_literal_routes(router) -> None:
    pattern, _, params = router.resolve("/admin/org-clients")

    assert pattern == "/admin/org-clients"
    assert params == {}


def test_router_extracts_and_decodes_params(router) -> None:
    pattern, _, params = router.resolve("/client/Acme%20Co/topups")

    assert pattern == "/client/:code/topups"
    assert params == {"code": "Acme Co"}

    pattern, _, params = router.resolve("/client/ACME?tab=1")
    assert pattern == "/client/:code"
    assert params == {"code": "ACME"}


def test_router_falls_back_to_landing(router) -> None:
    pattern, _, params = router.resolve("/does/not/exist")

    assert pattern == "/"
    assert params == {}


def test_router_show_replaces_view(router) -> None:
    router.show("/client/ACME")
    router.show("/admin/org-clients")

    assert [view.route for view in router.page.views] == ["/admin/org-clients"]
    assert router.routes["/client/:code"].seen == [{"code": "ACME"}]


def test_router_reports_builder_failures(router) -> None:
    def broken(ctx, page, params):
        raise RuntimeError("kaboom")

    router.register("/admin/topups", broken)

    router.show("/admin/topups")

    dialog = router.page.opened[-1]
    assert isinstance(dialog, ft.AlertDialog)
    assert "kaboom" in dialog.content.value
    assert router.page.views == []
