"""Layout components shared by the admin and client pages."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Sequence

import flet as ft

if TYPE_CHECKING:
    from ..context import AppContext

from .. import controllers
from ..navigation_helpers import (
    HOME_ROUTE,
    NavigationDestination,
    client_code_from_route,
    destinations_for_route,
    index_for_route,
    is_admin_route,
)


def build_client_preview_field(page: ft.Page) -> ft.Row:
    """Admin shortcut that opens ``/client/<code>`` for the typed code."""

    code_field = ft.TextField(
        label="Quick client preview",
        hint_text="Org client code",
        width=220,
        dense=True,
        on_submit=lambda e: controllers.open_client_preview(page, e.control.value),
    )
    return ft.Row(
        [
            code_field,
            ft.IconButton(
                icon=ft.Icons.OPEN_IN_NEW,
                tooltip="Open client view",
                on_click=lambda _: controllers.open_client_preview(page, code_field.value),
            ),
        ],
        spacing=4,
    )


def build_app_bar(ctx: AppContext, title: str, page: ft.Page, current_route: str) -> ft.AppBar:
    """App bar with a home button; admin pages also get the client preview field."""

    actions: List[ft.Control] = []
    if is_admin_route(current_route):
        actions.append(build_client_preview_field(page))
    else:
        code = client_code_from_route(current_route)
        if code:
            actions.append(ft.Chip(label=ft.Text(code), leading=ft.Icon(ft.Icons.BADGE)))
    actions.append(
        ft.IconButton(
            icon=ft.Icons.HOME,
            tooltip="Home",
            on_click=lambda _: controllers.navigate(page, HOME_ROUTE),
        )
    )
    if ctx.dev_mode:
        actions.append(ft.Icon(ft.Icons.BUG_REPORT, color=ft.Colors.AMBER_700, tooltip="Dev mode"))

    return ft.AppBar(
        leading=ft.Icon(ft.Icons.INSIGHTS),
        title=ft.Text(title, size=20, weight=ft.FontWeight.BOLD),
        center_title=False,
        bgcolor=ft.Colors.SURFACE_CONTAINER_HIGHEST,
        actions=actions,
    )


def build_navigation_rail(
    page: ft.Page, destinations: Sequence[NavigationDestination], current_route: str
) -> ft.NavigationRail:
    """Build the navigation rail with route selection."""

    def route_changed(e):
        controllers.handle_nav_selection(page, destinations, e.control.selected_index)

    return ft.NavigationRail(
        selected_index=index_for_route(destinations, current_route),
        label_type=ft.NavigationRailLabelType.ALL,
        min_width=100,
        min_extended_width=200,
        group_alignment=-0.9,
        destinations=[
            ft.NavigationRailDestination(
                icon=dest.icon,
                selected_icon=dest.selected_icon,
                label=dest.label,
            )
            for dest in destinations
        ],
        on_change=route_changed,
    )


def build_main_layout(
    ctx: AppContext,
    page: ft.Page,
    current_route: str,
    content: ft.Control,
) -> List[ft.Control]:
    """Navigation rail (admin or client section) beside the scrolling content."""

    content_column = ft.Column(
        [ft.Container(content=content, padding=20)],
        spacing=0,
        expand=True,
        scroll=ft.ScrollMode.AUTO,
    )
    destinations = destinations_for_route(current_route)
    if not destinations:
        return [content_column]

    return [
        ft.Row(
            [
                build_navigation_rail(page, destinations, current_route),
                ft.VerticalDivider(width=1),
                ft.Container(content=content_column, expand=True),
            ],
            spacing=0,
            expand=True,
        )
    ]
