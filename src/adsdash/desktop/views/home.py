"""Landing page with entry points into the admin and client portals."""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict

import flet as ft

from ...services.listing import sample_active_clients
from .. import controllers
from ..components import build_app_bar, build_card, build_main_layout
from ..navigation_helpers import ADMIN_HOME_ROUTE, HOME_ROUTE, client_route

if TYPE_CHECKING:
    from ..context import AppContext


def build_home_view(ctx: AppContext, page: ft.Page, params: Dict[str, str]) -> ft.View:
    """Build the landing page; sample codes load in the background."""

    samples = ft.Column(
        [ft.Text("Use any code listed inside the Admin > Clients page.", size=12)],
        spacing=6,
    )

    def _render_samples(clients) -> None:
        if not clients:
            return
        samples.controls = [
            ft.Text("Sample codes (active)", size=12, weight=ft.FontWeight.W_500),
            ft.Row(
                [
                    ft.OutlinedButton(
                        client.label,
                        on_click=lambda _, code=client.code: controllers.navigate(
                            page, client_route(code)
                        ),
                    )
                    for client in clients
                ],
                wrap=True,
                spacing=8,
            ),
        ]
        page.update()

    async def _load_samples() -> None:
        clients = await sample_active_clients(ctx.api.list_org_clients, ctx.config.SAMPLE_SIZE)
        _render_samples(clients)

    code_field = ft.TextField(
        label="Client code",
        hint_text="e.g. ACME",
        width=220,
        dense=True,
        on_submit=lambda e: controllers.open_client_preview(page, e.control.value),
    )

    admin_card = build_card(
        "Admin Portal",
        ft.Column(
            [
                ft.Text(
                    "Start with the client list to add a company, then switch to "
                    "the other tabs using the navigation rail."
                ),
                ft.FilledButton(
                    "Go to Admin",
                    icon=ft.Icons.ADMIN_PANEL_SETTINGS,
                    on_click=lambda _: controllers.navigate(page, ADMIN_HOME_ROUTE),
                ),
            ],
            spacing=12,
        ),
        subtitle="Manage organization clients, record campaign reports, and track topups.",
    )
    client_card = build_card(
        "Client Portal",
        ft.Column(
            [
                ft.Row(
                    [
                        code_field,
                        ft.OutlinedButton(
                            "Preview Client View",
                            on_click=lambda _: controllers.open_client_preview(page, code_field.value),
                        ),
                    ],
                    wrap=True,
                ),
                samples,
            ],
            spacing=12,
        ),
        subtitle="Share read-only dashboards and ledgers filtered by client code.",
    )

    content = ft.Column(
        [
            ft.Text("Welcome", size=14, color=ft.Colors.ON_SURFACE_VARIANT),
            ft.Text(ctx.config.APP_NAME, size=26, weight=ft.FontWeight.BOLD),
            ft.Text(
                "Use the entry points below to manage org clients, campaign spend, "
                "and topups or to preview the client-facing experience.",
                color=ft.Colors.ON_SURFACE_VARIANT,
            ),
            ft.ResponsiveRow(
                [
                    ft.Container(admin_card, col={"sm": 12, "md": 6}),
                    ft.Container(client_card, col={"sm": 12, "md": 6}),
                ],
                spacing=12,
                run_spacing=12,
            ),
        ],
        spacing=12,
    )

    page.run_task(_load_samples)
    return ft.View(
        route=HOME_ROUTE,
        appbar=build_app_bar(ctx, ctx.config.APP_NAME, page, HOME_ROUTE),
        controls=build_main_layout(ctx, page, HOME_ROUTE, content),
        padding=0,
    )
