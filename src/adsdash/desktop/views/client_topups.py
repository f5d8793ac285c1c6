"""Client portal: full topup ledger for one code."""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict

import flet as ft

from ...models import TopupRecord
from ...services.listing import ListController
from ..components import LedgerPanel, build_app_bar, build_card, build_main_layout
from ..navigation_helpers import client_route
from .topups import TOPUP_COLUMNS

if TYPE_CHECKING:
    from ..context import AppContext


def build_client_topups_view(
    ctx: AppContext, page: ft.Page, params: Dict[str, str]
) -> ft.View:
    code = params.get("code", "")
    route = client_route(code, "topups")
    listing: ListController[TopupRecord] = ListController(
        ctx.api.list_client_topups,
        scope=code,
        page_size=ctx.config.PAGE_SIZE,
        name="client_topups",
    )
    panel = LedgerPanel(
        listing,
        TOPUP_COLUMNS,
        empty_message="No topup rows match the selected filters.",
    )

    def _render() -> None:
        panel.render()
        page.update()

    listing.on_change = _render

    content = ft.Column(
        [
            ft.Text("Topups", size=24, weight=ft.FontWeight.BOLD),
            ft.Text(f"Topup ledger for {code}.", color=ft.Colors.ON_SURFACE_VARIANT),
            build_card("Topup Ledger", panel.build()),
        ],
        spacing=16,
    )

    page.run_task(listing.refresh)
    return ft.View(
        route=route,
        appbar=build_app_bar(ctx, "Client Portal", page, route),
        controls=build_main_layout(ctx, page, route, content),
        padding=0,
    )
