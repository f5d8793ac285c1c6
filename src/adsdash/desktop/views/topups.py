"""Admin page: record topups and browse them per org client."""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Optional

import flet as ft

from ...formatting import format_currency, format_date
from ...models import TopupRecord
from ...services.forms import TopupForm
from ...services.listing import ListController, OrgClientDirectory
from ..components import (
    LedgerColumn,
    LedgerPanel,
    build_app_bar,
    build_card,
    build_main_layout,
    error_banner,
    field_error_list,
)
from .campaign_reports import build_org_selector, sync_org_selector

if TYPE_CHECKING:
    from ..context import AppContext

ROUTE = "/admin/topups"

TOPUP_COLUMNS: list[LedgerColumn[TopupRecord]] = [
    LedgerColumn("Date", lambda t: format_date(t.topup_date)),
    LedgerColumn("Jenis", lambda t: t.jenis),
    LedgerColumn(
        "Client Topup", lambda t: format_currency(t.client_topup, t.display_currency), numeric=True
    ),
]


def build_topups_view(ctx: AppContext, page: ft.Page, params: Dict[str, str]) -> ft.View:
    directory = OrgClientDirectory(ctx.api.list_org_clients, is_active=True)
    listing: ListController[TopupRecord] = ListController(
        ctx.api.list_admin_topups,
        page_size=ctx.config.PAGE_SIZE,
        name="admin_topups",
    )
    form = TopupForm(ctx.api.create_topup, listing)
    panel = LedgerPanel(
        listing,
        TOPUP_COLUMNS,
        empty_message="No topups found.",
        no_scope_message="Select an org client to see topups.",
    )

    selector = build_org_selector(form)
    date_field = ft.TextField(label="Topup Date", hint_text="YYYY-MM-DD", width=170)
    jenis_field = ft.TextField(label="Jenis", hint_text="e.g. Transfer", expand=True)
    amount_field = ft.TextField(
        label="Client Topup",
        hint_text="0.00",
        width=170,
        keyboard_type=ft.KeyboardType.NUMBER,
    )
    submit_button = ft.FilledButton("Save Topup", icon=ft.Icons.SAVE)
    form_error = ft.Container()
    field_errors = ft.Container()

    def _on_date(e: ft.ControlEvent) -> None:
        form.topup_date = e.control.value or ""

    def _on_jenis(e: ft.ControlEvent) -> None:
        form.jenis = e.control.value or ""

    def _on_amount(e: ft.ControlEvent) -> None:
        form.client_topup = e.control.value or ""

    async def _submit(_e: Optional[ft.ControlEvent] = None) -> None:
        await form.submit()

    date_field.on_change = _on_date
    jenis_field.on_change = _on_jenis
    amount_field.on_change = _on_amount
    amount_field.on_submit = _submit
    submit_button.on_click = _submit

    def _render_form() -> None:
        sync_org_selector(selector, directory, form)
        date_field.value = form.topup_date
        jenis_field.value = form.jenis
        amount_field.value = form.client_topup
        submit_button.disabled = form.status.saving
        submit_button.text = "Saving..." if form.status.saving else "Save Topup"
        form_error.content = error_banner(form.status.form_error)
        field_errors.content = field_error_list(form.status.field_errors)

    def _render() -> None:
        _render_form()
        panel.render()
        page.update()

    directory.on_change = _render
    listing.on_change = _render
    form.on_change = _render
    _render_form()

    content = ft.Column(
        [
            ft.Text("Topups", size=24, weight=ft.FontWeight.BOLD),
            ft.Text(
                "Record balance credits and review the topup ledger per client.",
                color=ft.Colors.ON_SURFACE_VARIANT,
            ),
            build_card(
                "Record Topup",
                ft.Column(
                    [
                        selector,
                        ft.Row([date_field, jenis_field, amount_field], spacing=12, wrap=True),
                        form_error,
                        field_errors,
                    ],
                    spacing=12,
                ),
                actions=[submit_button],
            ),
            build_card("Topup Ledger", panel.build()),
        ],
        spacing=16,
    )

    page.run_task(form.load_org_clients, directory)
    return ft.View(
        route=ROUTE,
        appbar=build_app_bar(ctx, "Admin", page, ROUTE),
        controls=build_main_layout(ctx, page, ROUTE, content),
        padding=0,
    )
