"""Admin page: record campaign spend and browse reports per org client."""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Optional

import flet as ft

from ...formatting import format_currency, format_date
from ...models import CampaignReport
from ...services.forms import CampaignReportForm, ScopedCreateController
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

if TYPE_CHECKING:
    from ..context import AppContext

ROUTE = "/admin/campaign-reports"

REPORT_COLUMNS: list[LedgerColumn[CampaignReport]] = [
    LedgerColumn("Date", lambda r: format_date(r.report_date)),
    LedgerColumn("Account ID", lambda r: r.account_id),
    LedgerColumn(
        "Client Spend", lambda r: format_currency(r.client_spend, r.display_currency), numeric=True
    ),
]


def build_org_selector(form: ScopedCreateController) -> ft.Dropdown:
    """Dropdown of active org clients that moves the form and list scope together."""

    async def _changed(e: ft.ControlEvent) -> None:
        await form.select_org_client(e.control.value)

    return ft.Dropdown(
        label="Org Client",
        hint_text="Select a client",
        width=320,
        on_change=_changed,
    )


def sync_org_selector(
    selector: ft.Dropdown, directory: OrgClientDirectory, form: ScopedCreateController
) -> None:
    state = directory.state
    selector.options = [ft.dropdown.Option(client.id, client.label) for client in state.items]
    selector.value = form.org_client_id or None
    selector.disabled = state.loading or not state.items
    selector.error_text = state.error_message


def build_campaign_reports_view(ctx: AppContext, page: ft.Page, params: Dict[str, str]) -> ft.View:
    """Report form above the scoped, paginated report ledger."""

    directory = OrgClientDirectory(ctx.api.list_org_clients, is_active=True)
    listing: ListController[CampaignReport] = ListController(
        ctx.api.list_admin_campaign_reports,
        page_size=ctx.config.PAGE_SIZE,
        name="admin_campaign_reports",
    )
    form = CampaignReportForm(ctx.api.create_campaign_report, listing)
    panel = LedgerPanel(
        listing,
        REPORT_COLUMNS,
        empty_message="No campaign reports found.",
        no_scope_message="Select an org client to see reports.",
    )

    selector = build_org_selector(form)
    date_field = ft.TextField(label="Report Date", hint_text="YYYY-MM-DD", width=170)
    account_field = ft.TextField(label="Account ID", expand=True)
    spend_field = ft.TextField(
        label="Client Spend",
        hint_text="0.00",
        width=170,
        keyboard_type=ft.KeyboardType.NUMBER,
    )
    submit_button = ft.FilledButton("Save Report", icon=ft.Icons.SAVE)
    form_error = ft.Container()
    field_errors = ft.Container()

    def _set(attr: str):
        def handler(e: ft.ControlEvent) -> None:
            setattr(form, attr, e.control.value or "")

        return handler

    async def _submit(_e: Optional[ft.ControlEvent] = None) -> None:
        await form.submit()

    date_field.on_change = _set("report_date")
    account_field.on_change = _set("account_id")
    spend_field.on_change = _set("client_spend")
    spend_field.on_submit = _submit
    submit_button.on_click = _submit

    def _render_form() -> None:
        sync_org_selector(selector, directory, form)
        date_field.value = form.report_date
        account_field.value = form.account_id
        spend_field.value = form.client_spend
        submit_button.disabled = form.status.saving
        submit_button.text = "Saving..." if form.status.saving else "Save Report"
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
            ft.Text("Campaign Reports", size=24, weight=ft.FontWeight.BOLD),
            ft.Text(
                "Record daily ad-account spend and review the ledger per client.",
                color=ft.Colors.ON_SURFACE_VARIANT,
            ),
            build_card(
                "Record Campaign Report",
                ft.Column(
                    [
                        selector,
                        ft.Row([date_field, account_field, spend_field], spacing=12, wrap=True),
                        form_error,
                        field_errors,
                    ],
                    spacing=12,
                ),
                actions=[submit_button],
            ),
            build_card("Report Ledger", panel.build()),
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
