"""Client portal: balance summary and the latest ledger rows for one code."""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict

import flet as ft

from ...formatting import format_currency, format_date
from ...services.dashboard import DashboardController
from .. import controllers
from ..components import (
    build_app_bar,
    build_card,
    build_main_layout,
    build_stat_card,
    date_filter_row,
    empty_state,
    error_banner,
)
from ..navigation_helpers import client_route

if TYPE_CHECKING:
    from ..context import AppContext
    from ...models import ClientDashboardResponse


def _latest_reports_table(data: ClientDashboardResponse) -> ft.Control:
    if not data.latest_campaign_reports:
        return empty_state("No campaign reports in this window.")
    return ft.DataTable(
        columns=[
            ft.DataColumn(ft.Text("Date")),
            ft.DataColumn(ft.Text("Account ID")),
            ft.DataColumn(ft.Text("Client Spend"), numeric=True),
        ],
        rows=[
            ft.DataRow(
                cells=[
                    ft.DataCell(ft.Text(format_date(row.report_date))),
                    ft.DataCell(ft.Text(row.account_id)),
                    ft.DataCell(ft.Text(format_currency(row.client_spend, data.currency_for(row.currency)))),
                ]
            )
            for row in data.latest_campaign_reports
        ],
        heading_row_height=36,
    )


def _latest_topups_table(data: ClientDashboardResponse) -> ft.Control:
    if not data.latest_topups:
        return empty_state("No topups in this window.")
    return ft.DataTable(
        columns=[
            ft.DataColumn(ft.Text("Date")),
            ft.DataColumn(ft.Text("Jenis")),
            ft.DataColumn(ft.Text("Client Topup"), numeric=True),
        ],
        rows=[
            ft.DataRow(
                cells=[
                    ft.DataCell(ft.Text(format_date(row.topup_date))),
                    ft.DataCell(ft.Text(row.jenis)),
                    ft.DataCell(ft.Text(format_currency(row.client_topup, data.currency_for(row.currency)))),
                ]
            )
            for row in data.latest_topups
        ],
        heading_row_height=36,
    )


def build_client_dashboard_view(ctx: AppContext, page: ft.Page, params: Dict[str, str]) -> ft.View:
    """Summary cards, filter window, and latest rows for ``/client/:code``."""

    code = params.get("code", "")
    route = client_route(code)
    controller = DashboardController(ctx.api.get_client_dashboard, code)
    title = ft.Text(size=24, weight=ft.FontWeight.BOLD)
    body = ft.Column(spacing=16)

    def _on_from(e: ft.ControlEvent) -> None:
        controller.set_draft(from_date=e.control.value or "")

    def _on_to(e: ft.ControlEvent) -> None:
        controller.set_draft(to_date=e.control.value or "")

    async def _apply(_e: ft.ControlEvent) -> None:
        await controller.apply_filters()

    async def _reset(_e: ft.ControlEvent) -> None:
        await controller.reset_filters()

    def _render() -> None:
        state = controller.state
        title.value = state.title
        controls: list[ft.Control] = [
            build_card(
                "Filter Summary Window",
                ft.Column(
                    [
                        date_filter_row(
                            from_value=state.draft_filters.from_date,
                            to_value=state.draft_filters.to_date,
                            on_from_change=_on_from,
                            on_to_change=_on_to,
                            on_apply=_apply,
                            on_reset=_reset,
                        ),
                        ft.Text(
                            state.filter_error or "",
                            color=ft.Colors.ERROR,
                            size=12,
                            visible=bool(state.filter_error),
                        ),
                        ft.Text(
                            f"Showing: {state.applied_filters.describe()}",
                            size=12,
                            color=ft.Colors.ON_SURFACE_VARIANT,
                        ),
                    ],
                    spacing=8,
                ),
            ),
            error_banner(state.error_message),
            ft.ProgressBar(visible=state.loading),
        ]
        data = state.data
        if state.show_summary and data is not None:
            summary = data.summary
            controls.append(
                ft.ResponsiveRow(
                    [
                        ft.Container(
                            build_stat_card(
                                "Total Topup",
                                format_currency(summary.total_topup, summary.currency),
                                icon=ft.Icons.SAVINGS,
                                color=ft.Colors.GREEN,
                            ),
                            col={"sm": 12, "md": 4},
                        ),
                        ft.Container(
                            build_stat_card(
                                "Total Spend",
                                format_currency(summary.total_spend, summary.currency),
                                icon=ft.Icons.CAMPAIGN,
                                color=ft.Colors.ORANGE,
                            ),
                            col={"sm": 12, "md": 4},
                        ),
                        ft.Container(
                            build_stat_card(
                                "Sisa Saldo",
                                format_currency(summary.sisa_saldo, summary.currency),
                                icon=ft.Icons.ACCOUNT_BALANCE_WALLET,
                            ),
                            col={"sm": 12, "md": 4},
                        ),
                    ],
                    spacing=12,
                    run_spacing=12,
                )
            )
            controls.append(
                ft.ResponsiveRow(
                    [
                        ft.Container(
                            build_card(
                                "Latest Campaign Reports",
                                _latest_reports_table(data),
                                actions=[
                                    ft.TextButton(
                                        "View all",
                                        on_click=lambda _: controllers.navigate(
                                            page, client_route(code, "campaign-reports")
                                        ),
                                    )
                                ],
                            ),
                            col={"sm": 12, "lg": 6},
                        ),
                        ft.Container(
                            build_card(
                                "Latest Topups",
                                _latest_topups_table(data),
                                actions=[
                                    ft.TextButton(
                                        "View all",
                                        on_click=lambda _: controllers.navigate(
                                            page, client_route(code, "topups")
                                        ),
                                    )
                                ],
                            ),
                            col={"sm": 12, "lg": 6},
                        ),
                    ],
                    spacing=12,
                    run_spacing=12,
                )
            )
        body.controls = controls
        page.update()

    controller.on_change = _render
    _render()

    content = ft.Column(
        [
            ft.Text("Client Dashboard", size=14, color=ft.Colors.ON_SURFACE_VARIANT),
            title,
            body,
        ],
        spacing=8,
    )

    page.run_task(controller.refresh)
    return ft.View(
        route=route,
        appbar=build_app_bar(ctx, "Client Portal", page, route),
        controls=build_main_layout(ctx, page, route, content),
        padding=0,
    )
