"""Admin page: register org clients and browse the directory."""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Optional

import flet as ft

from ...formatting import format_date
from ...logging_config import get_logger
from ...services.forms import OrgClientForm
from ...services.listing import OrgClientDirectory
from .. import controllers
from ..components import (
    build_app_bar,
    build_card,
    build_main_layout,
    empty_state,
    error_banner,
    field_error_list,
)
from ..navigation_helpers import ADMIN_HOME_ROUTE, client_route

if TYPE_CHECKING:
    from ..context import AppContext

logger = get_logger(__name__)

_STATUS_OPTIONS = {"all": None, "active": True, "inactive": False}


def build_org_clients_view(ctx: AppContext, page: ft.Page, params: Dict[str, str]) -> ft.View:
    """Create form plus the searchable org client table."""

    directory = OrgClientDirectory(ctx.api.list_org_clients)
    form = OrgClientForm(ctx.api.create_org_client, directory)

    code_field = ft.TextField(label="Client Code", hint_text="e.g. ACME", expand=True)
    name_field = ft.TextField(label="Client Name", hint_text="Acme Corporation", expand=True)
    submit_button = ft.FilledButton("Create Client", icon=ft.Icons.ADD)
    form_error = ft.Container()
    field_errors = ft.Container()
    table_area = ft.Column(spacing=12)

    def _on_code(e: ft.ControlEvent) -> None:
        form.code = e.control.value or ""

    def _on_name(e: ft.ControlEvent) -> None:
        form.name = e.control.value or ""

    async def _submit(_e: Optional[ft.ControlEvent] = None) -> None:
        await form.submit()

    code_field.on_change = _on_code
    name_field.on_change = _on_name
    name_field.on_submit = _submit
    submit_button.on_click = _submit

    def _actions(client) -> ft.Row:
        return ft.Row(
            [
                ft.IconButton(
                    icon=ft.Icons.DASHBOARD_OUTLINED,
                    tooltip="View client dashboard",
                    on_click=lambda _, code=client.code: controllers.navigate(page, client_route(code)),
                ),
                ft.IconButton(
                    icon=ft.Icons.LINK,
                    tooltip="Copy dashboard link",
                    on_click=lambda _, code=client.code: controllers.copy_dashboard_link(ctx, page, code),
                ),
            ],
            spacing=0,
        )

    def _render_form() -> None:
        status = form.status
        code_field.value = form.code
        name_field.value = form.name
        submit_button.disabled = status.saving
        submit_button.text = "Saving..." if status.saving else "Create Client"
        form_error.content = error_banner(status.form_error)
        field_errors.content = field_error_list(status.field_errors)

    def _render_table() -> None:
        state = directory.state
        controls: list[ft.Control] = [error_banner(state.error_message)]
        if state.loading:
            controls.append(ft.ProgressBar())
        if not state.items:
            controls.append(empty_state("Loading clients..." if state.loading else "No clients found yet."))
        else:
            controls.append(
                ft.DataTable(
                    columns=[
                        ft.DataColumn(ft.Text("Code")),
                        ft.DataColumn(ft.Text("Name")),
                        ft.DataColumn(ft.Text("Status")),
                        ft.DataColumn(ft.Text("Created")),
                        ft.DataColumn(ft.Text("Actions")),
                    ],
                    rows=[
                        ft.DataRow(
                            cells=[
                                ft.DataCell(ft.Text(client.code, weight=ft.FontWeight.W_500)),
                                ft.DataCell(ft.Text(client.name)),
                                ft.DataCell(
                                    ft.Text(
                                        "Active" if client.is_active else "Inactive",
                                        color=ft.Colors.GREEN if client.is_active else ft.Colors.ON_SURFACE_VARIANT,
                                    )
                                ),
                                ft.DataCell(ft.Text(format_date(client.created_at))),
                                ft.DataCell(_actions(client)),
                            ]
                        )
                        for client in state.items
                    ],
                    heading_row_height=36,
                )
            )
        table_area.controls = controls

    def _render() -> None:
        _render_form()
        _render_table()
        page.update()

    directory.on_change = _render
    form.on_change = _render

    async def _search(e: ft.ControlEvent) -> None:
        await directory.search(search_field.value)

    async def _status_changed(e: ft.ControlEvent) -> None:
        directory.state.is_active = _STATUS_OPTIONS.get(e.control.value or "all")
        logger.debug("Org client status filter", extra={"is_active": directory.state.is_active})
        await directory.refresh()

    search_field = ft.TextField(
        label="Search",
        hint_text="Code or name",
        prefix_icon=ft.Icons.SEARCH,
        width=260,
        dense=True,
        on_submit=_search,
    )
    status_filter = ft.Dropdown(
        label="Status",
        width=160,
        value="all",
        options=[
            ft.dropdown.Option("all", "All"),
            ft.dropdown.Option("active", "Active"),
            ft.dropdown.Option("inactive", "Inactive"),
        ],
        on_change=_status_changed,
    )

    _render_form()
    _render_table()

    create_card = build_card(
        "Create New Client",
        ft.Column(
            [ft.Row([code_field, name_field], spacing=12), form_error, field_errors],
            spacing=8,
        ),
        actions=[submit_button],
        subtitle="Provide a unique code and readable display name.",
    )
    list_card = build_card(
        "Clients",
        ft.Column(
            [
                ft.Row(
                    [
                        search_field,
                        status_filter,
                        ft.IconButton(icon=ft.Icons.REFRESH, tooltip="Reload", on_click=_search),
                    ],
                    wrap=True,
                ),
                table_area,
            ],
            spacing=12,
        ),
    )

    content = ft.Column(
        [
            ft.Text("Organization Clients", size=24, weight=ft.FontWeight.BOLD),
            ft.Text(
                "Register advertising clients and keep an eye on their activation status.",
                color=ft.Colors.ON_SURFACE_VARIANT,
            ),
            create_card,
            list_card,
        ],
        spacing=16,
    )

    page.run_task(directory.refresh)
    return ft.View(
        route=ADMIN_HOME_ROUTE,
        appbar=build_app_bar(ctx, "Admin", page, ADMIN_HOME_ROUTE),
        controls=build_main_layout(ctx, page, ADMIN_HOME_ROUTE, content),
        padding=0,
    )
