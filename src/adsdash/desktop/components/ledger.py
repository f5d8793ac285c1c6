"""Filterable, paginated ledger table bound to a ListController."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Sequence, TypeVar

import flet as ft

from ...services.listing import NOT_FOUND_MESSAGE, ListController
from .widgets import date_filter_row, empty_state, error_banner, pagination_row

T = TypeVar("T")


@dataclass(frozen=True)
class LedgerColumn(Generic[T]):
    label: str
    value: Callable[[T], str]
    numeric: bool = False


class LedgerPanel(Generic[T]):
    """Rebuilds its controls from the controller state on every change."""

    def __init__(
        self,
        controller: ListController[T],
        columns: Sequence[LedgerColumn[T]],
        *,
        empty_message: str,
        no_scope_message: str = "Select an org client to see records.",
        not_found_message: str = NOT_FOUND_MESSAGE,
    ) -> None:
        self.controller = controller
        self.columns = list(columns)
        self.empty_message = empty_message
        self.no_scope_message = no_scope_message
        self.not_found_message = not_found_message
        self.container = ft.Column(spacing=12)

    def _on_from_change(self, e: ft.ControlEvent) -> None:
        self.controller.set_draft(from_date=e.control.value or "")

    def _on_to_change(self, e: ft.ControlEvent) -> None:
        self.controller.set_draft(to_date=e.control.value or "")

    async def _on_apply(self, _e: ft.ControlEvent) -> None:
        await self.controller.apply_filters()

    async def _on_reset(self, _e: ft.ControlEvent) -> None:
        await self.controller.reset_filters()

    async def _on_previous(self, _e: ft.ControlEvent) -> None:
        await self.controller.previous_page()

    async def _on_next(self, _e: ft.ControlEvent) -> None:
        await self.controller.next_page()

    def _table(self) -> ft.Control:
        state = self.controller.state
        if not state.scope:
            return empty_state(self.no_scope_message)
        if state.not_found:
            return empty_state(self.not_found_message)
        if not state.items:
            return empty_state("Loading..." if state.loading else self.empty_message)
        return ft.DataTable(
            columns=[
                ft.DataColumn(ft.Text(column.label), numeric=column.numeric)
                for column in self.columns
            ],
            rows=[
                ft.DataRow(cells=[ft.DataCell(ft.Text(column.value(item))) for column in self.columns])
                for item in state.items
            ],
            heading_row_height=36,
            expand=True,
        )

    def render(self) -> None:
        state = self.controller.state
        controls: list[ft.Control] = [
            date_filter_row(
                from_value=state.draft_filters.from_date,
                to_value=state.draft_filters.to_date,
                on_from_change=self._on_from_change,
                on_to_change=self._on_to_change,
                on_apply=self._on_apply,
                on_reset=self._on_reset,
            ),
            ft.Text(
                state.filter_error or "",
                color=ft.Colors.ERROR,
                size=12,
                visible=bool(state.filter_error),
            ),
            error_banner(None if state.not_found else state.error_message),
            ft.ProgressBar(visible=state.loading),
            self._table(),
            pagination_row(
                page=state.page,
                page_count=state.page_count,
                total=state.total,
                can_go_previous=state.can_go_previous and not state.loading,
                can_go_next=state.can_go_next and not state.loading,
                on_previous=self._on_previous,
                on_next=self._on_next,
            ),
        ]
        self.container.controls = controls
        if self.container.page:
            self.container.update()

    def build(self) -> ft.Column:
        self.render()
        return self.container
