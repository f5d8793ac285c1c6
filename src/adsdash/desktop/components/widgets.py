"""Reusable widget components for the desktop app."""

from __future__ import annotations

from typing import Callable, Optional

import flet as ft


def build_card(
    title: str,
    content: ft.Control,
    actions: Optional[list[ft.Control]] = None,
    subtitle: Optional[str] = None,
) -> ft.Card:
    """Build a standard card with title and content."""

    heading: list[ft.Control] = [ft.Text(title, size=18, weight=ft.FontWeight.BOLD)]
    if subtitle:
        heading.append(ft.Text(subtitle, size=12, color=ft.Colors.ON_SURFACE_VARIANT))

    card_content = ft.Column(
        [
            ft.Container(
                content=ft.Column(heading, spacing=2),
                padding=ft.padding.only(left=16, right=16, top=16, bottom=8),
            ),
            ft.Divider(height=1),
            ft.Container(content=content, padding=16),
        ],
        spacing=0,
    )

    if actions:
        card_content.controls.append(
            ft.Container(
                content=ft.Row(actions, alignment=ft.MainAxisAlignment.END),
                padding=ft.padding.only(left=16, right=16, bottom=16),
            )
        )

    return ft.Card(content=card_content, elevation=2)


def build_stat_card(
    label: str,
    value: str,
    icon: Optional[str] = None,
    color: Optional[str] = None,
) -> ft.Card:
    """Build a statistic card."""

    content_column = ft.Column(
        [
            ft.Text(label, size=14, color=ft.Colors.ON_SURFACE_VARIANT),
            ft.Text(value, size=28, weight=ft.FontWeight.BOLD, color=color),
        ],
        spacing=4,
        horizontal_alignment=ft.CrossAxisAlignment.START,
    )

    if icon:
        card_content: ft.Control = ft.Row(
            [
                ft.Icon(icon, size=36, color=color or ft.Colors.PRIMARY),
                ft.Container(width=12),
                content_column,
            ],
            alignment=ft.MainAxisAlignment.START,
        )
    else:
        card_content = content_column

    return ft.Card(content=ft.Container(content=card_content, padding=20), elevation=2)


def empty_state(message: str) -> ft.Container:
    """Simple empty-state placeholder."""

    return ft.Container(
        content=ft.Column(
            [
                ft.Icon(ft.Icons.INBOX, size=40, color=ft.Colors.ON_SURFACE_VARIANT),
                ft.Text(message, color=ft.Colors.ON_SURFACE_VARIANT),
            ],
            alignment=ft.MainAxisAlignment.CENTER,
            horizontal_alignment=ft.CrossAxisAlignment.CENTER,
        ),
        padding=20,
    )


def error_banner(message: Optional[str]) -> ft.Container:
    """Inline error strip; hidden when there is no message."""

    return ft.Container(
        content=ft.Row(
            [
                ft.Icon(ft.Icons.ERROR_OUTLINE, color=ft.Colors.ERROR),
                ft.Text(message or "", color=ft.Colors.ERROR, expand=True),
            ],
            spacing=8,
        ),
        bgcolor=ft.Colors.ERROR_CONTAINER,
        border_radius=8,
        padding=12,
        visible=bool(message),
    )


def field_error_list(messages: list[str]) -> ft.Column:
    return ft.Column(
        [ft.Text(f"- {message}", size=12, color=ft.Colors.ERROR) for message in messages],
        spacing=2,
        visible=bool(messages),
    )


def date_filter_row(
    *,
    from_value: str,
    to_value: str,
    on_from_change: Callable[[ft.ControlEvent], None],
    on_to_change: Callable[[ft.ControlEvent], None],
    on_apply: Callable[[ft.ControlEvent], object],
    on_reset: Optional[Callable[[ft.ControlEvent], object]] = None,
    apply_label: str = "Apply Filters",
) -> ft.Row:
    """From/To text inputs plus apply (and optional reset) buttons."""

    controls: list[ft.Control] = [
        ft.TextField(
            label="From date",
            hint_text="YYYY-MM-DD",
            value=from_value,
            width=170,
            dense=True,
            on_change=on_from_change,
            on_submit=on_apply,
        ),
        ft.TextField(
            label="To date",
            hint_text="YYYY-MM-DD",
            value=to_value,
            width=170,
            dense=True,
            on_change=on_to_change,
            on_submit=on_apply,
        ),
        ft.FilledButton(apply_label, icon=ft.Icons.FILTER_ALT, on_click=on_apply),
    ]
    if on_reset is not None:
        controls.append(ft.TextButton("Reset", on_click=on_reset))
    return ft.Row(controls, wrap=True, spacing=8, run_spacing=8)


def pagination_row(
    *,
    page: int,
    page_count: int,
    total: int,
    can_go_previous: bool,
    can_go_next: bool,
    on_previous: Callable[[ft.ControlEvent], object],
    on_next: Callable[[ft.ControlEvent], object],
) -> ft.Row:
    return ft.Row(
        controls=[
            ft.Text(f"{total} record(s)", color=ft.Colors.ON_SURFACE_VARIANT),
            ft.Container(expand=True),
            ft.IconButton(
                icon=ft.Icons.ARROW_BACK,
                tooltip="Previous page",
                disabled=not can_go_previous,
                on_click=on_previous,
            ),
            ft.Text(f"Page {page} / {page_count}"),
            ft.IconButton(
                icon=ft.Icons.ARROW_FORWARD,
                tooltip="Next page",
                disabled=not can_go_next,
                on_click=on_next,
            ),
        ],
        spacing=4,
    )
