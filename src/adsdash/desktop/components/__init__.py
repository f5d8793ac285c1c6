"""Reusable UI components for the desktop app."""

from .layout import (
    build_app_bar,
    build_client_preview_field,
    build_main_layout,
    build_navigation_rail,
)
from .ledger import LedgerColumn, LedgerPanel
from .widgets import (
    build_card,
    build_stat_card,
    date_filter_row,
    empty_state,
    error_banner,
    field_error_list,
    pagination_row,
)

__all__ = [
    "LedgerColumn",
    "LedgerPanel",
    "build_app_bar",
    "build_card",
    "build_client_preview_field",
    "build_main_layout",
    "build_navigation_rail",
    "build_stat_card",
    "date_filter_row",
    "empty_state",
    "error_banner",
    "field_error_list",
    "pagination_row",
]
