"""Date-range filters shared by the ledger and dashboard views."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

RANGE_ORDER_MESSAGE = "From date must be before To date."
DATE_FORMAT_MESSAGE = "Use YYYY-MM-DD for dates."


class FilterValidationError(ValueError):
    """Raised when a filter draft cannot be committed."""


@dataclass(frozen=True)
class DateRange:
    """Applied filter window; either bound may be open."""

    from_date: Optional[date] = None
    to_date: Optional[date] = None

    @property
    def is_empty(self) -> bool:
        return self.from_date is None and self.to_date is None

    def describe(self) -> str:
        if self.is_empty:
            return "All dates"
        start = self.from_date.isoformat() if self.from_date else "..."
        end = self.to_date.isoformat() if self.to_date else "..."
        return f"{start} to {end}"


@dataclass
class DraftFilters:
    """Raw text in the filter inputs, not yet applied."""

    from_date: str = ""
    to_date: str = ""

    def clear(self) -> None:
        self.from_date = ""
        self.to_date = ""


def parse_date_text(raw: Optional[str]) -> Optional[date]:
    """Parse ``YYYY-MM-DD``; blank means no bound."""

    text = (raw or "").strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError as exc:
        raise FilterValidationError(DATE_FORMAT_MESSAGE) from exc


def commit_draft(draft: DraftFilters) -> DateRange:
    """Turn a draft into an applied range or raise FilterValidationError."""

    from_date = parse_date_text(draft.from_date)
    to_date = parse_date_text(draft.to_date)
    if from_date and to_date and from_date > to_date:
        raise FilterValidationError(RANGE_ORDER_MESSAGE)
    return DateRange(from_date=from_date, to_date=to_date)
