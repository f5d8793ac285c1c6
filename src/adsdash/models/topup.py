"""Balance topup records."""

from __future__ import annotations

from datetime import date
from typing import Optional

from .base import WireModel
from .campaign_report import DEFAULT_CURRENCY


class TopupRecord(WireModel):
    """A balance credit applied to an org client."""

    id: str
    org_client_id: str
    topup_date: str
    jenis: str
    client_topup: float
    currency: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def display_currency(self) -> str:
        return self.currency or DEFAULT_CURRENCY


class TopupCreate(WireModel):
    org_client_id: str
    topup_date: date
    jenis: str
    client_topup: float
