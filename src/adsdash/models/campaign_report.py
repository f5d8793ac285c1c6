"""Campaign spend report records."""

from __future__ import annotations

from datetime import date
from typing import Optional

from .base import WireModel

DEFAULT_CURRENCY = "USD"


class CampaignReport(WireModel):
    """Spend recorded against one ad account on one calendar day."""

    id: str
    org_client_id: str
    report_date: str
    account_id: str
    client_spend: float
    currency: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def display_currency(self) -> str:
        return self.currency or DEFAULT_CURRENCY


class CampaignReportCreate(WireModel):
    org_client_id: str
    report_date: date
    account_id: str
    client_spend: float
