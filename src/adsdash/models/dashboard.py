"""Client dashboard aggregate returned by ``/client/dashboard``."""

from __future__ import annotations

from typing import Optional

from .base import WireModel
from .campaign_report import DEFAULT_CURRENCY


class DashboardOrgClient(WireModel):
    id: str
    code: str
    name: str


class ClientDashboardSummary(WireModel):
    """Totals for one org over the requested window.

    ``sisa_saldo`` is computed by the backend and displayed as-is.
    """

    total_topup: float = 0.0
    total_spend: float = 0.0
    sisa_saldo: float = 0.0
    currency: str = DEFAULT_CURRENCY


class LatestCampaignReport(WireModel):
    report_date: str
    account_id: str
    client_spend: float
    currency: Optional[str] = None


class LatestTopup(WireModel):
    topup_date: str
    jenis: str
    client_topup: float
    currency: Optional[str] = None


class ClientDashboardResponse(WireModel):
    org_client: DashboardOrgClient
    summary: ClientDashboardSummary
    latest_campaign_reports: list[LatestCampaignReport] = []
    latest_topups: list[LatestTopup] = []

    def currency_for(self, row_currency: Optional[str]) -> str:
        """Row currency, else the summary currency."""

        return row_currency or self.summary.currency or DEFAULT_CURRENCY
