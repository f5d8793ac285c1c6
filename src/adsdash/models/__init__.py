"""Backend wire models."""

from .campaign_report import CampaignReport, CampaignReportCreate
from .dashboard import (
    ClientDashboardResponse,
    ClientDashboardSummary,
    DashboardOrgClient,
    LatestCampaignReport,
    LatestTopup,
)
from .org_client import OrgClient, OrgClientCreate, OrgClientList
from .pagination import PaginatedResponse, page_count
from .topup import TopupCreate, TopupRecord

__all__ = [
    "CampaignReport",
    "CampaignReportCreate",
    "ClientDashboardResponse",
    "ClientDashboardSummary",
    "DashboardOrgClient",
    "LatestCampaignReport",
    "LatestTopup",
    "OrgClient",
    "OrgClientCreate",
    "OrgClientList",
    "PaginatedResponse",
    "TopupCreate",
    "TopupRecord",
    "page_count",
]
