"""UI-independent state controllers used by the desktop views."""

from .dashboard import NOT_FOUND_MESSAGE, DashboardController, DashboardState
from .filters import DateRange, DraftFilters, FilterValidationError, commit_draft
from .forms import (
    CampaignReportForm,
    FormStatus,
    FormValidationError,
    OrgClientForm,
    TopupForm,
)
from .listing import (
    ListController,
    ListState,
    OrgClientDirectory,
    RefreshGuard,
    sample_active_clients,
)

__all__ = [
    "CampaignReportForm",
    "DashboardController",
    "DashboardState",
    "DateRange",
    "DraftFilters",
    "FilterValidationError",
    "FormStatus",
    "FormValidationError",
    "ListController",
    "ListState",
    "NOT_FOUND_MESSAGE",
    "OrgClientDirectory",
    "OrgClientForm",
    "RefreshGuard",
    "TopupForm",
    "commit_draft",
    "sample_active_clients",
]
