"""State controller for the client dashboard summary."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Awaitable, Callable, Optional

from ..api.errors import ApiError
from ..logging_config import get_logger
from ..models import ClientDashboardResponse
from .filters import DateRange, DraftFilters
from .listing import NOT_FOUND_MESSAGE, ChangeCallback, FilteredController, RefreshGuard

logger = get_logger(__name__)

DashboardFetcher = Callable[..., Awaitable[ClientDashboardResponse]]


@dataclass
class DashboardState:
    org_client_code: str
    data: Optional[ClientDashboardResponse] = None
    applied_filters: DateRange = field(default_factory=DateRange)
    draft_filters: DraftFilters = field(default_factory=DraftFilters)
    loading: bool = False
    error: Optional[ApiError] = None
    filter_error: Optional[str] = None
    not_found: bool = False

    @property
    def error_message(self) -> Optional[str]:
        if self.error is None:
            return None
        return NOT_FOUND_MESSAGE if self.not_found else self.error.message

    @property
    def title(self) -> str:
        return self.data.org_client.name if self.data else "Client Dashboard"

    @property
    def show_summary(self) -> bool:
        return not self.not_found


class DashboardController(FilteredController):
    """Loads the aggregate for one org code and the applied date window."""

    name = "dashboard"

    def __init__(
        self,
        fetch: DashboardFetcher,
        org_client_code: str,
        *,
        on_change: Optional[ChangeCallback] = None,
    ) -> None:
        self._fetch = fetch
        self._guard = RefreshGuard()
        self.on_change = on_change
        self.state = DashboardState(org_client_code=org_client_code)

    async def refresh(
        self,
        org_client_code: Optional[str] = None,
        filters: Optional[DateRange] = None,
    ) -> None:
        state = self.state
        if org_client_code is not None:
            state.org_client_code = org_client_code
        if filters is not None:
            state.applied_filters = filters

        token = self._guard.begin()
        code = state.org_client_code
        window = state.applied_filters
        state.loading = True
        self._notify()

        try:
            response = await self._fetch(code, from_date=window.from_date, to_date=window.to_date)
        except ApiError as exc:
            if not self._guard.is_current(token):
                return
            state.error = exc
            state.not_found = exc.not_found
            if exc.not_found:
                state.data = None
            logger.warning(
                "Dashboard fetch failed",
                extra={"org_client_code": code, "error_kind": exc.kind.value, "status": exc.status},
            )
        else:
            if not self._guard.is_current(token):
                logger.debug("Discarding stale dashboard", extra={"org_client_code": code})
                return
            state.data = response
            state.error = None
            state.not_found = False
        state.loading = False
        self._notify()

    async def _reload(self, filters: DateRange) -> None:
        await self.refresh(filters=filters)
