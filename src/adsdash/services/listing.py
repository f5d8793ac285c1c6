"""State controllers for paginated ledgers and the org client directory.

Views call :meth:`ListController.refresh` (or one of the helpers built on it)
whenever the scope, page or applied filters change. Each fetch takes a token
from a :class:`RefreshGuard`; a response that comes back after a newer fetch
started is dropped, so a slow request never overwrites a fresh one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Awaitable, Callable, Generic, Optional, Protocol, TypeVar

from ..api.errors import ApiError
from ..logging_config import get_logger
from ..models import OrgClient, PaginatedResponse, page_count
from .filters import DateRange, DraftFilters, FilterValidationError, commit_draft

logger = get_logger(__name__)

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)

ChangeCallback = Callable[[], None]

NOT_FOUND_MESSAGE = "Org client code not found"


class PageFetcher(Protocol[T_co]):
    """Signature shared by the API client's paginated list methods."""

    def __call__(
        self,
        scope: str,
        /,
        *,
        page: int | None = ...,
        page_size: int | None = ...,
        from_date: date | None = ...,
        to_date: date | None = ...,
    ) -> Awaitable[PaginatedResponse[T_co]]: ...


class RefreshGuard:
    """Hands out increasing request tokens; only the newest may commit."""

    def __init__(self) -> None:
        self._latest = 0

    def begin(self) -> int:
        self._latest += 1
        return self._latest

    def is_current(self, token: int) -> bool:
        return token == self._latest


@dataclass
class ListState(Generic[T]):
    scope: Optional[str] = None
    items: list[T] = field(default_factory=list)
    page: int = 1
    page_size: int = 10
    total: int = 0
    applied_filters: DateRange = field(default_factory=DateRange)
    draft_filters: DraftFilters = field(default_factory=DraftFilters)
    loading: bool = False
    error: Optional[ApiError] = None
    filter_error: Optional[str] = None
    not_found: bool = False

    @property
    def page_count(self) -> int:
        return page_count(self.total, self.page_size)

    @property
    def can_go_previous(self) -> bool:
        return bool(self.scope) and not self.not_found and self.page > 1

    @property
    def can_go_next(self) -> bool:
        return bool(self.scope) and not self.not_found and self.page < self.page_count

    @property
    def error_message(self) -> Optional[str]:
        return self.error.message if self.error else None


class FilteredController:
    """Draft and applied date filters shared by the ledger and dashboard controllers.

    Subclasses own a ``state`` with ``draft_filters`` and ``filter_error`` and
    implement :meth:`_reload`, which fetches with the newly applied range.
    """

    name = "controller"
    on_change: Optional[ChangeCallback] = None
    state: Any

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change()

    async def _reload(self, filters: DateRange) -> None:
        raise NotImplementedError

    def set_draft(self, *, from_date: Optional[str] = None, to_date: Optional[str] = None) -> None:
        """Record filter input edits without fetching."""

        if from_date is not None:
            self.state.draft_filters.from_date = from_date
        if to_date is not None:
            self.state.draft_filters.to_date = to_date

    async def apply_filters(self) -> bool:
        """Commit the draft and reload; False when the draft is invalid."""

        try:
            applied = commit_draft(self.state.draft_filters)
        except FilterValidationError as exc:
            self.state.filter_error = str(exc)
            self._notify()
            return False
        self.state.filter_error = None
        logger.info(
            "Filters applied",
            extra={"list": self.name, "filters": applied.describe()},
        )
        await self._reload(applied)
        return True

    async def reset_filters(self) -> None:
        self.state.draft_filters.clear()
        self.state.filter_error = None
        await self._reload(DateRange())


class ListController(FilteredController, Generic[T]):
    """Owns page, filters and rows for one ledger view."""

    def __init__(
        self,
        fetch_page: PageFetcher[T],
        *,
        scope: Optional[str] = None,
        page_size: int = 10,
        on_change: Optional[ChangeCallback] = None,
        name: str = "list",
    ) -> None:
        self._fetch_page = fetch_page
        self._guard = RefreshGuard()
        self.on_change = on_change
        self.name = name
        self.state: ListState[T] = ListState(scope=scope or None, page_size=max(1, page_size))

    async def refresh(
        self,
        scope: Optional[str] = None,
        page: Optional[int] = None,
        filters: Optional[DateRange] = None,
    ) -> None:
        """Fetch rows for the given inputs; omitted inputs keep their value."""

        state = self.state
        if scope is not None:
            state.scope = scope or None
        if page is not None:
            state.page = max(1, page)
        if filters is not None:
            state.applied_filters = filters

        if not state.scope:
            self._guard.begin()
            state.items = []
            state.total = 0
            state.loading = False
            state.not_found = False
            self._notify()
            return

        token = self._guard.begin()
        request_scope = state.scope
        request_page = state.page
        request_filters = state.applied_filters
        state.loading = True
        self._notify()

        try:
            response = await self._fetch_page(
                request_scope,
                page=request_page,
                page_size=state.page_size,
                from_date=request_filters.from_date,
                to_date=request_filters.to_date,
            )
        except ApiError as exc:
            if not self._guard.is_current(token):
                logger.debug("Discarding stale error", extra={"list": self.name, "token": token})
                return
            self._apply_error(exc)
        else:
            if not self._guard.is_current(token):
                logger.debug(
                    "Discarding stale response",
                    extra={"list": self.name, "token": token, "page": request_page},
                )
                return
            state.items = list(response.items)
            state.total = response.total
            state.error = None
            state.not_found = False
        state.loading = False
        self._notify()

    def _apply_error(self, exc: ApiError) -> None:
        state = self.state
        state.error = exc
        state.not_found = exc.not_found
        if exc.not_found:
            state.items = []
            state.total = 0
        logger.warning(
            "List fetch failed",
            extra={
                "list": self.name,
                "scope": state.scope,
                "page": state.page,
                "error_kind": exc.kind.value,
                "status": exc.status,
            },
        )

    async def change_scope(self, scope: Optional[str]) -> None:
        """Switch org scope; pagination restarts at page 1."""

        self.state.scope = scope or None
        await self.refresh(page=1)

    async def go_to_page(self, page: int) -> bool:
        """Move to ``page`` if it is inside ``[1, page_count]``."""

        state = self.state
        if not state.scope or page < 1 or page > state.page_count or page == state.page:
            return False
        await self.refresh(page=page)
        return True

    async def next_page(self) -> bool:
        return await self.go_to_page(self.state.page + 1)

    async def previous_page(self) -> bool:
        return await self.go_to_page(self.state.page - 1)

    async def _reload(self, filters: DateRange) -> None:
        await self.refresh(page=1, filters=filters)


OrgClientFetcher = Callable[..., Awaitable[list[OrgClient]]]


@dataclass
class DirectoryState:
    items: list[OrgClient] = field(default_factory=list)
    search: Optional[str] = None
    is_active: Optional[bool] = None
    loading: bool = False
    error: Optional[ApiError] = None

    @property
    def error_message(self) -> Optional[str]:
        return self.error.message if self.error else None


class OrgClientDirectory:
    """Non-paginated org client list with the same stale-response guard."""

    def __init__(
        self,
        fetch: OrgClientFetcher,
        *,
        search: Optional[str] = None,
        is_active: Optional[bool] = None,
        on_change: Optional[ChangeCallback] = None,
    ) -> None:
        self._fetch = fetch
        self._guard = RefreshGuard()
        self.on_change = on_change
        self.state = DirectoryState(search=search, is_active=is_active)

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change()

    async def refresh(self) -> None:
        state = self.state
        token = self._guard.begin()
        state.loading = True
        self._notify()
        try:
            items = await self._fetch(search=state.search or None, is_active=state.is_active)
        except ApiError as exc:
            if not self._guard.is_current(token):
                return
            state.error = exc
            logger.warning(
                "Org client fetch failed",
                extra={"error_kind": exc.kind.value, "status": exc.status},
            )
        else:
            if not self._guard.is_current(token):
                return
            state.items = list(items)
            state.error = None
        state.loading = False
        self._notify()

    async def search(self, text: Optional[str]) -> None:
        self.state.search = (text or "").strip() or None
        await self.refresh()

    def find(self, org_client_id: Optional[str]) -> Optional[OrgClient]:
        for client in self.state.items:
            if client.id == org_client_id:
                return client
        return None


async def sample_active_clients(fetch: OrgClientFetcher, limit: int) -> list[OrgClient]:
    """First ``limit`` active org clients; a failed fetch yields an empty list."""

    try:
        clients = await fetch(is_active=True)
    except ApiError as exc:
        logger.warning(
            "Sample client fetch failed",
            extra={"error_kind": exc.kind.value, "status": exc.status},
        )
        return []
    return list(clients)[: max(0, limit)]
