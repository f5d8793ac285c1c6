"""Tests for the paginated ledger controller."""

from __future__ import annotations

import asyncio
from datetime import date
from typing import Any, Optional

import pytest

from adsdash.api.errors import HttpError, NetworkError
from adsdash.models import PaginatedResponse, TopupRecord
from adsdash.services.filters import DATE_FORMAT_MESSAGE, RANGE_ORDER_MESSAGE, DateRange
from adsdash.services.listing import ListController, RefreshGuard

from conftest import page_payload, topup_payload


class _FakeFetcher:
    """Records calls and answers with ``total`` synthetic topups."""

    def __init__(self, total: int = 25) -> None:
        self.total = total
        self.calls: list[dict[str, Any]] = []
        self.error: Optional[Exception] = None

    async def __call__(self, scope, *, page=None, page_size=None, from_date=None, to_date=None):
        self.calls.append(
            {"scope": scope, "page": page, "page_size": page_size, "from_date": from_date, "to_date": to_date}
        )
        if self.error is not None:
            raise self.error
        start = (page - 1) * page_size
        count = max(0, min(page_size, self.total - start))
        items = [topup_payload(id=f"top-{start + i}", orgClientId=scope) for i in range(count)]
        return PaginatedResponse[TopupRecord].model_validate(
            page_payload(items, total=self.total, page=page, page_size=page_size)
        )


@pytest.fixture
def fetcher() -> _FakeFetcher:
    return _FakeFetcher()


@pytest.fixture
def controller(fetcher) -> ListController[TopupRecord]:
    return ListController(fetcher, scope="org-1", page_size=10, name="test")


def test_refresh_guard_only_latest_is_current() -> None:
    guard = RefreshGuard()
    first = guard.begin()
    second = guard.begin()

    assert not guard.is_current(first)
    assert guard.is_current(second)


async def test_refresh_loads_first_page(controller, fetcher) -> None:
    await controller.refresh()

    state = controller.state
    assert fetcher.calls == [
        {"scope": "org-1", "page": 1, "page_size": 10, "from_date": None, "to_date": None}
    ]
    assert len(state.items) == 10
    assert state.total == 25
    assert state.page_count == 3
    assert state.loading is False
    assert state.error is None
    assert state.can_go_previous is False
    assert state.can_go_next is True


async def test_on_change_sees_loading_then_done(fetcher) -> None:
    seen: list[bool] = []
    controller = ListController(fetcher, scope="org-1")
    controller.on_change = lambda: seen.append(controller.state.loading)

    await controller.refresh()

    assert seen == [True, False]


async def test_no_scope_means_no_fetch(fetcher) -> None:
    controller = ListController(fetcher)

    await controller.refresh()

    assert fetcher.calls == []
    assert controller.state.items == []
    assert controller.state.can_go_next is False
    assert await controller.next_page() is False


async def test_pagination_boundaries_are_no_ops(controller, fetcher) -> None:
    await controller.refresh()

    assert await controller.previous_page() is False
    assert len(fetcher.calls) == 1

    assert await controller.next_page() is True
    assert await controller.next_page() is True
    assert controller.state.page == 3
    assert len(controller.state.items) == 5
    assert controller.state.can_go_next is False

    assert await controller.next_page() is False
    assert await controller.go_to_page(0) is False
    assert await controller.go_to_page(3) is False
    assert len(fetcher.calls) == 3
    assert [call["page"] for call in fetcher.calls] == [1, 2, 3]


async def test_single_page_when_empty(fetcher) -> None:
    fetcher.total = 0
    controller = ListController(fetcher, scope="org-1")

    await controller.refresh()

    assert controller.state.page_count == 1
    assert controller.state.can_go_previous is False
    assert controller.state.can_go_next is False


async def test_change_scope_resets_to_first_page(controller, fetcher) -> None:
    await controller.refresh()
    await controller.next_page()

    await controller.change_scope("org-2")

    assert controller.state.page == 1
    assert fetcher.calls[-1]["scope"] == "org-2"
    assert fetcher.calls[-1]["page"] == 1


async def test_apply_filters_fetches_page_one(controller, fetcher) -> None:
    await controller.refresh()
    await controller.next_page()
    controller.set_draft(from_date="2024-01-01", to_date="2024-01-31")

    assert await controller.apply_filters() is True

    assert controller.state.page == 1
    assert controller.state.applied_filters == DateRange(date(2024, 1, 1), date(2024, 1, 31))
    assert fetcher.calls[-1]["from_date"] == date(2024, 1, 1)
    assert fetcher.calls[-1]["to_date"] == date(2024, 1, 31)
    assert fetcher.calls[-1]["page"] == 1


async def test_draft_edits_do_not_fetch(controller, fetcher) -> None:
    controller.set_draft(from_date="2024-01-01")
    controller.set_draft(to_date="2024-01-31")

    assert fetcher.calls == []
    assert controller.state.applied_filters.is_empty


async def test_reversed_range_is_rejected_without_fetch(controller, fetcher) -> None:
    await controller.refresh()
    controller.set_draft(from_date="2024-02-10", to_date="2024-02-01")

    assert await controller.apply_filters() is False

    assert len(fetcher.calls) == 1
    assert controller.state.filter_error == RANGE_ORDER_MESSAGE
    assert controller.state.applied_filters.is_empty


async def test_bad_date_is_rejected_without_fetch(controller, fetcher) -> None:
    controller.set_draft(from_date="02/10/2024")

    assert await controller.apply_filters() is False

    assert fetcher.calls == []
    assert controller.state.filter_error == DATE_FORMAT_MESSAGE


async def test_reset_filters_clears_draft_and_applied(controller, fetcher) -> None:
    controller.set_draft(from_date="2024-01-01")
    await controller.apply_filters()

    await controller.reset_filters()

    assert controller.state.draft_filters.from_date == ""
    assert controller.state.applied_filters.is_empty
    assert fetcher.calls[-1]["from_date"] is None


async def test_error_keeps_previous_rows(controller, fetcher) -> None:
    await controller.refresh()
    fetcher.error = NetworkError()

    await controller.next_page()

    state = controller.state
    assert len(state.items) == 10
    assert state.total == 25
    assert state.error_message == "Unable to reach the backend service. Please try again."
    assert state.not_found is False
    assert state.loading is False


async def test_not_found_clears_rows(controller, fetcher) -> None:
    await controller.refresh()
    fetcher.error = HttpError(404, "Org client not found")

    await controller.refresh()

    assert controller.state.items == []
    assert controller.state.total == 0
    assert controller.state.not_found is True
    assert controller.state.error_message == "Org client not found"


async def test_success_clears_previous_error(controller, fetcher) -> None:
    fetcher.error = NetworkError()
    await controller.refresh()
    fetcher.error = None

    await controller.refresh()

    assert controller.state.error is None


class _GatedFetcher:
    """Each call waits on its own event so tests choose completion order."""

    def __init__(self) -> None:
        self.gates: list[asyncio.Event] = []
        self.results: list[Any] = []

    async def __call__(self, scope, *, page=None, page_size=None, from_date=None, to_date=None):
        gate = asyncio.Event()
        self.gates.append(gate)
        await gate.wait()
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


def _page(scope: str, total: int) -> PaginatedResponse[TopupRecord]:
    return PaginatedResponse[TopupRecord].model_validate(
        page_payload([topup_payload(orgClientId=scope)], total=total)
    )


async def test_out_of_order_responses_keep_newest() -> None:
    fetcher = _GatedFetcher()
    controller = ListController(fetcher, scope="org-1")
    fetcher.results = [_page("org-2", 2), _page("org-1", 1)]

    first = asyncio.create_task(controller.change_scope("org-1"))
    await asyncio.sleep(0)
    second = asyncio.create_task(controller.change_scope("org-2"))
    await asyncio.sleep(0)

    # second request finishes first
    fetcher.gates[1].set()
    await second
    assert controller.state.loading is False
    assert controller.state.total == 2

    fetcher.gates[0].set()
    await first

    assert controller.state.scope == "org-2"
    assert controller.state.total == 2
    assert controller.state.items[0].org_client_id == "org-2"


async def test_stale_error_is_discarded() -> None:
    fetcher = _GatedFetcher()
    controller = ListController(fetcher, scope="org-1")
    fetcher.results = [_page("org-1", 4), NetworkError()]

    first = asyncio.create_task(controller.refresh())
    await asyncio.sleep(0)
    second = asyncio.create_task(controller.refresh())
    await asyncio.sleep(0)

    fetcher.gates[1].set()
    await second
    fetcher.gates[0].set()
    await first

    assert controller.state.error is None
    assert controller.state.total == 4


async def test_stale_response_does_not_clear_loading() -> None:
    fetcher = _GatedFetcher()
    controller = ListController(fetcher, scope="org-1")
    fetcher.results = [_page("org-1", 1), _page("org-1", 9)]

    first = asyncio.create_task(controller.refresh())
    await asyncio.sleep(0)
    second = asyncio.create_task(controller.refresh())
    await asyncio.sleep(0)

    fetcher.gates[0].set()
    await first
    assert controller.state.loading is True
    assert controller.state.total == 0

    fetcher.gates[1].set()
    await second
    assert controller.state.loading is False
    assert controller.state.total == 9


async def test_later_error_clears_not_found(controller, fetcher) -> None:
    fetcher.error = HttpError(404, "Org client not found")
    await controller.refresh()
    assert controller.state.not_found is True

    fetcher.error = NetworkError()
    await controller.change_scope("org-2")

    assert controller.state.not_found is False
    assert controller.state.error_message == "Unable to reach the backend service. Please try again."


async def test_not_found_disables_pagination(fetcher) -> None:
    controller: ListController[TopupRecord] = ListController(fetcher, scope="org-1", page_size=10)
    await controller.refresh()
    await controller.next_page()
    assert controller.state.can_go_previous is True

    fetcher.error = HttpError(404, "Org client not found")
    await controller.refresh()

    assert controller.state.can_go_previous is False
    assert controller.state.can_go_next is False
