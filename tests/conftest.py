"""Pytest configuration and shared fixtures for adsdash tests.

HTTP never leaves the process: the API client is wired to an
``httpx.MockTransport`` backed by :class:`FakeBackend`, a small in-memory
stand-in for the ads backend.
"""

from __future__ import annotations

import json
from itertools import count
from typing import Any, Callable, Optional

import httpx
import pytest

from adsdash.api import ApiClient
from adsdash.config import BaseConfig

BACKEND_URL = "https://api.test"
ADMIN_TOKEN = "test-admin-token"


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def config_env(monkeypatch: pytest.MonkeyPatch, tmp_path):
    """Point every ADSDASH_* variable at test values."""

    monkeypatch.setenv("ADSDASH_BACKEND_URL", f"{BACKEND_URL}/")
    monkeypatch.setenv("ADSDASH_ADMIN_TOKEN", ADMIN_TOKEN)
    monkeypatch.setenv("ADSDASH_DATA_DIR", str(tmp_path / "instance"))
    monkeypatch.setenv("ADSDASH_DEV_MODE", "false")
    for name in ("ADSDASH_PAGE_SIZE", "ADSDASH_DASHBOARD_SAMPLE_SIZE", "ADSDASH_REQUEST_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def config(config_env) -> BaseConfig:
    return BaseConfig()


# =============================================================================
# Payload Factories
# =============================================================================


def org_client_payload(**overrides: Any) -> dict[str, Any]:
    payload = {
        "id": "org-1",
        "code": "ACME",
        "name": "Acme Corporation",
        "isActive": True,
        "createdAt": "2024-01-05T10:00:00Z",
        "updatedAt": "2024-01-05T10:00:00Z",
    }
    payload.update(overrides)
    return payload


def report_payload(**overrides: Any) -> dict[str, Any]:
    payload = {
        "id": "rep-1",
        "orgClientId": "org-1",
        "reportDate": "2024-01-05",
        "accountId": "act-100",
        "clientSpend": 125.5,
        "currency": "USD",
        "createdAt": "2024-01-05T10:00:00Z",
        "updatedAt": "2024-01-05T10:00:00Z",
    }
    payload.update(overrides)
    return payload


def topup_payload(**overrides: Any) -> dict[str, Any]:
    payload = {
        "id": "top-1",
        "orgClientId": "org-1",
        "topupDate": "2024-01-04",
        "jenis": "Transfer",
        "clientTopup": 500,
        "currency": "USD",
        "createdAt": "2024-01-04T10:00:00Z",
        "updatedAt": "2024-01-04T10:00:00Z",
    }
    payload.update(overrides)
    return payload


def page_payload(items: list[dict[str, Any]], *, total: Optional[int] = None, page: int = 1, page_size: int = 10):
    return {
        "items": items,
        "total": len(items) if total is None else total,
        "page": page,
        "pageSize": page_size,
    }


def dashboard_payload(**overrides: Any) -> dict[str, Any]:
    payload = {
        "orgClient": {"id": "org-1", "code": "ACME", "name": "Acme Corporation"},
        "summary": {"totalTopup": 500, "totalSpend": 125.5, "sisaSaldo": 374.5, "currency": "USD"},
        "latestCampaignReports": [
            {"reportDate": "2024-01-05", "accountId": "act-100", "clientSpend": 125.5}
        ],
        "latestTopups": [{"topupDate": "2024-01-04", "jenis": "Transfer", "clientTopup": 500}],
    }
    payload.update(overrides)
    return payload


# =============================================================================
# Fake Backend
# =============================================================================


def _in_window(day: str, params: httpx.QueryParams) -> bool:
    from_date = params.get("fromDate")
    to_date = params.get("toDate")
    if from_date and day < from_date:
        return False
    if to_date and day > to_date:
        return False
    return True


class FakeBackend:
    """In-memory backend speaking the same JSON as the real service."""

    def __init__(self, admin_token: str = ADMIN_TOKEN) -> None:
        self.admin_token = admin_token
        self.org_clients: list[dict[str, Any]] = []
        self.reports: list[dict[str, Any]] = []
        self.topups: list[dict[str, Any]] = []
        self.requests: list[httpx.Request] = []
        self._ids = count(1)

    # -- seeding -----------------------------------------------------------

    def add_org_client(self, code: str, name: str, *, is_active: bool = True) -> dict[str, Any]:
        record = org_client_payload(id=f"org-{next(self._ids)}", code=code, name=name, isActive=is_active)
        self.org_clients.insert(0, record)
        return record

    def add_report(self, org_client_id: str, report_date: str, spend: float, account_id: str = "act-1"):
        record = report_payload(
            id=f"rep-{next(self._ids)}",
            orgClientId=org_client_id,
            reportDate=report_date,
            accountId=account_id,
            clientSpend=spend,
        )
        self.reports.insert(0, record)
        return record

    def add_topup(self, org_client_id: str, topup_date: str, amount: float, jenis: str = "Transfer"):
        record = topup_payload(
            id=f"top-{next(self._ids)}",
            orgClientId=org_client_id,
            topupDate=topup_date,
            jenis=jenis,
            clientTopup=amount,
        )
        self.topups.insert(0, record)
        return record

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    # -- transport ---------------------------------------------------------

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path.startswith("/admin/"):
            if request.headers.get("Authorization") != f"Bearer {self.admin_token}":
                return httpx.Response(401, json={"message": "Unauthorized"})
        route = {
            ("GET", "/admin/org-clients"): self._list_org_clients,
            ("POST", "/admin/org-clients"): self._create_org_client,
            ("GET", "/admin/campaign-reports"): lambda r: self._admin_page(r, self.reports, "reportDate"),
            ("POST", "/admin/campaign-reports"): self._create_report,
            ("GET", "/admin/topups"): lambda r: self._admin_page(r, self.topups, "topupDate"),
            ("POST", "/admin/topups"): self._create_topup,
            ("GET", "/client/dashboard"): self._dashboard,
            ("GET", "/client/campaign-reports"): lambda r: self._client_page(r, self.reports, "reportDate"),
            ("GET", "/client/topups"): lambda r: self._client_page(r, self.topups, "topupDate"),
        }.get((request.method, path))
        if route is None:
            return httpx.Response(404, json={"message": f"No route for {path}"})
        return route(request)

    def _find_by_code(self, code: Optional[str]) -> Optional[dict[str, Any]]:
        for client in self.org_clients:
            if client["code"] == code:
                return client
        return None

    def _list_org_clients(self, request: httpx.Request) -> httpx.Response:
        items = list(self.org_clients)
        search = (request.url.params.get("search") or "").lower()
        if search:
            items = [c for c in items if search in c["code"].lower() or search in c["name"].lower()]
        is_active = request.url.params.get("isActive")
        if is_active is not None:
            wanted = is_active == "true"
            items = [c for c in items if c["isActive"] is wanted]
        return httpx.Response(200, json={"items": items})

    def _create_org_client(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        if self._find_by_code(body.get("code")):
            return httpx.Response(
                409,
                json={
                    "message": "Org client code already exists",
                    "errors": [{"path": ["code"], "message": "Must be unique"}],
                },
            )
        record = self.add_org_client(body["code"], body["name"])
        return httpx.Response(201, json=record)

    def _create_report(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        record = self.add_report(
            body["orgClientId"], body["reportDate"], body["clientSpend"], body["accountId"]
        )
        return httpx.Response(201, json=record)

    def _create_topup(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        record = self.add_topup(body["orgClientId"], body["topupDate"], body["clientTopup"], body["jenis"])
        return httpx.Response(201, json=record)

    def _paginate(self, request: httpx.Request, rows: list[dict[str, Any]]) -> httpx.Response:
        page = int(request.url.params.get("page") or 1)
        page_size = int(request.url.params.get("pageSize") or 10)
        start = (page - 1) * page_size
        return httpx.Response(
            200,
            json=page_payload(rows[start : start + page_size], total=len(rows), page=page, page_size=page_size),
        )

    def _admin_page(self, request: httpx.Request, rows, date_key: str) -> httpx.Response:
        org_id = request.url.params.get("orgClientId")
        selected = [
            r for r in rows if r["orgClientId"] == org_id and _in_window(r[date_key], request.url.params)
        ]
        return self._paginate(request, selected)

    def _client_page(self, request: httpx.Request, rows, date_key: str) -> httpx.Response:
        client = self._find_by_code(request.url.params.get("orgClientCode"))
        if client is None:
            return httpx.Response(404, json={"message": "Org client not found"})
        selected = [
            r for r in rows if r["orgClientId"] == client["id"] and _in_window(r[date_key], request.url.params)
        ]
        return self._paginate(request, selected)

    def _dashboard(self, request: httpx.Request) -> httpx.Response:
        client = self._find_by_code(request.url.params.get("orgClientCode"))
        if client is None:
            return httpx.Response(404, json={"message": "Org client not found"})
        params = request.url.params
        reports = [r for r in self.reports if r["orgClientId"] == client["id"] and _in_window(r["reportDate"], params)]
        topups = [t for t in self.topups if t["orgClientId"] == client["id"] and _in_window(t["topupDate"], params)]
        total_spend = sum(r["clientSpend"] for r in reports)
        total_topup = sum(t["clientTopup"] for t in topups)
        return httpx.Response(
            200,
            json={
                "orgClient": {"id": client["id"], "code": client["code"], "name": client["name"]},
                "summary": {
                    "totalTopup": total_topup,
                    "totalSpend": total_spend,
                    "sisaSaldo": total_topup - total_spend,
                    "currency": "USD",
                },
                "latestCampaignReports": reports[:5],
                "latestTopups": topups[:5],
            },
        )


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
async def api_factory(config):
    """Build API clients over a handler; all are closed after the test."""

    created: list[ApiClient] = []

    def _make(handler: Callable[[httpx.Request], httpx.Response], cfg: Optional[BaseConfig] = None) -> ApiClient:
        client = ApiClient(cfg or config, transport=httpx.MockTransport(handler))
        created.append(client)
        return client

    yield _make

    for client in created:
        await client.aclose()


@pytest.fixture
async def api(api_factory, backend) -> ApiClient:
    return api_factory(backend.handle)
