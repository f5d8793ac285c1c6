"""Async HTTP client for the ads dashboard backend."""

from __future__ import annotations

import json
from datetime import date
from typing import Any, Mapping, Optional, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ..config import BaseConfig
from ..logging_config import get_logger
from ..models import (
    CampaignReport,
    CampaignReportCreate,
    ClientDashboardResponse,
    OrgClient,
    OrgClientCreate,
    OrgClientList,
    PaginatedResponse,
    TopupCreate,
    TopupRecord,
)
from .errors import (
    ApiError,
    ConfigError,
    HttpError,
    NETWORK_ERROR_MESSAGE,
    NetworkError,
    ValidationIssue,
)

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

QueryValue = Optional[object]


def _stringify(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def build_query(params: Mapping[str, QueryValue]) -> dict[str, str]:
    """Drop None/empty-string values and stringify the rest.

    ``0`` and ``False`` are kept; pages are 1-based so callers never send a
    falsy page.
    """

    return {
        key: _stringify(value)
        for key, value in params.items()
        if value is not None and value != ""
    }


def _error_from_response(response: httpx.Response) -> HttpError:
    """Normalize a non-2xx response into an :class:`HttpError`."""

    message: str | None = None
    issues: list[ValidationIssue] = []
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        raw_message = payload.get("message")
        if isinstance(raw_message, str) and raw_message:
            message = raw_message
        raw_errors = payload.get("errors")
        if isinstance(raw_errors, list):
            issues = [
                issue
                for issue in (ValidationIssue.from_payload(item) for item in raw_errors)
                if issue is not None
            ]
    return HttpError(response.status_code, message, issues)


class ApiClient:
    """Thin request layer: auth headers, query strings, error normalization.

    Every call is a single attempt with caching disabled. Configuration is
    checked per call so a missing URL or token fails that call only.
    """

    def __init__(
        self,
        config: BaseConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.config.REQUEST_TIMEOUT),
                transport=self._transport,
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    def _build_headers(
        self, headers: Mapping[str, str] | None, *, has_body: bool, admin: bool
    ) -> httpx.Headers:
        merged = httpx.Headers(headers or {})
        merged["Accept"] = "application/json"
        merged["Cache-Control"] = "no-store"
        if has_body and "content-type" not in merged:
            merged["Content-Type"] = "application/json"
        if admin:
            if not self.config.has_admin_token:
                raise ConfigError(
                    "ADSDASH_ADMIN_TOKEN is not configured. Please set it in your environment."
                )
            merged["Authorization"] = f"Bearer {self.config.ADMIN_TOKEN}"
        return merged

    async def request(
        self,
        path: str,
        *,
        method: str = "GET",
        params: Mapping[str, QueryValue] | None = None,
        body: Any = None,
        headers: Mapping[str, str] | None = None,
        admin: bool = False,
    ) -> Any:
        """Issue one request and return the decoded JSON body (None for 204).

        Raises:
            ConfigError: base URL (or admin token) missing; nothing is sent
            NetworkError: the backend could not be reached
            HttpError: the backend answered with a non-2xx status
        """
        if not self.config.has_backend:
            raise ConfigError(
                "ADSDASH_BACKEND_URL is not configured. Please set it in your environment."
            )
        request_headers = self._build_headers(headers, has_body=body is not None, admin=admin)
        url = f"{self.config.BACKEND_URL}{path}"
        query = build_query(params or {})
        content = json.dumps(body).encode("utf-8") if body is not None else None

        client = await self._get_client()
        logger.debug(
            "API request",
            extra={"method": method, "path": path, "query": query, "admin": admin},
        )
        try:
            response = await client.request(
                method,
                url,
                params=query or None,
                content=content,
                headers=request_headers,
            )
        except httpx.TransportError as exc:
            logger.warning(
                "Backend unreachable",
                extra={"method": method, "path": path, "error": str(exc)},
            )
            raise NetworkError(NETWORK_ERROR_MESSAGE, detail=str(exc) or None) from exc

        if not response.is_success:
            error = _error_from_response(response)
            logger.warning(
                "API request failed",
                extra={
                    "method": method,
                    "path": path,
                    "status": error.status,
                    "error_message": error.message,
                },
            )
            raise error

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise HttpError(response.status_code, "The backend returned malformed JSON.") from exc

    async def _request_model(self, model: type[ModelT], path: str, **kwargs: Any) -> ModelT:
        payload = await self.request(path, **kwargs)
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            logger.error(
                "Unexpected response shape",
                extra={"path": path, "model": model.__name__, "errors": exc.error_count()},
            )
            raise HttpError(200, f"Unexpected response from {path}.") from exc

    # Admin endpoints

    async def list_org_clients(
        self, *, search: str | None = None, is_active: bool | None = None
    ) -> list[OrgClient]:
        data = await self._request_model(
            OrgClientList,
            "/admin/org-clients",
            params={"search": search, "isActive": is_active},
            admin=True,
        )
        return data.items

    async def create_org_client(self, payload: OrgClientCreate) -> OrgClient:
        return await self._request_model(
            OrgClient,
            "/admin/org-clients",
            method="POST",
            body=payload.to_payload(),
            admin=True,
        )

    async def list_admin_campaign_reports(
        self,
        org_client_id: str,
        *,
        page: int | None = None,
        page_size: int | None = None,
        from_date: date | None = None,
        to_date: date | None = None,
    ) -> PaginatedResponse[CampaignReport]:
        return await self._request_model(
            PaginatedResponse[CampaignReport],
            "/admin/campaign-reports",
            params={
                "orgClientId": org_client_id,
                "page": page,
                "pageSize": page_size,
                "fromDate": from_date,
                "toDate": to_date,
            },
            admin=True,
        )

    async def create_campaign_report(self, payload: CampaignReportCreate) -> CampaignReport:
        return await self._request_model(
            CampaignReport,
            "/admin/campaign-reports",
            method="POST",
            body=payload.to_payload(),
            admin=True,
        )

    async def list_admin_topups(
        self,
        org_client_id: str,
        *,
        page: int | None = None,
        page_size: int | None = None,
        from_date: date | None = None,
        to_date: date | None = None,
    ) -> PaginatedResponse[TopupRecord]:
        return await self._request_model(
            PaginatedResponse[TopupRecord],
            "/admin/topups",
            params={
                "orgClientId": org_client_id,
                "page": page,
                "pageSize": page_size,
                "fromDate": from_date,
                "toDate": to_date,
            },
            admin=True,
        )

    async def create_topup(self, payload: TopupCreate) -> TopupRecord:
        return await self._request_model(
            TopupRecord,
            "/admin/topups",
            method="POST",
            body=payload.to_payload(),
            admin=True,
        )

    # Client portal endpoints (no auth)

    async def get_client_dashboard(
        self,
        org_client_code: str,
        *,
        from_date: date | None = None,
        to_date: date | None = None,
    ) -> ClientDashboardResponse:
        return await self._request_model(
            ClientDashboardResponse,
            "/client/dashboard",
            params={"orgClientCode": org_client_code, "fromDate": from_date, "toDate": to_date},
        )

    async def list_client_campaign_reports(
        self,
        org_client_code: str,
        *,
        page: int | None = None,
        page_size: int | None = None,
        from_date: date | None = None,
        to_date: date | None = None,
    ) -> PaginatedResponse[CampaignReport]:
        return await self._request_model(
            PaginatedResponse[CampaignReport],
            "/client/campaign-reports",
            params={
                "orgClientCode": org_client_code,
                "page": page,
                "pageSize": page_size,
                "fromDate": from_date,
                "toDate": to_date,
            },
        )

    async def list_client_topups(
        self,
        org_client_code: str,
        *,
        page: int | None = None,
        page_size: int | None = None,
        from_date: date | None = None,
        to_date: date | None = None,
    ) -> PaginatedResponse[TopupRecord]:
        return await self._request_model(
            PaginatedResponse[TopupRecord],
            "/client/topups",
            params={
                "orgClientCode": org_client_code,
                "page": page,
                "pageSize": page_size,
                "fromDate": from_date,
                "toDate": to_date,
            },
        )


__all__ = ["ApiClient", "ApiError", "build_query"]
