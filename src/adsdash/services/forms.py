"""Create-record form controllers for the admin portal.

Each form checks its required fields locally, submits once, and on success
clears its resource fields and reloads the authoritative list. The org scope
selection is never cleared.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Awaitable, Callable, Optional

from ..api.errors import ApiError
from ..formatting import today_iso
from ..logging_config import get_logger
from ..models import (
    CampaignReport,
    CampaignReportCreate,
    OrgClient,
    OrgClientCreate,
    TopupCreate,
    TopupRecord,
)
from .listing import ChangeCallback, ListController, OrgClientDirectory

logger = get_logger(__name__)

ALL_FIELDS_REQUIRED = "All fields are required."


class FormValidationError(ValueError):
    """Local validation failure; nothing is sent to the backend."""


@dataclass
class FormStatus:
    saving: bool = False
    form_error: Optional[str] = None
    field_errors: list[str] = field(default_factory=list)

    def clear_errors(self) -> None:
        self.form_error = None
        self.field_errors = []


def _is_blank(value: Optional[str]) -> bool:
    return not (value or "").strip()


def _parse_day(raw: str, label: str) -> date:
    try:
        return date.fromisoformat(raw.strip())
    except ValueError as exc:
        raise FormValidationError(f"{label} must use YYYY-MM-DD.") from exc


def _parse_amount(raw: str, message: str) -> float:
    try:
        amount = Decimal(raw.strip())
    except InvalidOperation as exc:
        raise FormValidationError(message) from exc
    if not amount.is_finite() or amount < 0:
        raise FormValidationError(message)
    return float(amount)


class CreateController:
    """Shared submit flow: validate, send, render errors, reload."""

    def __init__(
        self,
        create: Callable[[Any], Awaitable[Any]],
        *,
        on_change: Optional[ChangeCallback] = None,
    ) -> None:
        self._create = create
        self.on_change = on_change
        self.status = FormStatus()

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change()

    def build_payload(self) -> Any:
        raise NotImplementedError

    def clear_resource_fields(self) -> None:
        raise NotImplementedError

    async def after_create(self, created: Any) -> None:
        return None

    async def submit(self) -> bool:
        """Return True when the record was created and the list reloaded."""

        if self.status.saving:
            return False
        try:
            payload = self.build_payload()
        except FormValidationError as exc:
            self.status.form_error = str(exc)
            self.status.field_errors = []
            self._notify()
            return False

        self.status.clear_errors()
        self.status.saving = True
        self._notify()
        try:
            created = await self._create(payload)
        except ApiError as exc:
            self.status.form_error = exc.message
            self.status.field_errors = [str(issue) for issue in exc.field_errors]
            logger.warning(
                "Create failed",
                extra={
                    "form": type(self).__name__,
                    "error_kind": exc.kind.value,
                    "status": exc.status,
                    "field_errors": len(self.status.field_errors),
                },
            )
            return False
        finally:
            self.status.saving = False
            self._notify()

        logger.info("Record created", extra={"form": type(self).__name__})
        self.clear_resource_fields()
        self._notify()
        await self.after_create(created)
        return True


class OrgClientForm(CreateController):
    def __init__(
        self,
        create: Callable[[OrgClientCreate], Awaitable[OrgClient]],
        directory: OrgClientDirectory,
        *,
        on_change: Optional[ChangeCallback] = None,
    ) -> None:
        super().__init__(create, on_change=on_change)
        self.directory = directory
        self.code = ""
        self.name = ""

    def build_payload(self) -> OrgClientCreate:
        if _is_blank(self.code) or _is_blank(self.name):
            raise FormValidationError("Both code and name are required.")
        return OrgClientCreate(code=self.code.strip(), name=self.name.strip())

    def clear_resource_fields(self) -> None:
        self.code = ""
        self.name = ""

    async def after_create(self, created: OrgClient) -> None:
        # server order (newest first) decides where the new client lands
        await self.directory.refresh()


class ScopedCreateController(CreateController):
    """Form whose records belong to the org client selected for its ledger.

    The form scope and the list scope always change together.
    """

    def __init__(
        self,
        create: Callable[[Any], Awaitable[Any]],
        listing: ListController[Any],
        *,
        on_change: Optional[ChangeCallback] = None,
    ) -> None:
        super().__init__(create, on_change=on_change)
        self.listing = listing
        self.org_client_id = listing.state.scope or ""

    async def select_org_client(self, org_client_id: Optional[str]) -> None:
        self.org_client_id = org_client_id or ""
        self.status.clear_errors()
        self._notify()
        await self.listing.change_scope(self.org_client_id or None)

    async def load_org_clients(self, directory: OrgClientDirectory) -> None:
        """Load the directory and preselect its first client when none is chosen."""

        await directory.refresh()
        if not self.org_client_id and directory.state.items:
            self.org_client_id = directory.state.items[0].id
        await self.select_org_client(self.org_client_id)

    async def after_create(self, created: Any) -> None:
        await self.listing.refresh(scope=self.org_client_id, page=1)


class CampaignReportForm(ScopedCreateController):
    def __init__(
        self,
        create: Callable[[CampaignReportCreate], Awaitable[CampaignReport]],
        listing: ListController[CampaignReport],
        *,
        on_change: Optional[ChangeCallback] = None,
    ) -> None:
        super().__init__(create, listing, on_change=on_change)
        self.report_date = today_iso()
        self.account_id = ""
        self.client_spend = ""

    def build_payload(self) -> CampaignReportCreate:
        if _is_blank(self.org_client_id):
            raise FormValidationError("Select an organization to record a report.")
        if any(_is_blank(v) for v in (self.report_date, self.account_id, self.client_spend)):
            raise FormValidationError(ALL_FIELDS_REQUIRED)
        return CampaignReportCreate(
            org_client_id=self.org_client_id,
            report_date=_parse_day(self.report_date, "Report date"),
            account_id=self.account_id.strip(),
            client_spend=_parse_amount(self.client_spend, "Client spend must be a valid amount."),
        )

    def clear_resource_fields(self) -> None:
        self.account_id = ""
        self.client_spend = ""


class TopupForm(ScopedCreateController):
    def __init__(
        self,
        create: Callable[[TopupCreate], Awaitable[TopupRecord]],
        listing: ListController[TopupRecord],
        *,
        on_change: Optional[ChangeCallback] = None,
    ) -> None:
        super().__init__(create, listing, on_change=on_change)
        self.topup_date = today_iso()
        self.jenis = ""
        self.client_topup = ""

    def build_payload(self) -> TopupCreate:
        if _is_blank(self.org_client_id):
            raise FormValidationError("Select an organization to record a topup.")
        if any(_is_blank(v) for v in (self.topup_date, self.jenis, self.client_topup)):
            raise FormValidationError(ALL_FIELDS_REQUIRED)
        return TopupCreate(
            org_client_id=self.org_client_id,
            topup_date=_parse_day(self.topup_date, "Topup date"),
            jenis=self.jenis.strip(),
            client_topup=_parse_amount(self.client_topup, "Topup amount must be a valid amount."),
        )

    def clear_resource_fields(self) -> None:
        self.jenis = ""
        self.client_topup = ""
