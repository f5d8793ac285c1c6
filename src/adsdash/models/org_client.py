"""Org client records."""

from __future__ import annotations

from typing import Optional

from .base import WireModel


class OrgClient(WireModel):
    """An advertising client (tenant) identified by a unique code."""

    id: str
    code: str
    name: str
    is_active: bool = True
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def label(self) -> str:
        return f"{self.name} ({self.code})"


class OrgClientList(WireModel):
    items: list[OrgClient] = []


class OrgClientCreate(WireModel):
    code: str
    name: str
