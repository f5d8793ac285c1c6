"""Shared pydantic base for backend wire records."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_payload(self) -> dict[str, Any]:
        """Serialize for a request body using the backend's field names."""

        return self.model_dump(by_alias=True, mode="json", exclude_none=True)
