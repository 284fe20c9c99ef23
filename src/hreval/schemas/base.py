"""Shared pydantic base for wire records."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class RecordModel(BaseModel):
    """Immutable record serialized with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )

    def to_payload(self) -> dict:
        """Return the JSON-ready camelCase representation."""
        return self.model_dump(mode="json", by_alias=True)
