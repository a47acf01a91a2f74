"""Search Schemas: Pydantic models for the message search endpoint.

Invariants:
    - SearchFilter keeps unknown keys (extra="allow"); the dispatcher ignores them
    - Identifier lists are passed through item-for-item without coercion, so
      true, 1.5 or "abc" reach the core and fail as INVALID_IDENTIFIER instead
      of being turned into an integer or rejected as a generic validation error
    - date_range and date_expression accept any JSON value; an unusable shape,
      bound or expression becomes "no bound" in core, never a 400
    - to_filter_spec() drops unset entries and keeps the "from"/"to" wire names
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SearchFilter(BaseModel):
    """Filter specification. Unknown keys are kept and forwarded."""
    model_config = ConfigDict(extra="allow")

    include_groups: list[Any] | None = None
    include_labels: list[Any] | None = None
    date_range: Any = None
    date_expression: Any = None

    def to_filter_spec(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class SearchRequest(BaseModel):
    """Message search request."""
    term: str | None = Field(None, max_length=1000)
    filter: SearchFilter | None = None
    organization_id: int | None = None


class MessageResponse(BaseModel):
    """Message as returned by search."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    body: str | None
    flow_label: str | None
    contact_id: int
    organization_id: int | None
    inserted_at: datetime


class SearchResponse(BaseModel):
    messages: list[MessageResponse]
    count: int
