"""Journal Schemas — Pydantic request/response shapes for the four journal RPCs.

Invariants:
    - Wire field names are camelCase (pageSize, nextPageToken, createdAt); snake_case also accepted
    - Wire ids are strings; conversion to EntryId happens in the route, not here
    - Omitted request fields take proto-style zero values ("" and 0) so the
      Manager, not Pydantic, decides what is invalid
    - pageSize fits in a signed 32-bit integer

Design Decisions:
    - Shared WireModel base carries the alias config once
    - Timestamps serialize as ISO-8601 strings
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class WireEntry(WireModel):
    """Journal entry as sent to clients."""
    id: str
    title: str
    content: str
    created_at: datetime
    updated_at: datetime


# --- Requests -----------------------------------------------------------------

class CreateEntryRequest(WireModel):
    title: str = ""
    content: str = ""


class UpdateEntryRequest(WireModel):
    id: str = ""
    title: str = ""
    content: str = ""


class DeleteEntryRequest(WireModel):
    id: str = ""


class ListEntriesRequest(WireModel):
    page_size: int = Field(0, ge=INT32_MIN, le=INT32_MAX)
    page_token: str = ""


# --- Responses ----------------------------------------------------------------

class CreateEntryResponse(WireModel):
    entry: WireEntry


class UpdateEntryResponse(WireModel):
    entry: WireEntry


class DeleteEntryResponse(WireModel):
    success: bool


class ListEntriesResponse(WireModel):
    entries: list[WireEntry] = Field(default_factory=list)
    next_page_token: str = ""
    total_count: int = 0
