"""Journal Service — the four journal RPCs over HTTP/JSON.

Invariants:
    - Wire ids (str) become EntryId (int) here; a malformed id never reaches the Manager
    - Routes hold no state and no business rules: translate, delegate, translate back
    - Domain errors propagate to the global handlers (api/error_handlers.py), which
      own the error -> status mapping
    - Each request gets its own Manager bound to the request's DB session

Design Decisions:
    - POST /api/v1/journal/<Method>: RPC-style paths mirror the service's method
      names instead of REST resources
    - parse_entry_id accepts what a signed 64-bit integer parse accepts ([+-]?digits);
      ids that parse but do not exist are the store's NotFound, not a malformed id
"""

import logging
import re

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from microjournal.core.domain_types import EntryId, JournalEntry
from microjournal.core.errors import MalformedIdentifierError
from microjournal.infrastructure.database import get_db
from microjournal.infrastructure.journal_store import SQLJournalStore
from microjournal.schemas.journal import (
    CreateEntryRequest, CreateEntryResponse,
    UpdateEntryRequest, UpdateEntryResponse,
    DeleteEntryRequest, DeleteEntryResponse,
    ListEntriesRequest, ListEntriesResponse,
    WireEntry,
)
from microjournal.services.journal_manager import JournalManager

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/journal", tags=["journal"])

_ID_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def get_journal_manager(db: AsyncSession = Depends(get_db)) -> JournalManager:
    """Build the Manager over a SQL store bound to this request's session."""
    return JournalManager(SQLJournalStore(db))


def parse_entry_id(raw_id: str) -> EntryId:
    """Convert a wire id to an EntryId or raise MalformedIdentifierError."""
    if not _ID_PATTERN.fullmatch(raw_id):
        raise MalformedIdentifierError(raw_id)
    value = int(raw_id)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise MalformedIdentifierError(raw_id)
    return EntryId(value)


def to_wire_entry(entry: JournalEntry) -> WireEntry:
    return WireEntry(
        id=str(entry.id),
        title=entry.title,
        content=entry.content,
        created_at=entry.created_at,
        updated_at=entry.updated_at,
    )


@router.post("/CreateEntry", response_model=CreateEntryResponse)
async def create_entry(
    body: CreateEntryRequest,
    manager: JournalManager = Depends(get_journal_manager),
):
    """Create a journal entry."""
    logger.info(
        f"CreateEntry called with title of {len(body.title)} chars, "
        f"content of {len(body.content)} chars",
    )
    entry = await manager.create_entry(body.title, body.content)
    return CreateEntryResponse(entry=to_wire_entry(entry))


@router.post("/UpdateEntry", response_model=UpdateEntryResponse)
async def update_entry(
    body: UpdateEntryRequest,
    manager: JournalManager = Depends(get_journal_manager),
):
    """Replace title and content of an existing entry."""
    logger.info(f"UpdateEntry called for entry ID: {body.id}", extra={"entry_id": body.id})
    entry_id = parse_entry_id(body.id)
    entry = await manager.update_entry(entry_id, body.title, body.content)
    return UpdateEntryResponse(entry=to_wire_entry(entry))


@router.post("/DeleteEntry", response_model=DeleteEntryResponse)
async def delete_entry(
    body: DeleteEntryRequest,
    manager: JournalManager = Depends(get_journal_manager),
):
    """Hard-delete an entry."""
    logger.info(f"DeleteEntry called for entry ID: {body.id}", extra={"entry_id": body.id})
    entry_id = parse_entry_id(body.id)
    await manager.delete_entry(entry_id)
    return DeleteEntryResponse(success=True)


@router.post("/ListEntries", response_model=ListEntriesResponse)
async def list_entries(
    body: ListEntriesRequest,
    manager: JournalManager = Depends(get_journal_manager),
):
    """List entries newest first, one page at a time."""
    logger.info(
        f"ListEntries called with page_size: {body.page_size}, page_token: {body.page_token}",
        extra={"page_size": body.page_size},
    )
    result = await manager.list_entries(body.page_size, body.page_token)
    return ListEntriesResponse(
        entries=[to_wire_entry(e) for e in result.entries],
        next_page_token=result.next_page_token,
        total_count=result.total_count,
    )
