"""Journal Manager — business rules between the RPC handler and the store.

Invariants:
    - Title/content validation happens before the store is invoked
    - A bad page token fails with InvalidPageTokenError before any store query
    - page_size is clamped silently (<= 0 -> 10, > 100 -> 100)
    - Store errors (EntryNotFoundError, StorageError) propagate unchanged; no retries

Design Decisions:
    - Store injected as a JournalStore protocol: SQL and in-memory stores are interchangeable
    - No caching and no state beyond the store reference; one manager per request is cheap
"""

import logging

from microjournal.core.domain_types import EntryId, JournalEntry, ListEntriesResult
from microjournal.core.enforce_entry import check_entry_fields
from microjournal.core.pagination import (
    clamp_page_size, decode_page_token, next_page_token,
)
from microjournal.core.repository_protocols import JournalStore

logger = logging.getLogger(__name__)


class JournalManager:
    """Validates input and translates page tokens to limit/offset for the store."""

    def __init__(self, store: JournalStore):
        self.store = store

    async def create_entry(self, title: str, content: str) -> JournalEntry:
        check_entry_fields(title, content)
        return await self.store.create(title, content)

    async def get_entry(self, entry_id: EntryId) -> JournalEntry:
        return await self.store.get_by_id(entry_id)

    async def update_entry(
        self, entry_id: EntryId, title: str, content: str,
    ) -> JournalEntry:
        check_entry_fields(title, content)
        return await self.store.update(entry_id, title, content)

    async def delete_entry(self, entry_id: EntryId) -> None:
        await self.store.delete(entry_id)

    async def list_entries(
        self, page_size: int, page_token: str,
    ) -> ListEntriesResult:
        """Return one page in created_at DESC order.

        The token is a raw offset, so entries inserted or deleted between calls
        can shift the window (skips or repeats). Accepted for token compatibility.
        """
        limit = clamp_page_size(page_size)
        offset = decode_page_token(page_token)
        entries, total_count = await self.store.list(limit, offset)
        logger.debug(
            f"Listed {len(entries)} of {total_count} entries at offset {offset}",
            extra={"page_size": limit},
        )
        return ListEntriesResult(
            entries=entries,
            next_page_token=next_page_token(offset, len(entries), total_count),
            total_count=total_count,
        )
