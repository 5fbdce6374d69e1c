"""In-Memory Journal Store — dict-backed JournalStore for tests and local experiments.

Invariants:
    - Same contract as SQLJournalStore: NotFound on missing ids, created_at DESC, id DESC order
    - Ids come from a counter and are never reused, even after delete
    - updated_at never moves backwards, even if the injected clock does
"""

import itertools
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable

from microjournal.core.domain_types import EntryId, JournalEntry
from microjournal.core.errors import EntryNotFoundError


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryJournalStore:
    """Keeps entries in a dict keyed by id. Not shared across processes."""

    def __init__(self, clock: Callable[[], datetime] = _utc_now):
        self._clock = clock
        self._ids = itertools.count(1)
        self._rows: dict[EntryId, JournalEntry] = {}

    async def create(self, title: str, content: str) -> JournalEntry:
        now = self._clock()
        entry = JournalEntry(
            id=EntryId(next(self._ids)),
            title=title,
            content=content,
            created_at=now,
            updated_at=now,
        )
        self._rows[entry.id] = entry
        return entry

    async def get_by_id(self, entry_id: EntryId) -> JournalEntry:
        entry = self._rows.get(entry_id)
        if entry is None:
            raise EntryNotFoundError(entry_id)
        return entry

    async def update(
        self, entry_id: EntryId, title: str, content: str,
    ) -> JournalEntry:
        current = await self.get_by_id(entry_id)
        updated = replace(
            current,
            title=title,
            content=content,
            updated_at=max(self._clock(), current.updated_at),
        )
        self._rows[entry_id] = updated
        return updated

    async def delete(self, entry_id: EntryId) -> None:
        if self._rows.pop(entry_id, None) is None:
            raise EntryNotFoundError(entry_id)

    async def list(
        self, limit: int, offset: int,
    ) -> tuple[list[JournalEntry], int]:
        ordered = sorted(
            self._rows.values(),
            key=lambda e: (e.created_at, e.id),
            reverse=True,
        )
        return ordered[offset:offset + limit], len(ordered)
