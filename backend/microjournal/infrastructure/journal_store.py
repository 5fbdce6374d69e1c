"""SQL Journal Store — JournalStore implementation over an async SQLAlchemy session.

Invariants:
    - create() and update() return the row as read back after commit, never an echo of the input
    - created_at/updated_at are set by the database clock (func.now()), not by Python
    - Zero rows affected on update/delete raises EntryNotFoundError, never silent success
    - Listing order is created_at DESC, id DESC; total_count is a separate COUNT(*)
    - Every SQLAlchemyError is rolled back and re-raised as StorageError

Design Decisions:
    - One store per request session (FastAPI dependency): no locking here, the
      engine's own transaction discipline decides concurrent behaviour
    - populate_existing on reads: a bulk UPDATE with synchronize_session=False
      leaves identity-map rows stale, reads must overwrite them
    - Naive datetimes (SQLite CURRENT_TIMESTAMP) are UTC by definition
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from microjournal.core.domain_types import EntryId, JournalEntry
from microjournal.core.errors import EntryNotFoundError
from microjournal.infrastructure.database import translate_db_error
from microjournal.models.journal_entry import JournalEntry as JournalEntryModel

logger = logging.getLogger(__name__)


class SQLJournalStore:
    """Persists journal entries in the journal_entries table."""

    def __init__(self, session: AsyncSession):
        self.session = session

    @asynccontextmanager
    async def _storage_errors(self, operation: str) -> AsyncIterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise translate_db_error(e, operation)

    async def create(self, title: str, content: str) -> JournalEntry:
        async with self._storage_errors("insert"):
            row = JournalEntryModel(title=title, content=content)
            self.session.add(row)
            await self.session.commit()
            entry_id = EntryId(row.id)
        logger.info(f"Created journal entry {entry_id}", extra={"entry_id": entry_id})
        return await self.get_by_id(entry_id)

    async def get_by_id(self, entry_id: EntryId) -> JournalEntry:
        async with self._storage_errors("select"):
            result = await self.session.execute(
                select(JournalEntryModel)
                .where(JournalEntryModel.id == entry_id)
                .execution_options(populate_existing=True),
            )
            row = result.scalar_one_or_none()
        if row is None:
            raise EntryNotFoundError(entry_id)
        return _to_domain(row)

    async def update(
        self, entry_id: EntryId, title: str, content: str,
    ) -> JournalEntry:
        async with self._storage_errors("update"):
            result = await self.session.execute(
                update(JournalEntryModel)
                .where(JournalEntryModel.id == entry_id)
                .values(title=title, content=content, updated_at=func.now())
                .execution_options(synchronize_session=False),
            )
            if result.rowcount == 0:
                await self.session.rollback()
                raise EntryNotFoundError(entry_id)
            await self.session.commit()
        return await self.get_by_id(entry_id)

    async def delete(self, entry_id: EntryId) -> None:
        async with self._storage_errors("delete"):
            result = await self.session.execute(
                delete(JournalEntryModel)
                .where(JournalEntryModel.id == entry_id)
                .execution_options(synchronize_session=False),
            )
            if result.rowcount == 0:
                await self.session.rollback()
                raise EntryNotFoundError(entry_id)
            await self.session.commit()
        logger.info(f"Deleted journal entry {entry_id}", extra={"entry_id": entry_id})

    async def list(
        self, limit: int, offset: int,
    ) -> tuple[list[JournalEntry], int]:
        async with self._storage_errors("count"):
            total_count = (
                await self.session.execute(
                    select(func.count()).select_from(JournalEntryModel),
                )
            ).scalar_one()
        async with self._storage_errors("select"):
            result = await self.session.execute(
                select(JournalEntryModel)
                .order_by(
                    JournalEntryModel.created_at.desc(),
                    JournalEntryModel.id.desc(),
                )
                .limit(limit)
                .offset(offset)
                .execution_options(populate_existing=True),
            )
            rows = result.scalars().all()
        return [_to_domain(row) for row in rows], int(total_count)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _to_domain(row: JournalEntryModel) -> JournalEntry:
    """Convert ORM row to domain entry."""
    return JournalEntry(
        id=EntryId(row.id),
        title=row.title,
        content=row.content,
        created_at=_as_utc(row.created_at),
        updated_at=_as_utc(row.updated_at),
    )
