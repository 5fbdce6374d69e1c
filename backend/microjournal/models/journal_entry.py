"""JournalEntry ORM — one row per journal entry in journal_entries.

Invariants:
    - id is an auto-incremented 64-bit integer, never reused after delete (SQLite AUTOINCREMENT)
    - title and content are non-nullable text
    - created_at and updated_at are assigned by the database, not by Python
    - idx_journal_entries_created_at backs the created_at DESC listing order

Design Decisions:
    - server_default=func.now() over a Python default: timestamps come from the
      store's clock, so insertion order and timestamp order agree
    - No relationships: the entry is the only entity
"""

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, Index, Integer, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from microjournal.db.base import Base

# 64-bit ids on Postgres; SQLite keeps INTEGER so AUTOINCREMENT applies to the rowid
ENTRY_ID_TYPE = BigInteger().with_variant(Integer, "sqlite")


class JournalEntry(Base):
    """Persisted journal entry."""
    __tablename__ = "journal_entries"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(
        ENTRY_ID_TYPE, primary_key=True, autoincrement=True,
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )


Index("idx_journal_entries_created_at", JournalEntry.created_at.desc())
