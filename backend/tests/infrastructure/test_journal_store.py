"""Journal Stores — the SQL and in-memory stores honour the same contract.

Tests:
    - create() returns the stored row: id assigned, created_at == updated_at
    - ids strictly increase and are never reused after delete
    - update/delete/get on missing or deleted ids raise EntryNotFoundError
    - list() orders by created_at DESC then id DESC; total ignores limit/offset
    - SQL failures surface as StorageError, not EntryNotFoundError
"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.pool import StaticPool

from microjournal.core.domain_types import EntryId
from microjournal.core.errors import EntryNotFoundError, StorageError
from microjournal.db.session import create_engine, create_session_factory
from microjournal.infrastructure.journal_store import SQLJournalStore
from microjournal.infrastructure.memory_store import InMemoryJournalStore
from microjournal.models.journal_entry import JournalEntry as JournalEntryModel


@pytest.fixture(params=["sql", "memory"])
def store(request, test_db):
    if request.param == "sql":
        return SQLJournalStore(test_db)
    return InMemoryJournalStore()


async def test_create_returns_stored_entry(store):
    entry = await store.create("First", "Hello")
    assert entry.id > 0
    assert entry.title == "First"
    assert entry.content == "Hello"
    assert entry.created_at == entry.updated_at
    assert entry.created_at.tzinfo is not None


async def test_get_by_id_round_trip(store):
    created = await store.create("T", "C")
    fetched = await store.get_by_id(created.id)
    assert fetched == created


async def test_ids_increase_and_are_not_reused(store):
    a = await store.create("a", "a")
    b = await store.create("b", "b")
    assert b.id > a.id
    await store.delete(b.id)
    c = await store.create("c", "c")
    assert c.id > b.id


async def test_update_changes_fields_and_keeps_created_at(store):
    created = await store.create("old", "old body")
    updated = await store.update(created.id, "new", "new body")
    assert updated.id == created.id
    assert updated.title == "new"
    assert updated.content == "new body"
    assert updated.created_at == created.created_at
    assert updated.updated_at >= created.updated_at
    assert await store.get_by_id(created.id) == updated


async def test_missing_id_raises_not_found(store):
    missing = EntryId(404)
    with pytest.raises(EntryNotFoundError):
        await store.get_by_id(missing)
    with pytest.raises(EntryNotFoundError):
        await store.update(missing, "t", "c")
    with pytest.raises(EntryNotFoundError):
        await store.delete(missing)


async def test_deleted_id_raises_not_found(store):
    entry = await store.create("t", "c")
    await store.delete(entry.id)
    with pytest.raises(EntryNotFoundError):
        await store.get_by_id(entry.id)
    with pytest.raises(EntryNotFoundError):
        await store.update(entry.id, "t", "c")
    with pytest.raises(EntryNotFoundError):
        await store.delete(entry.id)


async def test_list_newest_first_with_id_tie_break(store):
    created = [await store.create(f"t{i}", "c") for i in range(5)]
    entries, total = await store.list(limit=10, offset=0)
    assert total == 5
    assert [e.id for e in entries] == [e.id for e in reversed(created)]


async def test_list_window_and_independent_total(store):
    created = [await store.create(f"t{i}", "c") for i in range(7)]
    newest_first = [e.id for e in reversed(created)]

    entries, total = await store.list(limit=3, offset=2)
    assert total == 7
    assert [e.id for e in entries] == newest_first[2:5]

    entries, total = await store.list(limit=3, offset=6)
    assert total == 7
    assert [e.id for e in entries] == newest_first[6:]

    entries, total = await store.list(limit=3, offset=10)
    assert entries == []
    assert total == 7


async def test_sql_list_orders_by_created_at_before_id(test_db):
    base = datetime(2024, 1, 1, 12, 0, 0)
    # Higher id, older timestamp
    test_db.add_all([
        JournalEntryModel(id=1, title="newest", content="c", created_at=base + timedelta(days=2), updated_at=base + timedelta(days=2)),
        JournalEntryModel(id=2, title="oldest", content="c", created_at=base, updated_at=base),
        JournalEntryModel(id=3, title="tie-a", content="c", created_at=base + timedelta(days=1), updated_at=base + timedelta(days=1)),
        JournalEntryModel(id=4, title="tie-b", content="c", created_at=base + timedelta(days=1), updated_at=base + timedelta(days=1)),
    ])
    await test_db.commit()

    entries, total = await SQLJournalStore(test_db).list(limit=10, offset=0)
    assert total == 4
    assert [e.title for e in entries] == ["newest", "tie-b", "tie-a", "oldest"]
    assert entries[0].created_at == datetime(2024, 1, 3, 12, 0, 0, tzinfo=timezone.utc)


async def test_memory_list_orders_by_created_at_before_id():
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    ticks = iter([base + timedelta(days=2), base, base + timedelta(days=1), base + timedelta(days=1)])
    store = InMemoryJournalStore(clock=lambda: next(ticks))
    for title in ("newest", "oldest", "tie-a", "tie-b"):
        await store.create(title, "c")

    entries, _ = await store.list(limit=10, offset=0)
    assert [e.title for e in entries] == ["newest", "tie-b", "tie-a", "oldest"]


async def test_memory_update_never_moves_updated_at_backwards():
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    ticks = iter([base, base - timedelta(hours=1)])
    store = InMemoryJournalStore(clock=lambda: next(ticks))
    created = await store.create("t", "c")
    updated = await store.update(created.id, "t2", "c2")
    assert updated.updated_at == created.updated_at


async def test_sql_missing_table_is_storage_error():
    engine = create_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    try:
        async with create_session_factory(engine)() as session:
            store = SQLJournalStore(session)
            with pytest.raises(StorageError) as exc_info:
                await store.list(limit=10, offset=0)
            assert exc_info.value.operation == "count"
            with pytest.raises(StorageError) as exc_info:
                await store.create("t", "c")
            assert exc_info.value.operation == "insert"
            assert "no such table" not in exc_info.value.message
    finally:
        await engine.dispose()
