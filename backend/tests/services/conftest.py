"""Service test fixtures — a store that records every call it receives.

Invariants:
    - RecordingStore behaves exactly like InMemoryJournalStore
    - calls lists (operation, args) in order, so tests can assert "zero store queries"
"""

import pytest

from microjournal.infrastructure.memory_store import InMemoryJournalStore
from microjournal.services.journal_manager import JournalManager


class RecordingStore(InMemoryJournalStore):
    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.calls: list[tuple] = []

    async def create(self, title, content):
        self.calls.append(("create", title, content))
        return await super().create(title, content)

    async def get_by_id(self, entry_id):
        self.calls.append(("get_by_id", entry_id))
        return await super().get_by_id(entry_id)

    async def update(self, entry_id, title, content):
        self.calls.append(("update", entry_id, title, content))
        return await super().update(entry_id, title, content)

    async def delete(self, entry_id):
        self.calls.append(("delete", entry_id))
        return await super().delete(entry_id)

    async def list(self, limit, offset):
        self.calls.append(("list", limit, offset))
        return await super().list(limit, offset)


@pytest.fixture
def store():
    return RecordingStore()


@pytest.fixture
def manager(store):
    return JournalManager(store)
