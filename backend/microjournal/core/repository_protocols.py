"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, so the SQL store and the in-memory
      store satisfy the contract without a shared base class
    - Async in Protocol: boundary methods are async because implementations do IO;
      cancelling the awaiting task cancels the store call
"""

from typing import Protocol

from microjournal.core.domain_types import EntryId, JournalEntry


class JournalStore(Protocol):
    """Contract for journal entry persistence — implemented by shell.

    get_by_id, update and delete raise EntryNotFoundError when no row matches;
    every other storage failure surfaces as StorageError.
    """
    async def create(self, title: str, content: str) -> JournalEntry: ...
    async def get_by_id(self, entry_id: EntryId) -> JournalEntry: ...
    async def update(
        self, entry_id: EntryId, title: str, content: str,
    ) -> JournalEntry: ...
    async def delete(self, entry_id: EntryId) -> None: ...
    async def list(
        self, limit: int, offset: int,
    ) -> tuple[list[JournalEntry], int]: ...
