"""Entry Enforcement — non-empty title and content before any write.

Invariants:
    - Title is checked before content; both must be non-empty
    - Runs before the store is invoked; stores never re-validate

Design Decisions:
    - Whitespace-only text is accepted: only the empty string is rejected,
      matching what persisted entries have always allowed
"""

from microjournal.core.errors import EntryValidationError


def check_entry_fields(title: str, content: str) -> None:
    """Raise EntryValidationError when title or content is empty."""
    if not title:
        raise EntryValidationError("title cannot be empty", field="title")
    if not content:
        raise EntryValidationError("content cannot be empty", field="content")
