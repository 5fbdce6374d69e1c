"""Journal Client — thin async client for the journal RPCs.

Invariants:
    - Speaks only the wire schemas (schemas/journal.py); ids stay strings
    - Error envelopes are raised as the matching MicroJournalError subclass, keyed by code
    - A client that created its own httpx.AsyncClient closes it; an injected one is left open

Design Decisions:
    - httpx.AsyncClient: same library the test suite drives the app with, so tests
      inject an ASGITransport-backed client and skip the network
    - Rebuilt errors keep the server's message, code, status and context, and get the
      subclass attributes (entry_id, operation, field, reason, raw_id) back from the context
"""

from enum import Enum
from typing import AsyncIterator, TypeVar

import httpx

from microjournal.core.domain_types import RpcStatus
from microjournal.core.errors import (
    ErrorCategory, ErrorContext, ErrorSeverity, MicroJournalError,
    EntryValidationError, InvalidPageTokenError, MalformedIdentifierError,
    EntryNotFoundError, StorageError,
)
from microjournal.schemas.journal import (
    CreateEntryResponse, UpdateEntryResponse, DeleteEntryResponse,
    ListEntriesResponse, WireEntry,
)

RPC_PREFIX = "/api/v1/journal"

_ERRORS_BY_CODE: dict[str, type[MicroJournalError]] = {
    "VALIDATION_ERROR": EntryValidationError,
    "INVALID_PAGE_TOKEN": InvalidPageTokenError,
    "MALFORMED_IDENTIFIER": MalformedIdentifierError,
    "ENTRY_NOT_FOUND": EntryNotFoundError,
    "STORAGE_ERROR": StorageError,
}

E = TypeVar("E", bound=Enum)


class JournalClient:
    """Calls CreateEntry, UpdateEntry, DeleteEntry and ListEntries on a journal server."""

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ):
        self._owns_http = http_client is None
        self._http = http_client or httpx.AsyncClient(
            base_url=base_url, timeout=timeout,
        )

    async def __aenter__(self) -> "JournalClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def create_entry(self, title: str, content: str) -> WireEntry:
        data = await self._call("CreateEntry", {"title": title, "content": content})
        return CreateEntryResponse.model_validate(data).entry

    async def update_entry(
        self, entry_id: str, title: str, content: str,
    ) -> WireEntry:
        data = await self._call(
            "UpdateEntry", {"id": entry_id, "title": title, "content": content},
        )
        return UpdateEntryResponse.model_validate(data).entry

    async def delete_entry(self, entry_id: str) -> bool:
        data = await self._call("DeleteEntry", {"id": entry_id})
        return DeleteEntryResponse.model_validate(data).success

    async def list_entries(
        self, page_size: int = 0, page_token: str = "",
    ) -> ListEntriesResponse:
        data = await self._call(
            "ListEntries", {"pageSize": page_size, "pageToken": page_token},
        )
        return ListEntriesResponse.model_validate(data)

    async def iter_entries(self, page_size: int = 0) -> AsyncIterator[WireEntry]:
        """Yield every entry, newest first, following nextPageToken until it is empty."""
        token = ""
        while True:
            page = await self.list_entries(page_size, token)
            for entry in page.entries:
                yield entry
            if not page.next_page_token:
                return
            token = page.next_page_token

    async def _call(self, method: str, payload: dict) -> dict:
        response = await self._http.post(f"{RPC_PREFIX}/{method}", json=payload)
        if response.is_error:
            raise error_from_response(response)
        return response.json()


def error_from_response(response: httpx.Response) -> MicroJournalError:
    """Rebuild the typed error described by an error envelope."""
    try:
        body = response.json().get("error") or {}
    except (ValueError, AttributeError):
        body = {}
    code = body.get("code", "INTERNAL_ERROR")
    ctx = body.get("context") or {}
    exc_cls = _ERRORS_BY_CODE.get(code, MicroJournalError)
    exc = exc_cls.__new__(exc_cls)
    MicroJournalError.__init__(
        exc,
        body.get("message") or response.reason_phrase,
        code,
        _enum(ErrorCategory, body.get("category"), ErrorCategory.INTERNAL),
        _enum(ErrorSeverity, body.get("severity"), ErrorSeverity.ERROR),
        ErrorContext(
            entry_id=ctx.get("entry_id"),
            operation=ctx.get("operation"),
            field_name=ctx.get("field"),
            reason=ctx.get("reason"),
        ),
        response.status_code,
        _enum(RpcStatus, body.get("status"), RpcStatus.INTERNAL),
    )
    _restore_attributes(exc)
    return exc


def _restore_attributes(exc: MicroJournalError) -> None:
    """Set the attributes each subclass's own __init__ would have set."""
    ctx = exc.context
    if isinstance(exc, EntryValidationError):
        exc.field = ctx.field_name or ""
    elif isinstance(exc, InvalidPageTokenError):
        exc.reason = ctx.reason or ""
    elif isinstance(exc, MalformedIdentifierError):
        exc.raw_id = ctx.entry_id or ""
    elif isinstance(exc, EntryNotFoundError):
        try:
            exc.entry_id = int(ctx.entry_id)
        except (TypeError, ValueError):
            exc.entry_id = ctx.entry_id
    elif isinstance(exc, StorageError):
        exc.operation = ctx.operation or ""


def _enum(enum_cls: type[E], value: str | None, default: E) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        return default
