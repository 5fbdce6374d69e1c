"""Pagination — page-size clamping and the opaque offset page token.

Invariants:
    - Page size is always within 1..MAX_PAGE_SIZE after clamping (never an error)
    - Empty token == offset 0; any other token must decode exactly or fail
    - Decoded offsets fit in a signed 64-bit integer (0..MAX_OFFSET)
    - Token format: standard base-64 of the decimal ASCII text of the offset ("10" -> "MTA=")
    - A bad token raises InvalidPageTokenError and never falls back to offset 0
    - next token is "" exactly when the returned window reaches total_count

Design Decisions:
    - Raw offset, not a (created_at, id) cursor: kept for token compatibility.
      Inserts or deletes between page fetches shift the window, so entries can be
      skipped or repeated across pages under concurrent mutation.
    - Pure functions: no IO, so the Manager can reject a token before touching the store
"""

import base64
import binascii

from microjournal.core.errors import InvalidPageTokenError

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
MAX_OFFSET = 2**63 - 1


def clamp_page_size(page_size: int) -> int:
    """Substitute the default for <= 0 and cap at MAX_PAGE_SIZE."""
    if page_size <= 0:
        return DEFAULT_PAGE_SIZE
    if page_size > MAX_PAGE_SIZE:
        return MAX_PAGE_SIZE
    return page_size


def encode_page_token(offset: int) -> str:
    """Encode a non-negative offset as an opaque page token."""
    if offset < 0:
        raise ValueError(f"offset must be non-negative, got {offset}")
    return base64.b64encode(str(offset).encode("ascii")).decode("ascii")


def decode_page_token(token: str) -> int:
    """Decode a page token to its offset. Empty token means the first page."""
    if not token:
        return 0
    try:
        raw = base64.b64decode(token, validate=True)
    except (binascii.Error, ValueError):
        raise InvalidPageTokenError("not valid base-64")
    try:
        text = raw.decode("ascii")
    except UnicodeDecodeError:
        raise InvalidPageTokenError("decoded text is not ASCII")
    if not text.isdigit():
        raise InvalidPageTokenError(f"{text!r} is not a non-negative integer")
    offset = int(text)
    if offset > MAX_OFFSET:
        raise InvalidPageTokenError("offset does not fit in a signed 64-bit integer")
    return offset


def next_page_token(offset: int, returned: int, total_count: int) -> str:
    """Token for the page after this one, or "" when the sequence is exhausted."""
    next_offset = offset + returned
    if next_offset < total_count:
        return encode_page_token(next_offset)
    return ""
