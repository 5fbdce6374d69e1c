"""Pagination — verifies page-size clamping and the base-64 offset token.

Tests:
    - Clamp substitutes 10 for <= 0 and caps at 100
    - Token is base-64 of the decimal offset text ("10" -> "MTA=")
    - Bad tokens raise InvalidPageTokenError, never fall back to offset 0
    - Next token is empty exactly when the window reaches total_count
"""

import pytest

from microjournal.core.errors import InvalidPageTokenError
from microjournal.core.pagination import (
    DEFAULT_PAGE_SIZE, MAX_OFFSET, MAX_PAGE_SIZE,
    clamp_page_size, decode_page_token, encode_page_token, next_page_token,
)


@pytest.mark.parametrize("requested, expected", [
    (0, DEFAULT_PAGE_SIZE),
    (-7, DEFAULT_PAGE_SIZE),
    (1, 1),
    (37, 37),
    (100, 100),
    (101, MAX_PAGE_SIZE),
    (500, MAX_PAGE_SIZE),
])
def test_clamp_page_size(requested, expected):
    assert clamp_page_size(requested) == expected


def test_encode_uses_decimal_text():
    assert encode_page_token(10) == "MTA="
    assert encode_page_token(0) == "MA=="


def test_decode_known_token():
    assert decode_page_token("MTA=") == 10
    assert decode_page_token("MjA=") == 20


def test_empty_token_is_first_page():
    assert decode_page_token("") == 0


def test_encode_rejects_negative_offset():
    with pytest.raises(ValueError):
        encode_page_token(-1)


@pytest.mark.parametrize("token", [
    "not-base64!",   # characters outside the alphabet
    "MTA",           # missing padding
    "YWJj",          # "abc"
    "LTE=",          # "-1"
    "MS41",          # "1.5"
    "/w==",          # byte 0xff, not ASCII
    "IDE=",          # " 1"
    "OTk5OTk5OTk5OTk5OTk5OTk5OTk5OTk=",  # 23 nines, past int64
])
def test_decode_rejects_tampered_tokens(token):
    with pytest.raises(InvalidPageTokenError) as exc_info:
        decode_page_token(token)
    assert exc_info.value.code == "INVALID_PAGE_TOKEN"


def test_next_token_points_past_returned_entries():
    assert next_page_token(0, 10, 25) == encode_page_token(10)
    assert next_page_token(10, 10, 25) == encode_page_token(20)


def test_next_token_empty_at_end():
    assert next_page_token(20, 5, 25) == ""
    assert next_page_token(0, 0, 0) == ""
    assert next_page_token(30, 0, 25) == ""


def test_decode_accepts_largest_int64_offset():
    assert decode_page_token(encode_page_token(MAX_OFFSET)) == MAX_OFFSET


def test_decode_rejects_offset_past_int64():
    with pytest.raises(InvalidPageTokenError) as exc_info:
        decode_page_token(encode_page_token(MAX_OFFSET + 1))
    assert "64-bit" in exc_info.value.reason
