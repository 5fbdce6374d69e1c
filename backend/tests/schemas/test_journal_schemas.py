"""Journal Schemas — wire names, zero-value defaults, pageSize bounds."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from microjournal.schemas.journal import (
    ListEntriesRequest, ListEntriesResponse, UpdateEntryRequest, WireEntry,
)


def test_requests_default_to_zero_values():
    assert UpdateEntryRequest().model_dump() == {"id": "", "title": "", "content": ""}
    request = ListEntriesRequest()
    assert request.page_size == 0
    assert request.page_token == ""


def test_requests_accept_camel_and_snake_case():
    assert ListEntriesRequest.model_validate({"pageSize": 5, "pageToken": "MTA="}).page_size == 5
    assert ListEntriesRequest.model_validate({"page_size": 5}).page_size == 5


@pytest.mark.parametrize("page_size", [2**31, -(2**31) - 1])
def test_page_size_must_fit_int32(page_size):
    with pytest.raises(ValidationError):
        ListEntriesRequest(page_size=page_size)


def test_response_serializes_camel_case():
    ts = datetime(2024, 5, 1, 8, 30, tzinfo=timezone.utc)
    response = ListEntriesResponse(
        entries=[WireEntry(id="3", title="t", content="c", created_at=ts, updated_at=ts)],
        next_page_token="MTA=",
        total_count=11,
    )
    payload = response.model_dump(mode="json", by_alias=True)
    assert payload["nextPageToken"] == "MTA="
    assert payload["totalCount"] == 11
    assert payload["entries"][0]["createdAt"] == "2024-05-01T08:30:00Z"
