# remote_sdk/tests/schemas/test_pagination.py
import json
from typing import Any, Dict

import pytest

from remote_sdk.exceptions import DecodeError
from remote_sdk.schemas.pagination import PaginationInfo, parse_page
from remote_sdk.schemas.record import Record, record_from_mapping


def _envelope(**pagination_overrides: Any) -> Dict[str, Any]:
    pagination = {"page": 1, "limit": 20, "total": 45, "pages": 3, "has_more": True}
    pagination.update(pagination_overrides)
    return {
        "data": [{"id": 1, "name": "a"}, {"id": 2, "name": "b"}, {"id": 3, "name": "c"}],
        "pagination": pagination,
    }


def test_parse_page_decodes_items_and_pagination():
    page = parse_page(json.dumps(_envelope()), record_from_mapping)

    assert len(page.data) == 3
    assert all(isinstance(item, Record) for item in page.data)
    assert [r.server_id for r in page.data] == ["1", "2", "3"]
    assert page.pagination.has_more is True
    assert page.pagination.pages == 3
    assert page.pagination.total == 45
    assert page.pagination.next_page == 2


def test_pages_inconsistency_is_trusted():
    page = parse_page(json.dumps(_envelope(pages=10)), record_from_mapping)
    assert page.pagination.pages == 10


def test_item_decoder_is_called_per_item():
    seen = []
    parse_page(json.dumps(_envelope()), lambda item: seen.append(item["name"]) or item)
    assert seen == ["a", "b", "c"]


def test_last_page_next_page_stays():
    info = PaginationInfo(page=3, limit=20, total=45, pages=3, has_more=False)
    assert info.next_page == 3


@pytest.mark.parametrize("missing", ["data", "pagination"])
def test_missing_top_level_key(missing: str):
    payload = _envelope()
    del payload[missing]
    with pytest.raises(DecodeError):
        parse_page(json.dumps(payload), record_from_mapping)


@pytest.mark.parametrize("missing", ["page", "limit", "total", "pages", "has_more"])
def test_missing_pagination_field(missing: str):
    payload = _envelope()
    del payload["pagination"][missing]
    with pytest.raises(DecodeError):
        parse_page(json.dumps(payload), record_from_mapping)


def test_camel_case_has_more_is_not_accepted():
    payload = _envelope()
    payload["pagination"]["hasMore"] = payload["pagination"].pop("has_more")
    with pytest.raises(DecodeError):
        parse_page(json.dumps(payload), record_from_mapping)


@pytest.mark.parametrize(
    "overrides",
    [{"page": "1"}, {"total": 4.5}, {"has_more": "yes"}, {"limit": None}],
)
def test_wrong_pagination_types(overrides: Dict[str, Any]):
    with pytest.raises(DecodeError):
        parse_page(json.dumps(_envelope(**overrides)), record_from_mapping)


def test_data_must_be_a_list():
    payload = _envelope()
    payload["data"] = {"id": 1}
    with pytest.raises(DecodeError):
        parse_page(json.dumps(payload), record_from_mapping)


def test_bad_item_propagates_decode_error():
    payload = _envelope()
    payload["data"].append("not an object")
    with pytest.raises(DecodeError):
        parse_page(json.dumps(payload), record_from_mapping)
