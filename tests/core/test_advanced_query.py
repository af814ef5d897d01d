"""Advanced Query — parsing, pagination, projection and reference filtering.

Tests cover:
    - default spec (page 1, default limit, newest first)
    - equality and bracket filters with converters
    - unknown fields / operators / bad values raise ValidationFailedError
    - limit is clamped to max_limit
    - build_pagination next/prev pointers
    - record_matches / sort_records semantics
"""

from datetime import datetime
from uuid import UUID, uuid4

import pytest

from tasker_api.core.advanced_query import (
    FieldFilter, QuerySpec, build_pagination, parse_query, project,
    record_matches, sort_records,
)
from tasker_api.core.errors import ValidationFailedError

FIELDS = {
    "title": str,
    "budget": float,
    "profile_id": UUID,
    "created_at": datetime.fromisoformat,
}


def test_defaults():
    spec = parse_query({}, FIELDS, default_limit=10)
    assert spec == QuerySpec(page=1, limit=10)
    assert spec.sort == (("created_at", True),)
    assert spec.offset == 0


def test_equality_filter_converts_value():
    profile_id = uuid4()
    spec = parse_query({"profile_id": str(profile_id)}, FIELDS)
    assert spec.filters == (FieldFilter("profile_id", "eq", profile_id),)


def test_bracket_operators():
    spec = parse_query({"budget[lte]": "100", "title[in]": "a, b"}, FIELDS)
    assert FieldFilter("budget", "lte", 100.0) in spec.filters
    assert FieldFilter("title", "in", ("a", "b")) in spec.filters


def test_select_sort_page_limit():
    spec = parse_query(
        {"select": "title,budget", "sort": "-budget,title", "page": "3", "limit": "5"},
        FIELDS,
    )
    assert spec.select == ("title", "budget")
    assert spec.sort == (("budget", True), ("title", False))
    assert spec.page == 3
    assert spec.limit == 5
    assert spec.offset == 10


def test_select_may_use_wider_selectable_set():
    spec = parse_query({"select": "description"}, FIELDS, selectable={"description"})
    assert spec.select == ("description",)


def test_limit_is_clamped():
    assert parse_query({"limit": "500"}, FIELDS, max_limit=100).limit == 100


@pytest.mark.parametrize(
    "params",
    [
        {"password_hash": "x"},
        {"budget[near]": "1"},
        {"budget": "cheap"},
        {"select": "secret"},
        {"sort": "-secret"},
        {"page": "0"},
        {"limit": "many"},
    ],
)
def test_invalid_queries_raise(params):
    with pytest.raises(ValidationFailedError):
        parse_query(params, FIELDS)


# ─── pagination / projection ─────────────────────────────────────

def test_pagination_first_page():
    assert build_pagination(total=30, page=1, limit=10) == {"next": {"page": 2, "limit": 10}}


def test_pagination_middle_page():
    assert build_pagination(total=30, page=2, limit=10) == {
        "next": {"page": 3, "limit": 10},
        "prev": {"page": 1, "limit": 10},
    }


def test_pagination_last_page():
    assert build_pagination(total=30, page=3, limit=10) == {"prev": {"page": 2, "limit": 10}}


def test_pagination_single_page():
    assert build_pagination(total=3, page=1, limit=10) == {}


def test_project_keeps_id():
    record = {"id": 1, "title": "t", "budget": 2}
    assert project(record, ("title",)) == {"id": 1, "title": "t"}
    assert project(record, None) is record


# ─── reference semantics ─────────────────────────────────────────

RECORDS = [
    {"id": 1, "title": "b", "budget": 50.0},
    {"id": 2, "title": "a", "budget": None},
    {"id": 3, "title": "c", "budget": 150.0},
]


def test_record_matches():
    filters = (FieldFilter("budget", "lte", 100.0),)
    assert [r["id"] for r in RECORDS if record_matches(r, filters)] == [1]


def test_record_matches_in():
    filters = (FieldFilter("title", "in", ("a", "c")),)
    assert [r["id"] for r in RECORDS if record_matches(r, filters)] == [2, 3]


def test_sort_records_descending_none_last():
    ordered = sort_records(RECORDS, (("budget", True),))
    assert [r["id"] for r in ordered] == [3, 1, 2]


def test_sort_records_multi_key():
    ordered = sort_records(RECORDS, (("title", False),))
    assert [r["title"] for r in ordered] == ["a", "b", "c"]
