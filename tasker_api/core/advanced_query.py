"""Advanced Query — filtering, projection, sorting and pagination for list endpoints.

Invariants:
    - parse_query only accepts fields declared by the resource (no arbitrary columns)
    - Filter values are converted with the resource's converter before reaching a store
    - page >= 1 and 1 <= limit <= max_limit after parsing
    - Default sort is newest first (-created_at)

Design Decisions:
    - Query grammar: ?field=value, ?field[gt|gte|lt|lte|in]=value, ?select=a,b,
      ?sort=-a,b, ?page=N, ?limit=N
    - record_matches / sort_records are the reference semantics; SQL stores
      translate the same QuerySpec into WHERE / ORDER BY clauses
"""

import re
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping

from tasker_api.core.errors import ValidationFailedError

RESERVED_PARAMS = frozenset({"select", "sort", "page", "limit"})
OPERATORS = frozenset({"eq", "gt", "gte", "lt", "lte", "in"})
_BRACKET = re.compile(r"^(?P<field>[A-Za-z_][A-Za-z0-9_]*)\[(?P<op>[a-z]+)\]$")

Converter = Callable[[str], Any]


@dataclass(frozen=True)
class FieldFilter:
    field: str
    op: str
    value: Any


@dataclass(frozen=True)
class QuerySpec:
    """Parsed list query, independent of the store implementation."""
    filters: tuple[FieldFilter, ...] = ()
    select: tuple[str, ...] | None = None
    sort: tuple[tuple[str, bool], ...] = (("created_at", True),)
    page: int = 1
    limit: int = 25

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def _convert(field: str, raw: str, converter: Converter) -> Any:
    try:
        return converter(raw)
    except (TypeError, ValueError) as e:
        raise ValidationFailedError(
            f"Invalid value '{raw}' for field '{field}'", [field],
        ) from e


def _parse_positive_int(name: str, raw: str | None, default: int) -> int:
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ValidationFailedError(f"'{name}' must be an integer", [name]) from e
    if value < 1:
        raise ValidationFailedError(f"'{name}' must be at least 1", [name])
    return value


def _parse_field_list(name: str, raw: str, allowed: Iterable[str]) -> list[str]:
    names = [part.strip() for part in raw.split(",") if part.strip()]
    for part in names:
        if part.lstrip("-") not in allowed:
            raise ValidationFailedError(f"Unknown field '{part.lstrip('-')}' in {name}", [name])
    return names


def _parse_filter(key: str, raw: str, fields: Mapping[str, Converter]) -> FieldFilter:
    match = _BRACKET.match(key)
    field, op = (match.group("field"), match.group("op")) if match else (key, "eq")
    if field not in fields:
        raise ValidationFailedError(f"Unknown filter field '{field}'", [field])
    if op not in OPERATORS:
        raise ValidationFailedError(f"Unknown filter operator '{op}'", [field])
    converter = fields[field]
    if op == "in":
        values = tuple(
            _convert(field, part.strip(), converter)
            for part in raw.split(",") if part.strip()
        )
        return FieldFilter(field, op, values)
    return FieldFilter(field, op, _convert(field, raw, converter))


def parse_query(
    params: Mapping[str, str],
    fields: Mapping[str, Converter],
    *,
    selectable: Iterable[str] | None = None,
    default_limit: int = 25,
    max_limit: int = 100,
) -> QuerySpec:
    """Build a QuerySpec from raw query-string parameters.

    fields maps each filterable/sortable field to its value converter;
    selectable (default: the same fields) bounds ?select=.
    """
    filters = tuple(
        _parse_filter(key, raw, fields)
        for key, raw in params.items()
        if key not in RESERVED_PARAMS
    )

    select = None
    if params.get("select"):
        allowed = set(selectable) if selectable is not None else set(fields)
        select = tuple(_parse_field_list("select", params["select"], allowed))

    sort: tuple[tuple[str, bool], ...] = QuerySpec.sort
    if params.get("sort"):
        sort = tuple(
            (name.lstrip("-"), name.startswith("-"))
            for name in _parse_field_list("sort", params["sort"], fields)
        )

    page = _parse_positive_int("page", params.get("page"), 1)
    limit = min(_parse_positive_int("limit", params.get("limit"), default_limit), max_limit)
    return QuerySpec(filters=filters, select=select, sort=sort, page=page, limit=limit)


def build_pagination(total: int, page: int, limit: int) -> dict:
    """next/prev page pointers around the current window."""
    pagination: dict = {}
    start = (page - 1) * limit
    if start + limit < total:
        pagination["next"] = {"page": page + 1, "limit": limit}
    if start > 0:
        pagination["prev"] = {"page": page - 1, "limit": limit}
    return pagination


def project(record: dict, select: Iterable[str] | None) -> dict:
    """Keep only selected keys (id always kept)."""
    if not select:
        return record
    keep = {"id", *select}
    return {k: v for k, v in record.items() if k in keep}


def _compare(value: Any, op: str, expected: Any) -> bool:
    if op == "eq":
        return value == expected
    if op == "in":
        return value in expected
    if value is None:
        return False
    if op == "gt":
        return value > expected
    if op == "gte":
        return value >= expected
    if op == "lt":
        return value < expected
    return value <= expected


def record_matches(record: dict, filters: Iterable[FieldFilter]) -> bool:
    return all(_compare(record.get(f.field), f.op, f.value) for f in filters)


def sort_records(records: list[dict], sort: Iterable[tuple[str, bool]]) -> list[dict]:
    """Stable multi-key sort; None values sort first ascending."""
    ordered = list(records)
    for field, descending in reversed(tuple(sort)):
        ordered.sort(
            key=lambda r: (r.get(field) is not None, r.get(field)),
            reverse=descending,
        )
    return ordered
