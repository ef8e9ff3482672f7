# =============================================================================
# lib/query_builder.py - Query String to Mongo Query Translation
# =============================================================================
# Converts list-endpoint query parameters into the pieces of a Mongo find():
#
#   GET /api/restaurants?suburb=Bondi&ratingsAverage[gte]=4&sort=-ratingsAverage
#                       &select=name,suburb&page=2&limit=10
#
#   filter     -> {"suburb": "Bondi", "ratingsAverage": {"$gte": 4}}
#   sort       -> [("ratingsAverage", -1)]
#   projection -> {"name": 1, "suburb": 1}
#   skip/limit -> 10 / 10
#
# Supported operators: gt, gte, lt, lte, ne, in (comma-separated values).
# Values are converted to the type of their field when field types are
# given; otherwise numeric strings become numbers and "true"/"false" booleans.
# =============================================================================

from __future__ import annotations

import re
from datetime import datetime, timezone
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Mapping

import pymongo
from bson import ObjectId
from bson.errors import InvalidId

from lib.utils import ApplicationError

OPERATORS = {"gt", "gte", "lt", "lte", "ne", "in"}
RESERVED_PARAMS = {"select", "sort", "page", "limit"}

_FILTER_KEY = re.compile(r"^(?P<field>[A-Za-z_][\w.]*)(?:\[(?P<op>[a-z]+)\])?$")
_NUMBER = re.compile(r"^-?\d+(\.\d+)?$")


class QueryParseError(ApplicationError):
    """Raised when a query parameter cannot be translated."""

    def __init__(self, message: str, param: str | None = None):
        super().__init__(
            message=message,
            code="INVALID_QUERY",
            details={"param": param} if param else None,
        )


@dataclass
class ListQuery:
    """A translated list request, ready to hand to the driver."""

    filter: dict[str, Any] = field(default_factory=dict)
    sort: list[tuple[str, int]] = field(default_factory=list)
    projection: dict[str, int] | None = None
    page: int = 1
    limit: int = 25

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


def coerce_value(raw: str) -> Any:
    """Convert a query-string value to int, float or bool where it looks like one."""
    if _NUMBER.match(raw):
        return float(raw) if "." in raw else int(raw)
    lowered = raw.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    return raw


def _to_datetime(raw: str) -> datetime:
    value = datetime.fromisoformat(raw[:-1] + "+00:00" if raw.endswith("Z") else raw)
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def _to_number(raw: str) -> int | float:
    return float(raw) if "." in raw else int(raw)


CONVERTERS: dict[str, Callable[[str], Any]] = {
    "str": str,
    "int": int,
    "float": _to_number,
    "objectid": ObjectId,
    "datetime": _to_datetime,
}


def convert_value(raw: str, kind: str | None, param: str) -> Any:
    """
    Convert a query-string value to the stored type of its field.

    Args:
        raw: Value as sent
        kind: Key of CONVERTERS, or None to guess with coerce_value
        param: Parameter name for error messages

    Raises:
        QueryParseError: If the value is not valid for the field type
    """
    if kind is None:
        return coerce_value(raw)
    try:
        return CONVERTERS[kind](raw)
    except (ValueError, InvalidId, TypeError):
        raise QueryParseError(f"Invalid {kind} value '{raw}' for '{param}'.", param=param)


def _check_field(name: str, allowed_fields: set[str] | None, param: str) -> None:
    if allowed_fields is not None and name.split(".")[0] not in allowed_fields:
        raise QueryParseError(f"Unknown field '{name}' in '{param}' parameter.", param=param)


def _parse_positive_int(raw: str, param: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise QueryParseError(f"'{param}' must be a positive integer, got '{raw}'.", param=param)
    if value < 1:
        raise QueryParseError(f"'{param}' must be a positive integer, got '{raw}'.", param=param)
    return value


def _split_fields(raw: str) -> list[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


def parse_sort(raw: str, allowed_fields: set[str] | None = None) -> list[tuple[str, int]]:
    """
    Parse "-ratingsAverage,name" into [("ratingsAverage", -1), ("name", 1)].
    """
    sort = []
    for part in _split_fields(raw):
        direction = pymongo.DESCENDING if part.startswith("-") else pymongo.ASCENDING
        name = part.lstrip("+-")
        _check_field(name, allowed_fields, "sort")
        sort.append((name, direction))
    return sort


def parse_projection(raw: str, allowed_fields: set[str] | None = None) -> dict[str, int] | None:
    """Parse "name,suburb" into {"name": 1, "suburb": 1}."""
    names = _split_fields(raw)
    for name in names:
        _check_field(name, allowed_fields, "select")
    return {name: 1 for name in names} or None


def parse_filter(
    params: Iterable[tuple[str, str]],
    allowed_fields: set[str] | None = None,
    field_types: Mapping[str, str | None] | None = None,
) -> dict[str, Any]:
    """
    Build a Mongo filter from (key, value) pairs.

    Equality on a repeated key becomes $in; operator keys merge into one
    sub-document per field. Values are converted by field_types when the
    field is listed there.
    """
    types = field_types or {}
    query: dict[str, Any] = {}
    for key, raw in params:
        match = _FILTER_KEY.match(key)
        if not match:
            raise QueryParseError(f"Malformed filter parameter '{key}'.", param=key)

        name, op = match.group("field"), match.group("op")
        _check_field(name, allowed_fields, key)

        if op is None:
            value = convert_value(raw, types.get(name), key)
            existing = query.get(name)
            if existing is None:
                query[name] = value
            elif isinstance(existing, dict) and "$in" in existing:
                existing["$in"].append(value)
            elif isinstance(existing, dict):
                raise QueryParseError(f"Cannot combine '{name}' equality with operators.", param=key)
            else:
                query[name] = {"$in": [existing, value]}
            continue

        if op not in OPERATORS:
            raise QueryParseError(
                f"Unsupported operator '{op}'. Use one of: {', '.join(sorted(OPERATORS))}.",
                param=key,
            )

        kind = types.get(name)
        if op == "in":
            value = [convert_value(v, kind, key) for v in _split_fields(raw)]
        else:
            value = convert_value(raw, kind, key)
        clause = query.setdefault(name, {})
        if not isinstance(clause, dict):
            raise QueryParseError(f"Cannot combine '{name}' equality with operators.", param=key)
        clause[f"${op}"] = value

    return query


def build_list_query(
    params: Iterable[tuple[str, str]],
    allowed_fields: set[str] | None = None,
    field_types: Mapping[str, str | None] | None = None,
    default_sort: str = "-createdAt",
    default_limit: int = 25,
    max_limit: int = 100,
) -> ListQuery:
    """
    Translate raw query parameters into a ListQuery.

    Args:
        params: (key, value) pairs, e.g. request.query_params.multi_items()
        allowed_fields: Field names that may be filtered, sorted or selected
        field_types: Field name -> CONVERTERS key for filter values
        default_sort: Sort used when no 'sort' parameter is given
        default_limit: Page size when no 'limit' parameter is given
        max_limit: Upper bound applied to 'limit'

    Raises:
        QueryParseError: On unknown fields, operators or bad page/limit values
    """
    reserved: dict[str, str] = {}
    filters: list[tuple[str, str]] = []
    for key, value in params:
        if key in RESERVED_PARAMS:
            reserved[key] = value
        else:
            filters.append((key, value))

    page = _parse_positive_int(reserved["page"], "page") if "page" in reserved else 1
    limit = _parse_positive_int(reserved["limit"], "limit") if "limit" in reserved else default_limit

    return ListQuery(
        filter=parse_filter(filters, allowed_fields, field_types),
        sort=parse_sort(reserved.get("sort") or default_sort, allowed_fields),
        projection=parse_projection(reserved["select"], allowed_fields) if reserved.get("select") else None,
        page=page,
        limit=min(limit, max_limit),
    )


def build_pagination(page: int, limit: int, total: int) -> dict[str, Any]:
    """
    Pagination block for list responses.

    Example:
        build_pagination(2, 10, 35)
        # {"page": 2, "limit": 10, "total": 35,
        #  "next": {"page": 3, "limit": 10}, "prev": {"page": 1, "limit": 10}}
    """
    pagination: dict[str, Any] = {"page": page, "limit": limit, "total": total}
    if page * limit < total:
        pagination["next"] = {"page": page + 1, "limit": limit}
    if page > 1:
        pagination["prev"] = {"page": page - 1, "limit": limit}
    return pagination
