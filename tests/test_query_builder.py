# =============================================================================
# tests/test_query_builder.py - Query String Translation Tests
# =============================================================================

from datetime import datetime, timezone

import pytest
from bson import ObjectId

from core.models import RESTAURANT_FIELD_TYPES, RESTAURANT_QUERY_FIELDS
from lib.query_builder import (
    ListQuery,
    QueryParseError,
    build_list_query,
    build_pagination,
    coerce_value,
    convert_value,
    parse_filter,
    parse_projection,
    parse_sort,
)

FIELDS = {"name", "suburb", "cuisine", "ratingsAverage", "ratingsQuantity", "createdAt", "location"}


class TestCoerceValue:

    @pytest.mark.parametrize("raw, expected", [
        ("4", 4),
        ("-2", -2),
        ("4.5", 4.5),
        ("true", True),
        ("False", False),
        ("Bondi", "Bondi"),
        ("4.5km", "4.5km"),
    ])
    def test_coercion(self, raw, expected):
        assert coerce_value(raw) == expected
        assert type(coerce_value(raw)) is type(expected)


class TestConvertValue:

    def test_object_id(self):
        assert convert_value("5f8d0d55b54764421b7156c3", "objectid", "_id") == ObjectId("5f8d0d55b54764421b7156c3")

    def test_date(self):
        assert convert_value("2024-01-01", "datetime", "createdAt") == datetime(2024, 1, 1, tzinfo=timezone.utc)

    def test_utc_suffix(self):
        value = convert_value("2024-01-01T10:30:00Z", "datetime", "createdAt")
        assert value == datetime(2024, 1, 1, 10, 30, tzinfo=timezone.utc)

    def test_string_field_keeps_digits(self):
        assert convert_value("123", "str", "name") == "123"

    def test_float_field(self):
        assert convert_value("4.5", "float", "ratingsAverage") == 4.5
        assert convert_value("4", "float", "ratingsAverage") == 4

    @pytest.mark.parametrize("raw, kind", [
        ("42", "objectid"),
        ("last-week", "datetime"),
        ("many", "int"),
        ("4.5", "int"),
        ("high", "float"),
    ])
    def test_invalid_for_type(self, raw, kind):
        with pytest.raises(QueryParseError):
            convert_value(raw, kind, "field")

    def test_untyped_falls_back_to_guessing(self):
        assert convert_value("4", None, "location.type") == 4


class TestTypedFilter:

    def test_values_follow_field_types(self):
        query = build_list_query(
            [
                ("_id", "5f8d0d55b54764421b7156c3"),
                ("createdAt[gte]", "2024-01-01"),
                ("name", "123"),
                ("ratingsQuantity[in]", "1,2"),
            ],
            RESTAURANT_QUERY_FIELDS,
            field_types=RESTAURANT_FIELD_TYPES,
        )

        assert query.filter == {
            "_id": ObjectId("5f8d0d55b54764421b7156c3"),
            "createdAt": {"$gte": datetime(2024, 1, 1, tzinfo=timezone.utc)},
            "name": "123",
            "ratingsQuantity": {"$in": [1, 2]},
        }

    def test_repeated_id_becomes_in(self):
        query = parse_filter(
            [("_id", "5f8d0d55b54764421b7156c3"), ("_id", "5f8d0d55b54764421b7156ff")],
            RESTAURANT_QUERY_FIELDS,
            RESTAURANT_FIELD_TYPES,
        )
        assert query == {"_id": {"$in": [
            ObjectId("5f8d0d55b54764421b7156c3"), ObjectId("5f8d0d55b54764421b7156ff"),
        ]}}

    def test_bad_date_rejected(self):
        with pytest.raises(QueryParseError, match="createdAt"):
            parse_filter([("createdAt[lt]", "yesterday")], RESTAURANT_QUERY_FIELDS, RESTAURANT_FIELD_TYPES)


class TestParseFilter:

    def test_equality(self):
        assert parse_filter([("suburb", "Bondi")], FIELDS) == {"suburb": "Bondi"}

    def test_operators_merge_per_field(self):
        query = parse_filter(
            [("ratingsAverage[gte]", "4"), ("ratingsAverage[lt]", "4.8")],
            FIELDS,
        )
        assert query == {"ratingsAverage": {"$gte": 4, "$lt": 4.8}}

    def test_in_splits_on_commas(self):
        query = parse_filter([("cuisine[in]", "Thai, Italian")], FIELDS)
        assert query == {"cuisine": {"$in": ["Thai", "Italian"]}}

    def test_repeated_key_becomes_in(self):
        query = parse_filter([("suburb", "Bondi"), ("suburb", "Manly"), ("suburb", "Coogee")], FIELDS)
        assert query == {"suburb": {"$in": ["Bondi", "Manly", "Coogee"]}}

    def test_nested_field_checks_root(self):
        query = parse_filter([("location.type", "Point")], FIELDS)
        assert query == {"location.type": "Point"}

    def test_unknown_operator(self):
        with pytest.raises(QueryParseError, match="Unsupported operator"):
            parse_filter([("ratingsAverage[regex]", "4")], FIELDS)

    def test_unknown_field(self):
        with pytest.raises(QueryParseError, match="Unknown field"):
            parse_filter([("password", "x")], FIELDS)

    def test_malformed_key(self):
        with pytest.raises(QueryParseError):
            parse_filter([("$where", "1")], FIELDS)

    def test_equality_and_operator_conflict(self):
        with pytest.raises(QueryParseError):
            parse_filter([("ratingsAverage[gte]", "4"), ("ratingsAverage", "5")], FIELDS)

    def test_no_field_restriction(self):
        assert parse_filter([("anything", "1")]) == {"anything": 1}


class TestSortAndProjection:

    def test_sort_directions(self):
        assert parse_sort("-ratingsAverage,name", FIELDS) == [("ratingsAverage", -1), ("name", 1)]

    def test_sort_unknown_field(self):
        with pytest.raises(QueryParseError):
            parse_sort("-secret", FIELDS)

    def test_projection(self):
        assert parse_projection("name, suburb", FIELDS) == {"name": 1, "suburb": 1}

    def test_empty_projection(self):
        assert parse_projection(" , ", FIELDS) is None


class TestBuildListQuery:

    def test_defaults(self):
        query = build_list_query([], FIELDS)

        assert query == ListQuery(filter={}, sort=[("createdAt", -1)], projection=None, page=1, limit=25)
        assert query.skip == 0

    def test_full_query(self):
        query = build_list_query(
            [
                ("suburb", "Bondi"),
                ("ratingsAverage[gte]", "4"),
                ("sort", "name"),
                ("select", "name,ratingsAverage"),
                ("page", "3"),
                ("limit", "10"),
            ],
            FIELDS,
        )

        assert query.filter == {"suburb": "Bondi", "ratingsAverage": {"$gte": 4}}
        assert query.sort == [("name", 1)]
        assert query.projection == {"name": 1, "ratingsAverage": 1}
        assert query.skip == 20
        assert query.limit == 10

    def test_limit_is_capped(self):
        assert build_list_query([("limit", "500")], FIELDS, max_limit=100).limit == 100

    @pytest.mark.parametrize("param, value", [("page", "0"), ("page", "two"), ("limit", "-1")])
    def test_bad_page_values(self, param, value):
        with pytest.raises(QueryParseError):
            build_list_query([(param, value)], FIELDS)


class TestBuildPagination:

    def test_first_page(self):
        assert build_pagination(1, 10, 35) == {
            "page": 1, "limit": 10, "total": 35, "next": {"page": 2, "limit": 10},
        }

    def test_middle_page(self):
        pagination = build_pagination(2, 10, 35)
        assert pagination["next"] == {"page": 3, "limit": 10}
        assert pagination["prev"] == {"page": 1, "limit": 10}

    def test_last_page(self):
        pagination = build_pagination(4, 10, 35)
        assert "next" not in pagination
        assert pagination["prev"] == {"page": 3, "limit": 10}

    def test_empty(self):
        assert build_pagination(1, 25, 0) == {"page": 1, "limit": 25, "total": 0}
