from __future__ import annotations

from datetime import date, datetime, timezone

from worklist.domain.comparator import (
    coerce_number,
    coerce_timestamp,
    compare_rows,
    compare_values,
    sort_rows,
)
from worklist.domain.models import ColumnDefinition, ColumnType, SortDirection

ASC = SortDirection.ASC
DESC = SortDirection.DESC


def _column(column_type):
    return ColumnDefinition(key="v", data_source="v", type=column_type)


def _values(rows):
    return [row["v"] for row in rows]


def test_nulls_sort_last_in_both_directions():
    rows = [{"v": 5}, {"v": None}, {"v": 2}]
    column = _column(ColumnType.NUMBER)
    assert _values(sort_rows(rows, column, ASC)) == [2, 5, None]
    assert _values(sort_rows(rows, column, DESC)) == [5, 2, None]


def test_two_absents_compare_equal():
    assert compare_values(None, None, ColumnType.STRING, ASC) == 0
    assert compare_values(None, None, ColumnType.STRING, DESC) == 0


def test_number_comparison_is_numeric():
    rows = [{"v": 10}, {"v": 9}, {"v": "100"}]
    assert _values(sort_rows(rows, _column(ColumnType.NUMBER), ASC)) == [9, 10, "100"]


def test_uncoercible_number_is_treated_as_absent():
    rows = [{"v": "abc"}, {"v": 3}, {"v": 1}]
    assert _values(sort_rows(rows, _column(ColumnType.NUMBER), DESC)) == [3, 1, "abc"]


def test_dates_compare_chronologically():
    rows = [{"v": "2024-01-15"}, {"v": date(2023, 12, 31)}, {"v": "2024-01-09T10:00:00"}]
    result = _values(sort_rows(rows, _column(ColumnType.DATE), ASC))
    assert result == [date(2023, 12, 31), "2024-01-09T10:00:00", "2024-01-15"]


def test_unparseable_dates_sort_last_without_raising():
    rows = [{"v": "not a date"}, {"v": "2024-01-02"}, {"v": "2024-01-01"}]
    assert _values(sort_rows(rows, _column(ColumnType.DATE), ASC))[-1] == "not a date"
    assert _values(sort_rows(rows, _column(ColumnType.DATE), DESC))[-1] == "not a date"


def test_epoch_milliseconds_and_utc_suffix_are_dates():
    jan_15 = datetime(2024, 1, 15, tzinfo=timezone.utc).timestamp()
    assert coerce_timestamp(1705276800000) == jan_15
    assert coerce_timestamp("2024-01-15T00:00:00Z") == jan_15
    assert coerce_timestamp("2024-01-15T00:00:00.000Z") == jan_15

    rows = [{"v": "2024-01-16T00:00:00Z"}, {"v": 1705276800000}, {"v": "2024-01-14"}]
    result = _values(sort_rows(rows, _column(ColumnType.DATE), ASC))
    assert result == ["2024-01-14", 1705276800000, "2024-01-16T00:00:00Z"]


def test_booleans_false_before_true():
    rows = [{"v": True}, {"v": False}, {"v": True}]
    assert _values(sort_rows(rows, _column(ColumnType.BOOLEAN), ASC)) == [False, True, True]


def test_strings_compare_case_insensitively():
    rows = [{"v": "banana"}, {"v": "Cherry"}, {"v": "apple"}]
    assert _values(sort_rows(rows, _column(ColumnType.STRING), ASC)) == [
        "apple",
        "banana",
        "Cherry",
    ]


def test_untyped_columns_compare_numbers_numerically():
    rows = [{"v": 10}, {"v": 9}, {"v": 100}]
    assert _values(sort_rows(rows, _column(None), ASC)) == [9, 10, 100]
    # Mixed values fall back to text.
    rows = [{"v": "b"}, {"v": 1}]
    assert _values(sort_rows(rows, _column(None), ASC)) == [1, "b"]


def test_sort_is_stable_for_equal_keys():
    rows = [{"v": 1, "id": "a"}, {"v": 0, "id": "b"}, {"v": 1, "id": "c"}, {"v": 0, "id": "d"}]
    column = _column(ColumnType.NUMBER)
    assert [r["id"] for r in sort_rows(rows, column, ASC)] == ["b", "d", "a", "c"]
    assert [r["id"] for r in sort_rows(rows, column, DESC)] == ["a", "c", "b", "d"]


def test_sort_returns_new_list_and_leaves_rows_untouched():
    rows = [{"v": 2}, {"v": 1}]
    result = sort_rows(rows, _column(ColumnType.NUMBER), ASC)
    assert result is not rows
    assert rows == [{"v": 2}, {"v": 1}]


def test_compare_rows_uses_nested_path():
    column = ColumnDefinition(key="n", data_source="a.b", type=ColumnType.NUMBER)
    assert compare_rows({"a": {"b": 1}}, {"a": {"b": 2}}, column, ASC) == -1
    assert compare_rows({"a": {"b": 1}}, {"a": {"b": 2}}, column, DESC) == 1
    assert compare_rows({"a": None}, {"a": {"b": 2}}, column, DESC) == 1


def test_coercion_helpers():
    assert coerce_number(True) == 1.0
    assert coerce_number(" 12.5 ") == 12.5
    assert coerce_number("nan") is None
    assert coerce_number({"x": 1}) is None
    assert coerce_timestamp("2024-01-01") == datetime(2024, 1, 1, tzinfo=timezone.utc).timestamp()
    assert coerce_timestamp(True) is None
    assert coerce_timestamp("garbage") is None
