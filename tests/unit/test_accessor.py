from __future__ import annotations

from worklist.domain.accessor import get_nested_value

ROW = {
    "name": "Alice",
    "zero": 0,
    "flag": False,
    "blank": "",
    "customer": {"name": "John Doe", "email": None},
    "visits": [{"date": "2024-01-01"}, {"date": "2024-02-01"}],
    "count": 5,
}


def test_resolves_flat_and_nested_paths():
    assert get_nested_value(ROW, "name") == "Alice"
    assert get_nested_value(ROW, "customer.name") == "John Doe"
    assert get_nested_value(ROW, "visits.1.date") == "2024-02-01"


def test_falsy_values_are_present():
    assert get_nested_value(ROW, "zero") == 0
    assert get_nested_value(ROW, "flag") is False
    assert get_nested_value(ROW, "blank") == ""


def test_absent_for_missing_or_null_steps():
    assert get_nested_value(ROW, "missing") is None
    assert get_nested_value(ROW, "customer.email") is None
    assert get_nested_value(ROW, "customer.email.domain") is None
    assert get_nested_value(ROW, "missing.deeper.still") is None


def test_absent_for_empty_path():
    assert get_nested_value(ROW, None) is None
    assert get_nested_value(ROW, "") is None


def test_never_raises_on_malformed_rows():
    assert get_nested_value(ROW, "count.value") is None
    assert get_nested_value(ROW, "name.0") is None
    assert get_nested_value(ROW, "visits.x.date") is None
    assert get_nested_value(ROW, "visits.9.date") is None
    assert get_nested_value(None, "name") is None
    assert get_nested_value(42, "name") is None
