"""
Pytest configuration for the worklist.

Provides fixtures for:
- Settings isolation (cached settings are cleared around every test)
- Column configurations and row collections shared across unit tests
- The mock patient worklist
"""

from __future__ import annotations

from typing import Any, Dict, Generator, List

import pytest

from worklist.config import Settings, get_settings
from worklist.demo import demo_columns, mock_rows
from worklist.domain.models import ColumnDefinition, ColumnSet, ColumnType


@pytest.fixture(autouse=True)
def _fresh_settings() -> Generator[None, None, None]:
    """Drop cached settings so env tweaks in one test never leak into another."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides.
    """
    return Settings(
        log_level="DEBUG",
        page_size=10,
        fetch_timeout_seconds=2.0,
        fetch_retries=1,
    )


@pytest.fixture
def columns() -> ColumnSet:
    """Small typed column set over flat and nested fields."""
    return ColumnSet(
        [
            ColumnDefinition(key="actions", label="Actions"),
            ColumnDefinition(key="name", label="Name", data_source="name"),
            ColumnDefinition(key="city", label="City", data_source="address.city"),
            ColumnDefinition(
                key="amount", label="Amount", data_source="amount", type=ColumnType.NUMBER
            ),
            ColumnDefinition(key="seen", label="Seen", data_source="seen", type=ColumnType.DATE),
            ColumnDefinition(
                key="active", label="Active", data_source="active", type=ColumnType.BOOLEAN
            ),
        ]
    )


@pytest.fixture
def people() -> List[Dict[str, Any]]:
    return [
        {
            "name": "Alice",
            "address": {"city": "Boston"},
            "amount": 1250.50,
            "seen": "2024-01-15",
            "active": True,
        },
        {
            "name": "bob",
            "address": {"city": "Austin"},
            "amount": 850.00,
            "seen": "2024-01-14",
            "active": False,
        },
        {
            "name": "Carol",
            "address": None,
            "amount": 2100.75,
            "seen": "not a date",
            "active": True,
        },
        {
            "name": "dave",
            "address": {"city": "boston"},
            "amount": None,
            "seen": None,
            "active": False,
        },
    ]


@pytest.fixture
def worklist_rows() -> List[Dict[str, Any]]:
    return mock_rows(seed=7)


@pytest.fixture
def worklist_columns() -> ColumnSet:
    return demo_columns()
