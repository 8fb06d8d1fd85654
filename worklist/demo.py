"""
Mock patient worklist used by the CLI and the tests.

Ten patients, each with a FORCE id, a contact, an amount, the date the record
was last updated and per-form statuses (several forms with multiple
instances). `status` summarizes the forms: ``Complete`` when every instance
is complete, ``Not Started`` when none is, ``In Progress`` otherwise.
"""

from __future__ import annotations

import random
import string
from typing import Any, Dict, List, Mapping, Optional

from worklist.domain.models import ColumnDefinition, ColumnSet, ColumnType
from worklist.forms import (
    FORM_NAMES,
    ActionsFormatter,
    FormStatus,
    StatusTagsFormatter,
    TagCountFormatter,
    status_tags,
)

C = FormStatus.COMPLETE.value
U = FormStatus.UNVERIFIED.value
I = FormStatus.INCOMPLETE.value  # noqa: E741

FORCE_ID_PREFIX = "BCH"


def generate_force_id(rng: Optional[random.Random] = None) -> str:
    """FORCE id in the form ``BCH-XXXXXX-1`` with six random capital letters."""
    rng = rng or random.Random()
    letters = "".join(rng.choice(string.ascii_uppercase) for _ in range(6))
    return f"{FORCE_ID_PREFIX}-{letters}-1"


def overall_status(form_statuses: Any) -> str:
    statuses = [tag.status for tag in status_tags(form_statuses)]
    if statuses and all(s == C for s in statuses):
        return "Complete"
    if not statuses or all(s == I for s in statuses):
        return "Not Started"
    return "In Progress"


_PATIENTS = [
    ("John Doe", "john@example.com", 1250.50, "2024-01-15",
     [C, U, [I, C], C, [I, U], I, I, I]),
    ("Jane Smith", "jane@example.com", 850.00, "2024-01-14",
     [C, C, C, [C, C], C, [U, C], [C, U], I]),
    ("Bob Johnson", "bob@example.com", 2100.75, "2024-01-16",
     [I, I, I, I, I, I, I, I]),
    ("Alice Williams", "alice@example.com", 450.25, "2024-01-13",
     [C, U, [U, C, I], C, I, [C, U], I, U]),
    ("Charlie Brown", "charlie@example.com", 3200.00, "2024-01-12",
     [C, C, C, C, C, C, C, C]),
    ("Diana Prince", "diana@example.com", 675.50, "2024-01-17",
     [U, I, I, [U, I], [I, C, U], I, [I, C], I]),
    ("Edward Norton", "edward@example.com", 1890.25, "2024-01-11",
     [C, C, [U, C], C, [C, U], [U, C, I], C, U]),
    ("Fiona Apple", "fiona@example.com", 950.00, "2024-01-10",
     [C, C, C, C, C, C, C, C]),
    ("George Lucas", "george@example.com", 2750.00, "2024-01-18",
     [I, I, I, I, I, I, I, I]),
    ("Helen Mirren", "helen@example.com", 1125.75, "2024-01-09",
     [C, C, U, [U, C], C, [I, U], [C, C, U], U]),
]


def mock_rows(seed: Optional[int] = 42) -> List[Dict[str, Any]]:
    """
    Build the mock worklist. A fixed `seed` makes the FORCE ids reproducible.
    """
    rng = random.Random(seed)
    rows: List[Dict[str, Any]] = []
    for index, (name, email, amount, updated, statuses) in enumerate(_PATIENTS, start=1):
        form_statuses: Dict[str, Any] = {
            form: list(status) if isinstance(status, list) else status
            for form, status in zip(FORM_NAMES, statuses)
        }
        rows.append(
            {
                "id": index,
                "orderNumber": generate_force_id(rng),
                "customer": {"name": name, "email": email},
                "amount": amount,
                "orderDate": updated,
                "status": overall_status(form_statuses),
                "formStatuses": form_statuses,
            }
        )
    return rows


def demo_columns(show_tags: bool = False) -> ColumnSet:
    """Column configuration of the patient worklist."""
    columns = [
        ColumnDefinition(key="actions", label="Actions", formatter=ActionsFormatter()),
        ColumnDefinition(key="orderNumber", label="FORCE ID", data_source="orderNumber"),
        ColumnDefinition(key="customer", label="Patient", data_source="customer.name"),
        ColumnDefinition(
            key="amount", label="Amount", data_source="amount", type=ColumnType.NUMBER
        ),
        ColumnDefinition(key="status", label="Status", data_source="status"),
        ColumnDefinition(
            key="tagCounts",
            label="Tag Counts",
            data_source="formStatuses",
            type=ColumnType.OBJECT,
            formatter=TagCountFormatter(),
        ),
    ]
    if show_tags:
        columns.append(
            ColumnDefinition(
                key="formTags",
                label="Forms",
                data_source="formStatuses",
                type=ColumnType.OBJECT,
                formatter=StatusTagsFormatter(),
            )
        )
    columns.append(
        ColumnDefinition(
            key="orderDate", label="Last Updated", data_source="orderDate", type=ColumnType.DATE
        )
    )
    return ColumnSet(columns)


def demo_column_mappings() -> Mapping[str, str]:
    """Plain field-to-path mapping for building a StaticDataSource without typed columns."""
    return {
        "orderNumber": "orderNumber",
        "customerName": "customer.name",
        "customerEmail": "customer.email",
        "amount": "amount",
        "status": "status",
        "orderDate": "orderDate",
    }


__all__ = [
    "generate_force_id",
    "overall_status",
    "mock_rows",
    "demo_columns",
    "demo_column_mappings",
]
