"""
Clinical data-collection form statuses shown in the demo worklist.

Each patient row carries a `formStatuses` mapping from form name to either a
single status or, for forms that can be filled in more than once, a list of
statuses (one per instance). Every helper here accepts both shapes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from worklist.domain.models import Row


class FormStatus(str, Enum):
    INCOMPLETE = "Incomplete"
    UNVERIFIED = "Unverified"
    COMPLETE = "Complete"


FORM_NAMES = (
    "Demographics",
    "Surgical History",
    "CMR",
    "CCT",
    "Echo",
    "Cath",
    "Stress Test",
    "Pt. Outcomes",
)

# Forms that can have several instances per patient.
MULTI_INSTANCE_FORMS = ("CCT", "CMR", "Cath", "Echo", "Stress Test")

STATUS_ORDER = (FormStatus.INCOMPLETE, FormStatus.UNVERIFIED, FormStatus.COMPLETE)

# rich style per status (red, yellow, green)
STATUS_STYLES: Dict[FormStatus, str] = {
    FormStatus.INCOMPLETE: "bold red",
    FormStatus.UNVERIFIED: "bold yellow",
    FormStatus.COMPLETE: "bold green",
}


@dataclass(frozen=True)
class StatusTag:
    """One form instance: `CMR2` is the second CMR instance."""

    key: str
    display_name: str
    status: str

    @property
    def style(self) -> str:
        return status_style(self.status)


def status_style(status: Any) -> str:
    try:
        return STATUS_STYLES[FormStatus(status)]
    except ValueError:
        return "dim"


def _known_status(value: Any) -> Optional[FormStatus]:
    try:
        return FormStatus(value)
    except ValueError:
        return None


def status_tags(form_statuses: Any) -> List[StatusTag]:
    """
    Flatten form statuses into tags in FORM_NAMES order.

    Lists produce numbered tags (``Echo1``, ``Echo2``); empty entries are skipped.
    Anything that is not a mapping yields no tags.
    """
    if not isinstance(form_statuses, Mapping):
        return []
    tags: List[StatusTag] = []
    for form_name in FORM_NAMES:
        status = form_statuses.get(form_name)
        if not status:
            continue
        if isinstance(status, (list, tuple)):
            for index, value in enumerate(status):
                if value:
                    tags.append(StatusTag(f"{form_name}-{index}", f"{form_name}{index + 1}", value))
        else:
            tags.append(StatusTag(form_name, form_name, status))
    return tags


def count_statuses(form_statuses: Any) -> Dict[FormStatus, int]:
    counts = {status: 0 for status in STATUS_ORDER}
    for tag in status_tags(form_statuses):
        known = _known_status(tag.status)
        if known is not None:
            counts[known] += 1
    return counts


def tags_by_status(form_statuses: Any) -> Dict[FormStatus, List[str]]:
    grouped: Dict[FormStatus, List[str]] = {status: [] for status in STATUS_ORDER}
    for tag in status_tags(form_statuses):
        known = _known_status(tag.status)
        if known is not None:
            grouped[known].append(tag.display_name)
    return grouped


class TagCountFormatter:
    """Render per-status counts, e.g. ``3 / 2 / 5`` as incomplete/unverified/complete."""

    def format(self, row: Row, value: Any) -> str:
        if not isinstance(value, Mapping):
            return "—"
        counts = count_statuses(value)
        return " / ".join(
            f"[{STATUS_STYLES[status]}]{counts[status]}[/]" for status in STATUS_ORDER
        )


class StatusTagsFormatter:
    """Render every form instance as a colored tag name."""

    def format(self, row: Row, value: Any) -> str:
        tags = status_tags(value)
        if not tags:
            return "—"
        return " ".join(f"[{tag.style}]{tag.display_name}[/]" for tag in tags)


class ActionsFormatter:
    """Placeholder actions cell for non-data columns."""

    def format(self, row: Row, value: Any) -> str:
        return "view | edit"


def status_legend() -> str:
    return "  ".join(f"[{STATUS_STYLES[s]}]■ {s.value}[/]" for s in STATUS_ORDER)


__all__ = [
    "FormStatus",
    "FORM_NAMES",
    "MULTI_INSTANCE_FORMS",
    "STATUS_ORDER",
    "StatusTag",
    "status_tags",
    "count_statuses",
    "tags_by_status",
    "status_style",
    "status_legend",
    "TagCountFormatter",
    "StatusTagsFormatter",
    "ActionsFormatter",
]
