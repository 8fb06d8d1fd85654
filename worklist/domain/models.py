"""
Domain models for the worklist query pipeline.

Defines column definitions, query state (search, filters, sort, page), the
parameters handed to data sources, and the page returned by the pipeline.
Rows themselves stay schema-less mappings: only the paths referenced by
column definitions matter.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import (
    Any,
    Dict,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Protocol,
    Sequence,
    Tuple,
    Union,
    runtime_checkable,
)

from pydantic import BaseModel, Field

from worklist.errors import ConfigurationError

Row = Mapping[str, Any]


class ColumnType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    DATE = "date"
    BOOLEAN = "boolean"
    OBJECT = "object"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


@runtime_checkable
class CellFormatter(Protocol):
    """
    Capability for columns that render their own cell text.

    `value` is the already-resolved value of the column's data path (None for
    columns without one), `row` the full record.
    """

    def format(self, row: Row, value: Any) -> str:
        ...


class ColumnDefinition(BaseModel):
    """
    Declarative description of one worklist column.
    """

    key: str = Field(..., min_length=1, description="Unique identifier within a column set.")
    label: str = Field("", description="Display name.")
    data_source: Optional[str] = Field(
        None, description="Dotted path into a row; None for non-data columns (e.g. actions)."
    )
    type: Optional[ColumnType] = Field(
        ColumnType.STRING,
        description="Declared value type. None for columns derived from a plain field mapping.",
    )
    formatter: Optional[CellFormatter] = Field(None, description="Custom cell formatter.")

    model_config = {
        "frozen": True,
        "arbitrary_types_allowed": True,
    }

    @property
    def display_label(self) -> str:
        return self.label or self.key

    @property
    def sortable(self) -> bool:
        return bool(self.data_source)

    @property
    def filterable(self) -> bool:
        return bool(self.data_source)


class ColumnSet:
    """
    Ordered, immutable set of column definitions with unique keys.
    """

    def __init__(self, columns: Iterable[ColumnDefinition]) -> None:
        self._columns: Tuple[ColumnDefinition, ...] = tuple(columns)
        self._by_key: Dict[str, ColumnDefinition] = {}
        for column in self._columns:
            if column.key in self._by_key:
                raise ConfigurationError(f"Duplicate column key '{column.key}'")
            self._by_key[column.key] = column

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str]) -> "ColumnSet":
        """
        Build untyped data columns from a `{field_name: dotted.path}` mapping.
        """
        return cls(
            ColumnDefinition(key=key, label=key, data_source=path, type=None)
            for key, path in mapping.items()
        )

    def get(self, key: Optional[str]) -> Optional[ColumnDefinition]:
        if not key:
            return None
        return self._by_key.get(key)

    @property
    def data_columns(self) -> List[ColumnDefinition]:
        return [c for c in self._columns if c.data_source]

    def __iter__(self) -> Iterator[ColumnDefinition]:
        return iter(self._columns)

    def __len__(self) -> int:
        return len(self._columns)

    def __contains__(self, key: object) -> bool:
        return key in self._by_key

    def __repr__(self) -> str:
        return f"ColumnSet({[c.key for c in self._columns]!r})"


ColumnsLike = Union[ColumnSet, Sequence[ColumnDefinition], Mapping[str, str]]


def as_column_set(columns: ColumnsLike) -> ColumnSet:
    """Coerce any accepted column configuration into a ColumnSet."""
    if isinstance(columns, ColumnSet):
        return columns
    if isinstance(columns, Mapping):
        return ColumnSet.from_mapping(columns)
    return ColumnSet(columns)


class SortState(BaseModel):
    """
    Current sort column and direction. An empty key means "input order".
    """

    key: Optional[str] = None
    direction: SortDirection = SortDirection.ASC

    model_config = {"frozen": True}

    def toggled(self, key: str) -> "SortState":
        """Reselecting the current key flips direction; a new key starts ascending."""
        if self.key == key:
            return SortState(key=key, direction=self.direction.flipped())
        return SortState(key=key, direction=SortDirection.ASC)


class FetchParams(BaseModel):
    """
    Arguments handed to every data source call.

    Accepts the wire names (`sortConfig`, `globalSearch`) as aliases.
    """

    filters: Dict[str, str] = Field(default_factory=dict)
    sort_config: SortState = Field(default_factory=SortState, alias="sortConfig")
    global_search: str = Field("", alias="globalSearch")

    model_config = {"frozen": True, "populate_by_name": True}

    @property
    def active_filters(self) -> Dict[str, str]:
        return {key: text for key, text in self.filters.items() if text}


class QueryState(BaseModel):
    """
    Everything the caller controls about the current query.

    The `with_*` helpers return new states; any change to search, filters or
    sort resets the page to 1, a page change keeps everything else.
    """

    filters: Dict[str, str] = Field(default_factory=dict)
    sort: SortState = Field(default_factory=SortState)
    search: str = ""
    page: int = Field(1, ge=1)

    model_config = {"frozen": True}

    def with_search(self, text: str) -> "QueryState":
        return self.model_copy(update={"search": text, "page": 1})

    def with_filter(self, column_key: str, text: str) -> "QueryState":
        filters = dict(self.filters)
        filters[column_key] = text
        return self.model_copy(update={"filters": filters, "page": 1})

    def without_filters(self) -> "QueryState":
        return self.model_copy(update={"filters": {}, "page": 1})

    def with_sort(self, column_key: str) -> "QueryState":
        return self.model_copy(update={"sort": self.sort.toggled(column_key), "page": 1})

    def with_page(self, page: int) -> "QueryState":
        return self.model_copy(update={"page": max(1, page)})

    def to_fetch_params(self) -> FetchParams:
        return FetchParams(filters=dict(self.filters), sort_config=self.sort, global_search=self.search)


@dataclass(frozen=True)
class QueryResultPage:
    """
    One page of rows plus the count of rows matching before pagination.
    """

    rows: List[Row]
    total_count: int
    page: int = 1
    page_size: int = 10

    @property
    def total_pages(self) -> int:
        return -(-self.total_count // self.page_size)

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def label(self) -> str:
        return f"Page {self.page} of {max(1, self.total_pages)} ({self.total_count} total items)"


__all__ = [
    "Row",
    "ColumnType",
    "SortDirection",
    "CellFormatter",
    "ColumnDefinition",
    "ColumnSet",
    "ColumnsLike",
    "as_column_set",
    "SortState",
    "FetchParams",
    "QueryState",
    "QueryResultPage",
]
