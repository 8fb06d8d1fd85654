"""
Abstract data source interfaces for the worklist.

A data source is an asynchronous supplier of rows. Every variant receives the
current filters, sort and search text as a FetchParams and returns the
matching rows, not yet paginated; pagination always happens in the pipeline.
Concrete variants (static, delegating, remote) are tagged by `kind` so
callers can tell them apart without probing optional attributes.
"""

from __future__ import annotations

import abc
from enum import Enum
from typing import List, Protocol, runtime_checkable

from worklist.domain.models import FetchParams, Row


class DataSourceKind(str, Enum):
    STATIC = "static"
    DELEGATING = "delegating"
    REMOTE = "remote"


@runtime_checkable
class DataSource(Protocol):
    """
    Common interface all data sources must implement.

    Attributes
    ----------
    kind : DataSourceKind
        Variant tag.
    description : str
        A human-friendly summary of where rows come from.
    """

    kind: DataSourceKind
    description: str

    async def fetch(self, params: FetchParams) -> List[Row]:
        """
        Return the rows matching `params`.

        Parameters
        ----------
        params : FetchParams
            Filters, sort configuration and global search text.

        Returns
        -------
        list of Row
            Matching rows in result order, not paginated.

        Raises
        ------
        FetchError
            If the rows could not be obtained.
        """
        ...


class AbstractDataSource(abc.ABC):
    """
    Optional ABC helper for class-based implementations.

    Subclasses should set `kind` and `description` and implement `fetch`.
    """

    kind: DataSourceKind
    description: str

    @abc.abstractmethod
    async def fetch(self, params: FetchParams) -> List[Row]:  # pragma: no cover - interface only
        """Fetch the rows matching `params`."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r})"


__all__ = [
    "DataSourceKind",
    "DataSource",
    "AbstractDataSource",
]
