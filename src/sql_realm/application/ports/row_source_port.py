"""Port for the relational row source used by realm queries."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Any, Protocol


class RowSourceError(RuntimeError):
    """Raised when a connection cannot be established or a query fails."""


class RowConnectionPort(Protocol):
    """One acquired connection able to run single-parameter queries."""

    def fetch_rows(self, statement: str, parameter: str) -> list[tuple[Any, ...]]:
        """Run statement with one positional parameter and return all rows."""


class RowSourcePort(Protocol):
    """Named data source registry that hands out scoped connections."""

    def connection(self, reference: str) -> AbstractContextManager[RowConnectionPort]:
        """Acquire a connection for reference, released when the context exits."""
