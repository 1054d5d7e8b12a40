"""SQLAlchemy adapter for the realm row source."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any

import sqlalchemy as sa
from sqlalchemy.exc import SQLAlchemyError

from sql_realm.application.ports.row_source_port import (
    RowConnectionPort,
    RowSourceError,
    RowSourcePort,
)

logger = logging.getLogger(__name__)


class SqlAlchemyRowConnection(RowConnectionPort):
    """Row connection running driver-level SQL with positional parameters."""

    def __init__(self, connection: sa.Connection) -> None:
        self._connection = connection

    def fetch_rows(self, statement: str, parameter: str) -> list[tuple[Any, ...]]:
        """Run statement with one positional parameter and return all rows."""

        try:
            result = self._connection.exec_driver_sql(statement, (parameter,))
            return [tuple(row) for row in result]
        except SQLAlchemyError as error:
            raise RowSourceError(f"query failed: {error.__class__.__name__}") from error


class SqlAlchemyRowSource(RowSourcePort):
    """Row source resolving data-source references to SQLAlchemy engines."""

    def __init__(self, engines: Mapping[str, sa.Engine]) -> None:
        self._engines = dict(engines)

    @property
    def references(self) -> frozenset[str]:
        return frozenset(self._engines)

    @contextmanager
    def connection(self, reference: str) -> Iterator[RowConnectionPort]:
        """Acquire a connection for reference, released when the context exits."""

        engine = self._engines.get(reference)
        if engine is None:
            raise RowSourceError(f"unknown data source reference: {reference}")

        try:
            connection = engine.connect()
        except SQLAlchemyError as error:
            raise RowSourceError(
                f"connection failed for data source {reference}: {error.__class__.__name__}"
            ) from error

        try:
            yield SqlAlchemyRowConnection(connection)
        finally:
            try:
                connection.close()
            except SQLAlchemyError as error:
                logger.error(
                    "row_source_release_failed data_source=%s error=%s",
                    reference,
                    error,
                )

    def dispose(self) -> None:
        """Release pooled connections held by every engine."""

        for engine in self._engines.values():
            engine.dispose()
