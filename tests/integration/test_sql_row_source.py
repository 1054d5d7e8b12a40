from __future__ import annotations

from pathlib import Path

import pytest
import sqlalchemy as sa

from sql_realm.application.ports.row_source_port import RowSourceError
from sql_realm.infrastructure.db.row_source import SqlAlchemyRowSource
from sql_realm.infrastructure.db.session import create_row_source_engine


def _sqlite_url(tmp_path: Path, filename: str) -> str:
    url = f"sqlite+pysqlite:///{tmp_path / filename}"
    engine = sa.create_engine(url)
    with engine.begin() as connection:
        connection.execute(sa.text("CREATE TABLE memberships (name TEXT, g TEXT)"))
        connection.execute(
            sa.text("INSERT INTO memberships (name, g) VALUES (:name, :g)"),
            [
                {"name": "alice", "g": "admins"},
                {"name": "alice", "g": None},
                {"name": "alice", "g": "ops"},
                {"name": "bob", "g": "readers"},
            ],
        )
    engine.dispose()
    return url


def _row_source(url: str) -> SqlAlchemyRowSource:
    engine = create_row_source_engine(
        url,
        connect_timeout_seconds=5.0,
        statement_timeout_seconds=5.0,
    )
    return SqlAlchemyRowSource({"ds": engine})


def test_fetch_rows_binds_single_positional_parameter(tmp_path: Path) -> None:
    row_source = _row_source(_sqlite_url(tmp_path, "rows.db"))

    with row_source.connection("ds") as connection:
        rows = connection.fetch_rows(
            "SELECT g FROM memberships WHERE name = ? ORDER BY rowid",
            "alice",
        )

    assert rows == [("admins",), (None,), ("ops",)]
    row_source.dispose()


def test_parameter_is_not_interpolated_into_sql(tmp_path: Path) -> None:
    row_source = _row_source(_sqlite_url(tmp_path, "injection.db"))

    with row_source.connection("ds") as connection:
        rows = connection.fetch_rows(
            "SELECT g FROM memberships WHERE name = ?",
            "alice' OR '1'='1",
        )

    assert rows == []


def test_unknown_reference_raises_row_source_error(tmp_path: Path) -> None:
    row_source = _row_source(_sqlite_url(tmp_path, "unknown.db"))

    with pytest.raises(RowSourceError, match="missing"):
        with row_source.connection("missing"):
            pass


def test_malformed_query_raises_row_source_error_and_releases_connection(
    tmp_path: Path,
) -> None:
    url = _sqlite_url(tmp_path, "malformed.db")
    engine = create_row_source_engine(
        url,
        connect_timeout_seconds=5.0,
        statement_timeout_seconds=5.0,
    )
    row_source = SqlAlchemyRowSource({"ds": engine})

    with pytest.raises(RowSourceError) as exc_info:
        with row_source.connection("ds") as connection:
            connection.fetch_rows("SELECT g FROM no_such_table WHERE name = ?", "alice")

    assert isinstance(exc_info.value.__cause__, sa.exc.OperationalError)
    assert engine.pool.checkedout() == 0


def test_connection_is_released_after_successful_block(tmp_path: Path) -> None:
    url = _sqlite_url(tmp_path, "release.db")
    engine = create_row_source_engine(
        url,
        connect_timeout_seconds=5.0,
        statement_timeout_seconds=5.0,
    )
    row_source = SqlAlchemyRowSource({"ds": engine})

    with row_source.connection("ds") as connection:
        connection.fetch_rows("SELECT g FROM memberships WHERE name = ?", "bob")
        assert engine.pool.checkedout() == 1

    assert engine.pool.checkedout() == 0
