"""SQLAlchemy engine factory with configurable connect and statement timeouts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import sqlalchemy as sa


@dataclass(frozen=True)
class EngineOptions:
    """Keyword arguments passed to ``sa.create_engine`` for one URL."""

    connect_args: dict[str, Any] = field(default_factory=dict)
    engine_kwargs: dict[str, Any] = field(default_factory=dict)


def _is_sqlite_memory(url: sa.URL) -> bool:
    database = url.database or ""
    return database in {"", ":memory:"} or url.query.get("mode") == "memory"


def row_source_engine_options(
    url: sa.URL,
    *,
    connect_timeout_seconds: float,
    statement_timeout_seconds: float,
) -> EngineOptions:
    """Translate timeouts to the pool and driver arguments each backend accepts.

    ``connect_timeout_seconds`` bounds pool checkout wherever the pool is a
    ``QueuePool``. In-memory SQLite uses a ``SingletonThreadPool``, which has
    no checkout timeout.
    """

    backend = url.get_backend_name()
    options = EngineOptions(engine_kwargs={"pool_pre_ping": True})

    if backend == "sqlite":
        # busy timeout: how long a statement waits on a locked database
        options.connect_args["timeout"] = statement_timeout_seconds
        if not _is_sqlite_memory(url):
            options.engine_kwargs["pool_timeout"] = connect_timeout_seconds
        return options

    options.engine_kwargs["pool_timeout"] = connect_timeout_seconds
    if backend == "postgresql":
        options.connect_args["connect_timeout"] = max(1, int(connect_timeout_seconds))
        options.connect_args["options"] = (
            f"-c statement_timeout={int(statement_timeout_seconds * 1000)}"
        )
    elif backend in {"mysql", "mariadb"}:
        options.connect_args["connect_timeout"] = max(1, int(connect_timeout_seconds))
        options.connect_args["read_timeout"] = max(1, int(statement_timeout_seconds))
    return options


def create_row_source_engine(
    database_url: str,
    *,
    connect_timeout_seconds: float,
    statement_timeout_seconds: float,
) -> sa.Engine:
    """Create a pooled engine that bounds connection and statement waits."""

    url = sa.make_url(database_url)
    options = row_source_engine_options(
        url,
        connect_timeout_seconds=connect_timeout_seconds,
        statement_timeout_seconds=statement_timeout_seconds,
    )
    return sa.create_engine(url, connect_args=options.connect_args, **options.engine_kwargs)
