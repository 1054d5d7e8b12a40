"""Process logging configuration for hosts embedding the realm."""

from __future__ import annotations

import logging

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(threadName)s] [%(name)s] %(message)s"


def configure_logging(*, level: str) -> None:
    """Configure root logging with the realm format and requested level.

    Unknown or blank level names fall back to INFO.
    """

    normalized_level = level.strip().upper() or "INFO"
    resolved_level = logging.getLevelName(normalized_level)
    if not isinstance(resolved_level, int):
        resolved_level = logging.INFO

    logging.basicConfig(level=resolved_level, format=_LOG_FORMAT)
    logging.getLogger("sql_realm").setLevel(resolved_level)
