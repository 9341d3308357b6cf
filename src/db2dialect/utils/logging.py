"""Structured logging helpers for db2dialect."""

from __future__ import annotations

import logging
import os
import time
import uuid
from contextvars import ContextVar
from typing import Any, Iterable, Optional

ROOT_LOGGER = "db2dialect"
LOG_LEVEL_ENV = "DB2DIALECT_LOG_LEVEL"

_correlation_id: ContextVar[str | None] = ContextVar("db2dialect_correlation_id", default=None)


class CorrelationIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id()
        return True


def _level_from_env(default: int) -> int:
    value = os.getenv(LOG_LEVEL_ENV)
    if not value:
        return default
    if value.isdigit():
        return int(value)
    resolved = logging.getLevelName(value.strip().upper())
    return resolved if isinstance(resolved, int) else default


def configure_logging(level: int = logging.INFO) -> None:
    logger = logging.getLogger(ROOT_LOGGER)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(correlation_id)s | %(name)s | %(message)s"
    )
    handler.setFormatter(formatter)
    handler.addFilter(CorrelationIdFilter())
    logger.addHandler(handler)
    logger.setLevel(_level_from_env(level))


def get_logger(name: str) -> logging.Logger:
    configure_logging()
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def set_correlation_id(value: Optional[str] = None) -> str:
    token = value or str(uuid.uuid4())
    _correlation_id.set(token)
    return token


def get_correlation_id() -> str:
    cid = _correlation_id.get()
    if cid is None:
        cid = set_correlation_id()
    return cid


def time_call(
    name: str,
    logger: logging.Logger,
    *,
    sql: str | None = None,
    params: Iterable[Any] | None = None,
    threshold_ms: int = 100,
):
    """
    Time the enclosed block; at or above ``threshold_ms`` it logs at WARNING, else DEBUG.
    """

    class Timer:
        elapsed_ms: float | None = None

        def __enter__(self):
            self.start = time.monotonic()
            return self

        def __exit__(self, exc_type, exc, tb):
            self.elapsed_ms = (time.monotonic() - self.start) * 1000
            level = logging.WARNING if self.elapsed_ms >= threshold_ms else logging.DEBUG
            extra = {"sql": sql, "params": params, "elapsed_ms": self.elapsed_ms}
            logger.log(level, "%s took %.2fms", name, self.elapsed_ms, extra=extra)

    return Timer()
