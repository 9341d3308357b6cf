"""
Slow-query threshold configuration.
"""

from __future__ import annotations

import os

SLOW_QUERY_ENV = "DB2DIALECT_SLOW_QUERY_MS"


def resolve_slow_query_ms(*, default: int, override: int | None = None) -> int:
    """
    Pick the slow-query threshold: explicit override, then environment, then default.

    Invalid or negative environment values fall back to ``default``.
    """
    if override is not None:
        if override < 0:
            raise ValueError("slow_query_ms must be non-negative.")
        return override
    raw = os.getenv(SLOW_QUERY_ENV)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value >= 0 else default
