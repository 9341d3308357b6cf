"""
Dialect strategy implementations.
"""

from .base import (
    Dialect,
    DialectAdapter,
    DialectCapabilities,
    DialectError,
    EpochPrecision,
    TemporalUnit,
    UnsupportedTemporalUnitError,
)
from .db2 import EXCLUDED_SCHEMAS, DB2Dialect, get_db2_dialect

__all__ = [
    "DB2Dialect",
    "Dialect",
    "DialectAdapter",
    "DialectCapabilities",
    "DialectError",
    "EXCLUDED_SCHEMAS",
    "EpochPrecision",
    "TemporalUnit",
    "UnsupportedTemporalUnitError",
    "get_db2_dialect",
]
