"""
db2dialect public package initialization.

Exposes the DB2 dialect, its type catalog and the adapter used for
connectivity checks and metadata reads.
"""

from .adapters import (  # noqa: F401
    AdapterConfigurationError,
    AdapterConnectionError,
    AdapterError,
    ConnectionDescriptor,
    ConnectionParameters,
    DB2Adapter,
    build_connection_descriptor,
    connection_fields,
)
from .catalog import AbstractType, DB2TypeCatalog, TypeCatalog  # noqa: F401
from .dialects import (  # noqa: F401
    DB2Dialect,
    DialectAdapter,
    EpochPrecision,
    TemporalUnit,
    UnsupportedTemporalUnitError,
)
from .query import Column, Expression, ExpressionCompiler  # noqa: F401
from .registry import DialectRegistry, RegistryError, driver_available, register_db2  # noqa: F401

__all__ = [
    "AbstractType",
    "AdapterConfigurationError",
    "AdapterConnectionError",
    "AdapterError",
    "Column",
    "ConnectionDescriptor",
    "ConnectionParameters",
    "DB2Adapter",
    "DB2Dialect",
    "DB2TypeCatalog",
    "DialectAdapter",
    "DialectRegistry",
    "EpochPrecision",
    "Expression",
    "ExpressionCompiler",
    "RegistryError",
    "TemporalUnit",
    "TypeCatalog",
    "UnsupportedTemporalUnitError",
    "build_connection_descriptor",
    "connection_fields",
    "driver_available",
    "register_db2",
]
