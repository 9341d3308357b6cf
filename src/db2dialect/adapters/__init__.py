"""
Database adapter interfaces and the DB2 implementation.
"""

from .base import (
    AdapterConfigurationError,
    AdapterConnectionError,
    AdapterError,
    AdapterExecutionError,
    ConnectionDescriptor,
    ConnectionField,
    ConnectionParameters,
    DatabaseAdapter,
)
from .db2 import ColumnDescription, DB2Adapter, build_connection_descriptor, connection_fields

__all__ = [
    "AdapterConfigurationError",
    "AdapterConnectionError",
    "AdapterError",
    "AdapterExecutionError",
    "ColumnDescription",
    "ConnectionDescriptor",
    "ConnectionField",
    "ConnectionParameters",
    "DB2Adapter",
    "DatabaseAdapter",
    "build_connection_descriptor",
    "connection_fields",
]
