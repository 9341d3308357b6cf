"""Security helpers for db2dialect."""

from .dsns import DSNConfig, parse_dsn
from .redaction import redact_connection_string, redact_params

__all__ = ["DSNConfig", "parse_dsn", "redact_connection_string", "redact_params"]
