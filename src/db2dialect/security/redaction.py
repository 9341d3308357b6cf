"""Redaction helpers for DSNs, connection strings and logged parameters."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

REDACTED_VALUE = "***"

_SENSITIVE_KEY_TOKENS = (
    "password",
    "passwd",
    "pwd",
    "secret",
    "token",
    "apikey",
    "api_key",
    "keystash",
    "keystore",
)

_SENSITIVE_VALUE_TOKENS = (
    "password",
    "passwd",
    "pwd=",
    "secret",
    "token",
    "bearer",
    "authorization",
)


def _compact(value: str) -> str:
    return "".join(ch for ch in value if ch.isalnum())


def is_sensitive_key(key: str) -> bool:
    normalized = key.lower()
    compact = _compact(normalized)
    for token in _SENSITIVE_KEY_TOKENS:
        if token in normalized or _compact(token) in compact:
            return True
    return False


def is_sensitive_value(value: str) -> bool:
    normalized = value.lower()
    return any(token in normalized for token in _SENSITIVE_VALUE_TOKENS)


def redact_query_params(query: Mapping[str, str]) -> dict[str, str]:
    return {key: REDACTED_VALUE if is_sensitive_key(key) else val for key, val in query.items()}


def redact_connection_string(conn_str: str) -> str:
    """
    Mask sensitive ``KEY=value`` pairs of an ``ibm_db`` connection string.

    ``DATABASE=BOW;HOSTNAME=h;PWD=s3cret;`` becomes
    ``DATABASE=BOW;HOSTNAME=h;PWD=***;``.
    """
    parts = []
    for segment in conn_str.split(";"):
        if "=" in segment:
            key, _, value = segment.partition("=")
            if is_sensitive_key(key.strip()):
                value = REDACTED_VALUE
            parts.append(f"{key}={value}")
        else:
            parts.append(segment)
    return ";".join(parts)


def redact_value(value: Any, *, key: str | None = None) -> Any:
    if key is not None and is_sensitive_key(str(key)):
        return REDACTED_VALUE
    if isinstance(value, dict):
        return {k: redact_value(v, key=str(k)) for k, v in value.items()}
    if isinstance(value, tuple):
        return tuple(redact_value(item) for item in value)
    if isinstance(value, list):
        return [redact_value(item) for item in value]
    if isinstance(value, str) and is_sensitive_value(value):
        return REDACTED_VALUE
    return value


def redact_params(params: Iterable[Any]) -> list[Any]:
    return [redact_value(value) for value in params]
