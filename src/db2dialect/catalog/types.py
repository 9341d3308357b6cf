"""
DB2 native column types and their portable categories.

The table follows the IBM DB2 LUW data type list. Lookups are literal: the
token must already be lower-cased with single spaces, including the
parenthesised bit-data forms such as ``"char () for bit data"``.
"""

from __future__ import annotations

import re
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping, Protocol


class AbstractType(str, Enum):
    """Portable type categories understood by the query compiler."""

    INTEGER = "integer"
    BIG_INTEGER = "big_integer"
    FLOAT = "float"
    DECIMAL = "decimal"
    TEXT = "text"
    DATE = "date"
    TIME = "time"
    DATE_TIME = "date_time"
    BOOLEAN = "boolean"
    OPAQUE = "opaque"


DB2_NATIVE_TYPES: Mapping[str, AbstractType] = MappingProxyType(
    {
        "smallint": AbstractType.INTEGER,
        "integer": AbstractType.INTEGER,
        "bigint": AbstractType.BIG_INTEGER,
        "decimal": AbstractType.DECIMAL,
        "double": AbstractType.FLOAT,
        "real": AbstractType.OPAQUE,
        "decfloat": AbstractType.OPAQUE,
        "char": AbstractType.TEXT,
        "varchar": AbstractType.TEXT,
        "clob": AbstractType.TEXT,
        "long varchar": AbstractType.OPAQUE,
        "graphic": AbstractType.OPAQUE,
        "vargraphic": AbstractType.OPAQUE,
        "long vargraphic": AbstractType.OPAQUE,
        "char () for bit data": AbstractType.OPAQUE,
        "varchar () for bit data": AbstractType.OPAQUE,
        "long varchar for bit data": AbstractType.OPAQUE,
        "blob": AbstractType.OPAQUE,
        "dbclob": AbstractType.OPAQUE,
        "xml": AbstractType.OPAQUE,
        "date": AbstractType.DATE,
        "time": AbstractType.TIME,
        "timestamp": AbstractType.DATE_TIME,
        "boolean": AbstractType.BOOLEAN,
    }
)


class TypeCatalog(Protocol):
    """
    Capability mapping native type tokens to abstract categories.
    """

    def classify(self, token: str) -> AbstractType | None: ...

    def tokens(self) -> Iterable[str]: ...


class DB2TypeCatalog:
    """
    Static DB2 type table. Unknown tokens classify as ``None``.
    """

    def __init__(self, table: Mapping[str, AbstractType] = DB2_NATIVE_TYPES) -> None:
        self._table = table

    def classify(self, token: str) -> AbstractType | None:
        return self._table.get(token)

    def tokens(self) -> frozenset[str]:
        return frozenset(self._table)


_WHITESPACE_RE = re.compile(r"\s+")
_LENGTH_RE = re.compile(r"\(\s*[\d\s,]*\)")


def normalize_type_name(raw: str) -> str:
    """
    Normalize a type name as reported by the catalog views for lookup.

    ``"VARCHAR(40) FOR BIT DATA"`` becomes ``"varchar () for bit data"`` and
    ``"CHARACTER"`` becomes ``"char"``; plain length suffixes are dropped.
    """
    name = _WHITESPACE_RE.sub(" ", raw.strip().lower())
    bit_data = name.endswith(" for bit data")
    if bit_data:
        name = name[: -len(" for bit data")]
    name = _WHITESPACE_RE.sub(" ", _LENGTH_RE.sub("", name)).strip()
    name = _TYPE_ALIASES.get(name, name)
    if bit_data:
        if name == "long varchar":
            return "long varchar for bit data"
        return f"{name} () for bit data"
    return name


_TYPE_ALIASES = {
    "character": "char",
    "character varying": "varchar",
    "char varying": "varchar",
    "int": "integer",
    "dec": "decimal",
    "numeric": "decimal",
    "double precision": "double",
    "float": "double",
    "timestmp": "timestamp",
    "character large object": "clob",
    "binary large object": "blob",
}
