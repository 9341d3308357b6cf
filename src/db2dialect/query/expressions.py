"""
Expression tree primitives for SQL fragment construction.

Nodes are immutable and compare structurally, so two fragments built the
same way are equal. Arithmetic operators build ``BinaryOp`` nodes::

    col = Column("created_at")
    call("dayofweek", col) - 1
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Tuple, Union


class Expression:
    """
    Base class for SQL fragment nodes.
    """

    def __add__(self, other: Any) -> "BinaryOp":
        return BinaryOp("+", self, as_expression(other))

    def __radd__(self, other: Any) -> "BinaryOp":
        return BinaryOp("+", as_expression(other), self)

    def __sub__(self, other: Any) -> "BinaryOp":
        return BinaryOp("-", self, as_expression(other))

    def __rsub__(self, other: Any) -> "BinaryOp":
        return BinaryOp("-", as_expression(other), self)

    def __mul__(self, other: Any) -> "BinaryOp":
        return BinaryOp("*", self, as_expression(other))

    def __rmul__(self, other: Any) -> "BinaryOp":
        return BinaryOp("*", as_expression(other), self)

    def __truediv__(self, other: Any) -> "BinaryOp":
        return BinaryOp("/", self, as_expression(other))


@dataclass(frozen=True)
class Column(Expression):
    """Reference to a column, optionally qualified by table (and schema)."""

    name: str
    table: str | None = None


@dataclass(frozen=True)
class Literal(Expression):
    """A constant rendered inline: strings quoted, numbers as-is, dates typed."""

    value: Any


@dataclass(frozen=True)
class Raw(Expression):
    """
    Verbatim SQL text. Reserved for dialect-owned constants such as
    ``CURRENT TIMESTAMP`` and validated time-arithmetic offsets.
    """

    sql: str


@dataclass(frozen=True)
class Call(Expression):
    name: str
    args: Tuple[Expression, ...] = ()


@dataclass(frozen=True)
class BinaryOp(Expression):
    operator: str
    left: Expression
    right: Expression


@dataclass(frozen=True)
class Concat(Expression):
    parts: Tuple[Expression, ...]


@dataclass(frozen=True)
class Duration(Expression):
    """DB2 labeled duration, e.g. ``(DAYOFWEEK(x) - 1) DAYS``."""

    amount: Expression
    unit: str


ExpressionLike = Union[Expression, str, int, float, bool, None]


def as_expression(value: ExpressionLike | Any) -> Expression:
    """
    Wrap plain Python values as literals; expressions pass through.
    """
    if isinstance(value, Expression):
        return value
    return Literal(value)


def literal(value: Any) -> Literal:
    return Literal(value)


def raw(sql: str) -> Raw:
    return Raw(sql)


def call(name: str, *args: Any) -> Call:
    return Call(name, tuple(as_expression(arg) for arg in args))


def concat(*parts: Any) -> Concat:
    flattened: list[Expression] = []
    for part in parts:
        expr = as_expression(part)
        if isinstance(expr, Concat):
            flattened.extend(expr.parts)
        else:
            flattened.append(expr)
    return Concat(tuple(flattened))


def column(path: str) -> Column:
    """
    Build a column from a dotted path: ``"name"``, ``"t.name"`` or ``"s.t.name"``.
    """
    table, _, name = path.rpartition(".")
    return Column(name, table or None)
