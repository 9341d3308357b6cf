"""
Render expression trees into SQL text for a dialect.
"""

from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal
from typing import TYPE_CHECKING

from .expressions import BinaryOp, Call, Column, Concat, Duration, Expression, Literal, Raw

if TYPE_CHECKING:
    from ..dialects.base import Dialect


OPERATOR_PRECEDENCE = {
    "||": 1,
    "+": 1,
    "-": 1,
    "*": 2,
    "/": 2,
}
_ATOMIC = 10


class ExpressionCompiler:
    """
    Compile expression nodes into inline SQL.

    Literals are rendered inline rather than bound as parameters because DB2
    requires the format arguments of ``VARCHAR_FORMAT``/``TO_DATE`` to be
    constants.
    """

    def __init__(self, dialect: "Dialect") -> None:
        self.dialect = dialect

    def compile(self, expr: Expression) -> str:
        if isinstance(expr, Raw):
            return expr.sql
        if isinstance(expr, Column):
            return self._compile_column(expr)
        if isinstance(expr, Literal):
            return self._compile_literal(expr.value)
        if isinstance(expr, Call):
            args = ", ".join(self.compile(arg) for arg in expr.args)
            return f"{expr.name.upper()}({args})"
        if isinstance(expr, BinaryOp):
            return self._compile_binary(expr)
        if isinstance(expr, Concat):
            return " || ".join(self._operand(part, 2, right=False) for part in expr.parts)
        if isinstance(expr, Duration):
            return f"{self._operand(expr.amount, _ATOMIC - 1, right=False)} {expr.unit.upper()}"
        raise TypeError(f"Cannot compile expression of type {type(expr).__name__}")

    # Helpers -----------------------------------------------------------
    def _compile_column(self, expr: Column) -> str:
        name = self.dialect.quote_identifier(expr.name)
        if expr.table:
            return f"{self.dialect.format_table(expr.table)}.{name}"
        return name

    def _compile_binary(self, expr: BinaryOp) -> str:
        precedence = OPERATOR_PRECEDENCE.get(expr.operator)
        if precedence is None:
            raise ValueError(f"Unsupported operator '{expr.operator}'")
        left = self._operand(expr.left, precedence, right=False)
        right = self._operand(expr.right, precedence, right=True)
        return f"{left} {expr.operator} {right}"

    def _operand(self, expr: Expression, parent_precedence: int, *, right: bool) -> str:
        sql = self.compile(expr)
        own = _precedence(expr)
        if own < parent_precedence or (right and own == parent_precedence):
            return f"({sql})"
        return sql

    @staticmethod
    def _compile_literal(value: object) -> str:
        if value is None:
            return "NULL"
        if isinstance(value, bool):
            return "TRUE" if value else "FALSE"
        if isinstance(value, (int, float, Decimal)):
            return str(value)
        if isinstance(value, datetime):
            return f"TIMESTAMP('{value.strftime('%Y-%m-%d-%H.%M.%S.%f')}')"
        if isinstance(value, date):
            return f"DATE('{value.isoformat()}')"
        if isinstance(value, time):
            return f"TIME('{value.strftime('%H.%M.%S')}')"
        if isinstance(value, str):
            escaped = value.replace("'", "''")
            return f"'{escaped}'"
        raise TypeError(f"Unsupported literal type {type(value).__name__}")


def _precedence(expr: Expression) -> int:
    if isinstance(expr, BinaryOp):
        return OPERATOR_PRECEDENCE.get(expr.operator, 0)
    if isinstance(expr, Concat):
        return 0 if len(expr.parts) > 1 else _ATOMIC
    return _ATOMIC
