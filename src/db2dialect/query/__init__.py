"""
SQL fragment construction for db2dialect.
"""

from .compiler import ExpressionCompiler
from .expressions import (
    BinaryOp,
    Call,
    Column,
    Concat,
    Duration,
    Expression,
    Literal,
    Raw,
    as_expression,
    call,
    column,
    concat,
    literal,
    raw,
)

__all__ = [
    "BinaryOp",
    "Call",
    "Column",
    "Concat",
    "Duration",
    "Expression",
    "ExpressionCompiler",
    "Literal",
    "Raw",
    "as_expression",
    "call",
    "column",
    "concat",
    "literal",
    "raw",
]
