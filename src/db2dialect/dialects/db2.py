"""
IBM DB2 dialect implementation.

DB2 has no ``DATE_TRUNC`` and no interval literals, so truncation goes
through ``VARCHAR_FORMAT``/``TO_DATE`` round trips and interval arithmetic
uses labeled durations (``CURRENT TIMESTAMP + 3 DAYS``). Function reference:
https://www.ibm.com/docs/en/db2/11.5?topic=functions-scalar
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Final

from ..catalog.types import AbstractType, DB2TypeCatalog, TypeCatalog
from ..query.compiler import ExpressionCompiler
from ..query.expressions import Duration, Expression, Literal, Raw, as_expression, call, concat
from .base import (
    DialectAdapter,
    DialectCapabilities,
    EpochPrecision,
    TemporalUnit,
    UnsupportedTemporalUnitError,
    coerce_unit,
)

EXCLUDED_SCHEMAS: Final[frozenset[str]] = frozenset(
    {
        "SQLJ",
        "SYSCAT",
        "SYSFUN",
        "SYSIBMADM",
        "SYSIBMINTERNAL",
        "SYSIBMTS",
        "SYSPROC",
        "SYSPUBLIC",
        "SYSSTAT",
        "SYSTOOLS",
    }
)

SET_TIMEZONE_SQL: Final[str] = "SET SESSION TIME ZONE = '%s'"

CURRENT_TIMESTAMP: Final[Raw] = Raw("CURRENT TIMESTAMP")
EPOCH_TIMESTAMP: Final[Raw] = Raw("TIMESTAMP('1970-01-01-00.00.00')")

MINUTE_PATTERN: Final[str] = "YYYY-MM-DD HH24:MI"
HOUR_PATTERN: Final[str] = "YYYY-MM-DD HH24"
MONTH_PATTERN: Final[str] = "YYYY-MM"
DATE_PATTERN: Final[str] = "YYYY-MM-DD"

EXTRACTION_FUNCTIONS: Final[dict[TemporalUnit, str]] = {
    TemporalUnit.MINUTE_OF_HOUR: "minute",
    TemporalUnit.HOUR_OF_DAY: "hour",
    TemporalUnit.DAY_OF_WEEK: "dayofweek",
    TemporalUnit.DAY_OF_MONTH: "day",
    TemporalUnit.DAY_OF_YEAR: "dayofyear",
    TemporalUnit.WEEK_OF_YEAR: "week",
    TemporalUnit.MONTH_OF_YEAR: "month",
    TemporalUnit.QUARTER_OF_YEAR: "quarter",
    TemporalUnit.YEAR: "year",
}

# unit -> (labeled duration noun, multiplier)
INTERVAL_UNITS: Final[dict[TemporalUnit, tuple[str, int]]] = {
    TemporalUnit.SECOND: ("SECONDS", 1),
    TemporalUnit.MINUTE: ("MINUTES", 1),
    TemporalUnit.HOUR: ("HOURS", 1),
    TemporalUnit.DAY: ("DAYS", 1),
    TemporalUnit.WEEK: ("DAYS", 7),
    TemporalUnit.MONTH: ("MONTHS", 1),
    TemporalUnit.QUARTER: ("MONTHS", 3),
    TemporalUnit.YEAR: ("YEARS", 1),
}


def _whole_number(value: Any) -> int:
    """
    Coerce a numeric amount to ``int``, truncating toward zero.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise TypeError(f"Expected a numeric amount, got {type(value).__name__}")
    return int(value)


def _labeled_duration(amount: int, noun: str) -> Raw:
    return Raw(f"{amount} {noun}")


def _literal_date(expr: Expression) -> date | None:
    if not isinstance(expr, Literal):
        return None
    value = expr.value
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            return None
    return None


class DB2Dialect(DialectAdapter):
    """
    DB2 LUW dialect using qmark placeholders and double-quoted identifiers.
    """

    name: Final[str] = "db2"
    param_style: Final[str] = "qmark"
    capabilities: Final[DialectCapabilities] = DialectCapabilities(
        supports_limit_offset=True,
        supports_native_truncation=False,
        supports_interval_literals=False,
        supports_schema_namespaces=True,
    )
    set_timezone_sql: Final[str] = SET_TIMEZONE_SQL

    def __init__(self, catalog: TypeCatalog | None = None) -> None:
        self.catalog = catalog or DB2TypeCatalog()

    # ------------------------------------------------------------------ #
    # Baseline dialect surface
    # ------------------------------------------------------------------ #
    def quote_identifier(self, identifier: str) -> str:
        escaped = identifier.replace('"', '""')
        return f'"{escaped}"'

    def format_table(self, table_name: str) -> str:
        if "." in table_name:
            schema, table = table_name.split(".", 1)
            return f"{self.quote_identifier(schema)}.{self.quote_identifier(table)}"
        return self.quote_identifier(table_name)

    def limit_clause(self, limit: int | None, offset: int | None) -> str:
        parts: list[str] = []
        if limit is not None:
            parts.append(f"LIMIT {int(limit)}")
        if offset is not None:
            parts.append(f"OFFSET {int(offset)}")
        return " ".join(parts)

    def parameter_placeholder(self, position: int | None = None) -> str:
        return "?"

    def render_column_definition(self, column: str, column_type: str, *, nullable: bool) -> str:
        null_clause = "" if nullable else " NOT NULL"
        return f"{self.quote_identifier(column)} {column_type}{null_clause}"

    def compile(self, expr: Expression) -> str:
        """
        Render a fragment produced by this dialect to SQL text.
        """
        return ExpressionCompiler(self).compile(expr)

    # ------------------------------------------------------------------ #
    # Types
    # ------------------------------------------------------------------ #
    def classify(self, token: str) -> AbstractType | None:
        return self.catalog.classify(token)

    # ------------------------------------------------------------------ #
    # Temporal fragments
    # ------------------------------------------------------------------ #
    def current_datetime(self) -> Expression:
        return CURRENT_TIMESTAMP

    def truncate_or_extract(self, unit: TemporalUnit | str, expr: Any) -> Expression:
        unit = coerce_unit("truncate_or_extract", unit)
        expr = as_expression(expr)

        function = EXTRACTION_FUNCTIONS.get(unit)
        if function is not None:
            return call(function, expr)

        if unit is TemporalUnit.DEFAULT:
            return expr
        if unit is TemporalUnit.MINUTE:
            return self._truncate_with_pattern(MINUTE_PATTERN, expr)
        if unit is TemporalUnit.HOUR:
            return self._truncate_with_pattern(HOUR_PATTERN, expr)
        if unit is TemporalUnit.DAY:
            return call("date", expr)
        if unit is TemporalUnit.WEEK:
            # DAYOFWEEK is 1-based from Sunday; the week starts on day 1.
            return expr - Duration(call("dayofweek", expr) - 1, "DAYS")
        if unit is TemporalUnit.MONTH:
            month_start = concat(call("varchar_format", expr, MONTH_PATTERN), "-01")
            return call("to_date", month_start, DATE_PATTERN)
        if unit is TemporalUnit.QUARTER:
            return self._truncate_to_quarter(expr)
        raise UnsupportedTemporalUnitError("truncate_or_extract", unit)

    def add_interval(
        self,
        unit: TemporalUnit | str,
        amount: Any,
        reference: Expression | None = None,
    ) -> Expression:
        unit = coerce_unit("add_interval", unit)
        try:
            noun, multiplier = INTERVAL_UNITS[unit]
        except KeyError:
            raise UnsupportedTemporalUnitError("add_interval", unit) from None
        base = reference if reference is not None else self.current_datetime()
        return base + _labeled_duration(_whole_number(amount) * multiplier, noun)

    def epoch_to_timestamp(self, expr: Any, precision: EpochPrecision | str) -> Expression:
        try:
            precision = EpochPrecision(precision)
        except ValueError:
            raise ValueError(f"Unsupported epoch precision {precision!r}") from None

        if isinstance(expr, Expression):
            seconds: Expression = expr
            if precision is EpochPrecision.MILLISECONDS:
                seconds = call("floor", expr / 1000)
            return EPOCH_TIMESTAMP + Duration(seconds, "SECONDS")

        offset = _whole_number(expr)
        if precision is EpochPrecision.MILLISECONDS:
            offset = offset // 1000
        return EPOCH_TIMESTAMP + _labeled_duration(offset, "SECONDS")

    # ------------------------------------------------------------------ #
    # Miscellaneous
    # ------------------------------------------------------------------ #
    def string_length(self, field: Any) -> Expression:
        return call("length", field)

    def excluded_schemas(self) -> frozenset[str]:
        return EXCLUDED_SCHEMAS

    def set_timezone_statement(self, tz: str) -> str:
        """
        Fill the session time zone template. ``tz`` is not validated; callers
        must only pass trusted zone identifiers.
        """
        return self.set_timezone_sql % tz

    # Helpers -----------------------------------------------------------
    @staticmethod
    def _truncate_with_pattern(pattern: str, expr: Expression) -> Expression:
        return call("to_date", call("varchar_format", expr, pattern), pattern)

    @staticmethod
    def _truncate_to_quarter(expr: Expression) -> Expression:
        known = _literal_date(expr)
        if known is not None:
            first_month = (known.month - 1) // 3 * 3 + 1
            return call("to_date", f"{known.year:04d}-{first_month:02d}-01", DATE_PATTERN)
        first_month = call("quarter", expr) * 3 - 2
        quarter_start = concat(
            call("varchar", call("year", expr)),
            "-",
            call("lpad", call("varchar", first_month), 2, "0"),
            "-01",
        )
        return call("to_date", quarter_start, DATE_PATTERN)


def get_db2_dialect() -> DB2Dialect:
    return DB2Dialect()
