"""
Dialect strategy interfaces describing SQL fragment generation.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import AbstractSet, Any, Protocol

from ..catalog.types import AbstractType
from ..query.expressions import Expression


class DialectError(RuntimeError):
    """Base error for dialect translation failures."""


class UnsupportedTemporalUnitError(DialectError, ValueError):
    """Raised when a caller asks for a unit the operation does not define."""

    def __init__(self, operation: str, unit: Any) -> None:
        self.operation = operation
        self.unit = unit
        super().__init__(f"{operation} does not support temporal unit {unit!r}")


class TemporalUnit(str, Enum):
    DEFAULT = "default"
    SECOND = "second"
    MINUTE = "minute"
    MINUTE_OF_HOUR = "minute-of-hour"
    HOUR = "hour"
    HOUR_OF_DAY = "hour-of-day"
    DAY = "day"
    DAY_OF_WEEK = "day-of-week"
    DAY_OF_MONTH = "day-of-month"
    DAY_OF_YEAR = "day-of-year"
    WEEK = "week"
    WEEK_OF_YEAR = "week-of-year"
    MONTH = "month"
    MONTH_OF_YEAR = "month-of-year"
    QUARTER = "quarter"
    QUARTER_OF_YEAR = "quarter-of-year"
    YEAR = "year"


class EpochPrecision(str, Enum):
    SECONDS = "seconds"
    MILLISECONDS = "milliseconds"


def coerce_unit(operation: str, unit: TemporalUnit | str) -> TemporalUnit:
    """
    Accept a ``TemporalUnit`` or its name (``"minute-of-hour"``, ``"minute_of_hour"``).
    """
    if isinstance(unit, TemporalUnit):
        return unit
    if isinstance(unit, str):
        try:
            return TemporalUnit(unit.strip().lower().replace("_", "-"))
        except ValueError:
            pass
    raise UnsupportedTemporalUnitError(operation, unit)


@dataclass(frozen=True)
class DialectCapabilities:
    """
    Feature flags describing backend capabilities.
    """

    supports_limit_offset: bool = True
    supports_native_truncation: bool = False
    supports_interval_literals: bool = False
    supports_schema_namespaces: bool = True


class Dialect(Protocol):
    """
    Strategy interface consumed by the query compiler.
    """

    @property
    def name(self) -> str: ...

    @property
    def param_style(self) -> str: ...

    @property
    def capabilities(self) -> DialectCapabilities: ...

    def quote_identifier(self, identifier: str) -> str: ...

    def format_table(self, table_name: str) -> str: ...

    def limit_clause(self, limit: int | None, offset: int | None) -> str: ...

    def parameter_placeholder(self, position: int | None = None) -> str: ...

    def render_column_definition(self, column: str, column_type: str, *, nullable: bool) -> str: ...


class DialectAdapter(Dialect, Protocol):
    """
    Translation contract for temporal, string and type operations.
    """

    def classify(self, token: str) -> AbstractType | None: ...

    def current_datetime(self) -> Expression: ...

    def truncate_or_extract(self, unit: TemporalUnit | str, expr: Any) -> Expression: ...

    def add_interval(
        self, unit: TemporalUnit | str, amount: Any, reference: Expression | None = None
    ) -> Expression: ...

    def epoch_to_timestamp(self, expr: Any, precision: EpochPrecision | str) -> Expression: ...

    def string_length(self, field: Any) -> Expression: ...

    def excluded_schemas(self) -> AbstractSet[str]: ...

    def set_timezone_statement(self, tz: str) -> str: ...
