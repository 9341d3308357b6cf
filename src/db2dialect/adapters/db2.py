"""
IBM DB2 database adapter implementation.
"""

from __future__ import annotations

import re
from contextlib import closing
from dataclasses import dataclass
from typing import Any, Sequence

from ..catalog.types import AbstractType, normalize_type_name
from ..dialects.db2 import DB2Dialect
from ..security.redaction import redact_connection_string, redact_params
from ..utils import get_logger, resolve_slow_query_ms, time_call
from .base import (
    ADDRESS_KEYS,
    AdapterConfigurationError,
    AdapterConnectionError,
    AdapterExecutionError,
    ConnectionDescriptor,
    ConnectionField,
    ConnectionParameters,
    DatabaseAdapter,
)

DRIVER_MODULE = "ibm_db_dbi"
SCHEME = "db2"

PROBE_SQL = "SELECT 1 FROM SYSIBM.SYSDUMMY1"
CURRENT_TIME_SQL = "SELECT current timestamp FROM sysibm.sysdummy1"
LIST_SCHEMAS_SQL = "SELECT SCHEMANAME FROM SYSCAT.SCHEMATA ORDER BY SCHEMANAME"
DESCRIBE_TABLE_SQL = (
    "SELECT COLNAME, TYPENAME, CODEPAGE, NULLS FROM SYSCAT.COLUMNS "
    "WHERE TABSCHEMA = ? AND TABNAME = ? ORDER BY COLNO"
)

_BIT_DATA_TYPES = {"char", "varchar", "long varchar"}
_TIMEZONE_RE = re.compile(r"^[A-Za-z0-9_+\-/:.]+$")

CONNECTION_FIELDS: tuple[ConnectionField, ...] = (
    ConnectionField(name="host", display_name="Host", default="localhost"),
    ConnectionField(name="port", display_name="Port", type="integer", default=50000),
    ConnectionField(
        name="database",
        display_name="Database name",
        placeholder="BirdsOfTheWorld",
        required=True,
    ),
    ConnectionField(
        name="user",
        display_name="Database username",
        placeholder="What username do you use to login to the database?",
        required=True,
    ),
    ConnectionField(
        name="password",
        display_name="Database password",
        type="password",
        placeholder="*******",
    ),
)


def _load_driver():
    try:
        import ibm_db_dbi  # type: ignore[import-untyped]

        return ibm_db_dbi
    except ImportError:
        return None


def connection_fields() -> tuple[ConnectionField, ...]:
    return CONNECTION_FIELDS


def build_connection_descriptor(params: ConnectionParameters) -> ConnectionDescriptor:
    """
    Turn connection parameters into a DB2 descriptor addressed as
    ``//host:port/database``. Address keys left in ``extra`` are dropped.
    """

    options = {key: value for key, value in params.extra.items() if key not in ADDRESS_KEYS}
    return ConnectionDescriptor(
        driver=DRIVER_MODULE,
        scheme=SCHEME,
        address=f"//{params.host}:{params.port}/{params.database}",
        host=params.host,
        port=params.port,
        database=params.database,
        user=params.user,
        password=params.password,
        options=options,
        source=params.source,
    )


@dataclass(frozen=True)
class ColumnDescription:
    name: str
    native_type: str
    base_type: AbstractType | None
    nullable: bool


@dataclass
class DB2ConnectionState:
    connection: Any
    descriptor: ConnectionDescriptor
    driver: Any


class DB2Adapter(DatabaseAdapter):
    """
    Adapter wrapping the ``ibm_db_dbi`` DB-API driver.
    """

    def __init__(self, dialect: DB2Dialect | None = None, slow_query_ms: int | None = None) -> None:
        self.dialect = dialect or DB2Dialect()
        self._state: DB2ConnectionState | None = None
        self.logger = get_logger("adapters.db2")
        self.slow_query_ms = resolve_slow_query_ms(default=100, override=slow_query_ms)

    # ------------------------------------------------------------------ #
    # Connection management
    # ------------------------------------------------------------------ #
    def connect(
        self,
        target: ConnectionParameters | ConnectionDescriptor,
        *,
        timeout: float | None = None,
    ) -> Any:
        descriptor = self._descriptor(target)
        driver = _load_driver()
        if driver is None:
            raise AdapterConfigurationError("ibm_db is required to use DB2Adapter.")

        self.logger.info("Connecting to DB2 %s", descriptor.redacted())
        connection = self._open(driver, descriptor, timeout=timeout)
        self._state = DB2ConnectionState(connection, descriptor, driver)
        return connection

    def close(self) -> None:
        if self._state:
            try:
                self._state.connection.close()
            finally:
                self._state = None

    def _ensure_connection(self):
        if not self._state:
            raise AdapterConnectionError("DB2Adapter is not connected.")
        return self._state.connection

    def _open(self, driver: Any, descriptor: ConnectionDescriptor, *, timeout: float | None) -> Any:
        conn_str = descriptor.connection_string(timeout=timeout)
        try:
            return driver.connect(conn_str, "", "")
        except Exception as exc:
            self.logger.debug("DB2 connect failed using %s", redact_connection_string(conn_str))
            raise AdapterConnectionError(f"Failed to connect to DB2 at {descriptor.url}.") from exc

    @staticmethod
    def _descriptor(target: ConnectionParameters | ConnectionDescriptor) -> ConnectionDescriptor:
        if isinstance(target, ConnectionDescriptor):
            return target
        return build_connection_descriptor(target)

    # ------------------------------------------------------------------ #
    # Liveness
    # ------------------------------------------------------------------ #
    def probe(
        self,
        target: ConnectionParameters | ConnectionDescriptor,
        *,
        timeout: float | None = None,
    ) -> bool:
        """
        Return True when ``SELECT 1 FROM SYSIBM.SYSDUMMY1`` answers 1.

        Every failure (missing driver, network, authentication, timeout or an
        unexpected answer) is logged and reported as False. The probe owns a
        separate connection and always closes it.
        """

        descriptor = self._descriptor(target)
        driver = _load_driver()
        if driver is None:
            self.logger.error("Cannot probe %s: ibm_db is not installed.", descriptor.redacted())
            return False

        try:
            with closing(self._open(driver, descriptor, timeout=timeout)) as connection:
                with closing(connection.cursor()) as cursor:
                    with time_call(
                        "db2.probe", self.logger, sql=PROBE_SQL, threshold_ms=self.slow_query_ms
                    ):
                        cursor.execute(PROBE_SQL)
                        row = cursor.fetchone()
        except Exception as exc:
            self.logger.warning("DB2 probe failed for %s: %s", descriptor.redacted(), exc)
            return False

        if not row or row[0] != 1:
            self.logger.warning(
                "DB2 probe for %s returned unexpected result %r", descriptor.redacted(), row
            )
            return False
        self.logger.debug("DB2 probe succeeded for %s", descriptor.redacted())
        return True

    # ------------------------------------------------------------------ #
    # Execution helpers
    # ------------------------------------------------------------------ #
    def execute(self, sql: str, params: Sequence[Any] | None = None):
        connection = self._ensure_connection()
        cursor = connection.cursor()
        params = tuple(params or ())
        self._validate_params(sql, params)
        with time_call(
            "db2.execute",
            self.logger,
            sql=sql,
            params=redact_params(params),
            threshold_ms=self.slow_query_ms,
        ):
            if params:
                cursor.execute(sql, params)
            else:
                cursor.execute(sql)
        return cursor

    def current_db_time(self) -> Any:
        cursor = self.execute(CURRENT_TIME_SQL)
        row = cursor.fetchone()
        if not row:
            raise AdapterExecutionError("DB2 did not return the current timestamp.")
        return row[0]

    def set_timezone(self, tz: str) -> None:
        if not _TIMEZONE_RE.match(tz):
            raise AdapterExecutionError(f"Refusing suspicious time zone identifier {tz!r}.")
        self.execute(self.dialect.set_timezone_statement(tz))

    # ------------------------------------------------------------------ #
    # Metadata
    # ------------------------------------------------------------------ #
    def list_schemas(self) -> list[str]:
        """
        Return user-visible schemas, skipping DB2 system catalogs.
        """

        excluded = self.dialect.excluded_schemas()
        rows = self.execute(LIST_SCHEMAS_SQL).fetchall()
        names = (str(row[0]).rstrip() for row in rows)
        return [name for name in names if name not in excluded]

    def describe_table(self, schema: str, table: str) -> list[ColumnDescription]:
        rows = self.execute(DESCRIBE_TABLE_SQL, (schema, table)).fetchall()
        columns: list[ColumnDescription] = []
        for colname, typename, codepage, nulls in rows:
            native = normalize_type_name(str(typename))
            if codepage == 0 and native in _BIT_DATA_TYPES:
                native = normalize_type_name(f"{native} for bit data")
            columns.append(
                ColumnDescription(
                    name=str(colname).rstrip(),
                    native_type=native,
                    base_type=self.dialect.classify(native),
                    nullable=str(nulls).strip().upper() == "Y",
                )
            )
        if not columns:
            self.logger.warning("No columns found for %s.%s", schema, table)
        return columns

    @staticmethod
    def _count_placeholders(sql: str) -> int:
        count = 0
        in_string = False
        for char in sql:
            if char == "'":
                in_string = not in_string
            elif char == "?" and not in_string:
                count += 1
        return count

    def _validate_params(self, sql: str, params: Sequence[Any]) -> None:
        placeholder_count = self._count_placeholders(sql)
        if placeholder_count == 0:
            if params:
                raise AdapterExecutionError(
                    "Parameters provided but SQL statement has no placeholders."
                )
            return
        if placeholder_count != len(params):
            raise AdapterExecutionError(
                f"Parameter count mismatch: expected {placeholder_count}, received {len(params)}."
            )
