import pytest

from db2dialect.catalog import AbstractType
from db2dialect.dialects import DB2Dialect, EXCLUDED_SCHEMAS
from db2dialect.query import Column


def test_db2_dialect_quotes_identifiers():
    dialect = DB2Dialect()
    assert dialect.quote_identifier('table"name') == '"table""name"'
    assert dialect.format_table("BIRDS.SIGHTINGS") == '"BIRDS"."SIGHTINGS"'
    assert dialect.format_table("SIGHTINGS") == '"SIGHTINGS"'


def test_db2_limit_clause():
    dialect = DB2Dialect()
    assert dialect.limit_clause(10, None) == "LIMIT 10"
    assert dialect.limit_clause(None, 5) == "OFFSET 5"
    assert dialect.limit_clause(10, 5) == "LIMIT 10 OFFSET 5"
    assert dialect.limit_clause(None, None) == ""


def test_db2_placeholder_and_column_definition():
    dialect = DB2Dialect()
    assert dialect.name == "db2"
    assert dialect.param_style == "qmark"
    assert dialect.capabilities.supports_native_truncation is False
    assert dialect.capabilities.supports_interval_literals is False
    assert dialect.parameter_placeholder() == "?"
    assert dialect.render_column_definition("name", "VARCHAR(40)", nullable=False) == (
        '"name" VARCHAR(40) NOT NULL'
    )


def test_classify_delegates_to_catalog():
    dialect = DB2Dialect()
    assert dialect.classify("timestamp") is AbstractType.DATE_TIME
    assert dialect.classify("geometry") is None


def test_string_length_wraps_length_function():
    dialect = DB2Dialect()
    assert dialect.compile(dialect.string_length(Column("name"))) == 'LENGTH("name")'


def test_excluded_schemas_is_fixed_and_immutable():
    dialect = DB2Dialect()
    first = dialect.excluded_schemas()
    assert first == {
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
    assert isinstance(first, frozenset)
    with pytest.raises(AttributeError):
        first.add("MINE")  # type: ignore[attr-defined]
    assert DB2Dialect().excluded_schemas() == first == EXCLUDED_SCHEMAS


def test_set_timezone_statement_substitutes_once():
    dialect = DB2Dialect()
    assert dialect.set_timezone_sql == "SET SESSION TIME ZONE = '%s'"
    assert dialect.set_timezone_statement("+02:00") == "SET SESSION TIME ZONE = '+02:00'"


def test_current_datetime():
    dialect = DB2Dialect()
    assert dialect.compile(dialect.current_datetime()) == "CURRENT TIMESTAMP"
