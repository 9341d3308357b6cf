import datetime
import os

import pytest

from db2dialect.adapters import ConnectionParameters, DB2Adapter
from db2dialect.dialects import EpochPrecision, TemporalUnit
from db2dialect.query import Literal, Raw


def _require_db2_adapter():
    try:
        import ibm_db_dbi  # noqa: F401
    except ImportError:
        pytest.skip("ibm_db driver not installed")
    dsn = os.getenv("DB2DIALECT_DSN")
    if not dsn:
        pytest.skip("DB2DIALECT_DSN not set; skipping DB2 integration test")
    adapter = DB2Adapter()
    params = ConnectionParameters.from_dsn(dsn)
    if not adapter.probe(params, timeout=5):
        pytest.skip("Cannot reach DB2 for integration test")
    adapter.connect(params)
    return adapter


@pytest.fixture
def adapter():
    adapter = _require_db2_adapter()
    yield adapter
    adapter.close()


def _scalar(adapter, expr):
    sql = f"SELECT {adapter.dialect.compile(expr)} FROM SYSIBM.SYSDUMMY1"
    return adapter.execute(sql).fetchone()[0]


def _as_date(value):
    if isinstance(value, datetime.datetime):
        return value.date()
    return value


def test_quarter_truncation(adapter):
    dialect = adapter.dialect
    source = Raw("TIMESTAMP('2024-05-17-10.11.12')")
    assert _as_date(_scalar(adapter, dialect.truncate_or_extract(TemporalUnit.QUARTER, source))) == (
        datetime.date(2024, 4, 1)
    )


def test_month_truncation_is_idempotent(adapter):
    dialect = adapter.dialect
    source = Raw("TIMESTAMP('2024-05-17-10.11.12')")
    once = dialect.truncate_or_extract(TemporalUnit.MONTH, source)
    twice = dialect.truncate_or_extract(TemporalUnit.MONTH, once)
    assert _scalar(adapter, once) == _scalar(adapter, twice)


def test_week_truncation_bounds(adapter):
    dialect = adapter.dialect
    source = Raw("TIMESTAMP('2024-05-17-10.11.12')")
    week = dialect.truncate_or_extract(TemporalUnit.WEEK, source)
    start = _scalar(adapter, week)
    original = datetime.datetime(2024, 5, 17, 10, 11, 12)
    assert original - datetime.timedelta(days=7) < start <= original
    assert _scalar(adapter, dialect.truncate_or_extract(TemporalUnit.WEEK, week)) == start


def test_week_interval_matches_days(adapter):
    dialect = adapter.dialect
    now = Raw("TIMESTAMP('2024-05-17-10.11.12')")
    weeks = dialect.add_interval(TemporalUnit.WEEK, 2, reference=now)
    days = dialect.add_interval(TemporalUnit.DAY, 14, reference=now)
    assert _scalar(adapter, weeks) == _scalar(adapter, days)


def test_epoch_conversion(adapter):
    dialect = adapter.dialect
    epoch = datetime.datetime(1970, 1, 1)
    assert _scalar(adapter, dialect.epoch_to_timestamp(0, EpochPrecision.SECONDS)) == epoch
    assert _scalar(adapter, dialect.epoch_to_timestamp(Literal(1500), "milliseconds")) == (
        epoch + datetime.timedelta(seconds=1)
    )
