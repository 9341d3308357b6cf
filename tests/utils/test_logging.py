import logging

from db2dialect.utils import resolve_slow_query_ms
from db2dialect.utils.logging import get_correlation_id, get_logger, set_correlation_id, time_call


def test_correlation_id_round_trip():
    token = set_correlation_id("test-token")
    assert token == "test-token"
    assert get_correlation_id() == "test-token"


def test_loggers_live_under_package_namespace():
    assert get_logger("adapters.db2").name == "db2dialect.adapters.db2"


def test_time_call_logs_duration(caplog):
    logger = get_logger("tests.logging")
    caplog.set_level(logging.DEBUG, logger=logger.name)
    with time_call("unit-test", logger, threshold_ms=0) as timer:
        pass
    assert timer.elapsed_ms is not None
    records = [record for record in caplog.records if record.name == logger.name]
    assert any("unit-test took" in record.message for record in records)
    assert records[-1].levelno == logging.WARNING


def test_time_call_fast_statements_log_at_debug(caplog):
    logger = get_logger("tests.logging.fast")
    caplog.set_level(logging.DEBUG, logger=logger.name)
    with time_call("fast", logger, sql="SELECT 1 FROM SYSIBM.SYSDUMMY1", threshold_ms=60_000):
        pass
    record = [r for r in caplog.records if r.name == logger.name][-1]
    assert record.levelno == logging.DEBUG
    assert record.sql == "SELECT 1 FROM SYSIBM.SYSDUMMY1"


def test_resolve_slow_query_ms(monkeypatch):
    monkeypatch.delenv("DB2DIALECT_SLOW_QUERY_MS", raising=False)
    assert resolve_slow_query_ms(default=100) == 100
    monkeypatch.setenv("DB2DIALECT_SLOW_QUERY_MS", "not-a-number")
    assert resolve_slow_query_ms(default=100) == 100
    monkeypatch.setenv("DB2DIALECT_SLOW_QUERY_MS", "20")
    assert resolve_slow_query_ms(default=100) == 20
    assert resolve_slow_query_ms(default=100, override=0) == 0
