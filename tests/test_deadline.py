"""Tests for time limits, settings and logging setup."""
import logging
import time

import pytest

from quiver_algebras import DeadlineExceeded, Settings, cliques, configure_logging, time_limit
from quiver_algebras.deadline import check_deadline, remaining


def complete_graph(n):
    return {i: [j for j in range(n) if j != i] for i in range(n)}


# --- time limits ---

def test_expired_limit_stops_search():
    with time_limit(0):
        time.sleep(0.01)
        with pytest.raises(DeadlineExceeded):
            list(cliques(complete_graph(4)))


def test_no_limit():
    assert remaining() is None
    check_deadline()
    with time_limit(None):
        assert remaining() is None
        assert len(list(cliques(complete_graph(3)))) == 8


def test_remaining():
    with time_limit(60):
        left = remaining()
        assert left is not None and 0 < left <= 60
    assert remaining() is None


def test_nested_limits_keep_earliest():
    with time_limit(1):
        with time_limit(60):
            assert remaining() <= 1
        with time_limit(0.5):
            assert remaining() <= 0.5


def test_negative_limit():
    with pytest.raises(ValueError):
        with time_limit(-1):
            pass


# --- settings and logging ---

def test_settings_defaults(monkeypatch):
    monkeypatch.delenv("QUIVER_ALGEBRAS_VERIFY_AR", raising=False)
    monkeypatch.delenv("QUIVER_ALGEBRAS_LOG_LEVEL", raising=False)
    current = Settings.from_env()
    assert current.verify_ar_quiver is False
    assert current.log_level == "WARNING"


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("QUIVER_ALGEBRAS_VERIFY_AR", "yes")
    monkeypatch.setenv("QUIVER_ALGEBRAS_LOG_LEVEL", "debug")
    current = Settings.from_env()
    assert current.verify_ar_quiver is True
    assert current.log_level == "DEBUG"


def test_configure_logging():
    logger = configure_logging("debug")
    try:
        assert logger.name == "quiver_algebras"
        assert logger.level == logging.DEBUG
        handlers = len(logger.handlers)
        configure_logging("info")
        assert len(logger.handlers) == handlers
        assert logger.level == logging.INFO
    finally:
        logger.setLevel(logging.NOTSET)
        for handler in [h for h in logger.handlers if not isinstance(h, logging.NullHandler)]:
            logger.removeHandler(handler)
