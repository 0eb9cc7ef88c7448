"""Tests for the shared logging helpers."""

import logging

import pytest

from common.logging_utils import ContextFormatter, Timer, configure_logging, extra_context, is_debug_enabled


@pytest.fixture
def restore_root():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_extra_context_drops_unset_fields():
    assert extra_context(event="x", outcome=None, count=0) == {"event": "x", "count": 0}


def test_configure_logging_level_from_env(restore_root, monkeypatch):
    monkeypatch.setenv("VERSIONLENS_LOG_LEVEL", "debug")
    configure_logging()
    assert restore_root.level == logging.DEBUG
    assert is_debug_enabled(logging.getLogger("versioning"))


def test_configure_logging_replaces_own_handler(restore_root):
    configure_logging(level="WARNING")
    configure_logging(level="ERROR")
    own = [h for h in restore_root.handlers if getattr(h, "_versionlens", False)]
    assert len(own) == 1
    assert restore_root.level == logging.ERROR


def test_formatter_appends_context_on_debug():
    record = logging.LogRecord("t", logging.DEBUG, __file__, 1, "done", None, None)
    record.event = "function_exit"
    record.count = 2
    line = ContextFormatter("%(message)s").format(record)
    assert line == "done [event=function_exit count=2]"


def test_timer_measures():
    with Timer() as t:
        pass
    assert t.duration_ms() >= 0
