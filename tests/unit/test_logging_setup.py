"""
Unit tests for JSON logging setup
"""

import io
import json
import logging
import os
import sys

# Add project root to path
project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
sys.path.append(project_root)

from common.logging_setup import JsonFormatter, _resolve_level


def _record(msg, extra=None, exc_info=None):
    rec = logging.LogRecord("daysince.test", logging.WARNING, __file__, 1, msg, None, exc_info)
    if extra is not None:
        rec.extra = extra
    return rec


class TestJsonFormatter:
    def test_basic_fields(self):
        out = json.loads(JsonFormatter().format(_record("hello")))
        assert out["lvl"] == "WARNING"
        assert out["name"] == "daysince.test"
        assert out["msg"] == "hello"
        assert out["t"].endswith("Z")
        assert "extra" not in out

    def test_extra_dict(self):
        out = json.loads(JsonFormatter().format(_record("x", extra={"label": "42", "char": "日"})))
        assert out["extra"] == {"label": "42", "char": "日"}

    def test_exception_info(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            rec = _record("failed", exc_info=sys.exc_info())
        out = json.loads(JsonFormatter().format(rec))
        assert "RuntimeError: boom" in out["exc_info"]

    def test_handler_writes_one_line(self):
        buf = io.StringIO()
        handler = logging.StreamHandler(buf)
        handler.setFormatter(JsonFormatter())
        handler.emit(_record("one"))
        lines = buf.getvalue().splitlines()
        assert len(lines) == 1
        assert json.loads(lines[0])["msg"] == "one"


class TestLevel:
    def test_explicit_level_wins(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "ERROR")
        assert _resolve_level("debug") == logging.DEBUG

    def test_env_level(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "warning")
        assert _resolve_level(None) == logging.WARNING

    def test_unknown_level_defaults_to_info(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        assert _resolve_level("chatty") == logging.INFO
        assert _resolve_level(None) == logging.INFO
