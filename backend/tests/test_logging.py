"""Tests for JSON log formatting."""

import json
import logging
import sys

import pytest
from fastapi import HTTPException

from dailyos.auth.context import AccessContext
from dailyos.auth.roles import RoleId
from dailyos.config import settings
from dailyos.middleware.logging_config import JSONFormatter, configure_json_logging


def _record(msg="hello %s", args=("world",), **extra) -> logging.LogRecord:
    record = logging.LogRecord("dailyos.test", logging.INFO, __file__, 1, msg, args, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formats_basic_fields():
    entry = json.loads(JSONFormatter().format(_record()))
    assert entry["level"] == "INFO"
    assert entry["logger"] == "dailyos.test"
    assert entry["message"] == "hello world"
    assert "timestamp" in entry
    assert "role" not in entry


def test_includes_access_fields():
    entry = json.loads(JSONFormatter().format(_record(user="u-1", role="cashier", space_id="s-1")))
    assert entry["user"] == "u-1"
    assert entry["role"] == "cashier"
    assert entry["space_id"] == "s-1"


def test_includes_exception_text():
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = logging.LogRecord("dailyos.test", logging.ERROR, __file__, 1, "failed", (), sys.exc_info())
    entry = json.loads(JSONFormatter().format(record))
    assert "RuntimeError: boom" in entry["exception"]


def test_configure_json_logging_replaces_handlers():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        configure_json_logging("debug")
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JSONFormatter)
        assert root.level == logging.DEBUG
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


def test_configure_json_logging_defaults_to_settings_level(monkeypatch):
    monkeypatch.setattr(settings, "log_level", "WARNING")
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        configure_json_logging()
        assert root.level == logging.WARNING
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


def test_route_denial_carries_path(caplog):
    caplog.set_level(logging.DEBUG, logger="dailyos.auth.context")
    with pytest.raises(HTTPException):
        AccessContext(user_id="u-9", space_id="s-1", assigned_role=RoleId.VIEWER).require_route("/system/members")

    record = next(r for r in caplog.records if r.name == "dailyos.auth.context")
    assert record.path == "/system/members"
    entry = json.loads(JSONFormatter().format(record))
    assert entry["path"] == "/system/members"
    assert entry["role"] == "viewer"
    assert entry["user"] == "u-9"


def test_module_denial_has_no_path(caplog):
    caplog.set_level(logging.DEBUG, logger="dailyos.auth.context")
    with pytest.raises(HTTPException):
        AccessContext(assigned_role=RoleId.CASHIER).require_module("finance")

    record = next(r for r in caplog.records if r.name == "dailyos.auth.context")
    assert "path" not in json.loads(JSONFormatter().format(record))
