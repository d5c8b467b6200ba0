"""Tests for logging setup."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from defrag_timer import logging_setup


@pytest.fixture
def clean_root():
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    root.handlers.clear()
    try:
        yield root
    finally:
        for handler in root.handlers:
            if isinstance(handler, logging.FileHandler):
                handler.close()
        root.handlers = original_handlers
        root.setLevel(original_level)


def test_default_log_dir_uses_local_appdata(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("LOCALAPPDATA", str(tmp_path))
    assert logging_setup._default_log_dir() == tmp_path / "DefragTimer" / "logs"


def test_default_log_dir_falls_back_to_home(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.delenv("LOCALAPPDATA", raising=False)
    monkeypatch.setattr(logging_setup.Path, "home", lambda: tmp_path)
    assert logging_setup._default_log_dir() == tmp_path / ".defrag_timer" / "logs"


def test_init_logging_creates_handlers(monkeypatch, tmp_path: Path, clean_root) -> None:
    log_dir = tmp_path / "logs"
    monkeypatch.setattr(logging_setup, "_default_log_dir", lambda: log_dir)
    log_path = logging_setup.init_logging()
    assert log_path == log_dir / "app.log"
    assert any(isinstance(h, RotatingFileHandler) for h in clean_root.handlers)
    assert any(logging_setup._is_console_handler(h) for h in clean_root.handlers)


def test_init_logging_is_idempotent(monkeypatch, tmp_path: Path, clean_root) -> None:
    monkeypatch.setattr(logging_setup, "_default_log_dir", lambda: tmp_path / "logs")
    logging_setup.init_logging()
    logging_setup.init_logging()
    file_handlers = [
        h for h in clean_root.handlers if isinstance(h, RotatingFileHandler)
    ]
    assert len(file_handlers) == 1


def test_init_logging_reads_level(monkeypatch, tmp_path: Path, clean_root) -> None:
    monkeypatch.setenv("DEFRAG_TIMER_LOG_LEVEL", "debug")
    monkeypatch.setattr(logging_setup, "_default_log_dir", lambda: tmp_path / "logs")
    logging_setup.init_logging()
    assert clean_root.level == logging.DEBUG


def test_init_logging_invalid_level_defaults(
    monkeypatch, tmp_path: Path, clean_root
) -> None:
    monkeypatch.setenv("DEFRAG_TIMER_LOG_LEVEL", "notalevel")
    monkeypatch.setattr(logging_setup, "_default_log_dir", lambda: tmp_path / "logs")
    logging_setup.init_logging()
    assert clean_root.level == logging.INFO


def test_set_console_level_adjusts_stream_only(tmp_path: Path, clean_root) -> None:
    stream_handler = logging.StreamHandler()
    file_handler = logging.FileHandler(tmp_path / "app.log")
    stream_handler.setLevel(logging.INFO)
    file_handler.setLevel(logging.INFO)
    clean_root.addHandler(stream_handler)
    clean_root.addHandler(file_handler)
    logging_setup.set_console_level(logging.ERROR)
    assert stream_handler.level == logging.ERROR
    assert file_handler.level == logging.INFO
