"""Tests for array30.cli: argument parsing and startup."""

from __future__ import annotations

import json
import logging

import pytest

from array30 import __version__
from array30.cli import load_dictionary, main, parse_args
from array30.config import DEFAULT_CONFIG


@pytest.fixture(autouse=True)
def isolated_logging(tmp_path, monkeypatch):
    """Keep the array30 logger free of handlers left by earlier tests."""
    monkeypatch.setenv("HOME", str(tmp_path))
    logger = logging.getLogger('array30')
    saved = list(logger.handlers)
    logger.handlers.clear()
    yield
    for handler in logger.handlers:
        handler.close()
    logger.handlers[:] = saved


class TestParseArgs:

    def test_defaults_no_args(self):
        args = parse_args([])
        assert args.mode == 'console'
        assert args.big is False
        assert args.debug is False
        assert args.config is None

    def test_gui_flag(self):
        assert parse_args(['--gui']).mode == 'gui'
        assert parse_args(['-g']).mode == 'gui'

    def test_big_flag(self):
        assert parse_args(['-b']).big is True

    def test_console_and_gui_conflict(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            parse_args(['--gui', '--console'])
        assert exc_info.value.code == 2

    def test_version_flag(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            parse_args(['--version'])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_unknown_flag(self, capsys):
        with pytest.raises(SystemExit):
            parse_args(['--nope'])


def _write_config(tmp_path, table_dir, **extra) -> str:
    cfg = tmp_path / "config.json"
    cfg.write_text(json.dumps(dict(table_dir=str(table_dir), **extra)))
    return str(cfg)


def test_load_dictionary(table_dir):
    config = dict(DEFAULT_CONFIG, table_dir=str(table_dir))
    d = load_dictionary(config)
    assert d.lookup_chars("abc") == ["測"]


def test_load_dictionary_big(table_dir):
    config = dict(DEFAULT_CONFIG, table_dir=str(table_dir), use_big_char=True)
    assert load_dictionary(config).lookup_chars("abc") == ["測", "𠀀"]


def test_main_runs_console(tmp_path, table_dir, monkeypatch):
    seen = {}

    def fake_run_console(engine, sync_clipboard=False):
        seen['engine'] = engine
        seen['sync'] = sync_clipboard

    monkeypatch.setattr("array30.ui.console.run_console", fake_run_console)
    cfg = _write_config(tmp_path, table_dir, sync_clipboard=True)
    rc = main(['--config', cfg, '--logfile', str(tmp_path / "a.log")])
    assert rc == 0
    assert seen['sync'] is True
    assert seen['engine'].dictionary.lookup_chars("abc") == ["測"]


def test_main_big_flag_selects_big_table(tmp_path, table_dir, monkeypatch):
    seen = {}
    monkeypatch.setattr("array30.ui.console.run_console",
                        lambda engine, sync_clipboard=False: seen.setdefault('engine', engine))
    cfg = _write_config(tmp_path, table_dir)
    assert main(['--big', '--config', cfg, '--logfile', str(tmp_path / "a.log")]) == 0
    assert seen['engine'].dictionary.lookup_chars("abc") == ["測", "𠀀"]


def test_main_missing_tables_is_fatal(tmp_path, capsys):
    cfg = _write_config(tmp_path, tmp_path / "no-tables")
    rc = main(['--config', cfg, '--logfile', str(tmp_path / "a.log")])
    assert rc == 1
    assert "無法載入字表" in capsys.readouterr().err
    assert "Dictionary unavailable" in (tmp_path / "a.log").read_text(encoding="utf-8")


def test_main_frontend_error_returns_1(tmp_path, table_dir, monkeypatch):
    def boom(engine, sync_clipboard=False):
        raise RuntimeError("terminal too small")

    monkeypatch.setattr("array30.ui.console.run_console", boom)
    cfg = _write_config(tmp_path, table_dir)
    assert main(['--config', cfg, '--logfile', str(tmp_path / "a.log")]) == 1
