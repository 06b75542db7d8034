"""Tests for array30.config: configuration loading, validation, ConfigManager."""

from __future__ import annotations

import json
import os

import pytest

from array30.config import (
    DEFAULT_CONFIG,
    ConfigManager,
    _sanitize_json_text,
    load_config,
    resolve_table_paths,
    validate_config,
)


# ------------------------------------------------------------------
# validate_config
# ------------------------------------------------------------------

class TestValidateConfig:
    """validate_config normalises input and rejects invalid values."""

    def test_none_returns_defaults(self):
        assert validate_config(None) == DEFAULT_CONFIG

    def test_empty_dict_returns_defaults(self):
        assert validate_config({}) == DEFAULT_CONFIG

    def test_valid_data_passes(self):
        result = validate_config({
            'debug': True,
            'use_big_char': True,
            'font_size': 24,
            'root_table_position': 'LEFT',
            'table_dir': '/usr/share/array30',
        })
        assert result['debug'] is True
        assert result['font_size'] == 24.0
        assert isinstance(result['font_size'], float)
        assert result['root_table_position'] == 'left'
        assert result['table_dir'] == '/usr/share/array30'

    @pytest.mark.parametrize("key,value,expected", [
        ('font_size', 5, 10.0),
        ('font_size', 100, 72.0),
        ('root_table_scale', 0.01, 0.1),
        ('root_table_scale', 3, 2.0),
        ('window_width', 100, 800),
        ('window_height', 99999, 2160),
    ])
    def test_display_values_are_clamped(self, key, value, expected):
        assert validate_config({key: value})[key] == expected

    @pytest.mark.parametrize("key,value", [
        ('debug', 'yes'),
        ('use_big_char', 1),
        ('sync_clipboard', None),
        ('font_size', 'big'),
        ('font_size', True),
        ('window_width', 'wide'),
        ('table_dir', ''),
        ('phrase_file', 42),
        ('root_table_position', 'middle'),
    ])
    def test_invalid_values(self, key, value):
        with pytest.raises(ValueError, match=key):
            validate_config({key: value})


# ------------------------------------------------------------------
# _sanitize_json_text
# ------------------------------------------------------------------

class TestSanitizeJsonText:

    def test_removes_hash_comments(self):
        text = '{\n  # this is a comment\n  "a": 1\n}'
        assert json.loads(_sanitize_json_text(text)) == {"a": 1}

    def test_removes_slash_comments(self):
        text = '{\n  "a": 1 // inline comment\n}'
        assert json.loads(_sanitize_json_text(text)) == {"a": 1}

    def test_removes_trailing_commas(self):
        text = '{\n  "a": 1,\n  "b": 2,\n}'
        assert json.loads(_sanitize_json_text(text)) == {"a": 1, "b": 2}


# ------------------------------------------------------------------
# load_config
# ------------------------------------------------------------------

class TestLoadConfig:

    def test_nonexistent_file_returns_defaults(self, tmp_path):
        assert load_config(str(tmp_path / "nope.json")) == DEFAULT_CONFIG

    def test_merges_file_over_defaults(self, tmp_path):
        cfg_file = tmp_path / "config.json"
        cfg_file.write_text(json.dumps({"use_big_char": True, "font_size": 30}))
        result = load_config(str(cfg_file))
        assert result['use_big_char'] is True
        assert result['font_size'] == 30.0
        assert result['table_dir'] == DEFAULT_CONFIG['table_dir']

    def test_commented_json(self, tmp_path):
        cfg_file = tmp_path / "config.json"
        cfg_file.write_text('{\n  # tables\n  "table_dir": "/opt/t", // here\n}')
        assert load_config(str(cfg_file))['table_dir'] == "/opt/t"

    def test_invalid_file_falls_back_to_defaults(self, tmp_path, caplog):
        cfg_file = tmp_path / "config.json"
        cfg_file.write_text(json.dumps({"debug": "loud"}))
        assert load_config(str(cfg_file)) == DEFAULT_CONFIG
        assert "Invalid config" in caplog.text

    def test_garbage_file(self, tmp_path):
        cfg_file = tmp_path / "config.json"
        cfg_file.write_text("not json at all {")
        assert load_config(str(cfg_file)) == DEFAULT_CONFIG

    def test_non_object_json(self, tmp_path):
        cfg_file = tmp_path / "config.json"
        cfg_file.write_text("[1, 2]")
        assert load_config(str(cfg_file)) == DEFAULT_CONFIG

    def test_user_config_location(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        user_cfg = tmp_path / ".config" / "array30" / "config.json"
        user_cfg.parent.mkdir(parents=True)
        user_cfg.write_text(json.dumps({"sync_clipboard": True}))
        assert load_config()['sync_clipboard'] is True


# ------------------------------------------------------------------
# resolve_table_paths
# ------------------------------------------------------------------

def test_resolve_table_paths_regular():
    char_file, phrase_file = resolve_table_paths(dict(DEFAULT_CONFIG))
    assert char_file == os.path.join('table', 'cin2', 'ar30-regular-v2023-1.0-20251012.cin2')
    assert phrase_file == os.path.join('table', 'array30-phrase-20210725.txt')


def test_resolve_table_paths_big():
    config = dict(DEFAULT_CONFIG, use_big_char=True, table_dir='/srv/t')
    char_file, _ = resolve_table_paths(config)
    assert char_file == os.path.join('/srv/t', 'cin2', 'ar30-big-v2023-1.0-20251012.cin2')


# ------------------------------------------------------------------
# ConfigManager
# ------------------------------------------------------------------

class TestConfigManager:

    def test_defaults_when_missing(self, tmp_path):
        cm = ConfigManager(str(tmp_path / "config.json"))
        assert cm.get_all() == DEFAULT_CONFIG
        assert cm.config_path == str(tmp_path / "config.json")

    def test_save_and_reload(self, tmp_path):
        path = tmp_path / "sub" / "config.json"
        cm = ConfigManager(str(path))
        cm.set('font_size', 28.0)
        cm.update({'root_table_position': 'down', 'show_root_table': False})
        assert cm.save() is True

        saved = json.loads(path.read_text(encoding="utf-8"))
        assert saved['font_size'] == 28.0
        assert saved['root_table_position'] == 'down'

        other = ConfigManager(str(path))
        assert other.get('show_root_table') is False

    def test_save_rejects_invalid(self, tmp_path):
        path = tmp_path / "config.json"
        cm = ConfigManager(str(path))
        cm.set('debug', 'maybe')
        assert cm.validate() is False
        assert cm.save() is False
        assert not path.exists()

    def test_reset_and_reload(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"font_size": 40}))
        cm = ConfigManager(str(path))
        assert cm.get('font_size') == 40.0
        cm.reset_to_defaults()
        assert cm.get('font_size') == DEFAULT_CONFIG['font_size']
        cm.reload()
        assert cm.get('font_size') == 40.0
        assert cm.validate() is True
