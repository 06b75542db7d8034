"""Configuration loader and validator for Array30.

Provides ``load_config(path)`` which reads a JSON config (with
comment and trailing-comma tolerant sanitizer) and merges user
overrides from ``~/.config/array30/config.json``.

Also provides ``validate_config(conf)`` which normalizes and
validates config keys, raising ``ValueError`` on invalid values.
Numeric display settings are clamped into range rather than rejected.
"""

from __future__ import annotations

import json
import logging
import os
import re

from array30.platform.persistence import save_json

logger = logging.getLogger(__name__)

USER_CONFIG_PATH = '~/.config/array30/config.json'

ROOT_TABLE_POSITIONS = ('up', 'down', 'left', 'right')

# Single source of truth for default configuration
DEFAULT_CONFIG: dict = {
    'debug': False,
    'table_dir': 'table',
    'phrase_file': 'array30-phrase-20210725.txt',
    'char_file': 'cin2/ar30-regular-v2023-1.0-20251012.cin2',
    'big_char_file': 'cin2/ar30-big-v2023-1.0-20251012.cin2',
    'use_big_char': False,
    'sync_clipboard': False,
    'font_size': 20.0,
    'window_width': 1600,
    'window_height': 900,
    'show_root_table': True,
    'root_table_scale': 0.5,
    'root_table_position': 'up',
}

_BOOL_KEYS = ('debug', 'use_big_char', 'sync_clipboard', 'show_root_table')
_PATH_KEYS = ('table_dir', 'phrase_file', 'char_file', 'big_char_file')
# key -> (type, lower bound, upper bound)
_CLAMPED_KEYS: dict[str, tuple[type, float, float]] = {
    'font_size': (float, 10.0, 72.0),
    'window_width': (int, 800, 3840),
    'window_height': (int, 600, 2160),
    'root_table_scale': (float, 0.1, 2.0),
}


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------

def _sanitize_json_text(s: str) -> str:
    """Remove ``#``/``//`` comments and trailing commas from JSON-like text."""
    # Hash-style line comments
    s = re.sub(r"^[ \t]*#.*$", "", s, flags=re.MULTILINE)
    # C++-style line comments (not inside "http://..."-like values)
    s = re.sub(r"(?<!:)//.*$", "", s, flags=re.MULTILINE)
    # Trailing commas before } or ]
    s = re.sub(r",[ \t\r\n]+(\}|\])", r"\1", s)
    return s


def _clamp(key: str, raw) -> float | int:
    kind, lo, hi = _CLAMPED_KEYS[key]
    if isinstance(raw, bool):
        raise ValueError(f"Invalid '{key}': {raw}")
    try:
        value = kind(raw)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid '{key}': {raw}")
    return kind(min(max(value, lo), hi))


# ------------------------------------------------------------------
# Validation
# ------------------------------------------------------------------

def validate_config(conf: dict | None) -> dict:
    """Validate and normalize configuration dictionary.

    Returns a normalized dict with all expected keys.
    Raises ``ValueError`` on invalid values.
    """
    if conf is None:
        conf = {}

    out = dict(DEFAULT_CONFIG)

    for key in _BOOL_KEYS:
        value = conf.get(key, out[key])
        if not isinstance(value, bool):
            raise ValueError(f"Invalid '{key}': must be boolean")
        out[key] = value

    for key in _PATH_KEYS:
        value = conf.get(key, out[key])
        if not isinstance(value, str) or not value:
            raise ValueError(f"Invalid '{key}': must be a non-empty string")
        out[key] = value

    for key in _CLAMPED_KEYS:
        out[key] = _clamp(key, conf.get(key, out[key]))

    pos = conf.get('root_table_position', out['root_table_position'])
    if not isinstance(pos, str) or pos.lower() not in ROOT_TABLE_POSITIONS:
        raise ValueError(
            f"Invalid 'root_table_position': {pos!r} (must be one of {', '.join(ROOT_TABLE_POSITIONS)})"
        )
    out['root_table_position'] = pos.lower()

    return out


def _read_and_merge(path: str, target_config: dict) -> bool:
    """Read a JSON file, validate, and merge into *target_config*.

    Returns True on success, False on any error (target left untouched).
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            raw = f.read()
    except OSError as exc:
        logger.warning("Cannot read config %s: %s", path, exc)
        return False

    try:
        cfg = json.loads(raw)
    except json.JSONDecodeError:
        try:
            cfg = json.loads(_sanitize_json_text(raw))
        except json.JSONDecodeError as exc:
            logger.warning("JSON parse error in %s: %s", path, exc)
            return False

    if not isinstance(cfg, dict):
        logger.warning("Invalid config %s: top-level value must be an object", path)
        return False

    try:
        validated = validate_config(cfg)
    except ValueError as verr:
        logger.warning("Invalid config %s: %s", path, verr)
        return False

    # Only override keys explicitly present in source
    for k in cfg:
        if k in validated:
            target_config[k] = validated[k]
        else:
            logger.debug("Unknown config key %r in %s ignored", k, path)
    return True


# ------------------------------------------------------------------
# Top-level loader
# ------------------------------------------------------------------

def load_config(config_path: str | None = None) -> dict:
    """Load and merge configuration.

    If *config_path* is given, uses only that file (returns defaults if
    the file does not exist).  Otherwise falls back to
    ``~/.config/array30/config.json``.

    Returns the effective configuration dict (always has all default keys).
    """
    config = dict(DEFAULT_CONFIG)
    path = config_path if config_path is not None else os.path.expanduser(USER_CONFIG_PATH)
    if os.path.exists(path):
        _read_and_merge(path, config)
    return config


def resolve_table_paths(config: dict) -> tuple[str, str]:
    """Return (char_file, phrase_file) with ``table_dir`` applied."""
    table_dir = os.path.expanduser(config['table_dir'])
    char_key = 'big_char_file' if config.get('use_big_char') else 'char_file'
    return (
        os.path.join(table_dir, config[char_key]),
        os.path.join(table_dir, config['phrase_file']),
    )


# ------------------------------------------------------------------
# ConfigManager
# ------------------------------------------------------------------

class ConfigManager:
    """Settings store used by the window front-end: load, edit, save."""

    def __init__(self, config_path: str | None = None):
        self._config_path = config_path or os.path.expanduser(USER_CONFIG_PATH)
        self._config: dict = load_config(self._config_path)

    def reload(self) -> None:
        self._config = load_config(self._config_path)

    def save(self, target_path: str | None = None) -> bool:
        """Validate and atomically save configuration. Returns True on success."""
        save_path = target_path or self._config_path
        try:
            data = validate_config(self._config)
            save_json(save_path, data)
        except (OSError, ValueError) as exc:
            logger.error("Cannot save config to %s: %s", save_path, exc)
            return False
        self._config = data
        return True

    def get(self, key: str, default=None):
        return self._config.get(key, default)

    def set(self, key: str, value) -> None:
        self._config[key] = value

    def update(self, updates: dict) -> None:
        self._config.update(updates)

    def get_all(self) -> dict:
        return dict(self._config)

    def reset_to_defaults(self) -> None:
        self._config = dict(DEFAULT_CONFIG)

    def validate(self) -> bool:
        """True if the current values pass ``validate_config``."""
        try:
            validate_config(self._config)
            return True
        except ValueError:
            return False

    @property
    def config_path(self) -> str:
        return self._config_path
