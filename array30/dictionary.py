"""Dictionary: Array30 character and phrase tables.

Two independent tables map a code (1–4 symbols) to candidate strings:

* character table, loaded from a ``.cin2``/``.cin`` file (only the
  ``%chardef begin`` … ``%chardef end`` block is read)
* phrase table, loaded from a tab-separated ``code<TAB>phrase`` file

Candidates keep the order in which they appear in the files.
"""

from __future__ import annotations

import logging
import os
from typing import Iterable

import array30.log  # registers logger.trace()

logger = logging.getLogger(__name__)

CHARDEF_BEGIN = "%chardef begin"
CHARDEF_END = "%chardef end"


class DictionaryUnavailableError(OSError):
    """A table file could not be read; fatal at startup."""

    def __init__(self, path: str, reason: object):
        super().__init__(f"Cannot load table {path}: {reason}")
        self.path = path
        self.reason = reason


def _split_entry(line: str) -> tuple[str, str] | None:
    """Split ``code<sep>text``; tab is preferred, any whitespace accepted."""
    if "\t" in line:
        code, _, text = line.partition("\t")
    else:
        parts = line.split(None, 1)
        if len(parts) != 2:
            return None
        code, text = parts
    code, text = code.strip(), text.strip()
    if not code or not text:
        return None
    return code, text


def _read_lines(path: str) -> Iterable[str]:
    try:
        with open(path, encoding="utf-8") as f:
            # materialised so read errors surface here, not mid-parse
            return f.read().splitlines()
    except (OSError, UnicodeDecodeError) as exc:
        raise DictionaryUnavailableError(os.fspath(path), exc) from exc


class Dictionary:
    """Exact-match lookup over the character and phrase tables."""

    def __init__(self):
        self.char_table: dict[str, list[str]] = {}
        self.phrase_table: dict[str, list[str]] = {}

    # -- building ----------------------------------------------------------

    def add_char(self, code: str, text: str) -> None:
        self.char_table.setdefault(code, []).append(text)

    def add_phrase(self, code: str, text: str) -> None:
        self.phrase_table.setdefault(code, []).append(text)

    def load_cin2_file(self, path: str) -> int:
        """Load the character table from a cin2 file. Returns entries added."""
        added = 0
        in_chardef = False
        for raw in _read_lines(path):
            line = raw.strip()
            if line == CHARDEF_BEGIN:
                in_chardef = True
                continue
            if line == CHARDEF_END:
                in_chardef = False
                continue
            if not in_chardef or not line or line.startswith("#"):
                continue
            entry = _split_entry(line)
            if entry is None:
                logger.trace("cin2: skipped malformed line %r", raw)  # type: ignore[attr-defined]
                continue
            self.add_char(*entry)
            added += 1
        logger.debug("Loaded %d char entries from %s", added, path)
        return added

    def load_phrase_file(self, path: str) -> int:
        """Load the phrase table from a ``code<TAB>phrase`` file. Returns entries added."""
        added = 0
        for raw in _read_lines(path):
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            entry = _split_entry(line)
            if entry is None:
                logger.trace("phrase: skipped malformed line %r", raw)  # type: ignore[attr-defined]
                continue
            self.add_phrase(*entry)
            added += 1
        logger.debug("Loaded %d phrase entries from %s", added, path)
        return added

    @classmethod
    def from_files(cls, char_file: str, phrase_file: str) -> "Dictionary":
        """Build a dictionary from both table files.

        Raises DictionaryUnavailableError if either file cannot be read.
        """
        dictionary = cls()
        dictionary.load_phrase_file(phrase_file)
        dictionary.load_cin2_file(char_file)
        return dictionary

    # -- lookup ------------------------------------------------------------

    def lookup_chars(self, code: str) -> list[str] | None:
        return self.char_table.get(code)

    def lookup_phrases(self, code: str) -> list[str] | None:
        return self.phrase_table.get(code)

    def has_code(self, code: str) -> bool:
        return code in self.char_table or code in self.phrase_table

    def stats(self) -> tuple[int, int]:
        """(number of char codes, number of phrase codes)"""
        return len(self.char_table), len(self.phrase_table)
