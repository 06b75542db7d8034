"""InputEngine: turns keystrokes into candidate lookups and commits."""

from __future__ import annotations

import logging
from dataclasses import replace
from enum import Enum, auto
from typing import TYPE_CHECKING

import array30.log  # registers TRACE level and logger.trace()
from array30.core.keymap import MAX_CODE_LENGTH, PHRASE_MARKER, Array30Key
from array30.core.state import Candidate, InputMode, InputState

if TYPE_CHECKING:
    from array30.dictionary import Dictionary

logger = logging.getLogger(__name__)

PAGE_SIZE = 9

BACKSPACE_KEYS = ("\x08", "\x7f")
ESCAPE_KEY = "\x1b"
COMMIT_KEYS = ("\n", "\r", " ")
SELECT_KEYS = "1234567890"


class KeyResult(Enum):
    NO_CHANGE = auto()
    # front-end should redraw
    NEED_UPDATE = auto()
    # output changed (front-end may sync the clipboard)
    COMMITTED = auto()


class InputEngine:
    """Owns one InputState and the candidate list computed for it.

    Keys are fed one at a time through ``handle_key``; the front-end then
    reads ``state`` and ``current_page_candidates()`` to redraw.
    """

    def __init__(self, dictionary: "Dictionary", page_size: int = PAGE_SIZE):
        self.dictionary = dictionary
        self.page_size = page_size
        self._state = InputState()
        self._candidates: list[Candidate] = []
        self._page_index = 0

    # -- read-only views ---------------------------------------------------

    @property
    def state(self) -> InputState:
        """Snapshot of the input state; mutating it does not affect the engine."""
        return replace(self._state)

    @property
    def candidates(self) -> tuple[Candidate, ...]:
        return tuple(self._candidates)

    @property
    def page_index(self) -> int:
        return self._page_index

    @property
    def page_count(self) -> int:
        return -(-len(self._candidates) // self.page_size)

    def current_page_candidates(self) -> list[Candidate]:
        start = self._page_index * self.page_size
        return self._candidates[start:start + self.page_size]

    def get_output_text(self) -> str:
        return self._state.output

    # -- dictionary ----------------------------------------------------------

    def load_dict(self, dictionary: "Dictionary") -> None:
        """Swap the dictionary; candidates computed from the old one are dropped."""
        self.dictionary = dictionary
        self.update_candidates()

    # -- key dispatch --------------------------------------------------------

    def handle_key(self, key: str) -> KeyResult:
        logger.trace("key %r (code=%r, mode=%s)", key, self._state.current_code,  # type: ignore[attr-defined]
                     self._state.mode.name)

        if not key:
            return KeyResult.NO_CHANGE
        if key == PHRASE_MARKER:
            return self._on_phrase_marker()
        if key in BACKSPACE_KEYS:
            return self._on_backspace()
        if key == ESCAPE_KEY:
            self._state.clear_composing()
            self._clear_candidates()
            return KeyResult.NEED_UPDATE
        if key in COMMIT_KEYS:
            return self._on_commit_key()
        if len(key) == 1 and key in SELECT_KEYS:
            return self._on_digit(key)

        code_key = Array30Key.from_char(key)
        if code_key is not None:
            return self._on_code_key(key, code_key)

        return self._on_literal(key)

    def _on_phrase_marker(self) -> KeyResult:
        if 1 <= len(self._state.current_code) <= MAX_CODE_LENGTH:
            if self._state.set_phrase_mode():
                logger.debug("Phrase mode on (code=%r)", self._state.current_code)
            self.update_candidates()
        # marker on an empty code is ignored but still triggers a redraw
        return KeyResult.NEED_UPDATE

    def _on_backspace(self) -> KeyResult:
        self._clear_candidates()
        if self._state.backspace():
            self.update_candidates()
        return KeyResult.NEED_UPDATE

    def _on_commit_key(self) -> KeyResult:
        if self._candidates:
            self.select_candidate(0)
            return KeyResult.NEED_UPDATE
        if self._state.current_code:
            # pending code without candidates: nothing to commit
            return KeyResult.NEED_UPDATE
        return KeyResult.NO_CHANGE

    def _on_digit(self, digit: str) -> KeyResult:
        if not self._candidates:
            self._state.commit_direct(digit)
            return KeyResult.COMMITTED
        index = 9 if digit == "0" else int(digit) - 1
        if self.select_candidate(index):
            return KeyResult.COMMITTED
        return KeyResult.NEED_UPDATE

    def _on_code_key(self, key: str, code_key: Array30Key) -> KeyResult:
        self._clear_candidates()
        self._state.add_key(key)
        if not self._state.push_code(code_key.code_char()):
            logger.trace("Code full, %r not appended", key)  # type: ignore[attr-defined]
        self.update_candidates()
        return KeyResult.NEED_UPDATE

    def _on_literal(self, key: str) -> KeyResult:
        if self._state.current_code:
            logger.debug("Discarding code %r before literal %r", self._state.current_code, key)
            self._state.clear_composing()
            self._clear_candidates()
        self._state.commit_direct(key)
        return KeyResult.COMMITTED

    # -- candidates ----------------------------------------------------------

    def _clear_candidates(self) -> None:
        self._candidates = []
        self._page_index = 0

    def update_candidates(self) -> None:
        """Recompute the candidate list for the current code.

        In phrase mode the phrase table wins outright; the character table
        is consulted only when it has nothing (or in normal mode).
        """
        self._clear_candidates()
        code = self._state.current_code
        if not code:
            return

        if self._state.mode is InputMode.PHRASE_INPUT:
            phrases = self.dictionary.lookup_phrases(code) or []
            self._candidates = [Candidate.phrase(text, code) for text in phrases]

        if not self._candidates:
            chars = self.dictionary.lookup_chars(code) or []
            self._candidates = [Candidate.char(text, code) for text in chars]

        logger.trace("Candidates for %r: %d", code, len(self._candidates))  # type: ignore[attr-defined]

    def select_candidate(self, index: int) -> bool:
        """Commit the candidate at *index* on the current page."""
        if index < 0 or index >= self.page_size:
            return False
        actual_index = self._page_index * self.page_size + index
        if actual_index >= len(self._candidates):
            return False

        candidate = self._candidates[actual_index]
        self._state.composing = candidate.text
        self._state.commit_composing()
        self._clear_candidates()
        logger.debug("Committed %r (code=%r, phrase=%s)", candidate.text, candidate.code,
                     candidate.is_phrase)
        return True

    # -- paging ----------------------------------------------------------------

    def next_page(self) -> bool:
        if self._page_index + 1 < self.page_count:
            self._page_index += 1
            return True
        return False

    def prev_page(self) -> bool:
        if self._page_index > 0:
            self._page_index -= 1
            return True
        return False

    # -- output ----------------------------------------------------------------

    def clear_output(self) -> None:
        """Clear everything, output included."""
        self._state.clear_all()
        self._clear_candidates()
