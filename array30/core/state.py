"""Input state definitions: InputMode, InputState and Candidate."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from array30.core.keymap import MAX_CODE_LENGTH, PHRASE_MARKER


class InputMode(Enum):
    NORMAL = auto()
    # ' was pressed after 1-4 code symbols; the phrase table is searched first
    PHRASE_INPUT = auto()


HINTS: dict[InputMode, str] = {
    InputMode.NORMAL: "提示：按 ' 進入詞彙輸入；空白鍵上第一候選；數字鍵選字；Esc 清空",
    InputMode.PHRASE_INPUT: "詞彙模式：輸入四碼後會自動查找詞庫",
}


@dataclass
class InputState:
    """Text buffers of one input session.

    ``raw_keys``      every keystroke since the last clear, marker included
    ``current_code``  lookup key, never longer than MAX_CODE_LENGTH
    ``composing``     resolved candidate waiting to be committed
    ``output``        everything committed so far
    """

    raw_keys: str = ""
    composing: str = ""
    output: str = ""
    mode: InputMode = InputMode.NORMAL
    current_code: str = ""
    has_phrase_marker: bool = False

    def add_key(self, key: str) -> None:
        self.raw_keys += key

    def set_phrase_mode(self) -> bool:
        """Enter phrase mode and record the marker.

        Returns False (and changes nothing) when already in phrase mode so
        the marker is never recorded twice.
        """
        if self.mode is InputMode.PHRASE_INPUT:
            return False
        self.mode = InputMode.PHRASE_INPUT
        self.has_phrase_marker = True
        self.add_key(PHRASE_MARKER)
        return True

    def update_code(self, code: str) -> None:
        self.current_code = code[:MAX_CODE_LENGTH]

    def push_code(self, symbol: str) -> bool:
        """Append one symbol to the code unless it is already full."""
        if len(self.current_code) >= MAX_CODE_LENGTH:
            return False
        self.current_code += symbol
        return True

    def backspace(self) -> bool:
        """Drop the last code symbol and the last raw key together.

        Removing the marker from ``raw_keys`` leaves phrase mode.  Returns
        False when the code is already empty; nothing is touched then.
        """
        if not self.current_code:
            return False
        self.current_code = self.current_code[:-1]
        if not self.raw_keys:
            return True
        removed = self.raw_keys[-1]
        self.raw_keys = self.raw_keys[:-1]
        if removed == PHRASE_MARKER:
            self.mode = InputMode.NORMAL
            self.has_phrase_marker = False
        return True

    def clear_composing(self) -> None:
        """Abort the current entry; output is kept."""
        self.raw_keys = ""
        self.composing = ""
        self.current_code = ""
        self.has_phrase_marker = False
        self.mode = InputMode.NORMAL

    def clear_all(self) -> None:
        self.clear_composing()
        self.output = ""

    def commit_composing(self) -> None:
        if self.composing:
            self.output += self.composing
            self.clear_composing()

    def commit_direct(self, text: str) -> None:
        self.output += text

    def get_hint(self) -> str:
        return HINTS[self.mode]


@dataclass(frozen=True)
class Candidate:
    text: str
    code: str
    is_phrase: bool = False

    @classmethod
    def char(cls, text: str, code: str) -> "Candidate":
        return cls(text, code, False)

    @classmethod
    def phrase(cls, text: str, code: str) -> "Candidate":
        return cls(text, code, True)
