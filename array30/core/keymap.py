"""Array30 key layout: keyboard char ↔ code symbol mapping.

The 30 Array30 keys are the 26 Latin letters plus ``. / ; ,``.  Each key
sits at a numbered column (1–0) and a row (``^`` top, ``-`` home,
``v`` bottom) of the Array30 chart; that label is kept as ``position``
for front-ends that draw the root table.
"""

from __future__ import annotations

from enum import Enum

PHRASE_MARKER = "'"
MAX_CODE_LENGTH = 4


class Array30Key(Enum):
    # member = (code symbol, chart position)
    A = ("a", "1-")
    B = ("b", "5v")
    C = ("c", "3v")
    D = ("d", "3-")
    E = ("e", "3^")
    F = ("f", "4-")
    G = ("g", "5-")
    H = ("h", "6-")
    I = ("i", "8^")
    J = ("j", "7-")
    K = ("k", "8-")
    L = ("l", "9-")
    M = ("m", "7v")
    N = ("n", "6v")
    O = ("o", "9^")
    P = ("p", "0^")
    Q = ("q", "1^")
    R = ("r", "4^")
    S = ("s", "2-")
    T = ("t", "5^")
    U = ("u", "7^")
    V = ("v", "4v")
    W = ("w", "2^")
    X = ("x", "2v")
    Y = ("y", "6^")
    Z = ("z", "1v")
    PERIOD = (".", "9v")
    SLASH = ("/", "0v")
    SEMICOLON = (";", "0-")
    COMMA = (",", "8v")

    @classmethod
    def from_char(cls, ch: str) -> "Array30Key | None":
        """Return the key typed by *ch*, or None if *ch* is not an Array30 key.

        Letters are case-insensitive.  The phrase marker ``'`` shares the
        SLASH key, so once stored in a code it reads as ``/``.
        """
        if ch == PHRASE_MARKER:
            return cls.SLASH
        return _CHAR_TO_KEY.get(ch.lower()) if len(ch) == 1 else None

    def code_char(self) -> str:
        """Symbol used when building a lookup code."""
        return self.value[0]

    @property
    def position(self) -> str:
        return self.value[1]


_CHAR_TO_KEY: dict[str, Array30Key] = {key.code_char(): key for key in Array30Key}


def is_code_key(ch: str) -> bool:
    """True if *ch* maps to one of the 30 code symbols (marker included)."""
    return Array30Key.from_char(ch) is not None


CHART_COLUMNS = "1234567890"
CHART_ROWS = "^-v"


def layout_chart() -> list[list[Array30Key]]:
    """The 30 keys arranged as the Array30 chart: 3 rows × 10 columns."""
    by_position = {key.position: key for key in Array30Key}
    return [[by_position[col + row] for col in CHART_COLUMNS] for row in CHART_ROWS]
