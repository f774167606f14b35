"""Classification of source characters into the lexical classes used by the scanners."""

from __future__ import annotations

import string
from enum import Enum, auto


class CharCode(Enum):
    """Lexical class of a single source character."""

    SPACE = auto()
    LETTER = auto()
    DIGIT = auto()
    PLUS = auto()
    MINUS = auto()
    TIMES = auto()
    SLASH = auto()
    LT = auto()
    GT = auto()
    EXCLAMATION = auto()
    EQ = auto()
    COMMA = auto()
    PERIOD = auto()
    COLON = auto()
    SEMICOLON = auto()
    SINGLEQUOTE = auto()
    LPAR = auto()
    RPAR = auto()
    UNKNOWN = auto()


_PUNCTUATION = {
    "!": CharCode.EXCLAMATION,
    "'": CharCode.SINGLEQUOTE,
    "(": CharCode.LPAR,
    ")": CharCode.RPAR,
    "*": CharCode.TIMES,
    "+": CharCode.PLUS,
    ",": CharCode.COMMA,
    "-": CharCode.MINUS,
    ".": CharCode.PERIOD,
    "/": CharCode.SLASH,
    ":": CharCode.COLON,
    ";": CharCode.SEMICOLON,
    "<": CharCode.LT,
    "=": CharCode.EQ,
    ">": CharCode.GT,
}


def _build_table() -> dict[str, CharCode]:
    table: dict[str, CharCode] = {}
    for ch in "\t\n\v\f\r ":
        table[ch] = CharCode.SPACE
    for ch in string.ascii_letters:
        table[ch] = CharCode.LETTER
    for ch in string.digits:
        table[ch] = CharCode.DIGIT
    table.update(_PUNCTUATION)
    return table


_TABLE = _build_table()


def char_code(ch: str | int | None) -> CharCode:
    """Return the lexical class of a character.

    ``ch`` may be a one-character string, a character code, or ``None``
    (end of input), which is classified as ``UNKNOWN``.
    """
    if ch is None:
        return CharCode.UNKNOWN
    if isinstance(ch, int):
        if not 0 <= ch < 256:
            return CharCode.UNKNOWN
        ch = chr(ch)
    if len(ch) != 1:
        raise ValueError(f"expected a single character, got {ch!r}")
    return _TABLE.get(ch, CharCode.UNKNOWN)