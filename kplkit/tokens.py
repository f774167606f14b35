"""Token types, keywords and the token record produced by the scanners."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

MAX_IDENT_LEN = 15


class TokenType(Enum):
    """Kinds of lexical tokens of the KPL language."""

    TK_NONE = auto()
    TK_IDENT = auto()
    TK_NUMBER = auto()
    TK_CHAR = auto()
    TK_EOF = auto()

    KW_PROGRAM = auto()
    KW_CONST = auto()
    KW_TYPE = auto()
    KW_VAR = auto()
    KW_INTEGER = auto()
    KW_CHAR = auto()
    KW_ARRAY = auto()
    KW_OF = auto()
    KW_FUNCTION = auto()
    KW_PROCEDURE = auto()
    KW_BEGIN = auto()
    KW_END = auto()
    KW_CALL = auto()
    KW_IF = auto()
    KW_THEN = auto()
    KW_ELSE = auto()
    KW_WHILE = auto()
    KW_DO = auto()
    KW_FOR = auto()
    KW_TO = auto()

    SB_SEMICOLON = auto()
    SB_COLON = auto()
    SB_PERIOD = auto()
    SB_COMMA = auto()
    SB_ASSIGN = auto()
    SB_EQ = auto()
    SB_NEQ = auto()
    SB_LT = auto()
    SB_LE = auto()
    SB_GT = auto()
    SB_GE = auto()
    SB_PLUS = auto()
    SB_MINUS = auto()
    SB_TIMES = auto()
    SB_SLASH = auto()
    SB_LPAR = auto()
    SB_RPAR = auto()
    SB_LSEL = auto()
    SB_RSEL = auto()


KEYWORDS: dict[str, TokenType] = {
    t.name[3:]: t for t in TokenType if t.name.startswith("KW_")
}

_SYMBOL_TEXT = {
    TokenType.SB_SEMICOLON: ";",
    TokenType.SB_COLON: ":",
    TokenType.SB_PERIOD: ".",
    TokenType.SB_COMMA: ",",
    TokenType.SB_ASSIGN: ":=",
    TokenType.SB_EQ: "=",
    TokenType.SB_NEQ: "!=",
    TokenType.SB_LT: "<",
    TokenType.SB_LE: "<=",
    TokenType.SB_GT: ">",
    TokenType.SB_GE: ">=",
    TokenType.SB_PLUS: "+",
    TokenType.SB_MINUS: "-",
    TokenType.SB_TIMES: "*",
    TokenType.SB_SLASH: "/",
    TokenType.SB_LPAR: "(",
    TokenType.SB_RPAR: ")",
    TokenType.SB_LSEL: "(.",
    TokenType.SB_RSEL: ".)",
}

_SPECIAL_TEXT = {
    TokenType.TK_NONE: "None",
    TokenType.TK_IDENT: "an identification",
    TokenType.TK_NUMBER: "a number",
    TokenType.TK_CHAR: "a constant char",
    TokenType.TK_EOF: "end of file",
}


def check_keyword(text: str, case_insensitive: bool = False) -> TokenType | None:
    """Return the keyword token type spelled by ``text``, or ``None``.

    Keywords are upper case; with ``case_insensitive`` the text is
    upper-cased before comparison.
    """
    if case_insensitive:
        text = text.upper()
    return KEYWORDS.get(text)


def token_to_string(token_type: TokenType) -> str:
    """Return the human-readable name of a token type used in diagnostics."""
    if token_type in _SPECIAL_TEXT:
        return _SPECIAL_TEXT[token_type]
    if token_type in _SYMBOL_TEXT:
        return f"'{_SYMBOL_TEXT[token_type]}'"
    if token_type.name.startswith("KW_"):
        return f"keyword {token_type.name[3:]}"
    return ""


@dataclass
class Token:
    """A scanned token with its position in the source."""

    token_type: TokenType
    line: int
    col: int
    string: str = ""
    value: int = 0

    def describe(self) -> str:
        """Return the ``line-col:KIND`` listing line for this token."""
        kind = self.token_type
        if kind in (TokenType.TK_IDENT, TokenType.TK_NUMBER):
            body = f"{kind.name}({self.string})"
        elif kind is TokenType.TK_CHAR:
            body = f"{kind.name}('{self.string}')"
        else:
            body = kind.name
        return f"{self.line}-{self.col}:{body}"