import pytest

from kplkit.tokens import (
    KEYWORDS,
    Token,
    TokenType,
    check_keyword,
    token_to_string,
)


def test_every_keyword_is_recognised():
    for text, token_type in KEYWORDS.items():
        assert check_keyword(text) is token_type
        assert token_type.name == "KW_" + text


def test_keyword_table_covers_all_keyword_types():
    kw_types = {t for t in TokenType if t.name.startswith("KW_")}
    assert set(KEYWORDS.values()) == kw_types


def test_exact_match_is_case_sensitive():
    assert check_keyword("program") is None
    assert check_keyword("PROGRAM") is TokenType.KW_PROGRAM


def test_case_insensitive_match():
    assert check_keyword("program", case_insensitive=True) is TokenType.KW_PROGRAM
    assert check_keyword("BeGiN", True) is TokenType.KW_BEGIN


@pytest.mark.parametrize("text", ["", "PROGRAMS", "PROG", "X", "WHILEX"])
def test_non_keywords(text):
    assert check_keyword(text) is None
    assert check_keyword(text, case_insensitive=True) is None


@pytest.mark.parametrize(
    "token_type, expected",
    [
        (TokenType.TK_NONE, "None"),
        (TokenType.TK_IDENT, "an identification"),
        (TokenType.TK_NUMBER, "a number"),
        (TokenType.TK_CHAR, "a constant char"),
        (TokenType.TK_EOF, "end of file"),
        (TokenType.KW_PROGRAM, "keyword PROGRAM"),
        (TokenType.KW_TO, "keyword TO"),
        (TokenType.SB_SEMICOLON, "';'"),
        (TokenType.SB_ASSIGN, "':='"),
        (TokenType.SB_NEQ, "'!='"),
        (TokenType.SB_LSEL, "'(.'"),
        (TokenType.SB_RSEL, "'.)'"),
    ],
)
def test_token_to_string(token_type, expected):
    assert token_to_string(token_type) == expected


def test_every_token_type_has_a_description():
    assert all(token_to_string(t) for t in TokenType)


def test_describe_identifier():
    token = Token(TokenType.TK_IDENT, 3, 7, string="ABC")
    assert token.describe() == "3-7:TK_IDENT(ABC)"


def test_describe_char_constant():
    token = Token(TokenType.TK_CHAR, 2, 4, string="a", value=ord("a"))
    assert token.describe() == "2-4:TK_CHAR('a')"


def test_describe_number():
    token = Token(TokenType.TK_NUMBER, 1, 5, string="42", value=42)
    assert token.describe() == "1-5:TK_NUMBER(42)"


def test_describe_keyword_and_symbol_use_type_name():
    for token_type in (TokenType.KW_BEGIN, TokenType.SB_PLUS, TokenType.TK_EOF):
        token = Token(token_type, 9, 1)
        assert token.describe() == f"9-1:{token_type.name}"