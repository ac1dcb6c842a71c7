"""
Unit tests for the JSON tokenizer.
"""

from pathlib import Path
import warnings

import pytest

from expressive.json import LexError, Token, TokenKind, tokenize
from expressive.json import tokenizer


def kinds(text: str):
    """Helper: token kind names for `text`."""
    return [token.kind.name for token in tokenize(text)]


class TestTokenize:
    """Tests for tokenize()."""

    def test_object(self):
        """Test tokenizing a small object."""
        assert kinds('{"a": 1}') == [
            "LEFT_BRACE", "STRING", "COLON", "INTEGER", "RIGHT_BRACE",
        ]

    def test_array_of_literals(self):
        """Test the keyword literals."""
        assert kinds("[true, false, null]") == [
            "LEFT_BRACKET", "TRUE", "COMMA", "FALSE", "COMMA", "NULL", "RIGHT_BRACKET",
        ]

    def test_whitespace_is_dropped(self):
        """Test whitespace never appears in the token stream."""
        assert kinds(" [ \t1 ,\r\n 2 ] ") == [
            "LEFT_BRACKET", "INTEGER", "COMMA", "INTEGER", "RIGHT_BRACKET",
        ]

    def test_empty_input(self):
        """Test empty input yields no tokens."""
        assert list(tokenize("")) == []

    def test_adjacent_keywords(self):
        """Test keywords need no separator."""
        assert kinds("truefalse") == ["TRUE", "FALSE"]

    def test_offsets(self):
        """Test token offsets point into the source."""
        tokens = list(tokenize("[10, 2]"))

        assert tokens[0] == Token(TokenKind.LEFT_BRACKET, "[", 0)
        assert tokens[1] == Token(TokenKind.INTEGER, "10", 1)
        assert tokens[3] == Token(TokenKind.INTEGER, "2", 5)


class TestNumbers:
    """Tests for INTEGER and FLOAT rules."""

    def test_integer(self):
        """Test digits without a dot are an INTEGER."""
        token = next(tokenize("123"))
        assert token.is_(TokenKind.INTEGER)
        assert token.text == "123"

    @pytest.mark.parametrize("text", ["1.5", "1.", ".5", "."])
    def test_float_forms(self, text: str):
        """Test either side of the dot may be empty."""
        token = next(tokenize(text))
        assert token.kind is TokenKind.FLOAT
        assert token.text == text

    def test_float_wins_over_integer(self):
        """Test FLOAT is tried first, so "3.25" is one token."""
        assert kinds("3.25") == ["FLOAT"]

    def test_negative_number_does_not_lex(self):
        """Test "-" is not part of any rule."""
        with pytest.raises(LexError) as exc_info:
            list(tokenize("-1"))
        assert exc_info.value.offset == 0

    def test_lex_error_offset(self):
        """Test the error reports where scanning stopped."""
        with pytest.raises(LexError) as exc_info:
            list(tokenize("[ -1 ]"))
        assert exc_info.value.offset == 2
        assert str(exc_info.value) == "no token recognized at 2"


class TestStrings:
    """Tests for STRING tokens."""

    def test_quotes_are_stripped(self):
        """Test STRING text excludes the quotes."""
        token = next(tokenize('"hello world"'))
        assert token.kind is TokenKind.STRING
        assert token.text == "hello world"

    def test_offset_points_inside_quotes(self):
        """Test STRING offset is the first character after the quote."""
        token = next(tokenize('  "ab"'))
        assert token.offset == 3

    def test_empty_string(self):
        """Test "" is an empty STRING."""
        assert next(tokenize('""')).text == ""

    def test_no_escape_sequences(self):
        """Test a backslash does not protect a quote."""
        tokens = list(tokenize('"a\\" "b"'))
        assert tokens[0].text == "a\\"
        assert tokens[1].text == "b"

    def test_unterminated_string(self):
        """Test a missing closing quote."""
        with pytest.raises(LexError):
            list(tokenize('"abc'))


class TestLaziness:
    """tokenize() only scans as far as it is asked to."""

    def test_error_after_first_token_is_deferred(self):
        """Test a bad character is only reported when reached."""
        tokens = tokenize("[1, @")

        assert next(tokens).kind is TokenKind.LEFT_BRACKET
        assert next(tokens).kind is TokenKind.INTEGER
        assert next(tokens).kind is TokenKind.COMMA
        with pytest.raises(LexError) as exc_info:
            next(tokens)
        assert exc_info.value.offset == 4

    def test_restart_by_tokenizing_again(self):
        """Test tokenizing the same text twice gives the same tokens."""
        text = "[1]"
        assert list(tokenize(text)) == list(tokenize(text))


class TestTokenKind:
    """Tests for TokenKind ordering."""

    def test_declaration_order(self):
        """Test order follows the enum declaration."""
        assert TokenKind.NULL.order == 0
        assert TokenKind.FLOAT.order < TokenKind.INTEGER.order
        assert TokenKind.WHITESPACE.order == len(TokenKind) - 1

    def test_module_compiles_without_warnings(self):
        """Test the rule table in the module docstring has no invalid escapes."""
        source = Path(tokenizer.__file__).read_text(encoding="utf-8")

        with warnings.catch_warnings():
            warnings.simplefilter("error")
            compile(source, tokenizer.__file__, "exec")
