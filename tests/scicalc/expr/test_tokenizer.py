"""
Tests for the calculator tokenizer.
"""

import pytest

from scicalc.expr import ErrorKind, ExpressionLimits, LexError, LimitExceededError, tokenize
from scicalc.expr.tokenizer import TokenType


def token_types(source: str) -> list:
    return [t.type for t in tokenize(source)[:-1]]


class TestNumbers:
    """Tests for numeric literal tokenization."""

    def test_tokenizes_integer_literals(self):
        tokens = tokenize("42")
        assert len(tokens) == 2
        assert tokens[0].type == TokenType.NUMBER
        assert tokens[0].value == "42"
        assert tokens[0].position == 0
        assert tokens[1].type == TokenType.EOF

    def test_tokenizes_decimal_literals(self):
        tokens = tokenize("3.14159")
        assert tokens[0].type == TokenType.NUMBER
        assert tokens[0].value == "3.14159"

    def test_tokenizes_leading_and_trailing_decimal_point(self):
        assert tokenize(".5")[0].value == ".5"
        assert tokenize("5.")[0].value == "5."

    def test_tokenizes_scientific_notation_as_one_number(self):
        tokens = tokenize("1e5")
        assert len(tokens) == 2
        assert tokens[0].type == TokenType.NUMBER
        assert tokens[0].value == "1e5"

    def test_tokenizes_signed_exponent(self):
        tokens = tokenize("2.5E-3")
        assert tokens[0].type == TokenType.NUMBER
        assert tokens[0].value == "2.5E-3"

    def test_rejects_second_decimal_point(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("1.2.3")
        assert exc_info.value.kind == ErrorKind.MALFORMED_NUMBER
        assert exc_info.value.position == 0

    def test_rejects_exponent_without_digits(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("2+1e")
        assert exc_info.value.kind == ErrorKind.MALFORMED_NUMBER
        assert exc_info.value.position == 2

    def test_rejects_exponent_sign_without_digits(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("1e+")
        assert exc_info.value.kind == ErrorKind.MALFORMED_NUMBER


class TestIdentifiers:
    """Tests for identifier tokenization."""

    def test_tokenizes_function_names(self):
        tokens = tokenize("sin")
        assert tokens[0].type == TokenType.IDENTIFIER
        assert tokens[0].value == "sin"

    def test_bare_e_is_an_identifier(self):
        tokens = tokenize("e")
        assert tokens[0].type == TokenType.IDENTIFIER
        assert tokens[0].value == "e"

    def test_e_after_operator_is_an_identifier(self):
        assert token_types("2*e") == [
            TokenType.NUMBER,
            TokenType.STAR,
            TokenType.IDENTIFIER,
        ]

    def test_unknown_names_are_not_lex_errors(self):
        tokens = tokenize("foo(1)")
        assert tokens[0].type == TokenType.IDENTIFIER
        assert tokens[0].value == "foo"

    def test_identifiers_stop_at_digits(self):
        tokens = tokenize("log10")
        assert tokens[0].value == "log"
        assert tokens[1].value == "10"


class TestOperators:
    """Tests for operator and delimiter tokenization."""

    def test_tokenizes_arithmetic_operators(self):
        assert token_types("+ - * / %") == [
            TokenType.PLUS,
            TokenType.MINUS,
            TokenType.STAR,
            TokenType.SLASH,
            TokenType.PERCENT,
        ]

    def test_tokenizes_delimiters(self):
        assert token_types("(,)") == [
            TokenType.LPAREN,
            TokenType.COMMA,
            TokenType.RPAREN,
        ]

    def test_operator_tokens_carry_symbol(self):
        tokens = tokenize("1/2")
        assert tokens[1].value == "/"


class TestGlyphs:
    """Tests for keypad glyph normalization."""

    def test_multiplication_sign(self):
        tokens = tokenize("5×3")
        assert tokens[1].type == TokenType.STAR
        assert tokens[1].value == "*"
        assert tokens[1].position == 1

    def test_division_sign(self):
        tokens = tokenize("8÷2")
        assert tokens[1].type == TokenType.SLASH
        assert tokens[1].value == "/"

    def test_minus_sign(self):
        tokens = tokenize("8−2")
        assert tokens[1].type == TokenType.MINUS
        assert tokens[1].value == "-"

    def test_square_root_sign(self):
        tokens = tokenize("√9")
        assert tokens[0].type == TokenType.ROOT
        assert tokens[0].value == "sqrt"
        assert tokens[1].type == TokenType.NUMBER

    def test_pi_sign(self):
        tokens = tokenize("2π")
        assert tokens[1].type == TokenType.IDENTIFIER
        assert tokens[1].value == "PI"
        assert tokens[1].position == 1


class TestWhitespaceAndErrors:
    """Tests for whitespace and lexical errors."""

    def test_ignores_whitespace(self):
        tokens = tokenize("  1 +\t2\n")
        assert [t.value for t in tokens[:-1]] == ["1", "+", "2"]
        assert tokens[2].position == 6

    def test_empty_input_yields_only_eof(self):
        tokens = tokenize("")
        assert len(tokens) == 1
        assert tokens[0].type == TokenType.EOF

    def test_rejects_unknown_character(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("2 $ 3")
        assert exc_info.value.kind == ErrorKind.UNEXPECTED_CHAR
        assert exc_info.value.position == 2

    def test_rejects_lone_decimal_point(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("1+.")
        assert exc_info.value.kind == ErrorKind.UNEXPECTED_CHAR

    def test_error_formats_with_pointer(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("1 # 2")
        assert exc_info.value.format_with_context() == (
            "Unexpected character: '#'\n  1 # 2\n    ^"
        )

    def test_rejects_overlong_expression(self):
        limits = ExpressionLimits(max_expression_length=8)
        with pytest.raises(LimitExceededError) as exc_info:
            tokenize("1+2+3+4+5", limits)
        assert exc_info.value.kind == ErrorKind.LIMIT_EXCEEDED
