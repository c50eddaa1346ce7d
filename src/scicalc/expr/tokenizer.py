"""
Tokenizer (lexer) for calculator expressions.

Converts expression strings into a stream of tokens for the parser.
Localized glyphs typed on calculator keypads are normalized while scanning:
``×`` and ``÷`` become ``*`` and ``/``, ``−`` becomes ``-``, ``π`` becomes the
``PI`` identifier and ``√`` becomes a ``sqrt`` prefix token.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

from .errors import ErrorKind, LexError
from .limits import ExpressionLimits, check_expression_length


class TokenType(Enum):
    """Token types produced by the tokenizer."""

    # Literals
    NUMBER = "NUMBER"

    # Identifiers (functions and constants)
    IDENTIFIER = "IDENTIFIER"

    # Operators
    PLUS = "PLUS"
    MINUS = "MINUS"
    STAR = "STAR"
    SLASH = "SLASH"
    PERCENT = "PERCENT"
    ROOT = "ROOT"

    # Delimiters
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    COMMA = "COMMA"

    # Special
    EOF = "EOF"


@dataclass
class Token:
    """A token produced by the tokenizer."""

    type: TokenType
    value: str
    position: int


SINGLE_CHAR_TOKENS: Dict[str, TokenType] = {
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    ",": TokenType.COMMA,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "%": TokenType.PERCENT,
}

# Keypad glyphs and the (type, value) they stand for
GLYPH_TOKENS: Dict[str, Tuple[TokenType, str]] = {
    "×": (TokenType.STAR, "*"),
    "÷": (TokenType.SLASH, "/"),
    "−": (TokenType.MINUS, "-"),
    "√": (TokenType.ROOT, "sqrt"),
    "π": (TokenType.IDENTIFIER, "PI"),
}


def _is_digit(ch: str) -> bool:
    """Checks if a character is a digit."""
    return "0" <= ch <= "9"


def _is_identifier_char(ch: str) -> bool:
    """Checks if a character can appear in an identifier."""
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z")


def _is_whitespace(ch: str) -> bool:
    """Checks if a character is whitespace."""
    return ch in (" ", "\t", "\n", "\r", "\u00a0")


class Tokenizer:
    """Tokenizer for expression strings."""

    def __init__(self, source: str, limits: Optional[ExpressionLimits] = None):
        self._source = source
        self._limits = limits
        self._position = 0
        self._tokens: List[Token] = []

    def tokenize(self) -> List[Token]:
        """Tokenizes the source expression and returns all tokens."""
        check_expression_length(self._source, self._limits)

        while not self._is_at_end():
            self._scan_token()

        self._tokens.append(Token(TokenType.EOF, "", self._position))
        return self._tokens

    def _is_at_end(self) -> bool:
        return self._position >= len(self._source)

    def _peek(self) -> str:
        if self._is_at_end():
            return "\0"
        return self._source[self._position]

    def _advance(self) -> str:
        ch = self._source[self._position]
        self._position += 1
        return ch

    def _add_token(self, token_type: TokenType, value: str, position: int) -> None:
        self._tokens.append(Token(token_type, value, position))

    def _scan_token(self) -> None:
        ch = self._advance()
        start_position = self._position - 1

        if _is_whitespace(ch):
            return

        if ch in SINGLE_CHAR_TOKENS:
            self._add_token(SINGLE_CHAR_TOKENS[ch], ch, start_position)
            return

        if ch in GLYPH_TOKENS:
            token_type, value = GLYPH_TOKENS[ch]
            self._add_token(token_type, value, start_position)
            return

        # Number literals, including a bare leading fraction such as ".5"
        if _is_digit(ch) or (ch == "." and _is_digit(self._peek())):
            self._scan_number(start_position)
            return

        if _is_identifier_char(ch):
            self._scan_identifier(start_position)
            return

        raise LexError(
            ErrorKind.UNEXPECTED_CHAR,
            f"Unexpected character: '{ch}'",
            start_position,
            self._source,
        )

    def _scan_number(self, start_position: int) -> None:
        # Back up to include the first character
        self._position -= 1

        value = ""

        # Integer part
        while _is_digit(self._peek()):
            value += self._advance()

        # Fractional part
        if self._peek() == ".":
            value += self._advance()
            while _is_digit(self._peek()):
                value += self._advance()

        # Exponent part; consumed here so "1e5" never yields the constant e
        if self._peek() in ("e", "E"):
            value += self._advance()
            if self._peek() in ("+", "-"):
                value += self._advance()
            if not _is_digit(self._peek()):
                raise LexError(
                    ErrorKind.MALFORMED_NUMBER,
                    "Invalid number: expected exponent digits",
                    start_position,
                    self._source,
                )
            while _is_digit(self._peek()):
                value += self._advance()

        if self._peek() == ".":
            raise LexError(
                ErrorKind.MALFORMED_NUMBER,
                f"Invalid number: unexpected '.' after {value}",
                start_position,
                self._source,
            )

        self._add_token(TokenType.NUMBER, value, start_position)

    def _scan_identifier(self, start_position: int) -> None:
        # Back up to include the first character
        self._position -= 1

        value = ""

        while _is_identifier_char(self._peek()):
            value += self._advance()

        self._add_token(TokenType.IDENTIFIER, value, start_position)


def tokenize(source: str, limits: Optional[ExpressionLimits] = None) -> List[Token]:
    """
    Tokenizes an expression string into tokens.

    Args:
        source: The expression string to tokenize
        limits: Optional expression limits

    Returns:
        List of tokens, terminated by an EOF token

    Raises:
        LexError: If the expression contains invalid characters or numbers
        LimitExceededError: If the expression is too long
    """
    tokenizer = Tokenizer(source, limits)
    return tokenizer.tokenize()
