"""
Error types for the calculator expression engine.

All expression errors extend ExpressionError and carry an ErrorKind so that
callers can tell math failures apart from malformed input.
"""

from enum import Enum
from typing import Optional


class ErrorCategory(Enum):
    """User-visible error categories."""

    MATH_ERROR = "MATH_ERROR"
    INVALID_INPUT = "INVALID_INPUT"


class ErrorKind(Enum):
    """Fine-grained error kinds produced by the pipeline."""

    # Tokenizer
    UNEXPECTED_CHAR = "UNEXPECTED_CHAR"
    MALFORMED_NUMBER = "MALFORMED_NUMBER"

    # Parser
    UNEXPECTED_TOKEN = "UNEXPECTED_TOKEN"
    UNEXPECTED_END = "UNEXPECTED_END"
    ARITY_MISMATCH = "ARITY_MISMATCH"

    # Evaluator
    MATH_ERROR = "MATH_ERROR"
    UNKNOWN_IDENTIFIER = "UNKNOWN_IDENTIFIER"

    # Limits
    LIMIT_EXCEEDED = "LIMIT_EXCEEDED"

    @property
    def category(self) -> ErrorCategory:
        if self is ErrorKind.MATH_ERROR:
            return ErrorCategory.MATH_ERROR
        return ErrorCategory.INVALID_INPUT


class ExpressionError(Exception):
    """
    Base error class for all expression-related errors.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        position: Optional[int] = None,
        expression: Optional[str] = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.position = position
        self.expression = expression

    def format_with_context(self) -> str:
        """
        Returns a formatted error message with position context.
        """
        if self.expression is None or self.position is None:
            return self.message

        pointer = " " * self.position + "^"
        return f"{self.message}\n  {self.expression}\n  {pointer}"


class LexError(ExpressionError):
    """
    Error raised during tokenization (lexical analysis).
    """

    pass


class ParseError(ExpressionError):
    """
    Error raised during parsing (syntax analysis).
    """

    pass


class EvalError(ExpressionError):
    """
    Error raised during evaluation (runtime error).
    """

    pass


class LimitExceededError(ExpressionError):
    """
    Error raised when expression limits are exceeded.
    """

    def __init__(
        self,
        limit_name: str,
        limit: int,
        actual: int,
        position: Optional[int] = None,
        expression: Optional[str] = None,
    ):
        message = f"Limit exceeded: {limit_name} (limit: {limit}, actual: {actual})"
        super().__init__(ErrorKind.LIMIT_EXCEEDED, message, position, expression)
        self.limit_name = limit_name
        self.limit = limit
        self.actual = actual
