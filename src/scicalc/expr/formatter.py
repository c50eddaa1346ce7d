"""
Display formatting for evaluation results.
"""

from dataclasses import dataclass
from typing import Optional

from .errors import ErrorCategory, ErrorKind
from .evaluator import EvalResult

# Integral values below this magnitude print without an exponent
_MAX_PLAIN_INTEGER = 1e15


@dataclass(frozen=True)
class DisplayMessages:
    """User-visible text for the two error categories."""

    math_error: str = "Math Error"
    invalid_input: str = "Invalid Input"

    def for_category(self, category: ErrorCategory) -> str:
        if category is ErrorCategory.MATH_ERROR:
            return self.math_error
        return self.invalid_input


DEFAULT_DISPLAY_MESSAGES = DisplayMessages()


@dataclass(frozen=True)
class Display:
    """Text shown to the user for one evaluation."""

    display_text: str
    is_error: bool
    error_kind: Optional[ErrorKind] = None


def format_number(value: float) -> str:
    """Shortest decimal text for an already rounded value."""
    if value == 0:
        # Also folds -0.0
        return "0"
    if value.is_integer() and abs(value) < _MAX_PLAIN_INTEGER:
        return str(int(value))
    return repr(value)


def format_result(
    result: EvalResult, messages: Optional[DisplayMessages] = None
) -> Display:
    """Renders an EvalResult into display text."""
    messages = messages or DEFAULT_DISPLAY_MESSAGES

    if result.error is not None:
        return Display(
            display_text=messages.for_category(result.error.category),
            is_error=True,
            error_kind=result.error,
        )

    assert result.value is not None
    return Display(display_text=format_number(result.value), is_error=False)
