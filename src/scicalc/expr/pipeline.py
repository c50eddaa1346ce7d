"""
End-to-end evaluation of user-typed calculator input.

``evaluate_expression`` runs tokenize -> parse -> evaluate -> format on the
calling thread. A failure at any stage skips the remaining stages and is
formatted as an error; nothing is retried and no state outlives the call.
"""

import logging
from typing import Optional

from .errors import ExpressionError
from .evaluator import EvalResult, evaluate
from .formatter import Display, DisplayMessages, format_result
from .functions import AngleUnit
from .limits import DEFAULT_EXPRESSION_LIMITS, ExpressionLimits
from .parser import parse_tokens
from .tokenizer import tokenize

logger = logging.getLogger("scicalc.expr.pipeline")


def compute(
    source: str,
    angle_unit: AngleUnit,
    limits: Optional[ExpressionLimits] = None,
) -> EvalResult:
    """
    Tokenizes, parses and evaluates an expression.

    Lex, parse and limit errors are returned as failed results, so callers
    only ever see an EvalResult.
    """
    limits = limits or DEFAULT_EXPRESSION_LIMITS

    try:
        tokens = tokenize(source, limits)
        ast = parse_tokens(tokens, source, limits)
    except ExpressionError as error:
        logger.debug(
            "expression_rejected",
            extra={
                "kind": error.kind.value,
                "position": error.position,
                "detail": error.message,
            },
        )
        return EvalResult.from_error(error)

    result = evaluate(ast, angle_unit, source)

    if result.is_error:
        logger.debug(
            "expression_evaluation_failed",
            extra={
                "kind": result.error.value if result.error else None,
                "position": result.position,
                "detail": result.message,
            },
        )
    else:
        logger.debug(
            "expression_evaluated",
            extra={"angle_unit": angle_unit.value, "value": result.value},
        )

    return result


def evaluate_expression(
    source: str,
    angle_unit: AngleUnit,
    limits: Optional[ExpressionLimits] = None,
    messages: Optional[DisplayMessages] = None,
) -> Display:
    """
    Evaluates user input and returns the text to display.

    Args:
        source: Raw expression text, possibly with keypad glyphs
        angle_unit: Unit for trigonometric arguments and results
        limits: Optional expression limits
        messages: Optional user-visible error strings

    Returns:
        Display with the text and whether it represents an error
    """
    return format_result(compute(source, angle_unit, limits), messages)
