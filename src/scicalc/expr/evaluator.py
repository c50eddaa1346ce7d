"""
Expression evaluator.

Evaluates an AST under an explicit angle unit and returns a tagged result.

Numeric semantics:
- Every intermediate value is checked for finiteness as soon as it is
  computed; infinities and NaN never reach the next operation.
- Division by zero, domain errors (sqrt of a negative, log of a non-positive
  number, asin outside [-1, 1]) and overflow are math errors.
- The final value is rounded to 12 significant digits so that binary
  floating-point noise (0.1 + 0.2) does not reach the display.
"""

import math
from dataclasses import dataclass
from typing import List, Optional

from .ast import (
    AstNode,
    BinaryOpNode,
    ConstantNode,
    FunctionCallNode,
    NumberLiteralNode,
    UnaryOpNode,
)
from .errors import ErrorKind, EvalError, ExpressionError
from .functions import (
    AnglePolicy,
    AngleUnit,
    MathFunction,
    from_radians,
    lookup_constant,
    lookup_function,
    to_radians,
)

SIGNIFICANT_DIGITS = 12


def round_significant(value: float, digits: int = SIGNIFICANT_DIGITS) -> float:
    """Rounds a finite float to the given number of significant digits."""
    if value == 0:
        return 0.0
    return float(f"{value:.{digits}g}")


@dataclass(frozen=True)
class EvalResult:
    """Result of expression evaluation: either a number or an error kind."""

    value: Optional[float] = None
    """The evaluated value, rounded; None on failure."""

    error: Optional[ErrorKind] = None
    """Error kind if evaluation failed."""

    message: Optional[str] = None
    """Diagnostic message if evaluation failed."""

    position: Optional[int] = None
    """Source position of the failure, when known."""

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @classmethod
    def number(cls, value: float) -> "EvalResult":
        return cls(value=value)

    @classmethod
    def failure(
        cls,
        kind: ErrorKind,
        message: Optional[str] = None,
        position: Optional[int] = None,
    ) -> "EvalResult":
        return cls(error=kind, message=message or kind.value, position=position)

    @classmethod
    def from_error(cls, error: ExpressionError) -> "EvalResult":
        return cls.failure(error.kind, error.message, error.position)


class Evaluator:
    """Evaluates an AST node under a fixed angle unit."""

    def __init__(self, angle_unit: AngleUnit, source: Optional[str] = None):
        self._angle_unit = angle_unit
        self._source = source or ""

    def evaluate(self, node: AstNode) -> float:
        """Evaluates an AST node and returns its finite value."""
        if isinstance(node, NumberLiteralNode):
            return self._finite(node.value, node.position, "Number out of range")

        if isinstance(node, ConstantNode):
            return self._evaluate_constant(node)

        if isinstance(node, FunctionCallNode):
            return self._evaluate_function_call(node)

        if isinstance(node, UnaryOpNode):
            return self._evaluate_unary_op(node)

        if isinstance(node, BinaryOpNode):
            return self._evaluate_binary_op(node)

        raise EvalError(
            ErrorKind.UNEXPECTED_TOKEN,
            f"Unsupported node: {node!r}",
            getattr(node, "position", None),
            self._source,
        )

    def _finite(self, value: float, position: int, message: str) -> float:
        if not math.isfinite(value):
            raise EvalError(ErrorKind.MATH_ERROR, message, position, self._source)
        return value

    def _evaluate_constant(self, node: ConstantNode) -> float:
        value = lookup_constant(node.name)
        if value is None:
            raise EvalError(
                ErrorKind.UNKNOWN_IDENTIFIER,
                f"Unknown identifier: {node.name}",
                node.position,
                self._source,
            )
        return value

    def _evaluate_function_call(self, node: FunctionCallNode) -> float:
        function = lookup_function(node.name)
        if function is None:
            raise EvalError(
                ErrorKind.UNKNOWN_IDENTIFIER,
                f"Unknown function: {node.name}",
                node.position,
                self._source,
            )

        if len(node.args) != function.arity:
            raise EvalError(
                ErrorKind.ARITY_MISMATCH,
                f"{function.name} expects {function.arity} argument(s), got {len(node.args)}",
                node.position,
                self._source,
            )

        args = [self.evaluate(arg) for arg in node.args]
        return self._apply(function, args, node.position)

    def _apply(self, function: MathFunction, args: List[float], position: int) -> float:
        if function.angle_policy is AnglePolicy.ARGUMENT:
            args = [to_radians(args[0], self._angle_unit)]

        try:
            result = function.impl(*args)
        except (ValueError, OverflowError, ZeroDivisionError) as e:
            raise EvalError(
                ErrorKind.MATH_ERROR, f"{function.name}: {e}", position, self._source
            ) from e

        result = self._finite(result, position, f"{function.name}: result is not finite")

        if function.angle_policy is AnglePolicy.RESULT:
            result = from_radians(result, self._angle_unit)

        return result

    def _evaluate_unary_op(self, node: UnaryOpNode) -> float:
        value = self.evaluate(node.operand)

        if node.operator == "-":
            return -value

        if node.operator == "%":
            return value / 100

        raise EvalError(
            ErrorKind.UNEXPECTED_TOKEN,
            f"Unsupported unary operator: {node.operator}",
            node.position,
            self._source,
        )

    def _evaluate_binary_op(self, node: BinaryOpNode) -> float:
        left = self.evaluate(node.left)
        right = self.evaluate(node.right)
        operator = node.operator

        if operator == "+":
            result = left + right
        elif operator == "-":
            result = left - right
        elif operator == "*":
            result = left * right
        elif operator == "/":
            if right == 0:
                raise EvalError(
                    ErrorKind.MATH_ERROR, "Division by zero", node.position, self._source
                )
            result = left / right
        else:
            raise EvalError(
                ErrorKind.UNEXPECTED_TOKEN,
                f"Unsupported binary operator: {operator}",
                node.position,
                self._source,
            )

        return self._finite(result, node.position, f"Overflow in '{operator}'")


def evaluate(
    ast: AstNode, angle_unit: AngleUnit, source: Optional[str] = None
) -> EvalResult:
    """
    Evaluates an AST and returns the rounded result.

    Args:
        ast: The AST to evaluate
        angle_unit: Unit for trigonometric arguments and results
        source: Source expression for error reporting

    Returns:
        The evaluation result; expression errors are returned, not raised
    """
    try:
        value = Evaluator(angle_unit, source).evaluate(ast)
    except ExpressionError as error:
        return EvalResult.from_error(error)
    return EvalResult.number(round_significant(value))
