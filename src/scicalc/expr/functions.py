"""
Recognized functions and constants for calculator expressions.

Lookup is a closed, read-only table from name to behavior; nothing is
resolved against Python namespaces at runtime. Implementations operate in
radians and may raise ValueError/OverflowError from the math module, which
the evaluator reports as math errors.
"""

import math
from enum import Enum
from types import MappingProxyType
from typing import Callable, Mapping, NamedTuple, Optional


class AngleUnit(Enum):
    """Angle unit used to interpret trigonometric arguments and results."""

    DEGREES = "degrees"
    RADIANS = "radians"


class AnglePolicy(Enum):
    """How a function interacts with the active angle unit."""

    # Argument is an angle in the active unit
    ARGUMENT = "argument"

    # Result is an angle in the active unit
    RESULT = "result"


MathImpl = Callable[..., float]


class MathFunction(NamedTuple):
    """A recognized function: name, arity, implementation and angle policy."""

    name: str
    arity: int
    impl: MathImpl
    angle_policy: Optional[AnglePolicy] = None


def _log10(x: float) -> float:
    if x <= 0:
        raise ValueError("log of non-positive number")
    return math.log10(x)


def _ln(x: float) -> float:
    if x <= 0:
        raise ValueError("ln of non-positive number")
    return math.log(x)


MATH_FUNCTIONS: Mapping[str, MathFunction] = MappingProxyType(
    {
        "sin": MathFunction("sin", 1, math.sin, AnglePolicy.ARGUMENT),
        "cos": MathFunction("cos", 1, math.cos, AnglePolicy.ARGUMENT),
        "tan": MathFunction("tan", 1, math.tan, AnglePolicy.ARGUMENT),
        "asin": MathFunction("asin", 1, math.asin, AnglePolicy.RESULT),
        "acos": MathFunction("acos", 1, math.acos, AnglePolicy.RESULT),
        "atan": MathFunction("atan", 1, math.atan, AnglePolicy.RESULT),
        "sqrt": MathFunction("sqrt", 1, math.sqrt),
        "log": MathFunction("log", 1, _log10),
        "ln": MathFunction("ln", 1, _ln),
        "pow": MathFunction("pow", 2, math.pow),
    }
)

MATH_CONSTANTS: Mapping[str, float] = MappingProxyType(
    {
        "PI": math.pi,
        "pi": math.pi,
        "E": math.e,
        "e": math.e,
    }
)

# Degrees to radians
DEGREE = math.pi / 180


def lookup_function(name: str) -> Optional[MathFunction]:
    """Returns the recognized function with this name, or None."""
    return MATH_FUNCTIONS.get(name)


def lookup_constant(name: str) -> Optional[float]:
    """Returns the value of the recognized constant with this name, or None."""
    return MATH_CONSTANTS.get(name)


def to_radians(value: float, unit: AngleUnit) -> float:
    """Converts an angle in ``unit`` to radians."""
    if unit is AngleUnit.DEGREES:
        return value * DEGREE
    return value


def from_radians(value: float, unit: AngleUnit) -> float:
    """Converts an angle in radians to ``unit``."""
    if unit is AngleUnit.DEGREES:
        return value / DEGREE
    return value
