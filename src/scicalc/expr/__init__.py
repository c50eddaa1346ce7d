"""
Calculator expression engine.

This module provides a deterministic, side-effect-free evaluator for
scientific calculator input: a tokenizer, a recursive-descent parser, a
tree-walking evaluator and a display formatter. Caller text is never
compiled or executed as code.
"""

# Core types and utilities
from .ast import (
    AstNode,
    AstNodeBase,
    BinaryOperator,
    BinaryOpNode,
    ConstantNode,
    FunctionCallNode,
    NumberLiteralNode,
    UnaryOperator,
    UnaryOpNode,
    ast_to_string,
    calculate_ast_depth,
    count_ast_nodes,
)
from .errors import (
    ErrorCategory,
    ErrorKind,
    EvalError,
    ExpressionError,
    LexError,
    LimitExceededError,
    ParseError,
)

# Evaluator
from .evaluator import (
    SIGNIFICANT_DIGITS,
    EvalResult,
    Evaluator,
    evaluate,
    round_significant,
)

# Formatter
from .formatter import (
    DEFAULT_DISPLAY_MESSAGES,
    Display,
    DisplayMessages,
    format_number,
    format_result,
)

# Functions
from .functions import (
    MATH_CONSTANTS,
    MATH_FUNCTIONS,
    AnglePolicy,
    AngleUnit,
    MathFunction,
    lookup_constant,
    lookup_function,
)
from .limits import (
    DEFAULT_EXPRESSION_LIMITS,
    ExpressionLimits,
    check_ast_depth,
    check_ast_node_count,
    check_expression_length,
    check_function_arg_count,
)

# Parser
from .parser import (
    Parser,
    parse,
    parse_tokens,
)

# Pipeline
from .pipeline import (
    compute,
    evaluate_expression,
)

# Tokenizer
from .tokenizer import (
    Token,
    Tokenizer,
    TokenType,
    tokenize,
)

__all__ = [
    # AST types
    "AstNode",
    "AstNodeBase",
    "NumberLiteralNode",
    "ConstantNode",
    "FunctionCallNode",
    "UnaryOpNode",
    "BinaryOpNode",
    "UnaryOperator",
    "BinaryOperator",
    "count_ast_nodes",
    "calculate_ast_depth",
    "ast_to_string",
    # Errors
    "ErrorCategory",
    "ErrorKind",
    "ExpressionError",
    "LexError",
    "ParseError",
    "EvalError",
    "LimitExceededError",
    # Limits
    "ExpressionLimits",
    "DEFAULT_EXPRESSION_LIMITS",
    "check_expression_length",
    "check_ast_depth",
    "check_ast_node_count",
    "check_function_arg_count",
    # Tokenizer
    "Token",
    "TokenType",
    "Tokenizer",
    "tokenize",
    # Parser
    "Parser",
    "parse",
    "parse_tokens",
    # Functions
    "AngleUnit",
    "AnglePolicy",
    "MathFunction",
    "MATH_FUNCTIONS",
    "MATH_CONSTANTS",
    "lookup_function",
    "lookup_constant",
    # Evaluator
    "SIGNIFICANT_DIGITS",
    "EvalResult",
    "Evaluator",
    "evaluate",
    "round_significant",
    # Formatter
    "Display",
    "DisplayMessages",
    "DEFAULT_DISPLAY_MESSAGES",
    "format_number",
    "format_result",
    # Pipeline
    "compute",
    "evaluate_expression",
]
