"""
Abstract Syntax Tree (AST) node types for calculator expressions.

The AST is produced by the parser and consumed by the evaluator. Nodes are
frozen; the evaluator never mutates a tree.
"""

from abc import ABC
from dataclasses import dataclass
from typing import Literal, Sequence, Union

# ============================================================
# Operator Types
# ============================================================

# "-" negates, "%" divides by one hundred
UnaryOperator = Literal["-", "%"]

BinaryOperator = Literal["+", "-", "*", "/"]


# ============================================================
# AST Node Types
# ============================================================


@dataclass(frozen=True)
class AstNodeBase(ABC):
    """Base class for all AST nodes."""

    position: int
    """Position in source expression (for error reporting)."""


@dataclass(frozen=True)
class NumberLiteralNode(AstNodeBase):
    """Number literal node."""

    value: float

    @property
    def type(self) -> Literal["NumberLiteral"]:
        return "NumberLiteral"


@dataclass(frozen=True)
class ConstantNode(AstNodeBase):
    """Named constant reference (e.g., PI)."""

    name: str

    @property
    def type(self) -> Literal["Constant"]:
        return "Constant"


@dataclass(frozen=True)
class FunctionCallNode(AstNodeBase):
    """Function call node."""

    name: str
    args: Sequence["AstNode"]

    @property
    def type(self) -> Literal["FunctionCall"]:
        return "FunctionCall"


@dataclass(frozen=True)
class UnaryOpNode(AstNodeBase):
    """Unary operator node (prefix negation or postfix percent)."""

    operator: UnaryOperator
    operand: "AstNode"

    @property
    def type(self) -> Literal["UnaryOp"]:
        return "UnaryOp"


@dataclass(frozen=True)
class BinaryOpNode(AstNodeBase):
    """Binary operator node."""

    operator: BinaryOperator
    left: "AstNode"
    right: "AstNode"

    @property
    def type(self) -> Literal["BinaryOp"]:
        return "BinaryOp"


# Union type for all AST nodes
AstNode = Union[
    NumberLiteralNode,
    ConstantNode,
    FunctionCallNode,
    UnaryOpNode,
    BinaryOpNode,
]


# ============================================================
# AST Utilities
# ============================================================


def count_ast_nodes(node: AstNode) -> int:
    """Counts the total number of nodes in an AST."""
    if isinstance(node, FunctionCallNode):
        return 1 + sum(count_ast_nodes(arg) for arg in node.args)

    if isinstance(node, UnaryOpNode):
        return 1 + count_ast_nodes(node.operand)

    if isinstance(node, BinaryOpNode):
        return 1 + count_ast_nodes(node.left) + count_ast_nodes(node.right)

    return 1


def calculate_ast_depth(node: AstNode) -> int:
    """Calculates the maximum depth of an AST."""
    if isinstance(node, FunctionCallNode):
        return 1 + max((calculate_ast_depth(arg) for arg in node.args), default=0)

    if isinstance(node, UnaryOpNode):
        return 1 + calculate_ast_depth(node.operand)

    if isinstance(node, BinaryOpNode):
        return 1 + max(calculate_ast_depth(node.left), calculate_ast_depth(node.right))

    return 1


def ast_to_string(node: AstNode, indent: int = 0) -> str:
    """Returns a human-readable representation of an AST node for debugging."""
    prefix = "  " * indent

    if isinstance(node, NumberLiteralNode):
        return f"{prefix}Number: {node.value}"

    if isinstance(node, ConstantNode):
        return f"{prefix}Constant: {node.name}"

    if isinstance(node, FunctionCallNode):
        args_str = "\n".join(ast_to_string(a, indent + 1) for a in node.args)
        return f"{prefix}FunctionCall: {node.name}\n{args_str}"

    if isinstance(node, UnaryOpNode):
        return f"{prefix}UnaryOp: {node.operator}\n{ast_to_string(node.operand, indent + 1)}"

    if isinstance(node, BinaryOpNode):
        return (
            f"{prefix}BinaryOp: {node.operator}\n"
            f"{ast_to_string(node.left, indent + 1)}\n"
            f"{ast_to_string(node.right, indent + 1)}"
        )

    return f"{prefix}Unknown: {node}"
