"""
Parser for calculator expressions.

Parses a stream of tokens into an Abstract Syntax Tree (AST).
Uses recursive descent parsing with operator precedence.

Precedence (lowest to highest):
1. Additive: +, -
2. Multiplicative: *, /
3. Percent: postfix % on a single factor
4. Unary: prefix -
5. Radical: prefix √
6. Primary: numbers, constants, function calls, parentheses

Function calls are ``name(arg)``; ``pow(base, exponent)`` is the only
recognized two-argument form. Calls to recognized functions are checked for
arity here; unknown names are left for the evaluator to reject.
"""

from typing import List, Optional

from .ast import (
    AstNode,
    BinaryOperator,
    BinaryOpNode,
    ConstantNode,
    FunctionCallNode,
    NumberLiteralNode,
    UnaryOpNode,
)
from .errors import ErrorKind, ParseError
from .functions import lookup_function
from .limits import (
    DEFAULT_EXPRESSION_LIMITS,
    ExpressionLimits,
    check_ast_depth,
    check_ast_node_count,
    check_function_arg_count,
)
from .tokenizer import Token, TokenType, tokenize


class Parser:
    """Parser for expression token streams."""

    def __init__(
        self,
        tokens: List[Token],
        source: str,
        limits: ExpressionLimits = DEFAULT_EXPRESSION_LIMITS,
    ):
        self._tokens = tokens
        self._source = source
        self._limits = limits
        self._current = 0
        self._depth = 0
        self._node_count = 0

    def parse(self) -> AstNode:
        """Parses the token stream into an AST."""
        ast = self._parse_additive()

        if not self._is_at_end():
            raise self._unexpected(self._peek())

        return ast

    # ============================================================
    # Token Helpers
    # ============================================================

    def _is_at_end(self) -> bool:
        return self._peek().type == TokenType.EOF

    def _peek(self) -> Token:
        return self._tokens[self._current]

    def _previous(self) -> Token:
        return self._tokens[self._current - 1]

    def _advance(self) -> Token:
        if not self._is_at_end():
            self._current += 1
        return self._previous()

    def _check(self, token_type: TokenType) -> bool:
        if self._is_at_end():
            return False
        return self._peek().type == token_type

    def _match(self, *types: TokenType) -> bool:
        for token_type in types:
            if self._check(token_type):
                self._advance()
                return True
        return False

    def _consume(self, token_type: TokenType, message: str) -> Token:
        if self._check(token_type):
            return self._advance()
        token = self._peek()
        if token.type == TokenType.EOF:
            raise ParseError(ErrorKind.UNEXPECTED_END, message, token.position, self._source)
        raise ParseError(ErrorKind.UNEXPECTED_TOKEN, message, token.position, self._source)

    def _count_node(self) -> None:
        # Checked while building, before a long operator chain gets deep
        self._node_count += 1
        check_ast_node_count(self._node_count, self._limits)

    def _unexpected(self, token: Token) -> ParseError:
        if token.type == TokenType.EOF:
            return ParseError(
                ErrorKind.UNEXPECTED_END,
                "Unexpected end of expression",
                token.position,
                self._source,
            )
        return ParseError(
            ErrorKind.UNEXPECTED_TOKEN,
            f"Unexpected token: {token.value or token.type.value}",
            token.position,
            self._source,
        )

    # ============================================================
    # Expression Parsing (by precedence, lowest to highest)
    # ============================================================

    def _parse_additive(self) -> AstNode:
        """Parses additive: +, -"""
        node = self._parse_multiplicative()

        while self._match(TokenType.PLUS, TokenType.MINUS):
            operator: BinaryOperator = "+" if self._previous().type == TokenType.PLUS else "-"
            position = self._previous().position
            right = self._parse_multiplicative()
            self._count_node()
            node = BinaryOpNode(
                position=position,
                operator=operator,
                left=node,
                right=right,
            )

        return node

    def _parse_multiplicative(self) -> AstNode:
        """Parses multiplicative: *, /"""
        node = self._parse_percent()

        while self._match(TokenType.STAR, TokenType.SLASH):
            operator: BinaryOperator = "*" if self._previous().type == TokenType.STAR else "/"
            position = self._previous().position
            right = self._parse_percent()
            self._count_node()
            node = BinaryOpNode(
                position=position,
                operator=operator,
                left=node,
                right=right,
            )

        return node

    def _parse_percent(self) -> AstNode:
        """Parses an optional postfix percent on a factor: x%"""
        node = self._parse_unary()

        if self._match(TokenType.PERCENT):
            self._count_node()
            node = UnaryOpNode(
                position=self._previous().position,
                operator="%",
                operand=node,
            )

        return node

    def _parse_unary(self) -> AstNode:
        """Parses an optional unary minus."""
        self._depth += 1
        try:
            check_ast_depth(self._depth, self._limits, self._peek().position)

            if self._match(TokenType.MINUS):
                position = self._previous().position
                operand = self._parse_radical()
                self._count_node()
                return UnaryOpNode(
                    position=position,
                    operator="-",
                    operand=operand,
                )

            return self._parse_radical()
        finally:
            self._depth -= 1

    def _parse_radical(self) -> AstNode:
        """Parses the square-root glyph applied to the following operand."""
        if self._match(TokenType.ROOT):
            token = self._previous()
            operand = self._parse_unary()
            self._count_node()
            return FunctionCallNode(
                position=token.position,
                name=token.value,
                args=(operand,),
            )

        return self._parse_primary()

    def _parse_argument_list(self) -> List[AstNode]:
        """Parses function argument list (already consumed opening paren)."""
        args: List[AstNode] = []

        if not self._check(TokenType.RPAREN):
            args.append(self._parse_additive())
            while self._match(TokenType.COMMA):
                args.append(self._parse_additive())

        self._consume(TokenType.RPAREN, "Expected ')' after function arguments")
        return args

    def _parse_call(self, name_token: Token) -> AstNode:
        """Parses a function call (already consumed the name and '(')."""
        args = self._parse_argument_list()
        check_function_arg_count(len(args), self._limits, name_token.position)

        function = lookup_function(name_token.value)
        if function is not None and len(args) != function.arity:
            raise ParseError(
                ErrorKind.ARITY_MISMATCH,
                f"{function.name} expects {function.arity} argument(s), got {len(args)}",
                name_token.position,
                self._source,
            )

        self._count_node()
        return FunctionCallNode(
            position=name_token.position,
            name=name_token.value,
            args=tuple(args),
        )

    def _parse_primary(self) -> AstNode:
        """Parses primary expressions: numbers, names, calls, parentheses."""
        token = self._peek()
        position = token.position

        if self._match(TokenType.NUMBER):
            # Overflowing literals become inf and are rejected by the evaluator
            self._count_node()
            return NumberLiteralNode(position=position, value=float(token.value))

        if self._match(TokenType.IDENTIFIER):
            if self._match(TokenType.LPAREN):
                return self._parse_call(token)
            self._count_node()
            return ConstantNode(position=position, name=token.value)

        if self._match(TokenType.LPAREN):
            expr = self._parse_additive()
            self._consume(TokenType.RPAREN, "Expected ')' after expression")
            return expr

        raise self._unexpected(token)


def parse_tokens(
    tokens: List[Token],
    source: Optional[str] = None,
    limits: ExpressionLimits = DEFAULT_EXPRESSION_LIMITS,
) -> AstNode:
    """
    Parses an already tokenized expression into an AST.

    Raises:
        ParseError: If the tokens do not form a valid expression
        LimitExceededError: If the expression is too deeply nested or too large
    """
    parser = Parser(tokens, source or "", limits)
    return parser.parse()


def parse(
    source: str, limits: ExpressionLimits = DEFAULT_EXPRESSION_LIMITS
) -> AstNode:
    """
    Parses an expression string into an AST.

    Args:
        source: The expression string to parse
        limits: Optional expression limits

    Returns:
        The parsed AST

    Raises:
        LexError: If tokenization fails
        ParseError: If parsing fails
        LimitExceededError: If the expression exceeds the configured limits
    """
    tokens = tokenize(source, limits)
    return parse_tokens(tokens, source, limits)
