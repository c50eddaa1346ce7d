"""
Tests for the calculator parser.
"""

# pyright: reportAttributeAccessIssue=false

import pytest

from scicalc.expr import (
    ErrorKind,
    ExpressionLimits,
    LimitExceededError,
    ParseError,
    ast_to_string,
    calculate_ast_depth,
    count_ast_nodes,
    parse,
    parse_tokens,
    tokenize,
)


class TestPrimaries:
    """Tests for primary expression parsing."""

    def test_parses_number_literal(self):
        ast = parse("42")
        assert ast.type == "NumberLiteral"
        assert ast.position == 0
        assert ast.value == 42

    def test_parses_scientific_literal(self):
        ast = parse("1.5e3")
        assert ast.value == 1500.0

    def test_parses_constant(self):
        ast = parse("PI")
        assert ast.type == "Constant"
        assert ast.name == "PI"

    def test_parses_function_call(self):
        ast = parse("sin(30)")
        assert ast.type == "FunctionCall"
        assert ast.name == "sin"
        assert len(ast.args) == 1
        assert ast.args[0].value == 30

    def test_parses_pow_with_two_arguments(self):
        ast = parse("pow(2, 10)")
        assert ast.type == "FunctionCall"
        assert ast.name == "pow"
        assert [a.value for a in ast.args] == [2, 10]

    def test_parses_unknown_function(self):
        ast = parse("foo(1)")
        assert ast.type == "FunctionCall"
        assert ast.name == "foo"

    def test_parenthesized_expression_yields_inner_node(self):
        ast = parse("(7)")
        assert ast.type == "NumberLiteral"
        assert ast.position == 1

    def test_args_are_tuples(self):
        ast = parse("sqrt(4)")
        assert isinstance(ast.args, tuple)


class TestPrecedence:
    """Tests for operator precedence and associativity."""

    def test_multiplication_binds_tighter_than_addition(self):
        ast = parse("2+3*4")
        assert ast.type == "BinaryOp"
        assert ast.operator == "+"
        assert ast.right.type == "BinaryOp"
        assert ast.right.operator == "*"

    def test_parentheses_override_precedence(self):
        ast = parse("(2+3)*4")
        assert ast.operator == "*"
        assert ast.left.operator == "+"

    def test_subtraction_is_left_associative(self):
        ast = parse("10-4-3")
        assert ast.operator == "-"
        assert ast.left.operator == "-"
        assert ast.right.value == 3

    def test_percent_applies_to_factor_before_addition(self):
        ast = parse("50+10%")
        assert ast.operator == "+"
        assert ast.right.type == "UnaryOp"
        assert ast.right.operator == "%"
        assert ast.right.operand.value == 10

    def test_percent_applies_to_right_factor_of_product(self):
        ast = parse("200*10%")
        assert ast.operator == "*"
        assert ast.right.operator == "%"

    def test_percent_may_be_followed_by_operator(self):
        ast = parse("10%*5")
        assert ast.operator == "*"
        assert ast.left.operator == "%"

    def test_unary_minus(self):
        ast = parse("-5")
        assert ast.type == "UnaryOp"
        assert ast.operator == "-"
        assert ast.operand.value == 5

    def test_unary_minus_after_operator(self):
        ast = parse("2*-3")
        assert ast.operator == "*"
        assert ast.right.type == "UnaryOp"

    def test_square_root_glyph_becomes_sqrt_call(self):
        ast = parse("√9")
        assert ast.type == "FunctionCall"
        assert ast.name == "sqrt"
        assert ast.args[0].value == 9

    def test_square_root_glyph_binds_to_next_operand(self):
        ast = parse("√9+1")
        assert ast.operator == "+"
        assert ast.left.name == "sqrt"

    def test_negated_square_root(self):
        ast = parse("-√4")
        assert ast.operator == "-"
        assert ast.operand.name == "sqrt"


class TestErrors:
    """Tests for parse errors."""

    def test_trailing_operator_is_unexpected_end(self):
        with pytest.raises(ParseError) as exc_info:
            parse("2+")
        assert exc_info.value.kind == ErrorKind.UNEXPECTED_END

    def test_adjacent_numbers_are_unexpected_token(self):
        with pytest.raises(ParseError) as exc_info:
            parse("2 3")
        assert exc_info.value.kind == ErrorKind.UNEXPECTED_TOKEN
        assert exc_info.value.position == 2

    def test_empty_input_is_unexpected_end(self):
        with pytest.raises(ParseError) as exc_info:
            parse("")
        assert exc_info.value.kind == ErrorKind.UNEXPECTED_END

    def test_unclosed_parenthesis_is_unexpected_end(self):
        with pytest.raises(ParseError) as exc_info:
            parse("(2+3")
        assert exc_info.value.kind == ErrorKind.UNEXPECTED_END

    def test_unmatched_closing_parenthesis_is_unexpected_token(self):
        with pytest.raises(ParseError) as exc_info:
            parse("2+3)")
        assert exc_info.value.kind == ErrorKind.UNEXPECTED_TOKEN
        assert exc_info.value.position == 3

    def test_empty_operand_between_operators(self):
        with pytest.raises(ParseError) as exc_info:
            parse("2*/3")
        assert exc_info.value.kind == ErrorKind.UNEXPECTED_TOKEN

    def test_double_percent_is_rejected(self):
        with pytest.raises(ParseError) as exc_info:
            parse("10%%")
        assert exc_info.value.kind == ErrorKind.UNEXPECTED_TOKEN

    def test_zero_arguments_is_arity_mismatch(self):
        with pytest.raises(ParseError) as exc_info:
            parse("sin()")
        assert exc_info.value.kind == ErrorKind.ARITY_MISMATCH

    def test_extra_arguments_is_arity_mismatch(self):
        with pytest.raises(ParseError) as exc_info:
            parse("sqrt(4, 9)")
        assert exc_info.value.kind == ErrorKind.ARITY_MISMATCH
        assert exc_info.value.position == 0

    def test_pow_with_one_argument_is_arity_mismatch(self):
        with pytest.raises(ParseError) as exc_info:
            parse("pow(2)")
        assert exc_info.value.kind == ErrorKind.ARITY_MISMATCH

    def test_comma_outside_call_is_rejected(self):
        with pytest.raises(ParseError) as exc_info:
            parse("(1, 2)")
        assert exc_info.value.kind == ErrorKind.UNEXPECTED_TOKEN


class TestLimits:
    """Tests for parser resource limits."""

    def test_rejects_deep_nesting(self):
        limits = ExpressionLimits(max_ast_depth=5)
        with pytest.raises(LimitExceededError):
            parse("((((((1))))))", limits)

    def test_accepts_nesting_within_limit(self):
        limits = ExpressionLimits(max_ast_depth=5)
        assert parse("((1))", limits).value == 1

    def test_rejects_too_many_nodes(self):
        limits = ExpressionLimits(max_ast_nodes=5)
        with pytest.raises(LimitExceededError):
            parse("1+2+3+4", limits)

    def test_long_flat_sum_hits_node_limit_with_raised_length_limit(self):
        limits = ExpressionLimits(max_expression_length=10000)
        with pytest.raises(LimitExceededError) as exc_info:
            parse("+".join(["1"] * 3000), limits)
        assert exc_info.value.kind == ErrorKind.LIMIT_EXCEEDED
        assert exc_info.value.limit_name == "max_ast_nodes"

    def test_node_limit_counts_every_node_kind(self):
        limits = ExpressionLimits(max_ast_nodes=4)
        with pytest.raises(LimitExceededError):
            parse("-√sin(PI)%", limits)
        assert count_ast_nodes(parse("√sin(PI)%", limits)) == 4

    def test_default_limits_allow_long_flat_sums(self):
        source = "+".join(["1"] * 200)
        assert count_ast_nodes(parse(source)) == 399


class TestUtilities:
    """Tests for token-level entry point and AST utilities."""

    def test_parse_tokens_matches_parse(self):
        source = "2*(3+4)"
        assert parse_tokens(tokenize(source), source) == parse(source)

    def test_count_and_depth(self):
        ast = parse("sin(1+2)*3")
        assert count_ast_nodes(ast) == 6
        assert calculate_ast_depth(ast) == 4

    def test_ast_to_string(self):
        assert ast_to_string(parse("-PI")) == "UnaryOp: -\n  Constant: PI"

    def test_parsing_twice_gives_equal_trees(self):
        assert parse("50+10%") == parse("50+10%")
