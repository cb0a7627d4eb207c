"""Tests for shunting-yard infix-to-postfix conversion."""

from __future__ import annotations

from collections import Counter

import pytest

from mathexpr.converter import to_postfix
from mathexpr.errors import MismatchedParenthesis
from mathexpr.tokenizer import tokenize
from mathexpr.tokens import GroupingToken, NumberToken, OperatorToken, format_tokens


def rpn(source: str, *variables: str) -> str:
    return format_tokens(to_postfix(tokenize(source, variables)))


class TestPrecedence:
    """Operators are reordered by precedence."""

    def test_mul_before_add(self) -> None:
        assert rpn("3+4*2") == "3 4 2 * +"

    def test_tokens_not_just_text(self) -> None:
        assert to_postfix(tokenize("3+4*2")) == [
            NumberToken(value=3.0),
            NumberToken(value=4.0),
            NumberToken(value=2.0),
            OperatorToken(symbol="*"),
            OperatorToken(symbol="+"),
        ]

    def test_add_after_mul(self) -> None:
        assert rpn("3*4+2") == "3 4 * 2 +"

    def test_modulo_same_level_as_mul(self) -> None:
        assert rpn("1 % 3 * 2") == "1 3 % 2 *"

    def test_power_binds_tightest(self) -> None:
        assert rpn("2*3^2") == "2 3 2 ^ *"
        assert rpn("2^3*2") == "2 3 ^ 2 *"

    def test_parentheses_override_precedence(self) -> None:
        assert rpn("(1+2)*3") == "1 2 + 3 *"

    def test_bracket_families_interchangeable(self) -> None:
        assert rpn("[1+2)*{3-1]") == "1 2 + 3 1 - *"


class TestAssociativity:
    """Equal-precedence chains group by associativity."""

    def test_power_right_associative(self) -> None:
        assert rpn("2^3^2") == "2 3 2 ^ ^"

    def test_subtraction_left_associative(self) -> None:
        assert rpn("2-3-2") == "2 3 - 2 -"

    def test_division_left_associative(self) -> None:
        assert rpn("8/4/2") == "8 4 / 2 /"

    def test_mixed_additive(self) -> None:
        assert rpn("1-2+3") == "1 2 - 3 +"


class TestFunctions:
    """Function calls are emitted after their argument."""

    def test_function_call(self) -> None:
        assert rpn("sin(x)", "x") == "x sin"

    def test_function_in_expression(self) -> None:
        assert rpn("3 * sin(y) - 2 / (x - 2)", "x", "y") == "3 y sin * 2 x 2 - / -"

    def test_nested_functions(self) -> None:
        assert rpn("cos(sin(x))", "x") == "x sin cos"

    def test_function_argument_expression(self) -> None:
        assert rpn("sqrt(x^2 + 1) * 2", "x") == "x 2 ^ 1 + sqrt 2 *"

    def test_function_with_square_brackets(self) -> None:
        assert rpn("abs[x]", "x") == "x abs"


class TestConversionInvariants:
    """Postfix output keeps every value-bearing token and drops grouping."""

    def test_grouping_removed(self) -> None:
        postfix = to_postfix(tokenize("((1)+[2])"))
        assert not any(isinstance(t, GroupingToken) for t in postfix)

    def test_same_multiset(self) -> None:
        infix = tokenize("sin(x) * (y - 2) ^ 3 / abs(x)", ["x", "y"])
        postfix = to_postfix(infix)
        expected = Counter(t for t in infix if not isinstance(t, GroupingToken))
        assert Counter(postfix) == expected

    def test_empty(self) -> None:
        assert to_postfix([]) == []

    def test_no_arity_check(self) -> None:
        # dangling operator is left for the evaluator to reject
        assert rpn("1+") == "1 +"


class TestMismatchedParenthesis:
    """Unbalanced grouping is a conversion error."""

    def test_unclosed(self) -> None:
        with pytest.raises(MismatchedParenthesis):
            to_postfix(tokenize("(1+2"))

    def test_unopened(self) -> None:
        with pytest.raises(MismatchedParenthesis) as exc_info:
            to_postfix(tokenize("1+2)"))
        assert exc_info.value.offset == 3

    def test_close_before_open(self) -> None:
        with pytest.raises(MismatchedParenthesis) as exc_info:
            to_postfix(tokenize(")("))
        assert exc_info.value.offset == 0

    def test_unclosed_function_call(self) -> None:
        with pytest.raises(MismatchedParenthesis):
            to_postfix(tokenize("sin(x", ["x"]))

    def test_end_of_input_has_no_offset(self) -> None:
        with pytest.raises(MismatchedParenthesis) as exc_info:
            to_postfix(tokenize("[[1]"))
        assert exc_info.value.offset is None
