"""
Property-based tests using Hypothesis.

These tests verify pipeline invariants across generated expressions:
whitespace insensitivity, conversion as a pure reordering, and
deterministic, stateless evaluation.
"""

from __future__ import annotations

import math
from collections import Counter
from functools import reduce

from hypothesis import given, settings
from hypothesis import strategies as st

from mathexpr.converter import to_postfix
from mathexpr.errors import MathExprError
from mathexpr.evaluator import evaluate
from mathexpr.tokenizer import Tokenizer
from mathexpr.tokens import GroupingToken

VARIABLES = ("x", "y")
BINDINGS = {"x": 1.5, "y": -0.25}

_leaf = st.sampled_from(["1", "2.5", "0.5", "10", "x", "y"])


def _extend(children: st.SearchStrategy[str]) -> st.SearchStrategy[str]:
    binary = st.tuples(children, st.sampled_from(list("+-*/%^")), children).map(
        lambda t: f"{t[0]} {t[1]} {t[2]}"
    )
    call = st.tuples(
        st.sampled_from(["sin", "COS", "abs", "sqrt", "Exp", "atan"]), children
    ).map(lambda t: f"{t[0]}( {t[1]} )")
    group = st.tuples(st.sampled_from(["( {} )", "[ {} ]", "{{ {} }}", "( {} ]"]), children).map(
        lambda t: t[0].format(t[1])
    )
    return st.one_of(binary, call, group)


expressions = st.recursive(_leaf, _extend, max_leaves=12)

tokenizer = Tokenizer(VARIABLES)


def _same_float(a: float, b: float) -> bool:
    return (math.isnan(a) and math.isnan(b)) or a == b


class TestPipelineProperties:
    """Invariants of the tokenizer -> converter -> evaluator pipeline."""

    @given(expressions)
    @settings(max_examples=200)
    def test_whitespace_insensitive(self, source: str) -> None:
        """Invariant: removing spaces never changes the token sequence."""
        assert tokenizer.tokenize(source) == tokenizer.tokenize(source.replace(" ", ""))

    @given(expressions)
    @settings(max_examples=200)
    def test_postfix_is_permutation(self, source: str) -> None:
        """Invariant: conversion keeps every value-bearing token, drops grouping."""
        infix = tokenizer.tokenize(source)
        postfix = to_postfix(infix)
        assert not any(isinstance(t, GroupingToken) for t in postfix)
        assert Counter(postfix) == Counter(t for t in infix if not isinstance(t, GroupingToken))

    @given(expressions)
    @settings(max_examples=200)
    def test_well_formed_input_always_evaluates(self, source: str) -> None:
        """Invariant: a balanced expression reduces to exactly one float."""
        result = evaluate(to_postfix(tokenizer.tokenize(source)), BINDINGS)
        assert isinstance(result, float)

    @given(expressions)
    @settings(max_examples=100)
    def test_evaluation_is_deterministic(self, source: str) -> None:
        """Invariant: the same postfix and bindings give the same result."""
        postfix = to_postfix(tokenizer.tokenize(source))
        assert _same_float(evaluate(postfix, BINDINGS), evaluate(postfix, BINDINGS))

    @given(st.lists(st.integers(min_value=-1000, max_value=1000).map(abs), min_size=1, max_size=20))
    def test_subtraction_chain_left_to_right(self, numbers: list[int]) -> None:
        """Invariant: a - b - c ... matches a left fold."""
        source = " - ".join(str(n) for n in numbers)
        expected = reduce(lambda a, b: a - b, numbers)
        assert evaluate(to_postfix(tokenizer.tokenize(source))) == float(expected)

    @given(st.text(max_size=60))
    @settings(max_examples=300)
    def test_arbitrary_text_only_raises_library_errors(self, text: str) -> None:
        """Invariant: any input either evaluates or raises a MathExprError."""
        try:
            evaluate(to_postfix(tokenizer.tokenize(text)), BINDINGS)
        except MathExprError:
            pass
