"""
Compiled expressions and the fluent builder around the core pipeline.

Usage:
    from mathexpr import ExpressionBuilder

    expr = ExpressionBuilder("3 * sin(y) - 2 / (x - 2)").with_variables(["x", "y"]).build()
    expr.evaluate(x=4, y=0)   # -1.0
    expr.to_rpn()             # "3 y sin * 2 x 2 - / -"

An ``Expression`` is tokenized and converted once; evaluating it only runs
the stack machine. Expressions are frozen pydantic models, so a compiled
expression can be stored with ``model_dump_json()`` and restored with
``Expression.model_validate_json()`` without re-parsing the source.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from functools import lru_cache
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mathexpr.config import get_settings
from mathexpr.converter import to_postfix
from mathexpr.evaluator import evaluate as evaluate_postfix
from mathexpr.tokenizer import Tokenizer
from mathexpr.tokens import Token, VariableToken, format_tokens

logger = logging.getLogger(__name__)


class Expression(BaseModel):
    """An expression compiled to postfix form, ready for repeated evaluation."""

    source: str = Field(description="Infix source text")
    variables: tuple[str, ...] = Field(default=(), description="Declared variable names")
    postfix: tuple[Token, ...] = Field(description="Tokens in postfix order")
    defaults: tuple[tuple[str, float], ...] = Field(
        default=(), description="(name, value) bindings supplied when the expression was built"
    )

    model_config = ConfigDict(frozen=True, ser_json_inf_nan="constants")

    @field_validator("defaults", mode="before")
    @classmethod
    def _freeze_defaults(cls, v: Any) -> Any:
        if isinstance(v, Mapping):
            return tuple(sorted(v.items()))
        return v

    def __str__(self) -> str:
        return self.source

    @property
    def referenced_variables(self) -> tuple[str, ...]:
        """Variables that actually occur in the expression, in first-use order."""
        seen: dict[str, None] = {}
        for token in self.postfix:
            if isinstance(token, VariableToken):
                seen.setdefault(token.name, None)
        return tuple(seen)

    def to_rpn(self) -> str:
        """Postfix form as space-separated text."""
        return format_tokens(self.postfix)

    def evaluate(
        self, bindings: Mapping[str, float] | None = None, /, **kwargs: float
    ) -> float:
        """Evaluate with ``defaults`` overridden by ``bindings`` then ``kwargs``.

        Raises:
            UnboundVariable: If a referenced variable has no value.
            MalformedExpression: If the postfix sequence is inconsistent.
        """
        values: dict[str, float] = {**dict(self.defaults), **(bindings or {}), **kwargs}
        return evaluate_postfix(self.postfix, values)


def _compile(source: str, variables: tuple[str, ...]) -> Expression:
    logger.debug("Compiling expression %r with variables %s", source, variables)
    tokens = Tokenizer(variables).tokenize(source)
    return Expression(source=source, variables=variables, postfix=tuple(to_postfix(tokens)))


_cached_compile: Callable[[str, tuple[str, ...]], Expression] | None = None


def _compiler() -> Callable[[str, tuple[str, ...]], Expression]:
    global _cached_compile
    if _cached_compile is None:
        size = get_settings().cache_size
        logger.debug("Compile cache size: %d", size)
        _cached_compile = lru_cache(maxsize=size)(_compile)
    return _cached_compile


def compile_expression(source: str, variables: Iterable[str] = ()) -> Expression:
    """Tokenize and convert ``source`` once, reusing earlier results.

    Results are memoised on ``(source, sorted variable names)``.

    Raises:
        InvalidVariableName, UnknownIdentifier, UnparseableExpression,
        MismatchedParenthesis
    """
    if isinstance(variables, str):
        variables = (variables,)
    return _compiler()(source, tuple(sorted(set(variables))))


def clear_cache() -> None:
    """Drop all memoised compilations and re-read the cache size on next use."""
    global _cached_compile
    _cached_compile = None


def cache_info() -> Any:
    """``functools`` cache statistics for the compile cache."""
    return _compiler().cache_info()  # type: ignore[attr-defined]


class ExpressionBuilder:
    """
    Fluent builder for :class:`Expression`.

    Variables can be declared by name only, or with a default value that is
    used whenever ``evaluate`` is called without a binding for it.
    """

    def __init__(self, expression: str) -> None:
        self._expression = expression
        self._variables: dict[str, float | None] = {}

    def with_variable(self, name: str, value: float | None = None) -> ExpressionBuilder:
        self._variables[name] = value
        return self

    def with_variables(self, variables: Mapping[str, float] | Iterable[str]) -> ExpressionBuilder:
        """Declare several variables, with values when given a mapping."""
        if isinstance(variables, str):
            variables = (variables,)
        if isinstance(variables, Mapping):
            for name, value in variables.items():
                self.with_variable(name, value)
        else:
            for name in variables:
                self.with_variable(name)
        return self

    def with_variable_names(self, *names: str) -> ExpressionBuilder:
        return self.with_variables(names)

    def build(self) -> Expression:
        """Compile the expression.

        Raises:
            InvalidVariableName, UnknownIdentifier, UnparseableExpression,
            MismatchedParenthesis
        """
        compiled = compile_expression(self._expression, self._variables)
        defaults = tuple(
            sorted((k, float(v)) for k, v in self._variables.items() if v is not None)
        )
        if defaults:
            compiled = compiled.model_copy(update={"defaults": defaults})
        return compiled
