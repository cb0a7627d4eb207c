"""
Token model for mathexpr.

A token is a closed tagged union of five frozen pydantic models, told apart
by their ``kind`` field:

- NumberToken: a parsed numeric literal
- VariableToken: a reference to a declared variable, resolved at evaluation
- OperatorToken: one of the fixed binary operators (+ - * / % ^)
- FunctionToken: one of the fixed unary built-in functions
- GroupingToken: an open or close bracket, any of ()[]{}

Operator and function metadata (precedence, associativity, arity, numeric
implementation) is not stored on the token; it is looked up from the static
tables in :mod:`mathexpr.operators` by symbol or name. That keeps tokens
small, hashable, and JSON round-trippable so compiled postfix sequences can
be cached outside the process.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from mathexpr.operators import (
    CLOSE_BRACKETS,
    OPEN_BRACKETS,
    OPERATORS,
    Associativity,
    FunctionDef,
    OperatorDef,
    get_function,
    get_operator,
    is_function_name,
)


class TokenKind(StrEnum):
    """Discriminator values for the token union."""

    NUMBER = "number"
    VARIABLE = "variable"
    OPERATOR = "operator"
    FUNCTION = "function"
    GROUPING = "grouping"


class GroupingKind(StrEnum):
    """Whether a grouping token opens or closes a group."""

    OPEN = "open"
    CLOSE = "close"


# ---------------------------------------------------------------------------
# Token variants
# ---------------------------------------------------------------------------


class NumberToken(BaseModel):
    """A numeric literal."""

    kind: Literal["number"] = "number"
    value: float = Field(description="Literal value")

    model_config = ConfigDict(frozen=True, ser_json_inf_nan="constants")

    def __str__(self) -> str:
        if self.value.is_integer():
            return str(int(self.value))
        return repr(self.value)


class VariableToken(BaseModel):
    """A variable reference. Carries only the name."""

    kind: Literal["variable"] = "variable"
    name: str = Field(description="Declared variable name")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.name


class OperatorToken(BaseModel):
    """A binary operator, identified by its symbol."""

    kind: Literal["operator"] = "operator"
    symbol: str = Field(description="Operator character")

    model_config = ConfigDict(frozen=True)

    @field_validator("symbol")
    @classmethod
    def _known_symbol(cls, v: str) -> str:
        if v not in OPERATORS:
            raise ValueError(f"Unknown operator: {v!r}")
        return v

    def __str__(self) -> str:
        return self.symbol

    @property
    def definition(self) -> OperatorDef:
        return get_operator(self.symbol)

    @property
    def precedence(self) -> int:
        return self.definition.precedence

    @property
    def associativity(self) -> Associativity:
        return self.definition.associativity

    @property
    def arity(self) -> int:
        return self.definition.arity

    @property
    def apply(self) -> Callable[..., float]:
        return self.definition.apply


class FunctionToken(BaseModel):
    """A built-in function call. The name is stored in lower case."""

    kind: Literal["function"] = "function"
    name: str = Field(description="Function keyword")

    model_config = ConfigDict(frozen=True)

    @field_validator("name")
    @classmethod
    def _canonical_name(cls, v: str) -> str:
        if not is_function_name(v):
            raise ValueError(f"Unknown function: {v!r}")
        return v.lower()

    def __str__(self) -> str:
        return self.name

    @property
    def definition(self) -> FunctionDef:
        return get_function(self.name)

    @property
    def arity(self) -> int:
        return self.definition.arity

    @property
    def apply(self) -> Callable[..., float]:
        return self.definition.apply


class GroupingToken(BaseModel):
    """
    A grouping delimiter.

    The three bracket families are interchangeable: ``(1+2]`` groups the
    same way as ``(1+2)``. Only count and order have to balance.
    """

    kind: Literal["grouping"] = "grouping"
    bracket: str = Field(description="One of ()[]{}")

    model_config = ConfigDict(frozen=True)

    @field_validator("bracket")
    @classmethod
    def _known_bracket(cls, v: str) -> str:
        if v not in OPEN_BRACKETS and v not in CLOSE_BRACKETS:
            raise ValueError(f"Not a bracket: {v!r}")
        return v

    def __str__(self) -> str:
        return self.bracket

    @property
    def grouping(self) -> GroupingKind:
        return GroupingKind.OPEN if self.bracket in OPEN_BRACKETS else GroupingKind.CLOSE


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Token = Annotated[
    NumberToken | VariableToken | OperatorToken | FunctionToken | GroupingToken,
    Field(discriminator="kind"),
]

# Nested models do not carry their own ser_json_inf_nan; the outermost config wins.
TokenList: TypeAdapter[list[Token]] = TypeAdapter(
    list[Token], config=ConfigDict(ser_json_inf_nan="constants")
)


def is_number(token: Token) -> bool:
    return isinstance(token, NumberToken)


def is_variable(token: Token) -> bool:
    return isinstance(token, VariableToken)


def is_operator(token: Token) -> bool:
    return isinstance(token, OperatorToken)


def is_function(token: Token) -> bool:
    return isinstance(token, FunctionToken)


def is_grouping(token: Token) -> bool:
    return isinstance(token, GroupingToken)


def is_open(token: Token) -> bool:
    return isinstance(token, GroupingToken) and token.grouping == GroupingKind.OPEN


def is_close(token: Token) -> bool:
    return isinstance(token, GroupingToken) and token.grouping == GroupingKind.CLOSE


def is_value_bearing(token: Token) -> bool:
    """True for every token that survives infix-to-postfix conversion."""
    return not isinstance(token, GroupingToken)


def format_tokens(tokens: list[Token] | tuple[Token, ...]) -> str:
    """Render a token sequence as space-separated text, e.g. ``"3 4 2 * +"``."""
    return " ".join(str(t) for t in tokens)
