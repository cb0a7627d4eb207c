"""
Static operator and function tables.

Both tables are built once at import time and exposed as read-only
mappings. Precedence, associativity, arity and the numeric implementation
are fixed per symbol/name; there is no registration API.

Numeric implementations run on numpy float64 scalars with floating-point
errors ignored, so division by zero, out-of-domain inputs and overflow
produce ``inf``/``nan`` instead of raising.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType

import numpy as np


class Associativity(StrEnum):
    """Grouping direction for chains of equal-precedence operators."""

    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class OperatorDef:
    """Definition of a binary infix operator."""

    symbol: str
    precedence: int
    associativity: Associativity
    arity: int
    apply: Callable[..., float]

    @property
    def is_left_associative(self) -> bool:
        return self.associativity == Associativity.LEFT


@dataclass(frozen=True)
class FunctionDef:
    """Definition of a built-in function."""

    name: str
    arity: int
    apply: Callable[..., float]


def _float64(ufunc: Callable[..., np.float64]) -> Callable[..., float]:
    """Wrap a numpy ufunc as a plain ``float`` function with IEEE semantics."""

    def apply(*args: float) -> float:
        with np.errstate(all="ignore"):
            return float(ufunc(*(np.float64(a) for a in args)))

    apply.__name__ = getattr(ufunc, "__name__", "apply")
    return apply


# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------

OPERATORS: MappingProxyType[str, OperatorDef] = MappingProxyType(
    {
        "+": OperatorDef("+", 1, Associativity.LEFT, 2, _float64(np.add)),
        "-": OperatorDef("-", 1, Associativity.LEFT, 2, _float64(np.subtract)),
        "*": OperatorDef("*", 2, Associativity.LEFT, 2, _float64(np.multiply)),
        "/": OperatorDef("/", 2, Associativity.LEFT, 2, _float64(np.divide)),
        # fmod keeps the sign of the dividend, unlike Python's %
        "%": OperatorDef("%", 2, Associativity.LEFT, 2, _float64(np.fmod)),
        "^": OperatorDef("^", 3, Associativity.RIGHT, 2, _float64(np.power)),
    }
)

# ---------------------------------------------------------------------------
# Functions (all unary)
# ---------------------------------------------------------------------------

FUNCTIONS: MappingProxyType[str, FunctionDef] = MappingProxyType(
    {
        name: FunctionDef(name, 1, _float64(ufunc))
        for name, ufunc in (
            ("abs", np.abs),
            ("acos", np.arccos),
            ("asin", np.arcsin),
            ("atan", np.arctan),
            ("cbrt", np.cbrt),
            ("ceil", np.ceil),
            ("cos", np.cos),
            ("cosh", np.cosh),
            ("exp", np.exp),
            ("expm1", np.expm1),
            ("floor", np.floor),
            ("log", np.log),
            ("sin", np.sin),
            ("sinh", np.sinh),
            ("sqrt", np.sqrt),
            ("tan", np.tan),
            ("tanh", np.tanh),
        )
    }
)

FUNCTION_NAMES: frozenset[str] = frozenset(FUNCTIONS)

OPEN_BRACKETS: frozenset[str] = frozenset("([{")
CLOSE_BRACKETS: frozenset[str] = frozenset(")]}")


def is_operator_symbol(char: str) -> bool:
    return char in OPERATORS


def is_function_name(name: str) -> bool:
    """Case-insensitive check against the built-in function keywords."""
    return name.lower() in FUNCTION_NAMES


def get_operator(symbol: str) -> OperatorDef:
    """Look up an operator definition. Raises KeyError for unknown symbols."""
    return OPERATORS[symbol]


def get_function(name: str) -> FunctionDef:
    """Look up a function definition case-insensitively. Raises KeyError."""
    return FUNCTIONS[name.lower()]
