"""
Tokenizer for mathexpr infix expressions.

Breaks expression text into a flat list of tokens in a single left-to-right
pass. Numbers and identifiers are consumed greedily (longest run); every
other token is a single character.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from mathexpr.errors import (
    InvalidNumberLiteral,
    InvalidVariableName,
    UnknownIdentifier,
    UnparseableExpression,
)
from mathexpr.operators import CLOSE_BRACKETS, OPEN_BRACKETS, is_function_name, is_operator_symbol
from mathexpr.tokens import (
    FunctionToken,
    GroupingToken,
    NumberToken,
    OperatorToken,
    Token,
    VariableToken,
)

# Any run of digits and dots; well-formedness is checked when converting
_NUMBER_RE = re.compile(r"[0-9.]+")
# Identifier: letter or underscore followed by alphanumerics/underscores
_IDENT_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


class Tokenizer:
    """
    Tokenizer bound to a fixed set of declared variable names.

    Args:
        variable_names: Identifiers to treat as variables. A name that
            case-insensitively equals a built-in function is rejected.

    Raises:
        InvalidVariableName: If a declared name collides with a function.
    """

    __slots__ = ("_variables",)

    def __init__(self, variable_names: Iterable[str] | None = None) -> None:
        if isinstance(variable_names, str):
            variable_names = (variable_names,)
        names = frozenset(variable_names or ())
        for name in sorted(names):
            if is_function_name(name):
                raise InvalidVariableName(name)
        self._variables = names

    @property
    def variables(self) -> frozenset[str]:
        return self._variables

    def __repr__(self) -> str:
        return f"Tokenizer(variables={sorted(self._variables)!r})"

    def tokenize(self, text: str) -> list[Token]:
        """Tokenize an infix expression.

        Raises:
            UnknownIdentifier: An identifier is neither declared nor a function.
            UnparseableExpression: A character belongs to no token class.
        """
        tokens: list[Token] = []
        i = 0
        n = len(text)

        while i < n:
            c = text[i]

            if c == " ":
                i += 1
                continue

            if c.isascii() and (c.isdigit() or c == "."):
                m = _NUMBER_RE.match(text, i)
                assert m is not None
                tokens.append(_number(m.group(0), i))
                i = m.end()
                continue

            if c.isascii() and (c.isalpha() or c == "_"):
                m = _IDENT_RE.match(text, i)
                assert m is not None
                tokens.append(self._identifier(m.group(0), i))
                i = m.end()
                continue

            if is_operator_symbol(c):
                tokens.append(OperatorToken(symbol=c))
                i += 1
                continue

            if c in OPEN_BRACKETS or c in CLOSE_BRACKETS:
                tokens.append(GroupingToken(bracket=c))
                i += 1
                continue

            raise UnparseableExpression(c, i)

        return tokens

    def _identifier(self, word: str, pos: int) -> Token:
        """Classify an identifier: declared variable first, then function."""
        if word in self._variables:
            return VariableToken(name=word)
        if is_function_name(word):
            return FunctionToken(name=word)
        raise UnknownIdentifier(word, pos)


def _number(literal: str, pos: int) -> NumberToken:
    try:
        value = float(literal)
    except ValueError:
        raise InvalidNumberLiteral(literal, pos) from None
    return NumberToken(value=value)


def build_tokenizer(variable_names: Iterable[str] | None = None) -> Tokenizer:
    """Create a tokenizer for the given declared variable names."""
    return Tokenizer(variable_names)


def tokenize(text: str, variable_names: Iterable[str] | None = None) -> list[Token]:
    """Tokenize ``text`` with a one-off tokenizer."""
    return Tokenizer(variable_names).tokenize(text)
