"""
Shunting-yard conversion from infix to postfix token order.

The output holds the same numbers, variables, operators and functions as
the input, reordered so that every operator and function follows its
operands. Grouping tokens are consumed and never appear in the output.
No arity checking happens here; a wrong argument count shows up at
evaluation time.
"""

from __future__ import annotations

from collections.abc import Sequence

from mathexpr.errors import MismatchedParenthesis
from mathexpr.tokens import (
    FunctionToken,
    GroupingKind,
    GroupingToken,
    NumberToken,
    OperatorToken,
    Token,
    VariableToken,
)


def to_postfix(tokens: Sequence[Token]) -> list[Token]:
    """Reorder an infix token sequence into postfix (RPN) order.

    Raises:
        MismatchedParenthesis: If grouping tokens do not balance.
    """
    output: list[Token] = []
    stack: list[Token] = []

    for index, token in enumerate(tokens):
        match token:
            case NumberToken() | VariableToken():
                output.append(token)

            case FunctionToken():
                stack.append(token)

            case OperatorToken():
                while stack and _pops_before(stack[-1], token):
                    output.append(stack.pop())
                stack.append(token)

            case GroupingToken() if token.grouping == GroupingKind.OPEN:
                stack.append(token)

            case GroupingToken():
                _close_group(stack, output, index)

            case _:
                raise TypeError(f"Not a token: {token!r}")

    while stack:
        top = stack.pop()
        if isinstance(top, GroupingToken):
            raise MismatchedParenthesis("Unclosed grouping at end of expression")
        output.append(top)

    return output


def _pops_before(top: Token, incoming: OperatorToken) -> bool:
    """Whether the stacked ``top`` binds tighter than ``incoming``.

    Equal precedence pops only when the incoming operator is
    left-associative, so ``2^3^2`` groups right and ``2-3-2`` groups left.
    """
    if not isinstance(top, OperatorToken):
        return False
    if incoming.definition.is_left_associative:
        return top.precedence >= incoming.precedence
    return top.precedence > incoming.precedence


def _close_group(stack: list[Token], output: list[Token], index: int) -> None:
    """Pop up to and including the matching open group; emit a pending function."""
    while True:
        if not stack:
            raise MismatchedParenthesis(f"Unmatched closing bracket at token {index}", offset=index)
        top = stack.pop()
        if isinstance(top, GroupingToken):
            break
        output.append(top)

    if stack and isinstance(stack[-1], FunctionToken):
        output.append(stack.pop())
