"""
Stack-machine evaluator for postfix token sequences.

Pure evaluation: each call owns its value stack, so one postfix sequence
can be evaluated concurrently with different bindings. Numeric edge cases
are not guarded; division by zero and out-of-domain inputs yield the
IEEE-754 result (``inf``, ``-inf`` or ``nan``).
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from mathexpr.errors import MalformedExpression, UnboundVariable
from mathexpr.tokens import (
    FunctionToken,
    GroupingToken,
    NumberToken,
    OperatorToken,
    Token,
    VariableToken,
)


def evaluate(postfix: Sequence[Token], bindings: Mapping[str, float] | None = None) -> float:
    """Evaluate a postfix token sequence against variable bindings.

    Args:
        postfix: Tokens in postfix order, as produced by ``to_postfix``.
        bindings: Variable name -> value. Only variables that appear in
            ``postfix`` need a binding.

    Returns:
        The computed value.

    Raises:
        UnboundVariable: If a referenced variable has no binding.
        MalformedExpression: If the sequence does not reduce to one value.
    """
    values = bindings or {}
    stack: list[float] = []

    for token in postfix:
        match token:
            case NumberToken(value=value):
                stack.append(value)

            case VariableToken(name=name):
                if name not in values:
                    raise UnboundVariable(name)
                stack.append(float(values[name]))

            case OperatorToken() | FunctionToken():
                arity = token.arity
                if len(stack) < arity:
                    raise MalformedExpression(
                        f"'{token}' needs {arity} operand(s) but only {len(stack)} available",
                        depth=len(stack),
                    )
                # last pushed value is the last argument
                args = stack[-arity:]
                del stack[-arity:]
                stack.append(token.apply(*args))

            case GroupingToken():
                raise MalformedExpression(
                    f"Grouping token '{token}' in postfix sequence", depth=len(stack)
                )

            case _:
                raise MalformedExpression(f"Not a token: {token!r}", depth=len(stack))

    if len(stack) != 1:
        raise MalformedExpression(
            f"Expression reduced to {len(stack)} values instead of 1", depth=len(stack)
        )
    return stack.pop()
