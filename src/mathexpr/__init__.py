"""
mathexpr - embeddable evaluator for mathematical expressions.

Tokenizer, shunting-yard converter, and stack-machine evaluator for infix
expressions over named float variables.

Usage:
    from mathexpr import build_tokenizer, evaluate, to_postfix

    tokens = build_tokenizer(["x"]).tokenize("2 * sin(x) + 1")
    postfix = to_postfix(tokens)      # compute once
    evaluate(postfix, {"x": 0.0})     # 1.0, evaluate many times
"""

from __future__ import annotations

from mathexpr._version import get_version
from mathexpr.converter import to_postfix
from mathexpr.errors import (
    EvaluationError,
    InvalidNumberLiteral,
    InvalidVariableName,
    MalformedExpression,
    MathExprError,
    MismatchedParenthesis,
    TokenizeError,
    UnboundVariable,
    UnknownIdentifier,
    UnparseableExpression,
)
from mathexpr.evaluator import evaluate
from mathexpr.expression import Expression, ExpressionBuilder, compile_expression
from mathexpr.tokenizer import Tokenizer, build_tokenizer, tokenize
from mathexpr.tokens import (
    FunctionToken,
    GroupingToken,
    NumberToken,
    OperatorToken,
    Token,
    TokenKind,
    VariableToken,
)

__version__ = get_version()

__all__ = [
    "__version__",
    # Pipeline
    "build_tokenizer",
    "evaluate",
    "to_postfix",
    "tokenize",
    "Tokenizer",
    # Facade
    "compile_expression",
    "Expression",
    "ExpressionBuilder",
    # Tokens
    "FunctionToken",
    "GroupingToken",
    "NumberToken",
    "OperatorToken",
    "Token",
    "TokenKind",
    "VariableToken",
    # Errors
    "EvaluationError",
    "InvalidNumberLiteral",
    "InvalidVariableName",
    "MalformedExpression",
    "MathExprError",
    "MismatchedParenthesis",
    "TokenizeError",
    "UnboundVariable",
    "UnknownIdentifier",
    "UnparseableExpression",
]
