"""
Error types for mathexpr tokenizing, conversion, and evaluation.

Every error is terminal: a call either fully succeeds or raises one of
these. Each error carries the context a caller needs to report a precise
diagnostic (character and offset, or variable name) as attributes.
"""


class MathExprError(Exception):
    """Base exception for all mathexpr errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidVariableName(MathExprError):
    """
    Raised when a declared variable name collides with a built-in function.

    Raised at tokenizer construction, before any text is scanned.
    """

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Variable '{name}' can not have the same name as a function")


class TokenizeError(MathExprError):
    """
    Raised when expression text cannot be broken into tokens.

    Attributes:
        char: The offending character
        offset: 0-based index of ``char`` in the expression text
    """

    def __init__(self, message: str, char: str, offset: int):
        self.char = char
        self.offset = offset
        super().__init__(message)


class UnparseableExpression(TokenizeError):
    """
    Raised when a character belongs to no token class.

    Examples:
    - ``"1 # 2"``
    - ``"2\\t+ 1"`` (only the space character is ignorable)
    """

    def __init__(self, char: str, offset: int, message: str | None = None):
        super().__init__(message or f"Unable to parse character {char!r} at offset {offset}", char, offset)


class InvalidNumberLiteral(UnparseableExpression):
    """Raised when a run of digits and dots is not a valid float, e.g. ``"1.2.3"``."""

    def __init__(self, literal: str, offset: int):
        self.literal = literal
        super().__init__(
            literal[0],
            offset,
            f"Invalid number literal {literal!r} at offset {offset}",
        )


class UnknownIdentifier(TokenizeError):
    """
    Raised when an identifier is neither a declared variable nor a function.

    ``char`` and ``offset`` point at the first character of the identifier.
    """

    def __init__(self, identifier: str, offset: int):
        self.identifier = identifier
        super().__init__(
            f"Unknown identifier {identifier!r} at offset {offset}",
            identifier[0],
            offset,
        )


class MismatchedParenthesis(MathExprError):
    """
    Raised when grouping delimiters do not balance.

    Attributes:
        offset: Index of the offending grouping token in the infix token
            sequence, or None when the imbalance is only found at the end
    """

    def __init__(self, message: str = "Mismatched parenthesis", offset: int | None = None):
        self.offset = offset
        super().__init__(message)


class EvaluationError(MathExprError):
    """Base class for errors raised while evaluating a postfix sequence."""

    pass


class UnboundVariable(EvaluationError):
    """Raised when the expression references a variable with no binding."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"No value has been set for variable '{name}'")


class MalformedExpression(EvaluationError):
    """
    Raised when a postfix sequence does not reduce to exactly one value.

    Attributes:
        depth: Size of the value stack when the problem was detected
    """

    def __init__(self, message: str, depth: int = 0):
        self.depth = depth
        super().__init__(message)
