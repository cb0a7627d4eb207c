"""
mathexpr CLI - Entry point.

Commands:
- eval: evaluate an expression with variable bindings
- rpn: print the postfix (Reverse Polish) form of an expression
- tokens: show the infix token sequence as a table
"""

from __future__ import annotations

import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from mathexpr._version import get_version
from mathexpr.config import get_settings, parse_log_level
from mathexpr.errors import MathExprError
from mathexpr.expression import compile_expression
from mathexpr.tokenizer import Tokenizer
from mathexpr.tokens import format_tokens

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="Evaluate mathematical expressions",
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"mathexpr {get_version()}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            help="Logging level. Defaults to MATHEXPR_LOG_LEVEL or WARNING.",
        ),
    ] = None,
) -> None:
    """Evaluate mathematical expressions."""
    level = parse_log_level(log_level) if log_level else get_settings().log_level
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _parse_bindings(assignments: list[str]) -> dict[str, float]:
    """Parse ``name=value`` options into bindings."""
    bindings: dict[str, float] = {}
    for item in assignments:
        name, sep, raw = item.partition("=")
        name = name.strip()
        if not sep or not name:
            raise typer.BadParameter(f"Expected name=value, got {item!r}", param_hint="--var")
        try:
            bindings[name] = float(raw)
        except ValueError:
            raise typer.BadParameter(
                f"Value for {name!r} is not a number: {raw!r}", param_hint="--var"
            ) from None
    return bindings


def _fail(e: MathExprError) -> typer.Exit:
    logger.debug("Expression failed: %r", e)
    typer.echo(f"Error: {e}", err=True)
    return typer.Exit(code=1)


@app.command(name="eval")
def eval_command(
    expression: Annotated[str, typer.Argument(help="Infix expression, e.g. '2 * x + 1'")],
    var: Annotated[
        list[str] | None,
        typer.Option("--var", "-v", help="Variable binding as name=value (repeatable)"),
    ] = None,
) -> None:
    """
    Evaluate an expression.

    Examples:
        mathexpr eval "3 + 4 * 2"                 # 11.0
        mathexpr eval "sin(x) ^ 2" -v x=1.5
    """
    bindings = _parse_bindings(var or [])
    try:
        result = compile_expression(expression, bindings).evaluate(bindings)
    except MathExprError as e:
        raise _fail(e) from e
    typer.echo(str(result))


@app.command(name="rpn")
def rpn_command(
    expression: Annotated[str, typer.Argument(help="Infix expression")],
    declare: Annotated[
        list[str] | None,
        typer.Option("--declare", "-d", help="Declare a variable name (repeatable)"),
    ] = None,
) -> None:
    """Print the postfix (Reverse Polish) form of an expression."""
    try:
        compiled = compile_expression(expression, declare or [])
    except MathExprError as e:
        raise _fail(e) from e
    typer.echo(compiled.to_rpn())


@app.command(name="tokens")
def tokens_command(
    expression: Annotated[str, typer.Argument(help="Infix expression")],
    declare: Annotated[
        list[str] | None,
        typer.Option("--declare", "-d", help="Declare a variable name (repeatable)"),
    ] = None,
) -> None:
    """Show the infix tokens of an expression."""
    try:
        tokens = Tokenizer(declare or []).tokenize(expression)
    except MathExprError as e:
        raise _fail(e) from e

    table = Table(title=escape(format_tokens(tokens)) or "(empty)")
    table.add_column("#", justify="right")
    table.add_column("Kind")
    table.add_column("Token")
    for index, token in enumerate(tokens):
        table.add_row(str(index), str(token.kind), escape(str(token)))
    console.print(table)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
