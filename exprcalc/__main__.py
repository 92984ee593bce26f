"""CLI for the exprcalc expression evaluator.

Usage:
    python -m exprcalc eval "5(2*5+3)"          # Print the result (65)
    python -m exprcalc eval -- "-2^2"           # Leading minus (-4)
    python -m exprcalc eval "1/3" --digits 4    # Round output (0.3333)
    python -m exprcalc tokens "[4](3)"          # Show the token stream
    python -m exprcalc tree "2^3^2"             # Show the syntax tree
    python -m exprcalc check                    # Run the built-in reference corpus
    python -m exprcalc check --file cases.txt   # Run a corpus file
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from exprcalc.corpus import BUILTIN_CASES, CorpusFormatError, load_corpus
from exprcalc.environment import Settings, load_settings
from exprcalc.errors import EvaluationError
from exprcalc.evaluator import evaluate
from exprcalc.parser import parse
from exprcalc.report import render_error, render_summary, render_tokens, render_tree
from exprcalc.runner import check_corpus, format_result, run
from exprcalc.tokenizer import tokenize

app = typer.Typer(
    name="exprcalc",
    help="Arithmetic expression evaluator",
    no_args_is_help=True,
)
console = Console(stderr=True)

# Lets "-5 + 3" through as an argument instead of an unknown option.
_EXPRESSION_CONTEXT = {"ignore_unknown_options": True}


def _settings(max_depth: Optional[int] = None, digits: Optional[int] = None) -> Settings:
    """Environment settings with CLI overrides applied."""
    base = load_settings()
    return Settings(
        max_depth=max_depth if max_depth is not None else base.max_depth,
        pow_snap_tolerance=base.pow_snap_tolerance,
        digits=digits if digits is not None else base.digits,
    )


@app.command("eval", context_settings=_EXPRESSION_CONTEXT)
def cmd_eval(
    expression: str = typer.Argument(help="Expression, e.g. '4(2(3))'"),
    digits: Optional[int] = typer.Option(None, "--digits", "-d", min=1, help="Significant digits to print"),
    max_depth: Optional[int] = typer.Option(None, "--max-depth", min=1, help="Nesting limit"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show tokens and syntax tree"),
) -> None:
    """Evaluate an expression and print the result."""
    settings = _settings(max_depth=max_depth, digits=digits)
    try:
        if verbose:
            tokens = tokenize(expression)
            render_tokens(tokens, console)
            tree = parse(tokens, settings)
            render_tree(tree, console)
            value = evaluate(tree, settings)
        else:
            value = run(expression, settings)
    except EvaluationError as e:
        render_error(expression, e, console)
        raise typer.Exit(1)

    typer.echo(format_result(value, settings.digits))


@app.command("tokens", context_settings=_EXPRESSION_CONTEXT)
def cmd_tokens(
    expression: str = typer.Argument(help="Expression to tokenize"),
) -> None:
    """Show the token stream for an expression."""
    try:
        tokens = tokenize(expression)
    except EvaluationError as e:
        render_error(expression, e, console)
        raise typer.Exit(1)
    render_tokens(tokens, console)


@app.command("tree", context_settings=_EXPRESSION_CONTEXT)
def cmd_tree(
    expression: str = typer.Argument(help="Expression to parse"),
    max_depth: Optional[int] = typer.Option(None, "--max-depth", min=1, help="Nesting limit"),
) -> None:
    """Show the syntax tree for an expression."""
    settings = _settings(max_depth=max_depth)
    try:
        tree = parse(tokenize(expression), settings)
    except EvaluationError as e:
        render_error(expression, e, console)
        raise typer.Exit(1)
    render_tree(tree, console)


@app.command("check")
def cmd_check(
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="Corpus file (EXPRESSION => EXPECTED per line)"),
    json_out: Optional[Path] = typer.Option(None, "--json", help="Also write results as JSON"),
) -> None:
    """Run a reference corpus and compare answers."""
    if file is None:
        cases, source = BUILTIN_CASES, "builtin"
    else:
        try:
            cases, source = load_corpus(file), str(file)
        except (CorpusFormatError, OSError) as e:
            console.print(f"[red]Error:[/red] {escape(str(e))}")
            raise typer.Exit(1)

    summary = check_corpus(cases, source=source, settings=_settings())
    render_summary(summary, console)

    if json_out:
        summary.save(json_out)
        console.print(f"Results written to {json_out}")

    if summary.passed != summary.total:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
