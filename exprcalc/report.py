"""exprcalc report — Rich rendering for tokens, syntax trees, errors and checks."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from exprcalc.errors import EvaluationError
from exprcalc.models import BinaryOp, CheckSummary, Literal, Node, Token, TokenKind, UnaryMinus
from exprcalc.runner import format_result

_VERDICT_COLORS = {"pass": "green", "partial": "yellow", "fail": "red"}


def render_error(text: str, error: EvaluationError, console: Console) -> None:
    """Print an error, with a caret under the offending character if known."""
    console.print(f"[red]Error:[/red] {escape(str(error))}")
    if error.position is not None:
        console.print(f"  {escape(text)}", highlight=False)
        console.print(f"  {' ' * error.position}[bold red]^[/bold red]")


def render_tokens(tokens: list[Token], console: Console) -> None:
    """Render a token table."""
    table = Table(title="Tokens", show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Kind", style="cyan")
    table.add_column("Text")
    table.add_column("Pos", justify="right")
    table.add_column("Value", justify="right", style="green")

    for i, tok in enumerate(tokens):
        value = format_result(tok.value) if tok.kind == TokenKind.NUMBER else ""
        table.add_row(str(i), tok.kind.name, escape(tok.text), str(tok.pos), value)

    console.print(table)


def _label(node: Node) -> str:
    if isinstance(node, Literal):
        return f"[green]{format_result(node.value)}[/green]"
    if isinstance(node, UnaryMinus):
        return "[cyan]neg[/cyan]"
    return f"[cyan]{node.op.name.lower()}[/cyan] [dim]{escape(node.op.value)}[/dim]"


def build_tree(node: Node) -> Tree:
    """Build a Rich Tree mirroring the AST.

    Iterative, like the evaluator, so left-deep chains render without
    recursion.
    """
    root = Tree(_label(node))
    pending: list[tuple[Node, Tree]] = [(node, root)]
    while pending:
        current, branch = pending.pop()
        if isinstance(current, UnaryMinus):
            children = [current.operand]
        elif isinstance(current, BinaryOp):
            children = [current.left, current.right]
        else:
            children = []
        for child in children:
            pending.append((child, branch.add(_label(child))))
    return root


def render_tree(node: Node, console: Console) -> None:
    console.print(build_tree(node))


def render_summary(summary: CheckSummary, console: Console) -> None:
    """Render a pass/fail table for a corpus check."""
    if not summary.results:
        console.print(f"[yellow]No cases found in: {summary.source}[/yellow]")
        return

    table = Table(title=f"Check: {summary.source}", show_header=True, header_style="bold")
    table.add_column("Expression", min_width=16)
    table.add_column("Expected", justify="right")
    table.add_column("Actual", justify="right")
    table.add_column("Verdict", justify="center")

    def _fmt(v) -> str:
        if v is None:
            return "--"
        if isinstance(v, float):
            return format_result(v)
        return str(v)

    for r in summary.results:
        color = _VERDICT_COLORS[r.verdict]
        table.add_row(
            escape(r.expression),
            _fmt(r.expected),
            _fmt(r.actual),
            f"[{color}]{r.verdict}[/{color}]",
        )

    color = _VERDICT_COLORS.get(summary.verdict, "white")
    console.print()
    console.print(table)
    console.print(
        f"  {summary.passed}/{summary.total} passed ([{color}]{summary.verdict}[/{color}])"
    )
    console.print()
