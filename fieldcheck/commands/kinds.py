"""Rule inspection commands: list constraint kinds, explain one annotation."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..checkers import parse_bounds, parse_int
from ..errors import ConstraintError
from ..rules import KIND_EXPLANATIONS, ConstraintKind, parse_rule


def run_kinds() -> int:
    """Print the table of built-in constraint kinds."""
    console = Console()

    table = Table(title="Constraint kinds")
    table.add_column("Token", style="bold")
    table.add_column("Kind")
    table.add_column("Parameter")
    table.add_column("Checks")

    for kind in ConstraintKind:
        parameter, checks = KIND_EXPLANATIONS[kind]
        table.add_row(kind.value, kind.name.lower(), parameter, checks)

    console.print(table)
    return 0


def run_explain(annotation: str) -> int:
    """Parse one annotation and describe it, or report why it is malformed.

    Returns:
        Exit code (0 = well-formed, 1 = malformed)
    """
    console = Console()

    try:
        rule = parse_rule(annotation)
        if rule.kind is ConstraintKind.RANGE:
            low, high = parse_bounds(rule.parameter)
            parsed = f"lo={low}, hi={high}"
        elif rule.kind is ConstraintKind.MEMBERSHIP:
            parsed = ", ".join(repr(t) for t in rule.parameter.split(",")) if rule.parameter else "(empty: admits nothing)"
        else:
            parsed = f"n={parse_int(rule.parameter)}"
    except ConstraintError as e:
        console.print(f"✗ {escape(annotation)}: {type(e).__name__} - {e.message}", style="bold red")
        return 1

    _, checks = KIND_EXPLANATIONS[rule.kind]
    console.print(f"✓ {escape(annotation)}", style="bold green")
    console.print(f"  Kind: {rule.kind.name.lower()} ({rule.kind.value})")
    console.print(f"  Parameter: {escape(parsed)}")
    console.print(f"  {checks}", style="dim")
    return 0
