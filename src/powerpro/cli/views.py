"""
CLI view formatters using Rich for pretty console output.

Handles table formatting of prescribed sets, next-set decisions and
progression results.
"""

from rich.console import Console
from rich.table import Table

from ..core.models import GeneratedSet, MaxValue
from ..core.progressions.base import ProgressionResult
from ..core.set_schemes.base import NextSetDecision

console = Console()


def _fmt_weight(weight: float) -> str:
    return f"{weight:g}"


def format_sets_table(lift_id: str, sets: list[GeneratedSet]) -> Table:
    """
    Build a table of prescribed sets.

    Args:
        lift_id: Lift shown in the title
        sets: Sets from SetScheme.generate_sets

    Returns:
        Rich Table
    """
    table = Table(title=f"Prescription: {lift_id}")
    table.add_column("Set", justify="right", style="dim", width=4)
    table.add_column("Weight", justify="right", style="bold")
    table.add_column("Reps", justify="right")
    table.add_column("Kind", style="magenta")

    for s in sets:
        kind = "work" if s.is_work_set else "warm-up"
        if s.is_provisional:
            kind += " (provisional)"
        table.add_row(str(s.set_number), _fmt_weight(s.weight), str(s.target_reps), kind)
    return table


def print_prescription(lift_id: str, base_weight: float, sets: list[GeneratedSet]) -> None:
    console.print()
    console.print(f"[cyan]Base weight:[/cyan] [bold]{_fmt_weight(base_weight)}[/bold]")
    if not sets:
        console.print("[yellow]No sets prescribed.[/yellow]")
        return
    console.print(format_sets_table(lift_id, sets))


def print_next_set(decision: NextSetDecision, logged_count: int) -> None:
    """Print either the next set or why the exercise is finished."""
    console.print()
    console.print(f"[dim]Sets logged: {logged_count}[/dim]")
    if decision.should_continue and decision.next_set is not None:
        s = decision.next_set
        console.print(
            f"[green]Next set {s.set_number}:[/green] "
            f"[bold]{_fmt_weight(s.weight)} × {s.target_reps}[/bold]"
        )
    else:
        console.print(f"[yellow]Stop:[/yellow] {decision.termination_reason}")


def print_progression_result(result: ProgressionResult) -> None:
    table = Table(title=f"Progression: {result.lift_id} ({result.max_type})", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    status = "[green]applied[/green]" if result.applied else "[yellow]not applied[/yellow]"
    table.add_row("Status", status)
    table.add_row("Previous", _fmt_weight(result.previous_value))
    table.add_row("New", f"[bold]{_fmt_weight(result.new_value)}[/bold]")
    sign = "+" if result.delta >= 0 else ""
    table.add_row("Delta", f"{sign}{result.delta:g}")
    if result.reason:
        table.add_row("Reason", result.reason)
    console.print(table)


def print_max_history(lift_id: str, max_type: str, history: list[MaxValue]) -> None:
    table = Table(title=f"{lift_id} {max_type}")
    table.add_column("Date", style="cyan")
    table.add_column("Value", justify="right", style="bold")
    for m in history:
        table.add_row(m.effective_date.isoformat() if m.effective_date else "-", _fmt_weight(m.value))
    console.print(table)


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{message}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {message}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {message}[/yellow]")
