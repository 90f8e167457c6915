"""Stateless calculator commands: round, e1rm."""

from typing import Annotated

import typer

from ...core.e1rm import calculate_e1rm
from ...core.engine.config_loader import rounding_defaults
from ...core.errors import PowerProError
from ...core.rounding import RoundingConfig
from .. import views
from ..app import app


@app.command("round")
def round_cmd(
    weight: Annotated[float, typer.Argument(help="Weight to round")],
    increment: Annotated[
        float,
        typer.Option("--increment", "-i", help="Rounding increment (default: from model.yaml)"),
    ] = 0.0,
    direction: Annotated[
        str,
        typer.Option("--direction", "-d", help="NEAREST, DOWN or UP (default: from model.yaml)"),
    ] = "",
) -> None:
    """
    Round a weight to a plate-loadable increment.

      power-pro round 267.75 --increment 5 --direction NEAREST
    """
    try:
        default_increment, default_direction = rounding_defaults()
        rounding = RoundingConfig.from_values(
            increment or default_increment, direction.upper() or default_direction
        )
        result = rounding.apply(weight)
    except PowerProError as e:
        views.print_error(str(e))
        raise typer.Exit(1)
    views.console.print(f"{result:g}")


@app.command()
def e1rm(
    weight: Annotated[float, typer.Argument(help="Weight lifted")],
    reps: Annotated[int, typer.Argument(help="Reps performed (1-12)")],
    rpe: Annotated[float, typer.Argument(help="RPE of the set (7.0-10.0, half steps)")],
) -> None:
    """
    Estimate a 1RM from a set's weight, reps and RPE.

      power-pro e1rm 365 1 8   →  400
    """
    try:
        result = calculate_e1rm(weight, reps, rpe)
    except PowerProError as e:
        views.print_error(str(e))
        raise typer.Exit(1)
    views.console.print(
        f"[cyan]E1RM[/cyan] for {weight:g} × {reps} @ {rpe:g}: [bold]{result:g}[/bold]"
    )
