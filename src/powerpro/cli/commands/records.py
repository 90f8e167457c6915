"""State commands: set-max, show-maxes, log-set."""

from datetime import date
from typing import Annotated, Optional

import typer

from ...core.errors import PowerProError
from ...core.models import TRAINING_MAX
from ...io.serializers import parse_logged_set, validate_date
from .. import views
from ..app import DEFAULT_USER, StatePathOption, UserOption, app, get_store


@app.command("set-max")
def set_max(
    lift_id: Annotated[str, typer.Argument(help="Lift ID, e.g. squat")],
    value: Annotated[float, typer.Argument(help="Max value")],
    max_type: Annotated[
        str,
        typer.Option("--type", "-t", help="ONE_RM, TRAINING_MAX or E1RM"),
    ] = TRAINING_MAX,
    effective_date: Annotated[
        Optional[str],
        typer.Option("--date", help="Effective date YYYY-MM-DD (default: today)"),
    ] = None,
    user_id: UserOption = DEFAULT_USER,
    state_path: StatePathOption = None,
) -> None:
    """
    Record a new max for a lift.

      power-pro set-max squat 315 --type TRAINING_MAX
    """
    store = get_store(state_path)
    try:
        when = date.fromisoformat(validate_date(effective_date)) if effective_date else None
        recorded = store.set_max(user_id, lift_id, max_type.upper(), value, when)
    except PowerProError as e:
        views.print_error(str(e))
        raise typer.Exit(1)
    views.print_success(
        f"{lift_id} {max_type.upper()} = {recorded.value:g} (effective {recorded.effective_date})"
    )


@app.command("show-maxes")
def show_maxes(
    lift_id: Annotated[str, typer.Argument(help="Lift ID")],
    max_type: Annotated[
        str,
        typer.Option("--type", "-t", help="ONE_RM, TRAINING_MAX or E1RM"),
    ] = TRAINING_MAX,
    user_id: UserOption = DEFAULT_USER,
    state_path: StatePathOption = None,
) -> None:
    """Show the recorded max history for a lift."""
    store = get_store(state_path)
    try:
        history = store.get_max_history(user_id, lift_id, max_type.upper())
    except PowerProError as e:
        views.print_error(str(e))
        raise typer.Exit(1)
    if not history:
        views.print_warning(f"No {max_type.upper()} recorded for {lift_id}.")
        return
    views.print_max_history(lift_id, max_type.upper(), history)


@app.command("log-set")
def log_set(
    session_id: Annotated[str, typer.Argument(help="Session ID")],
    lift_id: Annotated[str, typer.Argument(help="Lift ID")],
    performed: Annotated[str, typer.Argument(help="Set as WEIGHTxREPS[@RPE], e.g. 300x5@8")],
    state_path: StatePathOption = None,
) -> None:
    """
    Log a performed set to a session.

    Logged sets feed RELATIVE_TO strategies and the next-set command.
    """
    store = get_store(state_path)
    try:
        logged = parse_logged_set(performed)
        index = store.log_set(session_id, lift_id, logged)
    except PowerProError as e:
        views.print_error(str(e))
        raise typer.Exit(1)
    rpe = f" @ {logged.rpe:g}" if logged.rpe is not None else ""
    views.print_success(
        f"Logged set #{index} for {lift_id}: {logged.weight:g} × {logged.reps}{rpe}"
    )
