"""Training commands: prescribe, next-set, progress."""

import json
from pathlib import Path
from typing import Annotated, Optional

import typer

from ...core.engine.progression_runner import record_outcome, run_progression
from ...core.errors import PowerProError
from ...core.load_strategies import LoadCalculationParams
from ...core.models import ON_FAILURE
from ...core.progressions import ProgressionContext, TriggerEvent, progression_to_json
from ...core.rpe_chart import default_rpe_chart
from ...core.set_schemes import SetGenerationContext, next_set_from_log
from ...io.serializers import (
    parse_logged_set,
    progression_from_text,
    progression_result_to_dict,
    set_scheme_from_text,
    strategy_from_text,
)
from .. import views
from ..app import DEFAULT_USER, StatePathOption, UserOption, app, get_store

StrategyOption = Annotated[
    str,
    typer.Option("--strategy", "-s", help="Load strategy JSON, or @path to a JSON file"),
]
SchemeOption = Annotated[
    str,
    typer.Option("--scheme", "-c", help="Set scheme JSON, or @path to a JSON file"),
]


@app.command()
def prescribe(
    lift_id: Annotated[str, typer.Argument(help="Lift ID")],
    strategy_json: StrategyOption,
    scheme_json: SchemeOption,
    session_id: Annotated[
        Optional[str],
        typer.Option("--session", help="Session ID (for RELATIVE_TO strategies)"),
    ] = None,
    days_out: Annotated[
        Optional[int],
        typer.Option("--days-out", help="Days until competition (for TAPER strategies)"),
    ] = None,
    work_set_threshold: Annotated[
        float,
        typer.Option("--work-set-threshold", help="Ramp steps at or above this % are work sets"),
    ] = SetGenerationContext().work_set_threshold,
    as_json: Annotated[
        bool,
        typer.Option("--json", "-j", help="Output as JSON"),
    ] = False,
    user_id: UserOption = DEFAULT_USER,
    state_path: StatePathOption = None,
) -> None:
    """
    Compute a base weight with a load strategy and expand it into sets.

      power-pro prescribe squat \\
        -s '{"type": "PERCENT_OF", "referenceType": "TRAINING_MAX", "percentage": 85}' \\
        -c '{"type": "FIXED", "sets": 5, "reps": 5}'
    """
    store = get_store(state_path)
    try:
        strategy = strategy_from_text(strategy_json)
        scheme = set_scheme_from_text(scheme_json)
        strategy.set_max_lookup(store)
        strategy.set_session_lookup(store)
        strategy.set_rpe_chart(default_rpe_chart())

        params = LoadCalculationParams(
            user_id=user_id,
            lift_id=lift_id,
            session_id=session_id,
            days_out=days_out,
        )
        base_weight = strategy.calculate_load(params)
        sets = scheme.generate_sets(
            base_weight, SetGenerationContext(work_set_threshold=work_set_threshold)
        )
    except PowerProError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if as_json:
        print(json.dumps({
            "liftId": lift_id,
            "baseWeight": base_weight,
            "sets": [
                {
                    "setNumber": s.set_number,
                    "weight": s.weight,
                    "targetReps": s.target_reps,
                    "isWorkSet": s.is_work_set,
                    "isProvisional": s.is_provisional,
                }
                for s in sets
            ],
        }, indent=2))
        return
    views.print_prescription(lift_id, base_weight, sets)


@app.command("next-set")
def next_set(
    session_id: Annotated[str, typer.Argument(help="Session ID")],
    lift_id: Annotated[str, typer.Argument(help="Lift ID")],
    scheme_json: SchemeOption,
    performed: Annotated[
        Optional[list[str]],
        typer.Option("--set", help="Performed set WEIGHTxREPS[@RPE]; repeat to override the logged sets"),
    ] = None,
    state_path: StatePathOption = None,
) -> None:
    """
    Decide the next set of a variable-count scheme (MRS, FATIGUE_DROP, TOTAL_REPS).

    Uses the sets logged to the session unless --set is given.
    """
    try:
        scheme = set_scheme_from_text(scheme_json)
        if performed:
            logged = [parse_logged_set(p) for p in performed]
        else:
            logged = get_store(state_path).get_logged_sets(session_id, lift_id)
        decision = next_set_from_log(scheme, logged)
    except PowerProError as e:
        views.print_error(str(e))
        raise typer.Exit(1)
    views.print_next_set(decision, len(logged))


@app.command()
def progress(
    lift_id: Annotated[str, typer.Argument(help="Lift ID")],
    progression_json: Annotated[
        str,
        typer.Option("--progression", "-g", help="Progression JSON, or @path to a JSON file"),
    ],
    trigger: Annotated[
        Optional[str],
        typer.Option("--trigger", "-t", help="Trigger type (default: the progression's own)"),
    ] = None,
    reps: Annotated[
        Optional[int],
        typer.Option("--reps", "-r", help="Reps performed (AMRAP and failure checks)"),
    ] = None,
    max_reps: Annotated[
        Optional[int],
        typer.Option("--max-reps", help="Rep ceiling for double progression"),
    ] = None,
    target_reps: Annotated[
        Optional[int],
        typer.Option("--target-reps", help="Target reps; with --reps, updates the failure counter"),
    ] = None,
    amrap: Annotated[
        bool,
        typer.Option("--amrap", help="The set was an AMRAP set"),
    ] = False,
    session_id: Annotated[
        Optional[str],
        typer.Option("--session", help="Session ID"),
    ] = None,
    save: Annotated[
        bool,
        typer.Option("--save", help="Persist the new max, failure counter and @file progression state"),
    ] = False,
    as_json: Annotated[
        bool,
        typer.Option("--json", "-j", help="Output as JSON"),
    ] = False,
    user_id: UserOption = DEFAULT_USER,
    state_path: StatePathOption = None,
) -> None:
    """
    Apply a progression to a lift's current max.

      power-pro progress squat -g @linear.json --save
    """
    store = get_store(state_path)
    try:
        progression = progression_from_text(progression_json)
        trigger_type = (trigger or progression.trigger_type()).upper()

        current = store.get_current_max(user_id, lift_id, progression.max_type)
        if current is None:
            views.print_error(
                f"No {progression.max_type} recorded for {lift_id}. Run 'set-max' first."
            )
            raise typer.Exit(1)

        counter = None
        if trigger_type == ON_FAILURE or target_reps is not None:
            counter = store.get_or_create_failure_counter(user_id, lift_id, progression.id)
            if target_reps is not None and reps is not None:
                record_outcome(counter, target_reps, reps)

        event = TriggerEvent(
            type=trigger_type,
            session_id=session_id,
            lifts_performed=[lift_id],
            reps_performed=reps,
            max_reps=max_reps,
            is_amrap=amrap,
        )
        ctx = ProgressionContext(
            user_id=user_id,
            lift_id=lift_id,
            max_type=progression.max_type,
            current_value=current.value,
            trigger_event=event,
        )
        result = run_progression(progression, ctx, counter)

        if save:
            if result.applied and result.delta != 0:
                store.set_max(user_id, lift_id, progression.max_type, result.new_value)
            if counter is not None:
                store.save_failure_counter(counter)
            if progression_json.startswith("@"):
                Path(progression_json[1:]).expanduser().write_text(progression_to_json(progression))
    except PowerProError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if as_json:
        print(json.dumps(progression_result_to_dict(result), indent=2))
        return
    views.print_progression_result(result)
    if save and result.applied:
        views.print_success("Saved.")
