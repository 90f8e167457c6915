"""
Drive a variable-count scheme from the sets actually logged so far.

The running totals (sets, reps, last reps, last RPE) are rebuilt from the
log each time; the scheme itself holds no session state.
"""

from ..errors import InvalidParamsError
from ..models import GeneratedSet, LoggedSetResult, TerminationContext
from .base import NextSetDecision, SetGenerationContext, SetScheme, VariableSetScheme


def termination_context_from_log(
    logged_sets: list[LoggedSetResult], target_reps: int = 0
) -> TerminationContext:
    total_reps = sum(s.reps for s in logged_sets)
    last = logged_sets[-1] if logged_sets else None
    return TerminationContext(
        set_number=len(logged_sets) + 1,
        total_sets=len(logged_sets),
        total_reps=total_reps,
        last_reps=last.reps if last else 0,
        last_rpe=last.rpe if last else None,
        target_reps=target_reps,
    )


def history_from_log(logged_sets: list[LoggedSetResult]) -> list[GeneratedSet]:
    return [
        GeneratedSet(set_number=i, weight=s.weight, target_reps=s.reps)
        for i, s in enumerate(logged_sets, start=1)
    ]


def next_set_from_log(
    scheme: SetScheme,
    logged_sets: list[LoggedSetResult],
    ctx: SetGenerationContext | None = None,
) -> NextSetDecision:
    """
    Decide the next set of a variable scheme from logged performance.

    Raises:
        InvalidParamsError: If the scheme is not variable-count, or nothing
            has been logged yet (the first set comes from generate_sets)
    """
    if not isinstance(scheme, VariableSetScheme):
        raise InvalidParamsError(f"{scheme.type_name} is not a variable-count set scheme")
    if not logged_sets:
        raise InvalidParamsError("no sets logged yet; use generate_sets for the first set")

    term_ctx = termination_context_from_log(logged_sets, scheme.per_set_target_reps())
    history = history_from_log(logged_sets)
    return scheme.decide_next_set(ctx or SetGenerationContext(), history, term_ctx)
