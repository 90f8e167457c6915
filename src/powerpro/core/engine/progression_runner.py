"""
Coordinate progressions with failure counters.

Progressions are pure rules; the failure count they read and the counter
reset they request live in FailureCounter.  These helpers wire the two
together the way a logging workflow needs:

1. record_outcome() after each session updates the counter.
2. run_progression() fills in the consecutive-failure count for ON_FAILURE
   triggers, applies the progression, and resets the counter when the
   progression asks for it.
"""

import logging
from dataclasses import replace

from ..models import ON_FAILURE
from ..progressions.base import Progression, ProgressionContext, ProgressionResult
from ..state import FailureCounter

logger = logging.getLogger(__name__)


def record_outcome(counter: FailureCounter, target_reps: int, reps_performed: int) -> bool:
    """
    Update *counter* for one logged result.

    Returns:
        True if the result counts as a failure (reps below target)
    """
    if reps_performed < target_reps:
        counter.increment_failure()
        return True
    counter.reset_on_success()
    return False


def run_progression(
    progression: Progression,
    ctx: ProgressionContext,
    counter: FailureCounter | None = None,
) -> ProgressionResult:
    """Apply *progression*, using and maintaining *counter* when given."""
    event = ctx.trigger_event
    if counter is not None and event.type == ON_FAILURE and event.consecutive_failures is None:
        ctx = replace(
            ctx, trigger_event=replace(event, consecutive_failures=counter.consecutive_failures)
        )

    result = progression.apply(ctx)

    if result.applied and counter is not None and progression.should_reset_failure_counter():
        logger.debug("resetting failure counter %s after %s", counter.key, progression.type_name)
        counter.reset(result.applied_at)
    return result
