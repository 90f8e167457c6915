"""
CLI entry point using Typer.

Provides commands for composing training prescriptions:
- round: Round a weight to a loadable increment
- e1rm: Estimate a 1RM from weight, reps and RPE
- set-max / show-maxes: Record and review maxes
- log-set: Log a performed set to a session
- prescribe: Load strategy + set scheme → sets
- next-set: Next set (or stop reason) for a variable-count scheme
- progress: Apply a progression to a lift's max
"""

from .app import app
from .commands import calculators, records, training  # noqa: F401  (registers commands)

if __name__ == "__main__":
    app()
