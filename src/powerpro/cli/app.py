"""Shared Typer app object, shared option types, and store utility."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from ..io.state_store import StateStore, get_default_state_path

# Shared --state-path option type used by every command that touches the store
StatePathOption = Annotated[
    Optional[Path],
    typer.Option("--state-path", "-p", help="Path to state JSON file (default: ~/.power-pro/state.json)"),
]

UserOption = Annotated[
    str,
    typer.Option("--user", "-u", help="User ID"),
]

DEFAULT_USER = "me"

app = typer.Typer(
    name="power-pro",
    help="Compose load strategies, set schemes and progressions into training prescriptions.",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log engine decisions to stderr"),
    ] = False,
) -> None:
    """
    Strength-training prescription engine.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


def get_store(state_path: Path | None) -> StateStore:
    """Get state store from path or the default location."""
    if state_path is None:
        state_path = get_default_state_path()
    return StateStore(state_path)
