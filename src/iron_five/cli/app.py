"""Shared Typer app object, shared option types, and store utility."""

from pathlib import Path
from typing import Annotated, Optional

import typer

from ..core.models import Lift, LifterProfile
from ..io.program_store import ProgramStore, get_default_data_dir
from . import views

# Shared --data-dir option type used across all commands
DataDirOption = Annotated[
    Optional[Path],
    typer.Option("--data-dir", "-p", help="Directory holding profile and history files"),
]

app = typer.Typer(
    name="iron-five",
    help="5/3/1 strength program: prescriptions, progression, plate math and rest timer.",
    no_args_is_help=False,
    invoke_without_command=True,
)


def get_store(data_dir: Path | None) -> ProgramStore:
    """Get the program store from a path or the default location."""
    if data_dir is None:
        data_dir = get_default_data_dir()
    return ProgramStore(data_dir)


def require_profile(store: ProgramStore) -> LifterProfile:
    """Load the profile or exit with a hint to run init."""
    profile = store.load_profile()
    if profile is None:
        views.print_error(f"Profile not found: {store.profile_path}")
        views.print_info("Run 'init' first to set your one-rep maxes.")
        raise typer.Exit(1)
    return profile


def parse_lift(value: str) -> Lift:
    """Parse a --lift value strictly (CLI input is validated, not defaulted)."""
    key = value.strip().lower()
    for lift in Lift:
        if lift.key == key:
            return lift
    valid = ", ".join(lift.key for lift in Lift)
    views.print_error(f"Unknown lift '{value}'. Valid: {valid}")
    raise typer.Exit(1)
