"""Workout commands: workout (prescription, interactive run, finalize) and plates."""

from typing import Annotated, Optional

import typer

from ...core.engine.config_loader import (
    load_equipment,
    load_increments,
    load_program_config,
    load_rest_seconds,
)
from ...core.events import StaticTelemetry
from ...core.models import LifterProfile, SetCategory
from ...core.plates import plate_loadout
from ...core.progression import next_lift
from ...core.workout import WorkoutRun
from ...io.program_store import ProgramStore
from ...io.serializers import ValidationError, validate_timestamp
from .. import views
from ..app import DataDirOption, app, get_store, parse_lift, require_profile


def _save_result(store: ProgramStore, run: WorkoutRun, date: str | None) -> None:
    """Finalize the run and hand both records to the store."""
    new_profile, session = run.finish(date=date, increments=load_increments())
    store.insert_session(session)
    store.save_profile(new_profile)

    if session.amrap_reps > 0:
        views.print_success(
            f"Logged {session.main_lift.display_name}: "
            f"{session.amrap_weight:g} × {session.amrap_reps}"
            f" (est. 1RM {session.estimated_one_rep_max:.1f})"
        )
    else:
        views.print_success(f"Logged {session.main_lift.display_name}.")
    _print_transition(run.profile, new_profile)


def _print_transition(before: LifterProfile, after: LifterProfile) -> None:
    if after.current_cycle != before.current_cycle:
        views.print_info(
            f"Cycle {before.current_cycle} complete → cycle {after.current_cycle}, maxes increased."
        )
    elif after.current_week != before.current_week:
        views.print_info(f"Week {before.current_week} complete → week {after.current_week}.")


def _run_interactive(run: WorkoutRun) -> bool:
    """
    Walk through every set.

    Returns:
        True if the lifter finished the session, False if they quit
    """
    views.console.print(
        "  [bold]Enter[/bold] = done, a number = reps done, "
        "[bold]s[/bold] = skip set, [bold]q[/bold] = quit without saving"
    )
    if run.telemetry is not None:
        views.console.print(views.format_telemetry(run.telemetry))

    index = 0
    for category in SetCategory:
        for i, s in enumerate(run.prescription.block(category)):
            index += 1
            while True:
                done, total = run.progress
                prompt = f"{done}/{total}  {views.format_set_line(index, s)}: "
                raw = views.console.input(prompt).strip().lower()
                if raw == "q":
                    run.skip_rest()
                    return False
                if raw == "s":
                    break
                if raw == "":
                    run.complete_set(category, i)
                    break
                try:
                    reps = int(raw)
                except ValueError:
                    views.print_error("Enter a number, s or q")
                    continue
                if reps < 0:
                    views.print_error("Reps must be non-negative")
                    continue
                run.complete_set(category, i, actual_reps=reps)
                break
    run.skip_rest()
    return True


@app.command()
def workout(
    lift_name: Annotated[
        Optional[str],
        typer.Option("--lift", "-l", help="squat | bench | deadlift | ohp (default: next in rotation)"),
    ] = None,
    run_session: Annotated[
        bool,
        typer.Option("--run", "-r", help="Check sets off interactively with a rest timer"),
    ] = False,
    amrap_reps: Annotated[
        Optional[int],
        typer.Option("--amrap-reps", "-a", help="Log the session with this many AMRAP reps"),
    ] = None,
    done: Annotated[
        bool,
        typer.Option("--done", help="Log the session as completed (no AMRAP reps)"),
    ] = False,
    date: Annotated[
        Optional[str],
        typer.Option("--date", "-d", help="Session timestamp, ISO format (default: now)"),
    ] = None,
    heart_rate: Annotated[
        Optional[float],
        typer.Option("--heart-rate", help="Heart rate (BPM) shown during --run"),
    ] = None,
    energy: Annotated[
        Optional[float],
        typer.Option("--kcal", help="Active energy (kcal) shown during --run"),
    ] = None,
    data_dir: DataDirOption = None,
) -> None:
    """
    Show today's prescription, run it, or log it.

      iron-five workout                   # show the next session
      iron-five workout --run             # check sets off with rest timer
      iron-five workout --run --heart-rate 128   # show a heart-rate reading
      iron-five workout -l ohp -a 8       # log OHP with 8 AMRAP reps
    """
    store = get_store(data_dir)
    profile = require_profile(store)
    try:
        sessions = store.list_sessions(newest_first=False)
        accessories = store.list_accessories()
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    lift = parse_lift(lift_name) if lift_name is not None else next_lift(sessions)
    if amrap_reps is not None and amrap_reps < 0:
        views.print_error("AMRAP reps must be non-negative")
        raise typer.Exit(1)
    if date is not None:
        try:
            validate_timestamp(date)
        except ValidationError as e:
            views.print_error(str(e))
            raise typer.Exit(1)

    telemetry = None
    if heart_rate is not None or energy is not None:
        telemetry = StaticTelemetry(bpm=heart_rate or 0.0, kcal=energy or 0.0)

    config = load_program_config()
    equipment = load_equipment(config)
    run = WorkoutRun(
        lift,
        profile,
        accessories,
        listener=views.console_feedback,
        rest_seconds=load_rest_seconds(config),
        increment=equipment.rounding_increment,
        telemetry=telemetry,
    )
    views.print_prescription(run.prescription)

    if run_session:
        if not _run_interactive(run):
            views.print_info("Session discarded.")
            return
        _save_result(store, run, date)
        return

    if amrap_reps is None and not done:
        return

    amrap = run.prescription.amrap_set
    if amrap is not None and amrap_reps:
        amrap.actual_reps = amrap_reps
        amrap.is_completed = True
    elif amrap is None and amrap_reps:
        views.print_warning(f"Week {profile.current_week} has no AMRAP set; reps not recorded.")
    _save_result(store, run, date)


@app.command()
def plates(
    weight: Annotated[float, typer.Argument(help="Total bar load")],
) -> None:
    """
    Show the plates to load on each side for a bar weight.
    """
    equipment = load_equipment()
    loadout = plate_loadout(weight, equipment.bar_weight, equipment.plates)
    views.console.print(views.format_plate_loadout(loadout))
