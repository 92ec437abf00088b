"""Profile commands: init, settings, status."""

from typing import Annotated, Optional

import typer

from ...core.config import WEEKS_PER_CYCLE
from ...core.models import LifterProfile, Template
from ...core.progression import next_lift
from ...io.serializers import ValidationError, parse_one_rep_max, parse_training_max
from .. import views
from ..app import DataDirOption, app, get_store, require_profile


def _parse_template(value: str) -> Template:
    key = value.strip().upper()
    if key in Template.__members__:
        return Template[key]
    valid = ", ".join(t.name for t in Template)
    views.print_error(f"Unknown template '{value}'. Valid: {valid}")
    raise typer.Exit(1)


def _prompt_text(label: str, default: str) -> str:
    raw = views.console.input(f"{label} [{default}]: ").strip()
    return raw if raw else default


@app.command()
def init(
    squat: Annotated[Optional[str], typer.Option("--squat", help="Squat 1RM")] = None,
    bench: Annotated[Optional[str], typer.Option("--bench", help="Bench press 1RM")] = None,
    deadlift: Annotated[Optional[str], typer.Option("--deadlift", help="Deadlift 1RM")] = None,
    ohp: Annotated[Optional[str], typer.Option("--ohp", help="Overhead press 1RM")] = None,
    training_max: Annotated[
        Optional[str],
        typer.Option("--tm", help="Training max percent of 1RM (default 90)"),
    ] = None,
    template: Annotated[
        str,
        typer.Option("--template", "-t", help="Supplemental template: FSL, BBB, SSL, BBS, WIDOWMAKER"),
    ] = "FSL",
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing profile without prompting"),
    ] = False,
    data_dir: DataDirOption = None,
) -> None:
    """
    Create the lifter profile.

    Missing maxes are prompted for.  Text that is not a number counts as 0
    (90 for the training max percentage).

      iron-five init --squat 315 --bench 225 --deadlift 405 --ohp 135
    """
    store = get_store(data_dir)
    chosen_template = _parse_template(template)

    if store.exists() and not force:
        if not views.confirm_action("A profile already exists. Overwrite it (history is kept)?"):
            views.print_info("Cancelled.")
            raise typer.Exit(0)

    if squat is None:
        squat = _prompt_text("Squat 1RM", "0")
    if bench is None:
        bench = _prompt_text("Bench 1RM", "0")
    if deadlift is None:
        deadlift = _prompt_text("Deadlift 1RM", "0")
    if ohp is None:
        ohp = _prompt_text("OHP 1RM", "0")
    if training_max is None:
        training_max = _prompt_text("TM %", "90")

    profile = LifterProfile(
        squat_1rm=parse_one_rep_max(squat),
        bench_1rm=parse_one_rep_max(bench),
        deadlift_1rm=parse_one_rep_max(deadlift),
        ohp_1rm=parse_one_rep_max(ohp),
        training_max_percentage=parse_training_max(training_max),
        selected_template=chosen_template,
    )

    store.init()
    if not store.save_profile(profile):
        views.print_warning("Profile could not be written; it will not persist.")
    else:
        views.print_success(f"Profile saved to {store.profile_path}")
    views.console.print(views.format_profile_display(profile))


@app.command()
def settings(
    squat: Annotated[Optional[str], typer.Option("--squat", help="Squat 1RM")] = None,
    bench: Annotated[Optional[str], typer.Option("--bench", help="Bench press 1RM")] = None,
    deadlift: Annotated[Optional[str], typer.Option("--deadlift", help="Deadlift 1RM")] = None,
    ohp: Annotated[Optional[str], typer.Option("--ohp", help="Overhead press 1RM")] = None,
    training_max: Annotated[
        Optional[str],
        typer.Option("--tm", help="Training max percent of 1RM"),
    ] = None,
    template: Annotated[
        Optional[str],
        typer.Option("--template", "-t", help="Supplemental template"),
    ] = None,
    week: Annotated[
        Optional[int],
        typer.Option("--week", help="Jump to a week of the cycle (1-4)"),
    ] = None,
    cycle: Annotated[
        Optional[int],
        typer.Option("--cycle", help="Set the cycle number"),
    ] = None,
    data_dir: DataDirOption = None,
) -> None:
    """
    Edit maxes, training max percentage, template or program position.
    """
    store = get_store(data_dir)
    profile = require_profile(store)

    if week is not None and not 1 <= week <= WEEKS_PER_CYCLE:
        views.print_error(f"Week must be between 1 and {WEEKS_PER_CYCLE}")
        raise typer.Exit(1)
    if cycle is not None and cycle < 1:
        views.print_error("Cycle must be at least 1")
        raise typer.Exit(1)

    try:
        updated = LifterProfile(
            squat_1rm=parse_one_rep_max(squat) if squat is not None else profile.squat_1rm,
            bench_1rm=parse_one_rep_max(bench) if bench is not None else profile.bench_1rm,
            deadlift_1rm=parse_one_rep_max(deadlift) if deadlift is not None else profile.deadlift_1rm,
            ohp_1rm=parse_one_rep_max(ohp) if ohp is not None else profile.ohp_1rm,
            training_max_percentage=(
                parse_training_max(training_max)
                if training_max is not None
                else profile.training_max_percentage
            ),
            current_cycle=cycle if cycle is not None else profile.current_cycle,
            current_week=week if week is not None else profile.current_week,
            selected_template=(
                _parse_template(template) if template is not None else profile.selected_template
            ),
        )
    except ValueError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if not store.save_profile(updated):
        views.print_warning("Profile could not be written; changes will not persist.")
    else:
        views.print_success("Settings updated.")
    views.console.print(views.format_profile_display(updated))


@app.command()
def status(data_dir: DataDirOption = None) -> None:
    """
    Show cycle, week, maxes and the next lift in the rotation.
    """
    store = get_store(data_dir)
    profile = require_profile(store)
    try:
        sessions = store.list_sessions(newest_first=False)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    views.console.print(views.format_profile_display(profile, next_lift(sessions)))
