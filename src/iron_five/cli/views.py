"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of profiles, prescriptions, plate
loadouts and session history.
"""

from rich.console import Console
from rich.table import Table

from ..core.events import FeedbackEvent, SetCompleted, TelemetrySource, TimerCancelled, TimerComplete, TimerTick
from ..core.models import AccessoryExercise, Lift, LifterProfile, PrescribedSet, Prescription, WorkoutSession
from ..core.plates import PlateLoadout
from ..core.prescriber import week_label

console = Console()


def _fmt_weight(weight: float) -> str:
    return f"{weight:g}"


def format_profile_display(profile: LifterProfile, next_lift: Lift | None = None) -> str:
    """
    Format the dashboard block: cycle, week, template, maxes and next lift.
    """
    lines = [
        f"Cycle {profile.current_cycle} • Week {profile.current_week}"
        f" ({week_label(profile.current_week)})",
        f"- Template: {profile.selected_template.name} ({profile.selected_template.display_name})",
        f"- TM %:     {profile.training_max_percentage * 100:g}",
    ]
    for lift in Lift:
        lines.append(
            f"- {lift.display_name:<15} 1RM {_fmt_weight(profile.one_rep_max(lift)):>6}"
            f"  TM {profile.training_max(lift):.1f}"
        )
    if next_lift is not None:
        lines.append(f"Next: {next_lift.display_name}")
    return "\n".join(lines)


def format_prescription_table(prescription: Prescription) -> Table:
    """
    Create a Rich table for one session's prescription.

    Args:
        prescription: Prescription to display

    Returns:
        Rich Table object
    """
    table = Table(
        title=(
            f"{prescription.lift.display_name} — week {prescription.week}"
            f" ({week_label(prescription.week)}), TM {prescription.training_max:.1f}"
        )
    )
    table.add_column("#", justify="right", style="dim", width=3)
    table.add_column("Block", style="magenta")
    table.add_column("Weight", justify="right", style="bold")
    table.add_column("Reps", style="cyan")
    table.add_column("Done", justify="center")

    for i, s in enumerate(prescription.all_sets(), 1):
        reps = s.reps
        if s.is_amrap and s.actual_reps:
            reps = f"{s.reps} → {s.actual_reps}"
        table.add_row(
            str(i),
            s.category.value,
            _fmt_weight(s.weight) if s.weight > 0 else "-",
            reps,
            "[green]✓[/green]" if s.is_completed else "",
        )
    return table


def print_prescription(prescription: Prescription) -> None:
    console.print(format_prescription_table(prescription))


def format_plate_loadout(loadout: PlateLoadout) -> str:
    """Plate list per side, or "Bar only"."""
    header = f"{_fmt_weight(loadout.target)} total (per side, {_fmt_weight(loadout.bar_weight)} bar)"
    if loadout.is_bar_only:
        return f"{header}\n  Bar only"
    lines = [header]
    for plate, count in loadout.plates:
        lines.append(f"  {_fmt_weight(plate):>5} × {count}")
    if loadout.remainder > 0:
        lines.append(f"  [yellow]{_fmt_weight(loadout.remainder)} per side not loadable[/yellow]")
    return "\n".join(lines)


def format_session_table(sessions: list[WorkoutSession]) -> Table:
    """
    Create a Rich table displaying session history.

    Args:
        sessions: Sessions to display, in display order

    Returns:
        Rich Table object
    """
    table = Table(title="Training History")

    table.add_column("#", justify="right", style="dim", width=3)
    table.add_column("Date", style="cyan")
    table.add_column("Lift", style="magenta")
    table.add_column("W/C", justify="right")
    table.add_column("AMRAP", justify="right")
    table.add_column("Est. 1RM", justify="right", style="bold")

    for i, session in enumerate(sessions, 1):
        if session.amrap_reps > 0:
            amrap = f"{_fmt_weight(session.amrap_weight)} × {session.amrap_reps}"
            e1rm = f"{session.estimated_one_rep_max:.1f}"
        else:
            amrap = "[green]Completed[/green]"
            e1rm = "-"
        table.add_row(
            str(i),
            session.day,
            session.main_lift.display_name,
            f"W{session.week} C{session.cycle}",
            amrap,
            e1rm,
        )

    return table


def print_history(sessions: list[WorkoutSession]) -> None:
    """
    Print session history to console.

    Args:
        sessions: Sessions to display
    """
    if not sessions:
        console.print("[yellow]No workouts yet.[/yellow]")
        return

    console.print(format_session_table(sessions))


def format_accessory_table(accessories: list[AccessoryExercise]) -> Table:
    table = Table(title="Accessories")
    table.add_column("#", justify="right", style="dim", width=3)
    table.add_column("Lift", style="magenta")
    table.add_column("Exercise", style="cyan")
    table.add_column("Sets × Reps", justify="right")

    for i, a in enumerate(accessories, 1):
        table.add_row(
            str(i),
            a.related_lift.display_name,
            a.name,
            f"{a.target_sets} × {a.target_reps}",
        )
    return table


def print_accessories(accessories: list[AccessoryExercise]) -> None:
    if not accessories:
        console.print("[yellow]No accessories configured.[/yellow]")
        return
    console.print(format_accessory_table(accessories))


def format_set_line(index: int, s: PrescribedSet) -> str:
    weight = f"{_fmt_weight(s.weight)}" if s.weight > 0 else "-"
    return f"#{index} {s.category.value:<12} {weight:>6} × {s.reps}"


def format_telemetry(source: TelemetrySource) -> str:
    return f"♥ {source.heart_rate():.0f} BPM  {source.active_energy():.0f} kcal"


def console_feedback(event: FeedbackEvent) -> None:
    """Map core events to console output."""
    if isinstance(event, SetCompleted):
        console.print(f"[green]✓ {event.prescribed.reps} @ {_fmt_weight(event.prescribed.weight)}[/green]")
    elif isinstance(event, TimerTick):
        if event.is_cue:
            console.print(f"[bold yellow]Rest {event.remaining}s[/bold yellow]")
        elif event.remaining % 30 == 0:
            console.print(f"[dim]Rest {event.remaining}s[/dim]")
    elif isinstance(event, TimerComplete):
        console.print("[bold green]Rest over — go![/bold green]")
    elif isinstance(event, TimerCancelled):
        console.print("[dim]Rest skipped.[/dim]")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{message}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {message}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {message}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{message}[/blue]")


def confirm_action(message: str) -> bool:
    """
    Prompt user for confirmation.

    Args:
        message: Confirmation message

    Returns:
        True if confirmed, False otherwise
    """
    response = console.input(f"{message} \\[y/N]: ")
    return response.lower() in ("y", "yes")
