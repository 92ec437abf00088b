"""
CLI entry point using Typer.

Provides commands for running a 5/3/1 program:
- init / settings: Create or edit the lifter profile
- status: Cycle, week and next lift
- workout: Show, run or log today's session
- plates: Plate math for a bar load
- history / delete-record: Finished sessions
- accessory: Accessory exercises per lift
"""

import typer

from .app import app
from .commands import accessories, profile, sessions, workout  # noqa: F401  (register commands)
from .commands.sessions import _menu_delete_record
from . import views


def _menu_plates() -> None:
    """Interactive plate-math helper called from the main menu."""
    while True:
        raw = views.console.input("Bar weight (Enter to cancel): ").strip()
        if not raw:
            return
        try:
            weight = float(raw)
        except ValueError:
            views.print_error("Enter a number")
            continue
        workout.plates(weight)
        return


@app.callback(invoke_without_command=True)
def main_callback(ctx: typer.Context) -> None:
    """
    5/3/1 training program. Run without a command for interactive mode.
    """
    if ctx.invoked_subcommand is not None:
        return

    # ── Interactive main menu ───────────────────────────────────────────────
    views.console.print()
    views.console.print("[bold cyan]iron-five[/bold cyan] — 5/3/1 training program")
    views.console.print()

    menu = {
        "1": ("status",        "Dashboard"),
        "2": ("workout",       "Show next workout"),
        "3": ("run",           "Start next workout"),
        "4": ("history",       "Show history"),
        "5": ("plates",        "Plate calculator"),
        "6": ("accessories",   "List accessories"),
        "i": ("init",          "Setup profile"),
        "d": ("delete-record", "Delete a session"),
        "0": ("quit",          "Quit"),
    }

    for key, (_, desc) in menu.items():
        views.console.print(f"  \\[{key}] {desc}")

    views.console.print()
    choice = views.console.input("Choose [1]: ").strip() or "1"

    if choice == "0":
        raise typer.Exit(0)

    cmd_map = {k: v[0] for k, v in menu.items()}
    chosen = cmd_map.get(choice)

    if chosen is None:
        views.print_error(f"Unknown choice: {choice}")
        raise typer.Exit(1)

    if chosen == "status":
        ctx.invoke(profile.status)
    elif chosen == "workout":
        ctx.invoke(workout.workout)
    elif chosen == "run":
        ctx.invoke(workout.workout, run_session=True)
    elif chosen == "history":
        ctx.invoke(sessions.show_history)
    elif chosen == "plates":
        _menu_plates()
    elif chosen == "accessories":
        ctx.invoke(accessories.list_accessories)
    elif chosen == "init":
        ctx.invoke(profile.init)
    elif chosen == "delete-record":
        _menu_delete_record()


if __name__ == "__main__":
    app()
