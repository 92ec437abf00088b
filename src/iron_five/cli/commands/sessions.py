"""Session commands: history, delete-record, and the interactive delete helper."""

from typing import Annotated, Optional

import typer

from ...io.program_store import ProgramStore
from ...io.serializers import ValidationError
from .. import views
from ..app import DataDirOption, app, get_store


def _load_sessions(store: ProgramStore):
    try:
        return store.list_sessions(newest_first=True)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)


def _menu_delete_record() -> None:
    """Interactive delete-session helper called from the main menu."""
    store = get_store(None)
    sessions = _load_sessions(store)

    if not sessions:
        views.print_info("No sessions to delete.")
        return

    views.print_history(sessions)

    while True:
        raw = views.console.input("Delete session # (Enter to cancel): ").strip()
        if not raw:
            views.print_info("Cancelled.")
            return
        try:
            record_id = int(raw)
        except ValueError:
            views.print_error("Enter a number")
            continue

        if record_id < 1 or record_id > len(sessions):
            views.print_error(f"Enter a number between 1 and {len(sessions)}")
            continue

        target = sessions[record_id - 1]
        if views.confirm_action(f"Delete {target.day} ({target.main_lift.display_name})?"):
            if store.delete_session(target.session_id):
                views.print_success(f"Deleted session #{record_id}: {target.day}")
            else:
                views.print_warning("Session could not be deleted.")
        else:
            views.print_info("Cancelled.")
        return


@app.command("history")
def show_history(
    limit: Annotated[
        Optional[int],
        typer.Option("--limit", "-n", help="Show only the N most recent sessions"),
    ] = None,
    data_dir: DataDirOption = None,
) -> None:
    """
    Show finished sessions, newest first, with AMRAP results and estimated 1RM.
    """
    store = get_store(data_dir)
    sessions = _load_sessions(store)
    if limit is not None:
        sessions = sessions[: max(limit, 0)]
    views.print_history(sessions)


@app.command("delete-record")
def delete_record(
    record_id: Annotated[int, typer.Argument(help="Session # as shown by 'history'")],
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Delete without confirmation"),
    ] = False,
    data_dir: DataDirOption = None,
) -> None:
    """
    Delete a session from history.
    """
    store = get_store(data_dir)
    sessions = _load_sessions(store)

    if record_id < 1 or record_id > len(sessions):
        views.print_error(f"No session #{record_id} (history has {len(sessions)})")
        raise typer.Exit(1)

    target = sessions[record_id - 1]
    if not force and not views.confirm_action(
        f"Delete {target.day} ({target.main_lift.display_name})?"
    ):
        views.print_info("Cancelled.")
        return

    if store.delete_session(target.session_id):
        views.print_success(f"Deleted session #{record_id}: {target.day}")
    else:
        views.print_warning("Session could not be deleted.")
