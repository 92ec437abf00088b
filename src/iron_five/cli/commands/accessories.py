"""Accessory commands: accessory add | list | edit | remove."""

from typing import Annotated, Optional

import typer

from ...core.models import AccessoryExercise
from ...io.serializers import ValidationError
from .. import views
from ..app import DataDirOption, app, get_store, parse_lift

accessory_app = typer.Typer(help="Manage accessory exercises per main lift.")
app.add_typer(accessory_app, name="accessory")


@accessory_app.command("add")
def add_accessory(
    name: Annotated[str, typer.Argument(help="Exercise name, e.g. 'Dips'")],
    lift_name: Annotated[str, typer.Option("--lift", "-l", help="squat | bench | deadlift | ohp")],
    sets: Annotated[int, typer.Option("--sets", "-s", help="Target sets")] = 3,
    reps: Annotated[int, typer.Option("--reps", "-r", help="Target reps")] = 10,
    data_dir: DataDirOption = None,
) -> None:
    """Attach an accessory to a main lift."""
    lift = parse_lift(lift_name)
    try:
        accessory = AccessoryExercise(name=name.strip(), target_sets=sets, target_reps=reps, related_lift=lift)
    except ValueError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    store = get_store(data_dir)
    try:
        saved = store.add_accessory(accessory)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)
    if saved:
        views.print_success(f"Added {accessory.name} ({sets} × {reps}) to {lift.display_name}.")
    else:
        views.print_warning("Accessory could not be saved.")


@accessory_app.command("list")
def list_accessories(
    lift_name: Annotated[
        Optional[str],
        typer.Option("--lift", "-l", help="Only this lift"),
    ] = None,
    data_dir: DataDirOption = None,
) -> None:
    """List accessories, optionally for one lift."""
    lift = parse_lift(lift_name) if lift_name is not None else None
    store = get_store(data_dir)
    try:
        accessories = store.list_accessories(lift)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)
    views.print_accessories(accessories)


@accessory_app.command("remove")
def remove_accessory(
    index: Annotated[int, typer.Argument(help="Accessory # as shown by 'accessory list'")],
    lift_name: Annotated[
        Optional[str],
        typer.Option("--lift", "-l", help="Numbering from 'accessory list --lift'"),
    ] = None,
    data_dir: DataDirOption = None,
) -> None:
    """Remove an accessory."""
    lift = parse_lift(lift_name) if lift_name is not None else None
    store = get_store(data_dir)
    try:
        accessories = store.list_accessories(lift)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if index < 1 or index > len(accessories):
        views.print_error(f"No accessory #{index}")
        raise typer.Exit(1)

    target = accessories[index - 1]
    if store.delete_accessory(target.accessory_id):
        views.print_success(f"Removed {target.name} from {target.related_lift.display_name}.")
    else:
        views.print_warning("Accessory could not be removed.")


@accessory_app.command("edit")
def edit_accessory(
    index: Annotated[int, typer.Argument(help="Accessory # as shown by 'accessory list'")],
    lift_name: Annotated[
        Optional[str],
        typer.Option("--lift", "-l", help="Numbering from 'accessory list --lift'"),
    ] = None,
    name: Annotated[Optional[str], typer.Option("--name", "-n", help="New exercise name")] = None,
    sets: Annotated[Optional[int], typer.Option("--sets", "-s", help="New target sets")] = None,
    reps: Annotated[Optional[int], typer.Option("--reps", "-r", help="New target reps")] = None,
    data_dir: DataDirOption = None,
) -> None:
    """Change an accessory's name, sets or reps."""
    lift = parse_lift(lift_name) if lift_name is not None else None
    store = get_store(data_dir)
    try:
        accessories = store.list_accessories(lift)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if index < 1 or index > len(accessories):
        views.print_error(f"No accessory #{index}")
        raise typer.Exit(1)

    current = accessories[index - 1]
    try:
        updated = AccessoryExercise(
            name=name.strip() if name is not None else current.name,
            target_sets=sets if sets is not None else current.target_sets,
            target_reps=reps if reps is not None else current.target_reps,
            related_lift=current.related_lift,
            accessory_id=current.accessory_id,
        )
    except ValueError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if store.update_accessory(updated):
        views.print_success(
            f"Updated {updated.name} ({updated.target_sets} × {updated.target_reps})."
        )
    else:
        views.print_warning("Accessory could not be updated.")
