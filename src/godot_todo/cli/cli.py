#!/usr/bin/env python3
"""
godot_todo.cli.cli

Typer-based CLI for browsing and updating Unity-to-Godot conversion tasks.

The task file defaults to ``todo_list.yaml`` in the working directory and
can be overridden with ``--file`` or the ``GODOT_TODO_FILE`` variable.

Examples
--------
List every task:

    godot-todo list

Search failed shader tasks with a regex:

    godot-todo search "Shaders/.*Water" --regex --status failed

Mark a task as verified in Godot:

    godot-todo verify 4f1c2a
"""

from __future__ import annotations

import logging
import traceback
from pathlib import Path

import typer

from godot_todo.application.options import DEFAULT_TODO_PATH
from godot_todo.application.results import StatusChange
from godot_todo.application.session import COPYABLE_FIELDS
from godot_todo.errors import SearchError, TodoError
from godot_todo.todo import ToDoItem, ToDoList

app = typer.Typer(
    name="godot-todo",
    help="Track Unity-to-Godot asset conversion tasks stored in YAML.",
    no_args_is_help=True,
)

FIELD_HELP = "Task field KEY=VALUE (repeatable)."
GUID_HELP = "GUID of the task."


# -----------------------------
# Utilities
# -----------------------------
def _print_error(exc: Exception, debug: bool) -> int:
    """Print a user-friendly error.

    Parameters
    ----------
    exc : Exception
        Exception raised by the command.
    debug : bool
        Whether to include traceback details.

    Returns
    -------
    int
        Process exit code.
    """
    typer.secho(f"✗ {type(exc).__name__}: {exc}", fg=typer.colors.RED, err=True)
    if debug:
        typer.echo("\nTraceback:", err=True)
        typer.echo("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)), err=True)
    code = getattr(exc, "exit_code", None)
    if isinstance(code, int) and code > 0:
        return code
    return 1


def _parse_fields(field_items: list[str] | None) -> dict[str, str]:
    """Parse repeated KEY=VALUE field entries."""
    parsed: dict[str, str] = {}
    for item in field_items or []:
        if "=" not in item:
            raise typer.BadParameter(
                f"Invalid field entry '{item}'. Use KEY=VALUE format."
            )
        key, value = item.split("=", 1)
        key = key.strip()
        if not key:
            raise typer.BadParameter("Field key cannot be empty.")
        parsed[key] = value
    return parsed


def _state(ctx: typer.Context) -> tuple[Path, bool]:
    obj = ctx.obj or {}
    return Path(obj.get("path", DEFAULT_TODO_PATH)), bool(obj.get("debug", False))


def _load(ctx: typer.Context, *, missing_ok: bool = False) -> ToDoList:
    """Load the task file selected by the global options."""
    path, debug = _state(ctx)
    if missing_ok and not path.exists():
        return ToDoList()
    try:
        from godot_todo.api import load_todo_list

        return load_todo_list(path)
    except TodoError as exc:
        raise typer.Exit(code=_print_error(exc, debug))
    except Exception as exc:
        # Unexpected crash: still show a clean message; debug prints traceback.
        raise typer.Exit(code=_print_error(exc, debug))


def _save(ctx: typer.Context, todo_list: ToDoList) -> None:
    path, debug = _state(ctx)
    try:
        from godot_todo.api import save_todo_list

        save_todo_list(todo_list, path)
    except TodoError as exc:
        raise typer.Exit(code=_print_error(exc, debug))
    except Exception as exc:
        # Unexpected crash: still show a clean message; debug prints traceback.
        raise typer.Exit(code=_print_error(exc, debug))


def _echo_task(guid: str, item: ToDoItem) -> None:
    typer.echo(f"{guid}  {item}")


def _finish_change(ctx: typer.Context, todo_list: ToDoList, change: StatusChange) -> None:
    if not change.found:
        typer.secho(f"✗ No task with GUID '{change.guid}'.", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    _save(ctx, todo_list)
    typer.secho(f"✓ {change.guid}: {change.status}", fg=typer.colors.GREEN)


# -----------------------------
# Global options
# -----------------------------
@app.callback()
def _main(
    ctx: typer.Context,
    file: Path = typer.Option(
        DEFAULT_TODO_PATH,
        "--file",
        "-f",
        envvar="GODOT_TODO_FILE",
        help="YAML task file.",
    ),
    debug: bool = typer.Option(False, "--debug", help="Show full tracebacks on error."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Initialize shared CLI state.

    Parameters
    ----------
    ctx : typer.Context
        Typer context object used to store shared state.
    file : Path
        Task file used by every command.
    debug : bool, default=False
        Whether to enable debug error output.
    verbose : bool, default=False
        Whether to log at DEBUG level instead of WARNING.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = {"path": file, "debug": debug}


# -----------------------------
# Commands
# -----------------------------
@app.command("list")
def list_cmd(ctx: typer.Context) -> None:
    """Print every task in the file."""
    todo_list = _load(ctx)
    if not len(todo_list):
        typer.echo("No tasks.")
        return
    for guid, item in todo_list.items():
        _echo_task(guid, item)


@app.command("search")
def search_cmd(
    ctx: typer.Context,
    query: str = typer.Argument("", help="Text to find. Empty matches every task."),
    regex: bool = typer.Option(False, "--regex", help="Treat QUERY as a regular expression."),
    status: str = typer.Option(
        "all",
        "--status",
        "-s",
        help="Status filter: all, open, done, failed or custom:<text>.",
    ),
) -> None:
    """Search tasks by status and text or regex.

    Notes
    -----
    - Plain queries are case-insensitive.
    - The query is matched against the display line, the GUID and every
      stored field.
    """
    _, debug = _state(ctx)
    todo_list = _load(ctx)
    try:
        from godot_todo.api import search_todo_list

        result = search_todo_list(
            todo_list,
            query=query,
            use_regex=regex,
            status_filter=status,
        )
    except TodoError as exc:
        raise typer.Exit(code=_print_error(exc, debug))
    except Exception as exc:
        # Unexpected crash: still show a clean message; debug prints traceback.
        raise typer.Exit(code=_print_error(exc, debug))

    if not result.ok:
        typer.secho(f"Regex error: {result.error}", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(code=SearchError.exit_code)
    if not result.matches:
        typer.echo("No matches.")
        return
    for guid, item in result.matches:
        _echo_task(guid, item)


@app.command("show")
def show_cmd(
    ctx: typer.Context,
    guid: str = typer.Argument(..., help=GUID_HELP),
) -> None:
    """Show one task with its paths and stored fields."""
    todo_list = _load(ctx)
    item = todo_list.get(guid)
    if item is None:
        typer.secho(f"✗ No task with GUID '{guid}'.", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    typer.echo(str(item))
    unity_path = item.get("unity_path")
    godot_path = item.get("godot_path")
    if unity_path is not None:
        typer.echo(f"Unity: {unity_path}")
    if godot_path is not None:
        typer.echo(f"Godot: {godot_path}")
    typer.echo(f"GUID: {guid}")
    for key, value in item.to_document().items():
        typer.echo(f"  {key}: {value}")


@app.command("add")
def add_cmd(
    ctx: typer.Context,
    guid: str = typer.Argument(..., help=GUID_HELP),
    kind: str = typer.Argument(
        ..., help="Task type: Shader, Material, Prefab, Animation, Script or Other."
    ),
    field: list[str] | None = typer.Option(None, "--field", help=FIELD_HELP),
) -> None:
    """Add (or replace) a task.

    Incomplete tasks are accepted; missing required fields are reported as
    a warning and the task is dropped the next time the file is loaded
    unless they are filled in.
    """
    _, debug = _state(ctx)
    fields = _parse_fields(field)
    todo_list = _load(ctx, missing_ok=True)
    try:
        from godot_todo.api import new_task

        item = new_task(todo_list, guid, kind, fields)
    except TodoError as exc:
        raise typer.Exit(code=_print_error(exc, debug))
    except Exception as exc:
        # Unexpected crash: still show a clean message; debug prints traceback.
        raise typer.Exit(code=_print_error(exc, debug))

    missing = item.missing_keys()
    if missing:
        typer.secho(
            f"Warning: {kind} task is missing {', '.join(missing)}.",
            fg=typer.colors.YELLOW,
            err=True,
        )
    _save(ctx, todo_list)
    typer.secho(f"✓ Added: {guid}  {item}", fg=typer.colors.GREEN)


def _transition(ctx: typer.Context, guid: str, transition: str) -> None:
    from godot_todo.application.use_cases import apply_transition

    todo_list = _load(ctx)
    change = apply_transition(todo_list, guid, transition)  # type: ignore[arg-type]
    _finish_change(ctx, todo_list, change)


@app.command("done")
def done_cmd(ctx: typer.Context, guid: str = typer.Argument(..., help=GUID_HELP)) -> None:
    """Mark a task Done."""
    _transition(ctx, guid, "done")


@app.command("fail")
def fail_cmd(ctx: typer.Context, guid: str = typer.Argument(..., help=GUID_HELP)) -> None:
    """Mark a task Failed."""
    _transition(ctx, guid, "failed")


@app.command("reopen")
def reopen_cmd(ctx: typer.Context, guid: str = typer.Argument(..., help=GUID_HELP)) -> None:
    """Set a task back to Open."""
    _transition(ctx, guid, "open")


@app.command("verify")
def verify_cmd(ctx: typer.Context, guid: str = typer.Argument(..., help=GUID_HELP)) -> None:
    """Mark a task Done and note that the conversion was verified in Godot."""
    from godot_todo.application.use_cases import verify_task

    todo_list = _load(ctx)
    _finish_change(ctx, todo_list, verify_task(todo_list, guid))


@app.command("set-status")
def set_status_cmd(
    ctx: typer.Context,
    guid: str = typer.Argument(..., help=GUID_HELP),
    status: str = typer.Argument(..., help="New status (free text)."),
    info: str = typer.Option("", "--info", help="Replacement info text."),
) -> None:
    """Set an arbitrary status and info text on a task."""
    from godot_todo.application.use_cases import update_task_status

    todo_list = _load(ctx)
    _finish_change(ctx, todo_list, update_task_status(todo_list, guid, status, info))


@app.command("copy")
def copy_cmd(
    ctx: typer.Context,
    guid: str = typer.Argument(..., help=GUID_HELP),
    key: str = typer.Argument("godot_path", help="unity_path or godot_path."),
) -> None:
    """Print the raw Unity or Godot path of a task, for piping to a clipboard tool."""
    if key not in COPYABLE_FIELDS:
        raise typer.BadParameter(f"KEY must be one of: {', '.join(COPYABLE_FIELDS)}.")
    todo_list = _load(ctx)
    item = todo_list.get(guid)
    value = item.get(key) if item is not None else None
    if value is None:
        typer.secho(f"✗ Task '{guid}' has no {key}.", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    typer.echo(value)


if __name__ == "__main__":
    app()
