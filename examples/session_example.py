#!/usr/bin/env python3
"""Example: drive a task file through a session the way a front end would."""

from __future__ import annotations

import sys
import tempfile
from pathlib import Path

from godot_todo import new_task
from godot_todo.application import new_session
from godot_todo.search import StatusFilter


def main() -> None:
    with tempfile.TemporaryDirectory() as directory:
        session = new_session(Path(directory) / "todo_list.yaml")

        new_task(
            session.todo_list,
            "guid1",
            "Shader",
            {
                "unity_path": "Assets/Shaders/Example.shader",
                "godot_path": "res://shaders/example.gdshader",
                "instruction": "translate",
            },
        )
        new_task(
            session.todo_list,
            "rock",
            "Prefab",
            {"unity_path": "Assets/Prefabs/Rock.prefab", "godot_path": "res://rock.tscn"},
        )
        if not session.save():
            raise SystemExit(f"FAIL: {session.last_error}")

        session.mark_failed("rock")
        session.status_filter = StatusFilter.custom("ail")
        session.run_search()
        for guid, item in session.filtered:
            print(f"{guid}  {item}")

        session.query = "[unclosed"
        session.use_regex = True
        if not session.run_search():
            print(f"Regex error: {session.last_error}", file=sys.stderr)

        print(f"Copy: {session.copy_field('guid1', 'godot_path')}")


if __name__ == "__main__":
    main()
