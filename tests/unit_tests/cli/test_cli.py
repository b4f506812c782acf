"""Unit tests for CLI command behavior."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

from godot_todo.cli import cli as cli_module
from godot_todo.errors import StorageError

runner = CliRunner()


def _stored(path: Path) -> dict[str, dict[str, object]]:
    return yaml.safe_load(path.read_text(encoding="utf-8"))["todo_list"]


def test_help_shows_commands() -> None:
    """Ensure top-level help lists the task subcommands."""
    result = runner.invoke(cli_module.app, ["--help"])
    assert result.exit_code == 0
    for command in ("list", "search", "add", "done", "verify", "copy"):
        assert command in result.output


def test_list_prints_display_lines(task_file: Path) -> None:
    result = runner.invoke(cli_module.app, ["-f", str(task_file), "list"])
    assert result.exit_code == 0
    assert "guid1  [Shader] → res://shaders/example.gdshader (Open)" in result.output
    assert "prefab-1" in result.output


def test_list_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "todo_list.yaml"
    path.write_text("", encoding="utf-8")
    result = runner.invoke(cli_module.app, ["-f", str(path), "list"])
    assert result.exit_code == 0
    assert "No tasks." in result.output


def test_missing_file_reports_storage_error(tmp_path: Path) -> None:
    result = runner.invoke(cli_module.app, ["-f", str(tmp_path / "absent.yaml"), "list"])
    assert result.exit_code == StorageError.exit_code
    assert "StorageError" in result.output


def test_file_from_environment(task_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GODOT_TODO_FILE", str(task_file))
    result = runner.invoke(cli_module.app, ["show", "guid1"])
    assert result.exit_code == 0
    assert "Godot: res://shaders/example.gdshader" in result.output


def test_search_with_custom_status(task_file: Path) -> None:
    result = runner.invoke(
        cli_module.app, ["-f", str(task_file), "search", "--status", "custom:ail"]
    )
    assert result.exit_code == 0
    assert "prefab-1" in result.output
    assert "guid1" not in result.output


def test_search_bad_regex(task_file: Path) -> None:
    result = runner.invoke(cli_module.app, ["-f", str(task_file), "search", "[abc", "--regex"])
    assert result.exit_code == 3
    assert "Regex error:" in result.output


def test_search_unknown_status(task_file: Path) -> None:
    result = runner.invoke(
        cli_module.app, ["-f", str(task_file), "search", "--status", "pending"]
    )
    assert result.exit_code == 4
    assert "Unknown status filter" in result.output


def test_search_no_matches(task_file: Path) -> None:
    result = runner.invoke(cli_module.app, ["-f", str(task_file), "search", "terrain"])
    assert result.exit_code == 0
    assert "No matches." in result.output


def test_show_unknown_guid(task_file: Path) -> None:
    result = runner.invoke(cli_module.app, ["-f", str(task_file), "show", "nope"])
    assert result.exit_code == 1
    assert "No task with GUID 'nope'" in result.output


def test_add_creates_file(tmp_path: Path) -> None:
    path = tmp_path / "new.yaml"
    result = runner.invoke(
        cli_module.app,
        [
            "-f",
            str(path),
            "add",
            "s-1",
            "Script",
            "--field",
            "unity_path=Assets/Player.cs",
            "--field",
            "godot_path=res://player.gd",
        ],
    )
    assert result.exit_code == 0, result.output
    assert "✓ Added: s-1" in result.output
    assert _stored(path)["s-1"] == {
        "type": "Script",
        "unity_path": "Assets/Player.cs",
        "godot_path": "res://player.gd",
        "status": "Open",
        "reason": "New conversion task",
        "info": "",
    }


def test_add_warns_about_missing_fields(task_file: Path) -> None:
    result = runner.invoke(cli_module.app, ["-f", str(task_file), "add", "m-1", "Material"])
    assert result.exit_code == 0
    assert "missing unity_path, godot_path, instruction" in result.output


def test_add_rejects_malformed_field(task_file: Path) -> None:
    result = runner.invoke(
        cli_module.app, ["-f", str(task_file), "add", "m-1", "Material", "--field", "oops"]
    )
    assert result.exit_code != 0
    assert "KEY=VALUE" in result.output


@pytest.mark.parametrize(
    ("command", "expected"),
    [("done", "Done"), ("fail", "Failed"), ("reopen", "Open")],
)
def test_transitions_persist(task_file: Path, command: str, expected: str) -> None:
    result = runner.invoke(cli_module.app, ["-f", str(task_file), command, "anim-1"])
    assert result.exit_code == 0
    assert f"✓ anim-1: {expected}" in result.output
    assert _stored(task_file)["anim-1"]["status"] == expected


def test_transition_unknown_guid_leaves_file(task_file: Path) -> None:
    before = task_file.read_text(encoding="utf-8")
    result = runner.invoke(cli_module.app, ["-f", str(task_file), "done", "nope"])
    assert result.exit_code == 1
    assert task_file.read_text(encoding="utf-8") == before


def test_verify_sets_note(task_file: Path) -> None:
    result = runner.invoke(cli_module.app, ["-f", str(task_file), "verify", "guid1"])
    assert result.exit_code == 0
    stored = _stored(task_file)["guid1"]
    assert stored["status"] == "Done"
    assert stored["info"] == "✅ Conversion verified in Godot"


def test_set_status(task_file: Path) -> None:
    result = runner.invoke(
        cli_module.app,
        ["-f", str(task_file), "set-status", "guid1", "Blocked", "--info", "needs art"],
    )
    assert result.exit_code == 0
    stored = _stored(task_file)["guid1"]
    assert (stored["status"], stored["info"]) == ("Blocked", "needs art")


def test_copy_prints_raw_path(task_file: Path) -> None:
    result = runner.invoke(cli_module.app, ["-f", str(task_file), "copy", "guid1"])
    assert result.exit_code == 0
    assert result.output.strip() == "res://shaders/example.gdshader"


def test_copy_rejects_other_fields(task_file: Path) -> None:
    result = runner.invoke(cli_module.app, ["-f", str(task_file), "copy", "guid1", "reason"])
    assert result.exit_code != 0


def test_invalid_utf8_file_reports_storage_error(tmp_path: Path) -> None:
    path = tmp_path / "todo_list.yaml"
    path.write_bytes(b"\xff\xfe")
    result = runner.invoke(cli_module.app, ["-f", str(path), "list"])
    assert result.exit_code == StorageError.exit_code
    assert "StorageError: Malformed task file" in result.output
    assert "Traceback" not in result.output


def test_unexpected_error_is_reported_cleanly(
    task_file: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    import godot_todo.api as api_module

    def boom(path: Path) -> None:
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(api_module, "load_todo_list", boom)

    result = runner.invoke(cli_module.app, ["-f", str(task_file), "list"])
    assert result.exit_code == 1
    assert "✗ RuntimeError: disk on fire" in result.output
    assert "Traceback" not in result.output

    result = runner.invoke(cli_module.app, ["--debug", "-f", str(task_file), "list"])
    assert result.exit_code == 1
    assert "Traceback" in result.output
