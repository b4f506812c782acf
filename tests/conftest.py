"""Shared pytest configuration, marker assignment and task fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

SHADER_GUID = "guid1"
SHADER_TASK = {
    "type": "Shader",
    "unity_path": "Assets/Shaders/Example.shader",
    "godot_path": "res://shaders/example.gdshader",
    "instruction": "translate",
}


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Attach suite markers based on test file path."""
    del config
    for item in items:
        parts = set(Path(str(item.fspath)).parts)
        if "e2e_tests" in parts:
            item.add_marker(pytest.mark.e2e)
        elif "integration_tests" in parts:
            item.add_marker(pytest.mark.integration)
        elif "unit_tests" in parts:
            item.add_marker(pytest.mark.unit)


@pytest.fixture
def task_document() -> dict[str, dict[str, dict[str, str]]]:
    """Stored document with one valid task of each path-only kind plus a shader."""
    return {
        "todo_list": {
            SHADER_GUID: dict(SHADER_TASK, status="Open"),
            "prefab-1": {
                "type": "Prefab",
                "unity_path": "Assets/Prefabs/Tree.prefab",
                "godot_path": "res://scenes/tree.tscn",
                "status": "Failed",
                "reason": "Missing LOD",
                "info": "retry after mesh import",
            },
            "anim-1": {
                "type": "Animation",
                "unity_path": "Assets/Anim/Walk.anim",
                "godot_path": "res://anim/walk.tres",
                "status": "Done",
                "reason": "New conversion task",
                "info": "",
            },
        }
    }


@pytest.fixture
def task_file(tmp_path: Path, task_document: dict[str, object]) -> Path:
    """Write ``task_document`` to a YAML file and return its path."""
    path = tmp_path / "todo_list.yaml"
    path.write_text(yaml.safe_dump(task_document, allow_unicode=True), encoding="utf-8")
    return path
