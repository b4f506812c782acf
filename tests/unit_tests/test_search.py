"""Unit tests for status filters and query matching."""

from __future__ import annotations

import pytest

from godot_todo.errors import SearchError, TaskInputError
from godot_todo.search import StatusFilter, build_haystack, matches_query, search_items
from godot_todo.todo import ToDoItem, ToDoList


@pytest.fixture
def todo_list(task_document: dict[str, object]) -> ToDoList:
    return ToDoList.from_document(task_document)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("all", StatusFilter("All")),
        ("OPEN", StatusFilter("Open")),
        ("Done", StatusFilter("Done")),
        ("failed", StatusFilter("Failed")),
        ("custom:ail", StatusFilter("Custom", "ail")),
        ("Custom:", StatusFilter("Custom", "")),
    ],
)
def test_parse_status_filter(value: str, expected: StatusFilter) -> None:
    assert StatusFilter.parse(value) == expected


def test_parse_rejects_unknown_filter() -> None:
    with pytest.raises(TaskInputError, match="Unknown status filter 'pending'"):
        StatusFilter.parse("pending")


def test_labels() -> None:
    assert StatusFilter().label == "All"
    assert StatusFilter.custom("ail").label == "Custom(ail)"


@pytest.mark.parametrize(
    ("status_filter", "status", "expected"),
    [
        (StatusFilter("All"), "anything", True),
        (StatusFilter("Open"), "open", True),
        (StatusFilter("Open"), "Opened", False),
        (StatusFilter("Done"), "DONE", True),
        (StatusFilter("Failed"), "Done", False),
        (StatusFilter.custom("ail"), "Failed", True),
        (StatusFilter.custom("ail"), "Open", False),
        (StatusFilter.custom("fail"), "Failed", False),
        (StatusFilter.custom(""), "Open", True),
    ],
)
def test_filter_matches(status_filter: StatusFilter, status: str, expected: bool) -> None:
    """Built-ins ignore case; custom filters are case-sensitive substrings."""
    assert status_filter.matches(status) is expected


def test_haystack_contains_display_guid_and_fields() -> None:
    item = ToDoItem("Prefab", {"unity_path": "Assets/Tree.prefab", "godot_path": "res://tree.tscn"})
    haystack = build_haystack("g-42", item)

    first_line, guid_line, yaml_line = haystack.split("\n")
    assert first_line == str(item)
    assert guid_line == "GUID:g-42"
    assert yaml_line.startswith("YAML:")
    assert "Assets/Tree.prefab" in yaml_line


def test_empty_query_matches_everything() -> None:
    assert matches_query("g", ToDoItem("Other"), "")


def test_plain_query_is_case_insensitive() -> None:
    item = ToDoItem("Prefab", {"unity_path": "Assets/Tree.prefab", "godot_path": "res://tree.tscn"})
    assert matches_query("g", item, "TREE.PREFAB")
    assert not matches_query("g", item, "rock")


def test_search_all_with_empty_query(todo_list: ToDoList) -> None:
    guids = [guid for guid, _ in search_items(todo_list)]
    assert sorted(guids) == ["anim-1", "guid1", "prefab-1"]


def test_search_matches_guid(todo_list: ToDoList) -> None:
    assert [guid for guid, _ in search_items(todo_list, "anim-1")] == ["anim-1"]


def test_search_matches_non_display_field(todo_list: ToDoList) -> None:
    """Fields outside the display line (here ``reason``) are searchable."""
    results = search_items(todo_list, "missing lod")
    assert [guid for guid, _ in results] == ["prefab-1"]


def test_search_custom_filter(todo_list: ToDoList) -> None:
    results = search_items(todo_list, status_filter=StatusFilter.custom("ail"))
    assert [guid for guid, _ in results] == ["prefab-1"]


def test_search_builtin_filter_combines_with_query(todo_list: ToDoList) -> None:
    assert search_items(todo_list, "shader", status_filter=StatusFilter("Done")) == []
    results = search_items(todo_list, "shader", status_filter=StatusFilter("Open"))
    assert [guid for guid, _ in results] == ["guid1"]


def test_regex_search(todo_list: ToDoList) -> None:
    results = search_items(todo_list, r"res://(anim|scenes)/", use_regex=True)
    assert sorted(guid for guid, _ in results) == ["anim-1", "prefab-1"]


def test_regex_is_case_sensitive(todo_list: ToDoList) -> None:
    assert search_items(todo_list, "SHADER", use_regex=True) == []


def test_invalid_regex_raises(todo_list: ToDoList) -> None:
    with pytest.raises(SearchError):
        search_items(todo_list, "[abc", use_regex=True)


def test_invalid_text_is_fine_without_regex(todo_list: ToDoList) -> None:
    assert search_items(todo_list, "[abc") == []


def test_results_are_independent_copies(todo_list: ToDoList) -> None:
    results = search_items(todo_list, "guid1")
    _, snapshot_item = results[0]

    snapshot_item.mark_failed()

    assert todo_list.get("guid1").status == "Open"  # type: ignore[union-attr]
