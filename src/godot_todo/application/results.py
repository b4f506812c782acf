"""Application-layer result objects."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from godot_todo.todo import ToDoItem


@dataclass(frozen=True)
class SearchResult:
    """Structured search outcome.

    ``matches`` is a snapshot of copies; ``error`` holds the regex compiler
    message when the query was rejected, in which case ``matches`` is empty.
    """

    matches: tuple[tuple[str, ToDoItem], ...] = ()
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def guids(self) -> list[str]:
        return [guid for guid, _ in self.matches]


@dataclass(frozen=True)
class StatusChange:
    """Outcome of a status transition requested by GUID."""

    guid: str
    found: bool
    status: str | None = None
    info: str | None = None
