"""Domain errors raised by the conversion task tracker."""

from __future__ import annotations


class TodoError(Exception):
    """Base error for task tracker failures.

    Parameters
    ----------
    message : str
        Human-readable error description.
    exit_code : int | None, default=None
        Process exit code the CLI should use. Falls back to the class default.
    """

    exit_code: int = 1

    def __init__(self, message: str, *, exit_code: int | None = None) -> None:
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class StorageError(TodoError):
    """Reading or writing the task file failed (I/O or malformed YAML)."""

    exit_code = 2


class SearchError(TodoError):
    """Search query could not be compiled."""

    exit_code = 3


class TaskInputError(TodoError):
    """Caller-supplied task or search parameters are invalid."""

    exit_code = 4


__all__ = ["TodoError", "StorageError", "SearchError", "TaskInputError"]
