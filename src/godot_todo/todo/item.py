"""Single conversion task backed by a flat key-value document."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from godot_todo.types import FieldPairs, FieldValue, RecordDocument

logger = logging.getLogger(__name__)

DEFAULT_STATUS = "Open"
DEFAULT_REASON = "New conversion task"
DEFAULT_INFO = ""

_PATH_KEYS = ("unity_path", "godot_path")
_REQUIRED_KEYS: dict[str, tuple[str, ...]] = {
    "Shader": (*_PATH_KEYS, "instruction"),
    "Material": (*_PATH_KEYS, "instruction"),
    "Prefab": _PATH_KEYS,
    "Animation": _PATH_KEYS,
    "Script": _PATH_KEYS,
    "Other": _PATH_KEYS,
}


def required_keys(kind: str) -> tuple[str, ...]:
    """Return the keys a stored task of ``kind`` must carry.

    Parameters
    ----------
    kind : str
        Task kind (the ``type`` field).

    Returns
    -------
    tuple[str, ...]
        Required keys. Unrecognized kinds require nothing.
    """
    return _REQUIRED_KEYS.get(kind, ())


def _is_scalar(value: object) -> bool:
    return isinstance(value, (str, int, float, bool))


class ToDoItem:
    """One Unity-to-Godot conversion task.

    Construction trusts the caller and never validates; use
    :meth:`from_document` to build a task from stored data, which drops
    entries missing required keys.

    Parameters
    ----------
    kind : str
        Task kind stored under ``type``.
    fields : Mapping[str, str] | Iterable[tuple[str, str]], optional
        Extra fields. ``status``, ``reason`` and ``info`` get defaults when
        not supplied.
    """

    def __init__(self, kind: str, fields: FieldPairs = ()) -> None:
        pairs = fields.items() if isinstance(fields, Mapping) else fields
        document: RecordDocument = {"type": kind}
        for key, value in pairs:
            document[key] = value
        self._document = _with_defaults(document)

    @classmethod
    def from_document(cls, document: object) -> ToDoItem | None:
        """Build a task from a stored mapping, or ``None`` when it is invalid.

        Parameters
        ----------
        document : object
            Parsed YAML value for one task.

        Returns
        -------
        ToDoItem | None
            The task, keeping every stored key verbatim, or ``None`` if the
            document is not a mapping or lacks ``type`` or a required key.
        """
        if not isinstance(document, Mapping):
            logger.warning("Ignoring task entry that is not a mapping: %r", document)
            return None

        kind = document.get("type")
        if not _is_scalar(kind):
            logger.warning("Task entry is missing the 'type' key")
            return None
        kind = str(kind)

        for key in required_keys(kind):
            if key not in document:
                logger.warning("Missing key '%s' for task type %s", key, kind)
                return None

        item = cls.__new__(cls)
        item._document = _with_defaults({str(k): v for k, v in document.items()})
        return item

    @property
    def kind(self) -> str | None:
        return self.get("type")

    @property
    def status(self) -> str | None:
        return self.get("status")

    def get(self, key: str) -> str | None:
        """Return field ``key`` as text, or ``None`` if absent or not a scalar."""
        value = self._document.get(key)
        if not _is_scalar(value):
            return None
        return value if isinstance(value, str) else str(value)

    def missing_keys(self) -> tuple[str, ...]:
        """Required keys for this task's kind that are not set."""
        kind = self.kind or ""
        return tuple(key for key in required_keys(kind) if key not in self._document)

    def set_status(self, new_status: str) -> None:
        self._document["status"] = new_status

    def mark_done(self) -> None:
        self.set_status("Done")

    def mark_failed(self) -> None:
        self.set_status("Failed")

    def reopen(self) -> None:
        self.set_status("Open")

    def set_info(self, text: str) -> None:
        self._document["info"] = text

    def to_document(self) -> RecordDocument:
        """Return a shallow copy of the underlying key-value document."""
        return dict(self._document)

    def __str__(self) -> str:
        kind = _or_default(self.get("type"), "Unknown")
        godot_path = _or_default(self.get("godot_path"), "<no path>")
        status = _or_default(self.get("status"), "unprocessed")
        return f"[{kind}] → {godot_path} ({status})"

    def __repr__(self) -> str:
        return f"ToDoItem({self._document!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ToDoItem):
            return NotImplemented
        return self._document == other._document

    __hash__ = None  # type: ignore[assignment]


def _or_default(value: str | None, default: str) -> str:
    return default if value is None else value


def _with_defaults(document: dict[str, FieldValue]) -> RecordDocument:
    document.setdefault("status", DEFAULT_STATUS)
    document.setdefault("reason", DEFAULT_REASON)
    document.setdefault("info", DEFAULT_INFO)
    return document
