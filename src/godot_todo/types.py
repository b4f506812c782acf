"""Shared type aliases for task documents and filters."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Literal

type FilterKind = Literal["All", "Open", "Done", "Failed", "Custom"]

type FieldValue = str | int | float | bool | None
type RecordDocument = dict[str, FieldValue]
type FieldPairs = Mapping[str, str] | Iterable[tuple[str, str]]
type TodoDocument = dict[str, dict[str, RecordDocument]]
