"""Application ports for clean architecture boundaries."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class DocumentStore(Protocol):
    """Persist whole task documents."""

    def read(self, path: Path) -> object:
        """Return the parsed document stored at path."""

    def write(self, path: Path, document: object) -> None:
        """Replace the document stored at path."""
