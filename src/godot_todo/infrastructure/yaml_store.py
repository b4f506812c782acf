"""YAML file adapter for task documents."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path

import yaml

from godot_todo.errors import StorageError

logger = logging.getLogger(__name__)


class YamlDocumentStore:
    """Read and write whole task documents as YAML files."""

    def read(self, path: Path) -> object:
        """Parse the YAML document stored at ``path``.

        Parameters
        ----------
        path : Path
            File to read.

        Returns
        -------
        object
            Parsed document; ``None`` for an empty file.

        Raises
        ------
        StorageError
            If the file cannot be opened or is not valid YAML.
        """
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise StorageError(f"Task file not found: {path}") from exc
        except UnicodeDecodeError as exc:
            raise StorageError(f"Malformed task file {path}: {exc}") from exc
        except OSError as exc:
            raise StorageError(f"Unable to read task file {path}: {exc}") from exc

        try:
            document = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise StorageError(f"Malformed YAML in {path}: {exc}") from exc
        logger.debug("Read task document from %s", path)
        return document

    def write(self, path: Path, document: object) -> None:
        """Serialize ``document`` to ``path``.

        The document is written to a sibling temporary file first and then
        moved into place, so a failed write leaves the previous file intact.
        An existing file keeps its permission bits, and a symlinked path is
        written through to its target.

        Raises
        ------
        StorageError
            If the document cannot be serialized or the file cannot be written.
        """
        try:
            text = yaml.safe_dump(
                document,
                allow_unicode=True,
                sort_keys=False,
                default_flow_style=False,
            )
        except yaml.YAMLError as exc:
            raise StorageError(f"Unable to serialize task document: {exc}") from exc

        target = path.resolve() if path.is_symlink() else path
        tmp_name: str | None = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=target.parent,
                prefix=f".{target.name}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                tmp_name = handle.name
                handle.write(text)
            # Keep the permissions of the file being replaced.
            if target.exists():
                shutil.copymode(target, tmp_name)
            os.replace(tmp_name, target)
        except OSError as exc:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            raise StorageError(f"Unable to write task file {path}: {exc}") from exc
        logger.debug("Wrote task document to %s", path)
