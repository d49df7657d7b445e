"""File-backed key/value backend.

Persists all keys in a single JSON document, the way a browser profile
keeps its local storage for one origin. Every write replaces the file
atomically so a crash never leaves a half-written document behind.
"""

import json
import logging
import os
import tempfile
from pathlib import Path

from .base import KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_PATH = Path.home() / ".chatwidget" / "storage.json"


class JsonFileKeyValueStore(KeyValueStore):
    """Key/value store kept in a JSON file.

    The document is re-read on every access; there is no in-process cache,
    so whatever is on disk is the current state.
    """

    def __init__(self, path: str | Path = DEFAULT_STORAGE_PATH):
        self._path = Path(path)

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        document = json.loads(self._path.read_text(encoding="utf-8"))
        if not isinstance(document, dict):
            raise ValueError(f"Storage file {self._path} is not a JSON object")
        return document

    def _write_all(self, items: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(items, tmp, ensure_ascii=False)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def get_item(self, key: str) -> str | None:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        try:
            items = self._read_all()
        except ValueError:
            # Unreadable document: start over rather than refuse to save
            logger.warning("Replacing unreadable storage file %s", self._path)
            items = {}
        items[key] = value
        self._write_all(items)

    def remove_item(self, key: str) -> None:
        items = self._read_all()
        if key in items:
            del items[key]
            self._write_all(items)

    @property
    def backend_type(self) -> str:
        return "file"

    @property
    def path(self) -> Path:
        return self._path
