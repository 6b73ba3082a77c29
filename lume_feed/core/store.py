"""Key-value blob storage backing the favorites list.

Values are opaque text blobs. Every ``set`` rewrites the whole backing
file; there is no incremental persistence.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Protocol


class BlobStore(Protocol):
    """Minimal key-value interface used by FavoritesManager."""

    def get(self, key: str) -> str | None:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemoryBlobStore:
    """In-process store, used for tests and ephemeral sessions."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileBlobStore:
    """Stores all keys in a single JSON object on disk.

    Attributes:
        path: Location of the JSON file; parent directories are created on write
    """

    def __init__(self, path: Path):
        self.path = path

    def get(self, key: str) -> str | None:
        value = self._read_all().get(key)
        if value is None:
            return None
        return str(value)

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        tmp_path.replace(self.path)

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Blob store file {self.path} does not hold a JSON object")
        return data
