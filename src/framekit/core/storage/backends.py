"""Key-value backends used for best-effort progress persistence."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Protocol

import structlog

from framekit.core.storage.result import Err, Ok, Result

logger = structlog.get_logger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


class StorageBackend(Protocol):
    """Minimal durable key-value contract."""

    def get(self, key: str) -> Result[str | None]:
        """Read the raw value stored under key (None when absent)."""
        ...

    def set(self, key: str, value: str) -> Result[None]:
        """Store value under key."""
        ...


class MemoryBackend:
    """Dict-backed store, lost when the process exits."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> Result[str | None]:
        return Ok(self._data.get(key))

    def set(self, key: str, value: str) -> Result[None]:
        self._data[key] = value
        return Ok(None)

    def keys(self) -> list[str]:
        return list(self._data)


class NullBackend:
    """Backend used when no durable store is available.

    Reads always behave as absent and writes are discarded.
    """

    def get(self, key: str) -> Result[str | None]:
        return Ok(None)

    def set(self, key: str, value: str) -> Result[None]:
        return Ok(None)


class FileBackend:
    """Stores one file per key inside a directory."""

    def __init__(self, directory: str | Path) -> None:
        """Initialize file backend.

        Args:
            directory: Directory holding one ``<key>.json`` file per record.
                Created lazily on first write.
        """
        self.directory = Path(directory)

    def _get_path(self, key: str) -> Path:
        return self.directory / f"{_UNSAFE_CHARS.sub('_', key)}.json"

    def get(self, key: str) -> Result[str | None]:
        path = self._get_path(key)
        try:
            if not path.exists():
                return Ok(None)
            return Ok(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            return Err(f"read failed: {e}")

    def set(self, key: str, value: str) -> Result[None]:
        path = self._get_path(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp_path = path.with_suffix(".json.tmp")
            tmp_path.write_text(value, encoding="utf-8")
            tmp_path.replace(path)
            logger.debug("Record written", key=key, path=str(path))
            return Ok(None)
        except OSError as e:
            return Err(f"write failed: {e}")


def create_backend(kind: str, directory: str | Path | None = None) -> StorageBackend:
    """Build a backend from its configured name.

    Args:
        kind: One of ``memory``, ``file`` or ``null``
        directory: Target directory for the ``file`` backend

    Returns:
        Backend instance
    """
    if kind == "memory":
        return MemoryBackend()
    if kind == "null":
        return NullBackend()
    if kind == "file":
        if directory is None:
            raise ValueError("file backend requires a directory")
        return FileBackend(directory)
    raise ValueError(f"Unknown storage backend: {kind}")
