"""Durable key-value storage with explicit results."""

from framekit.core.storage.backends import (
    FileBackend,
    MemoryBackend,
    NullBackend,
    StorageBackend,
    create_backend,
)
from framekit.core.storage.result import Err, Ok, Result

__all__ = [
    "Err",
    "FileBackend",
    "MemoryBackend",
    "NullBackend",
    "Ok",
    "Result",
    "StorageBackend",
    "create_backend",
]
