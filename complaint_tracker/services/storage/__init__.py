"""
Key-value storage backends for the application document.
"""

from complaint_tracker.services.storage.base import StorageBackend, StorageError
from complaint_tracker.services.storage.file_backend import FileBackend
from complaint_tracker.services.storage.memory_backend import MemoryBackend
from complaint_tracker.services.storage.registry import (
    create_storage_backend,
    get_storage_backend,
    set_storage_backend,
)

__all__ = [
    "StorageBackend",
    "StorageError",
    "FileBackend",
    "MemoryBackend",
    "create_storage_backend",
    "get_storage_backend",
    "set_storage_backend",
]
