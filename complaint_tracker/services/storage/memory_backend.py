"""
In-process storage backend. Data lives as long as the process does.
"""

from typing import Dict, Optional

from complaint_tracker.services.storage.base import StorageBackend


class MemoryBackend(StorageBackend):
    """Dict-backed store, used by tests and throwaway demos."""

    name = "memory"

    def __init__(self):
        self._data: Dict[str, str] = {}

    def is_available(self) -> bool:
        return True

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)
