"""
Storage Backend Base Interface.

A backend is a plain key-value store holding serialized strings.
The versioned application document lives on top of it (see storage_service).
"""

from abc import ABC, abstractmethod
from typing import Optional
import logging

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised by a backend when a read or write cannot be completed."""


class StorageBackend(ABC):
    """
    Abstract base class for key-value storage backends.

    Contract:
    - get() returns None for a missing key
    - set() overwrites any previous value
    - remove() on a missing key is a no-op
    - Read/write failures raise StorageError
    """

    name: str = "abstract"

    @abstractmethod
    def is_available(self) -> bool:
        """
        Check whether the backend can currently be read and written.

        Returns:
            True if usable, False otherwise (never raises)
        """
        pass

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        pass

    def describe(self) -> str:
        """Short human-readable location of the data, used by health checks."""
        return self.name
