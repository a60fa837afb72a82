"""
Storage Backend Registry.

Selects the backend from settings:
- "file" (default): JSON files under STORAGE_DIR
- "firestore": Firestore documents; falls back to "file" if Firestore cannot be initialized
- "memory": process-local, nothing survives a restart
"""

import logging
from typing import Optional

from complaint_tracker.core.settings import settings
from complaint_tracker.services.storage.base import StorageBackend
from complaint_tracker.services.storage.file_backend import FileBackend
from complaint_tracker.services.storage.memory_backend import MemoryBackend

logger = logging.getLogger(__name__)

_backend_instance: Optional[StorageBackend] = None


def create_storage_backend(backend_name: Optional[str] = None) -> StorageBackend:
    name = (backend_name or settings.STORAGE_BACKEND or "file").lower()

    if name == "memory":
        logger.info("Storage backend initialized: memory")
        return MemoryBackend()

    if name == "firestore":
        try:
            from complaint_tracker.config.firebase import get_db
            from complaint_tracker.services.storage.firestore_backend import FirestoreBackend

            backend = FirestoreBackend(get_db(), settings.FIRESTORE_COLLECTION)
            logger.info(f"Storage backend initialized: firestore ({settings.FIRESTORE_COLLECTION})")
            return backend
        except Exception as e:
            logger.warning(f"Failed to initialize Firestore backend: {e}. Falling back to file storage.")
    elif name != "file":
        logger.warning(f"Unknown STORAGE_BACKEND '{name}', using file storage")

    logger.info(f"Storage backend initialized: file ({settings.STORAGE_DIR})")
    return FileBackend(settings.STORAGE_DIR)


def get_storage_backend() -> StorageBackend:
    """Get or create the configured backend (singleton)."""
    global _backend_instance
    if _backend_instance is None:
        _backend_instance = create_storage_backend()
    return _backend_instance


def set_storage_backend(backend: Optional[StorageBackend]) -> None:
    """Replace the active backend (None resets to settings on next access)."""
    global _backend_instance
    _backend_instance = backend
