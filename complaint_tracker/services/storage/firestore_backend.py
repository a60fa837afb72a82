"""
Firestore storage backend.

Each key is one document in the configured collection; the serialized payload
is kept in its "value" field next to a server-side "updated_at" timestamp.
"""

import logging
from typing import Optional

from firebase_admin import firestore

from complaint_tracker.services.storage.base import StorageBackend, StorageError

logger = logging.getLogger(__name__)


class FirestoreBackend(StorageBackend):
    name = "firestore"

    def __init__(self, db, collection: str):
        self.db = db
        self.collection = collection

    def _doc(self, key: str):
        return self.db.collection(self.collection).document(key)

    def is_available(self) -> bool:
        try:
            # Lightweight read; a missing document still proves connectivity
            self._doc("_availability_check").get()
            return True
        except Exception as e:
            logger.warning(f"[FIRESTORE] Availability check failed: {e}")
            return False

    def get(self, key: str) -> Optional[str]:
        try:
            doc = self._doc(key).get()
        except Exception as e:
            raise StorageError(f"Failed to read {self.collection}/{key}: {e}")
        if not doc.exists:
            return None
        return (doc.to_dict() or {}).get("value")

    def set(self, key: str, value: str) -> None:
        try:
            self._doc(key).set({
                "value": value,
                "updated_at": firestore.SERVER_TIMESTAMP,
            })
        except Exception as e:
            raise StorageError(f"Failed to write {self.collection}/{key}: {e}")

    def remove(self, key: str) -> None:
        try:
            self._doc(key).delete()
        except Exception as e:
            raise StorageError(f"Failed to remove {self.collection}/{key}: {e}")

    def describe(self) -> str:
        return f"firestore:{self.collection}"
