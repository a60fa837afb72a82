"""
Core settings and environment variables for the Complaint Tracker.
Uses pydantic-settings for type-safe environment variable loading.
"""

from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Create a .env file in the root directory to configure these.
    """

    # Application
    APP_NAME: str = "Complaint Tracker"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # CORS - Frontend URLs allowed to access this API (comma separated)
    CORS_ORIGINS: str = "http://localhost:5173,http://127.0.0.1:5173,http://localhost:8080"

    # Storage layer
    # - STORAGE_BACKEND: "file" (default), "firestore" or "memory"
    # - STORAGE_DIR: directory holding one JSON file per key (file backend)
    # - STORAGE_QUOTA_BYTES: writes larger than this are refused
    STORAGE_BACKEND: str = "file"
    STORAGE_DIR: str = "./data"
    STORAGE_KEY: str = "cts_data_v1"
    STORAGE_QUOTA_BYTES: int = 5 * 1024 * 1024
    FIRESTORE_COLLECTION: str = "kv_store"

    # Firebase/Firestore (only used by the firestore backend)
    FIREBASE_PROJECT_ID: Optional[str] = None
    FIREBASE_CREDENTIALS_PATH: Optional[str] = None  # Path to service account JSON

    # Listing defaults for admin and department dashboards
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "allow"

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


# Global settings instance
settings = Settings()
