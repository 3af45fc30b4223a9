"""
Core settings and environment variables for Civic Reports.
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
    APP_NAME: str = "Civic Reports"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # CORS - local presentation layer origins (same device only)
    CORS_ORIGINS: str = "http://localhost:5173,http://127.0.0.1:5173,http://localhost:8081"

    # Storage engine: "file" (JSON file on device), "memory" or "firestore"
    STORAGE_BACKEND: str = "file"
    STORAGE_PATH: str = "./civic_reports_db.json"

    # Single named entry holding the whole serialized report list
    REPORTS_KEY: str = "CIVIC_REPORTS"

    # Firestore (only used when STORAGE_BACKEND=firestore)
    FIRESTORE_COLLECTION: str = "kv_store"
    FIREBASE_PROJECT_ID: Optional[str] = None
    FIREBASE_CREDENTIALS_PATH: Optional[str] = None  # Path to service account JSON

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "allow"

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


# Global settings instance
settings = Settings()
