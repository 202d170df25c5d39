"""
Configuration settings for the application
"""

import os
from typing import List
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application settings"""

    # Guest record store (server side)
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./wedding_guests.db")
    SERVE_GUEST_STORE: bool = os.getenv("SERVE_GUEST_STORE", "true").lower() in ("1", "true", "yes")
    USE_FIREBASE: bool = os.getenv("USE_FIREBASE", "false").lower() in ("1", "true", "yes")
    FIREBASE_CREDENTIALS_JSON: str | None = os.getenv("FIREBASE_CREDENTIALS_JSON")
    FIREBASE_CREDENTIALS_FILE: str | None = os.getenv("FIREBASE_CREDENTIALS_FILE")
    FIREBASE_CREDENTIALS_B64: str | None = os.getenv("FIREBASE_CREDENTIALS_B64")
    FIRESTORE_COLLECTION: str = "guests"

    # Guest record store (client side)
    GUEST_STORE_URL: str = os.getenv("GUEST_STORE_URL", "http://localhost:8000")
    GUEST_STORE_TIMEOUT: float = 10.0
    GUEST_LIST_LIMIT: int = 1000

    # Wedding
    WEDDING_ID: str = os.getenv("WEDDING_ID", "931d5a18-9bce-40ab-9717-6a117766ff44")
    INVITING_PARTY_TAGS: List[str] = ["Bride", "Groom"]
    DEFAULT_MAX_GUESTS: int = 2
    DEFAULT_INVITEE_NAME: str = "Honored Guest"
    RSVP_ENABLED: bool = True

    # Security
    ADMIN_TOKEN: str = os.getenv("ADMIN_TOKEN", "admin_token_123")

    # Application
    BASE_URL: str = os.getenv("BASE_URL", "http://localhost:8000")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS
    ALLOW_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://localhost:8000",
    ]

    # Rate limiting
    RATE_LIMIT_PER_MINUTE: int = 30

    class Config:
        env_file = ".env"

settings = Settings()
