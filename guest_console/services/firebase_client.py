"""
Firebase initialization for the Firestore-backed guest store
"""

from __future__ import annotations

import base64
import json
import logging
import os
from functools import lru_cache
from typing import Any

import firebase_admin
from firebase_admin import credentials, firestore

from guest_console.core.config import settings

logger = logging.getLogger(__name__)


def load_credentials_info() -> dict[str, Any] | None:
    """Read service-account info from JSON, base64 JSON or a file, in that order"""
    if settings.FIREBASE_CREDENTIALS_JSON:
        return json.loads(settings.FIREBASE_CREDENTIALS_JSON)
    if settings.FIREBASE_CREDENTIALS_B64:
        return json.loads(base64.b64decode(settings.FIREBASE_CREDENTIALS_B64).decode("utf-8"))
    path = settings.FIREBASE_CREDENTIALS_FILE
    if path and os.path.exists(path):
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    return None


@lru_cache(maxsize=1)
def get_firestore_client():
    """Initialize and return a cached Firestore client if Firebase is enabled."""
    if not settings.USE_FIREBASE:
        return None

    if not firebase_admin._apps:
        info = load_credentials_info()
        if not info:
            raise RuntimeError("Firebase credentials not provided. Set FIREBASE_CREDENTIALS_FILE, FIREBASE_CREDENTIALS_JSON, or FIREBASE_CREDENTIALS_B64")

        firebase_admin.initialize_app(credentials.Certificate(info))
        logger.info(f"Firebase initialized for project {info.get('project_id')}")

    return firestore.client()
