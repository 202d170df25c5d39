"""
Shared fixtures: a real SQLite-backed guest store reached over HTTP, and an
in-memory stand-in for route tests
"""

import uuid
from datetime import datetime, timezone

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from guest_console.api import routes_store
from guest_console.core.config import settings
from guest_console.core.db import Base, get_db
from guest_console.core.errors import AlreadyRespondedError, ConflictError, NotFoundError
from guest_console.schemas.guest import GuestRecord
from guest_console.services.store_client import GuestStoreClient
from guest_console.utils.security import rate_limiter

WEDDING_ID = settings.WEDDING_ID

# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///./test_guests.db"
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

@pytest.fixture
def db_engine():
    """Fresh guest tables for each test"""
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)

@pytest.fixture
def store_app(db_engine):
    """Standalone guest record store app"""
    app = FastAPI()
    app.include_router(routes_store.router)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    return app

@pytest.fixture
def store_http(store_app):
    return TestClient(store_app)

@pytest.fixture
def store(store_http):
    """GuestStoreClient talking HTTP to the SQLite store"""
    return GuestStoreClient(store_http)

@pytest.fixture
def make_guest(store):
    """Create a guest through the store and return the record"""
    def _make(**fields):
        payload = {
            "wedding_id": WEDDING_ID,
            "full_name": "John Doe",
            "tag": "Bride",
            "num_attendees": 2,
        }
        payload.update(fields)
        return store.create_guest(payload)
    return _make

@pytest.fixture(autouse=True)
def clear_rate_limiter():
    rate_limiter.clear()
    yield
    rate_limiter.clear()


class FakeGuestStore:
    """In-memory store with the GuestStoreClient interface"""

    def __init__(self):
        self.records = {}
        self.writes = 0

    def add(self, **fields) -> GuestRecord:
        now = datetime.now(timezone.utc)
        data = {
            "id": str(uuid.uuid4()),
            "wedding_id": WEDDING_ID,
            "full_name": "John Doe",
            "num_attendees": 2,
            "attendance_confirmed": False,
            "created_at": now,
            "updated_at": now,
        }
        data.update(fields)
        record = GuestRecord.model_validate(data)
        self.records[record.id] = record
        return record

    def list_guests(self, wedding_id, limit=None, invited_by=None):
        return [
            r for r in self.records.values()
            if r.wedding_id == wedding_id and (not invited_by or r.invited_by == invited_by)
        ]

    def get_guest(self, guest_id):
        if guest_id not in self.records:
            raise NotFoundError(guest_id)
        return self.records[guest_id]

    def create_guest(self, fields):
        self.writes += 1
        return self.add(**fields)

    def update_guest(self, guest_id, changes, if_unanswered=False):
        current = self.get_guest(guest_id)
        if if_unanswered and current.has_responded:
            raise AlreadyRespondedError(guest_id)
        merged = current.model_copy(update=changes)
        if merged.num_attendees_confirmed is not None and merged.num_attendees_confirmed > merged.num_attendees:
            raise ConflictError(internal="capacity")
        self.writes += 1
        self.records[guest_id] = merged
        return merged

    def delete_guest(self, guest_id):
        self.get_guest(guest_id)
        self.writes += 1
        del self.records[guest_id]

    def list_wishes(self, guest_id):
        guest = self.get_guest(guest_id)
        wishes = [r for r in self.list_guests(guest.wedding_id) if r.wish]
        return sorted(wishes, key=lambda r: r.id != guest_id)

@pytest.fixture
def fake_store():
    return FakeGuestStore()
