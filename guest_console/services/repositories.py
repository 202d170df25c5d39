"""
Repository layer abstracting guest record storage (SQLAlchemy vs Firebase Firestore).
"""

from __future__ import annotations

import logging
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from guest_console.core.config import settings
from guest_console.models import Guest
from guest_console.schemas.guest import GuestRecord
from guest_console.services.firebase_client import get_firestore_client

logger = logging.getLogger(__name__)


def use_firestore() -> bool:
    return settings.USE_FIREBASE is True


class CapacityConflict(Exception):
    """A change would leave the confirmed party size above capacity."""

    def __init__(self, confirmed: int, capacity: int):
        super().__init__(f"confirmed party size {confirmed} exceeds capacity {capacity}")
        self.confirmed = confirmed
        self.capacity = capacity


class AlreadyAnswered(Exception):
    """A guarded RSVP write found the guest already answered."""


def check_capacity(current: Dict[str, Any], changes: Dict[str, Any]) -> None:
    """Raise CapacityConflict if applying changes breaks confirmed <= capacity"""
    capacity = changes.get("num_attendees", current.get("num_attendees"))
    confirmed = changes.get("num_attendees_confirmed", current.get("num_attendees_confirmed"))
    if confirmed is not None and capacity is not None and confirmed > capacity:
        raise CapacityConflict(confirmed, capacity)


def order_wishes(records: List[GuestRecord], first_id: str) -> List[GuestRecord]:
    """Keep records with a non-empty wish, the requesting guest first"""
    with_wish = [r for r in records if r.wish and r.wish.strip()]
    with_wish.sort(key=lambda r: (r.id != first_id, -(r.rsvp_at.timestamp() if r.rsvp_at else 0)))
    return with_wish


class GuestRepo(ABC):
    """Storage operations backing the /guests routes"""

    @abstractmethod
    def list(self, wedding_id: str, limit: int, invited_by: Optional[str] = None) -> List[GuestRecord]:
        ...

    @abstractmethod
    def get(self, guest_id: str) -> Optional[GuestRecord]:
        ...

    @abstractmethod
    def create(self, data: Dict[str, Any]) -> GuestRecord:
        ...

    @abstractmethod
    def update(self, guest_id: str, changes: Dict[str, Any], if_unanswered: bool = False) -> Optional[GuestRecord]:
        """Apply a partial update. Returns None when the guest does not exist.

        With if_unanswered the write only lands while is_attending is unset;
        otherwise AlreadyAnswered is raised and nothing changes.
        """
        ...

    @abstractmethod
    def delete(self, guest_id: str) -> bool:
        ...

    def list_wishes(self, guest_id: str) -> Optional[List[GuestRecord]]:
        guest = self.get(guest_id)
        if guest is None:
            return None
        records = self.list(guest.wedding_id, limit=settings.GUEST_LIST_LIMIT)
        return order_wishes(records, guest_id)


# -------- SQLAlchemy --------

class SqlGuestRepo(GuestRepo):
    def __init__(self, db: Session):
        self.db = db

    def list(self, wedding_id: str, limit: int, invited_by: Optional[str] = None) -> List[GuestRecord]:
        query = self.db.query(Guest).filter(Guest.wedding_id == wedding_id)
        if invited_by:
            query = query.filter(Guest.invited_by == invited_by)
        guests = query.order_by(Guest.created_at).limit(limit).all()
        return [GuestRecord.model_validate(g) for g in guests]

    def get(self, guest_id: str) -> Optional[GuestRecord]:
        guest = self.db.query(Guest).filter(Guest.id == guest_id).first()
        return GuestRecord.model_validate(guest) if guest else None

    def create(self, data: Dict[str, Any]) -> GuestRecord:
        guest = Guest(**data)
        guest.attendance_confirmed = False
        self.db.add(guest)
        self.db.commit()
        self.db.refresh(guest)
        return GuestRecord.model_validate(guest)

    def update(self, guest_id: str, changes: Dict[str, Any], if_unanswered: bool = False) -> Optional[GuestRecord]:
        guest = self.db.query(Guest).filter(Guest.id == guest_id).with_for_update().first()
        if not guest:
            return None

        current = {
            "num_attendees": guest.num_attendees,
            "num_attendees_confirmed": guest.num_attendees_confirmed,
        }
        try:
            check_capacity(current, changes)
        except CapacityConflict:
            self.db.rollback()
            raise

        # Conditional UPDATE so two racing RSVPs cannot both land
        query = self.db.query(Guest).filter(Guest.id == guest_id)
        if if_unanswered:
            query = query.filter(Guest.is_attending.is_(None))
        updated = query.update({**changes, "updated_at": datetime.now(timezone.utc)}, synchronize_session=False)
        if not updated:
            self.db.rollback()
            raise AlreadyAnswered(guest_id)

        self.db.commit()
        self.db.refresh(guest)
        return GuestRecord.model_validate(guest)

    def delete(self, guest_id: str) -> bool:
        guest = self.db.query(Guest).filter(Guest.id == guest_id).first()
        if not guest:
            return False
        self.db.delete(guest)
        self.db.commit()
        return True


# -------- Firestore --------
# Guest docs live in a top-level collection keyed by guest id

class FirestoreGuestRepo(GuestRepo):
    def __init__(self, client=None):
        self.client = client or get_firestore_client()

    @property
    def collection(self):
        return self.client.collection(settings.FIRESTORE_COLLECTION)

    @staticmethod
    def _to_record(doc) -> GuestRecord:
        data = doc.to_dict()
        data["id"] = doc.id
        return GuestRecord.model_validate(data)

    def list(self, wedding_id: str, limit: int, invited_by: Optional[str] = None) -> List[GuestRecord]:
        query = self.collection.where("wedding_id", "==", wedding_id)
        if invited_by:
            query = query.where("invited_by", "==", invited_by)
        docs = query.order_by("created_at").limit(limit).get()
        return [self._to_record(d) for d in docs]

    def get(self, guest_id: str) -> Optional[GuestRecord]:
        doc = self.collection.document(guest_id).get()
        return self._to_record(doc) if doc.exists else None

    def create(self, data: Dict[str, Any]) -> GuestRecord:
        now = datetime.now(timezone.utc)
        guest_id = str(uuid.uuid4())
        payload = {
            **data,
            "is_attending": None,
            "num_attendees_confirmed": None,
            "wish": None,
            "rsvp_name": None,
            "rsvp_at": None,
            "attendance_confirmed": False,
            "created_at": now,
            "updated_at": now,
        }
        self.collection.document(guest_id).set(payload)
        return GuestRecord.model_validate({**payload, "id": guest_id})

    def update(self, guest_id: str, changes: Dict[str, Any], if_unanswered: bool = False) -> Optional[GuestRecord]:
        from google.cloud import firestore as gcf

        ref = self.collection.document(guest_id)

        @gcf.transactional
        def apply(transaction):
            snapshot = ref.get(transaction=transaction)
            if not snapshot.exists:
                return None
            current = snapshot.to_dict()
            if if_unanswered and current.get("is_attending") is not None:
                raise AlreadyAnswered(guest_id)
            check_capacity(current, changes)
            transaction.update(ref, {**changes, "updated_at": datetime.now(timezone.utc)})
            return True

        if apply(self.client.transaction()) is None:
            return None
        return self.get(guest_id)

    def delete(self, guest_id: str) -> bool:
        ref = self.collection.document(guest_id)
        if not ref.get().exists:
            return False
        ref.delete()
        return True


def get_guest_repo(db: Session) -> GuestRepo:
    if use_firestore():
        return FirestoreGuestRepo()
    return SqlGuestRepo(db)
