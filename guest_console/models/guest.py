"""
Guest record model
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text, JSON

from guest_console.core.db import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_guest_id() -> str:
    return str(uuid.uuid4())


class Guest(Base):
    __tablename__ = "guests"

    id = Column(String(36), primary_key=True, default=new_guest_id)
    wedding_id = Column(String(64), nullable=False, index=True)

    # Naming
    full_name = Column(String(255), nullable=False)
    nickname = Column(String(255), nullable=True)
    additional_names = Column(JSON, nullable=False, default=list)

    # Contact
    address = Column(String(500), nullable=True)
    phone_number = Column(String(50), nullable=True)

    # Classification
    tag = Column(String(50), nullable=True, index=True)
    invited_by = Column(String(100), nullable=True, index=True)

    # Capacity and RSVP
    num_attendees = Column(Integer, nullable=False, default=2)
    is_attending = Column(Boolean, nullable=True)  # None = no RSVP yet
    num_attendees_confirmed = Column(Integer, nullable=True)
    wish = Column(Text, nullable=True)
    rsvp_name = Column(String(255), nullable=True)
    rsvp_at = Column(DateTime, nullable=True)

    # Check-in
    attendance_confirmed = Column(Boolean, nullable=True, default=False)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
