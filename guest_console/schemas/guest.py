"""
Guest-related Pydantic schemas
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

class GuestFields(BaseModel):
    """Organizer-managed fields shared by create payloads"""
    full_name: str = Field(..., min_length=1)
    nickname: Optional[str] = None
    additional_names: List[str] = Field(default_factory=list)
    address: Optional[str] = None
    phone_number: Optional[str] = None
    tag: Optional[str] = None
    invited_by: Optional[str] = None
    num_attendees: int = Field(2, ge=1)

class GuestCreate(GuestFields):
    """Schema for creating a guest record in the store"""
    wedding_id: str = Field(..., min_length=1)

class AdminGuestCreate(GuestFields):
    """Schema for adding a guest from the organizer console"""
    pass

class GuestUpdate(BaseModel):
    """Partial update of a guest record; only set fields are applied"""
    full_name: Optional[str] = Field(None, min_length=1)
    nickname: Optional[str] = None
    additional_names: Optional[List[str]] = None
    address: Optional[str] = None
    phone_number: Optional[str] = None
    tag: Optional[str] = None
    invited_by: Optional[str] = None
    num_attendees: Optional[int] = Field(None, ge=1)
    is_attending: Optional[bool] = None
    num_attendees_confirmed: Optional[int] = Field(None, ge=0)
    wish: Optional[str] = None
    rsvp_name: Optional[str] = None
    rsvp_at: Optional[datetime] = None
    attendance_confirmed: Optional[bool] = None

    @field_validator("full_name", "additional_names", "num_attendees")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value

class GuestRecord(BaseModel):
    """Full guest record as returned by the store"""
    id: str
    wedding_id: str
    full_name: str
    nickname: Optional[str] = None
    additional_names: List[str] = Field(default_factory=list)
    address: Optional[str] = None
    phone_number: Optional[str] = None
    tag: Optional[str] = None
    invited_by: Optional[str] = None
    num_attendees: int = 2
    is_attending: Optional[bool] = None
    num_attendees_confirmed: Optional[int] = None
    wish: Optional[str] = None
    rsvp_name: Optional[str] = None
    rsvp_at: Optional[datetime] = None
    attendance_confirmed: Optional[bool] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @property
    def has_responded(self) -> bool:
        return self.is_attending is not None

    @property
    def is_checked_in(self) -> bool:
        return self.attendance_confirmed is True

class RsvpRequest(BaseModel):
    """Guest RSVP submission"""
    guest_id: str
    name: str = ""
    wish: str = ""
    is_attending: Optional[bool] = None
    num_attendees_confirmed: Optional[int] = None

class CheckInRequest(BaseModel):
    """Organizer check-in by scanned or typed token"""
    token: str

class WishEntry(BaseModel):
    """One wish shown on the invitation page"""
    id: str
    name: str
    wish: str
