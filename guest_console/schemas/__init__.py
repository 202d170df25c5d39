"""
Pydantic schemas package
"""

from .common import *
from .guest import *

__all__ = [
    "StandardResponse",
    "ErrorResponse",
    "GuestFields",
    "GuestCreate",
    "AdminGuestCreate",
    "GuestUpdate",
    "GuestRecord",
    "RsvpRequest",
    "CheckInRequest",
    "WishEntry",
]
