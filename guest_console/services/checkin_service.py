"""
Guest check-in service
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from guest_console.core.errors import NotFoundError, UnknownTokenError
from guest_console.schemas.guest import GuestRecord
from guest_console.services.invitation_service import build_display_name
from guest_console.services.store_client import GuestStoreClient, is_guest_id

logger = logging.getLogger(__name__)


@dataclass
class CheckInResult:
    """What the scanner screen shows after a successful check-in"""
    guest_id: str
    display_name: str
    additional_names: List[str] = field(default_factory=list)
    tag: Optional[str] = None
    party_size: Optional[int] = None
    was_already_checked_in: bool = False

    @classmethod
    def from_record(cls, guest: GuestRecord, was_already_checked_in: bool) -> "CheckInResult":
        return cls(
            guest_id=guest.id,
            display_name=build_display_name(guest),
            additional_names=list(guest.additional_names),
            tag=guest.tag,
            party_size=guest.num_attendees_confirmed if guest.is_attending else guest.num_attendees,
            was_already_checked_in=was_already_checked_in,
        )


class CheckInService:
    """Marks guests present by token. Confirming twice is a success both times."""

    def __init__(self, store: GuestStoreClient):
        self.store = store

    def confirm_attendance(self, token: str) -> CheckInResult:
        """Confirm the guest whose id equals token.

        Raises:
            UnknownTokenError: no guest has this id; nothing is written.
            TransientError: the store could not be reached.
        """
        if not is_guest_id(token):
            raise UnknownTokenError(token)

        try:
            guest = self.store.get_guest(token)
            was_checked_in = guest.is_checked_in
            if not was_checked_in:
                guest = self.store.update_guest(token, {"attendance_confirmed": True})
        except NotFoundError as exc:
            raise UnknownTokenError(token) from exc

        if was_checked_in:
            logger.info(f"Guest {guest.id} was already checked in")
        else:
            logger.info(f"Guest {guest.id} checked in")

        return CheckInResult.from_record(guest, was_already_checked_in=was_checked_in)
