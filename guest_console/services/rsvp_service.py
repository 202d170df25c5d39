"""
Guest-facing RSVP service.

A guest moves from unresponded to responded exactly once through this path.
Organizer edits in the console can still change RSVP fields afterwards; they
go straight to the store and do not pass through here.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from guest_console.core.errors import AlreadyRespondedError, RsvpClosedError, ValidationError
from guest_console.schemas.guest import GuestRecord
from guest_console.services.store_client import GuestStoreClient

logger = logging.getLogger(__name__)


class RsvpService:
    """Validates and records a guest's attendance response"""

    def __init__(self, store: GuestStoreClient, rsvp_enabled: bool = True):
        self.store = store
        self.rsvp_enabled = rsvp_enabled

    @staticmethod
    def validate_form(name: str, wish: str, attending: Optional[bool]) -> None:
        errors = []
        if not (name or "").strip():
            errors.append("Please enter your name.")
        if not (wish or "").strip():
            errors.append("Please write your wishes.")
        if attending is None:
            errors.append("Please let us know if you will attend.")
        if errors:
            raise ValidationError(errors[0], errors)

    @staticmethod
    def validate_party_size(party_size: Optional[int], capacity: int) -> int:
        if isinstance(party_size, bool) or not isinstance(party_size, int) or not 1 <= party_size <= capacity:
            message = f"Number of guests must be between 1 and {capacity}."
            raise ValidationError(message, [message])
        return party_size

    def submit_rsvp(
        self,
        guest_id: str,
        name: str,
        wish: str,
        attending: Optional[bool],
        party_size: Optional[int] = None,
    ) -> GuestRecord:
        """Record the response and return the updated guest.

        Raises:
            RsvpClosedError: RSVP is switched off.
            ValidationError: empty name or wish, no attendance choice, or a
                party size outside 1..capacity while attending.
            NotFoundError: the guest id does not resolve.
            AlreadyRespondedError: the guest already responded, including a
                response that landed between our read and write.
            ConflictError: the store rejected the write as incompatible
                with a concurrent change (e.g. capacity lowered).
            TransientError: the store could not be reached.
        """
        if not self.rsvp_enabled:
            raise RsvpClosedError()

        self.validate_form(name, wish, attending)

        guest = self.store.get_guest(guest_id)
        if guest.has_responded:
            raise AlreadyRespondedError(guest_id)

        confirmed = self.validate_party_size(party_size, guest.num_attendees) if attending else 0

        changes = {
            "is_attending": attending,
            "num_attendees_confirmed": confirmed,
            "wish": wish.strip(),
            "rsvp_name": name.strip(),
            "rsvp_at": datetime.now(timezone.utc),
        }
        # Store refuses the write if another answer landed first
        updated = self.store.update_guest(guest_id, changes, if_unanswered=True)
        logger.info(f"RSVP recorded for guest {guest_id}: attending={attending} party_size={confirmed}")
        return updated
