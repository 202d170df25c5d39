"""
Organizer console operations on the guest list
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from guest_console.core.config import settings
from guest_console.core.errors import ValidationError
from guest_console.schemas.guest import AdminGuestCreate, GuestRecord, GuestUpdate
from guest_console.services.store_client import GuestStoreClient
from guest_console.services.summary_service import SummaryReport, summarize

logger = logging.getLogger(__name__)

TITLE_CASE_FIELDS = ("full_name", "nickname", "address", "wish")


def to_title_case(value: str) -> str:
    return " ".join(word[:1].upper() + word[1:] for word in value.lower().split(" "))


def normalize_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Title-case organizer-entered text, drop blank additional names"""
    normalized = dict(fields)
    for key in TITLE_CASE_FIELDS:
        if normalized.get(key):
            normalized[key] = to_title_case(normalized[key].strip())
    if normalized.get("additional_names") is not None:
        normalized["additional_names"] = [
            to_title_case(name.strip()) for name in normalized["additional_names"] if name and name.strip()
        ]
    return normalized


def match_tag(tag: Optional[str], tags: Sequence[str]) -> Optional[str]:
    """Spell tag the way the configured inviting party is spelled; unknown tags are kept as typed"""
    if tag is None:
        return None
    tag = tag.strip()
    for configured in tags:
        if configured.lower() == tag.lower():
            return configured
    return tag or None


def check_party_names(additional_names: List[str], capacity: int) -> None:
    """The primary name plus additional names must fit the invitation's capacity"""
    if len(additional_names) + 1 > capacity:
        message = f"{len(additional_names) + 1} names listed but the invitation allows {capacity}."
        raise ValidationError(message, [message])


def search_guests(guests: Sequence[GuestRecord], term: Optional[str]) -> List[GuestRecord]:
    """Case-insensitive match on full name, nickname or any additional name"""
    term = (term or "").strip().lower()
    if not term:
        return list(guests)
    return [
        g for g in guests
        if term in (g.full_name or "").lower()
        or term in (g.nickname or "").lower()
        or term in " ".join(g.additional_names).lower()
    ]


def invitation_link(guest_id: str) -> str:
    return f"{settings.BASE_URL.rstrip('/')}/?to={guest_id}"


class GuestAdminService:
    """Guest list management for one wedding"""

    def __init__(self, store: GuestStoreClient, wedding_id: str = None, tags: Sequence[str] = None):
        self.store = store
        self.wedding_id = wedding_id or settings.WEDDING_ID
        self.tags = list(tags or settings.INVITING_PARTY_TAGS)

    def list_guests(self, search: Optional[str] = None, invited_by: Optional[str] = None) -> List[GuestRecord]:
        guests = self.store.list_guests(self.wedding_id, invited_by=invited_by)
        return search_guests(guests, search)

    def add_guest(self, guest_data: AdminGuestCreate) -> GuestRecord:
        fields = normalize_fields(guest_data.model_dump())
        fields["tag"] = match_tag(fields.get("tag"), self.tags)
        check_party_names(fields["additional_names"], fields["num_attendees"])
        fields["wedding_id"] = self.wedding_id
        guest = self.store.create_guest(fields)
        logger.info(f"Organizer added guest {guest.id}")
        return guest

    def edit_guest(self, guest_id: str, guest_update: GuestUpdate) -> GuestRecord:
        """Organizer override: any field, including RSVP and check-in, last write wins"""
        changes = normalize_fields(guest_update.model_dump(exclude_unset=True))
        if "tag" in changes:
            changes["tag"] = match_tag(changes["tag"], self.tags)
        if "additional_names" in changes or "num_attendees" in changes:
            current = self.store.get_guest(guest_id)
            check_party_names(
                changes.get("additional_names", current.additional_names),
                changes.get("num_attendees", current.num_attendees),
            )
        guest = self.store.update_guest(guest_id, changes)
        logger.info(f"Organizer edited guest {guest_id}: {sorted(changes)}")
        return guest

    def delete_guest(self, guest_id: str) -> None:
        self.store.delete_guest(guest_id)
        logger.info(f"Organizer deleted guest {guest_id}")

    def summarize(self, guests: Sequence[GuestRecord]) -> SummaryReport:
        return summarize(guests, self.tags)

    def summary(self) -> SummaryReport:
        return self.summarize(self.store.list_guests(self.wedding_id))

    def guest_row(self, guest: GuestRecord) -> Dict[str, Any]:
        row = guest.model_dump(mode="json")
        row["invitation_link"] = invitation_link(guest.id)
        return row
