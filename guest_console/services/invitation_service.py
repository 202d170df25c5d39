"""
Invitation page service: who is being greeted, and the wishes wall
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional

from guest_console.core.config import settings
from guest_console.core.errors import NotFoundError
from guest_console.schemas.guest import GuestRecord, WishEntry

logger = logging.getLogger(__name__)

UUID_RE = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE)

MODE_DEFAULT = "default"
MODE_BACKEND = "backend"
MODE_CUSTOM = "custom"


def is_uuid(value: Optional[str]) -> bool:
    return bool(value) and UUID_RE.match(value) is not None


def build_display_name(guest: GuestRecord, default: Optional[str] = None) -> str:
    """Full name (or nickname) followed by additional names, joined with ' & '"""
    base = guest.full_name or guest.nickname or default or settings.DEFAULT_INVITEE_NAME
    names = [base] + [n for n in guest.additional_names if n]
    return " & ".join(names)


def format_custom_invitee(raw: str) -> str:
    """'hendry-widyanto-and-finna' -> 'Hendry Widyanto & Finna'"""
    value = raw.strip().lower().replace("-", " ")
    value = re.sub(r"\sand\s", " & ", value)
    value = re.sub(r"\s+", " ", value)
    return " ".join(word[:1].upper() + word[1:] for word in value.split(" ")).strip()


@dataclass
class Recipient:
    """The person the invitation page addresses"""
    mode: str
    display_name: str
    max_guests: int
    id: Optional[str] = None
    is_attending: Optional[bool] = None
    num_attendees_confirmed: Optional[int] = None
    wish: str = ""
    notice: Optional[str] = None

    @property
    def can_show_qr(self) -> bool:
        return self.mode == MODE_BACKEND and bool(self.id)


def default_recipient(notice: Optional[str] = None) -> Recipient:
    return Recipient(
        mode=MODE_DEFAULT,
        display_name=settings.DEFAULT_INVITEE_NAME,
        max_guests=settings.DEFAULT_MAX_GUESTS,
        notice=notice,
    )


class InvitationService:
    """Resolves the ?to= parameter of an invitation link"""

    def __init__(self, store):
        self.store = store

    def resolve_recipient(self, to: Optional[str]) -> Recipient:
        to = (to or "").strip()
        if not to:
            return default_recipient()

        if is_uuid(to):
            try:
                guest = self.store.get_guest(to)
            except NotFoundError:
                logger.info(f"Invitation opened for unknown guest {to}")
                return default_recipient(notice="Guest not found. Using default invitee.")
            return Recipient(
                mode=MODE_BACKEND,
                id=guest.id,
                display_name=build_display_name(guest),
                max_guests=guest.num_attendees or settings.DEFAULT_MAX_GUESTS,
                is_attending=guest.is_attending,
                num_attendees_confirmed=guest.num_attendees_confirmed,
                wish=guest.wish or "",
            )

        return Recipient(
            mode=MODE_CUSTOM,
            display_name=format_custom_invitee(to),
            max_guests=settings.DEFAULT_MAX_GUESTS,
        )

    def list_wishes(self, guest_id: str) -> List[WishEntry]:
        records = self.store.list_wishes(guest_id)
        return [
            WishEntry(id=g.id, name=build_display_name(g), wish=g.wish.strip())
            for g in records
            if g.wish and g.wish.strip()
        ]
