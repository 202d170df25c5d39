"""
FastAPI dependencies wiring services to the shared guest store client
"""

from functools import lru_cache

from fastapi import Depends

from guest_console.core.config import settings
from guest_console.services.checkin_service import CheckInService
from guest_console.services.guest_admin_service import GuestAdminService
from guest_console.services.invitation_service import InvitationService
from guest_console.services.rsvp_service import RsvpService
from guest_console.services.store_client import GuestStoreClient


@lru_cache(maxsize=1)
def get_store_client() -> GuestStoreClient:
    """One client per process, pointed at GUEST_STORE_URL"""
    return GuestStoreClient.from_settings()


def get_rsvp_service(store: GuestStoreClient = Depends(get_store_client)) -> RsvpService:
    return RsvpService(store, rsvp_enabled=settings.RSVP_ENABLED)


def get_checkin_service(store: GuestStoreClient = Depends(get_store_client)) -> CheckInService:
    return CheckInService(store)


def get_invitation_service(store: GuestStoreClient = Depends(get_store_client)) -> InvitationService:
    return InvitationService(store)


def get_admin_service(store: GuestStoreClient = Depends(get_store_client)) -> GuestAdminService:
    return GuestAdminService(store)
