"""
Guest-facing API routes
"""

from dataclasses import asdict
from typing import Optional
from fastapi import APIRouter, Depends
from starlette.concurrency import run_in_threadpool

from guest_console.api.deps import get_invitation_service, get_rsvp_service
from guest_console.schemas.guest import RsvpRequest
from guest_console.services.invitation_service import InvitationService, is_uuid
from guest_console.services.qr_service import QRService
from guest_console.services.rsvp_service import RsvpService
from guest_console.utils.responses import success_response
from guest_console.utils.security import guest_rate_limit

router = APIRouter()

@router.get("/invitation")
async def get_invitation(
    to: Optional[str] = None,
    invitations: InvitationService = Depends(get_invitation_service)
):
    """Recipient shown on the invitation page"""
    recipient = await run_in_threadpool(invitations.resolve_recipient, to)

    data = asdict(recipient)
    data["qr_url"] = QRService.get_qr_url(recipient.id) if recipient.can_show_qr else None
    return success_response(message="Invitation retrieved", data=data)

@router.post("/rsvp", dependencies=[Depends(guest_rate_limit)])
async def submit_rsvp(
    rsvp: RsvpRequest,
    rsvp_service: RsvpService = Depends(get_rsvp_service)
):
    """Record a guest's attendance response"""
    guest = await run_in_threadpool(
        rsvp_service.submit_rsvp,
        rsvp.guest_id,
        rsvp.name,
        rsvp.wish,
        rsvp.is_attending,
        rsvp.num_attendees_confirmed,
    )

    if guest.is_attending:
        message = "Thank you! Your RSVP has been recorded. We look forward to celebrating with you."
    else:
        message = "Thank you for your response. We truly appreciate your wishes and prayers."

    return success_response(
        message=message,
        data={
            "is_attending": guest.is_attending,
            "num_attendees_confirmed": guest.num_attendees_confirmed,
            "wish": guest.wish,
            "qr_url": QRService.get_qr_url(guest.id) if guest.is_attending else None,
        }
    )

@router.get("/wishes")
async def list_wishes(
    to: Optional[str] = None,
    invitations: InvitationService = Depends(get_invitation_service)
):
    """Wishes wall for an invited guest"""
    if not is_uuid(to):
        return success_response(message="Wishes retrieved", data=[])

    wishes = await run_in_threadpool(invitations.list_wishes, to)
    return success_response(message="Wishes retrieved", data=wishes)
