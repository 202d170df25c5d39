"""
Public API routes - no authentication required
"""

from pathlib import Path
from typing import Optional
from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, Response
from fastapi.templating import Jinja2Templates
from starlette.concurrency import run_in_threadpool

from guest_console.api.deps import get_invitation_service
from guest_console.core.config import settings
from guest_console.services.invitation_service import InvitationService
from guest_console.services.qr_service import QRService
from guest_console.utils.security import guest_rate_limit

router = APIRouter()

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))

@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok"}

@router.get("/", response_class=HTMLResponse)
async def invitation_page(
    request: Request,
    to: Optional[str] = None,
    invitations: InvitationService = Depends(get_invitation_service)
):
    """Invitation page greeting the guest named by ?to="""
    recipient = await run_in_threadpool(invitations.resolve_recipient, to)
    return templates.TemplateResponse(request, "invitation.html", {
        "recipient": recipient,
        "qr_url": QRService.get_qr_url(recipient.id) if recipient.can_show_qr else None,
        "rsvp_enabled": settings.RSVP_ENABLED,
        "party_sizes": list(range(1, recipient.max_guests + 1)),
    })

@router.get("/invitations/{guest_id}/qr.png", dependencies=[Depends(guest_rate_limit)])
async def get_qr_code(
    guest_id: str,
    invitations: InvitationService = Depends(get_invitation_service)
):
    """QR image of the guest's attendance token"""
    # Unknown ids raise NotFoundError -> 404
    await run_in_threadpool(invitations.store.get_guest, guest_id)

    qr_bytes = QRService.generate_token_qr(guest_id)
    return Response(
        content=qr_bytes,
        media_type="image/png",
        headers={"Content-Disposition": "inline; filename=attendance_qr.png"}
    )
