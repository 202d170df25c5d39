"""
Guest record store routes.

Implements the /guests contract consumed by GuestStoreClient. Mount it in the
same app (SERVE_GUEST_STORE=true) or run it as its own service.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from guest_console.core.db import get_db
from guest_console.schemas.guest import GuestCreate, GuestUpdate
from guest_console.services.repositories import AlreadyAnswered, CapacityConflict, GuestRepo, get_guest_repo
from guest_console.utils.responses import success_response, error_response

logger = logging.getLogger(__name__)

router = APIRouter()

def guest_repo(db: Session = Depends(get_db)) -> GuestRepo:
    return get_guest_repo(db)

def guest_not_found():
    return error_response(message="Guest not found", error_code="NOT_FOUND", status_code=404)

@router.get("/guests")
def list_guests(
    wedding_id: str = Query(..., min_length=1),
    limit: int = Query(1000, ge=1, le=5000),
    invited_by: Optional[str] = Query(None),
    repo: GuestRepo = Depends(guest_repo)
):
    """Snapshot of guest records for a wedding"""
    guests = repo.list(wedding_id, limit=limit, invited_by=invited_by)
    return success_response(
        message="Guests retrieved successfully",
        data=guests
    )

@router.get("/guests/{guest_id}")
def get_guest(guest_id: str, repo: GuestRepo = Depends(guest_repo)):
    """Single guest record"""
    guest = repo.get(guest_id)
    if not guest:
        return guest_not_found()
    return success_response(message="Guest retrieved", data=guest)

@router.get("/guests/{guest_id}/wishes")
def list_wishes(guest_id: str, repo: GuestRepo = Depends(guest_repo)):
    """Wishes left by guests of the same wedding, this guest first"""
    wishes = repo.list_wishes(guest_id)
    if wishes is None:
        return guest_not_found()
    return success_response(message="Wishes retrieved", data=wishes)

@router.post("/guests", status_code=201)
def create_guest(guest_data: GuestCreate, repo: GuestRepo = Depends(guest_repo)):
    """Create a guest record with RSVP unknown and check-in false"""
    guest = repo.create(guest_data.model_dump())
    logger.info(f"Guest {guest.id} created for wedding {guest.wedding_id}")
    return success_response(
        message="Guest created successfully",
        data=guest,
        status_code=201
    )

@router.patch("/guests/{guest_id}")
def update_guest(
    guest_id: str,
    guest_update: GuestUpdate,
    if_unanswered: bool = Query(False),
    repo: GuestRepo = Depends(guest_repo)
):
    """Partial update; rejects changes that push the confirmed party size over capacity.

    if_unanswered=true makes the write conditional on the guest having no RSVP yet.
    """
    changes = guest_update.model_dump(exclude_unset=True)
    try:
        guest = repo.update(guest_id, changes, if_unanswered=if_unanswered)
    except AlreadyAnswered:
        logger.info(f"Guest {guest_id} RSVP write rejected: already answered")
        return error_response(
            message="Guest has already responded",
            error_code="ALREADY_RESPONDED",
            status_code=409
        )
    except CapacityConflict as exc:
        logger.info(f"Guest {guest_id} update rejected: {exc}")
        return error_response(
            message="Confirmed party size exceeds capacity",
            error_code="CONFLICT",
            details={"confirmed": exc.confirmed, "capacity": exc.capacity},
            status_code=409
        )
    if not guest:
        return guest_not_found()
    return success_response(message="Guest updated successfully", data=guest)

@router.delete("/guests/{guest_id}")
def delete_guest(guest_id: str, repo: GuestRepo = Depends(guest_repo)):
    """Remove a guest record permanently"""
    if not repo.delete(guest_id):
        return guest_not_found()
    logger.info(f"Guest {guest_id} deleted")
    return success_response(
        message="Guest deleted successfully",
        data={"deleted_guest_id": guest_id}
    )
