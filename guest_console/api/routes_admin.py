"""
Organizer console API routes - requires authentication
"""

from dataclasses import asdict
from datetime import datetime, timezone
from typing import Optional
from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from starlette.concurrency import run_in_threadpool

from guest_console.api.deps import get_admin_service, get_checkin_service
from guest_console.api.ws import websocket_manager
from guest_console.core.config import settings
from guest_console.schemas.guest import AdminGuestCreate, CheckInRequest, GuestUpdate
from guest_console.services.checkin_service import CheckInService
from guest_console.services.excel_service import ExcelService
from guest_console.services.guest_admin_service import GuestAdminService
from guest_console.utils.responses import success_response
from guest_console.utils.security import verify_admin_token

router = APIRouter(dependencies=[Depends(verify_admin_token)])

@router.get("/guests")
async def list_guests(
    search: Optional[str] = Query(None),
    invited_by: Optional[str] = Query(None),
    admin: GuestAdminService = Depends(get_admin_service)
):
    """Guest grid, optionally filtered by name"""
    guests = await run_in_threadpool(admin.list_guests, search, invited_by)
    return success_response(
        message="Guests retrieved successfully",
        data={
            "guests": [admin.guest_row(g) for g in guests],
            "total": len(guests)
        }
    )

@router.post("/guests")
async def add_guest(
    guest_data: AdminGuestCreate,
    admin: GuestAdminService = Depends(get_admin_service)
):
    """Add a guest to the list"""
    guest = await run_in_threadpool(admin.add_guest, guest_data)
    return success_response(
        message="Guest added successfully",
        data=admin.guest_row(guest),
        status_code=201
    )

@router.patch("/guests/{guest_id}")
async def edit_guest(
    guest_id: str,
    guest_update: GuestUpdate,
    admin: GuestAdminService = Depends(get_admin_service)
):
    """Edit a guest; overrides RSVP fields when given"""
    guest = await run_in_threadpool(admin.edit_guest, guest_id, guest_update)

    await websocket_manager.broadcast_to_wedding(admin.wedding_id, {
        "type": "guest_updated",
        "guest_id": guest.id,
        "timestamp": datetime.now(timezone.utc).isoformat()
    })

    return success_response(message="Guest updated successfully", data=admin.guest_row(guest))

@router.delete("/guests/{guest_id}")
async def delete_guest(
    guest_id: str,
    admin: GuestAdminService = Depends(get_admin_service)
):
    """Remove a guest permanently"""
    await run_in_threadpool(admin.delete_guest, guest_id)
    return success_response(
        message="Guest deleted successfully",
        data={"deleted_guest_id": guest_id}
    )

@router.post("/checkin")
async def check_in_guest(
    checkin_data: CheckInRequest,
    checkin_service: CheckInService = Depends(get_checkin_service)
):
    """Confirm attendance from a scanned or typed token and notify other consoles"""
    result = await run_in_threadpool(checkin_service.confirm_attendance, checkin_data.token)

    await websocket_manager.broadcast_to_wedding(settings.WEDDING_ID, {
        "type": "checkin",
        "guest": asdict(result),
        "timestamp": datetime.now(timezone.utc).isoformat()
    })

    message = "You were already checked in!" if result.was_already_checked_in else "Successfully checked in!"
    return success_response(message=message, data=asdict(result))

@router.get("/summary")
async def get_summary(admin: GuestAdminService = Depends(get_admin_service)):
    """Counts per inviting party"""
    report = await run_in_threadpool(admin.summary)
    return success_response(message="Summary retrieved successfully", data=report.to_dict())

@router.get("/guests/export.xlsx")
async def export_guests(admin: GuestAdminService = Depends(get_admin_service)):
    """Download the guest list and summary as an Excel workbook"""
    guests = await run_in_threadpool(admin.list_guests)
    content = ExcelService.export_guests(guests, summary=admin.summarize(guests))

    return Response(
        content=content,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": "attachment; filename=guest_list.xlsx"}
    )
