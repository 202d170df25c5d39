"""
Excel export of the guest list for organizers
"""

import io
from datetime import datetime
from typing import List, Optional
import pandas as pd

from guest_console.schemas.guest import GuestRecord
from guest_console.services.guest_admin_service import invitation_link
from guest_console.services.summary_service import SummaryReport

def format_date(value: Optional[datetime]) -> str:
    return value.strftime("%Y-%m-%d %H:%M") if value else ""

def rsvp_status(guest: GuestRecord) -> str:
    if guest.is_attending is True:
        return "Yes"
    if guest.is_attending is False:
        return "No"
    return ""

class ExcelService:
    """Service for exporting guest data"""

    GUEST_COLUMNS = [
        'Full Name', 'Nickname', 'Additional Names', 'Tag', 'Invited By',
        'RSVP Status', '#', '# Confirmed', 'Checked In', 'Address', 'Phone',
        'Wish', 'Invitation Link', 'RSVP Date', 'Created', 'Updated',
    ]

    @staticmethod
    def guest_rows(guests: List[GuestRecord]) -> List[dict]:
        return [
            {
                'Full Name': guest.full_name,
                'Nickname': guest.nickname or '',
                'Additional Names': ', '.join(guest.additional_names),
                'Tag': guest.tag or '',
                'Invited By': guest.invited_by or '',
                'RSVP Status': rsvp_status(guest),
                '#': guest.num_attendees,
                '# Confirmed': guest.num_attendees_confirmed if guest.num_attendees_confirmed is not None else '',
                'Checked In': 'Yes' if guest.attendance_confirmed else 'No',
                'Address': guest.address or '',
                'Phone': guest.phone_number or '',
                'Wish': guest.wish or '',
                'Invitation Link': invitation_link(guest.id),
                'RSVP Date': format_date(guest.rsvp_at),
                'Created': format_date(guest.created_at),
                'Updated': format_date(guest.updated_at),
            }
            for guest in guests
        ]

    @staticmethod
    def export_guests(guests: List[GuestRecord], summary: Optional[SummaryReport] = None) -> bytes:
        """Guest list sheet, plus a summary sheet when a report is given"""
        df = pd.DataFrame(ExcelService.guest_rows(guests), columns=ExcelService.GUEST_COLUMNS)

        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
            df.to_excel(writer, index=False, sheet_name='Guest List')
            if summary is not None:
                rows = list(summary.by_tag.values()) + [summary.totals]
                summary_df = pd.DataFrame([
                    {
                        'Tag': s.tag,
                        'Invited Parties': s.invited_parties,
                        'Capacity': s.capacity_total,
                        'Attending Parties': s.attending_parties,
                        'Declined Parties': s.declined_parties,
                        'Confirmed Attendees': s.invited_attendees,
                        'Checked In': s.checked_in,
                    }
                    for s in rows
                ])
                summary_df.to_excel(writer, index=False, sheet_name='Summary')

        return buffer.getvalue()
