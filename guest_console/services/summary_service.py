"""
Guest summary per inviting party.

Pure functions over a snapshot of guest records: no I/O, safe to recompute
on every refresh.
"""

from dataclasses import asdict, dataclass, field
from typing import Dict, Iterable, Sequence

from guest_console.schemas.guest import GuestRecord


@dataclass
class TagSummary:
    tag: str
    invited_parties: int = 0
    invited_attendees: int = 0
    attending_parties: int = 0
    declined_parties: int = 0
    checked_in: int = 0
    capacity_total: int = 0


@dataclass
class SummaryReport:
    by_tag: Dict[str, TagSummary]
    excluded: int = 0
    totals: TagSummary = field(default_factory=lambda: TagSummary(tag="total"))

    def to_dict(self) -> dict:
        return {
            "tags": [asdict(s) for s in self.by_tag.values()],
            "totals": asdict(self.totals),
            "excluded": self.excluded,
        }


def confirmed_attendees(guest: GuestRecord) -> int:
    """Confirmed party size of an attending guest, never above capacity"""
    if guest.is_attending is not True:
        return 0
    confirmed = guest.num_attendees_confirmed or 0
    return max(0, min(confirmed, guest.num_attendees))


def add_guest(bucket: TagSummary, guest: GuestRecord) -> None:
    bucket.invited_parties += 1
    bucket.invited_attendees += confirmed_attendees(guest)
    bucket.capacity_total += guest.num_attendees
    if guest.is_attending is True:
        bucket.attending_parties += 1
    elif guest.is_attending is False:
        bucket.declined_parties += 1
    if guest.attendance_confirmed is True:
        bucket.checked_in += 1


def summarize(guests: Iterable[GuestRecord], tags: Sequence[str]) -> SummaryReport:
    """Count guests per tag; guests with a missing or unknown tag are only counted as excluded"""
    report = SummaryReport(by_tag={tag: TagSummary(tag=tag) for tag in tags})
    for guest in guests:
        bucket = report.by_tag.get(guest.tag) if guest.tag else None
        if bucket is None:
            report.excluded += 1
            continue
        add_guest(bucket, guest)
        add_guest(report.totals, guest)
    return report

