"""
Aggregation Reporter

Counts applications by status for the admin dashboard, per-listing cards,
the student dashboard and applicant exports.

Everything here is a pure function over lists the caller already loaded.
Reports are recomputed on every request; nothing is stored or updated
incrementally.
"""

from collections import Counter
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple

from pydantic import BaseModel

from portal.models import ApplicationRecord, ApplicationStatus, CompanyListing, StudentProfile

EXPORT_TIME_FORMAT = "%Y-%m-%d %H:%M"


class StatusReport(BaseModel):
    total: int = 0
    applied: int = 0
    shortlisted: int = 0
    rejected: int = 0
    selected: int = 0
    conversion_rate: float = 0.0


class PortalOverview(BaseModel):
    total_listings: int
    active_listings: int
    applications: StatusReport


def conversion_rate(selected: int, total: int) -> float:
    """selected / total, and exactly 0.0 when there is nothing to divide."""
    if total == 0:
        return 0.0
    return selected / total


def summarize(
    applications: Iterable[ApplicationRecord],
    listing_id: Optional[int] = None
) -> StatusReport:
    """
    Count applications per status.

    Args:
        applications: Application records to aggregate
        listing_id: If given, only applications to this listing are counted

    Returns:
        StatusReport with totals and conversion rate
    """
    counts = Counter(
        ApplicationStatus(app.status).value
        for app in applications
        if listing_id is None or app.listing_id == listing_id
    )
    total = sum(counts.values())
    return StatusReport(
        total=total,
        applied=counts[ApplicationStatus.applied.value],
        shortlisted=counts[ApplicationStatus.shortlisted.value],
        rejected=counts[ApplicationStatus.rejected.value],
        selected=counts[ApplicationStatus.selected.value],
        conversion_rate=conversion_rate(counts[ApplicationStatus.selected.value], total),
    )


def summarize_by_listing(applications: Iterable[ApplicationRecord]) -> Dict[int, StatusReport]:
    grouped: Dict[int, List[ApplicationRecord]] = {}
    for app in applications:
        grouped.setdefault(app.listing_id, []).append(app)
    return {listing_id: summarize(apps) for listing_id, apps in grouped.items()}


def portal_overview(
    listings: Iterable[CompanyListing],
    applications: Iterable[ApplicationRecord],
    now: datetime
) -> PortalOverview:
    listings = list(listings)
    return PortalOverview(
        total_listings=len(listings),
        active_listings=sum(1 for listing in listings if listing.is_active(now)),
        applications=summarize(applications),
    )


def export_records(rows: Iterable[Tuple[ApplicationRecord, Optional[StudentProfile]]]) -> List[dict]:
    """
    Flatten (application, profile) pairs into export rows.

    The keys are the column headers of the applicant spreadsheet. Missing
    profile values become empty strings; pairs without a profile are
    skipped.
    """
    records = []
    for app, profile in rows:
        if profile is None:
            continue
        records.append({
            "Name": profile.full_name or "",
            "Roll No": profile.roll_no or "",
            "Email": profile.email or "",
            "Phone": profile.phone or "",
            "CPI": profile.cpi if profile.cpi is not None else "",
            "Branch": profile.branch.value if profile.branch else "",
            "Minor": profile.minor.value if profile.minor else "",
            "Graduation Year": profile.graduation_year if profile.graduation_year is not None else "",
            "Resume Link": profile.resume_link or "",
            "Status": ApplicationStatus(app.status).value,
            "Applied At": app.applied_at.strftime(EXPORT_TIME_FORMAT),
        })
    return records
