"""
Application Routes (admin)

GET /applications - Applicants with their profiles, newest first
GET /applications/export - Flat applicant records for CSV / spreadsheet export
PUT /applications/{application_id}/status - Update application status
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from portal.db.postgres import get_db
from portal.core.auth import get_current_admin, to_actor
from portal.services.ledger import ApplicationLedger, parse_status
from portal.services.record_service import ApplicationService, ListingService
from portal.services.reporting import export_records
from portal.schemas.schemas import (
    ApplicantResponse, ApplicationResponse, ApplicationStatusUpdate, profile_response
)

router = APIRouter(prefix="/applications", tags=["Applications"])


@router.get("", response_model=List[ApplicantResponse])
async def get_applicants(
    listing_id: Optional[int] = Query(None),
    status: Optional[str] = Query(None),
    admin: dict = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """Get applications with applicant profiles, optionally for one listing / status."""
    if listing_id is not None:
        ListingService(db).get(listing_id)
    status_filter = parse_status(status) if status else None

    pairs = ApplicationService(db).applicants(listing_id=listing_id, status=status_filter)
    return [
        ApplicantResponse(**app.model_dump(), profile=profile_response(profile))
        for app, profile in pairs
    ]


@router.get("/export")
async def export_applicants(
    listing_id: Optional[int] = Query(None),
    admin: dict = Depends(get_current_admin),
    db: Session = Depends(get_db)
) -> List[dict]:
    """
    Applicant rows keyed by column header.

    The client writes these out as CSV or XLSX; no file is produced here.
    """
    if listing_id is not None:
        ListingService(db).get(listing_id)
    return export_records(ApplicationService(db).applicants(listing_id=listing_id))


@router.put("/{application_id}/status", response_model=ApplicationResponse)
async def update_application_status(
    application_id: int,
    update: ApplicationStatusUpdate,
    admin: dict = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """Update status of an application. Any status may be set from any status."""
    record = ApplicationLedger(db).update_status(application_id, update.status, to_actor(admin))
    return ApplicationResponse(**record.model_dump())
