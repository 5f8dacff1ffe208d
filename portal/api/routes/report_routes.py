"""
Report Routes (admin)

GET /reports/overview - Listings, active listings and portal-wide status counts
GET /reports/listings - Status counts for every listing
GET /reports/listings/{listing_id} - Status counts for one listing
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from portal.db.postgres import get_db
from portal.core.auth import get_current_admin
from portal.services.record_service import ApplicationService, ListingService
from portal.services.reporting import (
    PortalOverview, StatusReport, portal_overview, summarize, summarize_by_listing
)
from portal.utils.clock import utcnow
from portal.schemas.schemas import ListingReportResponse

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("/overview", response_model=PortalOverview)
async def get_overview(admin: dict = Depends(get_current_admin), db: Session = Depends(get_db)):
    """Admin dashboard figures, recomputed on every call."""
    listings = ListingService(db).list()
    applications = ApplicationService(db).records()
    return portal_overview(listings, applications, utcnow())


@router.get("/listings", response_model=List[ListingReportResponse])
async def get_listing_reports(admin: dict = Depends(get_current_admin), db: Session = Depends(get_db)):
    """Per-listing status counts; listings without applications report zeros."""
    now = utcnow()
    listings = ListingService(db).list()
    reports = summarize_by_listing(ApplicationService(db).records())
    return [
        ListingReportResponse(
            listing_id=listing.listing_id, name=listing.name, role=listing.role,
            is_active=listing.is_active(now),
            report=reports.get(listing.listing_id, StatusReport())
        ) for listing in listings
    ]


@router.get("/listings/{listing_id}", response_model=ListingReportResponse)
async def get_listing_report(listing_id: int, admin: dict = Depends(get_current_admin), db: Session = Depends(get_db)):
    listing = ListingService(db).get(listing_id)
    applications = ApplicationService(db).records(listing_id=listing_id)
    return ListingReportResponse(
        listing_id=listing.listing_id, name=listing.name, role=listing.role,
        is_active=listing.is_active(utcnow()),
        report=summarize(applications, listing_id=listing_id)
    )
