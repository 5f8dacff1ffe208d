"""
Listing Routes

GET /listings - List listings (soonest deadline first) with search
GET /listings/{listing_id} - Get listing details
GET /listings/{listing_id}/eligibility - Eligibility verdict for current student
POST /listings - Create listing (admin only)
PUT /listings/{listing_id} - Update listing (admin only)
DELETE /listings/{listing_id} - Delete listing and its applications (admin only)
POST /listings/{listing_id}/apply - Apply to listing (student only)
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from portal.db.postgres import get_db
from portal.core.auth import get_current_user, get_current_student, get_current_admin
from portal.services.eligibility import EligibilityVerdict, evaluate, evaluate_many
from portal.services.ledger import ApplicationLedger
from portal.services.record_service import ApplicationService, ListingService, ProfileService
from portal.utils.clock import utcnow
from portal.schemas.schemas import (
    ListingCreate, ListingUpdate, ListingResponse, ApplicationResponse, MessageResponse,
    listing_response
)

router = APIRouter(prefix="/listings", tags=["Listings"])


@router.get("", response_model=List[ListingResponse])
async def list_listings(
    search: Optional[str] = Query(None, description="Search in company name or role"),
    active_only: bool = Query(False),
    user: dict = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    List listings, soonest deadline first.

    Students also get their eligibility verdict and application status
    for every listing.
    """
    now = utcnow()
    listings = ListingService(db).list(search=search, active_only=active_only, now=now)

    if user["role"] != "student":
        return [listing_response(listing, now) for listing in listings]

    profile = ProfileService(db).get(user["user_id"])
    verdicts = evaluate_many(profile, listings, now)
    statuses = {
        app.listing_id: app.status
        for app in ApplicationService(db).records(user_id=user["user_id"])
    }
    return [
        listing_response(
            listing, now,
            eligibility=verdicts[listing.listing_id],
            application_status=statuses.get(listing.listing_id)
        ) for listing in listings
    ]


@router.get("/{listing_id}", response_model=ListingResponse)
async def get_listing(listing_id: int, user: dict = Depends(get_current_user), db: Session = Depends(get_db)):
    """Get details of a specific listing."""
    return listing_response(ListingService(db).get(listing_id), utcnow())


@router.get("/{listing_id}/eligibility", response_model=EligibilityVerdict)
async def check_eligibility(
    listing_id: int,
    student: dict = Depends(get_current_student),
    db: Session = Depends(get_db)
):
    """Evaluate the current student's live profile against a listing."""
    listing = ListingService(db).get(listing_id)
    profile = ProfileService(db).get(student["user_id"])
    return evaluate(profile, listing, utcnow())


@router.post("", response_model=ListingResponse, status_code=201)
async def create_listing(
    data: ListingCreate,
    admin: dict = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """Create a new listing. Empty constraint lists mean no restriction."""
    listing = ListingService(db).create(data.model_dump(), created_by=admin["user_id"])
    return listing_response(listing, utcnow())


@router.put("/{listing_id}", response_model=ListingResponse)
async def update_listing(
    listing_id: int,
    update: ListingUpdate,
    admin: dict = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    """Update a listing. Only provided fields are changed."""
    listing = ListingService(db).update(listing_id, update.model_dump(exclude_unset=True))
    return listing_response(listing, utcnow())


@router.delete("/{listing_id}", response_model=MessageResponse)
async def delete_listing(listing_id: int, admin: dict = Depends(get_current_admin), db: Session = Depends(get_db)):
    """Delete a listing. Cascades to its applications."""
    removed = ListingService(db).delete(listing_id)
    return MessageResponse(message=f"Listing deleted along with {removed} applications")


@router.post("/{listing_id}/apply", response_model=ApplicationResponse, status_code=201)
async def apply_to_listing(
    listing_id: int,
    student: dict = Depends(get_current_student),
    db: Session = Depends(get_db)
):
    """Apply to a listing. Students only. Cannot apply twice to the same listing."""
    record = ApplicationLedger(db).create(student["user_id"], listing_id)
    return ApplicationResponse(**record.model_dump())
