"""
Student Routes

GET /students/profile - Get own profile
PUT /students/profile - Update profile (only provided fields)
GET /students/applications - Get my applications
GET /students/dashboard - Counts per status and profile completeness
"""

from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.orm import Session
from typing import List

from portal.db.postgres import get_db
from portal.core.auth import get_current_student
from portal.core.errors import NotFoundError
from portal.services.record_service import ApplicationService, ListingService, ProfileService
from portal.services.reporting import summarize
from portal.utils.clock import utcnow
from portal.schemas.schemas import (
    ProfileUpdate, ProfileResponse, StudentApplicationResponse, StudentDashboardResponse,
    profile_response
)

router = APIRouter(prefix="/students", tags=["Students"])


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(student: dict = Depends(get_current_student), db: Session = Depends(get_db)):
    """Get current student's profile."""
    profile = ProfileService(db).get(student["user_id"])
    if profile is None:
        raise NotFoundError("Profile")
    return profile_response(profile)


@router.put("/profile", response_model=ProfileResponse)
async def update_profile(
    data: ProfileUpdate,
    student: dict = Depends(get_current_student),
    db: Session = Depends(get_db)
):
    """Update student profile. Only provided fields are updated."""
    changes = data.model_dump(exclude_unset=True)
    if not changes:
        raise HTTPException(status_code=400, detail="No fields to update")

    profile = ProfileService(db).update(student["user_id"], changes)
    return profile_response(profile)


@router.get("/applications", response_model=List[StudentApplicationResponse])
async def get_my_applications(student: dict = Depends(get_current_student), db: Session = Depends(get_db)):
    """Get all applications for current student, newest first."""
    pairs = ApplicationService(db).for_student(student["user_id"])
    return [
        StudentApplicationResponse(
            **app.model_dump(),
            listing_name=listing.name, listing_role=listing.role,
            ctc=listing.ctc, deadline=listing.deadline
        ) for app, listing in pairs
    ]


@router.get("/dashboard", response_model=StudentDashboardResponse)
async def get_dashboard(student: dict = Depends(get_current_student), db: Session = Depends(get_db)):
    """Own application counts, open listings and profile completeness."""
    now = utcnow()
    profile = ProfileService(db).get(student["user_id"])
    applications = ApplicationService(db).records(user_id=student["user_id"])
    active = ListingService(db).list(active_only=True, now=now)

    return StudentDashboardResponse(
        profile_complete=bool(profile and profile.is_complete),
        active_listings=len(active),
        applications=summarize(applications)
    )
