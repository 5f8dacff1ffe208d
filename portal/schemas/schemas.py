"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
Enums and domain models live in portal.models.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import Optional, List
from datetime import datetime

from portal.models import ApplicationStatus, Branch, JobType, Minor
from portal.models.profile import normalize_minor
from portal.services.eligibility import EligibilityVerdict
from portal.services.reporting import StatusReport
from portal.utils.clock import to_naive_utc


# ============================================================
# AUTH SCHEMAS
# ============================================================

class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8)

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: int
    role: str

class UserResponse(BaseModel):
    user_id: int
    email: str
    role: str
    is_active: bool
    created_at: datetime


# ============================================================
# PROFILE SCHEMAS
# ============================================================

class ProfileUpdate(BaseModel):
    full_name: Optional[str] = Field(None, max_length=100)
    roll_no: Optional[str] = Field(None, max_length=50)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=30)
    cpi: Optional[float] = Field(None, ge=0, le=10)
    branch: Optional[Branch] = None
    minor: Optional[Minor] = None
    graduation_year: Optional[int] = Field(None, ge=2000, le=2100)
    resume_link: Optional[str] = None

    @field_validator("minor", mode="before")
    @classmethod
    def minor_none_is_absent(cls, value):
        return normalize_minor(value)

class ProfileResponse(BaseModel):
    user_id: int
    full_name: Optional[str] = None
    roll_no: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    cpi: Optional[float] = None
    branch: Optional[str] = None
    minor: Optional[str] = None
    graduation_year: Optional[int] = None
    resume_link: Optional[str] = None
    is_complete: bool = False
    updated_at: Optional[datetime] = None


# ============================================================
# LISTING SCHEMAS
# ============================================================

class ListingCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    role: str = Field(..., min_length=1, max_length=200)
    ctc: str = Field(..., min_length=1, max_length=100)
    job_type: JobType = JobType.full_time
    location: str = Field(..., min_length=1, max_length=200)
    jd_link: Optional[str] = None
    deadline: datetime
    min_cpi: Optional[float] = Field(None, ge=0, le=10)
    allowed_branches: Optional[List[Branch]] = None
    allowed_minors: Optional[List[Minor]] = None
    allowed_graduation_years: Optional[List[int]] = None

    @field_validator("deadline")
    @classmethod
    def deadline_to_utc(cls, value: datetime) -> datetime:
        return to_naive_utc(value)

class ListingUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    role: Optional[str] = Field(None, min_length=1, max_length=200)
    ctc: Optional[str] = Field(None, min_length=1, max_length=100)
    job_type: Optional[JobType] = None
    location: Optional[str] = Field(None, min_length=1, max_length=200)
    jd_link: Optional[str] = None
    deadline: Optional[datetime] = None
    min_cpi: Optional[float] = Field(None, ge=0, le=10)
    allowed_branches: Optional[List[Branch]] = None
    allowed_minors: Optional[List[Minor]] = None
    allowed_graduation_years: Optional[List[int]] = None

    @field_validator("deadline")
    @classmethod
    def deadline_to_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(value) if value is not None else None

class ListingResponse(BaseModel):
    listing_id: int
    name: str
    role: str
    ctc: str
    job_type: str
    location: str
    jd_link: Optional[str] = None
    deadline: datetime
    min_cpi: Optional[float] = None
    allowed_branches: Optional[List[str]] = None
    allowed_minors: Optional[List[str]] = None
    allowed_graduation_years: Optional[List[int]] = None
    created_at: Optional[datetime] = None
    is_active: bool
    # Filled for students only
    eligibility: Optional[EligibilityVerdict] = None
    application_status: Optional[str] = None


# ============================================================
# APPLICATION SCHEMAS
# ============================================================

class ApplicationStatusUpdate(BaseModel):
    # Plain string: unknown values are rejected by the ledger
    status: str

class ApplicationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    application_id: int
    user_id: int
    listing_id: int
    status: ApplicationStatus
    applied_at: datetime
    updated_at: datetime

class StudentApplicationResponse(ApplicationResponse):
    listing_name: str
    listing_role: str
    ctc: str
    deadline: datetime

class ApplicantResponse(ApplicationResponse):
    profile: ProfileResponse


# ============================================================
# REPORT SCHEMAS
# ============================================================

class ListingReportResponse(BaseModel):
    listing_id: int
    name: str
    role: str
    is_active: bool
    report: StatusReport

class StudentDashboardResponse(BaseModel):
    profile_complete: bool
    active_listings: int
    applications: StatusReport


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    message: str
    success: bool = True


# ============================================================
# BUILDERS (domain model -> response)
# ============================================================

def _value(member):
    return member.value if member is not None else None


def profile_response(profile) -> ProfileResponse:
    return ProfileResponse(
        user_id=profile.user_id, full_name=profile.full_name, roll_no=profile.roll_no,
        email=profile.email, phone=profile.phone, cpi=profile.cpi,
        branch=_value(profile.branch), minor=_value(profile.minor),
        graduation_year=profile.graduation_year, resume_link=profile.resume_link,
        is_complete=profile.is_complete, updated_at=profile.updated_at
    )


def listing_response(listing, now: datetime, eligibility=None, application_status=None) -> ListingResponse:
    return ListingResponse(
        listing_id=listing.listing_id, name=listing.name, role=listing.role, ctc=listing.ctc,
        job_type=listing.job_type.value, location=listing.location, jd_link=listing.jd_link,
        deadline=listing.deadline, min_cpi=listing.min_cpi,
        allowed_branches=[b.value for b in listing.allowed_branches] if listing.allowed_branches else None,
        allowed_minors=[m.value for m in listing.allowed_minors] if listing.allowed_minors else None,
        allowed_graduation_years=listing.allowed_graduation_years,
        created_at=listing.created_at, is_active=listing.is_active(now),
        eligibility=eligibility, application_status=_value(application_status)
    )
