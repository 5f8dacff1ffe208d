"""
Record Services - persistence for profiles, listings and applications.

Each service wraps one table and hands back the domain models from
portal.models, so the evaluator, ledger and reporter never see ORM rows.

Every call reads fresh from the database; nothing is cached between
requests.
"""

import logging
from datetime import datetime
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import or_
from sqlalchemy.orm import Session

from portal.core.errors import NotFoundError, ValidationError
from portal.db.tables import Application, Listing, Profile
from portal.models import ApplicationRecord, CompanyListing, StudentProfile
from portal.utils.clock import utcnow

logger = logging.getLogger(__name__)


# ============================================================
# HELPERS
# ============================================================

def to_validation_error(exc: PydanticValidationError) -> ValidationError:
    """Report the first failing field of a pydantic error."""
    first = exc.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ())) or None
    return ValidationError(first.get("msg", "Invalid value"), field=field)


def _plain(value):
    """Enum members (and lists of them) to their stored string values."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, list):
        return [_plain(v) for v in value]
    return value


# ============================================================
# PROFILES
# ============================================================

PROFILE_FIELDS = (
    "full_name", "roll_no", "email", "phone", "cpi", "branch", "minor",
    "graduation_year", "resume_link",
)


class ProfileService:
    """One eligibility profile per student account."""

    def __init__(self, db: Session):
        self.db = db

    def _row(self, user_id: int) -> Optional[Profile]:
        return self.db.query(Profile).filter(Profile.user_id == user_id).first()

    def get(self, user_id: int) -> Optional[StudentProfile]:
        row = self._row(user_id)
        return StudentProfile.model_validate(row) if row else None

    def get_many(self, user_ids: Iterable[int]) -> Dict[int, StudentProfile]:
        ids = list(set(user_ids))
        if not ids:
            return {}
        rows = self.db.query(Profile).filter(Profile.user_id.in_(ids)).all()
        return {row.user_id: StudentProfile.model_validate(row) for row in rows}

    def create_empty(self, user_id: int, email: Optional[str] = None) -> StudentProfile:
        """Provision the blank profile that comes with every student account."""
        now = utcnow()
        row = Profile(user_id=user_id, email=email, created_at=now, updated_at=now)
        self.db.add(row)
        self.db.flush()
        return StudentProfile.model_validate(row)

    def update(self, user_id: int, changes: dict, now: Optional[datetime] = None) -> StudentProfile:
        """
        Apply a partial update owned by the student.

        The merged profile is validated as a whole before anything is
        written, so an out-of-range CPI never reaches the table.
        """
        row = self._row(user_id)
        if row is None:
            raise NotFoundError("Profile")

        unknown = set(changes) - set(PROFILE_FIELDS)
        if unknown:
            raise ValidationError("Unknown profile field", field=sorted(unknown)[0])

        current = StudentProfile.model_validate(row).model_dump()
        current.update(changes)
        try:
            merged = StudentProfile.model_validate(current)
        except PydanticValidationError as exc:
            raise to_validation_error(exc)

        for field in PROFILE_FIELDS:
            setattr(row, field, _plain(getattr(merged, field)))
        row.updated_at = now or utcnow()
        self.db.flush()

        logger.info(f"Profile updated for user {user_id} (complete={merged.is_complete})")
        return StudentProfile.model_validate(row)


# ============================================================
# LISTINGS
# ============================================================

LISTING_FIELDS = (
    "name", "role", "ctc", "job_type", "location", "jd_link", "deadline",
    "min_cpi", "allowed_branches", "allowed_minors", "allowed_graduation_years",
)


class ListingService:
    """Company listings; written only by administrators."""

    def __init__(self, db: Session):
        self.db = db

    def _row(self, listing_id: int) -> Listing:
        row = self.db.get(Listing, listing_id)
        if row is None:
            raise NotFoundError("Listing", listing_id)
        return row

    def get(self, listing_id: int) -> CompanyListing:
        return CompanyListing.model_validate(self._row(listing_id))

    def list(
        self,
        search: Optional[str] = None,
        active_only: bool = False,
        now: Optional[datetime] = None
    ) -> List[CompanyListing]:
        """Listings ordered by deadline, soonest first."""
        query = self.db.query(Listing)
        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(Listing.name.ilike(pattern), Listing.role.ilike(pattern)))
        if active_only:
            query = query.filter(Listing.deadline > (now or utcnow()))
        rows = query.order_by(Listing.deadline.asc(), Listing.listing_id.asc()).all()
        return [CompanyListing.model_validate(row) for row in rows]

    def create(self, data: dict, created_by: int, now: Optional[datetime] = None) -> CompanyListing:
        try:
            listing = CompanyListing.model_validate({**data, "created_by": created_by})
        except PydanticValidationError as exc:
            raise to_validation_error(exc)

        row = Listing(
            **{field: _plain(getattr(listing, field)) for field in LISTING_FIELDS},
            created_by=created_by,
            created_at=now or utcnow()
        )
        self.db.add(row)
        self.db.flush()
        logger.info(f"Listing {row.listing_id} created: {row.name} - {row.role}")
        return CompanyListing.model_validate(row)

    def update(self, listing_id: int, changes: dict) -> CompanyListing:
        row = self._row(listing_id)
        current = CompanyListing.model_validate(row).model_dump()
        current.update({k: v for k, v in changes.items() if k in LISTING_FIELDS})
        try:
            merged = CompanyListing.model_validate(current)
        except PydanticValidationError as exc:
            raise to_validation_error(exc)

        for field in LISTING_FIELDS:
            setattr(row, field, _plain(getattr(merged, field)))
        self.db.flush()
        logger.info(f"Listing {listing_id} updated")
        return CompanyListing.model_validate(row)

    def delete(self, listing_id: int) -> int:
        """Delete a listing together with its applications. Returns how many applications went with it."""
        row = self._row(listing_id)
        self.db.expire(row, ["applications"])
        removed = len(row.applications)
        # relationship cascade deletes the application rows
        self.db.delete(row)
        self.db.flush()
        logger.info(f"Listing {listing_id} deleted with {removed} applications")
        return removed


# ============================================================
# APPLICATIONS (read side - writes go through the ledger)
# ============================================================

class ApplicationService:
    """
    Queries over application rows.

    Every query inner-joins listings so an application whose listing is
    gone is never returned.
    """

    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(Application).join(Listing, Application.listing_id == Listing.listing_id)

    def get_row(self, application_id: int) -> Application:
        row = self._query().filter(Application.application_id == application_id).first()
        if row is None:
            raise NotFoundError("Application", application_id)
        return row

    def find(self, user_id: int, listing_id: int) -> Optional[ApplicationRecord]:
        row = (
            self._query()
            .filter(Application.user_id == user_id, Application.listing_id == listing_id)
            .first()
        )
        return ApplicationRecord.model_validate(row) if row else None

    def count_for_pair(self, user_id: int, listing_id: int) -> int:
        return (
            self.db.query(Application)
            .filter(Application.user_id == user_id, Application.listing_id == listing_id)
            .count()
        )

    def records(
        self,
        listing_id: Optional[int] = None,
        user_id: Optional[int] = None,
        status: Optional[str] = None
    ) -> List[ApplicationRecord]:
        """Applications newest first, filtered by exact match."""
        query = self._query()
        if listing_id is not None:
            query = query.filter(Application.listing_id == listing_id)
        if user_id is not None:
            query = query.filter(Application.user_id == user_id)
        if status is not None:
            query = query.filter(Application.status == _plain(status))
        rows = query.order_by(Application.applied_at.desc(), Application.application_id.desc()).all()
        return [ApplicationRecord.model_validate(row) for row in rows]

    def for_student(self, user_id: int) -> List[Tuple[ApplicationRecord, CompanyListing]]:
        """A student's applications paired with their listing."""
        rows = (
            self._query()
            .filter(Application.user_id == user_id)
            .order_by(Application.applied_at.desc(), Application.application_id.desc())
            .all()
        )
        return [
            (ApplicationRecord.model_validate(row), CompanyListing.model_validate(row.listing))
            for row in rows
        ]

    def applicants(
        self,
        listing_id: Optional[int] = None,
        status: Optional[str] = None
    ) -> List[Tuple[ApplicationRecord, StudentProfile]]:
        """
        Applications paired with the applicant's profile.

        Applications whose profile cannot be found are left out.
        """
        records = self.records(listing_id=listing_id, status=status)
        profiles = ProfileService(self.db).get_many(r.user_id for r in records)
        return [(r, profiles[r.user_id]) for r in records if r.user_id in profiles]
