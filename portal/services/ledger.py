"""
Application Ledger

One application per (student, listing), with a four-value status.

CREATE:
1. Listing must exist
2. No application for the pair yet (DuplicateApplication)
3. Live profile + listing + now must pass the evaluator (IneligibleError);
   this re-checks the deadline at the moment of writing
4. Insert with status 'applied'. The UNIQUE (user_id, listing_id)
   constraint is what actually guarantees one row per pair - a double
   submission that slips past step 2 fails at the insert and is reported
   as DuplicateApplication as well.

UPDATE STATUS:
- Administrators only (AuthorizationError otherwise)
- Target must be one of applied / shortlisted / rejected / selected
- Any status may move to any other status, so mistakes can be reverted
- Only the current status is kept; there is no change history
"""

import logging
from datetime import datetime
from typing import Optional, Union

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from portal.core.errors import (
    AuthorizationError, DuplicateApplication, IneligibleError, ValidationError
)
from portal.db.tables import Application
from portal.models import Actor, ApplicationRecord, ApplicationStatus
from portal.services.eligibility import evaluate
from portal.services.record_service import ApplicationService, ListingService, ProfileService
from portal.utils.clock import utcnow

logger = logging.getLogger(__name__)


def parse_status(value: Union[str, ApplicationStatus]) -> ApplicationStatus:
    """Map a requested status onto the closed set, or raise ValidationError."""
    try:
        return ApplicationStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in ApplicationStatus)
        raise ValidationError(f"Status must be one of: {allowed}", field="status")


class ApplicationLedger:
    """Guarded writes to the applications table."""

    def __init__(self, db: Session):
        self.db = db
        self.profiles = ProfileService(db)
        self.listings = ListingService(db)
        self.applications = ApplicationService(db)

    def create(self, user_id: int, listing_id: int, now: Optional[datetime] = None) -> ApplicationRecord:
        """
        Record a student's application to a listing.

        Args:
            user_id: The applying student's account id
            listing_id: Target listing
            now: Operation time (defaults to the current UTC time)

        Returns:
            The new application, status 'applied'

        Raises:
            NotFoundError, DuplicateApplication, IneligibleError
        """
        now = now or utcnow()
        listing = self.listings.get(listing_id)

        if self.applications.find(user_id, listing_id) is not None:
            logger.warning(f"Duplicate application refused: user {user_id}, listing {listing_id}")
            raise DuplicateApplication()

        verdict = evaluate(self.profiles.get(user_id), listing, now)
        if not verdict.eligible:
            logger.warning(
                f"Ineligible application refused: user {user_id}, listing {listing_id}: {verdict.reasons}"
            )
            raise IneligibleError(verdict.reasons)

        row = Application(
            user_id=user_id,
            listing_id=listing_id,
            status=ApplicationStatus.applied.value,
            applied_at=now,
            updated_at=now
        )
        try:
            self.db.add(row)
            self.db.flush()
        except IntegrityError:
            self.db.rollback()
            logger.warning(f"Concurrent duplicate application: user {user_id}, listing {listing_id}")
            raise DuplicateApplication()

        logger.info(f"Application {row.application_id} created: user {user_id} -> listing {listing_id}")
        return ApplicationRecord.model_validate(row)

    def update_status(
        self,
        application_id: int,
        new_status: Union[str, ApplicationStatus],
        actor: Optional[Actor],
        now: Optional[datetime] = None
    ) -> ApplicationRecord:
        """Set an application's status. Administrators only; any-to-any."""
        if actor is None or not actor.is_admin:
            logger.warning(f"Status update on application {application_id} refused for non-admin")
            raise AuthorizationError()

        status = parse_status(new_status)
        row = self.applications.get_row(application_id)

        previous = row.status
        row.status = status.value
        row.updated_at = now or utcnow()
        self.db.flush()

        logger.info(
            f"Application {application_id} status {previous} -> {status.value} by admin {actor.user_id}"
        )
        return ApplicationRecord.model_validate(row)
