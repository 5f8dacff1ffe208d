"""
Eligibility Evaluator

PURPOSE:
Decide whether a student may apply to a listing, and say why not.

HOW IT WORKS:
Six checks run in a fixed order and each failing check appends one reason.
The order never changes, so the reasons shown to a student (and asserted
in tests) are deterministic:

1. CPI threshold
2. Allowed branches
3. Allowed minors
4. Allowed graduation years
5. Deadline
6. Profile completeness

Checks 1-4 only fire when BOTH the listing constraint and the profile
value are present. A profile with a missing CPI is not blocked by the CPI
check; it is caught by the completeness check (6) instead.

The evaluator is a pure function of (profile, listing, now): no database
access, no clock reads, no caching.
"""

from datetime import datetime
from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel

from portal.models.listing import CompanyListing
from portal.models.profile import StudentProfile

CPI_BELOW_MINIMUM = "CPI below minimum"
BRANCH_NOT_ELIGIBLE = "branch not eligible"
MINOR_NOT_ELIGIBLE = "minor not eligible"
GRADUATION_YEAR_NOT_ELIGIBLE = "graduation year not eligible"
DEADLINE_PASSED = "deadline passed"
PROFILE_INCOMPLETE = "profile incomplete"


class EligibilityVerdict(BaseModel):
    eligible: bool
    reasons: List[str] = []


# ============================================================
# INDIVIDUAL CHECKS
# ============================================================

def _cpi_below_minimum(profile: StudentProfile, listing: CompanyListing) -> bool:
    if listing.min_cpi is None or profile.cpi is None:
        return False
    return profile.cpi < listing.min_cpi


def _not_in(allowed: Optional[list], value) -> bool:
    """True when a non-empty allow-list is set and a present value is outside it."""
    if not allowed or value is None:
        return False
    return value not in allowed


# ============================================================
# EVALUATION
# ============================================================

def evaluate(
    profile: Optional[StudentProfile],
    listing: CompanyListing,
    now: datetime
) -> EligibilityVerdict:
    """
    Evaluate a profile against a listing at a given instant.

    Args:
        profile: The student's profile, or None if it does not exist
        listing: The listing with its constraints
        now: Evaluation time (naive UTC, same as listing.deadline)

    Returns:
        EligibilityVerdict; eligible iff no reasons were recorded
    """
    reasons: List[str] = []

    if profile is not None:
        if _cpi_below_minimum(profile, listing):
            reasons.append(CPI_BELOW_MINIMUM)
        if _not_in(listing.allowed_branches, profile.branch):
            reasons.append(BRANCH_NOT_ELIGIBLE)
        if _not_in(listing.allowed_minors, profile.minor):
            reasons.append(MINOR_NOT_ELIGIBLE)
        if _not_in(listing.allowed_graduation_years, profile.graduation_year):
            reasons.append(GRADUATION_YEAR_NOT_ELIGIBLE)

    if now >= listing.deadline:
        reasons.append(DEADLINE_PASSED)

    if profile is None or not profile.is_complete:
        reasons.append(PROFILE_INCOMPLETE)

    return EligibilityVerdict(eligible=not reasons, reasons=reasons)


def evaluate_many(
    profile: Optional[StudentProfile],
    listings: Iterable[CompanyListing],
    now: datetime
) -> Dict[int, EligibilityVerdict]:
    """Verdict per listing_id, for the listing browse page."""
    return {listing.listing_id: evaluate(profile, listing, now) for listing in listings}
