from datetime import timedelta

import pytest

from portal.models import StudentProfile
from portal.services.eligibility import (
    BRANCH_NOT_ELIGIBLE, CPI_BELOW_MINIMUM, DEADLINE_PASSED, GRADUATION_YEAR_NOT_ELIGIBLE,
    MINOR_NOT_ELIGIBLE, PROFILE_INCOMPLETE, evaluate, evaluate_many
)


def test_cpi_below_minimum_is_the_only_reason(complete_profile, open_listing, now):
    listing = open_listing.model_copy(update={"min_cpi": 7.0, "allowed_branches": None})

    verdict = evaluate(complete_profile, listing, now)

    assert verdict.eligible is False
    assert verdict.reasons == [CPI_BELOW_MINIMUM]


def test_matching_constraints_are_eligible(complete_profile, open_listing, now):
    listing = open_listing.model_validate({
        **open_listing.model_dump(),
        "min_cpi": 6.0,
        "allowed_branches": ["Computer Science"],
        "allowed_graduation_years": [2025],
    })

    verdict = evaluate(complete_profile, listing, now)

    assert verdict.eligible is True
    assert verdict.reasons == []


@pytest.mark.parametrize("update, profile_update, reason", [
    ({"min_cpi": 8.0}, {}, CPI_BELOW_MINIMUM),
    ({"allowed_branches": ["Mechanical Engineering"]}, {}, BRANCH_NOT_ELIGIBLE),
    ({"allowed_minors": ["Finance"]}, {"minor": "Design"}, MINOR_NOT_ELIGIBLE),
    ({"allowed_graduation_years": [2026, 2027]}, {}, GRADUATION_YEAR_NOT_ELIGIBLE),
])
def test_single_violation_gives_single_reason(complete_profile, open_listing, now, update, profile_update, reason):
    listing = open_listing.model_validate({**open_listing.model_dump(), **update})
    profile = StudentProfile.model_validate({**complete_profile.model_dump(), **profile_update})

    verdict = evaluate(profile, listing, now)

    assert verdict.reasons == [reason]
    assert verdict.eligible is False


def test_deadline_passed_at_exact_deadline(complete_profile, open_listing):
    assert evaluate(complete_profile, open_listing, open_listing.deadline).reasons == [DEADLINE_PASSED]
    just_before = open_listing.deadline - timedelta(seconds=1)
    assert evaluate(complete_profile, open_listing, just_before).eligible is True


def test_incomplete_profile(complete_profile, open_listing, now):
    profile = complete_profile.model_copy(update={"graduation_year": None})
    assert evaluate(profile, open_listing, now).reasons == [PROFILE_INCOMPLETE]


def test_blank_name_is_incomplete(complete_profile):
    assert complete_profile.model_copy(update={"full_name": "   "}).is_complete is False


def test_zero_cpi_counts_as_present(complete_profile):
    assert complete_profile.model_copy(update={"cpi": 0.0}).is_complete is True


def test_missing_profile(open_listing, now):
    verdict = evaluate(None, open_listing, now)
    assert verdict.reasons == [PROFILE_INCOMPLETE]


def test_missing_profile_values_do_not_trigger_constraint_checks(open_listing, now):
    profile = StudentProfile(user_id=1, full_name="Ravi Nair")
    listing = open_listing.model_validate({
        **open_listing.model_dump(),
        "min_cpi": 9.0,
        "allowed_branches": ["Civil Engineering"],
        "allowed_minors": ["Finance"],
        "allowed_graduation_years": [2030],
    })

    assert evaluate(profile, listing, now).reasons == [PROFILE_INCOMPLETE]


def test_absent_minor_passes_minor_restriction(complete_profile, open_listing, now):
    listing = open_listing.model_validate({**open_listing.model_dump(), "allowed_minors": ["Finance"]})
    assert evaluate(complete_profile, listing, now).eligible is True


def test_empty_allow_lists_mean_unrestricted(complete_profile, open_listing, now):
    listing = open_listing.model_validate({
        **open_listing.model_dump(),
        "allowed_branches": [], "allowed_minors": [], "allowed_graduation_years": [],
    })
    assert listing.allowed_branches is None
    assert evaluate(complete_profile, listing, now).eligible is True


def test_reasons_keep_documented_order(open_listing):
    profile = StudentProfile(
        user_id=1, cpi=5.0, branch="Biotechnology", minor="Design", graduation_year=2024
    )
    listing = open_listing.model_validate({
        **open_listing.model_dump(),
        "min_cpi": 7.5,
        "allowed_branches": ["Computer Science"],
        "allowed_minors": ["Data Science"],
        "allowed_graduation_years": [2025],
    })

    verdict = evaluate(profile, listing, listing.deadline + timedelta(days=1))

    assert verdict.reasons == [
        CPI_BELOW_MINIMUM,
        BRANCH_NOT_ELIGIBLE,
        MINOR_NOT_ELIGIBLE,
        GRADUATION_YEAR_NOT_ELIGIBLE,
        DEADLINE_PASSED,
        PROFILE_INCOMPLETE,
    ]


def test_evaluate_is_idempotent(complete_profile, open_listing, now):
    listing = open_listing.model_validate({**open_listing.model_dump(), "min_cpi": 7.0})
    assert evaluate(complete_profile, listing, now) == evaluate(complete_profile, listing, now)


def test_evaluate_many_keys_by_listing(complete_profile, open_listing, now):
    strict = open_listing.model_validate({**open_listing.model_dump(), "listing_id": 11, "min_cpi": 9.0})

    verdicts = evaluate_many(complete_profile, [open_listing, strict], now)

    assert verdicts[10].eligible is True
    assert verdicts[11].reasons == [CPI_BELOW_MINIMUM]


def test_minor_none_string_is_absent():
    assert StudentProfile(user_id=1, minor="None").minor is None
