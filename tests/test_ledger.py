from datetime import timedelta

import pytest

from conftest import fill_profile, make_listing, make_user
from portal.core.errors import (
    AuthorizationError, DuplicateApplication, IneligibleError, NotFoundError, ValidationError
)
from portal.models import Actor, ApplicationStatus
from portal.services.eligibility import CPI_BELOW_MINIMUM, DEADLINE_PASSED, PROFILE_INCOMPLETE
from portal.services.ledger import ApplicationLedger
from portal.services.record_service import ApplicationService


@pytest.fixture
def admin(db):
    return make_user(db, "tpo@college.edu", role="admin")


@pytest.fixture
def student(db):
    user = make_user(db, "asha@college.edu")
    fill_profile(db, user.user_id)
    return user


@pytest.fixture
def listing(db, admin, now):
    return make_listing(
        db, admin.user_id, now + timedelta(days=7),
        min_cpi=6.0, allowed_branches=["Computer Science"], allowed_graduation_years=[2025]
    )


def test_create_starts_applied(db, student, listing, now):
    record = ApplicationLedger(db).create(student.user_id, listing.listing_id, now=now)

    assert record.status == ApplicationStatus.applied
    assert record.applied_at == now
    assert record.updated_at == now


def test_second_create_is_duplicate(db, student, listing, now):
    ledger = ApplicationLedger(db)
    ledger.create(student.user_id, listing.listing_id, now=now)
    db.commit()

    with pytest.raises(DuplicateApplication):
        ledger.create(student.user_id, listing.listing_id, now=now + timedelta(minutes=1))

    assert ApplicationService(db).count_for_pair(student.user_id, listing.listing_id) == 1


def test_concurrent_duplicate_caught_by_constraint(db, student, listing, now, monkeypatch):
    ledger = ApplicationLedger(db)
    ledger.create(student.user_id, listing.listing_id, now=now)
    db.commit()

    # Simulate a second submission that read before the first one committed
    monkeypatch.setattr(ledger.applications, "find", lambda user_id, listing_id: None)

    with pytest.raises(DuplicateApplication):
        ledger.create(student.user_id, listing.listing_id, now=now)

    assert ApplicationService(db).count_for_pair(student.user_id, listing.listing_id) == 1


def test_ineligible_create_carries_reasons(db, admin, student, now):
    strict = make_listing(db, admin.user_id, now + timedelta(days=3), min_cpi=7.0)

    with pytest.raises(IneligibleError) as exc_info:
        ApplicationLedger(db).create(student.user_id, strict.listing_id, now=now)

    assert exc_info.value.reasons == [CPI_BELOW_MINIMUM]
    assert ApplicationService(db).count_for_pair(student.user_id, strict.listing_id) == 0


def test_deadline_rechecked_at_create(db, student, listing):
    with pytest.raises(IneligibleError) as exc_info:
        ApplicationLedger(db).create(student.user_id, listing.listing_id, now=listing.deadline)

    assert exc_info.value.reasons == [DEADLINE_PASSED]


def test_incomplete_profile_cannot_apply(db, listing, now):
    newcomer = make_user(db, "ravi@college.edu")

    with pytest.raises(IneligibleError) as exc_info:
        ApplicationLedger(db).create(newcomer.user_id, listing.listing_id, now=now)

    assert exc_info.value.reasons == [PROFILE_INCOMPLETE]


def test_create_on_missing_listing(db, student, now):
    with pytest.raises(NotFoundError):
        ApplicationLedger(db).create(student.user_id, 9999, now=now)


@pytest.mark.parametrize("start", list(ApplicationStatus))
@pytest.mark.parametrize("target", list(ApplicationStatus))
def test_any_status_to_any_status(db, admin, student, listing, now, start, target):
    ledger = ApplicationLedger(db)
    actor = Actor(user_id=admin.user_id, role="admin")
    record = ledger.create(student.user_id, listing.listing_id, now=now)
    ledger.update_status(record.application_id, start, actor, now=now)

    later = now + timedelta(hours=2)
    updated = ledger.update_status(record.application_id, target.value, actor, now=later)

    assert updated.status == target
    assert updated.updated_at == later
    assert updated.applied_at == now


def test_fifth_status_is_rejected(db, admin, student, listing, now):
    ledger = ApplicationLedger(db)
    record = ledger.create(student.user_id, listing.listing_id, now=now)

    with pytest.raises(ValidationError) as exc_info:
        ledger.update_status(record.application_id, "offered", Actor(user_id=admin.user_id, role="admin"))

    assert exc_info.value.field == "status"


def test_student_cannot_update_status(db, student, listing, now):
    ledger = ApplicationLedger(db)
    record = ledger.create(student.user_id, listing.listing_id, now=now)

    with pytest.raises(AuthorizationError) as exc_info:
        ledger.update_status(record.application_id, "selected", Actor(user_id=student.user_id, role="student"))

    assert exc_info.value.message == "Not permitted"
    assert ApplicationService(db).records()[0].status == ApplicationStatus.applied


def test_missing_actor_cannot_update_status(db, student, listing, now):
    record = ApplicationLedger(db).create(student.user_id, listing.listing_id, now=now)

    with pytest.raises(AuthorizationError):
        ApplicationLedger(db).update_status(record.application_id, "selected", None)


def test_update_unknown_application(db, admin):
    with pytest.raises(NotFoundError):
        ApplicationLedger(db).update_status(424242, "selected", Actor(user_id=admin.user_id, role="admin"))
