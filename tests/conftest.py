import os

# Must be set before portal.db.postgres builds its engine
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ["DEBUG"] = "false"

from datetime import datetime, timedelta

import pytest

from portal.core.auth import hash_password
from portal.db.postgres import SessionLocal, drop_db, init_db
from portal.db.tables import User
from portal.models import CompanyListing, StudentProfile
from portal.services.record_service import ListingService, ProfileService

NOW = datetime(2025, 1, 15, 12, 0)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def complete_profile():
    return StudentProfile(
        user_id=1, full_name="Asha Verma", roll_no="21CS1042", cpi=6.5,
        branch="Computer Science", graduation_year=2025
    )


@pytest.fixture
def open_listing():
    return CompanyListing(
        listing_id=10, name="Acme Analytics", role="Software Engineer", ctc="18 LPA",
        job_type="full-time", location="Bengaluru", deadline=NOW + timedelta(days=7)
    )


@pytest.fixture
def database():
    init_db()
    yield
    drop_db()


@pytest.fixture
def db(database):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


def make_user(db, email, role="student", password="password123"):
    user = User(email=email, password_hash=hash_password(password), role=role)
    db.add(user)
    db.flush()
    if role == "student":
        ProfileService(db).create_empty(user.user_id, email=email)
    return user


def make_listing(db, created_by, deadline, **overrides):
    data = {
        "name": "Acme Analytics", "role": "Software Engineer", "ctc": "18 LPA",
        "job_type": "full-time", "location": "Bengaluru", "deadline": deadline,
    }
    data.update(overrides)
    return ListingService(db).create(data, created_by=created_by)


def fill_profile(db, user_id, **overrides):
    changes = {
        "full_name": "Asha Verma", "roll_no": "21CS1042", "cpi": 6.5,
        "branch": "Computer Science", "graduation_year": 2025,
    }
    changes.update(overrides)
    return ProfileService(db).update(user_id, changes)
