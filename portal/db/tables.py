"""
Relational tables for the placement portal.

users        - login accounts (student | admin)
profiles     - one eligibility profile per student account
listings     - company postings with eligibility constraints and a deadline
applications - one row per (student, listing); UNIQUE constraint is the
               authority for "already applied"
"""

from sqlalchemy import (
    Boolean, Column, DateTime, Float, ForeignKey, Integer, JSON, String,
    Text, UniqueConstraint
)
from sqlalchemy.orm import declarative_base, relationship

from portal.utils.clock import utcnow

Base = declarative_base()


class User(Base):
    __tablename__ = "users"

    user_id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(200), nullable=False, unique=True, index=True)
    password_hash = Column(String(200), nullable=False)
    role = Column(String(20), nullable=False, default="student")
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    profile = relationship("Profile", back_populates="user", uselist=False)

    def __repr__(self):
        return f"<User {self.email} ({self.role})>"


class Profile(Base):
    __tablename__ = "profiles"

    profile_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, unique=True)
    full_name = Column(String(100), nullable=True)
    roll_no = Column(String(50), nullable=True)
    email = Column(String(200), nullable=True)
    phone = Column(String(30), nullable=True)
    cpi = Column(Float, nullable=True)
    branch = Column(String(100), nullable=True)
    minor = Column(String(100), nullable=True)
    graduation_year = Column(Integer, nullable=True)
    resume_link = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow)

    user = relationship("User", back_populates="profile")

    def __repr__(self):
        return f"<Profile user={self.user_id} {self.full_name}>"


class Listing(Base):
    __tablename__ = "listings"

    listing_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False, index=True)
    role = Column(String(200), nullable=False)
    ctc = Column(String(100), nullable=False)  # free-form, e.g. "18 LPA"
    job_type = Column(String(20), nullable=False)
    location = Column(String(200), nullable=False)
    jd_link = Column(Text, nullable=True)
    deadline = Column(DateTime, nullable=False, index=True)
    min_cpi = Column(Float, nullable=True)
    # NULL means "no restriction"
    allowed_branches = Column(JSON, nullable=True)
    allowed_minors = Column(JSON, nullable=True)
    allowed_graduation_years = Column(JSON, nullable=True)
    created_by = Column(Integer, ForeignKey("users.user_id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    applications = relationship(
        "Application", back_populates="listing", cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<Listing {self.name} - {self.role}>"


class Application(Base):
    __tablename__ = "applications"
    __table_args__ = (
        UniqueConstraint("user_id", "listing_id", name="uq_application_user_listing"),
    )

    application_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    listing_id = Column(Integer, ForeignKey("listings.listing_id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(String(20), nullable=False, default="applied")
    applied_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow)

    listing = relationship("Listing", back_populates="applications")

    def __repr__(self):
        return f"<Application user={self.user_id} listing={self.listing_id} {self.status}>"
