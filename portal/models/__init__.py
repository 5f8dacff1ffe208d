"""
Models module - Pydantic domain models shared by the services.

These are what the evaluator, ledger and reporter work on; the API
schemas in portal.schemas are the wire contract, portal.db.tables the
storage rows.
"""

from portal.models.enums import ApplicationStatus, Branch, JobType, Minor, UserRole
from portal.models.profile import StudentProfile
from portal.models.listing import CompanyListing
from portal.models.application import ApplicationRecord, Actor

__all__ = [
    "ApplicationStatus", "Branch", "JobType", "Minor", "UserRole",
    "StudentProfile", "CompanyListing", "ApplicationRecord", "Actor",
]
