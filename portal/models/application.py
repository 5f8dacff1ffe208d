from datetime import datetime

from pydantic import BaseModel, ConfigDict

from portal.models.enums import ApplicationStatus, UserRole


class ApplicationRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    application_id: int
    user_id: int
    listing_id: int
    status: ApplicationStatus
    applied_at: datetime
    updated_at: datetime


class Actor(BaseModel):
    """The authenticated caller, passed explicitly into ledger operations."""

    user_id: int
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.admin
