from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from portal.models.enums import Branch, Minor


def normalize_minor(value):
    """The profile form offers "None" as a minor; store it as absent."""
    if isinstance(value, str) and value.strip() in ("", "None"):
        return None
    return value


class StudentProfile(BaseModel):
    """Eligibility-relevant attributes of one student."""

    model_config = ConfigDict(from_attributes=True)

    user_id: int
    full_name: Optional[str] = None
    roll_no: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    cpi: Optional[float] = Field(None, ge=0, le=10)
    branch: Optional[Branch] = None
    minor: Optional[Minor] = None
    graduation_year: Optional[int] = Field(None, ge=2000, le=2100)
    resume_link: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("minor", mode="before")
    @classmethod
    def minor_none_is_absent(cls, value):
        return normalize_minor(value)

    @property
    def is_complete(self) -> bool:
        return (
            bool(self.full_name and self.full_name.strip())
            and self.cpi is not None
            and self.branch is not None
            and self.graduation_year is not None
        )
