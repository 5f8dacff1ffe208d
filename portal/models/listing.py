from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from portal.models.enums import Branch, JobType, Minor


class CompanyListing(BaseModel):
    """
    A company posting with its eligibility constraints.

    Empty or missing constraint lists mean "no restriction". Whether the
    listing is still open is never stored - ask `is_active(now)`.
    """

    model_config = ConfigDict(from_attributes=True)

    listing_id: Optional[int] = None
    name: str
    role: str
    ctc: str
    job_type: JobType
    location: str
    jd_link: Optional[str] = None
    deadline: datetime
    min_cpi: Optional[float] = Field(None, ge=0, le=10)
    allowed_branches: Optional[List[Branch]] = None
    allowed_minors: Optional[List[Minor]] = None
    allowed_graduation_years: Optional[List[int]] = None
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None

    @field_validator("allowed_branches", "allowed_minors", "allowed_graduation_years", mode="before")
    @classmethod
    def empty_means_unrestricted(cls, value):
        if value is not None and len(value) == 0:
            return None
        return value

    def is_active(self, now: datetime) -> bool:
        return now < self.deadline
