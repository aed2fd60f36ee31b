from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Literal
from datetime import datetime

ApplicationStatus = Literal["applied", "in-progress", "rejected", "offered"]


class _ApplicationBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: Optional[str] = Field(None, alias="userId")
    job_title: str = Field(alias="jobTitle")
    company: str
    job_url: str = Field(alias="jobUrl")
    status: ApplicationStatus = "applied"
    notes: Optional[str] = None
    location: Optional[str] = None
    salary_range: Optional[str] = Field(None, alias="salaryRange")


# For POST /jobs/applications
class JobApplicationCreate(_ApplicationBase):
    pass


# For PATCH /jobs/applications/{id}
class StatusUpdate(BaseModel):
    status: ApplicationStatus


class JobApplication(_ApplicationBase):
    id: str
    applied_date: datetime = Field(alias="appliedDate")
    last_updated: datetime = Field(alias="lastUpdated")
    created_at: datetime = Field(alias="createdAt")

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
