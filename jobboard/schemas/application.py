"""
Pydantic schemas for Application API requests/responses.
"""

from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, Field, field_validator

from jobboard.core.database import MAX_INTEGER
from jobboard.models.application import ApplicationStatus
from jobboard.schemas.job import JobWithEmployerResponse
from jobboard.schemas.user import UserSummary


class ApplicationCreateRequest(BaseModel):
    job_id: int = Field(..., le=MAX_INTEGER)
    cover_letter: str = Field(..., min_length=1)
    resume: Optional[str] = None

    @field_validator("cover_letter")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class ApplicationStatusUpdateRequest(BaseModel):
    """Review decision. Applications can never be moved back to pending."""
    status: Literal["accepted", "rejected"]


class ApplicationResponse(BaseModel):
    id: int
    user_id: int
    job_id: int
    cover_letter: str
    resume: Optional[str] = None
    status: ApplicationStatus
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ApplicationWithJobResponse(ApplicationResponse):
    """Applicant's view: the job applied to, including its employer."""
    job: JobWithEmployerResponse


class ApplicationWithApplicantResponse(ApplicationResponse):
    """Employer's view: who applied."""
    user: UserSummary


class AdminApplicationResponse(ApplicationResponse):
    user: UserSummary
    job: JobWithEmployerResponse
