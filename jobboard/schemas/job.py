from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime

from jobboard.schemas.user import UserSummary


class JobCreateRequest(BaseModel):
    """Schema for creating a job posting. The owner and is_active are never taken from the body."""
    title: str = Field(..., min_length=1, max_length=255)
    company: str = Field(..., min_length=1, max_length=255)
    location: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    requirements: Optional[str] = None
    salary: Optional[str] = Field(None, max_length=100)
    employment_type: Optional[str] = Field(None, max_length=100)
    category: Optional[str] = Field(None, max_length=100)

    @field_validator("title", "company", "location", "description")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class JobUpdateRequest(JobCreateRequest):
    """
    Schema for updating a job posting.

    Required fields are replaced wholesale (omitting one is a validation
    error); optional fields left out of the body keep their stored value.
    """
    is_active: Optional[bool] = None


class JobResponse(BaseModel):
    id: int
    title: str
    company: str
    location: str
    description: str
    requirements: Optional[str] = None
    salary: Optional[str] = None
    employment_type: Optional[str] = None
    category: Optional[str] = None
    employer_id: int
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True  # Allows conversion from SQLAlchemy models


class JobWithEmployerResponse(JobResponse):
    employer: Optional[UserSummary] = None


class EmployerJobResponse(JobResponse):
    """An employer's own posting with the number of applications received."""
    applications_count: int = 0


class JobPage(BaseModel):
    """One page of the public job listing."""
    data: List[JobWithEmployerResponse]
    current_page: int
    per_page: int
    total: int
    last_page: int
