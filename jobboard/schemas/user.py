"""
Pydantic schemas for users, registration and authentication.

Admin-provisioned accounts use a request body discriminated on ``role``:
each variant only carries the fields that are valid for that role, so an
employer without a company name is rejected while the body is parsed.
"""

from datetime import datetime
from typing import Annotated, Literal, Optional, Union
from pydantic import BaseModel, EmailStr, Field, field_validator

from jobboard.models.user import UserRole


class UserRegisterRequest(BaseModel):
    """Public self-registration; always creates a job seeker (role=user)."""
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(
        ...,
        min_length=8,
        max_length=72,  # bcrypt limit
        description="Password must be 8-72 characters"
    )

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class UserLoginRequest(BaseModel):
    email: EmailStr
    password: str


class _UserCreateBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=72)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class AdminUserCreate(_UserCreateBase):
    role: Literal["admin"]


class EmployerUserCreate(_UserCreateBase):
    role: Literal["employer"]
    company_name: str = Field(..., min_length=1, max_length=255)


class ApplicantUserCreate(_UserCreateBase):
    role: Literal["user"]


UserCreateVariant = Union[AdminUserCreate, EmployerUserCreate, ApplicantUserCreate]

# Validate with TypeAdapter(UserCreateRequest); endpoints use Body(discriminator="role")
UserCreateRequest = Annotated[UserCreateVariant, Field(discriminator="role")]


class UserSummary(BaseModel):
    """Compact user representation embedded in job and application payloads."""
    id: int
    name: str
    email: str
    role: UserRole
    company_name: Optional[str] = None

    class Config:
        from_attributes = True


class UserResponse(UserSummary):
    """User profile response (no sensitive data)."""
    created_at: datetime
    updated_at: Optional[datetime] = None


class TokenResponse(BaseModel):
    """Bearer token issued on registration and login."""
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
