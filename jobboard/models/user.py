"""
User model for authentication and role-based authorization.

Every account has exactly one role:
- admin: reporting and user provisioning across the whole board
- employer: owns job postings (company_name is mandatory)
- user: a job seeker who applies to jobs
"""

import enum
from sqlalchemy import Column, Integer, String, DateTime, Enum, func
from sqlalchemy.orm import relationship
from jobboard.core.database import Base


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    EMPLOYER = "employer"
    USER = "user"


class User(Base):
    """
    An account on the job board.

    The role is fixed at creation time. Deleting a user removes their
    applications and, for employers, their jobs (and those jobs' applications).
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String, nullable=False)

    role = Column(
        Enum(UserRole, name="userrole", values_callable=lambda e: [m.value for m in e]),
        default=UserRole.USER,
        nullable=False,
        index=True
    )
    company_name = Column(String(255), nullable=True)  # Required for employers only

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    jobs = relationship("Job", back_populates="employer", cascade="all, delete-orphan")
    applications = relationship("Application", back_populates="user", cascade="all, delete-orphan")
    revoked_tokens = relationship("RevokedToken", back_populates="user", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role={self.role.value})>"
