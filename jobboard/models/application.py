"""
Application database model.

Links an applicant (role=user) to a job posting. A user may apply to a
given job at most once, enforced by the (user_id, job_id) unique constraint.
"""

import enum
from sqlalchemy import Column, Integer, String, Text, DateTime, Enum, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import relationship
from jobboard.core.database import Base


class ApplicationStatus(str, enum.Enum):
    """
    Application review lifecycle:

    PENDING -> ACCEPTED
       ↓
    REJECTED

    ACCEPTED and REJECTED are terminal.
    """
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self in (ApplicationStatus.ACCEPTED, ApplicationStatus.REJECTED)

    def can_transition_to(self, new_status: "ApplicationStatus") -> bool:
        return new_status in _TRANSITIONS[self]


_TRANSITIONS = {
    ApplicationStatus.PENDING: {ApplicationStatus.ACCEPTED, ApplicationStatus.REJECTED},
    ApplicationStatus.ACCEPTED: set(),
    ApplicationStatus.REJECTED: set(),
}


class Application(Base):
    __tablename__ = "applications"
    __table_args__ = (
        UniqueConstraint("user_id", "job_id", name="uq_applications_user_id_job_id"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    job_id = Column(Integer, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)

    cover_letter = Column(Text, nullable=False)
    resume = Column(String, nullable=True)  # Resume link or inline text supplied by the applicant

    status = Column(
        Enum(ApplicationStatus, name="applicationstatus", values_callable=lambda e: [m.value for m in e]),
        default=ApplicationStatus.PENDING,
        nullable=False,
        index=True
    )

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    user = relationship("User", back_populates="applications")
    job = relationship("Job", back_populates="applications")

    def __repr__(self):
        return f"<Application(id={self.id}, user_id={self.user_id}, job_id={self.job_id}, status={self.status.value})>"
