from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, func, true
from sqlalchemy.orm import relationship
from jobboard.core.database import Base


class Job(Base):
    """
    A job posting owned by an employer.

    Only active postings (is_active=True) are listed publicly; inactive ones
    stay visible to their owner, admins and direct lookups by id.
    """
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False, index=True)
    company = Column(String(255), nullable=False)
    location = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    requirements = Column(Text, nullable=True)
    salary = Column(String(100), nullable=True)
    employment_type = Column(String(100), nullable=True)
    category = Column(String(100), nullable=True)

    employer_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    is_active = Column(Boolean, default=True, server_default=true(), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    employer = relationship("User", back_populates="jobs")
    applications = relationship("Application", back_populates="job", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Job(id={self.id}, title='{self.title}', employer_id={self.employer_id}, is_active={self.is_active})>"
