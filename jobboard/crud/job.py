"""
CRUD operations for Job model.

Implements the Repository pattern to encapsulate all database operations
for job postings, providing a clean interface for the API layer.
"""

from typing import List, Optional, Tuple
from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload

from jobboard.core.exceptions import NotFound
from jobboard.models.application import Application
from jobboard.models.job import Job
from jobboard.schemas.job import JobCreateRequest, JobUpdateRequest


def _newest_first(query):
    # created_at has one-second resolution on some backends; id breaks ties
    return query.order_by(Job.created_at.desc(), Job.id.desc())


def create(db: Session, job_data: JobCreateRequest, employer_id: int) -> Job:
    """
    Create a new job posting owned by employer_id.

    New postings are always active, whatever the request says.
    """
    db_job = Job(
        **job_data.model_dump(),
        employer_id=employer_id,
        is_active=True
    )

    db.add(db_job)
    db.commit()
    db.refresh(db_job)

    return db_job


def get_by_id(db: Session, job_id: int) -> Optional[Job]:
    """Retrieve a job (with its employer loaded) by ID, or None."""
    return (
        db.query(Job)
        .options(joinedload(Job.employer))
        .filter(Job.id == job_id)
        .first()
    )


def get_or_raise(db: Session, job_id: int) -> Job:
    """
    Retrieve a job by ID.

    Raises:
        NotFound: If no such job exists
    """
    job = get_by_id(db, job_id)
    if job is None:
        raise NotFound("Job not found")
    return job


def search_filter(term: str):
    """Substring match (case-insensitive) on title, company, location or description."""
    return or_(
        Job.title.icontains(term, autoescape=True),
        Job.company.icontains(term, autoescape=True),
        Job.location.icontains(term, autoescape=True),
        Job.description.icontains(term, autoescape=True),
    )


def get_active_page(
    db: Session,
    page: int = 1,
    per_page: int = 10,
    search: Optional[str] = None
) -> Tuple[List[Job], int]:
    """
    Retrieve one page of active jobs, newest first.

    Args:
        db: Database session
        page: 1-based page number
        per_page: Page size
        search: Optional search term matched against title, company,
            location and description

    Returns:
        (jobs on the requested page, total number of matching jobs)
    """
    query = db.query(Job).filter(Job.is_active.is_(True))

    if search:
        query = query.filter(search_filter(search))

    total = query.count()
    jobs = (
        _newest_first(query.options(joinedload(Job.employer)))
        .offset((page - 1) * per_page)
        .limit(per_page)
        .all()
    )
    return jobs, total


def get_multi(db: Session) -> List[Job]:
    """All jobs (active or not) with their employer, newest first."""
    return _newest_first(db.query(Job).options(joinedload(Job.employer))).all()


def get_by_employer_with_counts(db: Session, employer_id: int) -> List[Tuple[Job, int]]:
    """
    Retrieve an employer's jobs together with the number of applications each received.

    Returns:
        List of (Job, applications_count) tuples, newest job first
    """
    query = (
        db.query(Job, func.count(Application.id))
        .outerjoin(Application, Application.job_id == Job.id)
        .filter(Job.employer_id == employer_id)
        .group_by(Job.id)
    )
    return [(job, applications_count) for job, applications_count in _newest_first(query).all()]


def update(db: Session, job: Job, job_data: JobUpdateRequest) -> Job:
    """
    Apply an update to a job.

    Every required field is replaced; optional fields are only touched when
    present in the request. is_active may be toggled but never set to null.
    """
    changes = job_data.model_dump(exclude_unset=True)
    if changes.get("is_active") is None:
        changes.pop("is_active", None)

    for field, value in changes.items():
        setattr(job, field, value)

    db.commit()
    db.refresh(job)

    return job


def delete(db: Session, job: Job) -> None:
    """Hard-delete a job and (by cascade) all of its applications."""
    db.delete(job)
    db.commit()


def count(db: Session, active_only: bool = False) -> int:
    query = db.query(Job)
    if active_only:
        query = query.filter(Job.is_active.is_(True))
    return query.count()
