"""
CRUD operations for Application model.

The (user_id, job_id) unique constraint is the source of truth for
"already applied": a constraint violation on insert is reported as a
Conflict instead of relying on a check-then-insert that could race.
"""

import logging
from typing import List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from jobboard.core.exceptions import Conflict, NotFound
from jobboard.models.application import Application, ApplicationStatus
from jobboard.models.job import Job

logger = logging.getLogger(__name__)

ALREADY_APPLIED_MESSAGE = "You have already applied for this job"


def _newest_first(query):
    return query.order_by(Application.created_at.desc(), Application.id.desc())


def create(
    db: Session,
    user_id: int,
    job_id: int,
    cover_letter: str,
    resume: Optional[str] = None
) -> Application:
    """
    Submit an application with status=pending.

    Raises:
        Conflict: If the user already applied for this job
    """
    db_application = Application(
        user_id=user_id,
        job_id=job_id,
        cover_letter=cover_letter,
        resume=resume,
        status=ApplicationStatus.PENDING
    )
    db.add(db_application)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict(ALREADY_APPLIED_MESSAGE)
    db.refresh(db_application)

    return db_application


def get_by_id(db: Session, application_id: int) -> Optional[Application]:
    return (
        db.query(Application)
        .options(joinedload(Application.job))
        .filter(Application.id == application_id)
        .first()
    )


def get_or_raise(db: Session, application_id: int) -> Application:
    """
    Retrieve an application by ID.

    Raises:
        NotFound: If no such application exists
    """
    application = get_by_id(db, application_id)
    if application is None:
        raise NotFound("Application not found")
    return application


def get_by_user(db: Session, user_id: int) -> List[Application]:
    """An applicant's applications with job and job employer loaded, newest first."""
    query = (
        db.query(Application)
        .options(joinedload(Application.job).joinedload(Job.employer))
        .filter(Application.user_id == user_id)
    )
    return _newest_first(query).all()


def get_by_job(db: Session, job_id: int) -> List[Application]:
    """Applications received for a job with the applicant loaded, newest first."""
    query = (
        db.query(Application)
        .options(joinedload(Application.user))
        .filter(Application.job_id == job_id)
    )
    return _newest_first(query).all()


def get_multi(db: Session) -> List[Application]:
    """Every application with applicant, job and job employer loaded, newest first."""
    query = db.query(Application).options(
        joinedload(Application.user),
        joinedload(Application.job).joinedload(Job.employer),
    )
    return _newest_first(query).all()


def update_status(db: Session, application: Application, new_status: ApplicationStatus) -> Application:
    """
    Record a review decision.

    Only pending applications can be decided; accepted and rejected are terminal.

    Raises:
        Conflict: If the application has already been decided, including by
            a concurrent request that committed after this one read it
    """
    current = ApplicationStatus(application.status)
    if not current.can_transition_to(new_status):
        raise Conflict(f"Application has already been {current.value}")

    # Only matches while the row still has the status read above
    updated = (
        db.query(Application)
        .filter(Application.id == application.id, Application.status == current)
        .update({Application.status: new_status}, synchronize_session=False)
    )
    if not updated:
        db.rollback()
        db.refresh(application)
        raise Conflict(f"Application has already been {ApplicationStatus(application.status).value}")

    db.commit()
    db.refresh(application)

    logger.info(f"Application {application.id} moved from {current.value} to {new_status.value}")
    return application


def count(db: Session, status: Optional[ApplicationStatus] = None) -> int:
    query = db.query(Application)
    if status is not None:
        query = query.filter(Application.status == status)
    return query.count()
