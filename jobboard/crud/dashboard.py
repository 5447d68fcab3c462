"""
Admin reporting queries.
"""

from sqlalchemy.orm import Session

from jobboard.crud import application as application_crud
from jobboard.crud import job as job_crud
from jobboard.crud import user as user_crud
from jobboard.models.application import ApplicationStatus
from jobboard.models.user import UserRole


def get_stats(db: Session) -> dict:
    """Board-wide counts. Computed on every call, nothing is cached."""
    return {
        "total_users": user_crud.count(db),
        "total_employers": user_crud.count(db, role=UserRole.EMPLOYER),
        "total_jobs": job_crud.count(db),
        "total_applications": application_crud.count(db),
        "active_jobs": job_crud.count(db, active_only=True),
        "pending_applications": application_crud.count(db, status=ApplicationStatus.PENDING),
    }
