"""
API endpoints for the application workflow.

Job seekers apply and follow their applications; the job's employer (or an
admin) lists the applications it received and accepts or rejects them.
"""

import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from jobboard.core.database import get_db
from jobboard.core.deps import (
    get_applicant_user,
    get_current_user,
    get_reviewable_application,
    get_reviewable_job,
)
from jobboard.crud import application as application_crud
from jobboard.crud import job as job_crud
from jobboard.models.application import Application, ApplicationStatus
from jobboard.models.job import Job
from jobboard.models.user import User
from jobboard.schemas.application import (
    ApplicationCreateRequest,
    ApplicationResponse,
    ApplicationStatusUpdateRequest,
    ApplicationWithApplicantResponse,
    ApplicationWithJobResponse,
)

router = APIRouter(tags=["Applications"])
logger = logging.getLogger(__name__)


@router.post("/applications", status_code=status.HTTP_201_CREATED, response_model=ApplicationResponse)
def apply_for_job(
    request: ApplicationCreateRequest,
    applicant: User = Depends(get_applicant_user),
    db: Session = Depends(get_db)
):
    """
    Apply for a job.

    Raises:
        403: Caller is not a job seeker
        404: Job does not exist
        422: Caller already applied for this job
    """
    job = job_crud.get_or_raise(db, request.job_id)

    application = application_crud.create(
        db,
        user_id=applicant.id,
        job_id=job.id,
        cover_letter=request.cover_letter,
        resume=request.resume
    )
    logger.info(f"User {applicant.id} applied for job {job.id} (application {application.id})")
    return application


@router.get("/my-applications", response_model=list[ApplicationWithJobResponse])
def list_my_applications(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """The caller's applications, newest first."""
    return application_crud.get_by_user(db, current_user.id)


@router.get("/jobs/{job_id}/applications", response_model=list[ApplicationWithApplicantResponse])
def list_job_applications(
    job: Job = Depends(get_reviewable_job),
    db: Session = Depends(get_db)
):
    """Applications received for a job. Only its employer or an admin may see them."""
    return application_crud.get_by_job(db, job.id)


@router.put("/applications/{application_id}/status", response_model=ApplicationResponse)
def update_application_status(
    request: ApplicationStatusUpdateRequest,
    application: Application = Depends(get_reviewable_application),
    db: Session = Depends(get_db)
):
    """
    Accept or reject a pending application.

    Raises:
        403: Caller neither owns the job nor is an admin
        404: Application does not exist
        422: Invalid status, or the application was already accepted/rejected
    """
    return application_crud.update_status(db, application, ApplicationStatus(request.status))
