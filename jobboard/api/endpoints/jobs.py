import logging
from typing import Optional
from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from jobboard.core.config import settings
from jobboard.core.database import MAX_INTEGER, get_db
from jobboard.core.deps import get_employer_user, get_managed_job
from jobboard.crud import job as job_crud
from jobboard.models.job import Job
from jobboard.models.user import User
from jobboard.schemas.job import (
    EmployerJobResponse,
    JobCreateRequest,
    JobPage,
    JobResponse,
    JobUpdateRequest,
    JobWithEmployerResponse,
)

router = APIRouter(tags=["Jobs"])
logger = logging.getLogger(__name__)


@router.get("/jobs", response_model=JobPage)
def list_jobs(
    search: Optional[str] = None,
    page: int = Query(1, ge=1, le=MAX_INTEGER),
    db: Session = Depends(get_db)
):
    """
    List active jobs, newest first, JOBS_PAGE_SIZE (10) per page.

    Args:
        search: Optional term matched against title, company, location and description
        page: 1-based page number
    """
    per_page = settings.JOBS_PAGE_SIZE
    search = search.strip() if search else None
    jobs, total = job_crud.get_active_page(db, page=page, per_page=per_page, search=search or None)

    return JobPage(
        data=[JobWithEmployerResponse.model_validate(job) for job in jobs],
        current_page=page,
        per_page=per_page,
        total=total,
        last_page=max(1, -(-total // per_page))
    )


@router.get("/jobs/{job_id}", response_model=JobWithEmployerResponse)
def get_job(job_id: int = Path(..., le=MAX_INTEGER), db: Session = Depends(get_db)):
    """Retrieve a job and its employer by ID."""
    return job_crud.get_or_raise(db, job_id)


@router.post("/jobs", status_code=status.HTTP_201_CREATED, response_model=JobResponse)
def create_job(
    request: JobCreateRequest,
    employer: User = Depends(get_employer_user),
    db: Session = Depends(get_db)
):
    """
    Create a job posting owned by the calling employer.

    The posting is always created active.
    """
    new_job = job_crud.create(db, request, employer_id=employer.id)
    logger.info(f"Created job {new_job.id}: {new_job.title} (employer {employer.id})")
    return new_job


@router.put("/jobs/{job_id}", response_model=JobResponse)
def update_job(
    request: JobUpdateRequest,
    job: Job = Depends(get_managed_job),
    db: Session = Depends(get_db)
):
    """Update a job. Only its employer or an admin may do this."""
    updated = job_crud.update(db, job, request)
    logger.info(f"Updated job {updated.id}")
    return updated


@router.delete("/jobs/{job_id}")
def delete_job(
    job: Job = Depends(get_managed_job),
    db: Session = Depends(get_db)
):
    """Delete a job and all of its applications. Only its employer or an admin may do this."""
    job_id = job.id
    job_crud.delete(db, job)
    logger.info(f"Deleted job {job_id}")
    return {"message": "Job deleted successfully"}


@router.get("/employer/jobs", response_model=list[EmployerJobResponse])
def list_employer_jobs(
    employer: User = Depends(get_employer_user),
    db: Session = Depends(get_db)
):
    """List the calling employer's jobs (active or not) with application counts."""
    return [
        EmployerJobResponse.model_validate(job).model_copy(update={"applications_count": applications_count})
        for job, applications_count in job_crud.get_by_employer_with_counts(db, employer.id)
    ]
