"""
Admin API endpoints for reporting and user management.

Every route requires an authenticated admin (get_admin_user).
"""

import logging
from typing import Annotated
from fastapi import APIRouter, Body, Depends, Path, status
from sqlalchemy.orm import Session

from jobboard.core.database import MAX_INTEGER, get_db
from jobboard.core.deps import get_admin_user
from jobboard.crud import application as application_crud
from jobboard.crud import dashboard as dashboard_crud
from jobboard.crud import job as job_crud
from jobboard.crud import user as user_crud
from jobboard.models.user import User, UserRole
from jobboard.schemas.admin import DashboardStats
from jobboard.schemas.application import AdminApplicationResponse
from jobboard.schemas.job import JobWithEmployerResponse
from jobboard.schemas.user import EmployerUserCreate, UserCreateVariant, UserResponse

router = APIRouter(prefix="/admin", tags=["Admin"])
logger = logging.getLogger(__name__)


@router.get("/dashboard", response_model=DashboardStats)
def get_dashboard(
    db: Session = Depends(get_db),
    admin_user: User = Depends(get_admin_user)
):
    """Board-wide statistics."""
    return dashboard_crud.get_stats(db)


@router.get("/users", response_model=list[UserResponse])
def list_all_users(
    db: Session = Depends(get_db),
    admin_user: User = Depends(get_admin_user)
):
    """List all users, newest first."""
    return user_crud.get_multi(db)


@router.post("/users", status_code=status.HTTP_201_CREATED, response_model=UserResponse)
def create_user(
    request: Annotated[UserCreateVariant, Body(discriminator="role")],
    db: Session = Depends(get_db),
    admin_user: User = Depends(get_admin_user)
):
    """
    Create a user with any role.

    Employers must be given a company_name; it is ignored for other roles.
    """
    new_user = user_crud.create(
        db,
        name=request.name,
        email=request.email,
        password=request.password,
        role=UserRole(request.role),
        company_name=request.company_name if isinstance(request, EmployerUserCreate) else None
    )
    logger.info(f"Admin {admin_user.id} created user {new_user.id} with role {new_user.role.value}")
    return new_user


@router.delete("/users/{user_id}")
def delete_user(
    user_id: int = Path(..., le=MAX_INTEGER),
    db: Session = Depends(get_db),
    admin_user: User = Depends(get_admin_user)
):
    """
    Delete a user and all associated data.

    Removes the user's applications and, for employers, their jobs and every
    application to those jobs.
    """
    user = user_crud.get_or_raise(db, user_id)
    user_crud.delete(db, user)
    logger.info(f"Admin {admin_user.id} deleted user {user_id}")
    return {"message": f"User {user_id} deleted successfully"}


@router.get("/jobs", response_model=list[JobWithEmployerResponse])
def list_all_jobs(
    db: Session = Depends(get_db),
    admin_user: User = Depends(get_admin_user)
):
    """List all jobs (active or not) with their employer, newest first."""
    return job_crud.get_multi(db)


@router.get("/applications", response_model=list[AdminApplicationResponse])
def list_all_applications(
    db: Session = Depends(get_db),
    admin_user: User = Depends(get_admin_user)
):
    """List all applications with applicant, job and employer, newest first."""
    return application_crud.get_multi(db)
