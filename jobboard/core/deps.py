"""
FastAPI dependencies for authentication and authorization.

These dependencies are used to protect endpoints and extract user context.
Missing or invalid credentials always raise Unauthenticated (401), including
on admin routes; role and ownership failures raise Forbidden (403).
"""

from fastapi import Depends, Path
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from typing import Optional

from jobboard.core.database import MAX_INTEGER, get_db
from jobboard.core.exceptions import Unauthenticated
from jobboard.core.policy import Action, authorize
from jobboard.core.security import JWTError, decode_token
from jobboard.crud import application as application_crud
from jobboard.crud import job as job_crud
from jobboard.crud import revoked_token as revoked_token_crud
from jobboard.crud import user as user_crud
from jobboard.models.application import Application
from jobboard.models.job import Job
from jobboard.models.user import User

# HTTP Bearer token scheme (Authorization: Bearer <token>).
# auto_error=False so a missing header is reported as 401 by us, not 403 by FastAPI.
security = HTTPBearer(auto_error=False)


async def get_token_payload(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> dict:
    """
    Decode and validate the bearer token.

    Raises:
        Unauthenticated: If the token is missing, malformed, expired or revoked
    """
    if credentials is None:
        raise Unauthenticated()

    try:
        payload = decode_token(credentials.credentials)
    except JWTError:
        raise Unauthenticated()

    if payload.get("sub") is None or payload.get("jti") is None:
        raise Unauthenticated()

    if revoked_token_crud.is_revoked(db, payload["jti"]):
        raise Unauthenticated()

    return payload


async def get_current_user(
    payload: dict = Depends(get_token_payload),
    db: Session = Depends(get_db)
) -> User:
    """
    Resolve the user the bearer token was issued to.

    Raises:
        Unauthenticated: If the token is invalid or the user no longer exists
    """
    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        raise Unauthenticated()

    user = user_crud.get_by_id(db, user_id)
    if user is None:
        raise Unauthenticated()

    return user


async def get_admin_user(user: User = Depends(get_current_user)) -> User:
    authorize(user, Action.ADMINISTER)
    return user


async def get_employer_user(user: User = Depends(get_current_user)) -> User:
    authorize(user, Action.POST_JOB)
    return user


async def get_applicant_user(user: User = Depends(get_current_user)) -> User:
    authorize(user, Action.APPLY)
    return user


async def get_managed_job(
    job_id: int = Path(..., le=MAX_INTEGER),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Job:
    """
    Load the job from the path and check the caller may modify it.

    Raises:
        NotFound: If the job does not exist
        Forbidden: If the caller neither owns the job nor is an admin
    """
    job = job_crud.get_or_raise(db, job_id)
    authorize(user, Action.MANAGE_JOB, job)
    return job


async def get_reviewable_job(
    job_id: int = Path(..., le=MAX_INTEGER),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Job:
    """Load the job from the path and check the caller may see its applications."""
    job = job_crud.get_or_raise(db, job_id)
    authorize(user, Action.REVIEW_APPLICATIONS, job)
    return job


async def get_reviewable_application(
    application_id: int = Path(..., le=MAX_INTEGER),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Application:
    """Load the application from the path and check the caller may decide on it."""
    application = application_crud.get_or_raise(db, application_id)
    authorize(user, Action.REVIEW_APPLICATIONS, application.job)
    return application
