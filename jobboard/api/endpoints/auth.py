"""
Authentication endpoints.

- POST /register: Create a job seeker account (role=user)
- POST /login: Authenticate and receive a bearer token
- POST /logout: Revoke the current bearer token
- GET /user: Current user profile
"""

import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from jobboard.core.database import get_db
from jobboard.core.deps import get_current_user, get_token_payload
from jobboard.core.exceptions import Unauthenticated
from jobboard.core.security import create_access_token
from jobboard.crud import revoked_token as revoked_token_crud
from jobboard.crud import user as user_crud
from jobboard.models.user import User, UserRole
from jobboard.schemas.user import UserRegisterRequest, UserLoginRequest, TokenResponse, UserResponse

router = APIRouter(tags=["Authentication"])
logger = logging.getLogger(__name__)


def _issue_token(user: User) -> TokenResponse:
    access_token = create_access_token(data={"sub": str(user.id), "role": user.role.value})
    return TokenResponse(
        access_token=access_token,
        token_type="bearer",
        user=UserResponse.model_validate(user)
    )


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=TokenResponse)
def register(
    request: UserRegisterRequest,
    db: Session = Depends(get_db)
):
    """
    Register a new job seeker account.

    Employers and admins are provisioned by an admin via POST /admin/users.
    Returns a bearer token for immediate login.
    """
    new_user = user_crud.create(
        db,
        name=request.name,
        email=request.email,
        password=request.password,
        role=UserRole.USER
    )
    logger.info(f"New user registered: {new_user.email}")
    return _issue_token(new_user)


@router.post("/login", response_model=TokenResponse)
def login(
    request: UserLoginRequest,
    db: Session = Depends(get_db)
):
    """Authenticate with email and password."""
    user = user_crud.authenticate(db, request.email, request.password)
    if user is None:
        raise Unauthenticated("Invalid credentials")

    logger.info(f"User logged in: {user.email} (role: {user.role.value})")
    return _issue_token(user)


@router.post("/logout")
def logout(
    payload: dict = Depends(get_token_payload),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Revoke the bearer token used for this request."""
    expires_at = None
    if payload.get("exp") is not None:
        expires_at = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)

    revoked_token_crud.revoke(db, jti=payload["jti"], user_id=current_user.id, expires_at=expires_at)
    logger.info(f"User logged out: {current_user.email}")
    return {"message": "Logged out successfully"}


@router.get("/user", response_model=UserResponse)
def get_current_user_profile(
    current_user: User = Depends(get_current_user)
):
    """Get the authenticated user's profile."""
    return current_user
