"""
CRUD operations for User model.
"""

import logging
from typing import List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobboard.core.exceptions import Conflict, NotFound
from jobboard.core.security import get_password_hash, verify_password
from jobboard.models.user import User, UserRole

logger = logging.getLogger(__name__)

EMAIL_TAKEN_MESSAGE = "The email has already been taken."


def get_by_id(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_or_raise(db: Session, user_id: int) -> User:
    """
    Retrieve a user by ID.

    Raises:
        NotFound: If no such user exists
    """
    user = get_by_id(db, user_id)
    if user is None:
        raise NotFound("User not found")
    return user


def get_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def create(
    db: Session,
    *,
    name: str,
    email: str,
    password: str,
    role: UserRole = UserRole.USER,
    company_name: Optional[str] = None
) -> User:
    """
    Create a user with a bcrypt-hashed password.

    company_name is only stored for employers.

    Raises:
        Conflict: If the email is already registered
    """
    if get_by_email(db, email) is not None:
        raise Conflict(EMAIL_TAKEN_MESSAGE)

    db_user = User(
        name=name,
        email=email,
        hashed_password=get_password_hash(password),
        role=role,
        company_name=company_name if role == UserRole.EMPLOYER else None,
    )
    db.add(db_user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race against a concurrent registration with the same email
        db.rollback()
        raise Conflict(EMAIL_TAKEN_MESSAGE)
    db.refresh(db_user)

    logger.info(f"Created user {db_user.id} ({db_user.email}) with role {db_user.role.value}")
    return db_user


def authenticate(db: Session, email: str, password: str) -> Optional[User]:
    """Return the user if the email/password pair is valid, None otherwise."""
    user = get_by_email(db, email)
    if user is None or not verify_password(password, user.hashed_password):
        return None
    return user


def get_multi(db: Session) -> List[User]:
    """All users, newest first."""
    return db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()


def delete(db: Session, user: User) -> None:
    """
    Hard-delete a user.

    Cascades to the user's applications, revoked tokens and, for employers,
    their jobs together with those jobs' applications.
    """
    db.delete(user)
    db.commit()


def count(db: Session, role: Optional[UserRole] = None) -> int:
    query = db.query(User)
    if role is not None:
        query = query.filter(User.role == role)
    return query.count()
