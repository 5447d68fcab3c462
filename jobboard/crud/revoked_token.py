"""
CRUD operations for revoked access tokens (logout).

A revocation only matters until the token's own exp claim passes, so
entries past expires_at are purged whenever a new token is revoked.
"""

import logging
from datetime import datetime, timezone
from typing import Optional
from sqlalchemy.orm import Session

from jobboard.models.revoked_token import RevokedToken

logger = logging.getLogger(__name__)


def purge_expired(db: Session, now: Optional[datetime] = None) -> int:
    """Delete revocations whose token has expired. Does not commit."""
    now = now or datetime.now(timezone.utc)
    purged = (
        db.query(RevokedToken)
        .filter(RevokedToken.expires_at.isnot(None), RevokedToken.expires_at < now)
        .delete(synchronize_session=False)
    )
    if purged:
        logger.info(f"Purged {purged} expired token revocations")
    return purged


def revoke(db: Session, jti: str, user_id: int, expires_at: Optional[datetime] = None) -> RevokedToken:
    """Record a token as revoked. Revoking an already revoked token is a no-op."""
    existing = db.query(RevokedToken).filter(RevokedToken.jti == jti).first()
    if existing:
        return existing

    purge_expired(db)

    token = RevokedToken(jti=jti, user_id=user_id, expires_at=expires_at)
    db.add(token)
    db.commit()
    db.refresh(token)
    return token


def is_revoked(db: Session, jti: str) -> bool:
    return db.query(RevokedToken.id).filter(RevokedToken.jti == jti).first() is not None
