"""
CRUD operations (Create, Read, Update, Delete) for database models.

This layer provides a clean separation between API routes and database operations,
following the Repository pattern.
"""

from jobboard.crud import user, job, application, revoked_token, dashboard

__all__ = ["user", "job", "application", "revoked_token", "dashboard"]
