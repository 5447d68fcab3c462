"""
Database models package.
"""

from jobboard.models.user import User, UserRole
from jobboard.models.job import Job
from jobboard.models.application import Application, ApplicationStatus
from jobboard.models.revoked_token import RevokedToken

__all__ = ["User", "UserRole", "Job", "Application", "ApplicationStatus", "RevokedToken"]
