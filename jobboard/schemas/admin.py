from pydantic import BaseModel


class DashboardStats(BaseModel):
    """Board-wide counts, computed at request time."""
    total_users: int
    total_employers: int
    total_jobs: int
    total_applications: int
    active_jobs: int
    pending_applications: int
