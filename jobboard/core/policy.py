"""
Role and ownership rules for every privileged operation.

authorize() is a plain function over (caller, action, job) so it can be
exercised without HTTP. The FastAPI dependencies in jobboard.core.deps
compose it in front of the endpoints.

| Action              | Allowed for                            |
|---------------------|----------------------------------------|
| ADMINISTER          | admins                                 |
| POST_JOB            | employers                              |
| MANAGE_JOB          | the job's employer, admins             |
| APPLY               | job seekers (role=user)                |
| REVIEW_APPLICATIONS | the job's employer, admins             |
"""

import enum
import logging
from typing import Optional

from jobboard.core.exceptions import Forbidden
from jobboard.models.job import Job
from jobboard.models.user import User, UserRole

logger = logging.getLogger(__name__)


class Action(str, enum.Enum):
    ADMINISTER = "administer"
    POST_JOB = "post_job"
    MANAGE_JOB = "manage_job"
    APPLY = "apply"
    REVIEW_APPLICATIONS = "review_applications"


_ROLE_RULES = {
    Action.ADMINISTER: UserRole.ADMIN,
    Action.POST_JOB: UserRole.EMPLOYER,
    Action.APPLY: UserRole.USER,
}

_OWNERSHIP_ACTIONS = {Action.MANAGE_JOB, Action.REVIEW_APPLICATIONS}

_DENIED_MESSAGES = {
    Action.APPLY: "Only regular users can apply for jobs",
}


def is_allowed(caller: User, action: Action, job: Optional[Job] = None) -> bool:
    """Return True if caller may perform action (on job, for ownership actions)."""
    if action in _ROLE_RULES:
        return caller.role == _ROLE_RULES[action]

    if action in _OWNERSHIP_ACTIONS:
        if job is None:
            raise ValueError(f"{action.value} requires the job being acted on")
        return caller.role == UserRole.ADMIN or caller.id == job.employer_id

    raise ValueError(f"Unknown action: {action}")


def authorize(caller: User, action: Action, job: Optional[Job] = None) -> None:
    """
    Enforce the rule for action.

    Raises:
        Forbidden: If the caller's role or ownership does not allow the action
    """
    if not is_allowed(caller, action, job):
        logger.warning(
            f"Denied {action.value} for user {caller.id} (role={caller.role.value})"
            + (f" on job {job.id}" if job is not None else "")
        )
        raise Forbidden(_DENIED_MESSAGES.get(action, "Unauthorized"))
