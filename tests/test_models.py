"""
Tests for the data model: constraints, cascades, status transitions,
role-specific user schemas and the CRUD layer called directly.
"""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import TypeAdapter, ValidationError
from sqlalchemy.orm.attributes import set_committed_value

from create_admin import create_admin
from jobboard.core.exceptions import Conflict, NotFound
from jobboard.crud import application as application_crud
from jobboard.crud import dashboard as dashboard_crud
from jobboard.crud import job as job_crud
from jobboard.crud import revoked_token as revoked_token_crud
from jobboard.crud import user as user_crud
from jobboard.models.application import Application, ApplicationStatus
from jobboard.models.job import Job
from jobboard.models.user import User, UserRole
from jobboard.schemas.user import (
    AdminUserCreate,
    ApplicantUserCreate,
    EmployerUserCreate,
    UserCreateRequest,
)


class TestApplicationStatusTransitions:

    def test_pending_can_be_decided(self):
        assert ApplicationStatus.PENDING.can_transition_to(ApplicationStatus.ACCEPTED)
        assert ApplicationStatus.PENDING.can_transition_to(ApplicationStatus.REJECTED)

    @pytest.mark.parametrize("terminal", [ApplicationStatus.ACCEPTED, ApplicationStatus.REJECTED])
    def test_terminal_states(self, terminal):
        assert terminal.is_terminal
        assert not any(terminal.can_transition_to(status) for status in ApplicationStatus)

    def test_pending_is_not_terminal(self):
        assert not ApplicationStatus.PENDING.is_terminal

    def test_update_status_rejects_terminal(self, db_session, job, applicant):
        application = application_crud.create(db_session, applicant.id, job.id, "Hi")
        application_crud.update_status(db_session, application, ApplicationStatus.REJECTED)

        with pytest.raises(Conflict):
            application_crud.update_status(db_session, application, ApplicationStatus.ACCEPTED)

    def test_decision_committed_after_read_wins(self, db_session, job, applicant):
        application = application_crud.create(db_session, applicant.id, job.id, "Hi")
        db_session.query(Application).filter(Application.id == application.id).update(
            {Application.status: ApplicationStatus.ACCEPTED}, synchronize_session=False
        )
        db_session.commit()
        db_session.refresh(application)
        # This caller still holds the application as it was before the accept
        set_committed_value(application, "status", ApplicationStatus.PENDING)

        with pytest.raises(Conflict) as exc_info:
            application_crud.update_status(db_session, application, ApplicationStatus.REJECTED)

        assert exc_info.value.message == "Application has already been accepted"
        assert application.status == ApplicationStatus.ACCEPTED


class TestUniqueApplication:

    def test_duplicate_insert_raises_conflict(self, db_session, job, applicant):
        application_crud.create(db_session, applicant.id, job.id, "First")

        with pytest.raises(Conflict):
            application_crud.create(db_session, applicant.id, job.id, "Second")

        assert db_session.query(Application).count() == 1


class TestCascades:

    def test_deleting_job_deletes_applications(self, db_session, job, applicant, other_applicant):
        application_crud.create(db_session, applicant.id, job.id, "Hi")
        application_crud.create(db_session, other_applicant.id, job.id, "Hello")

        job_crud.delete(db_session, job)

        assert db_session.query(Application).count() == 0

    def test_deleting_employer_deletes_jobs_and_their_applications(
        self, db_session, employer, make_job, applicant
    ):
        first = make_job(employer, title="First")
        second = make_job(employer, title="Second")
        application_crud.create(db_session, applicant.id, first.id, "Hi")
        application_crud.create(db_session, applicant.id, second.id, "Hi")

        user_crud.delete(db_session, employer)

        assert db_session.query(Job).count() == 0
        assert db_session.query(Application).count() == 0
        assert db_session.get(User, applicant.id) is not None

    def test_deleting_applicant_keeps_jobs(self, db_session, job, applicant):
        application_crud.create(db_session, applicant.id, job.id, "Hi")

        user_crud.delete(db_session, applicant)

        assert db_session.query(Application).count() == 0
        assert db_session.query(Job).count() == 1


class TestDashboardStats:

    def test_empty_database(self, db_session):
        assert dashboard_crud.get_stats(db_session) == {
            "total_users": 0,
            "total_employers": 0,
            "total_jobs": 0,
            "total_applications": 0,
            "active_jobs": 0,
            "pending_applications": 0,
        }


class TestLookups:

    def test_missing_rows_raise_not_found(self, db_session):
        with pytest.raises(NotFound):
            job_crud.get_or_raise(db_session, 1)
        with pytest.raises(NotFound):
            application_crud.get_or_raise(db_session, 1)
        with pytest.raises(NotFound):
            user_crud.get_or_raise(db_session, 1)

    def test_authenticate(self, db_session, applicant):
        assert user_crud.authenticate(db_session, applicant.email, "Password123").id == applicant.id
        assert user_crud.authenticate(db_session, applicant.email, "nope") is None
        assert user_crud.authenticate(db_session, "ghost@example.com", "Password123") is None


class TestUserCreateSchema:
    """The admin user-creation body is a union discriminated on role"""

    adapter = TypeAdapter(UserCreateRequest)
    base = {"name": "Someone", "email": "someone@example.com", "password": "Password123"}

    def test_variants_by_role(self):
        assert isinstance(self.adapter.validate_python({**self.base, "role": "admin"}), AdminUserCreate)
        assert isinstance(self.adapter.validate_python({**self.base, "role": "user"}), ApplicantUserCreate)
        employer = self.adapter.validate_python({**self.base, "role": "employer", "company_name": "Acme"})
        assert isinstance(employer, EmployerUserCreate)
        assert employer.company_name == "Acme"

    def test_employer_without_company_name(self):
        with pytest.raises(ValidationError):
            self.adapter.validate_python({**self.base, "role": "employer"})

    def test_non_employer_carries_no_company_name(self):
        applicant = self.adapter.validate_python({**self.base, "role": "user", "company_name": "Acme"})
        assert not hasattr(applicant, "company_name")

    def test_missing_role(self):
        with pytest.raises(ValidationError):
            self.adapter.validate_python(self.base)

    def test_blank_name(self):
        with pytest.raises(ValidationError):
            self.adapter.validate_python({**self.base, "name": "   ", "role": "admin"})


class TestCreateAdminScript:

    def test_creates_admin(self, db_session):
        admin = create_admin(db_session, "Root", "root@example.com", "Password123")

        assert admin.role == UserRole.ADMIN
        assert user_crud.authenticate(db_session, "root@example.com", "Password123") is not None

    def test_duplicate_email(self, db_session, admin):
        with pytest.raises(Conflict):
            create_admin(db_session, "Again", admin.email, "Password123")


class TestRevokedTokens:

    def test_revoking_purges_expired_entries(self, db_session, applicant):
        now = datetime.now(timezone.utc)
        revoked_token_crud.revoke(db_session, "expired", applicant.id, expires_at=now - timedelta(hours=1))
        revoked_token_crud.revoke(db_session, "live", applicant.id, expires_at=now + timedelta(hours=1))

        assert not revoked_token_crud.is_revoked(db_session, "expired")
        assert revoked_token_crud.is_revoked(db_session, "live")

    def test_entries_without_expiry_are_kept(self, db_session, applicant):
        revoked_token_crud.revoke(db_session, "forever", applicant.id)
        revoked_token_crud.revoke(db_session, "other", applicant.id)

        assert revoked_token_crud.is_revoked(db_session, "forever")

    def test_revoking_twice_is_a_no_op(self, db_session, applicant):
        first = revoked_token_crud.revoke(db_session, "same", applicant.id)
        second = revoked_token_crud.revoke(db_session, "same", applicant.id)

        assert first.id == second.id
