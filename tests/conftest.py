"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown
- FastAPI test client
- Users of every role, job postings and auth headers
"""

import os

# Point the application at SQLite before any jobboard module reads settings
os.environ.setdefault("SQLALCHEMY_DATABASE_URI", "sqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jobboard.core import security
from jobboard.core.database import Base, get_db
from jobboard.core.security import create_access_token, get_password_hash
from jobboard.models.job import Job
from jobboard.models.user import User, UserRole
from main import app

# Minimum bcrypt cost keeps the suite fast
security.pwd_context.update(bcrypt__rounds=4)

DEFAULT_PASSWORD = "Password123"

# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    """
    Create a fresh database for each test.
    Tables are dropped after the test completes.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """
    FastAPI test client with overridden database dependency.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session):
    """Factory creating a persisted user of any role."""
    def _make_user(email, role=UserRole.USER, name=None, company_name=None, password=DEFAULT_PASSWORD):
        user = User(
            name=name or email.split("@")[0].title(),
            email=email,
            hashed_password=get_password_hash(password),
            role=role,
            company_name=company_name if role == UserRole.EMPLOYER else None,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def admin(make_user):
    return make_user("admin@example.com", role=UserRole.ADMIN, name="Admin")


@pytest.fixture
def employer(make_user):
    return make_user("employer@example.com", role=UserRole.EMPLOYER, company_name="Acme Corp")


@pytest.fixture
def other_employer(make_user):
    return make_user("hr@globex.com", role=UserRole.EMPLOYER, company_name="Globex")


@pytest.fixture
def applicant(make_user):
    return make_user("alice@example.com", role=UserRole.USER, name="Alice")


@pytest.fixture
def other_applicant(make_user):
    return make_user("bob@example.com", role=UserRole.USER, name="Bob")


@pytest.fixture
def make_job(db_session):
    """Factory creating a persisted job posting for an employer."""
    def _make_job(employer, title="Backend Engineer", is_active=True, **fields):
        job = Job(
            title=title,
            company=fields.pop("company", employer.company_name or "Acme Corp"),
            location=fields.pop("location", "Berlin"),
            description=fields.pop("description", "Build and run our APIs."),
            employer_id=employer.id,
            is_active=is_active,
            **fields,
        )
        db_session.add(job)
        db_session.commit()
        db_session.refresh(job)
        return job

    return _make_job


@pytest.fixture
def job(make_job, employer):
    return make_job(employer)


@pytest.fixture
def auth_headers():
    """Build bearer headers for a user, bypassing the login endpoint."""
    def _auth_headers(user):
        token = create_access_token(data={"sub": str(user.id), "role": user.role.value})
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers


@pytest.fixture
def sample_job_data():
    """Sample job data for testing"""
    return {
        "title": "Senior Python Engineer",
        "company": "Acme Corp",
        "location": "Remote (EU)",
        "description": "We are looking for a Senior Python Engineer with FastAPI and PostgreSQL experience.",
        "requirements": "5+ years of Python",
        "salary": "80k-100k EUR",
        "employment_type": "full-time",
        "category": "Engineering",
    }
