"""
Unit tests for authentication endpoints.

Tests:
- Registration
- Login
- Logout / token revocation
- Current user profile
"""

from datetime import timedelta

from jobboard.core.security import create_access_token, verify_password
from jobboard.models.user import User, UserRole


class TestUserRegistration:
    """Test user registration endpoint"""

    def test_register_success(self, client, db_session):
        """Registration creates a job seeker and returns a token"""
        response = client.post(
            "/api/register",
            json={"name": "Test User", "email": "test@example.com", "password": "SecurePass123"}
        )

        assert response.status_code == 201
        data = response.json()
        assert data["token_type"] == "bearer"
        assert data["access_token"]
        assert data["user"]["email"] == "test@example.com"
        assert data["user"]["role"] == "user"

        user = db_session.query(User).filter(User.email == "test@example.com").one()
        assert user.role == UserRole.USER
        assert user.hashed_password != "SecurePass123"
        assert verify_password("SecurePass123", user.hashed_password)

    def test_register_cannot_choose_role(self, client):
        """Role in the body is ignored; registration always yields role=user"""
        response = client.post(
            "/api/register",
            json={"name": "Sneaky", "email": "sneaky@example.com", "password": "SecurePass123", "role": "admin"}
        )

        assert response.status_code == 201
        assert response.json()["user"]["role"] == "user"

    def test_register_duplicate_email(self, client, applicant):
        """Registration with a taken email fails"""
        response = client.post(
            "/api/register",
            json={"name": "Alice Again", "email": applicant.email, "password": "DifferentPass123"}
        )

        assert response.status_code == 422
        assert "already been taken" in response.json()["message"]

    def test_register_short_password(self, client):
        response = client.post(
            "/api/register",
            json={"name": "Test", "email": "test@example.com", "password": "short"}
        )

        assert response.status_code == 422
        assert any(error["field"] == "password" for error in response.json()["errors"])

    def test_register_invalid_email(self, client):
        response = client.post(
            "/api/register",
            json={"name": "Test", "email": "not-an-email", "password": "SecurePass123"}
        )

        assert response.status_code == 422

    def test_register_blank_name(self, client, db_session):
        response = client.post(
            "/api/register",
            json={"name": "   ", "email": "blank@example.com", "password": "SecurePass123"}
        )

        assert response.status_code == 422
        assert any(error["field"] == "name" for error in response.json()["errors"])
        assert db_session.query(User).count() == 0


class TestUserLogin:
    """Test user login endpoint"""

    def test_login_success(self, client, employer):
        response = client.post(
            "/api/login",
            json={"email": employer.email, "password": "Password123"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["user"]["id"] == employer.id
        assert data["user"]["role"] == "employer"
        assert data["user"]["company_name"] == "Acme Corp"

        # The token works against a protected endpoint
        headers = {"Authorization": f"Bearer {data['access_token']}"}
        assert client.get("/api/user", headers=headers).json()["id"] == employer.id

    def test_login_wrong_password(self, client, employer):
        response = client.post(
            "/api/login",
            json={"email": employer.email, "password": "WrongPassword"}
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"

    def test_login_unknown_email(self, client):
        response = client.post(
            "/api/login",
            json={"email": "nobody@example.com", "password": "Password123"}
        )

        assert response.status_code == 401


class TestLogout:
    """Test token revocation"""

    def test_logout_revokes_token(self, client, applicant, auth_headers):
        headers = auth_headers(applicant)

        response = client.post("/api/logout", headers=headers)
        assert response.status_code == 200
        assert response.json()["message"] == "Logged out successfully"

        # Same token is rejected afterwards
        response = client.get("/api/user", headers=headers)
        assert response.status_code == 401

    def test_logout_leaves_other_tokens_valid(self, client, applicant, auth_headers):
        first = auth_headers(applicant)
        second = auth_headers(applicant)

        client.post("/api/logout", headers=first)

        assert client.get("/api/user", headers=second).status_code == 200

    def test_logout_requires_authentication(self, client):
        assert client.post("/api/logout").status_code == 401


class TestCurrentUser:
    """Test GET /user and token validation"""

    def test_current_user(self, client, applicant, auth_headers):
        response = client.get("/api/user", headers=auth_headers(applicant))

        assert response.status_code == 200
        data = response.json()
        assert data["email"] == applicant.email
        assert "hashed_password" not in data

    def test_missing_token(self, client):
        response = client.get("/api/user")

        assert response.status_code == 401
        assert response.json()["message"] == "Unauthenticated"
        assert response.headers["www-authenticate"] == "Bearer"

    def test_malformed_token(self, client):
        response = client.get("/api/user", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401

    def test_expired_token(self, client, applicant):
        token = create_access_token(
            data={"sub": str(applicant.id), "role": "user"},
            expires_delta=timedelta(minutes=-5)
        )

        response = client.get("/api/user", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    def test_token_for_deleted_user(self, client, db_session, applicant, auth_headers):
        headers = auth_headers(applicant)
        db_session.delete(applicant)
        db_session.commit()

        response = client.get("/api/user", headers=headers)
        assert response.status_code == 401
