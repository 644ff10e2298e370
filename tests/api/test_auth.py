# tests/api/test_auth.py
"""Tests for registration, login and the session gate."""

from datetime import UTC, datetime, timedelta

from fastapi import status
from jose import jwt

from matchai.core.settings import settings
from matchai.models import User

REGISTRATION = {
    "username": "dana",
    "password": "s3cret-pass",
    "profileName": "Dana",
    "age": 34,
    "gender": "non-binary",
    "location": "Berlin",
    "bio": "Climber and amateur astronomer.",
    "lookingFor": "friendship",
    "interests": ["climbing", "stars"],
}


class TestRegister:
    def test_register_returns_profile_and_token(self, client, db_session) -> None:
        response = client.post("/api/auth/register", json=REGISTRATION)

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["username"] == "dana"
        assert data["profileName"] == "Dana"
        assert data["interests"] == ["climbing", "stars"]
        assert data["tokenType"] == "bearer"
        assert data["accessToken"]
        assert "password" not in data
        assert "passwordHash" not in data

        stored = db_session.query(User).filter(User.username == "dana").one()
        assert stored.password_hash != "s3cret-pass"

    def test_registered_token_opens_session(self, client) -> None:
        token = client.post("/api/auth/register", json=REGISTRATION).json()["accessToken"]

        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["username"] == "dana"

    def test_duplicate_username_rejected(self, client, test_user) -> None:
        payload = {**REGISTRATION, "username": test_user.username}

        response = client.post("/api/auth/register", json=payload)
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Username already exists"

    def test_missing_fields_report_field_errors(self, client) -> None:
        response = client.post("/api/auth/register", json={"username": "erin"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = response.json()
        assert body["detail"] == "Invalid request data"
        assert any("password" in error["loc"] for error in body["errors"])

    def test_underage_registration_rejected(self, client) -> None:
        response = client.post("/api/auth/register", json={**REGISTRATION, "age": 17})
        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestLogin:
    def test_login_success(self, client, test_user, test_password) -> None:
        response = client.post(
            "/api/auth/login",
            json={"username": test_user.username, "password": test_password},
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["id"] == test_user.id
        claims = jwt.decode(
            data["accessToken"], settings.secret_key, algorithms=[settings.jwt_algorithm]
        )
        assert claims["sub"] == str(test_user.id)

    def test_login_wrong_password(self, client, test_user) -> None:
        response = client.post(
            "/api/auth/login",
            json={"username": test_user.username, "password": "not-it"},
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["detail"] == "Invalid username or password"

    def test_login_unknown_user(self, client) -> None:
        response = client.post("/api/auth/login", json={"username": "nobody", "password": "x"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestSession:
    def test_me_requires_token(self, client) -> None:
        response = client.get("/api/auth/me")
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["detail"] == "Not authenticated"

    def test_me_rejects_garbage_token(self, client) -> None:
        response = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["detail"] == "Could not validate credentials"

    def test_me_rejects_expired_token(self, client, test_user) -> None:
        expired = jwt.encode(
            {"sub": str(test_user.id), "exp": datetime.now(UTC) - timedelta(minutes=1)},
            settings.secret_key,
            algorithm=settings.jwt_algorithm,
        )
        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {expired}"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_me_returns_public_profile(self, client, test_user, auth_token) -> None:
        response = client.get("/api/auth/me", headers=auth_token)

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["id"] == test_user.id
        assert data["lookingFor"] == "long-term"
        assert "passwordHash" not in data

    def test_logout(self, client) -> None:
        response = client.get("/api/auth/logout")
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"message": "Logged out successfully"}
