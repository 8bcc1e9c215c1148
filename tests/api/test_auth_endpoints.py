"""
Tests for the login and protected hello endpoints.

Tests:
- Login success for each configured account
- Generic 401 for unknown users and wrong passwords
- Protected route access with and without tokens
"""

import pytest
from datetime import datetime, timezone, timedelta
import jwt as python_jwt

from fastapi import status

from app.api.endpoints.hello import HELLO_MESSAGE
from app.infrastructure.security.jwt_service import TokenIssuanceError


def _decode(token, jwt_config):
    return python_jwt.decode(
        token, jwt_config.secret_key, algorithms=[jwt_config.algorithm], issuer=jwt_config.issuer
    )


@pytest.mark.integration
class TestLoginEndpoint:
    """Test POST /api/auth/login."""

    @pytest.mark.parametrize("username,password,role", [
        ("user", "password", "USER"),
        ("admin", "admin123", "ADMIN"),
    ])
    def test_login_success(self, login, jwt_config, username, password, role):
        response = login(username, password)

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert set(data) == {"token"}
        assert isinstance(data["token"], str) and data["token"]

        claims = _decode(data["token"], jwt_config)
        assert claims["sub"] == username
        assert claims["roles"] == [role]

    @pytest.mark.parametrize("username", ["nonexistent", "Admin", "root", ""])
    @pytest.mark.parametrize("password", ["password", "admin123", "x"])
    def test_unknown_user_rejected(self, login, username, password):
        response = login(username, password)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {"detail": "Invalid credentials"}
        assert response.headers["WWW-Authenticate"] == "Bearer"

    @pytest.mark.parametrize("username,password", [
        ("user", "admin123"),
        ("user", "PASSWORD"),
        ("admin", "password"),
        ("admin", ""),
    ])
    def test_wrong_password_rejected(self, login, username, password):
        response = login(username, password)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert "token" not in response.json()

    def test_failures_are_indistinguishable(self, login):
        unknown_user = login("ghost", "password")
        wrong_password = login("user", "wrong")

        assert unknown_user.status_code == wrong_password.status_code
        assert unknown_user.json() == wrong_password.json()

    def test_repeated_logins_each_yield_valid_token(self, client, login):
        tokens = [login("admin", "admin123").json()["token"] for _ in range(3)]

        assert len(set(tokens)) == 3
        for token in tokens:
            response = client.get("/api/hello", headers={"Authorization": f"Bearer {token}"})
            assert response.status_code == status.HTTP_200_OK

    def test_malformed_body_rejected(self, client):
        assert client.post("/api/auth/login", json={"username": "user"}).status_code == 422
        assert client.post("/api/auth/login", json={"username": "user", "password": 123}).status_code == 422
        assert client.post("/api/auth/login", content="not json", headers={"Content-Type": "application/json"}).status_code == 422

    def test_token_issuance_failure_returns_500(self, client, token_service, mocker):
        mocker.patch.object(token_service, "issue", side_effect=TokenIssuanceError("signing failed"))

        response = client.post("/api/auth/login", json={"username": "user", "password": "password"})

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {"detail": "Token issuance failed"}

    def test_lone_surrogate_password_rejected_like_unknown_user(self, client):
        def _raw_login(username):
            body = '{"username": "%s", "password": "\\ud800"}' % username
            return client.post("/api/auth/login", content=body, headers={"Content-Type": "application/json"})

        known_user = _raw_login("user")
        unknown_user = _raw_login("ghost")

        assert known_user.status_code == status.HTTP_401_UNAUTHORIZED
        assert known_user.status_code == unknown_user.status_code
        assert known_user.json() == unknown_user.json() == {"detail": "Invalid credentials"}

    def test_unexpected_error_returns_generic_500(self, client, token_service, mocker):
        mocker.patch.object(token_service, "issue", side_effect=RuntimeError("unexpected"))

        response = client.post("/api/auth/login", json={"username": "user", "password": "password"})

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {"detail": "Login failed"}
        assert "token" not in response.json()


@pytest.mark.integration
class TestHelloEndpoint:
    """Test GET /api/hello."""

    def test_hello_without_token(self, client, mocker):
        spy = mocker.patch("app.api.endpoints.hello.MessageResponse")

        response = client.get("/api/hello")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.headers["WWW-Authenticate"] == "Bearer"
        spy.assert_not_called()

    def test_hello_with_invalid_token(self, client):
        response = client.get("/api/hello", headers={"Authorization": "Bearer not-a-token"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_hello_with_wrong_scheme(self, client, login):
        token = login("user", "password").json()["token"]
        response = client.get("/api/hello", headers={"Authorization": f"Basic {token}"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_hello_with_expired_token(self, client, jwt_config):
        now = datetime.now(timezone.utc)
        expired = python_jwt.encode(
            {
                "sub": "admin",
                "roles": ["ADMIN"],
                "iat": int((now - timedelta(minutes=30)).timestamp()),
                "exp": int((now - timedelta(minutes=1)).timestamp()),
                "iss": jwt_config.issuer,
            },
            jwt_config.secret_key,
            algorithm=jwt_config.algorithm,
        )
        response = client.get("/api/hello", headers={"Authorization": f"Bearer {expired}"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_hello_with_admin_token(self, client, login):
        token = login("admin", "admin123").json()["token"]

        response = client.get("/api/hello", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"message": "Bonjour, endpoint protégé OK"}
        assert response.json()["message"] == HELLO_MESSAGE

    def test_hello_with_user_token(self, client, login):
        token = login("user", "password").json()["token"]
        response = client.get("/api/hello", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == status.HTTP_200_OK


class TestHealthEndpoint:
    """Test GET /health."""

    def test_health_reports_store_and_token_stats(self, client, login):
        login("user", "password")

        response = client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "healthy"
        assert data["users_configured"] == 2
        assert data["token_statistics"]["tokens_generated"] == 1
