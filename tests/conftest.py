"""
Global fixtures for the auth token service test suite.
"""
import pytest
from typing import Dict, Any

from fastapi.testclient import TestClient

from app.core.config import UserCredentialConfig
from app.core.dependencies import get_token_issuer, get_user_store
from app.infrastructure.auth.user_store import UserStore
from app.infrastructure.security.jwt_service import JWTConfig, JWTService
from app.main import app

TEST_SECRET = "test-secret-key-with-enough-length-for-hs256"


@pytest.fixture(scope="session")
def default_users_config() -> Dict[str, UserCredentialConfig]:
    """Mirror of the default AUTH_USERS configuration."""
    return {
        "user": UserCredentialConfig(password="{noop}password", roles=["USER"]),
        "admin": UserCredentialConfig(password="{noop}admin123", roles=["ADMIN"]),
    }


@pytest.fixture
def user_store(default_users_config) -> UserStore:
    return UserStore.from_config(default_users_config)


@pytest.fixture
def jwt_config() -> JWTConfig:
    return JWTConfig(
        secret_key=TEST_SECRET,
        algorithm="HS256",
        access_token_expire_minutes=5,
        issuer="auth-token-service-test",
    )


@pytest.fixture
def token_service(jwt_config) -> JWTService:
    return JWTService(config=jwt_config)


@pytest.fixture
def client(user_store, token_service):
    """TestClient wired to isolated store and issuer instances."""
    app.dependency_overrides[get_user_store] = lambda: user_store
    app.dependency_overrides[get_token_issuer] = lambda: token_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def login(client):
    """Log in and return the raw response."""
    def _login(username: Any, password: Any):
        return client.post("/api/auth/login", json={"username": username, "password": password})
    return _login
