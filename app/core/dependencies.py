"""
Module for providing application dependencies.
Leverages FastAPI's dependency injection system; tests swap the singletons
through ``app.dependency_overrides``.
"""
from typing import Optional
import logging

from fastapi import Depends, HTTPException, status, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.infrastructure.auth.models import TokenData
from app.infrastructure.auth.user_store import UserStore, user_store
from app.infrastructure.security.jwt_service import JWTService, jwt_service

logger = logging.getLogger(__name__)

# auto_error=False so a missing header yields 401 rather than FastAPI's default
bearer_scheme = HTTPBearer(auto_error=False)


def get_user_store() -> UserStore:
    return user_store


def get_token_issuer() -> JWTService:
    return jwt_service


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"}
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
    token_issuer: JWTService = Depends(get_token_issuer),
) -> TokenData:
    """Resolve the caller from the bearer token, or reject with 401."""
    if credentials is None or not credentials.credentials:
        raise _unauthorized("Not authenticated")

    token_data = await token_issuer.validate_token(credentials.credentials)
    if token_data is None:
        raise _unauthorized("Invalid authentication token")

    return token_data


def require_role(required_role: str):
    """Dependency factory requiring the caller to hold ``required_role``."""
    def role_dependency(current_user: TokenData = Depends(get_current_user)) -> TokenData:
        if required_role not in current_user.roles:
            logger.warning(f"User {current_user.username} lacks role {required_role}")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Required role: {required_role}"
            )
        return current_user
    return role_dependency
