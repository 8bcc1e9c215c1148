"""
Authentication API endpoints.

Handles:
- Credential verification against the configured user store
- Token issuance for authenticated users
"""

import logging

from fastapi import APIRouter, HTTPException, Depends, status

from app.api.schemas import LoginRequest, TokenResponse
from app.core.dependencies import get_token_issuer, get_user_store
from app.infrastructure.auth.authenticator import authenticate
from app.infrastructure.auth.models import AuthenticationFailure
from app.infrastructure.auth.user_store import UserStore
from app.infrastructure.security.jwt_service import JWTService, TokenIssuanceError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=TokenResponse)
async def login(
    request: LoginRequest,
    user_store: UserStore = Depends(get_user_store),
    token_issuer: JWTService = Depends(get_token_issuer),
):
    """Authenticate a username/password pair and return a signed token."""
    try:
        result = authenticate(user_store, request.username, request.password)

        # Unknown user and wrong password share one response to avoid username enumeration
        if isinstance(result, AuthenticationFailure):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid credentials",
                headers={"WWW-Authenticate": "Bearer"}
            )

        token = await token_issuer.issue(result.username, {"roles": sorted(result.roles)})
        return TokenResponse(token=token)

    except HTTPException:
        raise
    except TokenIssuanceError as e:
        logger.error(f"Login for {request.username} failed at token issuance: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Token issuance failed"
        )
    except Exception as e:
        logger.error(f"Unexpected error during login for {request.username}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Login failed"
        )
