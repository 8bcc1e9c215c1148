"""Authentication infrastructure package."""

from .models import (
    CredentialRecord,
    TokenData,
    FailureReason,
    AuthenticationSuccess,
    AuthenticationFailure,
    AuthenticationResult,
)
from .user_store import UserStore, user_store
from .authenticator import authenticate, password_matches

__all__ = [
    "CredentialRecord",
    "TokenData",
    "FailureReason",
    "AuthenticationSuccess",
    "AuthenticationFailure",
    "AuthenticationResult",
    "UserStore",
    "user_store",
    "authenticate",
    "password_matches",
]
