"""Authentication models and data structures."""

from datetime import datetime
from typing import List, Union
from dataclasses import dataclass
from enum import Enum

__all__ = [
    "CredentialRecord",
    "TokenData",
    "FailureReason",
    "AuthenticationSuccess",
    "AuthenticationFailure",
    "AuthenticationResult",
]


@dataclass(frozen=True)
class CredentialRecord:
    """Stored association between a username, its password representation and its roles."""
    username: str
    password: str  # opaque comparison value, e.g. "{noop}secret"
    roles: frozenset

    def __repr__(self) -> str:
        return f"CredentialRecord(username={self.username!r}, roles={sorted(self.roles)!r})"


@dataclass
class TokenData:
    """Claims decoded from a validated token."""
    username: str
    roles: List[str]
    issued_at: datetime
    expires_at: datetime
    jti: str


class FailureReason(Enum):
    """Why an authentication attempt was rejected. Never exposed to clients."""
    USER_NOT_FOUND = "user_not_found"
    PASSWORD_MISMATCH = "password_mismatch"


@dataclass(frozen=True)
class AuthenticationSuccess:
    record: CredentialRecord

    @property
    def username(self) -> str:
        return self.record.username

    @property
    def roles(self) -> frozenset:
        return self.record.roles


@dataclass(frozen=True)
class AuthenticationFailure:
    reason: FailureReason


AuthenticationResult = Union[AuthenticationSuccess, AuthenticationFailure]
