"""
Credential verification against a UserStore.

Passwords are compared as stored: values carrying the ``{noop}`` prefix (or no
prefix at all) are plaintext. No hashing is performed.
"""

import hmac
import logging
import re

from app.infrastructure.auth.models import (
    AuthenticationFailure,
    AuthenticationResult,
    AuthenticationSuccess,
    FailureReason,
)
from app.infrastructure.auth.user_store import UserStore

logger = logging.getLogger(__name__)

NOOP_PREFIX = "{noop}"
_ENCODING_PREFIX = re.compile(r"^\{([^{}]*)\}")


def password_matches(raw_password: object, stored_password: str) -> bool:
    """Exact string equality between the supplied and the stored password."""
    if not isinstance(raw_password, str):
        return False

    match = _ENCODING_PREFIX.match(stored_password)
    if match:
        if match.group(0) != NOOP_PREFIX:
            logger.warning(f"Unsupported password encoding '{match.group(1)}'; rejecting")
            return False
        stored_password = stored_password[len(NOOP_PREFIX):]

    # lone surrogates are valid JSON string content
    return hmac.compare_digest(
        raw_password.encode("utf-8", "surrogatepass"),
        stored_password.encode("utf-8", "surrogatepass"),
    )


def authenticate(store: UserStore, username: object, password: object) -> AuthenticationResult:
    """Verify a username/password pair against ``store``."""
    if not isinstance(username, str) or not username:
        logger.warning("Authentication failed: empty or invalid username")
        return AuthenticationFailure(FailureReason.USER_NOT_FOUND)

    record = store.find_by_username(username)
    if record is None:
        logger.warning(f"Authentication failed: user {username} not found")
        return AuthenticationFailure(FailureReason.USER_NOT_FOUND)

    if not password_matches(password, record.password):
        logger.warning(f"Authentication failed: invalid password for user {username}")
        return AuthenticationFailure(FailureReason.PASSWORD_MISMATCH)

    logger.info(f"User {username} authenticated successfully")
    return AuthenticationSuccess(record)
