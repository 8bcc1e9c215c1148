"""
Read-only in-memory user store.

The store is built once at startup from ``settings.AUTH_USERS`` and never
mutated afterwards, so it can be shared across concurrent requests without
locking.
"""

import logging
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional

from app.core.config import UserCredentialConfig, settings
from app.infrastructure.auth.models import CredentialRecord

logger = logging.getLogger(__name__)


class UserStore:
    """Lookup of credential records by exact (case-sensitive) username."""

    def __init__(self, records: Iterable[CredentialRecord]):
        users: Dict[str, CredentialRecord] = {}
        for record in records:
            if not isinstance(record.username, str) or not record.username:
                raise ValueError("Credential record username must be a non-empty string")
            if record.username in users:
                raise ValueError(f"Duplicate username in user store: {record.username}")
            users[record.username] = record
        self._users: Mapping[str, CredentialRecord] = MappingProxyType(users)
        logger.info(f"UserStore initialized with {len(self._users)} users")

    @classmethod
    def from_config(cls, users: Mapping[str, UserCredentialConfig]) -> "UserStore":
        """Build a store from the ``AUTH_USERS`` configuration mapping."""
        return cls(
            CredentialRecord(
                username=username,
                password=entry.password,
                roles=frozenset(entry.roles),
            )
            for username, entry in users.items()
        )

    def find_by_username(self, username: str) -> Optional[CredentialRecord]:
        if not isinstance(username, str) or not username:
            raise ValueError("username must be a non-empty string")
        return self._users.get(username)

    def usernames(self) -> List[str]:
        return sorted(self._users)

    def __contains__(self, username: object) -> bool:
        return username in self._users

    def __len__(self) -> int:
        return len(self._users)


# Global user store instance
user_store = UserStore.from_config(settings.AUTH_USERS)
