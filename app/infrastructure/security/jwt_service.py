"""
JWT token service for secure API access.

Handles:
- Signing tokens for an authenticated subject with caller-supplied claims
- Validating bearer tokens presented to protected routes

Issued tokens are not stored; there is no blacklist or refresh flow.
"""

import logging
from datetime import datetime, timezone, timedelta
from typing import Dict, Any, Mapping, Optional
from dataclasses import dataclass, field
import jwt
import secrets

from app.core.config import settings
from app.infrastructure.auth.models import TokenData

logger = logging.getLogger(__name__)

REGISTERED_CLAIMS = frozenset({"sub", "iat", "exp", "iss", "jti"})


class TokenIssuanceError(Exception):
    """Raised when a token cannot be signed."""
    pass


@dataclass
class JWTConfig:
    """JWT configuration."""
    secret_key: str = field(default_factory=lambda: secrets.token_urlsafe(32))
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    issuer: str = "auth-token-service"

    @classmethod
    def from_settings(cls) -> "JWTConfig":
        """Load JWT configuration from application settings."""
        config = cls(
            algorithm=settings.JWT_ALGORITHM,
            access_token_expire_minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES,
            issuer=settings.JWT_ISSUER,
        )
        if settings.JWT_SECRET_KEY:
            config.secret_key = settings.JWT_SECRET_KEY
        else:
            logger.warning("JWT_SECRET_KEY not configured; using a random per-process secret")
        return config


class JWTService:
    """
    JWT token issuer and validator.

    ``issue`` embeds the subject plus arbitrary claims (e.g. ``roles``);
    ``validate_token`` is used by the bearer-token dependency guarding
    protected routes.
    """

    def __init__(self, config: Optional[JWTConfig] = None):
        self.config = config or JWTConfig.from_settings()

        # Performance tracking
        self.jwt_stats = {
            'tokens_generated': 0,
            'tokens_validated': 0,
            'failed_validations': 0,
        }

        logger.info("JWTService initialized")

    async def issue(self, subject: str, claims: Optional[Mapping[str, Any]] = None) -> str:
        """Sign a token for ``subject`` carrying ``claims``."""
        try:
            now = datetime.now(timezone.utc)
            expires_at = now + timedelta(minutes=self.config.access_token_expire_minutes)

            payload: Dict[str, Any] = {
                key: value for key, value in (claims or {}).items()
                if key not in REGISTERED_CLAIMS
            }
            payload.update({
                'sub': subject,
                'iat': int(now.timestamp()),
                'exp': int(expires_at.timestamp()),
                'iss': self.config.issuer,
                'jti': secrets.token_urlsafe(16),
            })

            token = jwt.encode(payload, self.config.secret_key, algorithm=self.config.algorithm)

            self.jwt_stats['tokens_generated'] += 1

            logger.debug(f"Generated token for subject {subject}")
            return token

        except Exception as e:
            logger.error(f"Error generating token: {e}")
            raise TokenIssuanceError(f"Could not issue token for {subject}") from e

    async def validate_token(self, token: str) -> Optional[TokenData]:
        """Validate JWT token."""
        try:
            self.jwt_stats['tokens_validated'] += 1

            payload = jwt.decode(
                token,
                self.config.secret_key,
                algorithms=[self.config.algorithm],
                issuer=self.config.issuer,
                options={"require": ["sub", "exp", "iat"]},
            )

            roles = payload.get('roles', [])
            if not isinstance(roles, list):
                raise jwt.InvalidTokenError("roles claim must be a list")

            token_data = TokenData(
                username=payload['sub'],
                roles=[str(role) for role in roles],
                issued_at=datetime.fromtimestamp(payload['iat'], timezone.utc),
                expires_at=datetime.fromtimestamp(payload['exp'], timezone.utc),
                jti=payload.get('jti', ''),
            )

            logger.debug(f"Token validated for user {token_data.username}")
            return token_data

        except jwt.ExpiredSignatureError:
            logger.warning("Token has expired")
            self.jwt_stats['failed_validations'] += 1
            return None
        except jwt.InvalidTokenError as e:
            logger.warning(f"Invalid token: {e}")
            self.jwt_stats['failed_validations'] += 1
            return None

    def get_statistics(self) -> Dict[str, Any]:
        """Get JWT service statistics."""
        return {
            'jwt_stats': dict(self.jwt_stats),
            'configuration': {
                'algorithm': self.config.algorithm,
                'access_token_expire_minutes': self.config.access_token_expire_minutes,
                'issuer': self.config.issuer,
            }
        }

    def reset_statistics(self):
        """Reset JWT statistics."""
        self.jwt_stats = {
            'tokens_generated': 0,
            'tokens_validated': 0,
            'failed_validations': 0,
        }
        logger.info("JWT statistics reset")


# Global JWT service instance
jwt_service = JWTService()
