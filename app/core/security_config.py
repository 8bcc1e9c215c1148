"""
Security configuration for the HTTP surface.

Provides:
- CORS configuration (open in development, restricted in production)
- Security headers middleware
- Request logging with warnings for rejected authentication
"""

import logging
import time
from typing import Dict, List, Any, Callable
from dataclasses import dataclass, field
from enum import Enum

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.config import settings

logger = logging.getLogger(__name__)


class SecurityLevel(Enum):
    """Security configuration levels."""
    DEVELOPMENT = "development"
    PRODUCTION = "production"


@dataclass
class SecurityConfig:
    """Security configuration settings."""
    level: SecurityLevel = SecurityLevel.DEVELOPMENT
    allowed_origins: List[str] = field(default_factory=list)
    enable_security_headers: bool = True
    enable_request_logging: bool = True

    def __post_init__(self):
        """Configure security settings based on production mode and settings."""
        self.allowed_origins = list(settings.ALLOWED_ORIGINS)
        self.enable_security_headers = settings.ENABLE_SECURITY_HEADERS
        self.enable_request_logging = settings.ENABLE_REQUEST_LOGGING

        if settings.PRODUCTION_MODE:
            self.level = SecurityLevel.PRODUCTION
            if "*" in self.allowed_origins:
                logger.warning("Production mode enabled with wildcard origins. CORS will be restrictive.")
                self.allowed_origins = [origin for origin in self.allowed_origins if origin != "*"]
            self.enable_security_headers = True


def get_security_config() -> SecurityConfig:
    """Build the security configuration from current settings."""
    return SecurityConfig()


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    def __init__(self, app: Callable, config: SecurityConfig):
        super().__init__(app)
        self.config = config

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        if self.config.enable_security_headers:
            response.headers["X-Frame-Options"] = "DENY"
            response.headers["X-Content-Type-Options"] = "nosniff"
            response.headers["Referrer-Policy"] = "no-referrer"
            response.headers["Cache-Control"] = "no-store"

            # Enforce HTTPS in production
            if self.config.level == SecurityLevel.PRODUCTION:
                response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log each request; rejected authentication is logged at WARNING."""

    def __init__(self, app: Callable, config: SecurityConfig):
        super().__init__(app)
        self.config = config

    async def dispatch(self, request: Request, call_next):
        if not self.config.enable_request_logging:
            return await call_next(request)

        start_time = time.time()
        client_ip = self._get_client_ip(request)

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(f"Request error: {request.method} {request.url.path} from {client_ip}: {e}")
            raise

        request_event = {
            "ip": client_ip,
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "response_time_ms": round((time.time() - start_time) * 1000, 2)
        }
        if response.status_code in (401, 403):
            logger.warning(f"Security event: {request_event}")
        else:
            logger.info(f"Request: {request_event}")

        return response

    def _get_client_ip(self, request: Request) -> str:
        """Extract client IP from request."""
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()
        return request.client.host if request.client else "unknown"


def get_cors_config() -> Dict[str, Any]:
    """Get CORS configuration based on security level."""
    config = get_security_config()
    if config.level == SecurityLevel.PRODUCTION:
        return {
            "allow_origins": config.allowed_origins,
            "allow_credentials": True,
            "allow_methods": ["GET", "POST"],
            "allow_headers": ["Authorization", "Content-Type", "Accept", "Origin"],
        }
    # Development - any origin; credentials are carried in the Authorization header, not cookies
    return {
        "allow_origins": ["*"],
        "allow_credentials": False,
        "allow_methods": ["*"],
        "allow_headers": ["*"]
    }


def configure_security_middleware(app):
    """Configure all security middleware for the application."""
    config = get_security_config()

    app.add_middleware(RequestLoggingMiddleware, config=config)
    app.add_middleware(SecurityHeadersMiddleware, config=config)

    logger.info(f"Security middleware configured for {config.level.value} environment")


__all__ = [
    "SecurityConfig",
    "SecurityLevel",
    "get_security_config",
    "configure_security_middleware",
    "get_cors_config",
]
