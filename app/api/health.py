"""
Health check endpoint.

Reports whether the user store is populated and exposes the token service
counters. Unauthenticated.
"""

import time
import logging
from typing import Dict, Any
from fastapi import APIRouter, Depends

from app.core.dependencies import get_token_issuer, get_user_store
from app.infrastructure.auth.user_store import UserStore
from app.infrastructure.security.jwt_service import JWTService

logger = logging.getLogger(__name__)

router = APIRouter()

_started_at = time.time()


@router.get("/health")
async def health_check(
    user_store: UserStore = Depends(get_user_store),
    token_issuer: JWTService = Depends(get_token_issuer),
) -> Dict[str, Any]:
    users_configured = len(user_store)
    status_report = {
        "status": "healthy" if users_configured > 0 else "degraded",
        "uptime_seconds": round(time.time() - _started_at, 2),
        "users_configured": users_configured,
        "token_statistics": token_issuer.get_statistics()["jwt_stats"],
    }
    if status_report["status"] != "healthy":
        logger.warning(f"Health check: user store is empty: {status_report}")
    return status_report
