from fastapi import APIRouter, Depends

from app.api.schemas import MessageResponse
from app.core.dependencies import get_current_user
from app.infrastructure.auth.models import TokenData

router = APIRouter()

HELLO_MESSAGE = "Bonjour, endpoint protégé OK"


@router.get("/hello", response_model=MessageResponse)
async def hello(current_user: TokenData = Depends(get_current_user)):
    """Protected resource: reachable only with a valid bearer token."""
    return MessageResponse(message=HELLO_MESSAGE)
