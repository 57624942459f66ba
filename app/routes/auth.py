# ========================================
# app/routes/auth.py
# ========================================

from fastapi import APIRouter, Depends, Response

from app.config import Settings, get_settings
from app.logging_config import get_logger
from app.schemas.auth import IdentityPayload, MessageResponse
from app.utils.auth import (
    SessionTokenService,
    get_token_service,
    set_token_cookie,
    clear_token_cookie,
)

logger = get_logger(__name__)

router = APIRouter()


# ✅ 1. ISSUE SESSION TOKEN
@router.post("/jwt", response_model=MessageResponse)
async def issue_token(
    identity: IdentityPayload,
    response: Response,
    settings: Settings = Depends(get_settings),
    token_service: SessionTokenService = Depends(get_token_service)
):
    """Sign the posted identity and set it as an HTTP-only cookie."""

    token = token_service.issue(identity.model_dump(exclude_none=True))
    set_token_cookie(response, token, settings)
    logger.debug("Issued session token")

    return {"message": "Token issued"}


# ✅ 2. LOGOUT
@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response, settings: Settings = Depends(get_settings)):
    """Tell the client to drop the token cookie."""

    clear_token_cookie(response, settings)
    logger.debug("Cleared session token cookie")

    return {"message": "Logged out"}
