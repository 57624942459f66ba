from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Cookie, Depends, HTTPException, Response, status
from jose import JWTError, jwt

from app.config import Settings, get_settings
from app.logging_config import get_logger

logger = get_logger(__name__)

ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_HOURS = 10
TOKEN_COOKIE_NAME = "token"


class TokenMissingError(Exception):
    """No session token was presented."""


class TokenInvalidError(Exception):
    """The session token is malformed, tampered with, or expired."""


def identity_email(payload: dict) -> Optional[str]:
    """Email of the caller, whichever field name the client used."""
    return payload.get("email") or payload.get("userEmail")


class SessionTokenService:
    """
    Issues and verifies stateless session tokens.

    Tokens carry the identity object as posted plus an `exp` claim; there is
    no server-side session table, so a token stays valid until it expires.
    Handlers only see `verify_token`, so a different policy (a denylist,
    short-lived tokens with refresh) can replace this class.
    """

    def __init__(self, secret: str, expires: timedelta = timedelta(hours=ACCESS_TOKEN_EXPIRE_HOURS)):
        self.secret = secret
        self.expires = expires

    def issue(self, identity: dict) -> str:
        to_encode = identity.copy()
        expire = datetime.now(timezone.utc) + self.expires
        to_encode.update({"exp": expire})
        return jwt.encode(to_encode, self.secret, algorithm=ALGORITHM)

    def verify(self, token: Optional[str]) -> dict:
        if not token:
            raise TokenMissingError()
        try:
            return jwt.decode(token, self.secret, algorithms=[ALGORITHM])
        except JWTError as exc:
            raise TokenInvalidError(str(exc)) from exc


def get_token_service(settings: Settings = Depends(get_settings)) -> SessionTokenService:
    return SessionTokenService(settings.signing_secret)


def cookie_options(settings: Settings) -> dict:
    """Cookie flags: cross-site and secure in production, strict elsewhere."""
    if settings.is_production:
        return {"httponly": True, "secure": True, "samesite": "none"}
    return {"httponly": True, "secure": False, "samesite": "strict"}


def set_token_cookie(response: Response, token: str, settings: Settings):
    response.set_cookie(
        key=TOKEN_COOKIE_NAME,
        value=token,
        max_age=ACCESS_TOKEN_EXPIRE_HOURS * 60 * 60,
        **cookie_options(settings)
    )


def clear_token_cookie(response: Response, settings: Settings):
    response.delete_cookie(key=TOKEN_COOKIE_NAME, **cookie_options(settings))


async def verify_token(
    token: Optional[str] = Cookie(None),
    token_service: SessionTokenService = Depends(get_token_service),
) -> dict:
    """Dependency for protected routes; returns the decoded identity."""
    try:
        return token_service.verify(token)
    except TokenMissingError:
        logger.warning("Rejected request without a session token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="unauthorized access"
        )
    except TokenInvalidError as exc:
        logger.warning("Rejected invalid session token: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="forbidden access"
        )
