# File: app/security.py
import hmac
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import AuthError
from app.database.database import get_db
from app.models.users import User
from app.schemas.users import TokenClaims
from app.utils.user_store import UserStore

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "
INVALID_TOKEN_MESSAGE = "Invalid or expired token"


# JWT utilities
def create_access_token(
    subject_id: UUID,
    expires_delta: timedelta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    now: Optional[datetime] = None,
) -> str:
    issued_at = now or datetime.now(timezone.utc)
    to_encode = {
        "sub": str(subject_id),
        "exp": int((issued_at + expires_delta).timestamp()),
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def verify_access_token(token: str, now: Optional[datetime] = None) -> TokenClaims:
    """
    Check the token's signature and expiry and return its claims.
    Raises AuthError with reason "malformed", "bad signature" or "expired".
    Nothing outside the token and the secret is consulted.
    """
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            # expiry is checked below against `now`; TokenClaims requires exp
            options={"verify_exp": False, "require_sub": True},
        )
        claims = TokenClaims.model_validate(payload)
    except ExpiredSignatureError as e:
        raise AuthError(INVALID_TOKEN_MESSAGE, reason="expired") from e
    except JWTError as e:
        reason = "bad signature" if "signature" in str(e).lower() else "malformed"
        raise AuthError(INVALID_TOKEN_MESSAGE, reason=reason) from e
    except PydanticValidationError as e:
        raise AuthError(INVALID_TOKEN_MESSAGE, reason="malformed") from e

    current = now or datetime.now(timezone.utc)
    if claims.exp <= int(current.timestamp()):
        raise AuthError(INVALID_TOKEN_MESSAGE, reason="expired")
    return claims


# Custom JWTBearer for security
class JWTBearer(HTTPBearer):
    """
    Accepts only `Authorization: Bearer <token>`, exactly.
    The scheme is not case-folded and the token is not read from anywhere else.
    """

    def __init__(self):
        super().__init__(auto_error=False)

    async def __call__(self, request: Request) -> TokenClaims:
        authorization = request.headers.get("Authorization")
        if authorization is None:
            raise AuthError("Missing Authorization header", reason="missing header")
        if not authorization.startswith(BEARER_PREFIX):
            raise AuthError("Invalid Authorization header format", reason="bad header prefix")
        return verify_access_token(authorization[len(BEARER_PREFIX):])


jwt_bearer = JWTBearer()


def get_current_user(
    claims: TokenClaims = Depends(jwt_bearer),
    db: Session = Depends(get_db),
) -> User:
    user = UserStore.find_by_id(db, claims.sub)
    if user is None:
        raise AuthError("User from token not found", reason="referent not found")
    return user


def authenticate_user(db: Session, account_number: str, ifsc: str) -> Optional[User]:
    """Unknown account and wrong IFSC both return None, so callers cannot tell them apart."""
    user = UserStore.find_by_account_number(db, account_number)
    if not user:
        logger.info("Login rejected: no such account")
        return None
    if not hmac.compare_digest(user.ifsc_code.encode(), ifsc.encode()):
        logger.info(f"Login rejected: IFSC mismatch for user {user.id}")
        return None
    return user
