from datetime import datetime, timedelta, timezone
from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import ExpiredSignatureError, JWTError, jwt
from shared.core.config import settings
from shared.core.exceptions import AuthenticationError, TokenExpiredError
from shared.core.schemas import UserToken

security = HTTPBearer()


def create_access_token(data: dict, expires_minutes: Optional[int] = None):
    payload = data.copy()

    expires = datetime.now(timezone.utc) + timedelta(
        minutes=expires_minutes or settings.JWT_EXPIRE_MINUTES)
    payload['exp'] = expires

    # user_id travels as a string claim
    if 'user_id' in payload:
        payload['user_id'] = str(payload['user_id'])

    return jwt.encode(payload, settings.JWT_SECRET,
                      algorithm=settings.JWT_ALGORITHM)


def verify_token(token: str) -> UserToken:
    """Verify and decode a JWT token."""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET,
                             algorithms=[settings.JWT_ALGORITHM])
    except ExpiredSignatureError:
        raise TokenExpiredError("Token has expired")
    except JWTError:
        raise AuthenticationError("Invalid or expired token")

    if not payload.get("user_id"):
        raise AuthenticationError("Token does not identify a user")
    return UserToken(**payload)


def validate_current_token(
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> UserToken:
    return verify_token(credentials.credentials)
