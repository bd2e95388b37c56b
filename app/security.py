# app/security.py
"""
Bearer-token authentication and password hashing.
Tokens are HS256 JWTs carrying the user id (sub), username and role.
requires(operation) is the per-route permission dependency.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import jwt
from jose.exceptions import JWTError
from pydantic import BaseModel

from app.config import settings
from app.models.enums import Role
from app.services import permissions
from app.utils.logger import get_logger

logger = get_logger(__name__)

security = HTTPBearer(auto_error=False)


class TokenData(BaseModel):
    """Identity extracted from a verified token."""
    user_id: int
    username: Optional[str] = None
    role: Role


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


def create_access_token(user_id: int, username: str, role: Role, expires_minutes: Optional[int] = None) -> str:
    expire = datetime.now(timezone.utc) + timedelta(
        minutes=expires_minutes if expires_minutes is not None else settings.ACCESS_TOKEN_EXPIRE_MINUTES
    )
    payload = {"sub": str(user_id), "username": username, "role": Role(role).value, "exp": expire}
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def verify_token(token: str) -> TokenData:
    """Verify and decode a JWT. Expired or tampered tokens are rejected."""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
        return TokenData(user_id=int(payload["sub"]), username=payload.get("username"), role=payload["role"])
    except (JWTError, KeyError, ValueError) as e:
        logger.warning(f"JWT verification failed: {e}")
        raise _unauthorized("Invalid or expired token")


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> TokenData:
    """Dependency to get current user from the Authorization header."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise _unauthorized("Authorization header missing")
    return verify_token(credentials.credentials)


def requires(operation: str):
    """Dependency factory: authenticated user whose role may perform `operation`."""
    def permission_checker(current_user: TokenData = Depends(get_current_user)) -> TokenData:
        permissions.require(current_user.role, operation)
        return current_user
    return permission_checker
