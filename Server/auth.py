"""
Arsip Server - Authentication Utilities

This module provides authentication functionality including:
- Credential verification against bcrypt hashes
- JWT session token generation and validation
- Authentication dependencies for protected routes
- Role check for administrative routes

The session token is delivered in an HTTP-only cookie and never exposed to
scripts. Tokens are stateless: logging out clears the cookie only.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Cookie, Depends
from jose import JWTError, jwt
from pydantic import ValidationError

from config import settings
from errors import UnauthenticatedError, InvalidCredentialsError, ForbiddenError
from models.database import User
from models.auth import TokenData
from managers.database_manager import DatabaseManager

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
SESSION_COOKIE_NAME = "token"


# ==================== JWT Token Functions ====================

def CreateAccessToken(identity: dict, expires_delta: timedelta) -> str:
    """
    Create a signed JWT session token

    Args:
        identity: User identity (id, username, role, full_name)
        expires_delta: Validity window from now

    Returns:
        str: Encoded JWT token
    """
    to_encode = identity.copy()
    to_encode.update({"exp": datetime.now(timezone.utc) + expires_delta})
    return jwt.encode(to_encode, settings.secret_key, algorithm=ALGORITHM)


def DecodeAccessToken(token: str) -> TokenData:
    """
    Decode and validate a JWT session token

    Args:
        token: JWT token string

    Returns:
        TokenData: Identity carried by the token

    Raises:
        ForbiddenError: If the signature, expiry or claims are invalid
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
        return TokenData(
            id=payload.get("id"),
            username=payload.get("username"),
            role=payload.get("role"),
            full_name=payload.get("full_name")
        )
    except (JWTError, ValidationError):
        raise ForbiddenError("Invalid or expired session")


# ==================== Authentication Helper Functions ====================

def AuthenticateUser(db_manager: DatabaseManager, username: str, password: str) -> dict:
    """
    Authenticate a user with username and password

    Args:
        db_manager: DatabaseManager instance
        username: Username (exact match)
        password: Plain text password

    Returns:
        dict: Identity of the user (id, username, role, full_name)

    Raises:
        InvalidCredentialsError: If the user is unknown or the password is wrong
    """
    session = db_manager.GetSession()

    try:
        user = session.query(User).filter(User.username == username).first()

        if not user or not db_manager.VerifyPassword(password, user.password_hash):
            logger.warning(f"Failed login attempt for username '{username}'")
            raise InvalidCredentialsError("Invalid credentials")

        return user.ToIdentity()

    finally:
        session.close()


# ==================== Authentication Dependencies ====================

def GetCurrentUser(token: Optional[str] = Cookie(default=None)) -> TokenData:
    """
    FastAPI dependency resolving the session cookie to an identity

    Raises:
        UnauthenticatedError: If no session cookie was sent
        ForbiddenError: If the token fails validation
    """
    if not token:
        raise UnauthenticatedError("Unauthorized")
    return DecodeAccessToken(token)


def RequireAdmin(current_user: TokenData = Depends(GetCurrentUser)) -> TokenData:
    """
    FastAPI dependency allowing only ADMIN users

    Raises:
        ForbiddenError: If the user is not an administrator
    """
    if not current_user.is_admin:
        logger.warning(f"User '{current_user.username}' denied admin action")
        raise ForbiddenError("Admin role required")
    return current_user
