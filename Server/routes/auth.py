"""
Arsip Server - Authentication Endpoints

This module contains the session endpoints: login, logout and the identity
of the current session.
"""

import logging
from datetime import timedelta
from fastapi import APIRouter, Depends, Response

from config import settings
from models.auth import LoginRequest, TokenData
from models.api import UserResponse
from auth import AuthenticateUser, CreateAccessToken, GetCurrentUser, SESSION_COOKIE_NAME


# Create logger
logger = logging.getLogger(__name__)

# Create router instance
router = APIRouter()


# ==================== Authentication Endpoints ====================

@router.post("/api/auth/login", response_model=UserResponse, tags=["Authentication"])
async def login(login_request: LoginRequest, response: Response):
    """
    Authenticate user and set the session cookie

    Args:
        login_request: Username and password
        response: Response used to attach the cookie

    Returns:
        UserResponse: Identity of the logged in user

    Raises:
        InvalidCredentialsError: If credentials are invalid (no cookie is set)
    """
    from database import db_manager

    identity = AuthenticateUser(db_manager, login_request.username, login_request.password)

    expiration_hours = db_manager.GetSettingInt("jwt_expiration_hours")
    token = CreateAccessToken(identity, timedelta(hours=expiration_hours))

    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=token,
        max_age=expiration_hours * 3600,
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure
    )

    logger.info(f"User '{identity['username']}' logged in successfully")

    return identity


@router.post("/api/auth/logout", tags=["Authentication"])
async def logout(response: Response):
    """
    Clear the session cookie
    The token itself stays valid until it expires
    """
    response.delete_cookie(
        key=SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure
    )
    return {"message": "Logged out"}


@router.get("/api/auth/me", response_model=UserResponse, tags=["Authentication"])
async def me(current_user: TokenData = Depends(GetCurrentUser)):
    """Identity carried by the current session token"""
    return current_user.model_dump()
