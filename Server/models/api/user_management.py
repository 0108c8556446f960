"""
Arsip Server - User Management API Models

Pydantic models for user directory endpoints.
"""

from pydantic import BaseModel

from models.enums import UserRole


class CreateUserRequest(BaseModel):
    """Request model for creating a new user"""
    username: str
    password: str
    full_name: str
    role: UserRole


class UserResponse(BaseModel):
    """Directory entry for a user (no password hash)"""
    id: int
    username: str
    full_name: str
    role: UserRole
