"""
Arsip Server - User Directory Endpoints

Any authenticated user can list accounts (disposition targets).
Creating and deleting accounts requires the ADMIN role.
"""

import logging
from typing import List
from fastapi import APIRouter, Depends

from models.auth import TokenData
from models.api import CreateUserRequest, UserResponse, RecordIdPath
from auth import GetCurrentUser, RequireAdmin
from user_directory import ListUsers, CreateUser, DeleteUser

# Create logger
logger = logging.getLogger(__name__)

# Create router instance
router = APIRouter()


@router.get("/api/users", response_model=List[UserResponse], tags=["Users"])
async def list_users(current_user: TokenData = Depends(GetCurrentUser)):
    """List all users without password hashes"""
    from database import db_manager

    return ListUsers(db_manager)


@router.post("/api/users", tags=["Users"])
async def create_user(
    request_data: CreateUserRequest,
    current_user: TokenData = Depends(RequireAdmin)
):
    """
    Create a new user

    Args:
        request_data: username, password, full_name, role
        current_user: Administrator from dependency

    Returns:
        Success message with the new user id
    """
    from database import db_manager

    user_id = CreateUser(
        db_manager,
        username=request_data.username,
        password=request_data.password,
        full_name=request_data.full_name,
        role=request_data.role
    )

    logger.info(f"Admin '{current_user.username}' created user '{request_data.username}' with role {request_data.role.value}")

    return {
        "success": True,
        "id": user_id,
        "message": f"User '{request_data.username}' created successfully"
    }


@router.delete("/api/users/{user_id}", tags=["Users"])
async def delete_user(
    user_id: RecordIdPath,
    current_user: TokenData = Depends(RequireAdmin)
):
    """
    Delete a user

    Args:
        user_id: ID of the user to delete
        current_user: Administrator from dependency

    Returns:
        Success message
    """
    from database import db_manager

    username = DeleteUser(db_manager, user_id, actor_id=current_user.id)

    logger.info(f"Admin '{current_user.username}' deleted user '{username}'")

    return {
        "success": True,
        "message": f"User '{username}' deleted successfully"
    }
