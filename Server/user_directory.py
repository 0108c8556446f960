"""
Arsip Server - User Directory

Lists accounts for disposition targets and lets administrators create and
delete accounts. Role checks happen in the route dependencies; this module
enforces the data rules (unique username, no self deletion).
"""

import logging
import re
from datetime import datetime, timezone
from typing import List

from sqlalchemy.exc import IntegrityError

from errors import (
    NotFoundError, InvalidInputError, SelfDeletionError,
    ConstraintViolationError, DuplicateUsernameError
)
from managers.database_manager import DatabaseManager
from models.database import User
from models.enums import UserRole

logger = logging.getLogger(__name__)

USERNAME_PATTERN = re.compile(r'^[a-zA-Z0-9_]{3,50}$')
MIN_PASSWORD_LENGTH = 8


def ListUsers(db_manager: DatabaseManager) -> List[dict]:
    """All users as public identities, ordered by id"""
    session = db_manager.GetSession()
    try:
        return [user.ToIdentity() for user in session.query(User).order_by(User.id).all()]
    finally:
        session.close()


def CreateUser(db_manager: DatabaseManager, username: str, password: str,
               full_name: str, role) -> int:
    """
    Create a user account

    Args:
        db_manager: DatabaseManager instance
        username: 3-50 letters, digits or underscores
        password: Plain text password (hashed before storage)
        full_name: Display name
        role: ADMIN, STAFF or LEADERSHIP

    Returns:
        int: id of the new user

    Raises:
        InvalidInputError: If a field is missing or malformed
        DuplicateUsernameError: If the username is taken
    """
    if not username or not USERNAME_PATTERN.match(username):
        raise InvalidInputError(
            "Username must be 3-50 characters and contain only letters, numbers, and underscores"
        )
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise InvalidInputError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    if not full_name or not full_name.strip():
        raise InvalidInputError("Full name is required")
    try:
        role = UserRole(role)
    except ValueError:
        raise InvalidInputError(f"Invalid role: {role}")

    session = db_manager.GetSession()

    try:
        user = User(
            username=username,
            password_hash=db_manager.HashPassword(password),
            role=role.value,
            full_name=full_name.strip(),
            created_at=datetime.now(timezone.utc)
        )
        session.add(user)
        session.commit()
        return user.id

    except IntegrityError as e:
        session.rollback()
        message = str(e.orig)
        if "username" in message:
            raise DuplicateUsernameError(f"User '{username}' already exists")
        raise ConstraintViolationError(message)
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def DeleteUser(db_manager: DatabaseManager, user_id: int, actor_id: int) -> str:
    """
    Delete a user account

    Dispositions that reference the user keep their name snapshots; their
    user references are set to NULL by the database.

    Args:
        db_manager: DatabaseManager instance
        user_id: Account to delete
        actor_id: Administrator performing the deletion

    Returns:
        str: Username of the deleted account

    Raises:
        SelfDeletionError: If user_id is the actor's own id
        NotFoundError: If the user does not exist
    """
    if user_id == actor_id:
        raise SelfDeletionError("Cannot delete your own account")

    session = db_manager.GetSession()

    try:
        user = session.get(User, user_id)
        if not user:
            raise NotFoundError(f"User with ID {user_id} not found")

        username = user.username
        session.delete(user)
        session.commit()
        return username

    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
