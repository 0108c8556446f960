"""
Tests for the user directory rules
"""

import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from auth import AuthenticateUser
from errors import (
    NotFoundError, InvalidInputError, SelfDeletionError,
    DuplicateUsernameError, InvalidCredentialsError
)
from user_directory import ListUsers, CreateUser, DeleteUser


def test_seeded_directory_has_no_password_hashes(db_manager):
    users = ListUsers(db_manager)

    assert [user["username"] for user in users] == ["admin", "staff", "leadership"]
    assert [user["role"] for user in users] == ["ADMIN", "STAFF", "LEADERSHIP"]
    for user in users:
        assert set(user.keys()) == {"id", "username", "full_name", "role"}


def test_create_user_hashes_password(db_manager):
    user_id = CreateUser(db_manager, "secretary", "s3cretary!", "Sekretaris", "STAFF")

    identity = AuthenticateUser(db_manager, "secretary", "s3cretary!")
    assert identity["id"] == user_id
    assert identity["role"] == "STAFF"

    with pytest.raises(InvalidCredentialsError):
        AuthenticateUser(db_manager, "secretary", "wrong-password")


def test_duplicate_username_rejected(db_manager):
    with pytest.raises(DuplicateUsernameError):
        CreateUser(db_manager, "staff", "another-pass", "Second Staff", "STAFF")

    assert len(ListUsers(db_manager)) == 3


def test_create_user_validation(db_manager):
    with pytest.raises(InvalidInputError):
        CreateUser(db_manager, "ab", "long-enough", "Name", "STAFF")
    with pytest.raises(InvalidInputError):
        CreateUser(db_manager, "valid_name", "short", "Name", "STAFF")
    with pytest.raises(InvalidInputError):
        CreateUser(db_manager, "valid_name", "long-enough", " ", "STAFF")
    with pytest.raises(InvalidInputError):
        CreateUser(db_manager, "valid_name", "long-enough", "Name", "OWNER")


def test_admin_cannot_delete_self(db_manager, user_ids):
    with pytest.raises(SelfDeletionError):
        DeleteUser(db_manager, user_ids["admin"], actor_id=user_ids["admin"])

    assert "admin" in [user["username"] for user in ListUsers(db_manager)]


def test_delete_user(db_manager, user_ids):
    assert DeleteUser(db_manager, user_ids["staff"], actor_id=user_ids["admin"]) == "staff"
    assert "staff" not in [user["username"] for user in ListUsers(db_manager)]

    with pytest.raises(NotFoundError):
        DeleteUser(db_manager, user_ids["staff"], actor_id=user_ids["admin"])


def test_unknown_user_cannot_log_in(db_manager):
    with pytest.raises(InvalidCredentialsError):
        AuthenticateUser(db_manager, "nobody", "whatever1")
