"""
Arsip Server - User Database Model

User model for authentication and disposition routing.
Stores credentials, role and display name.
"""

from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, DateTime

from models.database.base import Base


class User(Base):
    """
    Users table - stores user credentials and identity
    Role is one of ADMIN, STAFF, LEADERSHIP and is set at creation only
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String, unique=True, nullable=False)
    password_hash = Column(String, nullable=False)
    role = Column(String, nullable=False)
    full_name = Column(String, nullable=False)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    def ToIdentity(self) -> dict:
        """Public identity of the user (never includes the password hash)"""
        return {
            "id": self.id,
            "username": self.username,
            "role": self.role,
            "full_name": self.full_name,
        }
