"""
Arsip Server - Database Manager

This module manages database connection, initialization, and password hashing.
"""

import secrets
import string
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
import bcrypt

from models.database import Base, User, Setting
from models.enums import UserRole


# Accounts seeded next to the admin when demo users are requested
DEMO_USERS = [
    ("staff", "staff123", UserRole.STAFF, "Staff Arsip"),
    ("leadership", "leadership123", UserRole.LEADERSHIP, "Kepala Instansi"),
]

DEFAULT_SETTINGS = {
    "jwt_expiration_hours": "24",
}


def _EnableForeignKeys(dbapi_connection, connection_record):
    """SQLite ignores foreign keys unless enabled on every connection"""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class DatabaseManager:
    """
    Manages database connection, initialization, and operations
    """

    def __init__(self, db_path: str = "database/arsip.db"):
        """
        Initialize database manager

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = db_path

        # Ensure database directory exists
        db_dir = Path(db_path).parent
        if db_dir and str(db_dir) != '.':
            db_dir.mkdir(parents=True, exist_ok=True)

        self.engine = create_engine(f"sqlite:///{db_path}", echo=False)
        event.listen(self.engine, "connect", _EnableForeignKeys)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine, expire_on_commit=False)

    def InitializeDatabase(self, admin_password: Optional[str] = None, seed_demo_users: bool = False) -> Optional[str]:
        """
        Initialize the database with all tables and default data
        Creates tables if they don't exist, populates default settings,
        and creates the default accounts on first run.

        Args:
            admin_password: Password for the seeded admin account (random if None)
            seed_demo_users: Also seed the staff and leadership demo accounts

        Returns:
            str: Admin password if the admin user was created, None otherwise
        """
        # Create all tables
        Base.metadata.create_all(bind=self.engine)

        session = self.SessionLocal()
        created_password = None

        try:
            # Seed accounts only when no users exist
            is_first_run = session.query(User).count() == 0

            if is_first_run:
                created_password = admin_password or self.GenerateRandomPassword()
                session.add(User(
                    username="admin",
                    password_hash=self.HashPassword(created_password),
                    role=UserRole.ADMIN.value,
                    full_name="Administrator",
                    created_at=datetime.now(timezone.utc)
                ))

                if seed_demo_users:
                    for username, password, role, full_name in DEMO_USERS:
                        session.add(User(
                            username=username,
                            password_hash=self.HashPassword(password),
                            role=role.value,
                            full_name=full_name,
                            created_at=datetime.now(timezone.utc)
                        ))

            self.PopulateDefaultSettings(session)

            session.commit()

        except Exception as e:
            session.rollback()
            raise e
        finally:
            session.close()

        return created_password

    def PopulateDefaultSettings(self, session):
        """
        Populate default runtime settings
        Only adds settings that don't already exist

        Args:
            session: SQLAlchemy session
        """
        for key, value in DEFAULT_SETTINGS.items():
            existing = session.query(Setting).filter(Setting.key == key).first()
            if not existing:
                session.add(Setting(key=key, value=value))

    def GetSettingInt(self, key: str) -> int:
        """
        Read an integer runtime setting, falling back to its default

        Args:
            key: Setting key

        Returns:
            int: Setting value
        """
        session = self.GetSession()
        try:
            setting = session.query(Setting).filter(Setting.key == key).first()
            return int(setting.value) if setting else int(DEFAULT_SETTINGS[key])
        finally:
            session.close()

    @staticmethod
    def GenerateRandomPassword(length: int = 12) -> str:
        """
        Generate a secure random password

        Args:
            length: Password length (default 12)

        Returns:
            str: Generated password
        """
        alphabet = string.ascii_letters + string.digits + "!@#$%^&*"
        return ''.join(secrets.choice(alphabet) for _ in range(length))

    @staticmethod
    def HashPassword(password: str) -> str:
        """
        Hash a password using bcrypt
        Truncates to 72 bytes to comply with bcrypt's maximum password length

        Args:
            password: Plain text password

        Returns:
            str: Hashed password (as string)
        """
        password_bytes = password.encode('utf-8')[:72]
        hashed = bcrypt.hashpw(password_bytes, bcrypt.gensalt())
        return hashed.decode('utf-8')

    @staticmethod
    def VerifyPassword(plain_password: str, hashed_password: str) -> bool:
        """
        Verify a password against a hash (constant time inside bcrypt)

        Args:
            plain_password: Plain text password to verify
            hashed_password: Stored password hash (as string)

        Returns:
            bool: True if password matches, False otherwise
        """
        password_bytes = plain_password.encode('utf-8')[:72]
        return bcrypt.checkpw(password_bytes, hashed_password.encode('utf-8'))

    def GetSession(self):
        """
        Get a new database session

        Returns:
            Session: SQLAlchemy session
        """
        return self.SessionLocal()
