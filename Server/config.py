"""
Arsip Server - Configuration

Deployment configuration loaded from environment variables (prefix ARSIP_)
or a local .env file. Runtime settings that administrators may tune live in
the settings table instead (see managers/database_manager.py).
"""

import secrets
from typing import List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerConfig(BaseSettings):
    """Environment-level server configuration"""
    model_config = SettingsConfigDict(env_prefix="ARSIP_", env_file=".env", extra="ignore")

    # Storage locations
    database_path: str = "database/arsip.db"
    storage_root: str = "storage"
    log_dir: str = "logs"

    # Token signing key. A random key means sessions do not survive a restart.
    secret_key: str = Field(default_factory=lambda: secrets.token_urlsafe(32))

    # IANA zone of the office; sets the calendar year used in letter numbers
    office_timezone: str = "UTC"

    # First boot seeding
    admin_password: Optional[str] = None
    seed_demo_users: bool = False

    # HTTP
    cookie_secure: bool = False
    # Front ends on another origin must be listed explicitly; credentials are allowed
    cors_origins: List[str] = []
    host: str = "0.0.0.0"
    port: int = 8000

    @field_validator("office_timezone")
    @classmethod
    def validate_office_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown time zone: {value}")
        return value


settings = ServerConfig()
