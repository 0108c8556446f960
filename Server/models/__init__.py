"""
Arsip Server - Models Package

This package contains all data models for the Arsip server:
- enums: closed value sets (roles, letter types, statuses)
- database: SQLAlchemy database models
- auth: Authentication-related Pydantic models
- api: API endpoint Pydantic models
"""

# Re-export all models for convenient importing
from models.enums import *
from models.database import *
from models.auth import *
from models.api import *
