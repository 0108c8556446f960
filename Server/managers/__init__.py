"""
Arsip Server - Managers Package

This package contains the database manager that owns the engine,
session factory, first-run seeding and password hashing.
"""

from managers.database_manager import DatabaseManager

__all__ = ['DatabaseManager']
