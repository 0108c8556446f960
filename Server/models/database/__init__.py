"""
Arsip Server - Database Models Package

This package contains all SQLAlchemy database model definitions.
All models share a common declarative base for proper table relationships.
"""

# Import Base first
from models.database.base import Base

# Import all models
from models.database.user import User
from models.database.letter import Letter
from models.database.disposition import Disposition
from models.database.letter_sequence import LetterSequence
from models.database.setting import Setting

# Export all models and Base
__all__ = [
    'Base',
    'User',
    'Letter',
    'Disposition',
    'LetterSequence',
    'Setting',
]
