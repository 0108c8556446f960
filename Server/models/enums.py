"""
Arsip Server - Enumerations

Closed value sets shared by database models, API models and services.
Values are stored in the database as their plain string form.
"""

from enum import Enum


class UserRole(str, Enum):
    """Roles a user account can hold"""
    ADMIN = "ADMIN"
    STAFF = "STAFF"
    LEADERSHIP = "LEADERSHIP"


class LetterType(str, Enum):
    """Direction of a letter"""
    INCOMING = "INCOMING"
    OUTGOING = "OUTGOING"


class LetterStatus(str, Enum):
    """Position of a letter in its processing lifecycle"""
    PENDING = "PENDING"
    PROCESSED = "PROCESSED"
    COMPLETED = "COMPLETED"


# Two-letter code used in letter numbers, e.g. 001/SM/2025
LETTER_NUMBER_CODES = {
    LetterType.INCOMING: "SM",
    LetterType.OUTGOING: "SK",
}
