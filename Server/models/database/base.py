"""
Arsip Server - Database Base

Declarative base shared by the archive tables, with a constraint naming
convention so unique and foreign key violations name the column involved.
"""

from sqlalchemy import MetaData
from sqlalchemy.orm import declarative_base

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

Base = declarative_base(metadata=MetaData(naming_convention=NAMING_CONVENTION))


def IsoFormat(value):
    """ISO 8601 text for a date or datetime column, None stays None"""
    return value.isoformat() if value else None
