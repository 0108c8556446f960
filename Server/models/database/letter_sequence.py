"""
Arsip Server - LetterSequence Database Model

Counter of server-assigned letter numbers per direction and year.
"""

from sqlalchemy import Column, Integer, String

from models.database.base import Base


class LetterSequence(Base):
    """
    Letter_sequences table - last sequence value handed out per (type, year)
    Incremented inside the transaction that creates the letter
    """
    __tablename__ = "letter_sequences"

    type = Column(String, primary_key=True)  # 'INCOMING' or 'OUTGOING'
    year = Column(Integer, primary_key=True)
    last_value = Column(Integer, nullable=False, default=0)
