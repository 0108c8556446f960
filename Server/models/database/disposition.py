"""
Arsip Server - Disposition Database Model

Disposition model for forwarding a letter from one user to another with
instructions. Rows are append-only history attached to a letter.
"""

from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey, Index
from sqlalchemy.orm import relationship

from models.database.base import Base


class Disposition(Base):
    """
    Dispositions table - forwarding records for letters

    from_name/to_name snapshot the display names at creation so that the
    history stays readable after either user account is deleted
    """
    __tablename__ = "dispositions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    letter_id = Column(Integer, ForeignKey("letters.id", ondelete="CASCADE"), nullable=False)
    from_user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    to_user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    from_name = Column(String, nullable=False)
    to_name = Column(String, nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    # Relationships
    letter = relationship("Letter", back_populates="dispositions")

    __table_args__ = (
        Index('idx_dispositions_letter', 'letter_id', 'created_at'),
        {"sqlite_autoincrement": True}
    )
