"""
Arsip Server - Letter Database Model

Letter model for archived incoming and outgoing correspondence.
"""

from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, DateTime, Date, Index
from sqlalchemy.orm import relationship

from models.database.base import Base, IsoFormat


class Letter(Base):
    """
    Letters table - one row per archived letter
    letter_number is unique across both directions
    """
    __tablename__ = "letters"

    id = Column(Integer, primary_key=True, autoincrement=True)
    type = Column(String, nullable=False)  # 'INCOMING' or 'OUTGOING'
    letter_number = Column(String, unique=True, nullable=False)
    subject = Column(String, nullable=False)
    sender = Column(String, nullable=False)
    recipient = Column(String, nullable=False)
    date = Column(Date, nullable=False)  # Date written on the letter, not the archival time
    category = Column(String, nullable=False)
    status = Column(String, nullable=False, default="PENDING")  # 'PENDING', 'PROCESSED', 'COMPLETED'
    file_path = Column(String, nullable=True)  # Relative to the storage root
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    # Relationships
    dispositions = relationship(
        "Disposition",
        back_populates="letter",
        order_by="Disposition.created_at",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        Index('idx_letters_type_created', 'type', 'created_at'),
        Index('idx_letters_status', 'status'),
        Index('idx_letters_date', 'date'),
        {"sqlite_autoincrement": True}
    )

    def ToDict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type,
            "letter_number": self.letter_number,
            "subject": self.subject,
            "sender": self.sender,
            "recipient": self.recipient,
            "date": IsoFormat(self.date),
            "category": self.category,
            "status": self.status,
            "file_path": self.file_path,
            "created_at": IsoFormat(self.created_at),
        }
