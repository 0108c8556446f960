"""
Arsip Server - Dashboard Statistics

Counts shown on the dashboard. Each count is its own query, so the numbers
may not describe a single instant while letters are being written.
"""

from managers.database_manager import DatabaseManager
from models.database import Letter
from models.enums import LetterType, LetterStatus


def GetStatsSnapshot(db_manager: DatabaseManager) -> dict:
    """
    Count letters by direction and by lifecycle position

    Returns:
        dict: incoming, outgoing, pending, processed (left PENDING, including
              completed letters) and completed
    """
    session = db_manager.GetSession()
    try:
        incoming = session.query(Letter).filter(Letter.type == LetterType.INCOMING.value).count()
        outgoing = session.query(Letter).filter(Letter.type == LetterType.OUTGOING.value).count()
        pending = session.query(Letter).filter(Letter.status == LetterStatus.PENDING.value).count()
        processed = session.query(Letter).filter(
            Letter.status.in_([LetterStatus.PROCESSED.value, LetterStatus.COMPLETED.value])
        ).count()
        completed = session.query(Letter).filter(Letter.status == LetterStatus.COMPLETED.value).count()

        return {
            "incoming": incoming,
            "outgoing": outgoing,
            "pending": pending,
            "processed": processed,
            "completed": completed,
        }
    finally:
        session.close()
