"""
Arsip Server - Letter Reports

Rows for the periodic report that the client renders as a spreadsheet or
PDF. Filtering is by the date written on the letter, not the archival time.
"""

from typing import List

from errors import InvalidInputError
from letter_registry import ParseLetterDate, ParseLetterType
from managers.database_manager import DatabaseManager
from models.database import Letter


def GetReportRows(db_manager: DatabaseManager, start, end, letter_type=None) -> List[dict]:
    """
    Letters dated within [start, end], ordered by date then number

    Args:
        db_manager: DatabaseManager instance
        start: First letter date included (date or YYYY-MM-DD)
        end: Last letter date included (date or YYYY-MM-DD)
        letter_type: INCOMING or OUTGOING, or None/"ALL" for both

    Returns:
        List[dict]: Report rows

    Raises:
        InvalidInputError: If a date is malformed or start is after end
    """
    start = ParseLetterDate(start)
    end = ParseLetterDate(end)
    if start > end:
        raise InvalidInputError("Report start date is after its end date")

    session = db_manager.GetSession()
    try:
        query = session.query(Letter).filter(Letter.date >= start, Letter.date <= end)
        if letter_type and letter_type != "ALL":
            query = query.filter(Letter.type == ParseLetterType(letter_type).value)

        return [
            {
                "letter_number": letter.letter_number,
                "subject": letter.subject,
                "type": letter.type,
                "date": letter.date.isoformat(),
                "status": letter.status,
                "sender": letter.sender,
                "recipient": letter.recipient,
                "category": letter.category,
            }
            for letter in query.order_by(Letter.date.asc(), Letter.letter_number.asc()).all()
        ]
    finally:
        session.close()
