"""
Arsip Server - Letter Registry

This module owns the letter records:
- Creation with optional attachment reference
- Letter number suggestion and server-side number reservation
- Lookup, filtered listing and search
- Status changes through the lifecycle state machine
- Deletion together with dispositions and attachment

Letter numbers have the form {sequence}/{code}/{year}, e.g. 001/SM/2025.
"""

import logging
from datetime import date, datetime, timezone
from pathlib import Path
from typing import List, Optional
from zoneinfo import ZoneInfo

from sqlalchemy import or_, update
from sqlalchemy.exc import IntegrityError

from config import settings
from errors import (
    NotFoundError, InvalidInputError, ConstraintViolationError, DuplicateNumberError
)
from file_storage import (
    GetAttachmentPath, StageAttachmentRemoval, RestoreStagedAttachment, DiscardStagedAttachment
)
from letter_lifecycle import AdvanceStatus, EventForRequestedStatus
from managers.database_manager import DatabaseManager
from models.database import Letter, Disposition, LetterSequence
from models.enums import LetterType, LetterStatus, LETTER_NUMBER_CODES

logger = logging.getLogger(__name__)


# ==================== Input Parsing ====================

def ParseLetterType(value) -> LetterType:
    """
    Validate a letter direction

    Raises:
        InvalidInputError: If value is not INCOMING or OUTGOING
    """
    try:
        return LetterType(value)
    except ValueError:
        raise InvalidInputError(f"Invalid letter type: {value}. Must be INCOMING or OUTGOING")


def ParseLetterDate(value) -> date:
    """
    Parse the calendar date written on a letter (YYYY-MM-DD)

    Raises:
        InvalidInputError: If value is not an ISO date
    """
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError:
        raise InvalidInputError(f"Invalid letter date: {value}. Expected YYYY-MM-DD")


def _RequireText(**fields) -> None:
    missing = [name for name, value in fields.items() if value is None or not str(value).strip()]
    if missing:
        raise InvalidInputError(f"Missing required field(s): {', '.join(missing)}")


def _EscapeLike(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


# ==================== Numbering ====================

def FormatLetterNumber(sequence: int, letter_type: LetterType, year: int) -> str:
    """Format e.g. (1, INCOMING, 2025) as 001/SM/2025"""
    return f"{sequence:03d}/{LETTER_NUMBER_CODES[letter_type]}/{year}"


def CurrentYear() -> int:
    """Calendar year at the office (ARSIP_OFFICE_TIMEZONE)"""
    return datetime.now(ZoneInfo(settings.office_timezone)).year


def _YearBounds(year: int):
    """
    Start and end of an office calendar year as UTC timestamps

    created_at is stored in UTC without an offset, so the bounds are
    returned the same way.
    """
    zone = ZoneInfo(settings.office_timezone)
    start = datetime(year, 1, 1, tzinfo=zone).astimezone(timezone.utc)
    end = datetime(year + 1, 1, 1, tzinfo=zone).astimezone(timezone.utc)
    return start.replace(tzinfo=None), end.replace(tzinfo=None)


def _CountLettersInYear(session, letter_type: LetterType, year: int) -> int:
    """Count letters of a type archived during an office calendar year"""
    start, end = _YearBounds(year)
    return session.query(Letter).filter(
        Letter.type == letter_type.value,
        Letter.created_at >= start,
        Letter.created_at < end
    ).count()


def SuggestNextNumber(db_manager: DatabaseManager, letter_type) -> str:
    """
    Suggest the next letter number for a direction

    The sequence is the number of letters of this type archived in the
    current year plus one. The suggestion is advisory: nothing is reserved,
    and a colliding number is rejected later by CreateLetter.

    Args:
        db_manager: DatabaseManager instance
        letter_type: INCOMING or OUTGOING

    Returns:
        str: Candidate number, e.g. "002/SM/2025"
    """
    letter_type = ParseLetterType(letter_type)
    year = CurrentYear()

    session = db_manager.GetSession()
    try:
        count = _CountLettersInYear(session, letter_type, year)
        return FormatLetterNumber(count + 1, letter_type, year)
    finally:
        session.close()


def ReserveNextNumber(session, letter_type: LetterType) -> str:
    """
    Reserve a letter number inside an open transaction

    Increments the (type, year) counter with a single UPDATE so concurrent
    writers serialize on it. A new counter starts from the number of letters
    already archived this year. Numbers already taken (entered by hand) are
    skipped.

    Args:
        session: SQLAlchemy session with an open transaction
        letter_type: INCOMING or OUTGOING

    Returns:
        str: Reserved letter number
    """
    year = CurrentYear()

    while True:
        result = session.execute(
            update(LetterSequence)
            .where(LetterSequence.type == letter_type.value, LetterSequence.year == year)
            .values(last_value=LetterSequence.last_value + 1)
        )
        if result.rowcount == 0:
            session.add(LetterSequence(
                type=letter_type.value,
                year=year,
                last_value=_CountLettersInYear(session, letter_type, year) + 1
            ))
            session.flush()

        sequence = session.get(LetterSequence, (letter_type.value, year), populate_existing=True)
        candidate = FormatLetterNumber(sequence.last_value, letter_type, year)

        taken = session.query(Letter.id).filter(Letter.letter_number == candidate).first()
        if not taken:
            return candidate


# ==================== Create / Read ====================

def CreateLetter(db_manager: DatabaseManager, letter_type, letter_number: Optional[str],
                 subject: str, sender: str, recipient: str, letter_date, category: str,
                 file_path: Optional[str] = None) -> int:
    """
    Archive a new letter with status PENDING

    Args:
        db_manager: DatabaseManager instance
        letter_type: INCOMING or OUTGOING
        letter_number: Unique number; reserved by the server when blank
        subject, sender, recipient, category: Letter details
        letter_date: Date written on the letter (date or YYYY-MM-DD)
        file_path: Stored attachment reference, if any

    Returns:
        int: id of the new letter

    Raises:
        InvalidInputError: If a field is missing or malformed
        DuplicateNumberError: If the letter number already exists
    """
    letter_type = ParseLetterType(letter_type)
    _RequireText(subject=subject, sender=sender, recipient=recipient, category=category)
    letter_date = ParseLetterDate(letter_date)

    session = db_manager.GetSession()

    try:
        if letter_number is None or not letter_number.strip():
            letter_number = ReserveNextNumber(session, letter_type)

        letter = Letter(
            type=letter_type.value,
            letter_number=letter_number.strip(),
            subject=subject.strip(),
            sender=sender.strip(),
            recipient=recipient.strip(),
            date=letter_date,
            category=category.strip(),
            status=LetterStatus.PENDING.value,
            file_path=file_path,
            created_at=datetime.now(timezone.utc)
        )
        session.add(letter)
        session.commit()

        logger.info(f"Archived {letter_type.value} letter {letter.letter_number} (id {letter.id})")
        return letter.id

    except IntegrityError as e:
        session.rollback()
        message = str(e.orig)
        logger.warning(f"Rejected letter {letter_number}: {message}")
        if "letter_number" in message:
            raise DuplicateNumberError(message)
        raise ConstraintViolationError(message)
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def GetLetter(db_manager: DatabaseManager, letter_id: int) -> dict:
    """
    Get a single letter

    Raises:
        NotFoundError: If the letter does not exist
    """
    session = db_manager.GetSession()
    try:
        letter = session.get(Letter, letter_id)
        if not letter:
            raise NotFoundError("Letter not found")
        return letter.ToDict()
    finally:
        session.close()


def ListLetters(db_manager: DatabaseManager, letter_type=None, search: Optional[str] = None) -> List[dict]:
    """
    List letters, newest archived first

    Args:
        db_manager: DatabaseManager instance
        letter_type: Restrict to INCOMING or OUTGOING (optional)
        search: Case-insensitive substring matched against subject,
                letter number, sender and recipient (optional)

    Returns:
        List[dict]: Matching letters
    """
    session = db_manager.GetSession()
    try:
        query = session.query(Letter)

        if letter_type:
            query = query.filter(Letter.type == ParseLetterType(letter_type).value)

        if search:
            pattern = f"%{_EscapeLike(search)}%"
            query = query.filter(or_(
                Letter.subject.ilike(pattern, escape="\\"),
                Letter.letter_number.ilike(pattern, escape="\\"),
                Letter.sender.ilike(pattern, escape="\\"),
                Letter.recipient.ilike(pattern, escape="\\")
            ))

        letters = query.order_by(Letter.created_at.desc(), Letter.id.desc()).all()
        return [letter.ToDict() for letter in letters]
    finally:
        session.close()


# ==================== Status ====================

def SetLetterStatus(db_manager: DatabaseManager, letter_id: int, requested_status) -> str:
    """
    Move a letter forward to the requested status

    Args:
        db_manager: DatabaseManager instance
        letter_id: Letter to update
        requested_status: PROCESSED or COMPLETED

    Returns:
        str: New status

    Raises:
        NotFoundError: If the letter does not exist
        InvalidTransitionError: If the change would not move the letter forward
    """
    event = EventForRequestedStatus(requested_status)

    session = db_manager.GetSession()
    try:
        letter = session.get(Letter, letter_id)
        if not letter:
            raise NotFoundError("Letter not found")

        old_status = letter.status
        letter.status = AdvanceStatus(old_status, event).value
        session.commit()

        logger.info(f"Letter {letter.letter_number} moved from {old_status} to {letter.status}")
        return letter.status

    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


# ==================== Delete ====================

def DeleteLetter(db_manager: DatabaseManager, letter_id: int) -> None:
    """
    Delete a letter, its dispositions and its attachment

    Database rows go in one transaction. The attachment is moved aside
    before commit and put back if the transaction fails, so a failed
    deletion leaves letter, history and file intact.

    Raises:
        NotFoundError: If the letter does not exist
    """
    session = db_manager.GetSession()
    staged_path = None

    try:
        letter = session.get(Letter, letter_id)
        if not letter:
            raise NotFoundError("Letter not found")

        letter_number = letter.letter_number
        file_path = letter.file_path

        removed = session.query(Disposition).filter(
            Disposition.letter_id == letter_id
        ).delete(synchronize_session=False)
        session.delete(letter)
        session.flush()

        if file_path:
            staged_path = StageAttachmentRemoval(file_path)

        session.commit()

    except Exception:
        session.rollback()
        RestoreStagedAttachment(staged_path)
        raise
    finally:
        session.close()

    DiscardStagedAttachment(staged_path)
    logger.info(f"Deleted letter {letter_number} (id {letter_id}) with {removed} disposition(s)")


# ==================== Attachment ====================

def GetLetterAttachment(db_manager: DatabaseManager, letter_id: int) -> Path:
    """
    Resolve the stored attachment of a letter

    Raises:
        NotFoundError: If the letter has no attachment or the file is missing
    """
    letter = GetLetter(db_manager, letter_id)
    if not letter["file_path"]:
        raise NotFoundError("Letter has no attachment")

    file_path = GetAttachmentPath(letter["file_path"])
    if not file_path.exists():
        logger.error(f"Attachment {letter['file_path']} of letter {letter_id} is missing")
        raise NotFoundError("Attachment file not found")
    return file_path
