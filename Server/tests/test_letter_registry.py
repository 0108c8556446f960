"""
Tests for the letter registry: creation, numbering, search, status and deletion
"""

import sys
from datetime import date, datetime, timezone
from pathlib import Path

import pytest
from pydantic import ValidationError

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from config import settings, ServerConfig
from errors import NotFoundError, InvalidInputError, InvalidTransitionError, DuplicateNumberError
from dispositions import RouteLetter, ListDispositions
from letter_registry import (
    CreateLetter, GetLetter, ListLetters, SuggestNextNumber, SetLetterStatus,
    DeleteLetter, FormatLetterNumber, GetLetterAttachment, CurrentYear, _CountLettersInYear
)
from models.database import Letter, Disposition
from models.enums import LetterType


YEAR = CurrentYear()


def _Create(db_manager, number, letter_type="INCOMING", subject="Meeting invitation",
            sender="Dept A", recipient="Office", file_path=None):
    return CreateLetter(
        db_manager,
        letter_type=letter_type,
        letter_number=number,
        subject=subject,
        sender=sender,
        recipient=recipient,
        letter_date="2025-03-01",
        category="general",
        file_path=file_path
    )


def test_new_letter_is_pending(db_manager):
    """A freshly archived letter always starts PENDING"""
    letter_id = _Create(db_manager, "001/SM/2025")
    letter = GetLetter(db_manager, letter_id)

    assert letter["status"] == "PENDING"
    assert letter["type"] == "INCOMING"
    assert letter["date"] == "2025-03-01"
    assert letter["file_path"] is None
    assert letter["created_at"] is not None


def test_duplicate_number_rejected_and_store_unchanged(db_manager):
    """Letter numbers are unique across both directions"""
    _Create(db_manager, "001/SM/2025")

    with pytest.raises(DuplicateNumberError):
        _Create(db_manager, "001/SM/2025", letter_type="OUTGOING", subject="Other")

    letters = ListLetters(db_manager)
    assert len(letters) == 1
    assert letters[0]["subject"] == "Meeting invitation"


def test_invalid_fields_rejected(db_manager):
    """Unknown type, bad date and blank fields are input errors"""
    with pytest.raises(InvalidInputError):
        _Create(db_manager, "X-1", letter_type="SIDEWAYS")
    with pytest.raises(InvalidInputError):
        _Create(db_manager, "X-2", subject="   ")
    with pytest.raises(InvalidInputError):
        CreateLetter(db_manager, "INCOMING", "X-3", "s", "a", "b", "01/03/2025", "general")

    assert ListLetters(db_manager) == []


def test_suggest_next_number_counts_this_year(db_manager):
    """Suggestions start at 001 and count letters of the same type"""
    assert SuggestNextNumber(db_manager, "INCOMING") == f"001/SM/{YEAR}"
    assert SuggestNextNumber(db_manager, "OUTGOING") == f"001/SK/{YEAR}"

    _Create(db_manager, f"001/SM/{YEAR}")

    assert SuggestNextNumber(db_manager, "INCOMING") == f"002/SM/{YEAR}"
    assert SuggestNextNumber(db_manager, "OUTGOING") == f"001/SK/{YEAR}"


def test_suggestion_ignores_letters_archived_in_other_years(db_manager):
    """Counting uses the archival timestamp, not the letter date"""
    session = db_manager.GetSession()
    try:
        session.add(Letter(
            type="INCOMING", letter_number="099/SM/2001", subject="Old", sender="A",
            recipient="B", date=date(YEAR, 1, 2), category="general", status="PENDING",
            created_at=datetime(2001, 6, 1, tzinfo=timezone.utc)
        ))
        session.commit()
    finally:
        session.close()

    assert SuggestNextNumber(db_manager, "INCOMING") == f"001/SM/{YEAR}"


def test_year_follows_office_timezone(db_manager, monkeypatch):
    """A letter archived on New Year's morning in Jakarta belongs to the new year"""
    session = db_manager.GetSession()
    try:
        # 2025-01-01 01:00 in Asia/Jakarta (UTC+7)
        session.add(Letter(
            type="INCOMING", letter_number="001/SM/2025", subject="New year", sender="A",
            recipient="B", date=date(2025, 1, 1), category="general", status="PENDING",
            created_at=datetime(2024, 12, 31, 18, 0, tzinfo=timezone.utc)
        ))
        session.commit()

        monkeypatch.setattr(settings, "office_timezone", "UTC")
        assert _CountLettersInYear(session, LetterType.INCOMING, 2024) == 1
        assert _CountLettersInYear(session, LetterType.INCOMING, 2025) == 0

        monkeypatch.setattr(settings, "office_timezone", "Asia/Jakarta")
        assert _CountLettersInYear(session, LetterType.INCOMING, 2024) == 0
        assert _CountLettersInYear(session, LetterType.INCOMING, 2025) == 1
    finally:
        session.close()


def test_unknown_office_timezone_is_rejected():
    with pytest.raises(ValidationError):
        ServerConfig(office_timezone="Mars/Olympus_Mons")


def test_suggestion_rejects_unknown_type(db_manager):
    with pytest.raises(InvalidInputError):
        SuggestNextNumber(db_manager, "LATERAL")


def test_blank_number_is_reserved_by_server(db_manager):
    """Server-assigned numbers continue the sequence and skip taken ones"""
    _Create(db_manager, FormatLetterNumber(1, LetterType.INCOMING, YEAR))
    _Create(db_manager, FormatLetterNumber(3, LetterType.INCOMING, YEAR))

    first = GetLetter(db_manager, _Create(db_manager, ""))
    second = GetLetter(db_manager, _Create(db_manager, None))
    outgoing = GetLetter(db_manager, _Create(db_manager, " ", letter_type="OUTGOING"))

    # Two letters already archived: counter starts at 3, which is taken
    assert first["letter_number"] == f"004/SM/{YEAR}"
    assert second["letter_number"] == f"005/SM/{YEAR}"
    assert outgoing["letter_number"] == f"001/SK/{YEAR}"


def test_list_filters_and_order(db_manager):
    """Listing is newest first and type/search filters combine with AND"""
    _Create(db_manager, "001/SM/2025", subject="Annual budget plan")
    _Create(db_manager, "002/SM/2025", subject="Staff outing", sender="BUDGET office")
    _Create(db_manager, "001/SK/2025", letter_type="OUTGOING", subject="Reply", recipient="Budget Committee")
    _Create(db_manager, "BUDGET-7", letter_type="OUTGOING", subject="Misc")
    _Create(db_manager, "003/SM/2025", subject="Unrelated")

    numbers = [letter["letter_number"] for letter in ListLetters(db_manager)]
    assert numbers == ["003/SM/2025", "BUDGET-7", "001/SK/2025", "002/SM/2025", "001/SM/2025"]

    found = {letter["letter_number"] for letter in ListLetters(db_manager, search="budget")}
    assert found == {"001/SM/2025", "002/SM/2025", "001/SK/2025", "BUDGET-7"}

    found = {letter["letter_number"] for letter in ListLetters(db_manager, letter_type="OUTGOING", search="Budget")}
    assert found == {"001/SK/2025", "BUDGET-7"}

    assert len(ListLetters(db_manager, letter_type="INCOMING")) == 3


def test_search_treats_wildcards_literally(db_manager):
    _Create(db_manager, "001/SM/2025", subject="Progress 50% report")
    _Create(db_manager, "002/SM/2025", subject="Progress report")

    found = [letter["letter_number"] for letter in ListLetters(db_manager, search="50%")]
    assert found == ["001/SM/2025"]
    assert ListLetters(db_manager, search="_") == []


def test_get_missing_letter(db_manager):
    with pytest.raises(NotFoundError):
        GetLetter(db_manager, 999)


def test_status_only_moves_forward(db_manager):
    """Explicit status changes go through the lifecycle"""
    letter_id = _Create(db_manager, "001/SM/2025")

    assert SetLetterStatus(db_manager, letter_id, "PROCESSED") == "PROCESSED"
    assert SetLetterStatus(db_manager, letter_id, "COMPLETED") == "COMPLETED"

    with pytest.raises(InvalidTransitionError):
        SetLetterStatus(db_manager, letter_id, "PROCESSED")
    with pytest.raises(InvalidTransitionError):
        SetLetterStatus(db_manager, letter_id, "PENDING")

    assert GetLetter(db_manager, letter_id)["status"] == "COMPLETED"

    with pytest.raises(NotFoundError):
        SetLetterStatus(db_manager, 999, "COMPLETED")


def test_delete_removes_dispositions_and_attachment(db_manager, user_ids, attachment_dir):
    """Deleting a letter leaves no dispositions and no file behind"""
    stored = attachment_dir / "file-1-1.pdf"
    stored.write_bytes(b"%PDF-1.4")

    letter_id = _Create(db_manager, "001/SM/2025", file_path="attachments/file-1-1.pdf")
    other_id = _Create(db_manager, "002/SM/2025")
    RouteLetter(db_manager, letter_id, user_ids["admin"], user_ids["staff"], "Please review")
    RouteLetter(db_manager, letter_id, user_ids["staff"], user_ids["leadership"], "For approval")
    RouteLetter(db_manager, other_id, user_ids["admin"], user_ids["staff"], "Keep")

    assert GetLetterAttachment(db_manager, letter_id) == stored.resolve()

    DeleteLetter(db_manager, letter_id)

    with pytest.raises(NotFoundError):
        GetLetter(db_manager, letter_id)
    assert ListDispositions(db_manager, letter_id) == []
    assert not stored.exists()
    assert list(attachment_dir.iterdir()) == []

    session = db_manager.GetSession()
    try:
        assert session.query(Disposition).count() == 1
    finally:
        session.close()


def test_delete_tolerates_missing_attachment(db_manager):
    """A file that is already gone does not block deletion"""
    letter_id = _Create(db_manager, "001/SM/2025", file_path="attachments/file-gone.pdf")

    DeleteLetter(db_manager, letter_id)

    assert ListLetters(db_manager) == []


def test_delete_missing_letter(db_manager):
    with pytest.raises(NotFoundError):
        DeleteLetter(db_manager, 12345)


def test_delete_failure_restores_attachment(db_manager, attachment_dir, monkeypatch):
    """If the transaction fails the letter and its file are both kept"""
    stored = attachment_dir / "file-2-2.pdf"
    stored.write_bytes(b"scan")
    letter_id = _Create(db_manager, "001/SM/2025", file_path="attachments/file-2-2.pdf")

    from sqlalchemy.orm import Session

    def failing_commit(self):
        raise RuntimeError("disk full")

    with monkeypatch.context() as patch:
        patch.setattr(Session, "commit", failing_commit)
        with pytest.raises(RuntimeError):
            DeleteLetter(db_manager, letter_id)

    assert stored.exists()
    assert GetLetter(db_manager, letter_id)["file_path"] == "attachments/file-2-2.pdf"
