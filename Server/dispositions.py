"""
Arsip Server - Disposition Router

Routes a letter from the acting user to another user with instructions and
moves a PENDING letter to PROCESSED in the same transaction.

Dispositions keep a snapshot of both display names. History is read with an
outer join so the live name is shown while the user exists and the snapshot
after the account is deleted.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import aliased

from errors import NotFoundError, ForbiddenError
from letter_lifecycle import AdvanceStatus, LetterEvent
from managers.database_manager import DatabaseManager
from models.database import Letter, Disposition, User
from models.database.base import IsoFormat

logger = logging.getLogger(__name__)


def RouteLetter(db_manager: DatabaseManager, letter_id: int, actor_id: int,
                to_user_id: int, notes: Optional[str] = None) -> int:
    """
    Create a disposition from the acting user

    Args:
        db_manager: DatabaseManager instance
        letter_id: Letter being routed
        actor_id: Authenticated user performing the routing
        to_user_id: Recipient user
        notes: Instructions for the recipient

    Returns:
        int: id of the new disposition

    Raises:
        NotFoundError: If the letter or the recipient does not exist
        ForbiddenError: If the acting account no longer exists
    """
    session = db_manager.GetSession()

    try:
        letter = session.get(Letter, letter_id)
        if not letter:
            raise NotFoundError("Letter not found")

        recipient = session.get(User, to_user_id)
        if not recipient:
            raise NotFoundError("Recipient user not found")

        actor = session.get(User, actor_id)
        if not actor:
            raise ForbiddenError("Acting user no longer exists")

        disposition = Disposition(
            letter_id=letter.id,
            from_user_id=actor.id,
            to_user_id=recipient.id,
            from_name=actor.full_name,
            to_name=recipient.full_name,
            notes=notes,
            created_at=datetime.now(timezone.utc)
        )
        session.add(disposition)

        old_status = letter.status
        letter.status = AdvanceStatus(old_status, LetterEvent.ROUTE).value

        session.commit()

        logger.info(
            f"Letter {letter.letter_number} routed from '{actor.username}' to '{recipient.username}'"
            + (f" ({old_status} -> {letter.status})" if old_status != letter.status else "")
        )
        return disposition.id

    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def ListDispositions(db_manager: DatabaseManager, letter_id: int) -> List[dict]:
    """
    Disposition history of a letter, oldest first

    Args:
        db_manager: DatabaseManager instance
        letter_id: Letter whose history to read

    Returns:
        List[dict]: Dispositions with from_name and to_name. Empty when the
                    letter has no history or no longer exists.
    """
    from_user = aliased(User)
    to_user = aliased(User)

    session = db_manager.GetSession()
    try:
        rows = session.query(
            Disposition,
            func.coalesce(from_user.full_name, Disposition.from_name),
            func.coalesce(to_user.full_name, Disposition.to_name)
        ).outerjoin(
            from_user, Disposition.from_user_id == from_user.id
        ).outerjoin(
            to_user, Disposition.to_user_id == to_user.id
        ).filter(
            Disposition.letter_id == letter_id
        ).order_by(
            Disposition.created_at.asc(), Disposition.id.asc()
        ).all()

        history = []
        for disposition, from_name, to_name in rows:
            history.append({
                "id": disposition.id,
                "letter_id": disposition.letter_id,
                "from_user_id": disposition.from_user_id,
                "to_user_id": disposition.to_user_id,
                "from_name": from_name,
                "to_name": to_name,
                "notes": disposition.notes,
                "created_at": IsoFormat(disposition.created_at)
            })
        return history

    finally:
        session.close()
