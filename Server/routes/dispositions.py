"""
Arsip Server - Disposition Endpoints

Routing letters between users and reading a letter's routing history.
"""

import logging
from typing import List
from fastapi import APIRouter, Depends

from models.auth import TokenData
from models.api import CreateDispositionRequest, DispositionResponse, RecordIdPath
from auth import GetCurrentUser
from dispositions import RouteLetter, ListDispositions


# Create logger
logger = logging.getLogger(__name__)

# Create router instance
router = APIRouter()


@router.get("/api/letters/{letter_id}/dispositions", response_model=List[DispositionResponse], tags=["Dispositions"])
async def list_letter_dispositions(
    letter_id: RecordIdPath,
    current_user: TokenData = Depends(GetCurrentUser)
):
    """Routing history of a letter, oldest first"""
    from database import db_manager

    return ListDispositions(db_manager, letter_id)


@router.post("/api/dispositions", tags=["Dispositions"])
async def create_disposition(
    request_data: CreateDispositionRequest,
    current_user: TokenData = Depends(GetCurrentUser)
):
    """
    Route a letter from the current user to another user

    Args:
        request_data: letter_id, to_user_id and notes
        current_user: Authenticated user, recorded as the sender

    Returns:
        Success flag and the new disposition id

    Raises:
        NotFoundError: If the letter or recipient does not exist
    """
    from database import db_manager

    disposition_id = RouteLetter(
        db_manager,
        letter_id=request_data.letter_id,
        actor_id=current_user.id,
        to_user_id=request_data.to_user_id,
        notes=request_data.notes
    )

    return {"success": True, "id": disposition_id}
