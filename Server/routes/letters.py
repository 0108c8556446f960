"""
Arsip Server - Letter Endpoints

This module contains endpoints for archiving letters, reading and searching
them, moving them through their lifecycle, deleting them and downloading
their attachments.
"""

import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, File as FastAPIFile, UploadFile, Form
from fastapi.responses import FileResponse

from models.auth import TokenData
from models.api import LetterResponse, UpdateLetterStatusRequest, NextNumberResponse, CreatedResponse, RecordIdPath
from auth import GetCurrentUser
from file_storage import StoreAttachment, RemoveAttachment
from letter_registry import (
    SuggestNextNumber, CreateLetter, GetLetter, ListLetters,
    SetLetterStatus, DeleteLetter, GetLetterAttachment
)


# Create logger
logger = logging.getLogger(__name__)

# Create router instance
router = APIRouter()


# ==================== Read Endpoints ====================

@router.get("/api/letters/next-number", response_model=NextNumberResponse, tags=["Letters"])
async def next_letter_number(
    type: str = Query(..., description="Letter type: INCOMING or OUTGOING"),
    current_user: TokenData = Depends(GetCurrentUser)
):
    """
    Suggest the next letter number for a direction
    Advisory only; the number is not reserved
    """
    from database import db_manager

    return {"number": SuggestNextNumber(db_manager, type)}


@router.get("/api/letters/{letter_id}", response_model=LetterResponse, tags=["Letters"])
async def get_letter(
    letter_id: RecordIdPath,
    current_user: TokenData = Depends(GetCurrentUser)
):
    """Get a single letter"""
    from database import db_manager

    return GetLetter(db_manager, letter_id)


@router.get("/api/letters", response_model=List[LetterResponse], tags=["Letters"])
async def list_letters(
    type: Optional[str] = Query(None, description="Letter type: INCOMING or OUTGOING"),
    search: Optional[str] = Query(None, description="Text matched against subject, number, sender and recipient"),
    current_user: TokenData = Depends(GetCurrentUser)
):
    """
    List letters, newest archived first

    Args:
        type: Optional direction filter
        search: Optional case-insensitive search text
        current_user: Authenticated user

    Returns:
        List[LetterResponse]: Matching letters
    """
    from database import db_manager

    return ListLetters(db_manager, letter_type=type or None, search=search or None)


@router.get("/api/letters/{letter_id}/file", tags=["Letters"])
async def download_letter_file(
    letter_id: RecordIdPath,
    current_user: TokenData = Depends(GetCurrentUser)
):
    """Stream the attachment stored with a letter"""
    from database import db_manager

    file_path = GetLetterAttachment(db_manager, letter_id)
    return FileResponse(path=file_path, filename=file_path.name)


# ==================== Write Endpoints ====================

@router.post("/api/letters", response_model=CreatedResponse, tags=["Letters"])
async def create_letter(
    type: str = Form(...),
    subject: str = Form(...),
    sender: str = Form(...),
    recipient: str = Form(...),
    date: str = Form(..., description="Date written on the letter, YYYY-MM-DD"),
    category: str = Form(...),
    letter_number: Optional[str] = Form(None, description="Leave blank to have the server assign one"),
    file: Optional[UploadFile] = FastAPIFile(None),
    current_user: TokenData = Depends(GetCurrentUser)
):
    """
    Archive a new letter (multipart/form-data with an optional file)

    Returns:
        CreatedResponse: id of the new letter

    Raises:
        InvalidInputError: If a field is missing or malformed
        DuplicateNumberError: If the letter number already exists
    """
    from database import db_manager

    file_path = None
    if file is not None and file.filename:
        file_path = await StoreAttachment(file)

    try:
        letter_id = CreateLetter(
            db_manager,
            letter_type=type,
            letter_number=letter_number,
            subject=subject,
            sender=sender,
            recipient=recipient,
            letter_date=date,
            category=category,
            file_path=file_path
        )
    except Exception:
        # The letter was not archived, so its upload has nothing to belong to
        if file_path:
            RemoveAttachment(file_path)
        raise

    logger.info(f"User '{current_user.username}' archived letter {letter_id}")

    return {"id": letter_id}


@router.patch("/api/letters/{letter_id}", tags=["Letters"])
async def update_letter_status(
    letter_id: RecordIdPath,
    request_data: UpdateLetterStatusRequest,
    current_user: TokenData = Depends(GetCurrentUser)
):
    """
    Move a letter forward in its lifecycle

    Raises:
        NotFoundError: If the letter does not exist
        InvalidTransitionError: If the requested status is not a forward move
    """
    from database import db_manager

    new_status = SetLetterStatus(db_manager, letter_id, request_data.status)

    logger.info(f"User '{current_user.username}' set letter {letter_id} to {new_status}")

    return {"success": True, "status": new_status}


@router.delete("/api/letters/{letter_id}", tags=["Letters"])
async def delete_letter(
    letter_id: RecordIdPath,
    current_user: TokenData = Depends(GetCurrentUser)
):
    """
    Delete a letter with its dispositions and attachment

    Raises:
        NotFoundError: If the letter does not exist
    """
    from database import db_manager

    DeleteLetter(db_manager, letter_id)

    logger.info(f"User '{current_user.username}' deleted letter {letter_id}")

    return {"success": True}
