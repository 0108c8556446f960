"""
Arsip Server - Letter API Models

Pydantic models for letter registry endpoints.
Letter creation is multipart form data and has no request model.
"""

from typing import Optional
from pydantic import BaseModel

from models.enums import LetterType, LetterStatus


class LetterResponse(BaseModel):
    id: int
    type: LetterType
    letter_number: str
    subject: str
    sender: str
    recipient: str
    date: str
    category: str
    status: LetterStatus
    file_path: Optional[str] = None
    created_at: str


class UpdateLetterStatusRequest(BaseModel):
    """Request model for moving a letter forward in its lifecycle"""
    status: LetterStatus


class NextNumberResponse(BaseModel):
    number: str


class CreatedResponse(BaseModel):
    id: int
