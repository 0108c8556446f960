"""
Arsip Server - Disposition API Models

Pydantic models for disposition routing endpoints.
"""

from typing import Optional
from pydantic import BaseModel

from models.api.identifiers import RecordId


class CreateDispositionRequest(BaseModel):
    """
    Request model for routing a letter to another user
    The sender is always the authenticated user and is not accepted here
    """
    letter_id: RecordId
    to_user_id: RecordId
    notes: Optional[str] = None


class DispositionResponse(BaseModel):
    id: int
    letter_id: int
    from_user_id: Optional[int] = None
    to_user_id: Optional[int] = None
    from_name: str
    to_name: str
    notes: Optional[str] = None
    created_at: str
