"""
Arsip Server - API Models Package

This package contains Pydantic models for all API endpoints.
"""

from models.api.identifiers import MAX_RECORD_ID, RecordId, RecordIdPath
from models.api.letters import (
    LetterResponse,
    UpdateLetterStatusRequest,
    NextNumberResponse,
    CreatedResponse
)
from models.api.dispositions import CreateDispositionRequest, DispositionResponse
from models.api.user_management import CreateUserRequest, UserResponse
from models.api.stats import StatsResponse
from models.api.reports import ReportRow

__all__ = [
    'MAX_RECORD_ID',
    'RecordId',
    'RecordIdPath',
    'LetterResponse',
    'UpdateLetterStatusRequest',
    'NextNumberResponse',
    'CreatedResponse',
    'CreateDispositionRequest',
    'DispositionResponse',
    'CreateUserRequest',
    'UserResponse',
    'StatsResponse',
    'ReportRow',
]
