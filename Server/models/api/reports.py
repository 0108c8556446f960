"""
Arsip Server - Report API Models

Rows handed to the client for spreadsheet and PDF export.
"""

from pydantic import BaseModel

from models.enums import LetterType, LetterStatus


class ReportRow(BaseModel):
    letter_number: str
    subject: str
    type: LetterType
    date: str
    status: LetterStatus
    sender: str
    recipient: str
    category: str
