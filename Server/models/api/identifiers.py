"""
Arsip Server - Record Identifiers

Row ids are SQLite INTEGER primary keys, so anything outside 1..2**63-1
can never name a record and is rejected as invalid input.
"""

from typing import Annotated

from fastapi import Path
from pydantic import Field

MAX_RECORD_ID = 2**63 - 1

# Request body fields
RecordId = Annotated[int, Field(ge=1, le=MAX_RECORD_ID)]

# Path parameters such as /api/letters/{letter_id}
RecordIdPath = Annotated[int, Path(ge=1, le=MAX_RECORD_ID)]
