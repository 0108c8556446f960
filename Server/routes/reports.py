"""
Arsip Server - Report Endpoints

Letter rows for the periodic report export.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query

from models.auth import TokenData
from models.api import ReportRow
from auth import GetCurrentUser
from reports import GetReportRows


# Create router instance
router = APIRouter()


@router.get("/api/reports/letters", response_model=List[ReportRow], tags=["Reports"])
async def report_letters(
    start: str = Query(..., description="First letter date, YYYY-MM-DD"),
    end: str = Query(..., description="Last letter date, YYYY-MM-DD"),
    type: Optional[str] = Query(None, description="INCOMING, OUTGOING or ALL"),
    current_user: TokenData = Depends(GetCurrentUser)
):
    """Letters dated within the period, ordered by date then number"""
    from database import db_manager

    return GetReportRows(db_manager, start, end, letter_type=type)
