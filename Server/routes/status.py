"""
Arsip Server - Status Endpoints

Health check and dashboard statistics.
"""

from datetime import datetime, timezone
from fastapi import APIRouter, Depends

from models.auth import TokenData
from models.api import StatsResponse
from auth import GetCurrentUser
from stats import GetStatsSnapshot


# Create router instance
router = APIRouter()


# ==================== Health Check Endpoint ====================

@router.get("/health", tags=["Status"])
async def health_check():
    """
    Health check endpoint to verify server is running

    Returns:
        dict: Server status information
    """
    return {
        "status": "healthy",
        "service": "Arsip Server",
        "version": "1.0.0",
        "timestamp_utc": datetime.now(timezone.utc).isoformat()
    }


# ==================== Dashboard Endpoint ====================

@router.get("/api/stats", response_model=StatsResponse, tags=["Status"])
async def get_stats(current_user: TokenData = Depends(GetCurrentUser)):
    """
    Dashboard counts: incoming, outgoing, pending, processed, completed
    """
    from database import db_manager

    return GetStatsSnapshot(db_manager)
