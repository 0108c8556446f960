"""
Arsip Server - Dashboard Stats API Model
"""

from pydantic import BaseModel


class StatsResponse(BaseModel):
    """Dashboard counts; processed counts every letter that has left PENDING"""
    incoming: int
    outgoing: int
    pending: int
    processed: int
    completed: int
