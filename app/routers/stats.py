# app/routers/stats.py
"""Dashboard statistics (data only, rendering is up to the client)."""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.stats import StatsSummaryOut
from app.security import TokenData, requires
from app.services import permissions, stats_service

router = APIRouter()


@router.get("/stats/summary", response_model=StatsSummaryOut, summary="Status counts, stock and sales breakdowns")
def get_summary(year: Optional[int] = Query(None, ge=2000, le=2100),
                month: Optional[int] = Query(None, ge=1, le=12),
                _: TokenData = Depends(requires(permissions.STATS_READ)),
                db: Session = Depends(get_db)):
    """Sales figures are filtered by sale date; month is ignored without a year."""
    return stats_service.summary(db, year=year, month=month if year else None)
