# app/routers/matches.py
"""Matches — reserve an in-stock car for a customer, record the sale, unlink."""

from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.database import get_db
from app.models.enums import MatchStatus
from app.schemas.match import MatchCreate, MatchOut, MatchUpdate
from app.security import TokenData, requires
from app.services import match_service, permissions

router = APIRouter()


@router.get("/matches", response_model=list[MatchOut], summary="List matches")
def list_matches(status: Optional[MatchStatus] = None,
                 _: TokenData = Depends(requires(permissions.MATCH_READ)),
                 db: Session = Depends(get_db)):
    return match_service.list_matches(db, status=status)


@router.post("/matches", response_model=MatchOut, status_code=201, summary="Match a car to a customer")
def create_match(body: MatchCreate,
                 _: TokenData = Depends(requires(permissions.MATCH_CREATE)),
                 db: Session = Depends(get_db)):
    """The car must be IN_STOCK. It becomes RESERVED, or SOLD when delivered with a sale date."""
    return match_service.create_match(db, body)


@router.put("/matches/{match_id}", response_model=MatchOut, summary="Edit a match")
def update_match(match_id: int, body: MatchUpdate,
                 _: TokenData = Depends(requires(permissions.MATCH_UPDATE)),
                 db: Session = Depends(get_db)):
    return match_service.update_match(db, match_id, body)


@router.delete("/matches/{match_id}", summary="Unlink a match; the car returns to IN_STOCK")
def delete_match(match_id: int,
                 _: TokenData = Depends(requires(permissions.MATCH_DELETE)),
                 db: Session = Depends(get_db)):
    match_service.delete_match(db, match_id)
    return {"status": "deleted", "id": match_id}
