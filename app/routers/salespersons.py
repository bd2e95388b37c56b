# app/routers/salespersons.py
from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.database import get_db
from app.models.enums import SalespersonStatus
from app.schemas.salesperson import SalespersonCreate, SalespersonOut, SalespersonUpdate
from app.security import TokenData, requires
from app.services import permissions, salesperson_service

router = APIRouter()


@router.get("/salespersons", response_model=list[SalespersonOut], summary="List salespersons")
def list_salespersons(status: Optional[SalespersonStatus] = None,
                      _: TokenData = Depends(requires(permissions.SALESPERSON_READ)),
                      db: Session = Depends(get_db)):
    """`?status=active` returns only the names offered when creating a match."""
    return salesperson_service.list_salespersons(db, active_only=status == SalespersonStatus.ACTIVE)


@router.post("/salespersons", response_model=SalespersonOut, status_code=201, summary="Add a salesperson")
def create_salesperson(body: SalespersonCreate,
                       _: TokenData = Depends(requires(permissions.SALESPERSON_MANAGE)),
                       db: Session = Depends(get_db)):
    return salesperson_service.create_salesperson(db, body.name)


@router.put("/salespersons/{person_id}", response_model=SalespersonOut, summary="Rename or (de)activate")
def update_salesperson(person_id: int, body: SalespersonUpdate,
                       _: TokenData = Depends(requires(permissions.SALESPERSON_MANAGE)),
                       db: Session = Depends(get_db)):
    return salesperson_service.update_salesperson(db, person_id, body.name, body.status)
