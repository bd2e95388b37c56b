# app/schemas/match.py
from pydantic import BaseModel, Field
from datetime import date, datetime
from typing import Optional
from app.models.enums import CarStatus, MatchStatus


class MatchFields(BaseModel):
    customer_name: str = Field(min_length=1)
    salesperson: str = Field(min_length=1)
    sale_date: Optional[date] = None
    status: MatchStatus = MatchStatus.WAITING_FOR_CONTRACT
    license_plate: Optional[str] = None
    notes: Optional[str] = None


class MatchCreate(MatchFields):
    car_id: int


class MatchUpdate(MatchFields):
    car_id: Optional[int] = None     # set to move the match to another car


class MatchOut(BaseModel):
    id: int
    car_id: int
    customer_name: str
    salesperson: str
    sale_date: Optional[date]
    status: MatchStatus
    license_plate: Optional[str]
    notes: Optional[str]
    car_status: Optional[CarStatus] = None
    created_at: Optional[datetime]

    class Config:
        from_attributes = True
