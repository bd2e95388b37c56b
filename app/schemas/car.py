# app/schemas/car.py
from pydantic import BaseModel, Field
from datetime import date, datetime
from typing import List, Optional
from app.models.enums import CarStatus
from app.schemas.match import MatchFields


class CarBase(BaseModel):
    dealer_code: str = Field(min_length=1)
    dealer_name: str = Field(min_length=1)
    model: str = Field(min_length=1)
    vin: str = Field(min_length=1)
    front_motor_no: Optional[str] = None
    rear_motor_no: Optional[str] = None
    battery_no: Optional[str] = None
    engine_no: Optional[str] = None
    color: Optional[str] = None
    car_type: Optional[str] = None
    po_type: Optional[str] = None
    allocation_date: Optional[date] = None
    price: float = Field(default=0, ge=0)


class CarCreate(CarBase):
    status: CarStatus = CarStatus.WAITING_FOR_TRAILER


class CarEdit(CarBase):
    """Full car edit. `match` creates or updates the linked match in the same save."""
    status: CarStatus
    stock_in_date: Optional[date] = None
    stock_location: Optional[str] = None
    stock_no: Optional[str] = None
    match: Optional[MatchFields] = None
    unlink_match: bool = False


class CarOut(BaseModel):
    id: int
    dealer_code: str
    dealer_name: str
    model: str
    vin: str
    front_motor_no: Optional[str]
    rear_motor_no: Optional[str]
    battery_no: Optional[str]
    engine_no: Optional[str]
    color: Optional[str]
    car_type: Optional[str]
    po_type: Optional[str]
    allocation_date: Optional[date]
    price: float
    status: CarStatus
    stock_in_date: Optional[date]
    stock_location: Optional[str]
    stock_no: Optional[str]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True


class StockIn(BaseModel):
    stock_in_date: date
    stock_location: str
    stock_no: Optional[str] = None


class BatchStockIn(StockIn):
    car_ids: List[int] = Field(min_length=1)


class BatchItemError(BaseModel):
    key: str          # VIN for imports, car id for stock-in
    error: str


class BatchResultOut(BaseModel):
    success_count: int
    duplicate_count: int
    error_count: int
    succeeded: List[str]
    duplicates: List[BatchItemError]
    errors: List[BatchItemError]
