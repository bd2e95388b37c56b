# app/routers/cars.py
"""
Cars — allocation entry, batch import, stock-in/out and deletion.
Specific paths (/cars/batch, /cars/batch-stock) are declared before /cars/{car_id}.
"""

from typing import Any, List, Optional
from fastapi import APIRouter, Body, Depends, HTTPException
from sqlalchemy.orm import Session
from app.database import get_db
from app.models.enums import CarStatus
from app.schemas.car import BatchResultOut, BatchStockIn, CarCreate, CarEdit, CarOut, StockIn
from app.security import TokenData, requires
from app.services import car_service, permissions

router = APIRouter()


@router.get("/cars", response_model=list[CarOut], summary="List cars")
def list_cars(status: Optional[CarStatus] = None, stock_location: Optional[str] = None,
              _: TokenData = Depends(requires(permissions.CAR_READ)),
              db: Session = Depends(get_db)):
    return car_service.list_cars(db, status=status, stock_location=stock_location)


@router.post("/cars", response_model=CarOut, status_code=201, summary="Allocate a new car")
def create_car(body: CarCreate,
               _: TokenData = Depends(requires(permissions.CAR_CREATE)),
               db: Session = Depends(get_db)):
    return car_service.create_car(db, body)


@router.post("/cars/batch", response_model=BatchResultOut, summary="Batch import allocation rows")
def import_cars(rows: List[Any] = Body(...),
                _: TokenData = Depends(requires(permissions.CAR_IMPORT)),
                db: Session = Depends(get_db)):
    """
    Rows are validated and inserted one by one. The response always lists
    per-row outcomes; a duplicate VIN never fails the whole batch.
    """
    if not rows:
        raise HTTPException(status_code=400, detail="No cars provided for import.")
    return car_service.import_cars(db, rows).as_dict()


@router.put("/cars/batch-stock", response_model=BatchResultOut, summary="Stock-in several cars")
def batch_stock_in(body: BatchStockIn,
                   _: TokenData = Depends(requires(permissions.STOCK_UPDATE)),
                   db: Session = Depends(get_db)):
    result = car_service.batch_stock_in(db, body.car_ids, body.stock_in_date,
                                        body.stock_location, body.stock_no)
    return result.as_dict()


@router.get("/cars/{car_id}", response_model=CarOut, summary="Get one car")
def get_car(car_id: int,
            _: TokenData = Depends(requires(permissions.CAR_READ)),
            db: Session = Depends(get_db)):
    return car_service.get_car(db, car_id)


@router.put("/cars/{car_id}", response_model=CarOut, summary="Edit a car (optionally with its match)")
def update_car(car_id: int, body: CarEdit,
               current_user: TokenData = Depends(requires(permissions.CAR_UPDATE)),
               db: Session = Depends(get_db)):
    if body.match is not None or body.unlink_match:
        op = permissions.MATCH_DELETE if body.unlink_match else permissions.MATCH_UPDATE
        permissions.require(current_user.role, op)
    return car_service.update_car(db, car_id, body)


@router.delete("/cars/{car_id}", summary="Delete a car (allocation) or remove it from stock (view=stock)")
def delete_car(car_id: int, view: str = "allocation",
               current_user: TokenData = Depends(requires(permissions.CAR_READ)),
               db: Session = Depends(get_db)):
    if view == "stock":
        permissions.require(current_user.role, permissions.STOCK_UPDATE)
        car = car_service.remove_from_stock(db, car_id)
        return {"status": "removed_from_stock", "id": car_id, "car_status": car.status.value}
    if view != "allocation":
        raise HTTPException(status_code=400, detail=f"Unknown view '{view}'")
    permissions.require(current_user.role, permissions.CAR_DELETE)
    car_service.delete_car(db, car_id)
    return {"status": "deleted", "id": car_id}


@router.put("/cars/{car_id}/stock", response_model=CarOut, summary="Stock-in a single car")
def stock_in(car_id: int, body: StockIn,
             _: TokenData = Depends(requires(permissions.STOCK_UPDATE)),
             db: Session = Depends(get_db)):
    car, _changed = car_service.stock_in(db, car_id, body.stock_in_date, body.stock_location, body.stock_no)
    return car


@router.delete("/cars/{car_id}/stock", response_model=CarOut, summary="Remove a car from stock")
def remove_from_stock(car_id: int,
                      _: TokenData = Depends(requires(permissions.STOCK_UPDATE)),
                      db: Session = Depends(get_db)):
    return car_service.remove_from_stock(db, car_id)
