# app/services/car_service.py
"""
Car allocation and stock management.
Status changes go through lifecycle; this module loads state, applies the
planned changes and commits. Batch operations commit per item and report
per-item outcomes instead of failing as a whole.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from pydantic import ValidationError as SchemaValidationError
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import settings
from app.models.car import Car, SERIAL_FIELDS
from app.models.enums import CarStatus
from app.schemas.car import CarCreate, CarEdit
from app.services import lifecycle, match_service
from app.services.errors import ConflictError, LifecycleError, NotFoundError, ValidationError
from app.utils.logger import get_logger

logger = get_logger(__name__)

UNIQUE_FIELDS = ("vin",) + SERIAL_FIELDS

FIELD_LABELS = {
    "vin": "VIN",
    "front_motor_no": "front motor number",
    "rear_motor_no": "rear motor number",
    "battery_no": "battery number",
    "engine_no": "engine number",
}


@dataclass
class BatchResult:
    succeeded: List[str] = field(default_factory=list)
    duplicates: List[dict] = field(default_factory=list)
    errors: List[dict] = field(default_factory=list)

    def as_dict(self) -> dict:
        return {
            "success_count": len(self.succeeded),
            "duplicate_count": len(self.duplicates),
            "error_count": len(self.errors),
            "succeeded": self.succeeded,
            "duplicates": self.duplicates,
            "errors": self.errors,
        }


# ── Helpers ──────────────────────────────────────────────────────────────────

def _normalise(data: dict) -> dict:
    """Strip strings; blank serials and stock numbers become NULL."""
    out = {}
    for key, value in data.items():
        if isinstance(value, str):
            value = value.strip()
            if not value and (key in SERIAL_FIELDS or key in ("stock_no", "stock_location")):
                value = None
        out[key] = value
    return out


def _duplicate_message(field_name: str, value: str) -> str:
    return f"A car with {FIELD_LABELS[field_name]} {value} already exists."


def _find_duplicate(db: Session, data: dict, exclude_id: Optional[int] = None):
    """Returns (field, value) of the first unique field already taken, else None."""
    clauses = [getattr(Car, f) == data[f] for f in UNIQUE_FIELDS if data.get(f)]
    if not clauses:
        return None
    q = db.query(Car).filter(or_(*clauses))
    if exclude_id is not None:
        q = q.filter(Car.id != exclude_id)
    other = q.first()
    if not other:
        return None
    for f in UNIQUE_FIELDS:
        if data.get(f) and getattr(other, f) == data[f]:
            return f, data[f]
    return None


def _check_unique(db: Session, data: dict, exclude_id: Optional[int] = None):
    dup = _find_duplicate(db, data, exclude_id)
    if dup:
        raise ConflictError(_duplicate_message(*dup), field=dup[0])


def _conflict_from_integrity(exc: IntegrityError, data: dict) -> ConflictError:
    detail = str(exc.orig)
    for f in SERIAL_FIELDS + ("vin",):
        if f in detail:
            return ConflictError(_duplicate_message(f, data.get(f)), field=f)
    return ConflictError("Duplicate value violates a unique constraint")


def _check_location(location: Optional[str]):
    if location is not None and location not in settings.STOCK_LOCATIONS:
        raise ValidationError(
            f"Unknown stock location '{location}'. Expected one of: {', '.join(settings.STOCK_LOCATIONS)}"
        )


def _commit(db: Session, data: dict):
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise _conflict_from_integrity(e, data) from e
    except Exception:
        db.rollback()
        raise


# ── Queries ──────────────────────────────────────────────────────────────────

def list_cars(db: Session, status=None, stock_location: str = None):
    q = db.query(Car)
    if status:
        q = q.filter(Car.status == status)
    if stock_location:
        q = q.filter(Car.stock_location == stock_location)
    return q.order_by(Car.allocation_date.desc(), Car.id.desc()).all()


def get_car(db: Session, car_id: int) -> Car:
    car = db.query(Car).filter(Car.id == car_id).first()
    if not car:
        raise NotFoundError("Car not found")
    return car


# ── Allocation ───────────────────────────────────────────────────────────────

def _stage_new_car(db: Session, body: CarCreate) -> Car:
    data = _normalise(body.model_dump())
    data["status"] = lifecycle.resolve_edit_status(body.status, stock_in_date=None)
    _check_unique(db, data)
    car = Car(**data)
    db.add(car)
    return car


def create_car(db: Session, body: CarCreate) -> Car:
    car = _stage_new_car(db, body)
    _commit(db, body.model_dump())
    db.refresh(car)
    logger.info(f"[CAR] Allocated {car.vin} ({car.model}) → {car.status.value}")
    return car


def import_cars(db: Session, rows: List[dict]) -> BatchResult:
    """
    Batch allocation import. Each row is validated and committed on its own;
    duplicate VINs/serials are reported separately from other failures.
    """
    result = BatchResult()
    for index, row in enumerate(rows, start=1):
        key = str(row.get("vin") or f"row {index}") if isinstance(row, dict) else f"row {index}"
        try:
            body = CarCreate.model_validate(row)
            _stage_new_car(db, body)
            _commit(db, body.model_dump())
            result.succeeded.append(body.vin.strip())
        except ConflictError as e:
            db.rollback()
            result.duplicates.append({"key": key, "error": e.message})
        except SchemaValidationError as e:
            fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
            result.errors.append({"key": key, "error": f"Invalid or missing fields: {fields}"})
        except LifecycleError as e:
            db.rollback()
            result.errors.append({"key": key, "error": e.message})

    logger.info(f"[IMPORT] {len(rows)} rows: {len(result.succeeded)} imported, "
                f"{len(result.duplicates)} duplicates, {len(result.errors)} errors")
    return result


def update_car(db: Session, car_id: int, body: CarEdit) -> Car:
    """
    Full edit of a car. Inline match data creates or updates the linked match,
    unlink_match removes it; the car status is re-derived in the same commit.
    """
    car = get_car(db, car_id)
    data = _normalise(body.model_dump(exclude={"match", "unlink_match", "status"}))
    _check_location(data.get("stock_location"))
    _check_unique(db, data, exclude_id=car.id)

    if body.unlink_match and body.match is not None:
        raise ValidationError("Cannot update and unlink a match in the same request")

    existing = car.match
    if existing is not None or body.match is not None or body.unlink_match:
        lifecycle.check_stock_kept(data.get("stock_in_date"), data.get("stock_location"))

    try:
        if body.unlink_match and existing is not None:
            match_service.detach_match(db, existing)
            status = CarStatus.IN_STOCK
        elif body.match is not None:
            if existing is not None:
                match_service.restage_match(existing, body.match)
            else:
                match_service.attach_match(db, car, body.match)
            status = lifecycle.derive_car_status(body.match.status, body.match.sale_date)
        elif existing is not None:
            status = lifecycle.resolve_edit_status(body.status, data.get("stock_in_date"), has_match=True,
                                                   match_status=existing.status, sale_date=existing.sale_date)
        else:
            status = lifecycle.resolve_edit_status(body.status, data.get("stock_in_date"))
    except LifecycleError:
        db.rollback()
        raise

    for name, value in data.items():
        setattr(car, name, value)
    car.status = status
    _commit(db, data)
    db.refresh(car)
    logger.info(f"[CAR] Updated {car.vin} → {car.status.value}")
    return car


def delete_car(db: Session, car_id: int):
    """Physical deletion from the allocation view."""
    car = get_car(db, car_id)
    lifecycle.check_car_delete(car, has_match=car.match is not None)
    vin = car.vin
    db.delete(car)
    _commit(db, {"vin": vin})
    logger.info(f"[CAR] Deleted {vin}")


# ── Stock ────────────────────────────────────────────────────────────────────

def stock_in(db: Session, car_id: int, stock_in_date, stock_location: str, stock_no: Optional[str] = None):
    """Returns (car, changed). Re-stocking with identical fields is a no-op."""
    _check_location(stock_location)
    car = get_car(db, car_id)
    change = lifecycle.plan_stock_in(car, stock_in_date, stock_location, stock_no)
    if change.is_noop:
        logger.info(f"[STOCK] {car.vin} already in stock at {stock_location}, nothing to do")
        return car, False
    change.apply(car)
    _commit(db, {"vin": car.vin})
    db.refresh(car)
    logger.info(f"[STOCK] {car.vin} stocked in at {stock_location} on {stock_in_date}")
    return car, True


def batch_stock_in(db: Session, car_ids: List[int], stock_in_date, stock_location: str,
                   stock_no: Optional[str] = None) -> BatchResult:
    _check_location(stock_location)
    result = BatchResult()
    for car_id in car_ids:
        try:
            stock_in(db, car_id, stock_in_date, stock_location, stock_no)
            result.succeeded.append(str(car_id))
        except LifecycleError as e:
            db.rollback()
            result.errors.append({"key": str(car_id), "error": e.message})

    logger.info(f"[STOCK] Batch stock-in: {len(result.succeeded)}/{len(car_ids)} cars at {stock_location}")
    return result


def remove_from_stock(db: Session, car_id: int) -> Car:
    """Soft removal: the car goes back to UNLOADED with its stock fields cleared."""
    car = get_car(db, car_id)
    lifecycle.plan_remove_from_stock(car).apply(car)
    _commit(db, {"vin": car.vin})
    db.refresh(car)
    logger.info(f"[STOCK] {car.vin} removed from stock → {car.status.value}")
    return car
