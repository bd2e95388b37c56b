# app/services/lifecycle.py
"""
Car / Match lifecycle rules.

Car status flow:
  WAITING_FOR_TRAILER → ON_TRAILER → UNLOADED → IN_STOCK → RESERVED → SOLD

  - Stock-in       : no stock_in_date, not RESERVED/SOLD  → IN_STOCK
  - Remove stock   : has stock_in_date, not RESERVED/SOLD → UNLOADED, stock fields cleared
  - Create match   : car IN_STOCK                         → RESERVED (or SOLD)
  - Save match     : DELIVERED needs a sale date          → SOLD if DELIVERED + date, else RESERVED
  - Delete match   : any                                  → IN_STOCK
  - Delete car     : no match, not SOLD                   → row removed

Everything here is pure: functions read the car (any object with status,
stock_in_date, stock_location, stock_no attributes) and return what must be
written. They never touch the session. Services apply the result.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from app.models.enums import CarStatus, MatchStatus
from app.services.errors import ConflictError, ValidationError

MATCHED_STATUSES = (CarStatus.RESERVED, CarStatus.SOLD)


@dataclass
class CarChange:
    """Field writes required on a car. Empty means nothing to write."""
    fields: dict = field(default_factory=dict)

    @property
    def status(self) -> Optional[CarStatus]:
        return self.fields.get("status")

    @property
    def is_noop(self) -> bool:
        return not self.fields

    def apply(self, car) -> None:
        for name, value in self.fields.items():
            setattr(car, name, value)


def derive_car_status(match_status, sale_date) -> CarStatus:
    """SOLD only when the match is DELIVERED and carries a sale date."""
    if MatchStatus(match_status) == MatchStatus.DELIVERED and sale_date:
        return CarStatus.SOLD
    return CarStatus.RESERVED


def validate_match(match_status, sale_date) -> None:
    if MatchStatus(match_status) == MatchStatus.DELIVERED and not sale_date:
        raise ValidationError("Sale date is required when the match status is DELIVERED")


def _label(status) -> str:
    return getattr(status, "value", status)


def _status_update(car, target: CarStatus) -> CarChange:
    if car is None or car.status == target:
        return CarChange()
    return CarChange({"status": target})


# ── Stock ─────────────────────────────────────────────────────────────────

def plan_stock_in(car, stock_in_date: date, stock_location: str, stock_no: Optional[str] = None) -> CarChange:
    if not stock_in_date:
        raise ValidationError("Stock In Date is required")
    if not stock_location:
        raise ValidationError("Stock location is required")
    stock_no = stock_no or None

    if car.status in MATCHED_STATUSES:
        raise ConflictError(f"Car {car.vin} is {_label(car.status)} and cannot be stocked in")
    if car.stock_in_date:
        same = (car.status == CarStatus.IN_STOCK
                and car.stock_in_date == stock_in_date
                and car.stock_location == stock_location
                and (car.stock_no or None) == stock_no)
        if same:
            return CarChange()
        raise ConflictError(f"Car {car.vin} is already in stock")

    return CarChange({
        "status": CarStatus.IN_STOCK,
        "stock_in_date": stock_in_date,
        "stock_location": stock_location,
        "stock_no": stock_no,
    })


def plan_remove_from_stock(car) -> CarChange:
    if car.status in MATCHED_STATUSES:
        raise ConflictError(f"Car {car.vin} is {_label(car.status)}; remove the match first")
    if not car.stock_in_date:
        raise ConflictError(f"Car {car.vin} is not in stock")
    return CarChange({
        "status": CarStatus.UNLOADED,
        "stock_in_date": None,
        "stock_location": None,
        "stock_no": None,
    })


# ── Matches ───────────────────────────────────────────────────────────────

def plan_match_create(car, match_status, sale_date, has_match: bool = False) -> CarChange:
    validate_match(match_status, sale_date)
    if has_match:
        raise ConflictError(f"Car {car.vin} is already matched")
    if car.status != CarStatus.IN_STOCK:
        raise ConflictError(f"Car {car.vin} must be IN_STOCK to be matched (currently {_label(car.status)})")
    return _status_update(car, derive_car_status(match_status, sale_date))


def plan_match_update(car, match_status, sale_date) -> CarChange:
    """Write is skipped when the car already has the derived status."""
    validate_match(match_status, sale_date)
    return _status_update(car, derive_car_status(match_status, sale_date))


def plan_match_delete(car) -> CarChange:
    return _status_update(car, CarStatus.IN_STOCK)


# ── Cars ──────────────────────────────────────────────────────────────────

def check_car_delete(car, has_match: bool) -> None:
    if has_match:
        raise ConflictError("Cannot delete car: It is associated with a match. Please remove the match first.")
    if car.status == CarStatus.SOLD:
        raise ConflictError(f"Cannot delete car {car.vin}: it has been sold")


def check_stock_kept(stock_in_date, stock_location) -> None:
    """A car that is or was matched in this edit must keep its stock-in date and location."""
    if not stock_in_date or not stock_location:
        raise ValidationError("A matched car must keep its stock-in date and stock location")


def resolve_edit_status(requested, stock_in_date, has_match: bool = False,
                        match_status=None, sale_date=None) -> CarStatus:
    """
    Status for a direct car edit. has_match describes the state after the
    edit; a matched car always takes the derived status whatever was requested.
    Only UNLOADED is promoted by a stock-in date; WAITING_FOR_TRAILER and
    ON_TRAILER are kept as requested even when a date is present.
    """
    requested = CarStatus(requested)
    if has_match:
        validate_match(match_status, sale_date)
        return derive_car_status(match_status, sale_date)
    if requested in MATCHED_STATUSES:
        raise ValidationError(f"Status {_label(requested)} requires a match")
    if stock_in_date and requested == CarStatus.UNLOADED:
        return CarStatus.IN_STOCK
    if requested == CarStatus.IN_STOCK and not stock_in_date:
        raise ValidationError("Status IN_STOCK requires a stock-in date")
    return requested
