# app/services/match_service.py
"""
Match (reservation / sale) management.

A match write and the car status write it implies are committed together:
attach/update/detach helpers only stage changes on the session, and the
public functions commit once or roll back.
"""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from app.models.car import Car
from app.models.enums import SalespersonStatus
from app.models.match import Match
from app.models.salesperson import Salesperson
from app.schemas.match import MatchCreate, MatchFields, MatchUpdate
from app.services import lifecycle
from app.services.errors import ConflictError, NotFoundError, ValidationError
from app.utils.logger import get_logger

logger = get_logger(__name__)

_MATCH_FIELDS = ("customer_name", "salesperson", "sale_date", "status", "license_plate", "notes")


def list_matches(db: Session, status=None):
    q = db.query(Match)
    if status:
        q = q.filter(Match.status == status)
    return q.order_by(Match.created_at.desc(), Match.id.desc()).all()


def get_match(db: Session, match_id: int) -> Match:
    match = db.query(Match).filter(Match.id == match_id).first()
    if not match:
        raise NotFoundError("Match not found")
    return match


def _get_car(db: Session, car_id: int) -> Car:
    car = db.query(Car).filter(Car.id == car_id).first()
    if not car:
        raise NotFoundError(f"Car {car_id} not found")
    return car


def check_salesperson(db: Session, name: str):
    """New matches may only name an active salesperson."""
    person = db.query(Salesperson).filter(Salesperson.name == name).first()
    if not person:
        raise ValidationError(f"Unknown salesperson '{name}'")
    if person.status != SalespersonStatus.ACTIVE:
        raise ValidationError(f"Salesperson '{name}' is inactive")


# ── Staging helpers (no commit) ──────────────────────────────────────────────

def attach_match(db: Session, car: Car, fields: MatchFields) -> Match:
    change = lifecycle.plan_match_create(car, fields.status, fields.sale_date,
                                         has_match=car.match is not None)
    check_salesperson(db, fields.salesperson)
    match = Match(car=car, **fields.model_dump(include=set(_MATCH_FIELDS)))
    db.add(match)
    change.apply(car)
    logger.info(f"[MATCH] Car {car.vin} matched to {fields.customer_name} → {car.status.value}")
    return match


def restage_match(match: Match, fields: MatchFields):
    change = lifecycle.plan_match_update(match.car, fields.status, fields.sale_date)
    for name in _MATCH_FIELDS:
        setattr(match, name, getattr(fields, name))
    if not change.is_noop:
        change.apply(match.car)
        logger.info(f"[MATCH] Car {match.car.vin} → {change.status.value}")


def detach_match(db: Session, match: Match):
    car = match.car
    change = lifecycle.plan_match_delete(car)
    db.delete(match)
    if car is not None:
        change.apply(car)
        logger.info(f"[MATCH] Match {match.id} removed, car {car.vin} → {car.status.value}")


def _commit(db: Session):
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"[MATCH] Integrity error: {e.orig}")
        raise ConflictError("This car is already matched") from e
    except Exception:
        db.rollback()
        raise


# ── Public operations ────────────────────────────────────────────────────────

def create_match(db: Session, body: MatchCreate) -> Match:
    car = _get_car(db, body.car_id)
    match = attach_match(db, car, body)
    _commit(db)
    db.refresh(match)
    return match


def update_match(db: Session, match_id: int, body: MatchUpdate) -> Match:
    match = get_match(db, match_id)
    lifecycle.validate_match(body.status, body.sale_date)

    if body.car_id is not None and body.car_id != match.car_id:
        new_car = _get_car(db, body.car_id)
        change = lifecycle.plan_match_create(new_car, body.status, body.sale_date,
                                             has_match=new_car.match is not None)
        old_car = match.car
        lifecycle.plan_match_delete(old_car).apply(old_car)
        match.car = new_car
        for name in _MATCH_FIELDS:
            setattr(match, name, getattr(body, name))
        change.apply(new_car)
        logger.info(f"[MATCH] Match {match.id} moved {old_car.vin} → {new_car.vin}")
    else:
        restage_match(match, body)

    _commit(db)
    db.refresh(match)
    return match


def delete_match(db: Session, match_id: int):
    match = get_match(db, match_id)
    detach_match(db, match)
    _commit(db)
