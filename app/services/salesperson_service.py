# app/services/salesperson_service.py
"""Salesperson reference data. Names are unique; inactive names stay on old matches."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from app.models.enums import SalespersonStatus
from app.models.salesperson import Salesperson
from app.services.errors import ConflictError, NotFoundError
from app.utils.logger import get_logger

logger = get_logger(__name__)


def list_salespersons(db: Session, active_only: bool = False):
    q = db.query(Salesperson)
    if active_only:
        q = q.filter(Salesperson.status == SalespersonStatus.ACTIVE)
    return q.order_by(Salesperson.name.asc()).all()


def _save(db: Session, person: Salesperson, name: str):
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError(f"A salesperson with the name '{name}' already exists.", field="name") from e
    db.refresh(person)
    return person


def create_salesperson(db: Session, name: str) -> Salesperson:
    name = name.strip()
    if db.query(Salesperson).filter(Salesperson.name == name).first():
        raise ConflictError(f"A salesperson with the name '{name}' already exists.", field="name")
    person = Salesperson(name=name, status=SalespersonStatus.ACTIVE)
    db.add(person)
    _save(db, person, name)
    logger.info(f"[SALES] Added salesperson {name}")
    return person


def update_salesperson(db: Session, person_id: int, name: str, status: SalespersonStatus) -> Salesperson:
    person = db.query(Salesperson).filter(Salesperson.id == person_id).first()
    if not person:
        raise NotFoundError("Salesperson not found")
    name = name.strip()
    person.name = name
    person.status = status
    _save(db, person, name)
    logger.info(f"[SALES] Salesperson {person_id} → {name} ({status.value})")
    return person
