# tests/conftest.py
"""Shared fixtures: an in-memory SQLite store and small record factories."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from datetime import date

import pytest
from app.config import settings
from app.database import Database
from app.models.car import Car
from app.models.enums import CarStatus, SalespersonStatus
from app.models.salesperson import Salesperson

BRANCH = settings.STOCK_LOCATIONS[0]
OTHER_BRANCH = settings.STOCK_LOCATIONS[1]


@pytest.fixture
def database():
    database = Database("sqlite://")
    database.create_tables()
    yield database
    database.dispose()


@pytest.fixture
def db(database):
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


def car_row(vin="VIN0001", **overrides):
    row = {
        "dealer_code": "D001",
        "dealer_name": "Pride Auto",
        "model": "Atto 3",
        "vin": vin,
        "color": "White",
        "allocation_date": "2024-04-01",
        "price": 1099900,
    }
    row.update(overrides)
    return row


@pytest.fixture
def make_car(db):
    """Insert a car directly, bypassing the services."""
    def _make(vin="VIN0001", status=CarStatus.WAITING_FOR_TRAILER, stock_in_date=None,
              stock_location=None, stock_no=None, **overrides):
        row = car_row(vin, **overrides)
        row["allocation_date"] = date(2024, 4, 1)
        if status == CarStatus.IN_STOCK and stock_in_date is None:
            stock_in_date, stock_location = date(2024, 4, 20), BRANCH
        car = Car(status=status, stock_in_date=stock_in_date,
                  stock_location=stock_location, stock_no=stock_no, **row)
        db.add(car)
        db.commit()
        db.refresh(car)
        return car
    return _make


@pytest.fixture
def salesperson(db):
    person = Salesperson(name="Somchai", status=SalespersonStatus.ACTIVE)
    db.add(person)
    db.commit()
    return person
