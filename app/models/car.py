# app/models/car.py
"""
Cars table — one row per physical vehicle unit, from allocation to sale.
VIN and each non-empty component serial number are unique across all cars;
empty serials are stored as NULL so several cars may lack one.
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Date, DateTime, Numeric, Enum
from sqlalchemy.orm import relationship
from app.database import Base
from app.models.enums import CarStatus

SERIAL_FIELDS = ("front_motor_no", "rear_motor_no", "battery_no", "engine_no")


class Car(Base):
    __tablename__ = "cars"

    id = Column(Integer, primary_key=True, autoincrement=True)
    dealer_code = Column(String(50), nullable=False)
    dealer_name = Column(String(200), nullable=False)
    model = Column(String(100), nullable=False, index=True)
    vin = Column(String(50), unique=True, nullable=False, index=True)
    front_motor_no = Column(String(100), unique=True)
    rear_motor_no = Column(String(100), unique=True)
    battery_no = Column(String(100), unique=True)
    engine_no = Column(String(100), unique=True)
    color = Column(String(50))
    car_type = Column(String(50))
    po_type = Column(String(50))
    allocation_date = Column(Date)
    price = Column(Numeric(12, 2), nullable=False, default=0)
    status = Column(Enum(CarStatus, native_enum=False, length=30), nullable=False,
                    default=CarStatus.WAITING_FOR_TRAILER, index=True)
    stock_in_date = Column(Date)
    stock_location = Column(String(100))     # one of settings.STOCK_LOCATIONS
    stock_no = Column(String(50))
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    match = relationship("Match", back_populates="car", uselist=False)

    def __repr__(self):
        return f"<Car {self.id} vin={self.vin} status={self.status}>"
