# app/models/match.py
"""
Matches table — a reservation/sale binding one car to a customer.
car_id is unique: a car carries at most one match at a time.
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Date, DateTime, Text, Enum, ForeignKey
from sqlalchemy.orm import relationship
from app.database import Base
from app.models.enums import MatchStatus


class Match(Base):
    __tablename__ = "matches"

    id = Column(Integer, primary_key=True, autoincrement=True)
    car_id = Column(Integer, ForeignKey("cars.id"), unique=True, nullable=False, index=True)
    customer_name = Column(String(200), nullable=False)
    salesperson = Column(String(200), nullable=False)
    sale_date = Column(Date)
    status = Column(Enum(MatchStatus, native_enum=False, length=30), nullable=False,
                    default=MatchStatus.WAITING_FOR_CONTRACT)
    license_plate = Column(String(50))
    notes = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    car = relationship("Car", back_populates="match")

    def __repr__(self):
        return f"<Match {self.id} car={self.car_id} status={self.status}>"

    @property
    def car_status(self):
        return self.car.status if self.car is not None else None
