# app/models/salesperson.py
"""Salespersons table — selectable names for match records."""

from sqlalchemy import Column, Integer, String, Enum
from app.database import Base
from app.models.enums import SalespersonStatus


class Salesperson(Base):
    __tablename__ = "salespersons"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), unique=True, nullable=False, index=True)
    status = Column(Enum(SalespersonStatus, native_enum=False, length=20,
                         values_callable=lambda e: [m.value for m in e]),
                    nullable=False, default=SalespersonStatus.ACTIVE)

    def __repr__(self):
        return f"<Salesperson {self.name} status={self.status}>"
