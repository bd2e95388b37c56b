# app/models/user.py
"""Application users. Passwords are stored as bcrypt hashes only."""

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, Enum
from app.database import Base
from app.models.enums import Role


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(100), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(Enum(Role, native_enum=False, length=20,
                       values_callable=lambda e: [m.value for m in e]),
                  nullable=False, default=Role.USER)
    created_at = Column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<User {self.username} role={self.role}>"
