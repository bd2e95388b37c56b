# app/schemas/user.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional
from app.models.enums import Role


class UserCreate(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)
    role: Role


class UserUpdate(BaseModel):
    role: Role
    password: Optional[str] = None    # blank keeps the current password


class UserOut(BaseModel):
    id: int
    username: str
    role: Role
    created_at: Optional[datetime]

    class Config:
        from_attributes = True


class LoginRequest(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class TokenOut(BaseModel):
    token: str
    user: UserOut
