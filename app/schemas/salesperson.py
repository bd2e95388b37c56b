# app/schemas/salesperson.py
from pydantic import BaseModel, Field
from app.models.enums import SalespersonStatus


class SalespersonCreate(BaseModel):
    name: str = Field(min_length=1)


class SalespersonUpdate(BaseModel):
    name: str = Field(min_length=1)
    status: SalespersonStatus


class SalespersonOut(BaseModel):
    id: int
    name: str
    status: SalespersonStatus

    class Config:
        from_attributes = True
