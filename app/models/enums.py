# app/models/enums.py
"""
Status and role enumerations shared by the ORM models, the schemas and the
lifecycle engine. Values equal names so they serialise the same everywhere.
"""

import enum


class CarStatus(str, enum.Enum):
    WAITING_FOR_TRAILER = "WAITING_FOR_TRAILER"
    ON_TRAILER = "ON_TRAILER"
    UNLOADED = "UNLOADED"
    IN_STOCK = "IN_STOCK"
    RESERVED = "RESERVED"
    SOLD = "SOLD"


class MatchStatus(str, enum.Enum):
    WAITING_FOR_CONTRACT = "WAITING_FOR_CONTRACT"
    WAITING_FOR_PO = "WAITING_FOR_PO"
    POSTPONED = "POSTPONED"
    DELIVERED = "DELIVERED"


class SalespersonStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class Role(str, enum.Enum):
    EXECUTIVE = "executive"
    ADMIN = "admin"
    USER = "user"
