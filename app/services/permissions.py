# app/services/permissions.py
"""
Role × operation permission table.
Every mutating route calls require() server-side, whatever the client hides.
"""

from app.models.enums import Role
from app.services.errors import PermissionDeniedError

CAR_READ = "car:read"
CAR_CREATE = "car:create"
CAR_UPDATE = "car:update"
CAR_DELETE = "car:delete"          # physical deletion from the allocation view
CAR_IMPORT = "car:import"
STOCK_UPDATE = "stock:update"      # stock-in, batch stock-in, remove from stock
MATCH_READ = "match:read"
MATCH_CREATE = "match:create"
MATCH_UPDATE = "match:update"
MATCH_DELETE = "match:delete"
SALESPERSON_READ = "salesperson:read"
SALESPERSON_MANAGE = "salesperson:manage"
USER_MANAGE = "user:manage"
STATS_READ = "stats:read"

_READ = {CAR_READ, MATCH_READ, SALESPERSON_READ, STATS_READ}
_WRITE = {CAR_CREATE, CAR_UPDATE, CAR_IMPORT, STOCK_UPDATE, MATCH_CREATE, MATCH_UPDATE, MATCH_DELETE}

PERMISSIONS = {
    Role.EXECUTIVE: frozenset(_READ | _WRITE | {CAR_DELETE, SALESPERSON_MANAGE, USER_MANAGE}),
    Role.ADMIN: frozenset(_READ | _WRITE),
    Role.USER: frozenset(_READ),
}


def is_allowed(role, operation: str) -> bool:
    """Direct table lookup. Unknown roles and operations are denied."""
    try:
        role = Role(role)
    except ValueError:
        return False
    return operation in PERMISSIONS.get(role, frozenset())


def require(role, operation: str) -> None:
    if not is_allowed(role, operation):
        raise PermissionDeniedError(f"Forbidden: role '{getattr(role, 'value', role)}' may not perform {operation}")
