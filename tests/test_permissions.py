# tests/test_permissions.py
"""Unit tests for the role × operation permission table."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from app.models.enums import Role
from app.services import permissions
from app.services.errors import PermissionDeniedError


class TestPermissionTable:
    def test_only_executive_deletes_cars(self):
        assert permissions.is_allowed(Role.EXECUTIVE, permissions.CAR_DELETE)
        assert not permissions.is_allowed(Role.ADMIN, permissions.CAR_DELETE)
        assert not permissions.is_allowed(Role.USER, permissions.CAR_DELETE)

    @pytest.mark.parametrize("op", [permissions.CAR_CREATE, permissions.CAR_UPDATE, permissions.STOCK_UPDATE,
                                    permissions.MATCH_CREATE, permissions.MATCH_UPDATE, permissions.MATCH_DELETE])
    def test_admin_can_write(self, op):
        assert permissions.is_allowed(Role.ADMIN, op)

    @pytest.mark.parametrize("op", [permissions.USER_MANAGE, permissions.SALESPERSON_MANAGE])
    def test_admin_cannot_manage_people(self, op):
        assert not permissions.is_allowed(Role.ADMIN, op)
        assert permissions.is_allowed(Role.EXECUTIVE, op)

    def test_user_is_read_only(self):
        assert permissions.is_allowed(Role.USER, permissions.CAR_READ)
        assert permissions.is_allowed(Role.USER, permissions.STATS_READ)
        assert not permissions.is_allowed(Role.USER, permissions.CAR_CREATE)
        assert not permissions.is_allowed(Role.USER, permissions.MATCH_CREATE)

    def test_role_strings_accepted(self):
        assert permissions.is_allowed("admin", permissions.CAR_UPDATE)

    def test_unknown_role_denied(self):
        assert not permissions.is_allowed("superuser", permissions.CAR_READ)

    def test_unknown_operation_denied(self):
        assert not permissions.is_allowed(Role.EXECUTIVE, "car:teleport")

    def test_require_raises(self):
        with pytest.raises(PermissionDeniedError):
            permissions.require(Role.USER, permissions.CAR_CREATE)
