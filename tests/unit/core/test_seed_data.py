"""Tests for the seed_data management command."""

from __future__ import annotations

from io import StringIO

import pytest
from django.core.management import call_command

from modules.access.models import Permission, Role, UserAccount
from modules.core.management.commands.seed_data import RESOURCES, VERBS
from modules.statuses.models import StatusCategory, StatusValue

pytestmark = pytest.mark.unit


def _seed() -> str:
    out = StringIO()
    call_command("seed_data", stdout=out)
    return out.getvalue()


def test_seeds_reference_data():
    output = _seed()

    assert "Seed completed" in output
    assert Permission.objects.count() == len(RESOURCES) * len(VERBS)
    assert set(Role.objects.values_list("name", flat=True)) == {
        "ADMIN",
        "MANAGER",
        "OPERATOR",
        "CASHIER",
    }
    assert StatusValue.objects.filter(category=StatusCategory.ORDER, label="COMPLETED").exists()
    assert UserAccount.objects.count() == 4


def test_role_grants():
    _seed()
    admin = Role.objects.get(name="ADMIN")
    cashier = Role.objects.get(name="CASHIER")

    assert admin.permissions.count() == Permission.objects.count()
    assert cashier.permissions.filter(name="CREATE_ORDERS").exists()
    assert not cashier.permissions.filter(name="DELETE_USERS").exists()


def test_is_idempotent():
    _seed()
    _seed()

    assert Permission.objects.count() == len(RESOURCES) * len(VERBS)
    assert UserAccount.objects.count() == 4
    assert StatusValue.objects.filter(category=StatusCategory.USER, label="ACTIVE").count() == 1


def test_seeded_passwords_are_hashed():
    _seed()
    admin = UserAccount.objects.get(email="admin@example.com")
    assert admin.password_hash != "admin-change-me"
    assert admin.check_password("admin-change-me")
