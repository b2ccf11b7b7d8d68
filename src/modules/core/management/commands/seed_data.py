from __future__ import annotations

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction
from decouple import config

from modules.access.models import Permission, Role, UserAccount
from modules.statuses.models import StatusCategory, StatusValue

RESOURCES = (
    "USERS",
    "ROLES",
    "PERMISSIONS",
    "ITEMS",
    "ORDERS",
    "ORDER_LINES",
    "INVOICES",
    "CLIENTS",
    "SUPPLIERS",
    "WAREHOUSES",
    "CATEGORIES",
    "STATUSES",
)
VERBS = ("READ", "CREATE", "EDIT", "DELETE")

STATUS_CATALOG = {
    StatusCategory.ORDER: ("PENDING", "IN_PROGRESS", "COMPLETED", "CANCELLED"),
    StatusCategory.ITEM: ("AVAILABLE", "OUT_OF_STOCK", "DISCONTINUED"),
    StatusCategory.USER: ("ACTIVE", "BLOCKED"),
    StatusCategory.ACTIVE: ("ACTIVE",),
    StatusCategory.INACTIVE: ("INACTIVE",),
    StatusCategory.PENDING: ("PENDING",),
    StatusCategory.CANCELLED: ("CANCELLED",),
}

ADMIN_ONLY = {"DELETE_USERS", "DELETE_ROLES", "DELETE_PERMISSIONS", "EDIT_PERMISSIONS"}


def _grants(role: str, all_names: list[str]) -> list[str]:
    if role == "ADMIN":
        return all_names
    if role == "MANAGER":
        return [n for n in all_names if n not in ADMIN_ONLY]
    if role == "OPERATOR":
        return [n for n in all_names if n.startswith("READ_")] + [
            "CREATE_ITEMS",
            "EDIT_ITEMS",
        ]
    if role == "CASHIER":
        return [
            f"{verb}_{resource}"
            for resource in ("ORDERS", "ORDER_LINES", "INVOICES", "CLIENTS")
            for verb in ("READ", "CREATE", "EDIT")
        ] + ["READ_STATUSES", "READ_ITEMS"]
    return []


class Command(BaseCommand):
    help = "Seed the status catalog, permissions, roles and default accounts."

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write("Seeding reference data...")

        statuses = self._seed_statuses()
        permissions = self._seed_permissions()
        roles = self._seed_roles(permissions)
        users_created = self._seed_users(roles)

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"statuses={statuses}, "
                f"permissions={len(permissions)}, "
                f"roles={len(roles)}, "
                f"users={users_created}"
            )
        )

    def _seed_statuses(self) -> int:
        self.stdout.write("Creating status catalog...")
        count = 0
        for category, labels in STATUS_CATALOG.items():
            for label in labels:
                StatusValue.objects.get_or_create(category=category, label=label)
                count += 1
        self.stdout.write(self.style.SUCCESS("Creating status catalog... Done!"))
        return count

    def _seed_permissions(self) -> dict[str, Permission]:
        self.stdout.write("Creating permissions...")
        permissions = {}
        for resource in RESOURCES:
            for verb in VERBS:
                name = f"{verb}_{resource}"
                permissions[name], _ = Permission.objects.get_or_create(
                    name=name,
                    defaults={"description": f"{verb.lower()} {resource.lower().replace('_', ' ')}"},
                )
        self.stdout.write(self.style.SUCCESS("Creating permissions... Done!"))
        return permissions

    def _seed_roles(self, permissions: dict[str, Permission]) -> dict[str, Role]:
        self.stdout.write("Creating roles...")
        descriptions = {
            "ADMIN": "Full system administrator.",
            "MANAGER": "Branch or area manager.",
            "OPERATOR": "Production or warehouse operator.",
            "CASHIER": "Point-of-sale user.",
        }
        names = list(permissions)
        roles = {}
        for name, description in descriptions.items():
            role, _ = Role.objects.get_or_create(
                name=name, defaults={"description": description}
            )
            role.permissions.set([permissions[p] for p in _grants(name, names)])
            roles[name] = role
        self.stdout.write(self.style.SUCCESS("Creating roles... Done!"))
        return roles

    def _seed_users(self, roles: dict[str, Role]) -> int:
        created = 0
        active = StatusValue.objects.get(category=StatusCategory.USER, label="ACTIVE")
        accounts = [
            ("System Administrator", "admin@example.com", "ADMIN"),
            ("General Manager", "manager@example.com", "MANAGER"),
            ("Warehouse Operator", "operator@example.com", "OPERATOR"),
            ("Main Cashier", "cashier@example.com", "CASHIER"),
        ]
        for name, email, role in accounts:
            if UserAccount.objects.filter(email=email).exists():
                continue
            account = UserAccount(name=name, email=email, status=active, role=roles[role])
            account.set_password(config(f"SEED_{role}_PASSWORD", default=f"{role.lower()}-change-me"))
            account.save()
            created += 1

        User = get_user_model()
        if not User.objects.filter(username="admin").exists():
            User.objects.create_superuser(
                "admin", password=config("SEED_ADMIN_PASSWORD", default="admin-change-me")
            )
            created += 1
        return created
