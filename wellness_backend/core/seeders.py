import os

from django.db import transaction

from .models import Role, User

SEED_EMAIL_DOMAIN = "@seed.local"


def seed_core(flush: bool = False) -> dict:
    """
    Seeds:
    - roles (admin, super_admin)
    - one super admin (SEED_ADMIN_EMAIL / SEED_ADMIN_PASSWORD) and one admin

    With flush=True only users whose email ends in '@seed.local' are deleted;
    superusers are never touched.
    """
    stats: dict[str, int] = {}

    with transaction.atomic():
        if flush:
            User.objects.filter(is_superuser=False, email__endswith=SEED_EMAIL_DOMAIN).delete()

        roles = _seed_roles()
        stats["core_roles"] = len(roles)
        stats["core_users"] = len(_seed_users(roles))

    return stats


def _seed_roles() -> dict[str, Role]:
    role_definitions = [
        (Role.ADMIN, "Admin"),
        (Role.SUPER_ADMIN, "Super Admin"),
    ]
    roles = {}
    for name, label in role_definitions:
        role, _created = Role.objects.get_or_create(name=name, defaults={"label": label})
        roles[name] = role
    return roles


def _seed_users(roles: dict[str, Role]) -> list[User]:
    users: list[User] = []

    email = os.getenv("SEED_ADMIN_EMAIL", "admin@detoxwellness.in").lower()
    super_admin = User.objects.filter(email__iexact=email).first()
    if super_admin is None:
        super_admin = User.objects.create_superuser(
            email=email,
            password=os.getenv("SEED_ADMIN_PASSWORD", "admin123"),
            name="Clinic Owner",
            role=roles[Role.SUPER_ADMIN],
        )
    users.append(super_admin)

    staff, created = User.objects.get_or_create(
        email=f"frontdesk{SEED_EMAIL_DOMAIN}",
        defaults={"name": "Front Desk", "role": roles[Role.ADMIN]},
    )
    if created:
        staff.set_password("frontdesk123")
        staff.save(update_fields=["password"])
    users.append(staff)

    return users
