"""Core permissions for RBAC (Role-Based Access Control).

Every back-office route is gated by a single role check: the authenticated
user's role must be one of ``admin`` or ``super_admin``.

DRF answers a failed check with 401 when no identity was supplied and with
403 when the identity has an insufficient role.
"""

from rest_framework.permissions import BasePermission, SAFE_METHODS

from wellness_backend.core.models import Role


ADMIN_ROLES = {Role.ADMIN, Role.SUPER_ADMIN}


class RBACPermission(BasePermission):
    """Base class for RBAC permissions with read_roles/write_roles pattern.

    Subclasses should define:
    - read_roles: set of role names that can perform GET/HEAD/OPTIONS
    - write_roles: set of role names that can perform POST/PUT/PATCH/DELETE
    """

    read_roles: set = set()
    write_roles: set = set()

    def _role_name(self, request):
        user = getattr(request, "user", None)
        role = getattr(user, "role", None)
        return getattr(role, "name", None)

    def has_permission(self, request, view):
        user = getattr(request, "user", None)
        if not user or not user.is_authenticated:
            return False

        role_name = self._role_name(request)
        if not role_name:
            return False

        if request.method in SAFE_METHODS:
            return role_name in self.read_roles

        return role_name in self.write_roles


class IsClinicAdmin(RBACPermission):
    """Permission: admin or super_admin for every method."""

    message = "Access denied. Admin privileges required."
    read_roles = ADMIN_ROLES
    write_roles = ADMIN_ROLES
