"""User role enum for role-based access control."""

from enum import Enum as PyEnum


class UserRole(str, PyEnum):
    """
    Roles a user can hold inside their tenant.

    Permissions:
    - ADMIN: Everything (manage users, currencies, tenant details and plan)
    - USER: Create/edit/delete purchases, sales and expenses; read everything
    """

    ADMIN = "admin"
    USER = "user"
