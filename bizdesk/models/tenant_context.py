"""Tenant context for request authorization."""

from dataclasses import dataclass
from bizdesk.core.exceptions import ForbiddenException
from bizdesk.models.user import User
from bizdesk.models.tenant import Tenant
from bizdesk.models.role import UserRole


@dataclass(frozen=True)
class TenantContext:
    """
    Complete tenant context for one request.

    Built by tenant resolution from the authenticated principal and
    threaded explicitly through every service and repository call. Every
    tenant-scoped query derives its row filter from ``tenant_id``.

    Attributes:
        tenant: The Tenant the caller belongs to
        user: The authenticated User, None for internal system tasks
        role: The caller's role within the tenant
    """

    tenant: Tenant
    user: User | None
    role: UserRole

    @classmethod
    def for_user(cls, user: User) -> "TenantContext":
        return cls(tenant=user.tenant, user=user, role=user.role)

    @classmethod
    def for_system(cls, tenant: Tenant) -> "TenantContext":
        """Context for internal tasks (seeding) that act on a tenant's behalf."""
        return cls(tenant=tenant, user=None, role=UserRole.ADMIN)

    @property
    def tenant_id(self) -> int:
        return self.tenant.id

    @property
    def tenant_uuid(self) -> str:
        return self.tenant.tenant_uuid

    @property
    def is_system(self) -> bool:
        return self.user is None

    @property
    def acting_user_id(self) -> int:
        """ID recorded as creator of new business records"""
        if self.is_system:
            raise ForbiddenException("This operation requires an authenticated user")
        return self.user.id

    def is_admin(self) -> bool:
        """Check if the caller is a tenant admin (system tasks count as admin)."""
        return self.role == UserRole.ADMIN

    def __repr__(self) -> str:
        user_id = self.user.id if self.user else None
        return f"<TenantContext(user_id={user_id}, tenant={self.tenant_uuid}, role={self.role.value})>"
