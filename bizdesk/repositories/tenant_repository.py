"""Repository for Tenant model operations."""

from sqlalchemy.orm import Session
from bizdesk.models.tenant import Tenant


class TenantRepository:
    """
    Repository for Tenant model operations.

    Tenants are the isolation boundary itself, so these queries are not
    tenant-filtered. Tenants are never deleted, only deactivated.
    """

    def __init__(self, db: Session):
        self.db = db

    def exists_by_name(self, name: str) -> bool:
        return self.db.query(Tenant.id).filter(Tenant.name == name.strip()).first() is not None

    def get_active(self) -> list[Tenant]:
        """
        Get all active tenants.

        Returns:
            List of Tenant objects with is_active True
        """
        return self.db.query(Tenant).filter(Tenant.is_active.is_(True)).order_by(Tenant.id).all()

    def create(self, tenant: Tenant) -> Tenant:
        """
        Create a new tenant.

        Args:
            tenant: Tenant object to create

        Returns:
            Created Tenant object with ID populated
        """
        self.db.add(tenant)
        self.db.commit()
        self.db.refresh(tenant)
        return tenant

    def update(self, tenant: Tenant) -> Tenant:
        """
        Update an existing tenant.

        Args:
            tenant: Tenant object with updated fields

        Returns:
            Updated Tenant object
        """
        self.db.commit()
        self.db.refresh(tenant)
        return tenant
