"""Base repository for tenant-scoped models."""

from typing import Generic, TypeVar

from sqlalchemy.orm import Session, Query

from bizdesk.core.exceptions import CrossTenantAccessError, NoTenantContextError
from bizdesk.core.isolation import require_context, scoped_query, stamp_tenant, ensure_same_tenant
from bizdesk.models.base import TenantScopedMixin
from bizdesk.models.tenant_context import TenantContext

ModelT = TypeVar("ModelT", bound=TenantScopedMixin)


class TenantScopedRepository(Generic[ModelT]):
    """
    CRUD for a tenant-scoped model.

    Every read goes through ``self.query(context)`` and so only sees the
    context's tenant. Writes stamp or verify ownership before committing;
    a failed check rolls the session back so nothing partial persists.
    """

    model: type[ModelT]

    def __init__(self, db: Session):
        self.db = db

    def query(self, context: TenantContext) -> Query:
        """Base query restricted to the context's tenant"""
        return scoped_query(self.db, self.model, context)

    def get_all(self, context: TenantContext) -> list[ModelT]:
        return self.query(context).order_by(self.model.id).all()

    def get_by_id(self, entity_id: int, context: TenantContext) -> ModelT | None:
        """
        Get entity by ID within the context's tenant.

        Returns None if it doesn't exist or belongs to another tenant.
        """
        return self.query(context).filter(self.model.id == entity_id).first()

    def get_for_write(self, entity_id: int, context: TenantContext) -> ModelT | None:
        """
        Load an entity by ID for modification or deletion.

        Writes are not filtered: the row is looked up by ID and its owner is
        checked explicitly, so a foreign row raises instead of vanishing.

        Returns:
            The entity, or None if no row has this ID

        Raises:
            NoTenantContextError: If there is no tenant context
            CrossTenantAccessError: If the row belongs to another tenant
        """
        require_context(context, f"modify {self.model.__name__}")
        entity = self.db.get(self.model, entity_id)
        if entity is not None:
            ensure_same_tenant(entity, context)
        return entity

    def count(self, context: TenantContext) -> int:
        return self.query(context).count()

    def create(self, entity: ModelT, context: TenantContext) -> ModelT:
        """Stamp the owning tenant and persist a new entity"""
        stamp_tenant(entity, context)
        self.db.add(entity)
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def update(self, entity: ModelT, context: TenantContext) -> ModelT:
        """Commit pending changes after verifying ownership"""
        self._check_owner(entity, context)
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def delete(self, entity: ModelT, context: TenantContext) -> None:
        """Delete entity after verifying ownership"""
        self._check_owner(entity, context)
        self.db.delete(entity)
        self.db.commit()

    def _check_owner(self, entity: ModelT, context: TenantContext) -> None:
        try:
            ensure_same_tenant(entity, context)
        except (CrossTenantAccessError, NoTenantContextError):
            self.db.rollback()
            raise
