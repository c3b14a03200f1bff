"""
Row-level tenant isolation.

Reads: every query on a tenant-scoped model is built through
``scoped_query`` / ``tenant_criteria``, which add ``tenant_id == <tenant>``
taken from the explicit TenantContext. There is no session-level filter
to arm or disarm, so nothing can leak from one request to the next.

Writes: new rows are stamped with ``stamp_tenant``; updates and deletes
call ``ensure_same_tenant`` before commit.

A missing context always fails closed with NoTenantContextError.
"""

import logging
from typing import TypeVar

from sqlalchemy.orm import Query, Session
from sqlalchemy.sql.elements import ColumnElement

from bizdesk.core.exceptions import CrossTenantAccessError, NoTenantContextError
from bizdesk.core.tenant_scope import get_current_tenant
from bizdesk.models.base import TenantScopedMixin
from bizdesk.models.tenant_context import TenantContext

logger = logging.getLogger(__name__)

ScopedT = TypeVar("ScopedT", bound=TenantScopedMixin)


def require_context(context: TenantContext | None, action: str) -> TenantContext:
    """
    Return ``context`` or fail closed.

    Also refuses a context that disagrees with the request's ambient tenant
    scope: that can only happen if a context object outlived its request.
    """
    if context is None or context.tenant is None or context.tenant_id is None:
        logger.error("Refusing to %s without a tenant context", action)
        raise NoTenantContextError(f"Cannot {action} without a tenant context")

    ambient = get_current_tenant()
    if ambient is not None and ambient != context.tenant_uuid:
        logger.error(
            "Tenant context mismatch while trying to %s: scope=%s context=%s",
            action,
            ambient,
            context.tenant_uuid,
        )
        raise NoTenantContextError(f"Cannot {action}: tenant context does not match request scope")
    return context


def tenant_criteria(model: type[TenantScopedMixin], context: TenantContext | None) -> ColumnElement[bool]:
    """Predicate restricting ``model`` rows to the context's tenant."""
    context = require_context(context, f"query {model.__name__}")
    return model.tenant_id == context.tenant_id


def scoped_query(db: Session, model: type[ScopedT], context: TenantContext | None) -> Query:
    """``db.query(model)`` already restricted to the context's tenant."""
    return db.query(model).filter(tenant_criteria(model, context))


def stamp_tenant(entity: ScopedT, context: TenantContext | None) -> ScopedT:
    """
    Assign the owning tenant to a new entity.

    Raises:
        NoTenantContextError: If there is no tenant context
        TenantReassignmentError: If the entity already belongs to another tenant
    """
    context = require_context(context, f"create {type(entity).__name__}")
    entity.tenant_id = context.tenant_id
    return entity


def ensure_same_tenant(entity: TenantScopedMixin, context: TenantContext | None) -> None:
    """
    Verify that ``entity`` belongs to the context's tenant before a write.

    Raises:
        NoTenantContextError: If there is no tenant context
        CrossTenantAccessError: If the entity belongs to another tenant
    """
    resource = type(entity).__name__
    context = require_context(context, f"modify {resource}")
    if entity.tenant_id != context.tenant_id:
        logger.warning(
            "SECURITY: cross-tenant write blocked: %s %s owned by tenant_id=%s, caller tenant=%s user_id=%s",
            resource,
            getattr(entity, "id", None),
            entity.tenant_id,
            context.tenant_uuid,
            context.user.id if context.user else None,
        )
        raise CrossTenantAccessError(resource, getattr(entity, "id", None), context.tenant_uuid)
