"""
Request-scoped holder for the current tenant identifier.

Backed by a ContextVar, so each request (asyncio task or worker thread
running a copied context) sees only its own value. Tenant resolution is
the only request-time writer; internal system tasks such as startup
seeding open their own scope explicitly.
"""

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

logger = logging.getLogger(__name__)

_current_tenant: ContextVar[str | None] = ContextVar("current_tenant", default=None)


def set_current_tenant(tenant_uuid: str) -> None:
    """Store the tenant identifier for the current request/task."""
    if not tenant_uuid or not tenant_uuid.strip():
        raise ValueError("Tenant identifier cannot be empty")
    logger.debug("Tenant context set to %s", tenant_uuid)
    _current_tenant.set(tenant_uuid)


def get_current_tenant() -> str | None:
    """Return the current tenant identifier, or None when unset."""
    return _current_tenant.get()


def is_tenant_set() -> bool:
    return _current_tenant.get() is not None


def clear_current_tenant() -> None:
    """Remove the stored tenant identifier."""
    tenant_uuid = _current_tenant.get()
    if tenant_uuid is not None:
        logger.debug("Tenant context cleared (was %s)", tenant_uuid)
    _current_tenant.set(None)


@contextmanager
def tenant_scope(tenant_uuid: str) -> Iterator[str]:
    """
    Hold ``tenant_uuid`` as the current tenant for the duration of the block.

    The previous value (normally none) is restored on every exit path,
    including exceptions and cancellation, so a reused worker never
    inherits a stale tenant.

    Usage:
        with tenant_scope(tenant.tenant_uuid):
            ...
    """
    if not tenant_uuid or not tenant_uuid.strip():
        raise ValueError("Tenant identifier cannot be empty")
    token = _current_tenant.set(tenant_uuid)
    logger.debug("Entered tenant scope %s", tenant_uuid)
    try:
        yield tenant_uuid
    finally:
        _current_tenant.reset(token)
        logger.debug("Left tenant scope %s", tenant_uuid)
