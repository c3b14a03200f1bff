from datetime import datetime
from sqlalchemy import DateTime, Integer, ForeignKey, func, inspect
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, declared_attr, validates

from bizdesk.core.exceptions import TenantReassignmentError


class Base(DeclarativeBase):
    pass


class TimestampMixin:
    """Adds created_at / updated_at columns maintained by the database."""

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=func.now(), onupdate=func.now()
    )


def persisted_value(obj, key: str):
    """Current value of ``key``, loading it if the row was expired by a commit"""
    if inspect(obj).persistent:
        return getattr(obj, key)
    return obj.__dict__.get(key)


class TenantScopedMixin:
    """
    Ownership column shared by every tenant-scoped table.

    tenant_id is stamped once at creation (see bizdesk.core.isolation)
    and can never be pointed at another tenant afterwards.
    """

    @declared_attr
    def tenant_id(cls) -> Mapped[int]:
        return mapped_column(
            Integer,
            ForeignKey("tenants.id", ondelete="RESTRICT"),
            nullable=False,
            index=True,  # Every scoped query filters on it
        )

    @validates("tenant_id")
    def _reject_tenant_reassignment(self, key: str, value: int | None) -> int | None:
        current = persisted_value(self, "tenant_id")
        if current is not None and value != current:
            raise TenantReassignmentError(
                f"{type(self).__name__} {getattr(self, 'id', None)} cannot be moved to another tenant"
            )
        return value
