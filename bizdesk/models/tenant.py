"""Tenant model for multi-tenant isolation."""

from datetime import datetime, UTC
from sqlalchemy import String, Integer, Boolean, DateTime, Enum
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates
from typing import TYPE_CHECKING

from bizdesk.models.base import Base, TimestampMixin, persisted_value
from bizdesk.models.plan import SubscriptionPlan

if TYPE_CHECKING:
    from bizdesk.models.user import User


class Tenant(Base, TimestampMixin):
    """
    Multi-tenant isolation boundary.

    A tenant is one business that signed up. Every purchase, sale,
    expense, currency and user belongs to exactly one tenant.

    The integer ``id`` is only used for foreign keys. ``tenant_uuid`` is the
    opaque identifier carried in tokens and in the tenant context; it is a
    random UUID4 so it cannot be guessed or enumerated.

    Tenants are never hard-deleted: deactivation sets ``is_active`` False.
    """

    __tablename__ = "tenants"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    tenant_uuid: Mapped[str] = mapped_column(
        String(36), unique=True, nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    phone: Mapped[str] = mapped_column(String(20), nullable=False)
    address: Mapped[str | None] = mapped_column(String(255), nullable=True)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    country: Mapped[str | None] = mapped_column(String(100), nullable=True)
    tax_id: Mapped[str | None] = mapped_column(String(50), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)
    expires_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    plan: Mapped[SubscriptionPlan] = mapped_column(
        Enum(SubscriptionPlan, native_enum=False, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=SubscriptionPlan.FREE,
    )

    # Relationships
    users: Mapped[list["User"]] = relationship("User", back_populates="tenant")

    @validates("tenant_uuid")
    def _tenant_uuid_is_write_once(self, key: str, value: str) -> str:
        if persisted_value(self, "tenant_uuid") not in (None, value):
            raise AttributeError("tenant_uuid is immutable once assigned")
        return value

    def is_expired(self, now: datetime | None = None) -> bool:
        if self.expires_at is None:
            return False
        now = now or datetime.now(UTC).replace(tzinfo=None)
        return now >= self.expires_at

    def __repr__(self) -> str:
        return f"<Tenant(id={self.id}, uuid='{self.tenant_uuid}', name='{self.name}')>"
