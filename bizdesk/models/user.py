from sqlalchemy import String, Integer, Boolean, Enum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING
from bizdesk.models.base import Base, TimestampMixin, TenantScopedMixin
from bizdesk.models.role import UserRole

if TYPE_CHECKING:
    from bizdesk.models.tenant import Tenant


class User(Base, TimestampMixin, TenantScopedMixin):
    """
    A person working for a tenant.

    ``email`` is the principal identity: it is the 'sub' claim of tokens
    issued by the external auth service. Credentials are not stored here.
    The stored tenant reference is what tenant resolution follows.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    first_name: Mapped[str] = mapped_column(String(50), nullable=False)
    last_name: Mapped[str] = mapped_column(String(50), nullable=False)
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, native_enum=False, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=UserRole.USER,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    # Relationships
    tenant: Mapped["Tenant"] = relationship("Tenant", back_populates="users")

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', tenant_id={self.tenant_id})>"
