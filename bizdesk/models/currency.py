from sqlalchemy import String, Integer, Float, Boolean, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from bizdesk.models.base import Base, TimestampMixin, TenantScopedMixin


class Currency(Base, TimestampMixin, TenantScopedMixin):
    """
    Currency known to a tenant.

    exchange_rate is expressed against the tenant's reference currency
    (rate 1.0). Each tenant has at most one default currency, maintained
    by CurrencyService.
    """

    __tablename__ = "currencies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    code: Mapped[str] = mapped_column(String(10), nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    symbol: Mapped[str] = mapped_column(String(10), nullable=False)
    country: Mapped[str] = mapped_column(String(100), nullable=False)
    exchange_rate: Mapped[float] = mapped_column(Float, nullable=False, default=1.0)
    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Codes are unique per tenant, not globally
    __table_args__ = (UniqueConstraint("tenant_id", "code", name="uq_currency_tenant_code"),)
