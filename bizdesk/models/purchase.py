from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from sqlalchemy import String, Integer, Numeric, ForeignKey, Date, Index
from sqlalchemy.orm import Mapped, mapped_column, validates
from bizdesk.models.base import Base, TimestampMixin, TenantScopedMixin

CENTS = Decimal("0.01")


def line_total(quantity: int, unit_price: Decimal) -> Decimal:
    """quantity x unit price, rounded half-up to cents"""
    return (Decimal(unit_price) * quantity).quantize(CENTS, rounding=ROUND_HALF_UP)


def normalize_product(name: str) -> str:
    """Key two product names are matched on: trimmed and lowercased"""
    return name.strip().lower()


class ProductLineMixin:
    """
    Product columns shared by purchases and sales.

    product_key is derived from product_name in Python whenever the name is
    set, so lookups compare stored keys instead of relying on the database's
    own case folding (SQLite's lower() only handles ASCII).
    """

    product_name: Mapped[str] = mapped_column(String(100), nullable=False)
    product_key: Mapped[str] = mapped_column(String(100), nullable=False, index=True)

    @validates("product_name")
    def _set_product_key(self, key: str, value: str) -> str:
        value = value.strip()
        self.product_key = normalize_product(value)
        return value


class Purchase(Base, TimestampMixin, TenantScopedMixin, ProductLineMixin):
    """
    Stock bought from a supplier.

    total_price is always quantity x unit_price (see line_total); it is
    recomputed by the service whenever either changes.
    """

    __tablename__ = "purchases"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    unit_price: Mapped[Decimal] = mapped_column(Numeric(precision=10, scale=2), nullable=False)
    total_price: Mapped[Decimal] = mapped_column(Numeric(precision=10, scale=2), nullable=False)
    purchase_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    supplier: Mapped[str | None] = mapped_column(String(100), nullable=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True
    )

    __table_args__ = (Index("ix_purchases_tenant_date", "tenant_id", "purchase_date"),)

    def recalculate_total(self) -> None:
        self.total_price = line_total(self.quantity, self.unit_price)
