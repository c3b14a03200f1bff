from datetime import date
from decimal import Decimal
from sqlalchemy import String, Integer, Numeric, ForeignKey, Date, Index
from sqlalchemy.orm import Mapped, mapped_column
from bizdesk.models.base import Base, TimestampMixin, TenantScopedMixin
from bizdesk.models.purchase import ProductLineMixin, line_total


class Sale(Base, TimestampMixin, TenantScopedMixin, ProductLineMixin):
    """Goods sold to a customer. Sales draw down computed stock."""

    __tablename__ = "sales"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    unit_price: Mapped[Decimal] = mapped_column(Numeric(precision=10, scale=2), nullable=False)
    total_price: Mapped[Decimal] = mapped_column(Numeric(precision=10, scale=2), nullable=False)
    sale_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    customer: Mapped[str | None] = mapped_column(String(100), nullable=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True
    )

    __table_args__ = (Index("ix_sales_tenant_date", "tenant_id", "sale_date"),)

    def recalculate_total(self) -> None:
        self.total_price = line_total(self.quantity, self.unit_price)
