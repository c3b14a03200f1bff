from datetime import date
from decimal import Decimal
from enum import Enum as PyEnum
from sqlalchemy import String, Integer, Numeric, ForeignKey, Date, Boolean, Enum, Index
from sqlalchemy.orm import Mapped, mapped_column
from bizdesk.models.base import Base, TimestampMixin, TenantScopedMixin


class ExpenseCategory(str, PyEnum):
    """Expense category enumeration"""

    RENT = "rent"
    ELECTRICITY = "electricity"
    WATER = "water"
    INTERNET = "internet"
    TRANSPORT = "transport"
    MARKETING = "marketing"
    SUPPLIES = "supplies"
    MAINTENANCE = "maintenance"
    SALARIES = "salaries"
    INSURANCE = "insurance"
    TAXES = "taxes"
    TRAINING = "training"
    EQUIPMENT = "equipment"
    OTHER = "other"

    @property
    def recurring_by_default(self) -> bool:
        return self in _RECURRING_CATEGORIES


_RECURRING_CATEGORIES = frozenset(
    {
        ExpenseCategory.RENT,
        ExpenseCategory.ELECTRICITY,
        ExpenseCategory.WATER,
        ExpenseCategory.INTERNET,
        ExpenseCategory.SALARIES,
        ExpenseCategory.INSURANCE,
    }
)


class Expense(Base, TimestampMixin, TenantScopedMixin):
    """Operating expense of the business."""

    __tablename__ = "expenses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    label: Mapped[str] = mapped_column(String(200), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(precision=10, scale=2), nullable=False)
    expense_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    category: Mapped[ExpenseCategory] = mapped_column(
        Enum(ExpenseCategory, native_enum=False, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        index=True,
    )
    notes: Mapped[str | None] = mapped_column(String(500), nullable=True)
    is_recurring: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True
    )

    __table_args__ = (Index("ix_expenses_tenant_date", "tenant_id", "expense_date"),)
