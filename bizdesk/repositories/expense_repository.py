from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy import func

from bizdesk.core.isolation import tenant_criteria
from bizdesk.models.expense import Expense, ExpenseCategory
from bizdesk.models.tenant_context import TenantContext
from bizdesk.repositories.scoped_repository import TenantScopedRepository


class ExpenseRepository(TenantScopedRepository[Expense]):
    """Repository for Expense data access"""

    model = Expense

    def get_with_filters(
        self,
        context: TenantContext,
        category: Optional[ExpenseCategory] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Expense]:
        """
        Get expenses with optional filters, newest first.

        Args:
            context: Tenant context for isolation
            category: Optional category filter
            start_date: Optional start date filter (inclusive)
            end_date: Optional end date filter (inclusive)
        """
        query = self.query(context)

        if category is not None:
            query = query.filter(Expense.category == category)

        if start_date is not None:
            query = query.filter(Expense.expense_date >= start_date)

        if end_date is not None:
            query = query.filter(Expense.expense_date <= end_date)

        return query.order_by(Expense.expense_date.desc(), Expense.id.desc()).all()

    def total_for_period(self, start: date, end: date, context: TenantContext) -> Decimal:
        result = (
            self.db.query(func.sum(Expense.amount))
            .filter(
                tenant_criteria(Expense, context),
                Expense.expense_date >= start,
                Expense.expense_date <= end,
            )
            .scalar()
        )
        return Decimal(result) if result is not None else Decimal("0.00")
