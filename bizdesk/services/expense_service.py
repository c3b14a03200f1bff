import logging
from datetime import date
from decimal import Decimal
from typing import Optional
from sqlalchemy.orm import Session

from bizdesk.core.exceptions import NotFoundException, ValidationException, not_found_message
from bizdesk.core.isolation import require_context
from bizdesk.models.expense import Expense, ExpenseCategory
from bizdesk.models.tenant_context import TenantContext
from bizdesk.repositories.expense_repository import ExpenseRepository
from bizdesk.schemas.expense_schemas import ExpenseCreate, ExpenseUpdate
from bizdesk.services.period import resolve_period

logger = logging.getLogger(__name__)


class ExpenseService:
    """Service layer for expense business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ExpenseRepository(db)

    def create_expense(self, data: ExpenseCreate, context: TenantContext) -> Expense:
        """
        Record an expense for the caller's tenant.

        When ``is_recurring`` is omitted it follows the category: rent,
        utilities, salaries and insurance recur, everything else doesn't.

        Raises:
            NoTenantContextError: If called without a tenant context
        """
        context = require_context(context, "create Expense")
        is_recurring = (
            data.is_recurring if data.is_recurring is not None else data.category.recurring_by_default
        )
        expense = Expense(
            label=data.label.strip(),
            amount=data.amount,
            expense_date=data.expense_date or date.today(),
            category=data.category,
            notes=data.notes,
            is_recurring=is_recurring,
            user_id=context.acting_user_id,
        )
        expense = self.repo.create(expense, context)
        logger.info("Expense %s recorded: %s %s", expense.id, expense.category.value, expense.amount)
        return expense

    def list_expenses(
        self,
        context: TenantContext,
        category: Optional[ExpenseCategory] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Expense]:
        """
        List expenses with optional filters.

        Raises:
            ValidationException: If start_date is after end_date
        """
        if start_date and end_date and start_date > end_date:
            raise ValidationException("start_date must be on or before end_date")
        return self.repo.get_with_filters(
            context, category=category, start_date=start_date, end_date=end_date
        )

    def get_expense(self, expense_id: int, context: TenantContext) -> Expense:
        expense = self.repo.get_by_id(expense_id, context)
        if not expense:
            raise NotFoundException(not_found_message("Expense", expense_id))
        return expense

    def update_expense(
        self, expense_id: int, data: ExpenseUpdate, context: TenantContext
    ) -> Expense:
        """
        Update an expense.

        Raises:
            NotFoundException: If expense doesn't exist
            CrossTenantAccessError: If expense belongs to another tenant
        """
        expense = self.repo.get_for_write(expense_id, context)
        if not expense:
            raise NotFoundException(not_found_message("Expense", expense_id))

        if data.label is not None:
            expense.label = data.label.strip()
        if data.amount is not None:
            expense.amount = data.amount
        if data.expense_date is not None:
            expense.expense_date = data.expense_date
        if data.category is not None:
            expense.category = data.category
        if data.notes is not None:
            expense.notes = data.notes
        if data.is_recurring is not None:
            expense.is_recurring = data.is_recurring

        return self.repo.update(expense, context)

    def delete_expense(self, expense_id: int, context: TenantContext) -> None:
        expense = self.repo.get_for_write(expense_id, context)
        if not expense:
            raise NotFoundException(not_found_message("Expense", expense_id))
        self.repo.delete(expense, context)
        logger.info("Expense %s deleted", expense_id)

    def total_for_period(
        self, start_date: Optional[date], end_date: Optional[date], context: TenantContext
    ) -> tuple[date, date, Decimal]:
        start, end = resolve_period(start_date, end_date)
        return start, end, self.repo.total_for_period(start, end, context)
