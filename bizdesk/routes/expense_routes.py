from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from bizdesk.database import get_db
from bizdesk.dependencies import get_tenant_context
from bizdesk.models.expense import ExpenseCategory
from bizdesk.models.tenant_context import TenantContext
from bizdesk.services.expense_service import ExpenseService
from bizdesk.schemas.common_schemas import PeriodTotalResponse
from bizdesk.schemas.expense_schemas import (
    ExpenseCreate,
    ExpenseUpdate,
    ExpenseResponse,
    ExpenseListResponse,
)

router = APIRouter()


@router.post("", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def create_expense(
    data: ExpenseCreate,
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    """Record a business expense"""
    service = ExpenseService(db)
    return service.create_expense(data, context)


@router.get("", response_model=ExpenseListResponse)
async def list_expenses(
    category: Optional[ExpenseCategory] = Query(None, description="Filter by category"),
    start_date: Optional[date] = Query(None, description="Filter from date (inclusive)"),
    end_date: Optional[date] = Query(None, description="Filter to date (inclusive)"),
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    """
    List expenses with optional filters.

    Filters can be combined; results are newest first.
    """
    service = ExpenseService(db)
    expenses = service.list_expenses(
        context, category=category, start_date=start_date, end_date=end_date
    )
    return ExpenseListResponse(expenses=expenses, total=len(expenses))


@router.get("/total", response_model=PeriodTotalResponse)
async def expenses_total(
    start_date: Optional[date] = Query(None, description="Defaults to the first day of the month"),
    end_date: Optional[date] = Query(None, description="Defaults to today"),
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    service = ExpenseService(db)
    start, end, total = service.total_for_period(start_date, end_date, context)
    return PeriodTotalResponse(start_date=start, end_date=end, total=float(total))


@router.get("/{expense_id}", response_model=ExpenseResponse)
async def get_expense(
    expense_id: int,
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    service = ExpenseService(db)
    return service.get_expense(expense_id, context)


@router.patch("/{expense_id}", response_model=ExpenseResponse)
async def update_expense(
    expense_id: int,
    data: ExpenseUpdate,
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    service = ExpenseService(db)
    return service.update_expense(expense_id, data, context)


@router.delete("/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_expense(
    expense_id: int,
    context: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
):
    service = ExpenseService(db)
    service.delete_expense(expense_id, context)
    return None
