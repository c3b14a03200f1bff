from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from bizdesk.models.expense import ExpenseCategory
from bizdesk.schemas.common_schemas import not_in_future


class ExpenseCreate(BaseModel):
    """Schema for recording an expense"""

    label: str = Field(..., min_length=1, max_length=200)
    amount: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    expense_date: Optional[date] = Field(None, description="Defaults to today")
    category: ExpenseCategory
    notes: Optional[str] = Field(None, max_length=500)
    is_recurring: Optional[bool] = Field(
        None, description="Defaults to the category's usual recurrence"
    )

    @field_validator("expense_date")
    @classmethod
    def expense_date_not_in_future(cls, value: Optional[date]) -> Optional[date]:
        return not_in_future(value)


class ExpenseUpdate(BaseModel):
    """Schema for updating an expense (partial)"""

    label: Optional[str] = Field(None, min_length=1, max_length=200)
    amount: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
    expense_date: Optional[date] = None
    category: Optional[ExpenseCategory] = None
    notes: Optional[str] = Field(None, max_length=500)
    is_recurring: Optional[bool] = None

    @field_validator("expense_date")
    @classmethod
    def expense_date_not_in_future(cls, value: Optional[date]) -> Optional[date]:
        return not_in_future(value)


class ExpenseResponse(BaseModel):
    """Schema for expense response"""

    model_config = {"from_attributes": True}

    id: int
    label: str
    amount: float
    expense_date: date
    category: ExpenseCategory
    notes: Optional[str]
    is_recurring: bool
    user_id: int
    created_at: datetime
    updated_at: datetime


class ExpenseListResponse(BaseModel):
    """Schema for list of expenses"""

    expenses: list[ExpenseResponse]
    total: int
