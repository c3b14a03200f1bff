from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from bizdesk.schemas.common_schemas import not_in_future


class PurchaseCreate(BaseModel):
    """Schema for recording a purchase"""

    product_name: str = Field(..., min_length=2, max_length=100)
    quantity: int = Field(..., gt=0)
    unit_price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    purchase_date: Optional[date] = Field(None, description="Defaults to today")
    supplier: Optional[str] = Field(None, max_length=100)

    @field_validator("purchase_date")
    @classmethod
    def purchase_date_not_in_future(cls, value: Optional[date]) -> Optional[date]:
        return not_in_future(value)


class PurchaseUpdate(BaseModel):
    """Schema for updating a purchase (partial)"""

    product_name: Optional[str] = Field(None, min_length=2, max_length=100)
    quantity: Optional[int] = Field(None, gt=0)
    unit_price: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
    purchase_date: Optional[date] = None
    supplier: Optional[str] = Field(None, max_length=100)

    @field_validator("purchase_date")
    @classmethod
    def purchase_date_not_in_future(cls, value: Optional[date]) -> Optional[date]:
        return not_in_future(value)


class PurchaseResponse(BaseModel):
    """Schema for purchase response"""

    model_config = {"from_attributes": True}

    id: int
    product_name: str
    quantity: int
    unit_price: float
    total_price: float
    purchase_date: date
    supplier: Optional[str]
    user_id: int
    created_at: datetime
    updated_at: datetime


class PurchaseListResponse(BaseModel):
    """Schema for list of purchases"""

    purchases: list[PurchaseResponse]
    total: int
