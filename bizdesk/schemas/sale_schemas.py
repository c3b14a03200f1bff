from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from bizdesk.schemas.common_schemas import not_in_future


class SaleCreate(BaseModel):
    """Schema for recording a sale"""

    product_name: str = Field(..., min_length=2, max_length=100)
    quantity: int = Field(..., gt=0)
    unit_price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    sale_date: Optional[date] = Field(None, description="Defaults to today")
    customer: Optional[str] = Field(None, max_length=100)

    @field_validator("sale_date")
    @classmethod
    def sale_date_not_in_future(cls, value: Optional[date]) -> Optional[date]:
        return not_in_future(value)


class SaleUpdate(BaseModel):
    """Schema for updating a sale (partial)"""

    product_name: Optional[str] = Field(None, min_length=2, max_length=100)
    quantity: Optional[int] = Field(None, gt=0)
    unit_price: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
    sale_date: Optional[date] = None
    customer: Optional[str] = Field(None, max_length=100)

    @field_validator("sale_date")
    @classmethod
    def sale_date_not_in_future(cls, value: Optional[date]) -> Optional[date]:
        return not_in_future(value)


class SaleResponse(BaseModel):
    """Schema for sale response"""

    model_config = {"from_attributes": True}

    id: int
    product_name: str
    quantity: int
    unit_price: float
    total_price: float
    sale_date: date
    customer: Optional[str]
    user_id: int
    created_at: datetime
    updated_at: datetime


class SaleListResponse(BaseModel):
    """Schema for list of sales"""

    sales: list[SaleResponse]
    total: int
