from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class CurrencyCreate(BaseModel):
    """Schema for adding a currency"""

    code: str = Field(..., min_length=2, max_length=10)
    name: str = Field(..., min_length=1, max_length=100)
    symbol: str = Field(..., min_length=1, max_length=10)
    country: str = Field(..., min_length=1, max_length=100)
    exchange_rate: float = Field(default=1.0, gt=0)
    is_default: bool = False


class CurrencyUpdate(BaseModel):
    """Schema for updating a currency (partial)"""

    code: Optional[str] = Field(None, min_length=2, max_length=10)
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    symbol: Optional[str] = Field(None, min_length=1, max_length=10)
    country: Optional[str] = Field(None, min_length=1, max_length=100)
    exchange_rate: Optional[float] = Field(None, gt=0)
    is_default: Optional[bool] = None


class CurrencyResponse(BaseModel):
    """Schema for currency response"""

    model_config = {"from_attributes": True}

    id: int
    code: str
    name: str
    symbol: str
    country: str
    exchange_rate: float
    is_default: bool
    created_at: datetime


class CurrencyListResponse(BaseModel):
    currencies: list[CurrencyResponse]
    total: int
