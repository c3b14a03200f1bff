from datetime import date
from typing import Optional
from pydantic import BaseModel


def not_in_future(value: Optional[date]) -> Optional[date]:
    """Reject business dates after today"""
    if value is not None and value > date.today():
        raise ValueError("date cannot be in the future")
    return value


class PeriodTotalResponse(BaseModel):
    """Sum of amounts over a date range"""

    start_date: date
    end_date: date
    total: float
