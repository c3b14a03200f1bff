from datetime import date
from typing import Optional

from bizdesk.core.exceptions import ValidationException


def resolve_period(start_date: Optional[date], end_date: Optional[date]) -> tuple[date, date]:
    """
    Normalise an optional date range.

    Missing end = today, missing start = first day of the end date's month.

    Raises:
        ValidationException: If start is after end
    """
    end = end_date or date.today()
    start = start_date or end.replace(day=1)
    if start > end:
        raise ValidationException("start_date must be on or before end_date")
    return start, end
