"""Calendar arithmetic for billing months and installment schedules"""

import calendar
from datetime import date
from typing import List, Tuple

from nossos_gastos.domain.exceptions import InvalidDateError

PT_BR_MONTHS = (
    "janeiro",
    "fevereiro",
    "março",
    "abril",
    "maio",
    "junho",
    "julho",
    "agosto",
    "setembro",
    "outubro",
    "novembro",
    "dezembro",
)


def _check_month(month: int) -> None:
    if not 1 <= month <= 12:
        raise InvalidDateError(f"Month out of range: {month}")


def parse_iso_date(value: date | str) -> date:
    """Accept a date or an ISO `YYYY-MM-DD` string"""
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError) as e:
        raise InvalidDateError(f"Invalid ISO date: {value!r}") from e


def last_day_of_month(year: int, month: int) -> int:
    """Number of days in the month (leap-year aware)"""
    _check_month(month)
    return calendar.monthrange(year, month)[1]


def clamp_day(year: int, month: int, day: int) -> date:
    """
    Build a date, clamping `day` to the month's last day.

    Card days are configured as 1-31, so a due day of 31 lands on the 30th
    in April and on the 28th/29th in February.
    """
    if day < 1:
        raise InvalidDateError(f"Day of month must be positive: {day}")
    return date(year, month, min(day, last_day_of_month(year, month)))


def shift_month(year: int, month: int, months: int) -> Tuple[int, int]:
    """Move (year, month) by any number of months, normalizing overflow"""
    _check_month(month)
    years_carried, month_index = divmod(month - 1 + months, 12)
    return year + years_carried, month_index + 1


def add_months(d: date, months: int) -> date:
    """
    Advance a date by calendar months (negative moves backwards).

    Example:
        add_months(date(2024, 1, 31), 1) -> 2024-02-29
    """
    year, month = shift_month(d.year, d.month, months)
    return clamp_day(year, month, d.day)


def month_key(year: int, month: int) -> str:
    """Canonical `YYYY-MM` key"""
    _check_month(month)
    return f"{year:04d}-{month:02d}"


def month_key_of(d: date) -> str:
    return month_key(d.year, d.month)


def parse_month_key(key: str) -> Tuple[int, int]:
    """Split a `YYYY-MM` key into (year, month)"""
    try:
        year_part, month_part = key.split("-")
        year, month = int(year_part), int(month_part)
    except (AttributeError, ValueError) as e:
        raise InvalidDateError(f"Invalid month key: {key!r}") from e
    _check_month(month)
    return year, month


def upcoming_month_keys(year: int, month: int, count: int) -> List[str]:
    """`count` consecutive month keys starting at (year, month)"""
    return [month_key(*shift_month(year, month, i)) for i in range(count)]


def month_label(year: int, month: int) -> str:
    """Capitalized pt-BR month name, e.g. 'Janeiro'"""
    _check_month(month)
    return PT_BR_MONTHS[month - 1].capitalize()
