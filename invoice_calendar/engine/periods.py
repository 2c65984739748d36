"""Period normalization and serial arithmetic.

A period (a calendar month or a half-month) is always represented by its
last day. Under a monthly cadence that is the month end; under a bi-weekly
cadence it is either the first-half end (the 15th, or the 14th in February)
or the month end.

To count or move periods each period-end date is mapped to a serial, an
integer that grows by one per period:

- month serial:     year * 12 + (month - 1)
- fortnight serial: year * 24 + (month - 1) * 2 + half    (half is 0 or 1)
"""

from __future__ import annotations

import logging
from typing import Optional

from invoice_calendar.errors import (
    InvalidDateError,
    InvalidPeriodError,
    StartPeriodAfterEndPeriodError,
)
from invoice_calendar.models import Cadence, Date, Granularity, Month, RelativeTime

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12
FORTNIGHTS_PER_YEAR = 24


def first_half_end(date: Date) -> Date:
    return date.replace_day(date.month.first_half_last_day())


def normalize_period_end_date_for_cadence(date: Date, cadence: Cadence) -> Date:
    """Map any date to the end date of the period it falls in."""
    if cadence is Cadence.MONTHLY:
        return date.end_of_month()
    boundary = first_half_end(date)
    if date.day <= boundary.day:
        return boundary
    return date.end_of_month()


def is_first_half(period_end: Date) -> bool:
    return period_end == first_half_end(period_end)


def period_serial(date: Date, cadence: Cadence) -> int:
    period_end = normalize_period_end_date_for_cadence(date, cadence)
    if cadence is Cadence.MONTHLY:
        return period_end.year * MONTHS_PER_YEAR + (period_end.month - 1)
    half = 0 if is_first_half(period_end) else 1
    return period_end.year * FORTNIGHTS_PER_YEAR + (period_end.month - 1) * 2 + half


def period_from_serial(serial: int, cadence: Cadence) -> Date:
    """Inverse of :func:`period_serial`."""
    if serial < 0:
        raise InvalidDateError(f"period serial {serial} is before year 0")
    if cadence is Cadence.MONTHLY:
        year, month_index = divmod(serial, MONTHS_PER_YEAR)
        return Date(year, month_index + 1, 1).end_of_month()
    year, rest = divmod(serial, FORTNIGHTS_PER_YEAR)
    month_index, half = divmod(rest, 2)
    month = Month(month_index + 1)
    if half == 0:
        return Date(year, month, month.first_half_last_day())
    return Date(year, month, month.last_day(year))


def elapsed_periods_since(start: Date, end: Date, cadence: Cadence) -> int:
    """Number of whole periods from ``start``'s period to ``end``'s period.

    Raises StartPeriodAfterEndPeriodError when ``start`` lies in a later
    period than ``end``.
    """
    start_period = normalize_period_end_date_for_cadence(start, cadence)
    end_period = normalize_period_end_date_for_cadence(end, cadence)
    if start_period > end_period:
        raise StartPeriodAfterEndPeriodError(start_period, end_period)
    return period_serial(end_period, cadence) - period_serial(start_period, cadence)


def cadence_for_unit(unit: Granularity) -> Cadence:
    """The cadence whose periods are one ``unit`` long."""
    if unit is Granularity.MONTH:
        return Cadence.MONTHLY
    if unit is Granularity.FORTNIGHT:
        return Cadence.BI_WEEKLY
    raise InvalidPeriodError(unit)


def shift_period_end(period_end: Date, unit: Granularity, amount: int) -> Date:
    """Move a period-end date by ``amount`` periods of ``unit`` (Month or Fortnight)."""
    cadence = cadence_for_unit(unit)
    serial = period_serial(period_end, cadence) + amount
    if serial < 0:
        raise InvalidDateError(f"shifting {period_end} by {amount} {unit} goes before year 0")
    return period_from_serial(serial, cadence)


def period_end_from_relative_time(
    relative: RelativeTime,
    today: Optional[Date] = None,
) -> Date:
    """Resolve "current"/"last" style periods against ``today`` (defaults to the local date)."""
    if today is None:
        today = Date.today()
    period_end = shift_period_end(today, relative.unit, relative.amount)
    logger.debug(
        "resolved relative period %s %+d from %s to %s",
        relative.unit, relative.amount, today, period_end,
    )
    return period_end


def period_bounds(date: Date, cadence: Cadence) -> tuple[Date, Date]:
    """First and last day (inclusive) of the period ``date`` belongs to."""
    period_end = normalize_period_end_date_for_cadence(date, cadence)
    if cadence is Cadence.MONTHLY or is_first_half(period_end):
        return period_end.replace_day(1), period_end
    start = period_end.replace_day(period_end.month.first_half_last_day() + 1)
    return start, period_end
