"""Billable quantity for a period.

Business rules:
- Monday through Friday: working days
- Saturday and Sunday: not billable
- One working day is 8 billable hours
- Fixed-rate services bill 1 per period (2 per month for a fortnightly rate
  invoiced monthly)

There is no holiday calendar: public holidays that fall on a weekday are
counted as working days and have to be entered as time off.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional

from invoice_calendar.engine.periods import (
    normalize_period_end_date_for_cadence,
    period_bounds,
)
from invoice_calendar.errors import (
    CannotInvoiceForMonthWhenCadenceIsBiWeeklyError,
    GranularityTooCoarseError,
    InvalidGranularityForTimeOffError,
    TargetPeriodMustNotBeInRecordOfPeriodsOffError,
)
from invoice_calendar.models import (
    Cadence,
    Date,
    Granularity,
    RecordOfPeriodsOff,
    TimeOff,
)

logger = logging.getLogger(__name__)

HOURS_PER_WORKING_DAY = Decimal("8")
SATURDAY = 5


def is_working_day(date: Date) -> bool:
    return date.weekday() < SATURDAY  # Monday=0 .. Friday=4


def working_days_in_period(target_date: Date, cadence: Cadence) -> int:
    """Count Monday-Friday dates in the period, both bounds included."""
    first, last = period_bounds(target_date, cadence)
    working_days = 0
    day = first
    while day <= last:
        if is_working_day(day):
            working_days += 1
        day = day.advance_days(1)
    return working_days


def quantity_in_period(
    target_date: Date,
    granularity: Granularity,
    cadence: Cadence,
    periods_off: RecordOfPeriodsOff,
) -> Decimal:
    """Billable units in the period containing ``target_date``."""
    target_period = normalize_period_end_date_for_cadence(target_date, cadence)
    normalized_off = {
        normalize_period_end_date_for_cadence(period, cadence) for period in periods_off
    }
    if target_period in normalized_off:
        raise TargetPeriodMustNotBeInRecordOfPeriodsOffError(target_period)

    if cadence is Cadence.BI_WEEKLY and granularity is Granularity.MONTH:
        raise CannotInvoiceForMonthWhenCadenceIsBiWeeklyError()

    if granularity > cadence.max_granularity():
        raise GranularityTooCoarseError(granularity, cadence.max_granularity(), target_period)

    if granularity is Granularity.MONTH:
        quantity = Decimal("1")
    elif granularity is Granularity.FORTNIGHT:
        quantity = Decimal("2") if cadence is Cadence.MONTHLY else Decimal("1")
    else:
        working_days = Decimal(working_days_in_period(target_period, cadence))
        if granularity is Granularity.DAY:
            quantity = working_days
        else:
            quantity = HOURS_PER_WORKING_DAY * working_days

    logger.debug(
        "quantity in period %s (%s, %s): %s", target_period, cadence, granularity, quantity,
    )
    return quantity


def billable_quantity(
    target_date: Date,
    granularity: Granularity,
    cadence: Cadence,
    periods_off: RecordOfPeriodsOff,
    time_off: Optional[TimeOff] = None,
) -> Decimal:
    """Quantity in period minus time off, which must use the service granularity."""
    if time_off is not None and time_off.granularity is not granularity:
        raise InvalidGranularityForTimeOffError(time_off.granularity, granularity)

    quantity = quantity_in_period(target_date, granularity, cadence, periods_off)
    if time_off is None:
        return quantity
    return quantity - time_off.quantity
