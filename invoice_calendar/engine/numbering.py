"""Invoice number calculation.

The number of an invoice is derived from an anchor, a known-good pair of
(invoice number, period), by counting the periods elapsed since the anchor
and skipping the periods recorded as off:

    number = anchor.offset + elapsed - periods_off_in(anchor, target]

Expense invoices get one more, so that when services and expenses are both
invoiced for the same period the expense invoice always numbers higher.
"""

from __future__ import annotations

import logging

from invoice_calendar.engine.periods import (
    elapsed_periods_since,
    normalize_period_end_date_for_cadence,
)
from invoice_calendar.errors import RecordsOffMustNotContainOffsetPeriodError
from invoice_calendar.models import (
    Anchor,
    Cadence,
    Date,
    InvoiceNumberBreakdown,
    RecordOfPeriodsOff,
)

logger = logging.getLogger(__name__)


def explain_invoice_number(
    anchor: Anchor,
    target_date: Date,
    cadence: Cadence,
    is_expenses: bool,
    periods_off: RecordOfPeriodsOff,
) -> InvoiceNumberBreakdown:
    """Compute the invoice number for ``target_date`` and keep every intermediate value."""
    anchor_period = normalize_period_end_date_for_cadence(anchor.period, cadence)
    target_period = normalize_period_end_date_for_cadence(target_date, cadence)

    normalized_off = {
        normalize_period_end_date_for_cadence(period, cadence) for period in periods_off
    }
    if anchor_period in normalized_off:
        raise RecordsOffMustNotContainOffsetPeriodError(anchor_period)

    elapsed = elapsed_periods_since(anchor_period, target_period, cadence)

    # Only periods off in (anchor, target] were skipped on the way here.
    off_to_subtract = sum(
        1 for period in normalized_off if anchor_period < period <= target_period
    )

    breakdown = InvoiceNumberBreakdown(
        anchor=anchor,
        anchor_period=anchor_period,
        target_period=target_period,
        cadence=cadence,
        elapsed_periods=elapsed,
        periods_off_subtracted=off_to_subtract,
        is_expenses=is_expenses,
    )
    logger.debug(
        "calculated invoice number %d (cadence: %s, target: %s, expenses: %s, "
        "elapsed: %d, off: %d)",
        breakdown.number, cadence, target_period, is_expenses, elapsed, off_to_subtract,
    )
    return breakdown


def calculate_invoice_number(
    anchor: Anchor,
    target_date: Date,
    cadence: Cadence,
    is_expenses: bool,
    periods_off: RecordOfPeriodsOff,
) -> int:
    """Return the invoice number for the period containing ``target_date``.

    Raises RecordsOffMustNotContainOffsetPeriodError when the anchor's own
    period is recorded as off, and StartPeriodAfterEndPeriodError when the
    target lies before the anchor.
    """
    return explain_invoice_number(
        anchor, target_date, cadence, is_expenses, periods_off,
    ).number
