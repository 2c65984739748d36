"""Invoice preparation.

Combines the period normalizer, the invoice-number calculator and the
quantity calculator into everything a renderer needs to print one invoice.
"""

from __future__ import annotations

import logging
from typing import Optional

from invoice_calendar.engine.numbering import explain_invoice_number
from invoice_calendar.engine.periods import normalize_period_end_date_for_cadence
from invoice_calendar.engine.quantity import billable_quantity, working_days_in_period
from invoice_calendar.engine.validator import validate_config
from invoice_calendar.errors import TargetPeriodMustNotBeInRecordOfPeriodsOffError
from invoice_calendar.models import (
    Date,
    InvoicingConfig,
    PeriodInvoice,
    TimeOff,
)

logger = logging.getLogger(__name__)


def prepare_invoice(
    config: InvoicingConfig,
    target_date: Date,
    is_expenses: bool = False,
    time_off: Optional[TimeOff] = None,
) -> PeriodInvoice:
    """Decide period, number, quantity and dates of the invoice for ``target_date``.

    Expense invoices carry no quantity; their line items come from elsewhere.
    """
    validate_config(config)
    cadence = config.cadence

    target_period = normalize_period_end_date_for_cadence(target_date, cadence)
    if target_period in config.periods_off:
        raise TargetPeriodMustNotBeInRecordOfPeriodsOffError(target_period)

    breakdown = explain_invoice_number(
        config.anchor, target_period, cadence, is_expenses, config.periods_off,
    )

    quantity = None
    working_days = None
    if not is_expenses:
        quantity = billable_quantity(
            target_period, config.granularity, cadence, config.periods_off, time_off,
        )
        working_days = working_days_in_period(target_period, cadence)

    invoice_date = target_period
    due_date = invoice_date.advance(config.payment_terms)

    logger.debug(
        "prepared %s invoice %d for %s (due %s)",
        "expenses" if is_expenses else "service", breakdown.number, target_period, due_date,
    )

    return PeriodInvoice(
        target_period=target_period,
        cadence=cadence,
        granularity=config.granularity,
        breakdown=breakdown,
        invoice_date=invoice_date,
        due_date=due_date,
        quantity=quantity,
        working_days=working_days,
        time_off=time_off if not is_expenses else None,
    )
