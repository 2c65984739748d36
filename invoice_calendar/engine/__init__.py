"""Period, numbering and quantity engines."""
from invoice_calendar.engine.periods import (
    elapsed_periods_since,
    normalize_period_end_date_for_cadence,
    period_end_from_relative_time,
    shift_period_end,
)
from invoice_calendar.engine.numbering import calculate_invoice_number, explain_invoice_number
from invoice_calendar.engine.quantity import billable_quantity, quantity_in_period
from invoice_calendar.engine.validator import validate_config
from invoice_calendar.engine.ledger import reanchor, record_period_off
from invoice_calendar.engine.calculator import prepare_invoice

__all__ = [
    "elapsed_periods_since",
    "normalize_period_end_date_for_cadence",
    "period_end_from_relative_time",
    "shift_period_end",
    "calculate_invoice_number",
    "explain_invoice_number",
    "billable_quantity",
    "quantity_in_period",
    "validate_config",
    "reanchor",
    "record_period_off",
    "prepare_invoice",
]
