"""Strict validation of an invoicing configuration snapshot.

Collects every violation before anything is calculated, so the user can fix
the stored configuration in one go.
"""

from __future__ import annotations

from invoice_calendar.engine.periods import normalize_period_end_date_for_cadence
from invoice_calendar.errors import (
    CalendarError,
    CannotInvoiceForMonthWhenCadenceIsBiWeeklyError,
    InvalidPeriodError,
    OffsetPeriodMustNotBeInRecordOfPeriodsOffError,
    StrictValidationError,
)
from invoice_calendar.models import InvoicingConfig


def validate_config(config: InvoicingConfig) -> InvoicingConfig:
    """Validate ``config`` and return it unchanged if all checks pass."""
    errors: list[CalendarError] = []
    cadence = config.cadence

    # --- Billing unit vs. cadence ---
    if not cadence.validate(config.granularity):
        errors.append(CannotInvoiceForMonthWhenCadenceIsBiWeeklyError())

    # --- Periods off must be canonical period ends ---
    normalized_off = set()
    for period in config.periods_off:
        normalized = normalize_period_end_date_for_cadence(period, cadence)
        if normalized != period:
            errors.append(InvalidPeriodError(period))
        normalized_off.add(normalized)

    # --- Anchor must not be a period off ---
    anchor_period = normalize_period_end_date_for_cadence(config.anchor.period, cadence)
    if anchor_period in normalized_off:
        errors.append(OffsetPeriodMustNotBeInRecordOfPeriodsOffError(anchor_period))

    if errors:
        raise StrictValidationError(errors)

    return config
