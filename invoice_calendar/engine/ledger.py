"""Explicit changes to the stored numbering state.

Ordinary invoicing never changes the anchor or the record of periods off;
only these two operations do. Both return a new configuration and leave the
given one untouched. Writing the result back is up to the caller.
"""

from __future__ import annotations

import dataclasses
import logging

from invoice_calendar.engine.periods import normalize_period_end_date_for_cadence
from invoice_calendar.errors import OffsetPeriodMustNotBeInRecordOfPeriodsOffError
from invoice_calendar.models import Anchor, Date, InvoicingConfig

logger = logging.getLogger(__name__)


def record_period_off(config: InvoicingConfig, date: Date) -> InvoicingConfig:
    """Record the period containing ``date`` as one without an invoice."""
    period = normalize_period_end_date_for_cadence(date, config.cadence)
    anchor_period = normalize_period_end_date_for_cadence(config.anchor.period, config.cadence)
    if period == anchor_period:
        raise OffsetPeriodMustNotBeInRecordOfPeriodsOffError(period)
    if period in config.periods_off:
        logger.debug("period %s already recorded as off", period)
        return config

    logger.info("recording period %s as off", period)
    return dataclasses.replace(config, periods_off=config.periods_off.with_period(period))


def reanchor(config: InvoicingConfig, offset: int, date: Date) -> InvoicingConfig:
    """Replace the anchor with ``offset`` issued for the period containing ``date``."""
    period = normalize_period_end_date_for_cadence(date, config.cadence)
    normalized_off = {
        normalize_period_end_date_for_cadence(p, config.cadence) for p in config.periods_off
    }
    if period in normalized_off:
        raise OffsetPeriodMustNotBeInRecordOfPeriodsOffError(period)

    logger.info("re-anchoring invoice numbers at %d for %s", offset, period)
    return dataclasses.replace(config, anchor=Anchor(offset=offset, period=period))
