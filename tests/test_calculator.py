"""Tests for invoice preparation."""

import dataclasses

import pytest
from decimal import Decimal

from invoice_calendar.engine import prepare_invoice
from invoice_calendar.errors import (
    InvalidGranularityForTimeOffError,
    StrictValidationError,
    TargetPeriodMustNotBeInRecordOfPeriodsOffError,
)
from invoice_calendar.models import (
    Anchor,
    Cadence,
    Date,
    Granularity,
    InvoicingConfig,
    PaymentTerms,
    RecordOfPeriodsOff,
    TimeOff,
)


def _make_config(**overrides) -> InvoicingConfig:
    config = InvoicingConfig(
        cadence=Cadence.MONTHLY,
        granularity=Granularity.DAY,
        anchor=Anchor(offset=100, period=Date(2025, 12, 31)),
    )
    return dataclasses.replace(config, **overrides)


class TestServiceInvoice:
    def test_monthly_days(self):
        result = prepare_invoice(_make_config(), Date(2026, 2, 10))
        assert result.target_period == Date(2026, 2, 28)
        assert result.number == 102
        assert result.quantity == Decimal("20")
        assert result.working_days == 20
        assert result.invoice_date == Date(2026, 2, 28)
        assert result.due_date == Date(2026, 3, 30)
        assert not result.is_expenses

    def test_time_off_is_deducted(self):
        time_off = TimeOff(quantity=Decimal("2"), granularity=Granularity.DAY)
        result = prepare_invoice(_make_config(), Date(2026, 2, 10), time_off=time_off)
        assert result.quantity == Decimal("18")
        assert result.working_days == 20
        assert result.time_off == time_off

    def test_bi_weekly_hours(self):
        config = _make_config(
            cadence=Cadence.BI_WEEKLY,
            granularity=Granularity.HOUR,
            anchor=Anchor(offset=10, period=Date(2025, 1, 15)),
        )
        result = prepare_invoice(config, Date(2025, 2, 20))
        assert result.target_period == Date(2025, 2, 28)
        assert result.number == 13
        assert result.quantity == Decimal("80")

    def test_payment_terms(self):
        result = prepare_invoice(_make_config(payment_terms=PaymentTerms(15)), Date(2026, 2, 28))
        assert result.due_date == Date(2026, 3, 15)

    def test_mismatched_time_off_raises(self):
        time_off = TimeOff(quantity=Decimal("4"), granularity=Granularity.HOUR)
        with pytest.raises(InvalidGranularityForTimeOffError):
            prepare_invoice(_make_config(), Date(2026, 2, 10), time_off=time_off)


class TestExpenseInvoice:
    def test_number_is_one_higher_and_has_no_quantity(self):
        result = prepare_invoice(_make_config(), Date(2026, 2, 10), is_expenses=True)
        assert result.number == 103
        assert result.is_expenses
        assert result.quantity is None
        assert result.working_days is None

    def test_time_off_is_ignored(self):
        time_off = TimeOff(quantity=Decimal("2"), granularity=Granularity.DAY)
        result = prepare_invoice(_make_config(), Date(2026, 2, 10), is_expenses=True, time_off=time_off)
        assert result.time_off is None


class TestRejections:
    def test_target_in_periods_off(self):
        config = _make_config(periods_off=RecordOfPeriodsOff.of([Date(2026, 2, 28)]))
        with pytest.raises(TargetPeriodMustNotBeInRecordOfPeriodsOffError):
            prepare_invoice(config, Date(2026, 2, 10))
        with pytest.raises(TargetPeriodMustNotBeInRecordOfPeriodsOffError):
            prepare_invoice(config, Date(2026, 2, 10), is_expenses=True)

    def test_invalid_config(self):
        config = _make_config(cadence=Cadence.BI_WEEKLY, granularity=Granularity.MONTH)
        with pytest.raises(StrictValidationError):
            prepare_invoice(config, Date(2026, 2, 10))
