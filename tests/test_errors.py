"""Tests for the error taxonomy."""

import pytest

from invoice_calendar.errors import (
    CadenceMismatchError,
    CalendarError,
    CannotExpenseForFortnightWhenCadenceIsMonthlyError,
    CannotExpenseForMonthWhenCadenceIsBiWeeklyError,
    CannotInvoiceForFortnightWhenCadenceIsMonthlyError,
    CannotInvoiceForMonthWhenCadenceIsBiWeeklyError,
    ConfigurationError,
    FailedToParseDateError,
    GranularityTooCoarseError,
    InputError,
    InvalidPeriodError,
    OffsetPeriodMustNotBeInRecordOfPeriodsOffError,
    RecordsOffMustNotContainOffsetPeriodError,
    StartPeriodAfterEndPeriodError,
    StrictValidationError,
    TargetPeriodMustNotBeInRecordOfPeriodsOffError,
)
from invoice_calendar.models import Date, Granularity


class TestHierarchy:
    @pytest.mark.parametrize("error_class", [
        CannotInvoiceForMonthWhenCadenceIsBiWeeklyError,
        CannotInvoiceForFortnightWhenCadenceIsMonthlyError,
        CannotExpenseForMonthWhenCadenceIsBiWeeklyError,
        CannotExpenseForFortnightWhenCadenceIsMonthlyError,
    ])
    def test_cadence_errors(self, error_class):
        error = error_class()
        assert isinstance(error, CadenceMismatchError)
        assert isinstance(error, CalendarError)

    @pytest.mark.parametrize("error_class", [
        RecordsOffMustNotContainOffsetPeriodError,
        OffsetPeriodMustNotBeInRecordOfPeriodsOffError,
        TargetPeriodMustNotBeInRecordOfPeriodsOffError,
    ])
    def test_configuration_errors(self, error_class):
        error = error_class(Date(2025, 5, 31))
        assert isinstance(error, ConfigurationError)
        assert "2025-05-31" in str(error)

    def test_input_errors(self):
        assert isinstance(InvalidPeriodError("x"), InputError)
        assert isinstance(FailedToParseDateError("Invalid Format"), InputError)


class TestMessages:
    def test_start_after_end(self):
        error = StartPeriodAfterEndPeriodError(Date(2025, 4, 30), Date(2025, 1, 31))
        assert str(error) == "Start period ('2025-04-30') is after end period ('2025-01-31')"
        assert error.start == "2025-04-30"

    def test_granularity_too_coarse(self):
        error = GranularityTooCoarseError(Granularity.MONTH, Granularity.FORTNIGHT, Date(2025, 5, 15))
        assert str(error) == (
            "Granularity too coarse 'Month', max is: 'Fortnight', for period: '2025-05-15'"
        )

    def test_strict_validation_lists_every_error(self):
        errors = [
            CannotInvoiceForMonthWhenCadenceIsBiWeeklyError(),
            InvalidPeriodError(Date(2025, 5, 20)),
        ]
        error = StrictValidationError(errors)
        assert error.errors == errors
        assert str(error).startswith("Strict validation failed with 2 error(s):")
        assert "  - Invalid Period, bad value: 2025-05-20" in str(error)
