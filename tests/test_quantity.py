"""Tests for billable quantity and working day counting."""

import pytest
from decimal import Decimal

from invoice_calendar.engine.quantity import (
    billable_quantity,
    is_working_day,
    quantity_in_period,
    working_days_in_period,
)
from invoice_calendar.errors import (
    CadenceMismatchError,
    CannotInvoiceForMonthWhenCadenceIsBiWeeklyError,
    InvalidGranularityForTimeOffError,
    TargetPeriodMustNotBeInRecordOfPeriodsOffError,
)
from invoice_calendar.models import Cadence, Date, Granularity, RecordOfPeriodsOff, TimeOff

NO_PERIODS_OFF = RecordOfPeriodsOff()


class TestWorkingDays:
    def test_weekend_is_not_working(self):
        # 2025-05-31 is a Saturday, 2025-06-01 a Sunday, 2025-06-02 a Monday
        assert not is_working_day(Date(2025, 5, 31))
        assert not is_working_day(Date(2025, 6, 1))
        assert is_working_day(Date(2025, 6, 2))

    def test_whole_months(self):
        assert working_days_in_period(Date(2025, 5, 31), Cadence.MONTHLY) == 22
        assert working_days_in_period(Date(2024, 1, 31), Cadence.MONTHLY) == 23
        assert working_days_in_period(Date(2026, 2, 28), Cadence.MONTHLY) == 20

    def test_half_months(self):
        assert working_days_in_period(Date(2025, 5, 15), Cadence.BI_WEEKLY) == 11
        assert working_days_in_period(Date(2025, 5, 31), Cadence.BI_WEEKLY) == 11

    def test_leap_february_halves(self):
        # 2024-02: first half ends on the 14th, second half runs to the 29th
        assert working_days_in_period(Date(2024, 2, 1), Cadence.BI_WEEKLY) == 10
        assert working_days_in_period(Date(2024, 2, 29), Cadence.BI_WEEKLY) == 11
        assert working_days_in_period(Date(2024, 2, 29), Cadence.MONTHLY) == 21


class TestQuantityInPeriod:
    def test_month_monthly_is_one(self):
        assert quantity_in_period(
            Date(2025, 5, 31), Granularity.MONTH, Cadence.MONTHLY, NO_PERIODS_OFF,
        ) == Decimal("1")

    def test_fortnight_monthly_is_two(self):
        assert quantity_in_period(
            Date(2025, 5, 31), Granularity.FORTNIGHT, Cadence.MONTHLY, NO_PERIODS_OFF,
        ) == Decimal("2")

    def test_fortnight_bi_weekly_is_one(self):
        assert quantity_in_period(
            Date(2025, 5, 3), Granularity.FORTNIGHT, Cadence.BI_WEEKLY, NO_PERIODS_OFF,
        ) == Decimal("1")

    def test_days_monthly(self):
        assert quantity_in_period(
            Date(2025, 5, 31), Granularity.DAY, Cadence.MONTHLY, NO_PERIODS_OFF,
        ) == Decimal("22")

    def test_hours_monthly(self):
        assert quantity_in_period(
            Date(2025, 5, 31), Granularity.HOUR, Cadence.MONTHLY, NO_PERIODS_OFF,
        ) == Decimal("176")

    def test_days_bi_weekly_february(self):
        # 2025-02-01 is a Saturday; 1st-14th holds two full working weeks
        assert quantity_in_period(
            Date(2025, 2, 10), Granularity.DAY, Cadence.BI_WEEKLY, NO_PERIODS_OFF,
        ) == Decimal("10")
        assert quantity_in_period(
            Date(2025, 2, 28), Granularity.HOUR, Cadence.BI_WEEKLY, NO_PERIODS_OFF,
        ) == Decimal("80")

    def test_month_granularity_under_bi_weekly_raises(self):
        with pytest.raises(CannotInvoiceForMonthWhenCadenceIsBiWeeklyError):
            quantity_in_period(Date(2025, 5, 31), Granularity.MONTH, Cadence.BI_WEEKLY, NO_PERIODS_OFF)

    def test_cadence_errors_share_a_base(self):
        with pytest.raises(CadenceMismatchError):
            quantity_in_period(Date(2025, 5, 15), Granularity.MONTH, Cadence.BI_WEEKLY, NO_PERIODS_OFF)

    def test_target_in_periods_off_raises(self):
        periods_off = RecordOfPeriodsOff.of([Date(2025, 5, 31)])
        with pytest.raises(TargetPeriodMustNotBeInRecordOfPeriodsOffError, match="2025-05-31"):
            quantity_in_period(Date(2025, 5, 20), Granularity.DAY, Cadence.MONTHLY, periods_off)

    def test_other_periods_off_do_not_matter(self):
        periods_off = RecordOfPeriodsOff.of([Date(2025, 4, 30), Date(2025, 6, 30)])
        assert quantity_in_period(
            Date(2025, 5, 31), Granularity.DAY, Cadence.MONTHLY, periods_off,
        ) == Decimal("22")


class TestBillableQuantity:
    def test_without_time_off(self):
        assert billable_quantity(
            Date(2025, 5, 31), Granularity.DAY, Cadence.MONTHLY, NO_PERIODS_OFF,
        ) == Decimal("22")

    def test_time_off_is_deducted(self):
        time_off = TimeOff(quantity=Decimal("2"), granularity=Granularity.DAY)
        assert billable_quantity(
            Date(2025, 5, 31), Granularity.DAY, Cadence.MONTHLY, NO_PERIODS_OFF, time_off,
        ) == Decimal("20")

    def test_fractional_hours(self):
        time_off = TimeOff(quantity=Decimal("3.5"), granularity=Granularity.HOUR)
        assert billable_quantity(
            Date(2025, 5, 31), Granularity.HOUR, Cadence.MONTHLY, NO_PERIODS_OFF, time_off,
        ) == Decimal("172.5")

    def test_mismatched_time_off_granularity_raises(self):
        time_off = TimeOff(quantity=Decimal("16"), granularity=Granularity.HOUR)
        with pytest.raises(InvalidGranularityForTimeOffError, match="Invalid granularity for time off"):
            billable_quantity(
                Date(2025, 5, 31), Granularity.DAY, Cadence.MONTHLY, NO_PERIODS_OFF, time_off,
            )


class TestYearZero:
    def test_days_match_year_2000(self):
        # 400 years apart, so the weekdays line up
        assert quantity_in_period(
            Date(0, 1, 31), Granularity.DAY, Cadence.MONTHLY, NO_PERIODS_OFF,
        ) == quantity_in_period(
            Date(2000, 1, 31), Granularity.DAY, Cadence.MONTHLY, NO_PERIODS_OFF,
        ) == Decimal("21")

    def test_leap_february(self):
        assert working_days_in_period(Date(0, 2, 29), Cadence.BI_WEEKLY) == 11
