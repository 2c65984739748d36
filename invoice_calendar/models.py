"""Canonical data model for the invoicing period engine."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date as _pydate, timedelta
from decimal import Decimal
from enum import Enum, IntEnum
from typing import Iterable, Iterator, Optional

from invoice_calendar.errors import (
    FailedToParseDateError,
    FailedToParseMonthError,
    FailedToParsePaymentTermsError,
    FailedToParseYearError,
    InvalidDateError,
    InvalidDayError,
    InvalidMonthError,
)

MAX_YEAR = 9999
GREGORIAN_CYCLE_YEARS = 400


class Year(int):
    """Calendar year, e.g. 2025."""

    def __new__(cls, value: int) -> "Year":
        if not 0 <= int(value) <= MAX_YEAR:
            raise InvalidDateError(f"year {value} is outside 0..{MAX_YEAR}")
        return super().__new__(cls, value)

    @classmethod
    def parse(cls, text: str) -> "Year":
        text = text.strip()
        if not text.isdecimal() or int(text) > MAX_YEAR:
            raise FailedToParseYearError(text)
        return cls(int(text))

    def is_leap(self) -> bool:
        return (self % 4 == 0 and self % 100 != 0) or self % 400 == 0


class Month(IntEnum):
    JANUARY = 1
    FEBRUARY = 2
    MARCH = 3
    APRIL = 4
    MAY = 5
    JUNE = 6
    JULY = 7
    AUGUST = 8
    SEPTEMBER = 9
    OCTOBER = 10
    NOVEMBER = 11
    DECEMBER = 12

    @classmethod
    def from_ordinal(cls, value: int) -> "Month":
        try:
            return cls(int(value))
        except ValueError:
            raise InvalidMonthError(value, "must be between 1 and 12") from None

    @classmethod
    def parse(cls, text: str) -> "Month":
        text = text.strip()
        if not text.isdecimal():
            raise FailedToParseMonthError(text)
        try:
            return cls(int(text))
        except ValueError:
            raise FailedToParseMonthError(text) from None

    def last_day(self, year: int) -> "Day":
        if self in (Month.APRIL, Month.JUNE, Month.SEPTEMBER, Month.NOVEMBER):
            return Day(30)
        if self is Month.FEBRUARY:
            return Day(29) if Year(year).is_leap() else Day(28)
        return Day(31)

    def first_half_last_day(self) -> "Day":
        """Last day of the first half of the month: the 14th in February, else the 15th."""
        return Day(14) if self is Month.FEBRUARY else Day(15)


class Day(int):
    """Day of month, 1..31. Bounded by the month when a Date is built."""

    def __new__(cls, value: int) -> "Day":
        if not 1 <= int(value) <= 31:
            raise InvalidDayError(value, "must be between 1 and 31")
        return super().__new__(cls, value)


@dataclass(frozen=True)
class PaymentTerms:
    """Net payment terms, e.g. ``Net 30``."""
    due_in_days: int = 30

    def __post_init__(self) -> None:
        if self.due_in_days < 0:
            raise ValueError(f"Payment terms must not be negative, got {self.due_in_days}")

    @classmethod
    def net30(cls) -> "PaymentTerms":
        return cls(30)

    @classmethod
    def parse(cls, text: str) -> "PaymentTerms":
        match = re.fullmatch(r"\s*net\s*(\d+)\s*", text, flags=re.IGNORECASE)
        if match is None:
            raise FailedToParsePaymentTermsError(text)
        return cls(int(match.group(1)))

    def __str__(self) -> str:
        return f"Net {self.due_in_days}"


_FIRST_HALF_LABELS = {"first", "first-half", "1"}
_SECOND_HALF_LABELS = {"second", "second-half", "2"}


@dataclass(frozen=True, order=True)
class Date:
    """A calendar date whose day is always valid for its year and month."""
    year: Year
    month: Month
    day: Day

    def __post_init__(self) -> None:
        year = Year(self.year)
        month = Month.from_ordinal(self.month)
        day = Day(self.day)
        if day > month.last_day(year):
            raise InvalidDateError(f"invalid Y-M-D: {int(year)}-{int(month)}-{int(day)}")
        object.__setattr__(self, "year", year)
        object.__setattr__(self, "month", month)
        object.__setattr__(self, "day", day)

    def __str__(self) -> str:
        return f"{int(self.year):04d}-{int(self.month):02d}-{int(self.day):02d}"

    @classmethod
    def from_ymd(cls, year: int, month: int, day: int) -> "Date":
        return cls(year, month, day)

    @classmethod
    def from_pydate(cls, value: _pydate) -> "Date":
        return cls(value.year, value.month, value.day)

    @classmethod
    def today(cls) -> "Date":
        return cls.from_pydate(_pydate.today())

    @classmethod
    def parse(cls, text: str) -> "Date":
        """Parse ``YYYY-MM-DD``, ``YYYY-MM`` (month end) or ``YYYY-MM-<half>``.

        Half markers are ``first``/``first-half``/``1`` and
        ``second``/``second-half``/``2``. A numeric third part is read as a
        day of month before it is considered as a half marker.
        """
        parts = text.strip().split("-", 2)
        if len(parts) < 2:
            raise FailedToParseDateError("Invalid Format")

        year = Year.parse(parts[0])
        month = Month.parse(parts[1])

        if len(parts) == 2:
            return cls(year, month, month.last_day(year))

        day_or_half = parts[2]
        if day_or_half.isdecimal() and 1 <= int(day_or_half) <= 31:
            return cls(year, month, int(day_or_half))
        if day_or_half in _FIRST_HALF_LABELS:
            return cls(year, month, month.first_half_last_day())
        if day_or_half in _SECOND_HALF_LABELS:
            return cls(year, month, month.last_day(year))
        raise FailedToParseDateError("Invalid Format")

    def to_pydate(self) -> _pydate:
        if self.year < _pydate.min.year:
            raise InvalidDateError(f"{self} is before {_pydate.min}")
        return _pydate(self.year, self.month, self.day)

    def _cycle_shifted_pydate(self) -> tuple[_pydate, int]:
        # Year 0 has no datetime.date; the same day 400 years later falls on the same weekday.
        shift = GREGORIAN_CYCLE_YEARS if self.year < _pydate.min.year else 0
        return _pydate(self.year + shift, self.month, self.day), shift

    def weekday(self) -> int:
        """Monday is 0, Sunday is 6."""
        return self._cycle_shifted_pydate()[0].weekday()

    def last_day_of_month(self) -> Day:
        return self.month.last_day(self.year)

    def end_of_month(self) -> "Date":
        return Date(self.year, self.month, self.last_day_of_month())

    def replace_day(self, day: int) -> "Date":
        return Date(self.year, self.month, day)

    def advance_days(self, days: int) -> "Date":
        start, shift = self._cycle_shifted_pydate()
        try:
            moved = start + timedelta(days=days)
        except OverflowError:
            raise InvalidDateError(f"cannot advance {self} by {days} days") from None
        return Date(moved.year - shift, moved.month, moved.day)

    def advance(self, terms: PaymentTerms) -> "Date":
        return self.advance_days(terms.due_in_days)


class Granularity(Enum):
    """Unit quantities are billed in. Compares by coarseness: MONTH is the largest."""
    MONTH = "month"
    FORTNIGHT = "fortnight"
    DAY = "day"
    HOUR = "hour"

    @property
    def coarseness(self) -> int:
        return _COARSENESS[self]

    def __lt__(self, other):
        if not isinstance(other, Granularity):
            return NotImplemented
        return self.coarseness < other.coarseness

    def __le__(self, other):
        if not isinstance(other, Granularity):
            return NotImplemented
        return self.coarseness <= other.coarseness

    def __gt__(self, other):
        if not isinstance(other, Granularity):
            return NotImplemented
        return self.coarseness > other.coarseness

    def __ge__(self, other):
        if not isinstance(other, Granularity):
            return NotImplemented
        return self.coarseness >= other.coarseness

    def __str__(self) -> str:
        return self.name.capitalize()


_COARSENESS = {
    Granularity.HOUR: 0,
    Granularity.DAY: 1,
    Granularity.FORTNIGHT: 2,
    Granularity.MONTH: 3,
}


class Cadence(Enum):
    """How often invoices are issued."""
    MONTHLY = "monthly"
    BI_WEEKLY = "bi_weekly"

    def max_granularity(self) -> Granularity:
        return Granularity.FORTNIGHT if self is Cadence.BI_WEEKLY else Granularity.MONTH

    def validate(self, granularity: Granularity) -> bool:
        return not (self is Cadence.BI_WEEKLY and granularity is Granularity.MONTH)

    def __str__(self) -> str:
        return "BiWeekly" if self is Cadence.BI_WEEKLY else "Monthly"


@dataclass(frozen=True)
class RelativeTime:
    """A movement of ``amount`` periods of ``unit`` away from today's period."""
    unit: Granularity
    amount: int

    @classmethod
    def current(cls, unit: Granularity) -> "RelativeTime":
        return cls(unit, 0)

    @classmethod
    def last(cls, unit: Granularity) -> "RelativeTime":
        return cls(unit, -1)


class TargetPeriod(Enum):
    CURRENT = "current"
    LAST = "last"

    def relative_time_for_cadence(self, cadence: Cadence) -> RelativeTime:
        unit = cadence.max_granularity()
        if self is TargetPeriod.CURRENT:
            return RelativeTime.current(unit)
        return RelativeTime.last(unit)


@dataclass(frozen=True)
class RecordOfPeriodsOff:
    """Period-end dates for which no invoice was issued, in insertion order."""
    periods: tuple[Date, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "periods", tuple(dict.fromkeys(self.periods)))

    def __iter__(self) -> Iterator[Date]:
        return iter(self.periods)

    def __len__(self) -> int:
        return len(self.periods)

    def __contains__(self, period: object) -> bool:
        return period in self.periods

    def with_period(self, period: Date) -> "RecordOfPeriodsOff":
        return RecordOfPeriodsOff(self.periods + (period,))

    @classmethod
    def of(cls, periods: Iterable[Date]) -> "RecordOfPeriodsOff":
        return cls(tuple(periods))


@dataclass(frozen=True)
class Anchor:
    """Last known-good (invoice number, period-end date) pair, e.g. ``(237, 2025-05-31)``."""
    offset: int
    period: Date

    def __post_init__(self) -> None:
        if self.offset < 0:
            raise ValueError(f"Anchor offset must not be negative, got {self.offset}")


@dataclass(frozen=True)
class TimeOff:
    """Time off deducted from a period, expressed in the service's own granularity."""
    quantity: Decimal
    granularity: Granularity

    def __post_init__(self) -> None:
        quantity = Decimal(str(self.quantity))
        if quantity < 0:
            raise ValueError(f"Time off must not be negative, got {quantity}")
        object.__setattr__(self, "quantity", quantity)


@dataclass(frozen=True)
class InvoicingConfig:
    """Persisted invoicing settings the engine reads as an immutable snapshot."""
    cadence: Cadence
    granularity: Granularity
    anchor: Anchor
    periods_off: RecordOfPeriodsOff = field(default_factory=RecordOfPeriodsOff)
    payment_terms: PaymentTerms = field(default_factory=PaymentTerms)


@dataclass(frozen=True)
class InvoiceNumberBreakdown:
    """How an invoice number was derived from the anchor."""
    anchor: Anchor
    anchor_period: Date
    target_period: Date
    cadence: Cadence
    elapsed_periods: int
    periods_off_subtracted: int
    is_expenses: bool

    @property
    def number(self) -> int:
        number = self.anchor.offset + self.elapsed_periods - self.periods_off_subtracted
        if self.is_expenses:
            number += 1
        return number


@dataclass(frozen=True)
class PeriodInvoice:
    """Everything the engine decides about one invoice, ready for rendering."""
    target_period: Date
    cadence: Cadence
    granularity: Granularity
    breakdown: InvoiceNumberBreakdown
    invoice_date: Date
    due_date: Date
    quantity: Optional[Decimal] = None
    working_days: Optional[int] = None
    time_off: Optional[TimeOff] = None

    @property
    def number(self) -> int:
        return self.breakdown.number

    @property
    def is_expenses(self) -> bool:
        return self.breakdown.is_expenses
