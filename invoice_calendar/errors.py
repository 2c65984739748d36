"""Typed error taxonomy for the period engine.

Every failure the engine reports for user-controlled input is one of these
classes. None of them is retryable: each one means the stored configuration
or the supplied input has to be fixed by the user.
"""

from __future__ import annotations


class CalendarError(Exception):
    """Base class for all period engine errors."""


# --- Cadence / granularity mismatches ---

class CadenceMismatchError(CalendarError):
    """A billing unit or period label does not fit the invoicing cadence."""


class CannotInvoiceForMonthWhenCadenceIsBiWeeklyError(CadenceMismatchError):
    def __init__(self) -> None:
        super().__init__("Cannot invoice for month when cadence is bi-weekly")


class CannotInvoiceForFortnightWhenCadenceIsMonthlyError(CadenceMismatchError):
    def __init__(self) -> None:
        super().__init__("Cannot invoice for fortnight when cadence is monthly")


class CannotExpenseForMonthWhenCadenceIsBiWeeklyError(CadenceMismatchError):
    def __init__(self) -> None:
        super().__init__("Cannot expense for month when cadence is bi-weekly")


class CannotExpenseForFortnightWhenCadenceIsMonthlyError(CadenceMismatchError):
    def __init__(self) -> None:
        super().__init__("Cannot expense for fortnight when cadence is monthly")


class GranularityTooCoarseError(CadenceMismatchError):
    def __init__(self, granularity, max_granularity, target_period) -> None:
        self.granularity = granularity
        self.max_granularity = max_granularity
        self.target_period = str(target_period)
        super().__init__(
            f"Granularity too coarse '{granularity}', max is: '{max_granularity}', "
            f"for period: '{target_period}'"
        )


class InvalidGranularityForTimeOffError(CadenceMismatchError):
    def __init__(self, free_granularity, service_fees_granularity) -> None:
        self.free_granularity = free_granularity
        self.service_fees_granularity = service_fees_granularity
        super().__init__(
            f"Invalid granularity for time off: '{free_granularity}', "
            f"expected: '{service_fees_granularity}', use the same time unit for "
            f"time off as the service fees are billed in."
        )


# --- Persisted configuration invariant violations ---

class ConfigurationError(CalendarError):
    """The stored anchor / periods-off record is inconsistent."""


class RecordsOffMustNotContainOffsetPeriodError(ConfigurationError):
    def __init__(self, offset_period) -> None:
        self.offset_period = str(offset_period)
        super().__init__(f"Records off must not contain offset period: {offset_period}")


class OffsetPeriodMustNotBeInRecordOfPeriodsOffError(ConfigurationError):
    def __init__(self, offset_period) -> None:
        self.offset_period = str(offset_period)
        super().__init__(
            f"Offset period must not be in the record of periods off: {offset_period}"
        )


class TargetPeriodMustNotBeInRecordOfPeriodsOffError(ConfigurationError):
    def __init__(self, target_period) -> None:
        self.target_period = str(target_period)
        super().__init__(
            f"Target period {target_period} is in the record of periods off, "
            f"but it must not be."
        )


# --- Ordering ---

class StartPeriodAfterEndPeriodError(CalendarError):
    def __init__(self, start, end) -> None:
        self.start = str(start)
        self.end = str(end)
        super().__init__(f"Start period ('{start}') is after end period ('{end}')")


# --- Parsing / validation ---

class InputError(CalendarError):
    """A value supplied by the user could not be parsed or is out of range."""


class InvalidPeriodError(InputError):
    def __init__(self, bad_value) -> None:
        self.bad_value = str(bad_value)
        super().__init__(f"Invalid Period, bad value: {bad_value}")


class InvalidDateError(InputError):
    def __init__(self, underlying: str) -> None:
        self.underlying = underlying
        super().__init__(f"Invalid date, underlying: {underlying}")


class FailedToParseDateError(InputError):
    def __init__(self, underlying: str) -> None:
        self.underlying = underlying
        super().__init__(f"Failed to parse date, because: {underlying}")


class FailedToParseYearError(InputError):
    def __init__(self, invalid_string: str) -> None:
        self.invalid_string = invalid_string
        super().__init__(f"Failed to parse year: {invalid_string}")


class FailedToParseMonthError(InputError):
    def __init__(self, invalid_string: str) -> None:
        self.invalid_string = invalid_string
        super().__init__(f"Failed to parse Month: {invalid_string}")


class InvalidDayError(InputError):
    def __init__(self, day, reason: str) -> None:
        self.day = day
        self.reason = reason
        super().__init__(f"Invalid day: {day}, reason: {reason}")


class InvalidMonthError(InputError):
    def __init__(self, month, reason: str) -> None:
        self.month = month
        self.reason = reason
        super().__init__(f"Invalid month: {month}, reason: {reason}")


class FailedToParsePaymentTermsError(InputError):
    def __init__(self, invalid_string: str) -> None:
        self.invalid_string = invalid_string
        super().__init__(f"Failed to parse payment terms from string: {invalid_string}")


class StrictValidationError(CalendarError):
    """Raised when validating a configuration snapshot finds violations."""
    def __init__(self, errors: list[CalendarError]):
        self.errors = errors
        super().__init__(f"Strict validation failed with {len(errors)} error(s):\n" +
                         "\n".join(f"  - {e}" for e in errors))
