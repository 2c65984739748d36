"""Period label parsing.

Users and older data files name periods in several ways:

- ``2025-05-31``          a full ISO date
- ``2025-05``             a whole month
- ``2025-05-first-half``  a half month (also ``first``/``1``, ``second``/``second-half``/``2``)

Each form is tried in that order; anything else falls back to plain date
parsing. The result is always the canonical period-end date for the cadence.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Optional

from invoice_calendar.engine.periods import normalize_period_end_date_for_cadence
from invoice_calendar.errors import (
    CannotExpenseForFortnightWhenCadenceIsMonthlyError,
    CannotExpenseForMonthWhenCadenceIsBiWeeklyError,
)
from invoice_calendar.models import Cadence, Date, Month, Year

ISO_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
MONTH_LABEL_RE = re.compile(r"^(\d{4})-(\d{1,2})$")
HALF_LABEL_RE = re.compile(
    r"^(\d{4})-(\d{1,2})-(first-half|second-half|first|second|1|2)$", re.IGNORECASE
)


class LabelKind(Enum):
    DATE = "date"
    MONTH = "month"
    HALF_MONTH = "half_month"


def _match_label(text: str) -> Optional[tuple[LabelKind, Date]]:
    match = ISO_DATE_RE.match(text)
    if match:
        year, month, day = match.groups()
        return LabelKind.DATE, Date(Year.parse(year), Month.parse(month), int(day))

    match = MONTH_LABEL_RE.match(text)
    if match:
        year, month = Year.parse(match.group(1)), Month.parse(match.group(2))
        return LabelKind.MONTH, Date(year, month, month.last_day(year))

    match = HALF_LABEL_RE.match(text)
    if match:
        year, month = Year.parse(match.group(1)), Month.parse(match.group(2))
        half = match.group(3).lower()
        if half in ("first", "first-half", "1"):
            return LabelKind.HALF_MONTH, Date(year, month, month.first_half_last_day())
        return LabelKind.HALF_MONTH, Date(year, month, month.last_day(year))

    return None


def parse_period_label_for_cadence(text: str, cadence: Cadence) -> Date:
    """Parse a period label and return its period-end date under ``cadence``.

    A whole-month label is rejected under a bi-weekly cadence and a half-month
    label under a monthly one.
    """
    text = text.strip()
    matched = _match_label(text)
    if matched is None:
        date = Date.parse(text)
    else:
        kind, date = matched
        if kind is LabelKind.MONTH and cadence is Cadence.BI_WEEKLY:
            raise CannotExpenseForMonthWhenCadenceIsBiWeeklyError()
        if kind is LabelKind.HALF_MONTH and cadence is Cadence.MONTHLY:
            raise CannotExpenseForFortnightWhenCadenceIsMonthlyError()
    return normalize_period_end_date_for_cadence(date, cadence)
