"""Period label parsing layer."""
from invoice_calendar.parsers.period_label import parse_period_label_for_cadence

__all__ = ["parse_period_label_for_cadence"]
