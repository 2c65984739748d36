"""Audit output.

Records how every number on an invoice was derived, as JSON.
"""

from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path

from invoice_calendar.engine.periods import period_bounds
from invoice_calendar.models import PeriodInvoice


class DecimalEncoder(json.JSONEncoder):
    """JSON encoder that handles Decimal values."""
    def default(self, obj):
        if isinstance(obj, Decimal):
            return float(obj)
        return super().default(obj)


def generate_audit_dict(invoice: PeriodInvoice) -> dict:
    """Build audit dictionary from a prepared invoice (no file I/O)."""
    breakdown = invoice.breakdown
    first_day, last_day = period_bounds(invoice.target_period, invoice.cadence)

    audit = {
        "invoice_number": invoice.number,
        "kind": "expenses" if invoice.is_expenses else "service",
        "cadence": invoice.cadence.value,
        "period": {
            "start": str(first_day),
            "end": str(last_day),
        },
        "numbering": {
            "anchor_offset": breakdown.anchor.offset,
            "anchor_period": str(breakdown.anchor_period),
            "elapsed_periods": breakdown.elapsed_periods,
            "periods_off_subtracted": breakdown.periods_off_subtracted,
            "expenses_increment": 1 if breakdown.is_expenses else 0,
        },
        "dates": {
            "invoice_date": str(invoice.invoice_date),
            "due_date": str(invoice.due_date),
        },
    }

    if invoice.quantity is not None:
        audit["quantity"] = {
            "granularity": invoice.granularity.value,
            "working_days": invoice.working_days,
            "time_off": invoice.time_off.quantity if invoice.time_off else Decimal("0"),
            "billable": invoice.quantity,
        }

    return audit


def generate_audit(invoice: PeriodInvoice, output_path: str | Path) -> Path:
    """Generate audit JSON file from a prepared invoice."""
    output_path = Path(output_path)
    audit = generate_audit_dict(invoice)
    output_path.write_text(json.dumps(audit, indent=2, cls=DecimalEncoder), encoding='utf-8')
    return output_path
