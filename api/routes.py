"""API routes for the invoicing period engine."""

from __future__ import annotations

from decimal import Decimal

from fastapi import APIRouter

from invoice_calendar.audit import generate_audit_dict
from invoice_calendar.config import config_from_dict
from invoice_calendar.engine import period_end_from_relative_time, prepare_invoice
from invoice_calendar.errors import (
    CadenceMismatchError,
    CalendarError,
    ConfigurationError,
    InputError,
    StartPeriodAfterEndPeriodError,
    StrictValidationError,
)
from invoice_calendar.models import Cadence, Date, Granularity, TargetPeriod, TimeOff
from invoice_calendar.parsers import parse_period_label_for_cadence

from api.schemas import (
    InvoiceRequest,
    InvoiceResponse,
    InvoiceSummary,
    NumberingSummary,
    PeriodRequest,
    PeriodResponse,
)

router = APIRouter(prefix="/api/v1")


def _error_type(error: CalendarError) -> str:
    if isinstance(error, (ConfigurationError, StrictValidationError)):
        return "config_error"
    if isinstance(error, CadenceMismatchError):
        return "cadence_error"
    if isinstance(error, StartPeriodAfterEndPeriodError):
        return "ordering_error"
    if isinstance(error, InputError):
        return "input_error"
    return "calendar_error"


def _error_messages(error: CalendarError) -> list[str]:
    if isinstance(error, StrictValidationError):
        return [str(e) for e in error.errors]
    return [str(error)]


def _resolve_target(cadence: Cadence, date: str | None, relative: str) -> Date:
    if date is not None:
        return parse_period_label_for_cadence(date, cadence)
    return period_end_from_relative_time(
        TargetPeriod(relative).relative_time_for_cadence(cadence)
    )


@router.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


@router.post("/period", response_model=PeriodResponse)
async def period(request: PeriodRequest):
    """Resolve a date, period label or relative period to its period-end date."""
    try:
        cadence = Cadence(request.cadence)
        target = _resolve_target(cadence, request.date, request.relative)
    except ValueError as e:
        return PeriodResponse(success=False, error_type="input_error", errors=[str(e)])
    except CalendarError as e:
        return PeriodResponse(success=False, error_type=_error_type(e), errors=_error_messages(e))

    return PeriodResponse(success=True, period_end=str(target))


@router.post("/invoice", response_model=InvoiceResponse)
async def invoice(request: InvoiceRequest):
    """Compute period, invoice number, quantity and dates for one invoice.

    The request carries the caller's stored configuration snapshot; nothing
    is persisted here.
    """
    try:
        config = config_from_dict(request.config.model_dump())
        target = _resolve_target(config.cadence, request.date, request.relative)

        time_off = None
        if request.time_off is not None:
            time_off = TimeOff(
                quantity=Decimal(str(request.time_off.quantity)),
                granularity=(
                    Granularity(request.time_off.granularity)
                    if request.time_off.granularity
                    else config.granularity
                ),
            )

        result = prepare_invoice(
            config, target, is_expenses=request.is_expenses, time_off=time_off,
        )
    except CalendarError as e:
        return InvoiceResponse(success=False, error_type=_error_type(e), errors=_error_messages(e))
    except ValueError as e:
        return InvoiceResponse(success=False, error_type="input_error", errors=[str(e)])

    breakdown = result.breakdown
    summary = InvoiceSummary(
        period_end=str(result.target_period),
        invoice_number=result.number,
        invoice_date=str(result.invoice_date),
        due_date=str(result.due_date),
        kind="expenses" if result.is_expenses else "service",
        quantity=float(result.quantity) if result.quantity is not None else None,
        granularity=result.granularity.value,
        numbering=NumberingSummary(
            anchor_offset=breakdown.anchor.offset,
            anchor_period=str(breakdown.anchor_period),
            elapsed_periods=breakdown.elapsed_periods,
            periods_off_subtracted=breakdown.periods_off_subtracted,
        ),
    )

    audit = generate_audit_dict(result)
    return InvoiceResponse(success=True, invoice=summary, audit=_jsonable(audit))


def _jsonable(value):
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, Decimal):
        return float(value)
    return value
