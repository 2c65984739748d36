"""Pydantic request/response models for the period API."""

from __future__ import annotations

from pydantic import BaseModel, Field


class AnchorIn(BaseModel):
    offset: int = Field(..., ge=0)
    period: str


class ConfigIn(BaseModel):
    cadence: str = "monthly"
    granularity: str = "day"
    anchor: AnchorIn
    periods_off: list[str] = []
    payment_terms: str = "Net 30"


class PeriodRequest(BaseModel):
    cadence: str = "monthly"
    date: str | None = None
    relative: str = "last"


class PeriodResponse(BaseModel):
    success: bool
    period_end: str | None = None
    error_type: str | None = None
    errors: list[str] | None = None


class TimeOffIn(BaseModel):
    quantity: float = Field(..., ge=0)
    granularity: str | None = None


class InvoiceRequest(BaseModel):
    config: ConfigIn
    date: str | None = None
    relative: str = "last"
    is_expenses: bool = False
    time_off: TimeOffIn | None = None


class NumberingSummary(BaseModel):
    anchor_offset: int
    anchor_period: str
    elapsed_periods: int
    periods_off_subtracted: int


class InvoiceSummary(BaseModel):
    period_end: str
    invoice_number: int
    invoice_date: str
    due_date: str
    kind: str
    quantity: float | None = None
    granularity: str
    numbering: NumberingSummary


class InvoiceResponse(BaseModel):
    success: bool
    invoice: InvoiceSummary | None = None
    audit: dict | None = None
    error_type: str | None = None
    errors: list[str] | None = None
