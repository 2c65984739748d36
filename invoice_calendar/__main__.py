"""CLI entry point.

Usage:
    python -m invoice_calendar period --period last
    python -m invoice_calendar number --date 2026-02 --expenses
    python -m invoice_calendar quantity --date 2026-02-10 --time-off 2
    python -m invoice_calendar invoice --period current --audit-out Audit.json
    python -m invoice_calendar record-off --date 2026-03
    python -m invoice_calendar reanchor --offset 240 --date 2026-04-30

The configuration file is read from --config, else from the path in
$INVOICE_CALENDAR_CONFIG, else ./invoice_calendar.json.
"""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Optional

import typer

from invoice_calendar.config import load_config, save_config
from invoice_calendar.errors import CalendarError, StrictValidationError
from invoice_calendar.models import (
    Date,
    Granularity,
    InvoicingConfig,
    TargetPeriod,
    TimeOff,
)

app = typer.Typer(help="Billing periods, invoice numbers and billable quantities.")

CONFIG_OPTION = typer.Option(None, "--config", "-c", help="Path to the invoicing config JSON")
DATE_OPTION = typer.Option(
    None, "--date", help="Target date or period label, e.g. 2025-05-31, 2025-05, 2025-05-first-half",
)
PERIOD_OPTION = typer.Option(
    TargetPeriod.LAST, "--period", help="Relative target period, used when --date is not given",
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def _fail(error: Exception) -> None:
    if isinstance(error, StrictValidationError):
        typer.echo("STRICT VALIDATION FAILED:", err=True)
        for e in error.errors:
            typer.echo(f"  ERROR: {e}", err=True)
    else:
        typer.echo(f"ERROR: {error}", err=True)
    raise typer.Exit(1)


def _load(config_path: Optional[Path]) -> InvoicingConfig:
    try:
        return load_config(config_path)
    except FileNotFoundError as e:
        typer.echo(f"ERROR: Config file not found: {e.filename}", err=True)
        raise typer.Exit(1)
    except CalendarError as e:
        _fail(e)
        raise


def _resolve_target(config: InvoicingConfig, date: Optional[str], period: TargetPeriod) -> Date:
    from invoice_calendar.engine import period_end_from_relative_time
    from invoice_calendar.parsers import parse_period_label_for_cadence

    if date is not None:
        return parse_period_label_for_cadence(date, config.cadence)
    return period_end_from_relative_time(period.relative_time_for_cadence(config.cadence))


def _time_off(
    config: InvoicingConfig,
    time_off: Optional[str],
    time_off_unit: Optional[Granularity],
) -> Optional[TimeOff]:
    if time_off is None:
        return None
    try:
        quantity = Decimal(time_off)
    except InvalidOperation:
        typer.echo(f"ERROR: Invalid time off quantity: {time_off}", err=True)
        raise typer.Exit(1)
    try:
        return TimeOff(quantity=quantity, granularity=time_off_unit or config.granularity)
    except ValueError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(1)


@app.command()
def period(
    date: Optional[str] = DATE_OPTION,
    relative: TargetPeriod = PERIOD_OPTION,
    config_path: Optional[Path] = CONFIG_OPTION,
) -> None:
    """Print the canonical period-end date of the target period."""
    config = _load(config_path)
    try:
        typer.echo(str(_resolve_target(config, date, relative)))
    except CalendarError as e:
        _fail(e)


@app.command()
def number(
    date: Optional[str] = DATE_OPTION,
    relative: TargetPeriod = PERIOD_OPTION,
    expenses: bool = typer.Option(False, "--expenses", help="Number an expense invoice"),
    config_path: Optional[Path] = CONFIG_OPTION,
) -> None:
    """Print the invoice number of the target period."""
    from invoice_calendar.engine import calculate_invoice_number, validate_config

    config = _load(config_path)
    try:
        validate_config(config)
        target = _resolve_target(config, date, relative)
        typer.echo(str(calculate_invoice_number(
            config.anchor, target, config.cadence, expenses, config.periods_off,
        )))
    except CalendarError as e:
        _fail(e)


@app.command()
def quantity(
    date: Optional[str] = DATE_OPTION,
    relative: TargetPeriod = PERIOD_OPTION,
    time_off: Optional[str] = typer.Option(None, "--time-off", help="Time off to deduct"),
    time_off_unit: Optional[Granularity] = typer.Option(
        None, "--time-off-unit", help="Unit of --time-off (defaults to the service granularity)",
    ),
    config_path: Optional[Path] = CONFIG_OPTION,
) -> None:
    """Print the billable quantity of the target period."""
    from invoice_calendar.engine import billable_quantity, validate_config

    config = _load(config_path)
    try:
        validate_config(config)
        target = _resolve_target(config, date, relative)
        typer.echo(str(billable_quantity(
            target,
            config.granularity,
            config.cadence,
            config.periods_off,
            _time_off(config, time_off, time_off_unit),
        )))
    except CalendarError as e:
        _fail(e)


@app.command()
def invoice(
    date: Optional[str] = DATE_OPTION,
    relative: TargetPeriod = PERIOD_OPTION,
    expenses: bool = typer.Option(False, "--expenses", help="Prepare an expense invoice"),
    time_off: Optional[str] = typer.Option(None, "--time-off", help="Time off to deduct"),
    time_off_unit: Optional[Granularity] = typer.Option(
        None, "--time-off-unit", help="Unit of --time-off (defaults to the service granularity)",
    ),
    audit_out: Optional[Path] = typer.Option(None, "--audit-out", help="Write an audit JSON file"),
    config_path: Optional[Path] = CONFIG_OPTION,
) -> None:
    """Print period, number, quantity and dates of the target invoice."""
    from invoice_calendar.audit import generate_audit
    from invoice_calendar.engine import prepare_invoice

    config = _load(config_path)
    try:
        target = _resolve_target(config, date, relative)
        result = prepare_invoice(
            config, target, is_expenses=expenses,
            time_off=_time_off(config, time_off, time_off_unit),
        )
    except CalendarError as e:
        _fail(e)
        return

    typer.echo(f"Period:         {result.target_period}")
    typer.echo(f"Invoice number: {result.number}")
    typer.echo(f"Invoice date:   {result.invoice_date}")
    typer.echo(f"Due date:       {result.due_date}")
    if result.quantity is not None:
        typer.echo(f"Quantity:       {result.quantity} ({result.granularity})")

    if audit_out is not None:
        generate_audit(result, audit_out)
        typer.echo(f"Audit file saved to: {audit_out}")


@app.command("record-off")
def record_off(
    date: str = typer.Option(..., "--date", help="A date or label within the period off"),
    config_path: Optional[Path] = CONFIG_OPTION,
) -> None:
    """Record a period in which no invoice was issued."""
    from invoice_calendar.engine import record_period_off
    from invoice_calendar.parsers import parse_period_label_for_cadence

    config = _load(config_path)
    try:
        period_end = parse_period_label_for_cadence(date, config.cadence)
        updated = record_period_off(config, period_end)
    except CalendarError as e:
        _fail(e)
        return

    path = save_config(updated, config_path)
    typer.echo(f"Recorded {period_end} as a period off in {path}")


@app.command("reanchor")
def reanchor_command(
    offset: int = typer.Option(..., "--offset", min=0, help="Invoice number issued for the period"),
    date: str = typer.Option(..., "--date", help="A date or label within that period"),
    config_path: Optional[Path] = CONFIG_OPTION,
) -> None:
    """Replace the anchor used to derive invoice numbers."""
    from invoice_calendar.engine import reanchor
    from invoice_calendar.parsers import parse_period_label_for_cadence

    config = _load(config_path)
    try:
        period_end = parse_period_label_for_cadence(date, config.cadence)
        updated = reanchor(config, offset, period_end)
    except CalendarError as e:
        _fail(e)
        return

    path = save_config(updated, config_path)
    typer.echo(f"Anchored invoice number {offset} at {period_end} in {path}")


if __name__ == "__main__":
    app()
