"""Persisted invoicing configuration (JSON).

Example file::

    {
      "cadence": "monthly",
      "granularity": "day",
      "anchor": {"offset": 100, "period": "2025-12-31"},
      "periods_off": ["2026-01-31"],
      "payment_terms": "Net 30"
    }
"""

from __future__ import annotations

import json
import os
from pathlib import Path

from invoice_calendar.errors import InputError, InvalidPeriodError
from invoice_calendar.models import (
    Anchor,
    Cadence,
    Date,
    Granularity,
    InvoicingConfig,
    PaymentTerms,
    RecordOfPeriodsOff,
)

CONFIG_ENV_VAR = "INVOICE_CALENDAR_CONFIG"
DEFAULT_CONFIG_FILE = "invoice_calendar.json"


class InvalidConfigError(InputError):
    """The configuration file is missing a key or holds a value of the wrong kind."""


def default_config_path() -> Path:
    return Path(os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_FILE))


def _text(value, key: str) -> str:
    if not isinstance(value, str):
        raise InvalidConfigError(
            f"Invalid configuration value: {key} must be a string, got {value!r}"
        )
    return value


def config_from_dict(data: dict) -> InvoicingConfig:
    try:
        cadence = Cadence(data.get("cadence", Cadence.MONTHLY.value))
        granularity = Granularity(data.get("granularity", Granularity.DAY.value))
        anchor_data = data["anchor"]
        anchor = Anchor(
            offset=int(anchor_data["offset"]),
            period=Date.parse(_text(anchor_data["period"], "anchor.period")),
        )

        periods_off_data = data.get("periods_off", [])
        if not isinstance(periods_off_data, list):
            raise InvalidPeriodError(periods_off_data)
        periods_off = RecordOfPeriodsOff.of(
            Date.parse(_text(p, "periods_off entry")) for p in periods_off_data
        )
        payment_terms = PaymentTerms.parse(
            _text(data.get("payment_terms", "Net 30"), "payment_terms")
        )
    except KeyError as e:
        raise InvalidConfigError(f"Missing configuration key: {e}") from e
    except (TypeError, ValueError) as e:
        raise InvalidConfigError(f"Invalid configuration value: {e}") from e

    return InvoicingConfig(
        cadence=cadence,
        granularity=granularity,
        anchor=anchor,
        periods_off=periods_off,
        payment_terms=payment_terms,
    )


def config_to_dict(config: InvoicingConfig) -> dict:
    return {
        "cadence": config.cadence.value,
        "granularity": config.granularity.value,
        "anchor": {
            "offset": config.anchor.offset,
            "period": str(config.anchor.period),
        },
        "periods_off": [str(p) for p in config.periods_off],
        "payment_terms": str(config.payment_terms),
    }


def load_config(path: str | Path | None = None) -> InvoicingConfig:
    """Load the configuration from ``path`` or the default location."""
    config_path = Path(path) if path is not None else default_config_path()
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise InvalidConfigError(f"{config_path} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise InvalidConfigError(f"{config_path} must hold a JSON object")
    return config_from_dict(data)


def save_config(config: InvoicingConfig, path: str | Path | None = None) -> Path:
    config_path = Path(path) if path is not None else default_config_path()
    config_path.write_text(json.dumps(config_to_dict(config), indent=2) + "\n", encoding="utf-8")
    return config_path
