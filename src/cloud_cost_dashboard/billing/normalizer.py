"""
Normalize raw Cost and Usage Report rows into BillingRecords.

CUR headers arrive with arbitrary punctuation ("lineItem/UnblendedCost",
"product/productFamily"). Keys are reduced to their alphanumeric characters
("lineItemUnblendedCost", "productProductFamily") before any field lookup.
Lookups ignore case.

Every parser here is total: malformed values become 0.0 / None, never an
exception, so one bad row can't abort an analysis.
"""

from __future__ import annotations

import csv
import math
import re
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from pathlib import Path
from typing import Any, Iterable, Mapping, TextIO

from cloud_cost_dashboard.billing.models import UNKNOWN_REGION, UNKNOWN_SERVICE, BillingRecord

_NON_ALPHANUMERIC = re.compile(r"[^a-zA-Z0-9]")
_ISO_DATE_PREFIX = re.compile(r"^(\d{4})-(\d{2})-(\d{2})")

# Sanitized CUR column names
USAGE_START_DATE = "lineItemUsageStartDate"
UNBLENDED_COST = "lineItemUnblendedCost"
PRODUCT_FAMILY = "productProductFamily"
SERVICE_CODE = "productServiceCode"
PRODUCT_NAME = "productProductName"
RESOURCE_ID = "lineItemResourceId"
USAGE_TYPE = "lineItemUsageType"
REGION = "productRegion"
REGION_CODE = "productRegionCode"
INSTANCE_TYPE = "productInstanceType"
DESCRIPTION = "lineItemLineItemDescription"

_SLASHED_DATE_FORMATS = ("%m/%d/%Y", "%m/%d/%Y %H:%M", "%m/%d/%Y %H:%M:%S")


def sanitize_key(key: str) -> str:
    """Strip every non-alphanumeric character from a header, keeping case."""
    return _NON_ALPHANUMERIC.sub("", str(key))


def sanitize_row(row: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of a raw row with sanitized keys."""
    return {sanitize_key(key): value for key, value in row.items() if key is not None}


def parse_cost(value: Any) -> float:
    """
    Parse a cost value, defaulting to 0.0.

    Accepts numbers and numeric strings. None, empty strings, booleans,
    non-numeric text, NaN and infinities all yield 0.0.
    """
    if value is None or isinstance(value, bool):
        return 0.0

    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0.0

    try:
        cost = float(value)
    except (TypeError, ValueError):
        return 0.0

    if not math.isfinite(cost):
        return 0.0
    return cost


def parse_usage_date(value: Any) -> date | None:
    """
    Parse a usage date down to calendar-day precision.

    Timezone-aware timestamps are converted to UTC before truncation, so
    "2024-03-01T23:00:00-05:00" lands on 2024-03-02.

    Returns:
        The calendar date, or None when the value can't be parsed.
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        return _to_utc_date(value)
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    try:
        return _to_utc_date(datetime.fromisoformat(text))
    except ValueError:
        pass

    for fmt in _SLASHED_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue

    # Fall back to a leading YYYY-MM-DD, e.g. "2024-01-15T00:00:00.000 UTC"
    if match := _ISO_DATE_PREFIX.match(text):
        try:
            return date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
        except ValueError:
            return None

    return None


def _to_utc_date(moment: datetime) -> date:
    if moment.tzinfo is not None:
        moment = moment.astimezone(UTC)
    return moment.date()


def _text(row: Mapping[str, Any], *keys: str) -> str | None:
    """Return the first non-empty value among keys, as a stripped string."""
    for key in keys:
        value = row.get(key.lower())
        if value is None:
            continue
        text = str(value).strip()
        if text:
            return text
    return None


def normalize_row(row: Mapping[str, Any]) -> BillingRecord:
    """
    Convert one raw CSV row into a BillingRecord.

    Service falls back product family -> service code -> "Unknown Service";
    region falls back region -> region code -> "Unknown Region".
    """
    # CUR exports mix "product/region" and "product/Region" style headers
    clean = {key.lower(): value for key, value in sanitize_row(row).items()}

    return BillingRecord(
        usage_date=parse_usage_date(clean.get(USAGE_START_DATE.lower())),
        unblended_cost=parse_cost(clean.get(UNBLENDED_COST.lower())),
        service=_text(clean, PRODUCT_FAMILY, SERVICE_CODE) or UNKNOWN_SERVICE,
        region=_text(clean, REGION, REGION_CODE) or UNKNOWN_REGION,
        resource_id=_text(clean, RESOURCE_ID),
        usage_type=_text(clean, USAGE_TYPE),
        product_name=_text(clean, PRODUCT_NAME),
        instance_type=_text(clean, INSTANCE_TYPE, "instanceType"),
        description=_text(clean, DESCRIPTION),
    )


def normalize_rows(rows: Iterable[Mapping[str, Any]]) -> list[BillingRecord]:
    """Normalize rows, preserving input order."""
    return [normalize_row(row) for row in rows]


@dataclass
class BillingCsv:
    """Records read from a billing CSV."""

    records: list[BillingRecord] = field(default_factory=list)
    total_rows: int = 0

    @property
    def truncated(self) -> bool:
        """True when rows were left out because of a row limit."""
        return self.total_rows > len(self.records)


def read_billing_csv(source: str | Path | TextIO, max_rows: int | None = None) -> BillingCsv:
    """
    Read and normalize a billing CSV.

    Args:
        source: File path or an open text stream.
        max_rows: Normalize at most this many rows. Remaining rows are
                 counted but not parsed.

    Returns:
        BillingCsv with the normalized records and the total row count.
    """
    if max_rows is not None and max_rows < 1:
        raise ValueError(f"max_rows must be at least 1, got {max_rows}")

    if isinstance(source, (str, Path)):
        with open(source, newline="", encoding="utf-8-sig") as f:
            return _read_rows(csv.DictReader(f), max_rows)

    return _read_rows(csv.DictReader(source), max_rows)


def _read_rows(reader: csv.DictReader, max_rows: int | None) -> BillingCsv:
    result = BillingCsv()
    for row in reader:
        # Skip blank lines
        if not any(value not in (None, "") for value in row.values()):
            continue

        result.total_rows += 1
        if max_rows is None or len(result.records) < max_rows:
            result.records.append(normalize_row(row))

    return result
