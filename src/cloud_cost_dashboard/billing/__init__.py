"""Billing row normalization."""

from cloud_cost_dashboard.billing.models import UNKNOWN_REGION, UNKNOWN_SERVICE, BillingRecord
from cloud_cost_dashboard.billing.normalizer import (
    BillingCsv,
    normalize_row,
    normalize_rows,
    parse_cost,
    parse_usage_date,
    read_billing_csv,
    sanitize_key,
)

__all__ = [
    "BillingRecord",
    "BillingCsv",
    "UNKNOWN_REGION",
    "UNKNOWN_SERVICE",
    "normalize_row",
    "normalize_rows",
    "parse_cost",
    "parse_usage_date",
    "read_billing_csv",
    "sanitize_key",
]
