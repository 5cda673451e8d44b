"""Normalized billing line items."""

from dataclasses import dataclass
from datetime import date

UNKNOWN_SERVICE = "Unknown Service"
UNKNOWN_REGION = "Unknown Region"


@dataclass(frozen=True)
class BillingRecord:
    """
    One normalized row of an AWS Cost and Usage Report.

    Cost defaults to 0.0 when the source value is unparsable. Records with
    no cost or no usage date are kept; each analytic decides whether to skip
    them.
    """

    usage_date: date | None
    unblended_cost: float
    service: str = UNKNOWN_SERVICE
    region: str = UNKNOWN_REGION
    resource_id: str | None = None  # Absent for aggregate charges (tax, support)
    usage_type: str | None = None
    product_name: str | None = None
    instance_type: str | None = None
    description: str | None = None

    @property
    def has_cost(self) -> bool:
        """Whether the record carries a positive cost."""
        return self.unblended_cost > 0

    @property
    def is_dated(self) -> bool:
        return self.usage_date is not None
