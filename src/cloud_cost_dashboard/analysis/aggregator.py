"""Cost aggregation by period, service and region."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Literal

from cloud_cost_dashboard.billing.models import BillingRecord

Granularity = Literal["daily", "monthly"]


@dataclass(frozen=True)
class CostPoint:
    """Total cost for one period (a day or a calendar month)."""

    period: str  # YYYY-MM-DD or YYYY-MM
    period_start: date
    cost: float

    def to_dict(self) -> dict:
        return {"date": self.period, "cost": self.cost}


def _period_start(day: date, granularity: Granularity) -> date:
    if granularity == "monthly":
        return day.replace(day=1)
    return day


def _period_label(start: date, granularity: Granularity) -> str:
    if granularity == "monthly":
        return start.strftime("%Y-%m")
    return start.isoformat()


def aggregate_costs(
    records: Iterable[BillingRecord],
    granularity: Granularity = "daily",
) -> list[CostPoint]:
    """
    Sum positive costs per day or per calendar month.

    Records without a usage date or with cost <= 0 are skipped. Periods with
    no qualifying records are absent from the output, not zero-filled.

    Args:
        records: Normalized billing records.
        granularity: "daily" (YYYY-MM-DD) or "monthly" (YYYY-MM).

    Returns:
        CostPoints in chronological order, one per period.
    """
    if granularity not in ("daily", "monthly"):
        raise ValueError(f"Unknown granularity: {granularity!r}")

    totals: dict[date, float] = {}
    for record in records:
        if record.usage_date is None or not record.has_cost:
            continue
        start = _period_start(record.usage_date, granularity)
        totals[start] = totals.get(start, 0.0) + record.unblended_cost

    # Sort on the date itself rather than the label
    return [
        CostPoint(period=_period_label(start, granularity), period_start=start, cost=cost)
        for start, cost in sorted(totals.items())
    ]


def daily_costs(records: Iterable[BillingRecord]) -> list[CostPoint]:
    """Daily cost series, ascending by date."""
    return aggregate_costs(records, "daily")


def monthly_costs(records: Iterable[BillingRecord]) -> list[CostPoint]:
    """Monthly cost series, ascending by month."""
    return aggregate_costs(records, "monthly")


def _sorted_breakdown(totals: dict[str, float]) -> dict[str, float]:
    # sorted() is stable, so equal costs keep discovery order
    return dict(sorted(totals.items(), key=lambda item: item[1], reverse=True))


def cost_by_service(records: Iterable[BillingRecord]) -> dict[str, float]:
    """
    Total positive cost per service, highest first.

    Ties keep the order in which services were first seen.
    """
    totals: dict[str, float] = {}
    for record in records:
        if record.has_cost:
            totals[record.service] = totals.get(record.service, 0.0) + record.unblended_cost
    return _sorted_breakdown(totals)


def cost_by_region(records: Iterable[BillingRecord]) -> dict[str, float]:
    """Total positive cost per region, highest first."""
    totals: dict[str, float] = {}
    for record in records:
        if record.has_cost:
            totals[record.region] = totals.get(record.region, 0.0) + record.unblended_cost
    return _sorted_breakdown(totals)


def top_n(breakdown: dict[str, float], n: int) -> list[tuple[str, float]]:
    """First n entries of a sorted breakdown."""
    if n < 1:
        raise ValueError(f"n must be at least 1, got {n}")
    return list(breakdown.items())[:n]


def total_cost(records: Iterable[BillingRecord]) -> float:
    """Sum of all positive costs."""
    return sum(record.unblended_cost for record in records if record.has_cost)
