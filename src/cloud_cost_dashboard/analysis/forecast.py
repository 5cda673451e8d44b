"""
Flat moving-average forecast of monthly costs.

Every future month is projected at the average of the most recent
``lookback`` historical months. There is no trend or seasonality term.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Sequence

from cloud_cost_dashboard.analysis.aggregator import CostPoint


@dataclass(frozen=True)
class ForecastPoint:
    """A historical or projected monthly total."""

    period: str  # YYYY-MM
    cost: float
    is_forecast: bool = False

    def to_dict(self) -> dict:
        return {"date": self.period, "cost": self.cost, "isForecast": self.is_forecast}


def trailing_average(monthly: Sequence[CostPoint], lookback: int = 3) -> float | None:
    """
    Average cost of the last min(lookback, len(monthly)) months.

    Returns:
        The average, or None when there is no history.
    """
    if lookback < 1:
        raise ValueError(f"lookback must be at least 1, got {lookback}")

    recent = [point.cost for point in monthly[-lookback:]]
    if not recent:
        return None
    return sum(recent) / len(recent)


def _add_months(start: date, months: int) -> date:
    index = start.year * 12 + (start.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def generate_forecast(
    monthly: Sequence[CostPoint],
    horizon: int,
    lookback: int = 3,
) -> list[ForecastPoint]:
    """
    Extend a monthly series with flat-average forecast points.

    Args:
        monthly: Monthly totals in chronological order (see monthly_costs).
        horizon: Number of future months to project.
        lookback: Number of trailing months to average.

    Returns:
        The historical points followed by ``horizon`` forecast points, each
        costing exactly the trailing average. Empty when there is no history.
    """
    if horizon < 0:
        raise ValueError(f"horizon must be non-negative, got {horizon}")

    average = trailing_average(monthly, lookback)
    if average is None:
        return []

    points = [ForecastPoint(period=point.period, cost=point.cost) for point in monthly]

    last_month = monthly[-1].period_start.replace(day=1)
    for offset in range(1, horizon + 1):
        month = _add_months(last_month, offset)
        points.append(
            ForecastPoint(period=month.strftime("%Y-%m"), cost=average, is_forecast=True)
        )

    return points
