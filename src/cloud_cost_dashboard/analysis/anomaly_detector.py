"""Anomaly detection over daily cost totals."""

from __future__ import annotations

import statistics
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Iterable, Literal

from cloud_cost_dashboard.analysis.aggregator import CostPoint, cost_by_service, daily_costs
from cloud_cost_dashboard.billing.models import BillingRecord
from cloud_cost_dashboard.config.schema import AnomalyDetectionConfig

COST_SPIKE = "Cost Spike"
COST_DROP = "Cost Drop"


@dataclass(frozen=True)
class AnomalyRecord:
    """A day whose total cost deviates from its trailing window."""

    date: date
    cost: float
    mean: float  # Trailing-window average
    deviation: float  # cost - mean
    percent_change: float | None  # None when the mean is zero
    kind: Literal["Cost Spike", "Cost Drop"]
    method: Literal["std_dev", "percent_change"]
    std_dev: float | None = None  # Population stddev of the window
    std_deviations: float | None = None  # |deviation| / std_dev
    top_services: list[tuple[str, float]] = field(default_factory=list)

    @property
    def absolute_deviation(self) -> float:
        return abs(self.deviation)

    @property
    def description(self) -> str:
        """Human-readable description of the anomaly."""
        direction = "above" if self.deviation > 0 else "below"
        text = (
            f"{self.kind} on {self.date.isoformat()}: ${self.cost:.2f} is "
            f"${self.absolute_deviation:.2f} {direction} the trailing average ${self.mean:.2f}"
        )
        if self.percent_change is not None:
            text += f" ({self.percent_change:+.1f}%)"
        return text

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "cost": self.cost,
            "average": self.mean,
            "deviation": self.deviation,
            "percentChange": self.percent_change,
            "stdDev": self.std_dev,
            "stdDeviations": self.std_deviations,
            "type": self.kind,
            "method": self.method,
            "topContributors": [
                {"service": service, "cost": cost} for service, cost in self.top_services
            ],
        }


class AnomalyDetector:
    """
    Detect anomalous days by comparing each day with its trailing window.

    Two detection methods exist and are selected explicitly by
    ``config.method``; they are never combined:

    1. std_dev (default) - flag when |cost - mean| > k * stddev of the
       trailing window. Catches spikes and drops. A window with zero
       stddev never flags.
    2. percent_change - flag when cost exceeds the trailing average by more
       than a percentage. Spikes only.
    """

    def __init__(self, config: AnomalyDetectionConfig | None = None):
        """
        Initialize the anomaly detector.

        Args:
            config: Anomaly detection configuration. Defaults apply when None.
        """
        self.config = config or AnomalyDetectionConfig()

    @property
    def required_days(self) -> int:
        """Minimum number of distinct days needed to evaluate anything."""
        if self.config.method == "percent_change":
            return self.config.percent_change.lookback_days + 1
        return self.config.std_dev.window_size + 1

    def detect(self, records: Iterable[BillingRecord]) -> list[AnomalyRecord]:
        """
        Detect anomalous days.

        Args:
            records: Normalized billing records.

        Returns:
            Anomalies in chronological order. Empty when there are fewer
            than ``required_days`` days of data.
        """
        records = list(records)
        series = daily_costs(records)

        if len(series) < self.required_days:
            return []

        if self.config.method == "percent_change":
            anomalies = self._detect_percent_change(series)
        else:
            anomalies = self._detect_std_dev(series)

        if not anomalies:
            return []

        records_by_day = _group_by_day(records)
        return [
            _with_top_services(anomaly, records_by_day, self.config.top_contributors)
            for anomaly in anomalies
        ]

    def _detect_std_dev(self, series: list[CostPoint]) -> list[AnomalyRecord]:
        """Flag days more than k population standard deviations from the window mean."""
        window_size = self.config.std_dev.window_size
        k = self.config.std_dev.std_deviations
        anomalies = []

        for i in range(window_size, len(series)):
            window = [point.cost for point in series[i - window_size : i]]
            mean = statistics.fmean(window)
            std = statistics.pstdev(window, mu=mean)

            if std <= 0:
                continue

            current = series[i]
            deviation = current.cost - mean
            if abs(deviation) <= k * std:
                continue

            anomalies.append(
                AnomalyRecord(
                    date=current.period_start,
                    cost=current.cost,
                    mean=mean,
                    deviation=deviation,
                    percent_change=(deviation / mean) * 100 if mean > 0 else None,
                    kind=COST_SPIKE if current.cost > mean else COST_DROP,
                    method="std_dev",
                    std_dev=std,
                    std_deviations=abs(deviation) / std,
                )
            )

        return anomalies

    def _detect_percent_change(self, series: list[CostPoint]) -> list[AnomalyRecord]:
        """Flag days whose cost rose more than threshold_percent over the trailing average."""
        thresholds = self.config.percent_change
        lookback = thresholds.lookback_days
        anomalies = []

        for i in range(lookback, len(series)):
            window = [point.cost for point in series[i - lookback : i]]
            mean = statistics.fmean(window)

            if mean <= thresholds.minimum_average:
                continue

            current = series[i]
            deviation = current.cost - mean
            percent_change = (deviation / mean) * 100
            if percent_change <= thresholds.threshold_percent:
                continue

            anomalies.append(
                AnomalyRecord(
                    date=current.period_start,
                    cost=current.cost,
                    mean=mean,
                    deviation=deviation,
                    percent_change=percent_change,
                    kind=COST_SPIKE,
                    method="percent_change",
                )
            )

        return anomalies

    def get_anomaly_summary(self, anomalies: list[AnomalyRecord]) -> str:
        """Generate a summary of detected anomalies."""
        if not anomalies:
            return "No anomalies detected."

        spikes = [a for a in anomalies if a.kind == COST_SPIKE]
        drops = [a for a in anomalies if a.kind == COST_DROP]
        net_impact = sum(a.deviation for a in anomalies)

        parts = [f"Detected {len(anomalies)} anomalies:"]
        if spikes:
            parts.append(f"  - {len(spikes)} cost spikes")
        if drops:
            parts.append(f"  - {len(drops)} cost drops")
        parts.append(f"Net impact vs. trailing average: ${net_impact:+.2f}")

        return "\n".join(parts)


def _group_by_day(records: list[BillingRecord]) -> dict[date, list[BillingRecord]]:
    grouped: dict[date, list[BillingRecord]] = {}
    for record in records:
        if record.usage_date is not None:
            grouped.setdefault(record.usage_date, []).append(record)
    return grouped


def _with_top_services(
    anomaly: AnomalyRecord,
    records_by_day: dict[date, list[BillingRecord]],
    limit: int,
) -> AnomalyRecord:
    services = cost_by_service(records_by_day.get(anomaly.date, []))
    top = list(services.items())[:limit]
    return replace(anomaly, top_services=top)


def detect_anomalies(
    records: Iterable[BillingRecord],
    config: AnomalyDetectionConfig | None = None,
) -> list[AnomalyRecord]:
    """Detect anomalous days with the method selected in config."""
    return AnomalyDetector(config).detect(records)
