"""Build a compact billing summary for AI prompts and the dashboard."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from cloud_cost_dashboard.analysis.aggregator import cost_by_service, top_n, total_cost
from cloud_cost_dashboard.analysis.resource_profiler import (
    ResourceProfile,
    build_resource_profiles,
    idle_candidates,
    top_expensive,
)
from cloud_cost_dashboard.billing.models import BillingRecord
from cloud_cost_dashboard.config.schema import AnalyticsConfig


@dataclass(frozen=True)
class BillingSummary:
    """Key cost figures for a billing file, small enough for a prompt."""

    total_cost: float
    top_services: list[tuple[str, float]] = field(default_factory=list)
    top_expensive_resources: list[ResourceProfile] = field(default_factory=list)
    idle_resources: list[ResourceProfile] = field(default_factory=list)
    rows_processed: int = 0
    data_truncated: bool = False

    def to_dict(self) -> dict:
        """Serialize in the camelCase shape the dashboard posts to the AI endpoints."""
        return {
            "totalOverallCost": f"{self.total_cost:.2f}",
            "serviceCosts": [[service, cost] for service, cost in self.top_services],
            "topServices": ", ".join(
                f"{service}: ${cost:.2f}" for service, cost in self.top_services
            ),
            "topExpensiveResources": [p.to_dict() for p in self.top_expensive_resources],
            "idleResources": [p.to_dict() for p in self.idle_resources],
            "numRowsProcessed": self.rows_processed,
            "dataTruncated": self.data_truncated,
        }


def build_billing_summary(
    records: Sequence[BillingRecord],
    config: AnalyticsConfig | None = None,
    total_rows: int | None = None,
) -> BillingSummary:
    """
    Summarize billing records.

    Only the first ``config.summary.max_rows`` records are processed.

    Args:
        records: Normalized billing records.
        config: Analytics configuration. Defaults apply when None.
        total_rows: Row count of the source file, when records were already
                   truncated upstream (see read_billing_csv).

    Returns:
        BillingSummary with totals, top services and notable resources.
    """
    config = config or AnalyticsConfig()
    processed = records[: config.summary.max_rows]
    source_rows = max(total_rows or 0, len(records))

    profiles = build_resource_profiles(processed, config.resources.idle)

    return BillingSummary(
        total_cost=total_cost(processed),
        top_services=top_n(cost_by_service(processed), config.aggregation.top_services),
        top_expensive_resources=(
            top_expensive(profiles, config.resources.top_expensive) if profiles else []
        ),
        idle_resources=idle_candidates(profiles, config.resources.idle_limit),
        rows_processed=len(processed),
        data_truncated=source_rows > len(processed),
    )
