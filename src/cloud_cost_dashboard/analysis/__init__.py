"""Billing analytics for Cloud Cost Dashboard."""

from cloud_cost_dashboard.analysis.aggregator import (
    CostPoint,
    aggregate_costs,
    cost_by_region,
    cost_by_service,
    daily_costs,
    monthly_costs,
    top_n,
    total_cost,
)
from cloud_cost_dashboard.analysis.anomaly_detector import (
    AnomalyDetector,
    AnomalyRecord,
    detect_anomalies,
)
from cloud_cost_dashboard.analysis.forecast import ForecastPoint, generate_forecast, trailing_average
from cloud_cost_dashboard.analysis.resource_profiler import (
    ResourceProfile,
    build_resource_profiles,
    idle_candidates,
    top_expensive,
)
from cloud_cost_dashboard.analysis.savings import SavingsOpportunity, find_savings_opportunities
from cloud_cost_dashboard.analysis.summary import BillingSummary, build_billing_summary

__all__ = [
    "CostPoint",
    "aggregate_costs",
    "cost_by_region",
    "cost_by_service",
    "daily_costs",
    "monthly_costs",
    "top_n",
    "total_cost",
    "AnomalyDetector",
    "AnomalyRecord",
    "detect_anomalies",
    "ForecastPoint",
    "generate_forecast",
    "trailing_average",
    "ResourceProfile",
    "build_resource_profiles",
    "idle_candidates",
    "top_expensive",
    "SavingsOpportunity",
    "find_savings_opportunities",
    "BillingSummary",
    "build_billing_summary",
]
