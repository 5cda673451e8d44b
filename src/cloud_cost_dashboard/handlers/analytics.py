"""
Billing Analytics Lambda Handler.

Runs the analytics engine on rows posted by the dashboard, for files too
large to process in the browser.

Request:  {"rows": [{raw CSV row}, ...],
           "granularity": "daily" | "monthly",   (optional)
           "forecastMonths": int}                 (optional)
Response: {"summary", "costSeries", "serviceCosts", "regionCosts",
           "anomalies", "forecast", "topExpensiveResources",
           "idleResources", "savingsOpportunities", "errors"}

Each analytic runs independently. One that fails is reported in
``errors`` and returns an empty section; the others are unaffected.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Callable

from pydantic import ValidationError

from cloud_cost_dashboard.analysis import (
    aggregate_costs,
    build_billing_summary,
    build_resource_profiles,
    cost_by_region,
    cost_by_service,
    detect_anomalies,
    find_savings_opportunities,
    generate_forecast,
    idle_candidates,
    monthly_costs,
    top_expensive,
)
from cloud_cost_dashboard.billing.models import BillingRecord
from cloud_cost_dashboard.billing.normalizer import normalize_rows
from cloud_cost_dashboard.config.loader import get_cached_config
from cloud_cost_dashboard.config.schema import AnalyticsConfig
from cloud_cost_dashboard.handlers.common import (
    BadRequestError,
    error_response,
    json_response,
    parse_json_body,
)


def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Lambda handler for the analytics endpoint."""
    print(f"Analytics handler invoked at {datetime.now(UTC).isoformat()}")

    # A bad deployment config raises here and surfaces as a 500
    base_config = get_cached_config().analytics

    try:
        payload = parse_json_body(event)
        config = _request_config(payload, base_config)
    except (BadRequestError, ValidationError) as e:
        print(f"Rejected request: {e}")
        return error_response(400, "Invalid analytics request.", str(e))

    rows = payload.get("rows")
    if not isinstance(rows, list) or not all(isinstance(row, dict) for row in rows):
        return error_response(400, "rows must be a list of objects.")

    records = normalize_rows(rows)
    print(f"Normalized {len(records)} rows")

    return json_response(200, run_analytics(records, config))


def _request_config(payload: dict[str, Any], base: AnalyticsConfig) -> AnalyticsConfig:
    """Apply per-request overrides on top of the deployed analytics config."""
    data = base.model_dump()
    if "granularity" in payload:
        data["aggregation"]["granularity"] = payload["granularity"]
    if "forecastMonths" in payload:
        data["forecast"]["horizon_months"] = payload["forecastMonths"]
    return AnalyticsConfig.model_validate(data)


def run_analytics(records: list[BillingRecord], config: AnalyticsConfig) -> dict[str, Any]:
    """
    Run every analytic over the same records.

    Returns:
        JSON-ready dict of results plus an ``errors`` list naming any
        analytic that failed.
    """
    errors: list[str] = []

    def safe(name: str, compute: Callable[[], Any], default: Any) -> Any:
        try:
            return compute()
        except Exception as e:
            print(f"Analytic '{name}' failed: {e}")
            errors.append(name)
            return default

    profiles = safe(
        "resources", lambda: build_resource_profiles(records, config.resources.idle), []
    )

    result = {
        "summary": safe(
            "summary", lambda: build_billing_summary(records, config).to_dict(), None
        ),
        "costSeries": safe(
            "costSeries",
            lambda: [
                p.to_dict() for p in aggregate_costs(records, config.aggregation.granularity)
            ],
            [],
        ),
        "serviceCosts": safe(
            "serviceCosts",
            lambda: [[s, c] for s, c in cost_by_service(records).items()],
            [],
        ),
        "regionCosts": safe(
            "regionCosts",
            lambda: [[r, c] for r, c in cost_by_region(records).items()],
            [],
        ),
        "anomalies": safe(
            "anomalies",
            lambda: [a.to_dict() for a in detect_anomalies(records, config.anomaly_detection)],
            [],
        ),
        "forecast": safe(
            "forecast",
            lambda: [
                p.to_dict()
                for p in generate_forecast(
                    monthly_costs(records),
                    horizon=config.forecast.horizon_months,
                    lookback=config.forecast.lookback_months,
                )
            ],
            [],
        ),
        "topExpensiveResources": [
            p.to_dict() for p in top_expensive(profiles, config.resources.top_expensive)
        ],
        "idleResources": [
            p.to_dict() for p in idle_candidates(profiles, config.resources.idle_limit)
        ],
        "savingsOpportunities": safe(
            "savingsOpportunities",
            lambda: [o.to_dict() for o in find_savings_opportunities(records, config.savings)],
            [],
        ),
    }
    result["errors"] = errors
    return result
