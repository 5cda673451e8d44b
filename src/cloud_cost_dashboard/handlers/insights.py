"""
AI Insights Lambda Handler.

Turns a billing summary into a short list of cost optimization
recommendations. The summary is echoed back so the dashboard can render
the figures next to the AI text.

Request:  {"csvSummary": {...billing summary...}}
Response: {"insights": str, "totalOverallCost": ..., "serviceCosts": ...,
           "topExpensiveResources": ..., "idleResources": ..., "dataTruncated": ...}
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from cloud_cost_dashboard.handlers.common import (
    BadRequestError,
    complete_or_error,
    error_response,
    parse_json_body,
)
from cloud_cost_dashboard.llm.prompts import SYSTEM_PROMPT, build_insights_prompt

INSIGHTS_MAX_TOKENS = 400
ECHOED_FIELDS = (
    "totalOverallCost",
    "serviceCosts",
    "topExpensiveResources",
    "idleResources",
    "dataTruncated",
)


def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Lambda handler for the insights endpoint."""
    print(f"Insights handler invoked at {datetime.now(UTC).isoformat()}")

    try:
        payload = parse_json_body(event)
    except BadRequestError as e:
        print(f"Rejected request: {e}")
        return error_response(400, str(e))

    summary = payload.get("csvSummary")
    if not summary or not isinstance(summary, dict):
        return error_response(400, "No CSV summary provided for insights.")

    prompt = build_insights_prompt(summary)
    print(f"Insights prompt length: {len(prompt)}")

    return complete_or_error(
        prompt,
        response_field="insights",
        system_prompt=SYSTEM_PROMPT,
        max_tokens=INSIGHTS_MAX_TOKENS,
        extra={name: summary.get(name) for name in ECHOED_FIELDS},
    )
