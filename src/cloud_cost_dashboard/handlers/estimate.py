"""
Cost Estimator Lambda Handler.

Request:  {"resourceType": str, "size": str, "region": str, "duration": hours}
Response: {"estimate": str}
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
from cloud_cost_dashboard.llm.prompts import build_estimate_prompt

ESTIMATE_MAX_TOKENS = 300
REQUIRED_FIELDS = ("resourceType", "size", "region", "duration")


def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Lambda handler for the cost estimate endpoint."""
    print(f"Estimate handler invoked at {datetime.now(UTC).isoformat()}")

    try:
        payload = parse_json_body(event)
    except BadRequestError as e:
        print(f"Rejected request: {e}")
        return error_response(400, str(e))

    missing = [name for name in REQUIRED_FIELDS if payload.get(name) in (None, "", 0)]
    if missing:
        return error_response(
            400, f"Missing required fields for estimation: {', '.join(missing)}."
        )

    prompt = build_estimate_prompt(
        resource_type=str(payload["resourceType"]),
        size=str(payload["size"]),
        region=str(payload["region"]),
        duration=payload["duration"],
    )
    return complete_or_error(prompt, response_field="estimate", max_tokens=ESTIMATE_MAX_TOKENS)
