"""
AI Advisor Lambda Handler.

One function serves every advisor page. The advisor is taken from the
``advisor`` path parameter or the last segment of the request path
(``/api/ai/dr-planner`` -> ``dr-planner``).

Request:  {"promptContext": str}
          explain-anomaly also accepts {"anomaly": {...AnomalyRecord.to_dict()...}}
Response: {<route response field>: str}
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
from cloud_cost_dashboard.llm.prompts import (
    ADVISOR_ROUTES,
    AdvisorRoute,
    build_anomaly_explanation_prompt,
)


def _resolve_route(event: dict[str, Any]) -> AdvisorRoute | None:
    """Find the advisor for this request, or None if the path is unknown."""
    name = (event.get("pathParameters") or {}).get("advisor")

    if not name:
        path = event.get("rawPath") or event.get("path") or ""
        name = path.rstrip("/").rsplit("/", 1)[-1]

    return ADVISOR_ROUTES.get(name)


def _build_prompt(route: AdvisorRoute, payload: dict[str, Any]) -> str | None:
    prompt_context = payload.get("promptContext")
    if isinstance(prompt_context, str) and prompt_context.strip():
        return prompt_context

    anomaly = payload.get("anomaly")
    if route.name == "explain-anomaly" and isinstance(anomaly, dict) and anomaly:
        return build_anomaly_explanation_prompt(anomaly)

    return None


def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Lambda handler for the advisor endpoints."""
    print(f"Advisor handler invoked at {datetime.now(UTC).isoformat()}")

    route = _resolve_route(event)
    if route is None:
        print(f"Unknown advisor path: {event.get('rawPath') or event.get('path')}")
        return error_response(404, "Unknown advisor.")

    try:
        payload = parse_json_body(event)
    except BadRequestError as e:
        print(f"Rejected request: {e}")
        return error_response(400, str(e))

    prompt = _build_prompt(route, payload)
    if prompt is None:
        return error_response(400, "Missing required field: promptContext.")

    print(f"Advisor '{route.name}' prompt length: {len(prompt)}")
    return complete_or_error(
        prompt,
        response_field=route.response_field,
        system_prompt=route.system_prompt,
        max_tokens=route.max_tokens,
    )
