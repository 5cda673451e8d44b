"""
Cost Chat Lambda Handler.

Answers a free-form question about the uploaded bill, using the billing
summary the dashboard sends along.

Request:  {"userQuestion": str, "csvContext": {...billing summary...}}
Response: {"answer": str}
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
from cloud_cost_dashboard.llm.prompts import SYSTEM_PROMPT, build_chat_prompt

CHAT_MAX_TOKENS = 400


def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """
    Lambda handler for the cost chat endpoint.

    Args:
        event: Lambda Function URL event.
        context: Lambda context.

    Returns:
        HTTP response dict with statusCode and body.
    """
    print(f"Chat handler invoked at {datetime.now(UTC).isoformat()}")

    try:
        payload = parse_json_body(event)
    except BadRequestError as e:
        print(f"Rejected request: {e}")
        return error_response(400, str(e))

    question = payload.get("userQuestion")
    csv_context = payload.get("csvContext")

    if not question or not csv_context:
        return error_response(400, "Missing required fields: userQuestion or csvContext.")
    if not isinstance(csv_context, dict):
        return error_response(400, "csvContext must be an object.")

    prompt = build_chat_prompt(str(question), csv_context)
    return complete_or_error(
        prompt,
        response_field="answer",
        system_prompt=SYSTEM_PROMPT,
        max_tokens=CHAT_MAX_TOKENS,
    )
