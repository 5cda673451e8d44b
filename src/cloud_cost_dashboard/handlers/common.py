"""
Shared helpers for the Lambda handlers.

Handlers receive Lambda Function URL / API Gateway proxy events and return
``{"statusCode", "headers", "body"}`` dicts with a JSON body.

Environment variables:
- CONFIG_SECRET_NAME: Secrets Manager secret with LLM API keys
- CONFIG_ENV: Deployment environment (dev/staging/prod)
- AWS_REGION: Region for Secrets Manager (set by Lambda)
"""

from __future__ import annotations

import base64
import binascii
import json
import os
from typing import Any

from cloud_cost_dashboard.config.loader import get_cached_config
from cloud_cost_dashboard.llm.client import LLMClient


class BadRequestError(ValueError):
    """The request body is missing or malformed."""


def parse_json_body(event: dict[str, Any]) -> dict[str, Any]:
    """
    Decode the JSON object in a proxy event body.

    Raises:
        BadRequestError: If the body is empty, badly encoded, not JSON, or
            not an object.
    """
    body = event.get("body") or ""
    if event.get("isBase64Encoded"):
        try:
            body = base64.b64decode(body, validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as e:
            raise BadRequestError(f"Invalid base64 body: {e}") from e

    if not body:
        raise BadRequestError("Request body is empty")

    try:
        payload = json.loads(body)
    except json.JSONDecodeError as e:
        raise BadRequestError(f"Invalid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise BadRequestError("Request body must be a JSON object")

    return payload


def json_response(status_code: int, body: dict[str, Any]) -> dict[str, Any]:
    """Build a JSON HTTP response."""
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body, default=str),
    }


def error_response(status_code: int, message: str, details: str | None = None) -> dict[str, Any]:
    """Build an error response."""
    body: dict[str, Any] = {"error": message}
    if details:
        body["details"] = details
    return json_response(status_code, body)


_llm_client: LLMClient | None = None


def get_llm_client() -> LLMClient:
    """
    Get the LLM client for this container.

    Created on first use and reused across warm invocations.
    """
    global _llm_client
    if _llm_client is None:
        config = get_cached_config()
        _llm_client = LLMClient(
            config=config.llm,
            secret_name=os.environ.get("CONFIG_SECRET_NAME"),
            region=os.environ.get("AWS_REGION"),
        )
    return _llm_client


def complete_or_error(
    prompt: str,
    response_field: str,
    system_prompt: str | None = None,
    max_tokens: int | None = None,
    extra: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Run a prompt and wrap the answer as ``{response_field: text}``.

    Any failure reaching the model becomes a 500 with the error details.
    """
    try:
        text = get_llm_client().complete(prompt, system_prompt=system_prompt, max_tokens=max_tokens)
    except Exception as e:
        print(f"LLM request for '{response_field}' failed: {e}")
        return error_response(500, "Failed to get a response from the AI model.", str(e))

    body = {response_field: text}
    if extra:
        body.update(extra)
    return json_response(200, body)
