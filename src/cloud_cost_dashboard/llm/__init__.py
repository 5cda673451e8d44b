"""LLM integration for the dashboard's AI endpoints."""

from cloud_cost_dashboard.llm.base import LLMMessage, LLMProvider, LLMResponse
from cloud_cost_dashboard.llm.client import LLMClient

__all__ = [
    "LLMClient",
    "LLMMessage",
    "LLMProvider",
    "LLMResponse",
]
