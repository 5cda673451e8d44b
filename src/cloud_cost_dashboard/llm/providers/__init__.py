"""LLM provider implementations."""

from cloud_cost_dashboard.llm.providers.anthropic import AnthropicProvider
from cloud_cost_dashboard.llm.providers.openai import OpenAIProvider

__all__ = ["AnthropicProvider", "OpenAIProvider"]
