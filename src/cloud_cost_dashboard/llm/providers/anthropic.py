"""Anthropic Messages API provider."""

from __future__ import annotations

from typing import Any

import anthropic

from cloud_cost_dashboard.config.schema import LLMConfig
from cloud_cost_dashboard.llm.base import LLMMessage, LLMProvider, LLMResponse


class AnthropicProvider(LLMProvider):
    """Anthropic Claude provider."""

    def __init__(self, api_key: str, config: LLMConfig):
        """
        Initialize the Anthropic provider.

        Args:
            api_key: Anthropic API key.
            config: LLM configuration. Timeout and retries bound each call
                   so a slow model can't outlive the Lambda request.
        """
        self.client = anthropic.Anthropic(
            api_key=api_key,
            timeout=config.timeout_seconds,
            max_retries=config.max_retries,
        )
        self.config = config
        self.model_id = config.anthropic.model_id

    @property
    def provider_name(self) -> str:
        return "anthropic"

    def chat(self, messages: list[LLMMessage], **kwargs) -> LLMResponse:
        """
        Send a Messages API request.

        System messages are joined into the top-level ``system`` argument;
        the rest are sent in order.
        """
        system_prompt = "\n\n".join(m.content for m in messages if m.role == "system")

        request: dict[str, Any] = {
            "model": self.model_id,
            "messages": [
                {"role": m.role, "content": m.content} for m in messages if m.role != "system"
            ],
            **self.sampling_options(self.config, kwargs),
        }
        if system_prompt:
            request["system"] = system_prompt

        response = self.client.messages.create(**request)

        return LLMResponse(
            content="".join(block.text for block in response.content if block.type == "text"),
            model=response.model,
            finish_reason=response.stop_reason or "unknown",
            usage={
                "input_tokens": response.usage.input_tokens,
                "output_tokens": response.usage.output_tokens,
            },
        )
