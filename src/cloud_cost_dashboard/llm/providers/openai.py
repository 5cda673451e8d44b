"""OpenAI chat completions provider."""

from __future__ import annotations

import openai

from cloud_cost_dashboard.config.schema import LLMConfig
from cloud_cost_dashboard.llm.base import LLMMessage, LLMProvider, LLMResponse


class OpenAIProvider(LLMProvider):
    """OpenAI chat completions. System prompts stay inline as messages."""

    def __init__(self, api_key: str, config: LLMConfig):
        self.client = openai.OpenAI(
            api_key=api_key,
            timeout=config.timeout_seconds,
            max_retries=config.max_retries,
        )
        self.config = config
        self.model_id = config.openai.model_id

    @property
    def provider_name(self) -> str:
        return "openai"

    def chat(self, messages: list[LLMMessage], **kwargs) -> LLMResponse:
        response = self.client.chat.completions.create(
            model=self.model_id,
            messages=[{"role": m.role, "content": m.content} for m in messages],
            **self.sampling_options(self.config, kwargs),
        )

        choice = response.choices[0]
        usage = response.usage
        return LLMResponse(
            content=choice.message.content or "",
            model=response.model,
            finish_reason=choice.finish_reason or "unknown",
            usage={
                "input_tokens": usage.prompt_tokens if usage else 0,
                "output_tokens": usage.completion_tokens if usage else 0,
            },
        )
