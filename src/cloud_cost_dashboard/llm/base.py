"""Provider-neutral chat types for the AI endpoints."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Literal

Role = Literal["system", "user", "assistant"]


@dataclass(frozen=True)
class LLMMessage:
    """One turn of a conversation."""

    role: Role
    content: str

    @classmethod
    def system(cls, content: str) -> LLMMessage:
        return cls(role="system", content=content)

    @classmethod
    def user(cls, content: str) -> LLMMessage:
        return cls(role="user", content=content)


@dataclass
class LLMResponse:
    """Text answer from a provider, with token accounting."""

    content: str
    model: str
    finish_reason: str
    usage: dict[str, int] = field(default_factory=dict)  # input_tokens / output_tokens

    @property
    def input_tokens(self) -> int:
        return self.usage.get("input_tokens", 0)

    @property
    def output_tokens(self) -> int:
        return self.usage.get("output_tokens", 0)


class LLMProvider(ABC):
    """A vendor chat API behind a common interface."""

    @abstractmethod
    def chat(self, messages: list[LLMMessage], **kwargs) -> LLMResponse:
        """
        Send a chat completion request.

        Args:
            messages: Conversation so far. System messages may appear anywhere.
            **kwargs: max_tokens and temperature overrides.

        Returns:
            LLMResponse with the model's text.
        """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Short provider name, matching LLMConfig.provider."""

    @staticmethod
    def sampling_options(config: Any, overrides: dict[str, Any]) -> dict[str, Any]:
        """max_tokens and temperature from the call, falling back to config."""
        return {
            "max_tokens": overrides.get("max_tokens", config.max_tokens),
            "temperature": overrides.get("temperature", config.temperature),
        }
