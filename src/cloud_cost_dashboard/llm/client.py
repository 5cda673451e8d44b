"""LLM client: provider selection and API key lookup."""

from __future__ import annotations

import json
import os

import boto3
from botocore.exceptions import ClientError

from cloud_cost_dashboard.config.schema import LLMConfig
from cloud_cost_dashboard.llm.base import LLMMessage, LLMProvider, LLMResponse
from cloud_cost_dashboard.llm.providers import AnthropicProvider, OpenAIProvider


class LLMClient:
    """
    Chat client for the configured provider.

    The API key comes from ``<PROVIDER>_API_KEY`` when set (local runs),
    otherwise from the JSON Secrets Manager secret ``secret_name`` under
    ``<provider>_api_key`` (deployed Lambdas). The key and the SDK client
    are fetched on first use and reused for the life of the container.
    """

    def __init__(
        self,
        config: LLMConfig,
        secret_name: str | None = None,
        region: str | None = None,
    ):
        self.config = config
        self.secret_name = secret_name
        self.region = region
        self._provider: LLMProvider | None = None

    @property
    def env_var(self) -> str:
        return f"{self.config.provider.upper()}_API_KEY"

    def _get_api_key(self) -> str:
        """
        Resolve the API key for the configured provider.

        Raises:
            RuntimeError: If neither source provides a key.
        """
        if api_key := os.environ.get(self.env_var):
            return api_key

        if not self.secret_name:
            raise RuntimeError(f"No {self.env_var} set and no secret configured")

        return self._get_secret_key()

    def _get_secret_key(self) -> str:
        key_name = f"{self.config.provider}_api_key"

        try:
            secrets = boto3.client("secretsmanager", region_name=self.region)
            secret = secrets.get_secret_value(SecretId=self.secret_name)
            values = json.loads(secret["SecretString"])
        except ClientError as e:
            raise RuntimeError(f"Failed to retrieve LLM API key: {e}") from e
        except json.JSONDecodeError as e:
            raise RuntimeError(f"Secret {self.secret_name} is not valid JSON") from e

        if not (api_key := values.get(key_name)):
            raise RuntimeError(f"API key '{key_name}' not found in secret")
        return api_key

    def _get_provider(self) -> LLMProvider:
        """Create the provider on first use."""
        if self._provider is not None:
            return self._provider

        if self.config.provider == "anthropic":
            provider_class = AnthropicProvider
        elif self.config.provider == "openai":
            provider_class = OpenAIProvider
        else:
            raise ValueError(f"Unknown provider: {self.config.provider}")

        self._provider = provider_class(self._get_api_key(), self.config)
        return self._provider

    def chat(self, messages: list[LLMMessage], **kwargs) -> LLMResponse:
        """Send a chat completion request to the configured provider."""
        return self._get_provider().chat(messages, **kwargs)

    def complete(
        self,
        prompt: str,
        system_prompt: str | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """
        Run a single-turn prompt and return the response text.

        Args:
            prompt: User prompt.
            system_prompt: Optional system prompt.
            max_tokens: Output token cap. Uses the configured default when None.

        Returns:
            The model's text response.
        """
        messages = []
        if system_prompt:
            messages.append(LLMMessage.system(system_prompt))
        messages.append(LLMMessage.user(prompt))

        kwargs = {}
        if max_tokens is not None:
            kwargs["max_tokens"] = max_tokens

        response = self.chat(messages, **kwargs)
        print(
            f"LLM completion via {self.config.provider}: "
            f"{response.input_tokens} in, {response.output_tokens} out"
        )
        return response.content
