"""Hosted LLM completion clients for the accounting assistant.

Two interchangeable clients share one method, ``complete(system, user)``,
returning the first text completion. Which one is used is decided by the
stored AI configuration, see :func:`create_llm_client`.
"""

import logging
from typing import Protocol

import anthropic
import openai

from integrations.exceptions import ProviderAPIError, ProviderConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_MODELS: dict[str, str] = {
    "openai": "gpt-4o-mini",
    "anthropic": "claude-3-sonnet-20240229",
}

MAX_TOKENS = 1000
TEMPERATURE = 0.7


class LLMClient(Protocol):
    """A single-turn text completion client."""

    provider_name: str
    model: str

    def complete(self, system: str, user: str) -> str:
        """Return the model's reply to ``user`` under the ``system`` prompt."""
        ...


def _upstream_message(exc: Exception) -> str:
    """Pull ``error.message`` out of an SDK error body, else ``str(exc)``."""
    body = getattr(exc, "body", None)
    if isinstance(body, dict):
        inner = body.get("error", body)
        if isinstance(inner, dict) and inner.get("message"):
            return str(inner["message"])
    return getattr(exc, "message", None) or str(exc)


class OpenAIClient:
    """Chat Completions client backed by the ``openai`` SDK."""

    provider_name = "OpenAI"

    def __init__(self, api_key: str, model: str | None = None, client=None):
        self.model = model or DEFAULT_MODELS["openai"]
        self._client = client or openai.OpenAI(api_key=api_key)

    def complete(self, system: str, user: str) -> str:
        try:
            response = self._client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": user},
                ],
                max_tokens=MAX_TOKENS,
                temperature=TEMPERATURE,
            )
        except openai.APIError as e:
            raise ProviderAPIError(
                f"OpenAI API error: {_upstream_message(e)}",
                provider_name=self.provider_name,
                status_code=getattr(e, "status_code", None),
            ) from e
        return response.choices[0].message.content or ""


class AnthropicClient:
    """Messages API client backed by the ``anthropic`` SDK."""

    provider_name = "Anthropic"

    def __init__(self, api_key: str, model: str | None = None, client=None):
        self.model = model or DEFAULT_MODELS["anthropic"]
        self._client = client or anthropic.Anthropic(api_key=api_key)

    def complete(self, system: str, user: str) -> str:
        try:
            response = self._client.messages.create(
                model=self.model,
                max_tokens=MAX_TOKENS,
                system=system,
                messages=[{"role": "user", "content": user}],
                temperature=TEMPERATURE,
            )
        except anthropic.APIError as e:
            raise ProviderAPIError(
                f"Anthropic API error: {_upstream_message(e)}",
                provider_name=self.provider_name,
                status_code=getattr(e, "status_code", None),
            ) from e
        for block in response.content:
            if getattr(block, "type", None) == "text":
                return block.text
        return ""


def create_llm_client(provider: str, api_key: str, model: str | None = None) -> LLMClient:
    """Build the client for a stored ``model_provider`` value.

    Raises:
        ProviderConfigurationError: If the provider is not supported.
    """
    key = (provider or "").strip().lower()
    if key == "openai":
        return OpenAIClient(api_key, model)
    if key == "anthropic":
        return AnthropicClient(api_key, model)
    raise ProviderConfigurationError(f"Unsupported model provider: {provider}", provider_name=provider)
