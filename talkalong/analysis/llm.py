"""Language-model providers for highlight selection."""
import logging
from typing import Optional, Union

import anthropic
import openai

logger = logging.getLogger(__name__)


class OpenAIProvider:
    """Requests highlight JSON through the OpenAI Responses API."""

    name = "openai"

    def __init__(self, api_key: str, model: str = "gpt-4.1-mini", client: Optional[openai.OpenAI] = None):
        self.api_key = api_key
        self.model = model
        self._client = client

    @property
    def client(self) -> openai.OpenAI:
        if self._client is None:
            self._client = openai.OpenAI(api_key=self.api_key)
        return self._client

    def complete(self, system: str, prompt: str) -> str:
        """Send one system + user exchange and return the output text."""
        response = self.client.responses.create(
            model=self.model,
            input=[
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
        )
        return response.output_text or ""


class AnthropicProvider:
    """Requests highlight JSON through the Anthropic Messages API."""

    name = "anthropic"

    def __init__(
        self,
        api_key: str,
        model: str = "claude-haiku-4-5-20251001",
        max_tokens: int = 2048,
        client: Optional[anthropic.Anthropic] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.max_tokens = max_tokens
        self._client = client

    @property
    def client(self) -> anthropic.Anthropic:
        if self._client is None:
            self._client = anthropic.Anthropic(api_key=self.api_key)
        return self._client

    def complete(self, system: str, prompt: str) -> str:
        """Send one system + user exchange and return the first text block."""
        response = self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            system=system,
            messages=[{"role": "user", "content": prompt}],
        )
        if not response.content:
            return ""
        return response.content[0].text


LLMProvider = Union[OpenAIProvider, AnthropicProvider]


def get_provider(config) -> Optional[LLMProvider]:
    """
    Build the configured language-model provider.

    Args:
        config: Object with LLM_PROVIDER, API key and model attributes.

    Returns:
        Provider instance, or None when the selected provider has no
        credential (analysis then uses the heuristic).
    """
    provider_name = (config.LLM_PROVIDER or "openai").lower()

    if provider_name == "anthropic":
        if not config.ANTHROPIC_API_KEY:
            logger.info("ANTHROPIC_API_KEY not set; highlight analysis uses heuristics")
            return None
        return AnthropicProvider(api_key=config.ANTHROPIC_API_KEY, model=config.ANTHROPIC_MODEL)

    if provider_name != "openai":
        logger.warning("Unknown LLM_PROVIDER %r; falling back to openai", provider_name)

    if not config.OPENAI_API_KEY:
        logger.info("OPENAI_API_KEY not set; highlight analysis uses heuristics")
        return None
    return OpenAIProvider(api_key=config.OPENAI_API_KEY, model=config.OPENAI_MODEL)
