"""Generative model clients and the shared lazily-built client handle."""

import logging
import threading
from collections.abc import Callable
from typing import Protocol

import anthropic

from coursequiz.config import AppConfig, GenerationConfig
from coursequiz.errors import ModelNotConfiguredError, UnsupportedProviderError

logger = logging.getLogger(__name__)


class ModelClient(Protocol):
    """A text-in, text-out generative model endpoint."""

    def generate(self, model_id: str, prompt: str) -> str: ...


class AnthropicModelClient:
    """ModelClient backed by the Anthropic Messages API.

    SDK-level retries are disabled; retry policy belongs to the caller.

    Args:
        api_key: Anthropic API key.
        max_tokens: Maximum tokens in a response.
        temperature: Sampling temperature.
    """

    def __init__(self, api_key: str, max_tokens: int = 4000, temperature: float = 0.4) -> None:
        self._client = anthropic.Anthropic(api_key=api_key, max_retries=0)
        self._max_tokens = max_tokens
        self._temperature = temperature

    def generate(self, model_id: str, prompt: str) -> str:
        response = self._client.messages.create(
            model=model_id,
            max_tokens=self._max_tokens,
            temperature=self._temperature,
            messages=[{"role": "user", "content": prompt}],
        )
        return "".join(
            block.text for block in response.content if getattr(block, "type", "") == "text"
        )


def create_model_client(config: GenerationConfig, api_key: str) -> ModelClient:
    """Create the SDK client for the configured provider.

    Raises:
        UnsupportedProviderError: If the provider has no implementation.
    """
    if config.provider == "anthropic":
        return AnthropicModelClient(
            api_key=api_key,
            max_tokens=config.max_tokens,
            temperature=config.temperature,
        )
    raise UnsupportedProviderError(f"Unsupported generation provider: '{config.provider}'")


class LazyModelClient:
    """Shared model client handle, constructed once on first use.

    Construction is guarded by a lock so concurrent first calls build a
    single underlying client; afterwards calls go straight to it.

    Args:
        config: GenerationConfig naming the provider and model.
        api_key: Provider API key; a blank key leaves the handle unconfigured.
        factory: Builds the underlying client. Defaults to
            :func:`create_model_client`.
    """

    def __init__(
        self,
        config: GenerationConfig,
        api_key: str | None,
        factory: Callable[[], ModelClient] | None = None,
    ) -> None:
        self._config = config
        self._api_key = api_key.strip() if api_key else None
        self._factory = factory or (lambda: create_model_client(config, self._api_key or ""))
        self._client: ModelClient | None = None
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: AppConfig) -> "LazyModelClient":
        return cls(config.generation, config.anthropic_api_key)

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    @property
    def model_id(self) -> str:
        return self._config.model

    def get(self) -> ModelClient:
        """Return the underlying client, building it on first call.

        Raises:
            ModelNotConfiguredError: If no API key is configured.
        """
        if not self.is_configured:
            raise ModelNotConfiguredError(
                f"No API key configured for provider '{self._config.provider}'"
            )
        if self._client is None:
            with self._lock:
                if self._client is None:
                    self._client = self._factory()
                    logger.info(
                        "Initialized %s client with model: %s",
                        self._config.provider,
                        self._config.model,
                    )
        return self._client

    def generate(self, prompt: str) -> str:
        """Send a prompt to the configured model and return its text."""
        return self.get().generate(self.model_id, prompt)
