"""Provider implementations and registry for LLM services."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Type

from langchain_core.language_models import BaseChatModel

from .exceptions import ProviderNotFoundError

logger = logging.getLogger(__name__)


class ModelProvider(ABC):
    """Abstract base class for LLM providers.

    Each provider implementation must:
    1. Specify a unique provider name
    2. Implement model creation logic
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider identifier (e.g., 'openai', 'anthropic')."""
        pass

    @abstractmethod
    def create_model(
        self,
        model: str,
        temperature: float,
        max_tokens: int,
        api_key: Optional[str] = None,
        **kwargs: Any,
    ) -> BaseChatModel:
        """Create and configure the chat model instance.

        Raises:
            ModelCreationError: If model creation fails
        """
        pass

    def validate_config(self, config: Dict[str, Any]) -> None:
        """Log configuration problems that will not stop model creation."""
        if not config.get("api_key"):
            logger.warning("%s API key not provided", self.name)


class AnthropicProvider(ModelProvider):
    """Claude models via langchain-anthropic."""

    @property
    def name(self) -> str:
        return "anthropic"

    def create_model(self, model, temperature, max_tokens, api_key=None, **kwargs):
        from langchain_anthropic import ChatAnthropic

        kwargs.pop("model_kwargs", None)
        kwargs.pop("base_url", None)
        if api_key:
            kwargs["api_key"] = api_key
        return ChatAnthropic(
            model=model,
            temperature=temperature,
            max_tokens=max_tokens,
            **kwargs,
        )


class OpenAIProvider(ModelProvider):
    """OpenAI chat models via langchain-openai."""

    @property
    def name(self) -> str:
        return "openai"

    def create_model(self, model, temperature, max_tokens, api_key=None, **kwargs):
        from langchain_openai import ChatOpenAI

        if api_key:
            kwargs["api_key"] = api_key
        if not kwargs.get("model_kwargs"):
            kwargs.pop("model_kwargs", None)
        if not kwargs.get("base_url"):
            kwargs.pop("base_url", None)
        return ChatOpenAI(
            model=model,
            temperature=temperature,
            max_tokens=max_tokens,
            **kwargs,
        )


class GeminiProvider(ModelProvider):
    """Google Gemini models via langchain-google-genai."""

    @property
    def name(self) -> str:
        return "gemini"

    def create_model(self, model, temperature, max_tokens, api_key=None, **kwargs):
        from langchain_google_genai import ChatGoogleGenerativeAI

        kwargs.pop("model_kwargs", None)
        kwargs.pop("base_url", None)
        if api_key:
            kwargs["google_api_key"] = api_key
        return ChatGoogleGenerativeAI(
            model=model,
            temperature=temperature,
            max_output_tokens=max_tokens,
            **kwargs,
        )


class OpenRouterProvider(OpenAIProvider):
    """OpenRouter: OpenAI-compatible API in front of many models."""

    DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"

    @property
    def name(self) -> str:
        return "openrouter"

    def validate_config(self, config: Dict[str, Any]) -> None:
        super().validate_config(config)
        if not config.get("base_url"):
            logger.debug("OpenRouter base_url not provided, using %s", self.DEFAULT_BASE_URL)

    def create_model(self, model, temperature, max_tokens, api_key=None, **kwargs):
        kwargs["base_url"] = kwargs.get("base_url") or self.DEFAULT_BASE_URL
        return super().create_model(model, temperature, max_tokens, api_key, **kwargs)


class ProviderRegistry:
    """Registry mapping provider names to implementations."""

    def __init__(self):
        self._providers: Dict[str, Type[ModelProvider]] = {}

    def register(self, provider_class: Type[ModelProvider]) -> None:
        provider = provider_class()
        self._providers[provider.name] = provider_class
        logger.debug("Registered provider: %s", provider.name)

    def get(self, name: str) -> Type[ModelProvider]:
        """Get a provider class by name.

        Raises:
            ProviderNotFoundError: If provider not found
        """
        if name not in self._providers:
            available = ", ".join(self._providers.keys())
            raise ProviderNotFoundError(
                f"Provider '{name}' not found. Available providers: {available}"
            )
        return self._providers[name]

    def list_providers(self) -> list[str]:
        return list(self._providers.keys())


def default_registry() -> ProviderRegistry:
    """Build a registry with every built-in provider."""
    registry = ProviderRegistry()
    for provider_class in (
        OpenAIProvider,
        AnthropicProvider,
        GeminiProvider,
        OpenRouterProvider,
    ):
        registry.register(provider_class)
    return registry
