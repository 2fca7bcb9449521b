"""Provider-agnostic LLM model selection and factory.

Creates LangChain chat models for OpenAI, Anthropic, Gemini and
OpenRouter from a frozen ``ModelConfig``. ``CachedModelFactory`` keeps a
bounded LRU of model instances; construct one per application and inject
it where models are needed.
"""

from .config import ModelConfig, ProviderCredentials
from .exceptions import (
    LLMModuleError,
    MissingCredentialsError,
    ModelCreationError,
    ProviderNotFoundError,
)
from .factory import CachedModelFactory, ModelFactory
from .providers import (
    AnthropicProvider,
    GeminiProvider,
    ModelProvider,
    OpenAIProvider,
    OpenRouterProvider,
    ProviderRegistry,
    default_registry,
)

__all__ = [
    "ModelConfig",
    "ProviderCredentials",
    "ModelFactory",
    "CachedModelFactory",
    "ModelProvider",
    "ProviderRegistry",
    "default_registry",
    "AnthropicProvider",
    "GeminiProvider",
    "OpenAIProvider",
    "OpenRouterProvider",
    "LLMModuleError",
    "MissingCredentialsError",
    "ModelCreationError",
    "ProviderNotFoundError",
]
