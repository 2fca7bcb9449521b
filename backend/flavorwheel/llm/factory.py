"""Model factory for creating LLM instances."""

import logging
from collections import OrderedDict
from threading import Lock
from typing import Optional

from langchain_core.language_models import BaseChatModel

from .config import ModelConfig, ProviderCredentials
from .exceptions import LLMModuleError, MissingCredentialsError, ModelCreationError
from .providers import ProviderRegistry, default_registry

logger = logging.getLogger(__name__)


class ModelFactory:
    """Factory for creating LLM models with runtime configuration.

    Handles provider selection, credential injection, and configuration
    validation.
    """

    def __init__(
        self,
        credentials: Optional[ProviderCredentials] = None,
        registry: Optional[ProviderRegistry] = None,
    ):
        self._credentials = credentials or ProviderCredentials()
        self._registry = registry or default_registry()

    def has_credentials(self, provider: str) -> bool:
        """Whether an API key is configured for ``provider``."""
        return self._credentials.api_key_for(provider) is not None

    def create_model(self, config: ModelConfig) -> BaseChatModel:
        """Create a model instance from configuration.

        Raises:
            MissingCredentialsError: If the provider has no API key
            ModelCreationError: If model creation fails
        """
        api_key = self._credentials.api_key_for(config.provider)
        if api_key is None:
            raise MissingCredentialsError(
                f"No API key configured for provider '{config.provider}'"
            )

        try:
            provider = self._registry.get(config.provider)()

            kwargs = {}
            if config.model_kwargs:
                kwargs["model_kwargs"] = dict(config.model_kwargs)
            base_url = config.base_url
            if base_url is None and config.provider == "openrouter":
                base_url = self._credentials.openrouter_base_url
            if base_url:
                kwargs["base_url"] = base_url

            provider.validate_config({**config.model_dump(), "api_key": api_key})
            model = provider.create_model(
                model=config.model,
                temperature=config.temperature,
                max_tokens=config.max_tokens,
                api_key=api_key,
                **kwargs,
            )

            logger.info("Created %s model: %s", config.provider, config.model)
            return model

        except LLMModuleError:
            raise
        except Exception as e:
            logger.error("Failed to create model: %s", e)
            raise ModelCreationError(f"Model creation failed: {e}") from e


class CachedModelFactory(ModelFactory):
    """Model factory with a bounded LRU cache of model instances.

    Instances are keyed by configuration signature. The least recently
    used entry is evicted once ``max_entries`` is exceeded.
    """

    def __init__(
        self,
        credentials: Optional[ProviderCredentials] = None,
        registry: Optional[ProviderRegistry] = None,
        max_entries: int = 8,
    ):
        super().__init__(credentials, registry)
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._max_entries = max_entries
        self._cache: "OrderedDict[str, BaseChatModel]" = OrderedDict()
        self._lock = Lock()

    def create_model(self, config: ModelConfig) -> BaseChatModel:
        """Create or retrieve a cached model."""
        cache_key = config.cache_key()

        with self._lock:
            cached = self._cache.get(cache_key)
            if cached is not None:
                self._cache.move_to_end(cache_key)
                logger.debug("Cache hit for %s, reusing model", cache_key)
                return cached

        logger.debug("Cache miss for %s, creating new model", cache_key)
        model = super().create_model(config)

        with self._lock:
            self._cache[cache_key] = model
            self._cache.move_to_end(cache_key)
            while len(self._cache) > self._max_entries:
                evicted, _ = self._cache.popitem(last=False)
                logger.debug("Evicted model %s from cache", evicted)
        return model

    def clear_cache(self) -> None:
        logger.info("Clearing model cache (%s entries)", len(self._cache))
        with self._lock:
            self._cache.clear()

    def cache_size(self) -> int:
        return len(self._cache)
