"""Configuration schemas for LLM models."""

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, Field

ProviderName = Literal["openai", "anthropic", "gemini", "openrouter"]


class ModelConfig(BaseModel):
    """Runtime model configuration.

    Frozen so a config can be shared across concurrent requests and used
    as a cache key.

    Attributes:
        provider: LLM provider identifier
        model: Model name/identifier
        temperature: Sampling temperature (0.0-2.0)
        max_tokens: Upper bound on completion tokens
        base_url: Optional base URL override (OpenRouter, custom endpoints)
        model_kwargs: Optional provider-specific kwargs
    """

    provider: ProviderName
    model: str
    temperature: float = Field(default=0.2, ge=0.0, le=2.0)
    max_tokens: int = Field(default=2048, gt=0)
    base_url: Optional[str] = None
    model_kwargs: Optional[Dict[str, Any]] = None

    model_config = {"frozen": True}

    def cache_key(self) -> str:
        return f"{self.provider}:{self.model}:{self.temperature}:{self.max_tokens}"


class ProviderCredentials(BaseModel):
    """Provider credentials.

    Kept apart from ModelConfig so keys are never serialized or logged
    with a model configuration.
    """

    openai_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None
    google_api_key: Optional[str] = None
    openrouter_api_key: Optional[str] = None
    openrouter_base_url: str = "https://openrouter.ai/api/v1"

    def api_key_for(self, provider: str) -> Optional[str]:
        """Return the API key for a provider, or None when unset."""
        key = {
            "openai": self.openai_api_key,
            "anthropic": self.anthropic_api_key,
            "gemini": self.google_api_key,
            "openrouter": self.openrouter_api_key,
        }.get(provider)
        return key or None
