"""Base class for AI services."""

import asyncio
import logging
from abc import ABC
from typing import Any, Awaitable, Optional

from fastapi import Request
from langchain_core.exceptions import OutputParserException
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import BaseMessage
from langchain_core.output_parsers import JsonOutputParser

from flavorwheel.config import Settings, settings as default_settings
from flavorwheel.llm import (
    CachedModelFactory,
    LLMModuleError,
    MissingCredentialsError,
    ModelConfig,
    ModelFactory,
    ProviderCredentials,
)
from flavorwheel.services.exceptions import (
    AIProviderError,
    AIResponseFormatError,
    AITimeoutError,
    AIUnavailableError,
)

logger = logging.getLogger(__name__)


def build_model_factory(app_settings: Settings = default_settings) -> CachedModelFactory:
    """Create the application's model factory from settings."""
    credentials = ProviderCredentials(
        google_api_key=app_settings.google_api_key or None,
        openai_api_key=app_settings.openai_api_key or None,
        anthropic_api_key=app_settings.anthropic_api_key or None,
        openrouter_api_key=app_settings.openrouter_api_key or None,
    )
    return CachedModelFactory(credentials, max_entries=app_settings.model_cache_size)


def get_model_factory(request: Request) -> ModelFactory:
    """FastAPI dependency returning the application's model factory."""
    return request.app.state.model_factory


def get_default_model_config(app_settings: Settings = default_settings) -> ModelConfig:
    """Get default model configuration from settings."""
    return ModelConfig(
        provider=app_settings.llm_provider,
        model=app_settings.llm_model,
        temperature=app_settings.llm_temperature,
    )


class BaseAIService(ABC):
    """Base class for LLM-backed services.

    The chat model is either passed in directly or created on first use
    from ``factory``. Subclasses call ``_invoke`` and ``_parse_json``; both
    raise ``AIExtractionError`` subclasses so callers can fall back.
    """

    def __init__(
        self,
        factory: Optional[ModelFactory] = None,
        llm: Optional[BaseChatModel] = None,
        model_config: Optional[ModelConfig] = None,
        app_settings: Settings = default_settings,
    ):
        """Initialize the AI service.

        Args:
            factory: Model factory used to build the chat model lazily
            llm: Ready chat model; takes precedence over ``factory``
            model_config: Model selection; defaults to settings
            app_settings: Application settings
        """
        self.settings = app_settings
        self.factory = factory
        self.model_config = model_config or get_default_model_config(app_settings)
        self._llm = llm

    @property
    def model_name(self) -> str:
        return self.model_config.model

    def is_available(self) -> bool:
        """Whether an AI call can be attempted at all."""
        if not self.settings.ai_extraction_enabled:
            return False
        if self._llm is not None:
            return True
        return self.factory is not None and self.factory.has_credentials(
            self.model_config.provider
        )

    @property
    def llm(self) -> BaseChatModel:
        if self._llm is None:
            if self.factory is None:
                raise AIUnavailableError("No model factory configured")
            try:
                self._llm = self.factory.create_model(self.model_config)
            except MissingCredentialsError as e:
                raise AIUnavailableError(str(e)) from e
            except LLMModuleError as e:
                raise AIProviderError(f"Model creation failed: {e}") from e
        return self._llm

    async def _invoke(self, call: Awaitable[BaseMessage], timeout_seconds: float) -> BaseMessage:
        """Await a model call with an explicit timeout.

        Raises:
            AITimeoutError: If the call does not finish in time
            AIProviderError: If the provider call fails
        """
        try:
            return await asyncio.wait_for(call, timeout=float(timeout_seconds))
        except (asyncio.TimeoutError, TimeoutError) as e:
            raise AITimeoutError(f"AI call timed out after {int(timeout_seconds)}s") from e
        except Exception as e:
            raise AIProviderError(f"AI provider call failed: {e}") from e

    @staticmethod
    def _message_text(message: BaseMessage) -> str:
        content = message.content
        if isinstance(content, str):
            return content
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(block.get("text", ""))
        return "".join(parts)

    def _parse_json(self, message: BaseMessage) -> Any:
        """Parse the JSON payload of a model response.

        Raises:
            AIResponseFormatError: If no JSON payload can be parsed
        """
        text = self._message_text(message)
        if not text.strip():
            raise AIResponseFormatError("Empty AI response")
        try:
            parsed = JsonOutputParser().parse(text)
        except OutputParserException as e:
            raise AIResponseFormatError(f"Invalid JSON output: {e}", raw_text=text) from e
        if parsed is None:
            raise AIResponseFormatError("No JSON payload found in AI response", raw_text=text)
        return parsed

    @staticmethod
    def _tokens_used(message: BaseMessage) -> int:
        usage = getattr(message, "usage_metadata", None) or {}
        total = usage.get("total_tokens")
        if total is None:
            total = usage.get("input_tokens", 0) + usage.get("output_tokens", 0)
        return int(total or 0)
