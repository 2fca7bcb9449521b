"""Tests for provider selection and the cached model factory."""
import pytest
from langchain_core.language_models import FakeListChatModel

from flavorwheel.config import Settings
from flavorwheel.llm import (
    CachedModelFactory,
    MissingCredentialsError,
    ModelConfig,
    ModelCreationError,
    ModelFactory,
    ModelProvider,
    ProviderCredentials,
    ProviderNotFoundError,
    ProviderRegistry,
    default_registry,
)
from flavorwheel.services.ai.base import build_model_factory, get_default_model_config


class CountingProvider(ModelProvider):
    created = 0

    @property
    def name(self):
        return "openai"

    def create_model(self, model, temperature, max_tokens, api_key=None, **kwargs):
        CountingProvider.created += 1
        return FakeListChatModel(responses=[model])


class BrokenProvider(ModelProvider):
    @property
    def name(self):
        return "openai"

    def create_model(self, model, temperature, max_tokens, api_key=None, **kwargs):
        raise RuntimeError("bad model name")


def registry_with(provider_class):
    registry = ProviderRegistry()
    registry.register(provider_class)
    return registry


@pytest.fixture(autouse=True)
def reset_counter():
    CountingProvider.created = 0


def config(model):
    return ModelConfig(provider="openai", model=model)


def test_default_registry_lists_all_providers():
    assert sorted(default_registry().list_providers()) == ["anthropic", "gemini", "openai", "openrouter"]


def test_unknown_provider():
    with pytest.raises(ProviderNotFoundError):
        ProviderRegistry().get("mistral")


def test_missing_credentials():
    factory = ModelFactory(ProviderCredentials(), registry_with(CountingProvider))

    assert factory.has_credentials("openai") is False
    with pytest.raises(MissingCredentialsError):
        factory.create_model(config("gpt-4o-mini"))
    assert CountingProvider.created == 0


def test_missing_credentials_is_a_creation_error():
    assert issubclass(MissingCredentialsError, ModelCreationError)


def test_provider_failure_is_wrapped():
    factory = ModelFactory(ProviderCredentials(openai_api_key="k"), registry_with(BrokenProvider))

    with pytest.raises(ModelCreationError):
        factory.create_model(config("gpt-4o-mini"))


def test_cache_reuses_instances():
    factory = CachedModelFactory(ProviderCredentials(openai_api_key="k"), registry_with(CountingProvider))

    first = factory.create_model(config("a"))
    second = factory.create_model(config("a"))

    assert first is second
    assert CountingProvider.created == 1


def test_cache_evicts_least_recently_used():
    factory = CachedModelFactory(
        ProviderCredentials(openai_api_key="k"), registry_with(CountingProvider), max_entries=2
    )

    a = factory.create_model(config("a"))
    factory.create_model(config("b"))
    assert factory.create_model(config("a")) is a
    factory.create_model(config("c"))

    assert factory.cache_size() == 2
    assert factory.create_model(config("a")) is a
    assert CountingProvider.created == 3

    factory.create_model(config("b"))
    assert CountingProvider.created == 4


def test_clear_cache():
    factory = CachedModelFactory(ProviderCredentials(openai_api_key="k"), registry_with(CountingProvider))
    factory.create_model(config("a"))

    factory.clear_cache()

    assert factory.cache_size() == 0


def test_cache_requires_positive_size():
    with pytest.raises(ValueError):
        CachedModelFactory(max_entries=0)


def test_config_is_frozen():
    model_config = config("a")
    with pytest.raises(Exception):
        model_config.model = "b"


def test_anthropic_model_creation():
    from langchain_anthropic import ChatAnthropic

    factory = ModelFactory(ProviderCredentials(anthropic_api_key="sk-ant-test"))
    model = factory.create_model(ModelConfig(provider="anthropic", model="claude-3-haiku-20240307"))

    assert isinstance(model, ChatAnthropic)


def test_openrouter_uses_openai_compatible_endpoint():
    from langchain_openai import ChatOpenAI

    factory = ModelFactory(ProviderCredentials(openrouter_api_key="sk-or-test"))
    model = factory.create_model(ModelConfig(provider="openrouter", model="meta-llama/llama-3-8b-instruct"))

    assert isinstance(model, ChatOpenAI)
    assert model.openai_api_base == "https://openrouter.ai/api/v1"


def test_factory_from_settings():
    app_settings = Settings(llm_provider="gemini", llm_model="gemini-1.5-flash", google_api_key="g-key", openai_api_key="")
    factory = build_model_factory(app_settings)

    assert isinstance(factory, CachedModelFactory)
    assert factory.has_credentials("gemini") is True
    assert factory.has_credentials("openai") is False
    assert get_default_model_config(app_settings).provider == "gemini"
