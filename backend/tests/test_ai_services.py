"""Tests for the AI descriptor extractor and taxonomy generator."""
import json

import pytest
from conftest import FailingChatModel, FakeModelFactory, SlowChatModel, descriptor_json, fake_llm, run

from flavorwheel.config import Settings
from flavorwheel.llm import ModelFactory, ProviderCredentials
from flavorwheel.models.descriptor import DescriptorType
from flavorwheel.services.ai.descriptor_extractor import AIDescriptorExtractor
from flavorwheel.services.ai.taxonomy_generator import AITaxonomyGenerator
from flavorwheel.services.exceptions import (
    AIExtractionError,
    AIProviderError,
    AIResponseFormatError,
    AITimeoutError,
    AIUnavailableError,
)
from flavorwheel.services.taxonomy_templates import template_taxonomy

TAXONOMY_JSON = json.dumps({
    "base_template": "Coffee",
    "aroma_categories": ["Fruity", "Floral", "Nutty", "Roasted"],
    "flavor_categories": ["Sweet", "Sour", "Bitter", "Chocolate"],
    "typical_descriptors": [
        "blueberry", "jasmine", "cocoa", "caramel",
        "bergamot", "brown sugar", "lemon", "almond",
    ],
    "texture_notes": ["silky", "juicy", "syrupy"],
})


def test_extracts_and_snaps_categories(ai_settings):
    llm = fake_llm(descriptor_json(
        {"text": "Blueberry", "type": "Aroma", "category": "berry notes", "confidence": 0.9},
        {"text": "cocoa", "type": "flavor", "category": "Sweetness"},
        {"text": "like a summer morning", "type": "metaphor", "category": "temporal"},
        {"text": "mystery", "type": "other", "category": "Totally Unknown"},
    ))
    extractor = AIDescriptorExtractor(llm=llm, app_settings=ai_settings)

    result = run(extractor.extract("Blueberry nose with cocoa", category="coffee"))
    found = {d.text: d for d in result.descriptors}

    assert found["Blueberry"].type == DescriptorType.AROMA
    assert found["Blueberry"].category == "Fruit"
    assert found["Blueberry"].confidence == 0.9
    assert found["cocoa"].category == "Sweetness / Sugary / Confection"
    assert found["cocoa"].confidence == 0.8
    assert found["like a summer morning"].category == "Temporal"
    # Labels matching nothing are kept as given
    assert found["mystery"].category == "Totally Unknown"
    assert result.model == ai_settings.llm_model
    assert len(result.raw_response["descriptors"]) == 4


def test_accepts_bare_list_and_fenced_json(ai_settings):
    payload = json.dumps([{"text": "honey", "type": "flavor", "category": "Sweet"}])
    llm = fake_llm(f"```json\n{payload}\n```")
    extractor = AIDescriptorExtractor(llm=llm, app_settings=ai_settings)

    result = run(extractor.extract("honey"))

    assert [d.text for d in result.descriptors] == ["honey"]


def test_invalid_json_raises_format_error(ai_settings):
    extractor = AIDescriptorExtractor(llm=fake_llm("I could not find any descriptors."), app_settings=ai_settings)

    with pytest.raises(AIResponseFormatError):
        run(extractor.extract("honey"))


def test_missing_descriptors_key_raises_format_error(ai_settings):
    extractor = AIDescriptorExtractor(llm=fake_llm('{"notes": []}'), app_settings=ai_settings)

    with pytest.raises(AIResponseFormatError):
        run(extractor.extract("honey"))


def test_unknown_descriptor_type_raises_format_error(ai_settings):
    llm = fake_llm(descriptor_json({"text": "honey", "type": "smell"}))
    extractor = AIDescriptorExtractor(llm=llm, app_settings=ai_settings)

    with pytest.raises(AIResponseFormatError):
        run(extractor.extract("honey"))


def test_timeout_raises_timeout_error(ai_settings):
    llm = SlowChatModel(responses=[descriptor_json()], delay=1.0)
    extractor = AIDescriptorExtractor(llm=llm, app_settings=ai_settings)

    with pytest.raises(AITimeoutError):
        run(extractor.extract("honey", timeout_seconds=0.05))


def test_provider_failure_raises_provider_error(ai_settings):
    extractor = AIDescriptorExtractor(llm=FailingChatModel(responses=["unused"]), app_settings=ai_settings)

    with pytest.raises(AIProviderError):
        run(extractor.extract("honey"))


def test_all_ai_errors_share_a_base():
    for error in (AIProviderError, AIResponseFormatError, AITimeoutError, AIUnavailableError):
        assert issubclass(error, AIExtractionError)


def test_unavailable_without_credentials(ai_settings):
    extractor = AIDescriptorExtractor(
        factory=ModelFactory(ProviderCredentials()), app_settings=ai_settings
    )

    assert extractor.is_available() is False
    with pytest.raises(AIUnavailableError):
        run(extractor.extract("honey"))


def test_unavailable_when_disabled():
    extractor = AIDescriptorExtractor(
        llm=fake_llm(descriptor_json()),
        app_settings=Settings(ai_extraction_enabled=False),
    )

    assert extractor.is_available() is False
    with pytest.raises(AIUnavailableError):
        run(extractor.extract("honey"))


def test_empty_text_is_unavailable(ai_settings):
    extractor = AIDescriptorExtractor(llm=fake_llm(descriptor_json()), app_settings=ai_settings)

    with pytest.raises(AIUnavailableError):
        run(extractor.extract("   "))


def test_model_comes_from_factory(ai_settings):
    factory = FakeModelFactory(fake_llm(descriptor_json({"text": "honey", "type": "flavor"})))
    extractor = AIDescriptorExtractor(factory=factory, app_settings=ai_settings)

    result = run(extractor.extract("honey"))

    assert len(result.descriptors) == 1
    assert factory.requested[0].provider == "anthropic"
    assert factory.requested[0].max_tokens == 2048


def test_taxonomy_generation(ai_settings):
    generator = AITaxonomyGenerator(llm=fake_llm(TAXONOMY_JSON), app_settings=ai_settings)

    payload = run(generator.generate("Ethiopian Coffee"))

    assert payload.base_template == "coffee"
    assert payload.ai_model == ai_settings.llm_model
    assert "jasmine" in payload.typical_descriptors
    assert payload.generated_at is not None


def test_taxonomy_unknown_template_becomes_other(ai_settings):
    data = json.loads(TAXONOMY_JSON)
    data["base_template"] = "kombucha"
    generator = AITaxonomyGenerator(llm=fake_llm(json.dumps(data)), app_settings=ai_settings)

    assert run(generator.generate("Kombucha")).base_template == "other"


def test_taxonomy_with_too_few_entries_is_rejected(ai_settings):
    data = json.loads(TAXONOMY_JSON)
    data["aroma_categories"] = ["Fruity"]
    generator = AITaxonomyGenerator(llm=fake_llm(json.dumps(data)), app_settings=ai_settings)

    with pytest.raises(AIResponseFormatError):
        run(generator.generate("Coffee"))


@pytest.mark.parametrize(
    "name, template",
    [
        ("Single Origin Espresso", "coffee"),
        ("Aged Pu-erh", "tea"),
        ("Islay Scotch", "spirits"),
        ("Pale Ale", "beer"),
        ("Kale chips", "other"),
        ("Napa Cabernet Sauvignon", "wine"),
        ("Aged Gouda", "cheese"),
        ("70% Dark Chocolate", "chocolate"),
    ],
)
def test_template_heuristic(name, template):
    payload = template_taxonomy(name)
    assert payload.base_template == template
    assert payload.ai_model is None


def test_overlong_labels_fit_the_category_column(ai_settings):
    llm = fake_llm(descriptor_json(
        {"text": "mystery", "type": "flavor", "category": "Q" * 156, "subcategory": "x" * 150},
        {"text": "honey", "type": "flavor", "category": "Sweet", "subcategory": "   "},
    ))
    extractor = AIDescriptorExtractor(llm=llm, app_settings=ai_settings)

    result = run(extractor.extract("mystery honey"))
    found = {d.text: d for d in result.descriptors}

    assert found["mystery"].category == "Q" * 100
    assert found["mystery"].subcategory == "x" * 100
    assert found["honey"].subcategory is None


def test_format_error_keeps_response_text(ai_settings):
    extractor = AIDescriptorExtractor(llm=fake_llm("no json here"), app_settings=ai_settings)

    with pytest.raises(AIResponseFormatError) as excinfo:
        run(extractor.extract("honey"))
    assert excinfo.value.raw_text == "no json here"


def test_result_carries_prompt_version(ai_settings):
    extractor = AIDescriptorExtractor(llm=fake_llm(descriptor_json()), app_settings=ai_settings)

    assert run(extractor.extract("honey")).prompt_version == "v1.0"
