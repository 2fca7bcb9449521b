"""Tests for category taxonomy resolution and caching."""
import json

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from conftest import FailingChatModel, fake_llm, run

from flavorwheel.database import init_db
from flavorwheel.models import CategoryTaxonomy
from flavorwheel.services.ai.taxonomy_generator import AITaxonomyGenerator
from flavorwheel.services.taxonomy_resolver import TaxonomyResolver, normalize_category_name

TEA_TAXONOMY = json.dumps({
    "base_template": "tea",
    "aroma_categories": ["Floral", "Roasted", "Fruity", "Mineral"],
    "flavor_categories": ["Sweet", "Umami", "Astringent", "Fruity"],
    "typical_descriptors": [
        "orchid", "honey", "stone fruit", "toast",
        "osmanthus", "butter", "mineral", "peach",
    ],
    "texture_notes": ["silky", "thick", "lingering"],
})


def test_normalize_category_name():
    assert normalize_category_name("  Pale   Ale ") == "pale ale"
    assert normalize_category_name("COFFEE") == "coffee"


def test_first_resolve_generates_then_caches(db):
    resolver = TaxonomyResolver(db)

    first = run(resolver.resolve("Coffee"))
    second = run(resolver.resolve("coffee "))

    assert first.cached is False
    assert first.usage_count == 1
    assert second.cached is True
    assert second.usage_count == 2
    assert second.taxonomy == first.taxonomy
    assert second.category_name == "Coffee"
    assert db.query(CategoryTaxonomy).count() == 1


def test_template_fallback_without_generator(db):
    resolved = run(TaxonomyResolver(db).resolve("Islay Scotch"))

    assert resolved.taxonomy.base_template == "spirits"
    assert resolved.taxonomy.ai_model is None


def test_ai_generated_taxonomy_is_cached(db, ai_settings):
    generator = AITaxonomyGenerator(llm=fake_llm(TEA_TAXONOMY), app_settings=ai_settings)

    resolved = run(TaxonomyResolver(db, generator).resolve("Oolong"))

    assert resolved.cached is False
    assert resolved.taxonomy.ai_model == ai_settings.llm_model
    row = db.query(CategoryTaxonomy).one()
    assert row.taxonomy_data["typical_descriptors"][0] == "orchid"


def test_ai_failure_uses_template(db, ai_settings):
    generator = AITaxonomyGenerator(llm=FailingChatModel(responses=["unused"]), app_settings=ai_settings)

    resolved = run(TaxonomyResolver(db, generator).resolve("Oolong tea"))

    assert resolved.taxonomy.base_template == "tea"
    assert resolved.taxonomy.ai_model is None


def test_invalid_ai_payload_uses_template(db, ai_settings):
    generator = AITaxonomyGenerator(llm=fake_llm('{"aroma_categories": []}'), app_settings=ai_settings)

    resolved = run(TaxonomyResolver(db, generator).resolve("Merlot"))

    assert resolved.taxonomy.base_template == "wine"


def test_force_regenerate_replaces_cached_taxonomy(db, ai_settings):
    run(TaxonomyResolver(db).resolve("Oolong"))
    generator = AITaxonomyGenerator(llm=fake_llm(TEA_TAXONOMY), app_settings=ai_settings)

    resolved = run(TaxonomyResolver(db, generator).resolve("Oolong", force_regenerate=True))

    assert resolved.cached is False
    assert resolved.taxonomy.ai_model == ai_settings.llm_model
    assert db.query(CategoryTaxonomy).count() == 1


def test_lookup_does_not_generate(db):
    resolver = TaxonomyResolver(db)

    assert resolver.lookup("Matcha") is None
    run(resolver.resolve("Matcha"))
    assert resolver.lookup("matcha").base_template == "tea"
    assert db.query(CategoryTaxonomy).one().usage_count == 1


def test_empty_name_is_rejected(db):
    with pytest.raises(ValueError):
        run(TaxonomyResolver(db).resolve("   "))


def test_concurrent_insert_returns_committed_row(db, monkeypatch):
    winner = run(TaxonomyResolver(db).resolve("Oolong Tea"))

    resolver = TaxonomyResolver(db)
    real_get = resolver._get
    calls = []

    def stale_then_real(normalized):
        # First lookup misses as if another request had not committed yet
        calls.append(normalized)
        if len(calls) == 1:
            return None
        return real_get(normalized)

    monkeypatch.setattr(resolver, "_get", stale_then_real)

    resolved = run(resolver.resolve("oolong tea"))

    assert resolved.cached is True
    assert resolved.category_name == winner.category_name
    assert resolved.usage_count == winner.usage_count
    assert db.query(CategoryTaxonomy).count() == 1


def test_usage_count_increment_ignores_stale_rows(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'taxonomies.db'}")
    init_db(bind=engine)
    Session = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    first, second = Session(), Session()
    try:
        run(TaxonomyResolver(first).resolve("Oolong"))
        # Load the row into the second session before the first one hits it again
        assert second.query(CategoryTaxonomy).one().usage_count == 1

        run(TaxonomyResolver(first).resolve("Oolong"))
        resolved = run(TaxonomyResolver(second).resolve("Oolong"))

        assert resolved.usage_count == 3
    finally:
        first.close()
        second.close()
        engine.dispose()
