"""API tests for the flavor wheel endpoints."""
from conftest import descriptor_json, fake_llm


EXAMPLE_EXTRACTION = {
    "user_id": "u1",
    "source_type": "quick_tasting",
    "source_id": "t1",
    "text": "bright citrus, floral jasmine, honey sweetness",
    "category": "coffee",
    "use_ai": False,
}


def test_root(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.json()["message"] == "Flavor Wheel API"


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "healthy"}


def test_extract_descriptors(client):
    r = client.post("/api/flavor-wheels/extract-descriptors", json=EXAMPLE_EXTRACTION)
    assert r.status_code == 200, r.text
    body = r.json()

    assert body["success"] is True
    assert body["extraction_method"] == "keyword"
    found = {(d["text"], d["type"]) for d in body["descriptors"]}
    assert ("citrus", "aroma") in found
    assert ("jasmine", "aroma") in found
    assert body["saved_count"] == len(body["descriptors"])


def test_extract_descriptors_twice_keeps_one_row_per_key(client):
    first = client.post("/api/flavor-wheels/extract-descriptors", json=EXAMPLE_EXTRACTION).json()
    client.post("/api/flavor-wheels/extract-descriptors", json=EXAMPLE_EXTRACTION)

    r = client.get("/api/flavor-wheels/descriptors", params={"user_id": "u1"})
    assert r.status_code == 200
    assert len(r.json()) == first["saved_count"]


def test_extract_without_credentials_uses_keywords(client):
    payload = {**EXAMPLE_EXTRACTION, "use_ai": True}
    r = client.post("/api/flavor-wheels/extract-descriptors", json=payload)
    assert r.status_code == 200
    assert r.json()["extraction_method"] == "keyword"


def test_extract_with_ai(make_ai_client):
    client = make_ai_client(fake_llm(descriptor_json(
        {"text": "citrus", "type": "aroma", "category": "Fruit", "confidence": 0.9},
    )))
    payload = {**EXAMPLE_EXTRACTION, "use_ai": True}
    del payload["category"]

    r = client.post("/api/flavor-wheels/extract-descriptors", json=payload)
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["extraction_method"] == "ai"
    assert body["descriptors"][0]["category"] == "Fruit"

    stats = client.get("/api/admin/extraction-stats", params={"period": "1d"}).json()
    assert stats["total_attempts"] == 1
    assert stats["successful_attempts"] == 1
    assert stats["total_descriptors"] == 1


def test_extract_structured(client):
    payload = {
        "user_id": "u1",
        "source_type": "quick_review",
        "source_id": "r1",
        "structured_data": {"aroma_notes": "jasmine", "flavor_notes": "caramel", "aroma_intensity": 8},
        "item_context": {"item_name": "Yirgacheffe", "item_category": "coffee"},
    }
    r = client.post("/api/flavor-wheels/extract-descriptors", json=payload)
    assert r.status_code == 200
    found = {d["text"]: d for d in r.json()["descriptors"]}
    assert found["jasmine"]["intensity"] == 8

    stored = client.get("/api/flavor-wheels/descriptors", params={"user_id": "u1", "descriptor_type": "aroma"}).json()
    assert [d["descriptor_text"] for d in stored] == ["jasmine"]
    assert stored[0]["item_name"] == "Yirgacheffe"


def test_extract_without_input_is_400(client):
    payload = {key: value for key, value in EXAMPLE_EXTRACTION.items() if key != "text"}
    r = client.post("/api/flavor-wheels/extract-descriptors", json=payload)
    assert r.status_code == 400


def test_extract_with_blank_user_is_400(client):
    r = client.post("/api/flavor-wheels/extract-descriptors", json={**EXAMPLE_EXTRACTION, "user_id": "  "})
    assert r.status_code == 400


def test_extract_with_unknown_source_type_is_422(client):
    r = client.post("/api/flavor-wheels/extract-descriptors", json={**EXAMPLE_EXTRACTION, "source_type": "podcast"})
    assert r.status_code == 422


def test_taxonomy_is_generated_then_cached(client):
    first = client.post("/api/categories/get-or-create-taxonomy", json={"category_name": "Pale Ale"})
    second = client.post("/api/categories/get-or-create-taxonomy", json={"category_name": "pale  ale"})

    assert first.status_code == 200
    assert first.json()["cached"] is False
    assert first.json()["taxonomy"]["base_template"] == "beer"
    assert second.json()["cached"] is True
    assert second.json()["usage_count"] == 2
    assert second.json()["normalized_name"] == "pale ale"


def test_taxonomy_blank_name_is_400(client):
    r = client.post("/api/categories/get-or-create-taxonomy", json={"category_name": "   "})
    assert r.status_code == 400


def test_generate_wheel(client):
    client.post("/api/flavor-wheels/extract-descriptors", json=EXAMPLE_EXTRACTION)
    request = {"wheel_type": "aroma", "scope_type": "personal", "scope_filter": {"user_id": "u1"}}

    first = client.post("/api/flavor-wheels/generate", json=request)
    second = client.post("/api/flavor-wheels/generate", json=request)

    assert first.status_code == 200, first.text
    assert first.json()["cached"] is False
    names = [c["name"] for c in first.json()["wheel_data"]["categories"]]
    assert "Fruit" in names
    assert "Floral" in names
    assert second.json()["cached"] is True
    assert second.json()["wheel_id"] == first.json()["wheel_id"]


def test_generate_empty_wheel_has_warning(client):
    r = client.post(
        "/api/flavor-wheels/generate",
        json={"wheel_type": "combined", "scope_type": "tasting", "scope_filter": {"tasting_id": "t1"}},
    )
    assert r.status_code == 200
    body = r.json()
    assert body["wheel_data"]["categories"] == []
    assert body["warning"].startswith("No flavor descriptors found")


def test_generate_wheel_missing_scope_field_is_400(client):
    r = client.post("/api/flavor-wheels/generate", json={"wheel_type": "flavor", "scope_type": "personal"})
    assert r.status_code == 400


def test_generate_wheel_unknown_type_is_422(client):
    r = client.post("/api/flavor-wheels/generate", json={"wheel_type": "texture", "scope_type": "universal"})
    assert r.status_code == 422


def test_extraction_stats_empty(client):
    r = client.get("/api/admin/extraction-stats")
    assert r.status_code == 200
    body = r.json()
    assert body["period"] == "7d"
    assert body["total_attempts"] == 0
    assert body["daily"] == []


def test_extraction_stats_unknown_period_is_422(client):
    r = client.get("/api/admin/extraction-stats", params={"period": "1y"})
    assert r.status_code == 422


def test_extract_with_overlong_identifier_is_422(client):
    r = client.post("/api/flavor-wheels/extract-descriptors", json={**EXAMPLE_EXTRACTION, "source_id": "s" * 80})
    assert r.status_code == 422

    r = client.post("/api/flavor-wheels/extract-descriptors", json={**EXAMPLE_EXTRACTION, "user_id": "u" * 65})
    assert r.status_code == 422


def test_extract_with_overlong_item_context_is_422(client):
    payload = {**EXAMPLE_EXTRACTION, "item_context": {"item_name": "n" * 256}}
    assert client.post("/api/flavor-wheels/extract-descriptors", json=payload).status_code == 422

    payload = {**EXAMPLE_EXTRACTION, "item_context": {"item_category": "c" * 101}}
    assert client.post("/api/flavor-wheels/extract-descriptors", json=payload).status_code == 422


def test_generate_wheel_with_overlong_user_is_422(client):
    r = client.post(
        "/api/flavor-wheels/generate",
        json={"wheel_type": "flavor", "scope_type": "personal", "scope_filter": {"user_id": "u" * 65}},
    )
    assert r.status_code == 422
