"""Prompt templates with versioning for AI services."""

from typing import Dict, Any


class PromptRegistry:
    """Centralized prompt management with versioning."""

    DESCRIPTOR_EXTRACTION_V1 = {
        "name": "descriptor_extraction",
        "version": "v1.0",
        "created": "2026-10-12",
        "system": """You are an expert sensory analyst specializing in flavor and aroma profiling. Your task is to extract and classify descriptors from tasting notes.

CLASSIFICATION RULES:
- AROMA: Smell-related descriptors (nose, fragrance, scent). Look for: "smells like", "nose of", "aroma of", "fragrant"
- FLAVOR: Taste-related descriptors (palate, taste). Look for: "tastes like", "flavor of", "on the palate", "taste of"
- TEXTURE: Physical sensations (mouthfeel, body). Look for: "creamy", "smooth", "astringent", "silky", "fizzy", "oily"
- METAPHOR: Emotional, place, or cultural associations. Look for: "reminds me of", "like a", "evokes", place names, emotions

CATEGORIZATION GUIDELINES:
For AROMA, FLAVOR, and TEXTURE types, use one of these predefined categories:
{flavor_categories}

For METAPHOR type, use one of these predefined categories:
{metaphor_categories}

IMPORTANT:
- Preserve exact user wording (keep "chocolatey" not "chocolate", "lemony" not "lemon")
- Classify based on context, not just keywords
- Confidence should reflect how clear the classification is (0.7-1.0 range)
- If unsure, choose the closest matching predefined category""",
        "template": """Extract all sensory descriptors from this tasting note:

"{text}"

{category_context}
{taxonomy_context}

Return JSON with this exact structure:
{{
  "descriptors": [
    {{
      "text": "exact descriptor from user text",
      "type": "aroma|flavor|texture|metaphor",
      "category": "one of the predefined categories",
      "subcategory": "optional subcategory (e.g., Berry, Citrus)",
      "confidence": <float between 0.0 and 1.0>
    }}
  ]
}}

Extract ALL descriptors, even if confidence is medium. Be thorough. If the note has no sensory descriptors, return an empty descriptors array."""
    }

    TAXONOMY_GENERATION_V1 = {
        "name": "taxonomy_generation",
        "version": "v1.0",
        "created": "2026-10-12",
        "system": "You are a culinary and beverage expert who creates flavor taxonomy structures for any food or drink category.",
        "template": """A user is creating a tasting session for: "{category_name}"

Generate a comprehensive flavor taxonomy for this category. Analyze what type of item this is and provide:

1. Base template: Which existing category is this most similar to? ({base_templates})
2. Aroma categories: 4-8 major aroma categories for this item (e.g., Fruity, Floral, Earthy)
3. Flavor categories: 4-8 major flavor categories (e.g., Sweet, Sour, Bitter, Umami)
4. Typical descriptors: 8-15 specific descriptors commonly associated with this category
5. Texture notes: 3-6 common textural descriptors

Return JSON with this exact structure:
{{
  "base_template": "<one of the base templates>",
  "aroma_categories": ["Category1", "Category2", ...],
  "flavor_categories": ["Category1", "Category2", ...],
  "typical_descriptors": ["descriptor1", "descriptor2", ...],
  "texture_notes": ["texture1", "texture2", ...]
}}

Be creative and accurate. Consider the item's cultural context, production method, and sensory characteristics."""
    }

    @classmethod
    def get_descriptor_extraction_prompt(cls) -> Dict[str, Any]:
        """Get the current descriptor extraction prompt."""
        return cls.DESCRIPTOR_EXTRACTION_V1

    @classmethod
    def get_taxonomy_prompt(cls) -> Dict[str, Any]:
        """Get the current taxonomy generation prompt."""
        return cls.TAXONOMY_GENERATION_V1
