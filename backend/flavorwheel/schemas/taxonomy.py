"""Category taxonomy schemas."""
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator

BaseTemplate = Literal["coffee", "tea", "wine", "spirits", "beer", "chocolate", "cheese", "other"]


class TaxonomyPayload(BaseModel):
    """Flavor vocabulary stored for a category."""

    base_template: BaseTemplate = "other"
    aroma_categories: list[str] = Field(min_length=4, max_length=8)
    flavor_categories: list[str] = Field(min_length=4, max_length=8)
    typical_descriptors: list[str] = Field(min_length=8, max_length=15)
    texture_notes: list[str] = Field(min_length=3, max_length=6)
    ai_model: str | None = None
    generated_at: datetime

    @field_validator(
        "aroma_categories",
        "flavor_categories",
        "typical_descriptors",
        "texture_notes",
    )
    @classmethod
    def strip_entries(cls, v):
        """Drop blank entries and surrounding whitespace."""
        cleaned = [entry.strip() for entry in v if entry and entry.strip()]
        if len(cleaned) != len(v):
            raise ValueError("Entries must be non-empty strings")
        return cleaned


class TaxonomyRequest(BaseModel):
    """Schema for a resolve-or-generate request."""

    category_name: str = Field(min_length=1, max_length=255)
    force_regenerate: bool = False


class TaxonomyResponse(BaseModel):
    """Schema for a resolve-or-generate response."""

    success: bool = True
    category_name: str
    normalized_name: str
    taxonomy: TaxonomyPayload
    cached: bool
    usage_count: int
