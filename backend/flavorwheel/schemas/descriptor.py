"""Descriptor extraction schemas."""
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from flavorwheel.models.descriptor import DescriptorType, SourceType


class StructuredNotes(BaseModel):
    """Per-field tasting notes with optional 0-10 intensities."""

    aroma_notes: str | None = None
    flavor_notes: str | None = None
    texture_notes: str | None = None
    other_notes: str | None = None
    aroma_intensity: int | None = Field(default=None, ge=0, le=10)
    flavor_intensity: int | None = Field(default=None, ge=0, le=10)

    def combined_text(self) -> str:
        """Join the non-empty note fields into one text blob."""
        fields = [self.aroma_notes, self.flavor_notes, self.texture_notes, self.other_notes]
        return ". ".join(field for field in fields if field)


class ItemContext(BaseModel):
    """Item a tasting note is about."""

    item_name: str | None = Field(default=None, max_length=255)
    item_category: str | None = Field(default=None, max_length=100)


class ExtractRequest(BaseModel):
    """Schema for an extraction request."""

    user_id: str = Field(min_length=1, max_length=64)
    source_type: SourceType
    source_id: str = Field(min_length=1, max_length=64)
    text: str | None = None
    structured_data: StructuredNotes | None = None
    item_context: ItemContext | None = None
    category: str | None = Field(default=None, max_length=255)
    use_ai: bool = True


class ExtractedDescriptor(BaseModel):
    """A descriptor produced by either extraction strategy."""

    text: str
    type: DescriptorType
    category: str | None = None
    subcategory: str | None = None
    confidence: float = Field(default=1.0, ge=0.0, le=1.0)
    intensity: int | None = Field(default=None, ge=0, le=10)


class ExtractResponse(BaseModel):
    """Schema for an extraction response."""

    success: bool = True
    descriptors: list[ExtractedDescriptor] = Field(default_factory=list)
    saved_count: int = 0
    extraction_method: Literal["ai", "keyword"] = "keyword"
    tokens_used: int | None = None
    processing_time_ms: int | None = None


class DescriptorRead(BaseModel):
    """Schema for a stored descriptor."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    source_type: SourceType
    source_id: str
    descriptor_text: str
    normalized_form: str
    descriptor_type: DescriptorType
    category: str | None = None
    subcategory: str | None = None
    confidence_score: float
    intensity: int | None = None
    item_name: str | None = None
    item_category: str | None = None
    ai_extracted: bool
    extraction_model: str | None = None
    created_at: datetime
    updated_at: datetime
