"""Flavor wheel schemas."""
from datetime import datetime

from pydantic import BaseModel, Field

from flavorwheel.models.descriptor import DescriptorType
from flavorwheel.models.flavor_wheel import ScopeType, WheelType


class ScopeFilter(BaseModel):
    """Filter fields; which are required depends on the scope type."""

    user_id: str | None = Field(default=None, max_length=64)
    item_name: str | None = Field(default=None, max_length=255)
    item_category: str | None = Field(default=None, max_length=100)
    tasting_id: str | None = Field(default=None, max_length=64)


class DescriptorNode(BaseModel):
    """Leaf of the wheel: one descriptor and how often it was mentioned."""

    text: str
    count: int
    type: DescriptorType
    avg_intensity: float | None = None
    subcategory: str | None = None


class CategoryNode(BaseModel):
    """Inner ring of the wheel."""

    name: str
    count: int
    percentage: float
    color: str
    descriptors: list[DescriptorNode] = Field(default_factory=list)


class WheelData(BaseModel):
    """Aggregated wheel artifact."""

    wheel_type: WheelType
    scope_type: ScopeType
    scope_filter: ScopeFilter
    categories: list[CategoryNode] = Field(default_factory=list)
    total_descriptors: int = 0
    unique_descriptors: int = 0
    generated_at: datetime


class GenerateWheelRequest(BaseModel):
    """Schema for a generate-wheel request."""

    wheel_type: WheelType
    scope_type: ScopeType
    scope_filter: ScopeFilter = Field(default_factory=ScopeFilter)
    force_regenerate: bool = False


class GenerateWheelResponse(BaseModel):
    """Schema for a generate-wheel response."""

    wheel_data: WheelData
    wheel_id: int
    cached: bool
    warning: str | None = None
