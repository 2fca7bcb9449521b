"""Pydantic schemas for API request/response."""
from flavorwheel.schemas.descriptor import (
    DescriptorRead,
    ExtractedDescriptor,
    ExtractRequest,
    ExtractResponse,
    ItemContext,
    StructuredNotes,
)
from flavorwheel.schemas.stats import DailyExtractionStats, ExtractionStats
from flavorwheel.schemas.taxonomy import TaxonomyPayload, TaxonomyRequest, TaxonomyResponse
from flavorwheel.schemas.wheel import (
    CategoryNode,
    DescriptorNode,
    GenerateWheelRequest,
    GenerateWheelResponse,
    ScopeFilter,
    WheelData,
)

__all__ = [
    "DescriptorRead",
    "ExtractedDescriptor",
    "ExtractRequest",
    "ExtractResponse",
    "ItemContext",
    "StructuredNotes",
    "DailyExtractionStats",
    "ExtractionStats",
    "TaxonomyPayload",
    "TaxonomyRequest",
    "TaxonomyResponse",
    "CategoryNode",
    "DescriptorNode",
    "GenerateWheelRequest",
    "GenerateWheelResponse",
    "ScopeFilter",
    "WheelData",
]
