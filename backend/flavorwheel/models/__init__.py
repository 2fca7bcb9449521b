"""SQLAlchemy models."""
from flavorwheel.models.descriptor import Descriptor, DescriptorType, SourceType
from flavorwheel.models.category_taxonomy import CategoryTaxonomy
from flavorwheel.models.extraction_log import ExtractionLog
from flavorwheel.models.flavor_wheel import FlavorWheel, ScopeType, WheelType

__all__ = [
    "Descriptor",
    "DescriptorType",
    "SourceType",
    "CategoryTaxonomy",
    "ExtractionLog",
    "FlavorWheel",
    "ScopeType",
    "WheelType",
]
