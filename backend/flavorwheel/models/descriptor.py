"""Flavor descriptor model."""
from datetime import datetime
import enum

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Enum,
    Float,
    Integer,
    String,
    Text,
    UniqueConstraint,
)

from flavorwheel.database import Base, enum_values


class SourceType(str, enum.Enum):
    """Kind of record a descriptor was extracted from."""

    QUICK_TASTING = "quick_tasting"
    QUICK_REVIEW = "quick_review"
    PROSE_REVIEW = "prose_review"


class DescriptorType(str, enum.Enum):
    """Sensory attribute a descriptor belongs to."""

    AROMA = "aroma"
    FLAVOR = "flavor"
    TEXTURE = "texture"
    METAPHOR = "metaphor"
    OTHER = "other"


# Length of the category and subcategory columns
CATEGORY_MAX_LENGTH = 100


def normalize_descriptor(text: str) -> str:
    """Case-insensitive dedup key for a descriptor."""
    return (text or "").strip().lower()


class Descriptor(Base):
    """One normalized flavor/aroma/texture term attributed to a source."""

    __tablename__ = "flavor_descriptors"
    __table_args__ = (
        UniqueConstraint(
            "user_id",
            "normalized_form",
            "descriptor_type",
            name="uq_flavor_descriptors_user_normalized_type",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(64), nullable=False, index=True)
    source_type = Column(
        Enum(SourceType, native_enum=False, length=32, values_callable=enum_values),
        nullable=False,
    )
    source_id = Column(String(64), nullable=False, index=True)
    descriptor_text = Column(Text, nullable=False)
    normalized_form = Column(Text, nullable=False, index=True)
    descriptor_type = Column(
        Enum(DescriptorType, native_enum=False, length=16, values_callable=enum_values),
        nullable=False,
    )
    category = Column(String(CATEGORY_MAX_LENGTH), nullable=True)
    subcategory = Column(String(CATEGORY_MAX_LENGTH), nullable=True)
    confidence_score = Column(Float, default=1.0, nullable=False)
    intensity = Column(Integer, nullable=True)
    item_name = Column(String(255), nullable=True, index=True)
    item_category = Column(String(100), nullable=True, index=True)
    ai_extracted = Column(Boolean, default=False, nullable=False)
    extraction_model = Column(String(100), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )
