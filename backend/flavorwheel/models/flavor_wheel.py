"""Cached flavor wheel model."""
from datetime import datetime
import enum

from sqlalchemy import Column, DateTime, Enum, Integer, String, Text, UniqueConstraint

from flavorwheel.database import Base, JSONType, enum_values


class WheelType(str, enum.Enum):
    """Which descriptor types a wheel aggregates."""

    AROMA = "aroma"
    FLAVOR = "flavor"
    COMBINED = "combined"
    METAPHOR = "metaphor"


class ScopeType(str, enum.Enum):
    """Filter dimension a wheel is aggregated over."""

    PERSONAL = "personal"
    UNIVERSAL = "universal"
    ITEM = "item"
    CATEGORY = "category"
    TASTING = "tasting"


class FlavorWheel(Base):
    """Precomputed wheel artifact for one (wheel type, scope) key."""

    __tablename__ = "flavor_wheels"
    __table_args__ = (
        UniqueConstraint(
            "wheel_type", "scope_type", "scope_key", name="uq_flavor_wheels_cache_key"
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    wheel_type = Column(
        Enum(WheelType, native_enum=False, length=16, values_callable=enum_values),
        nullable=False,
    )
    scope_type = Column(
        Enum(ScopeType, native_enum=False, length=16, values_callable=enum_values),
        nullable=False,
    )
    # Canonical JSON of the scope filter fields relevant to scope_type
    scope_key = Column(Text, nullable=False)
    scope_filter = Column(JSONType, nullable=True)
    user_id = Column(String(64), nullable=True, index=True)

    # WheelData serialized with model_dump(mode="json")
    wheel_data = Column(JSONType, nullable=False)
    descriptor_count = Column(Integer, default=0, nullable=False)
    generated_at = Column(DateTime, default=datetime.utcnow, nullable=False)
