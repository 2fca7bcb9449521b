"""Category taxonomy model."""
from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String

from flavorwheel.database import Base, JSONType


class CategoryTaxonomy(Base):
    """Cached flavor vocabulary for a free-text category name."""

    __tablename__ = "category_taxonomies"

    id = Column(Integer, primary_key=True, index=True)
    category_name = Column(String(255), nullable=False)
    normalized_name = Column(String(255), nullable=False, unique=True, index=True)

    # TaxonomyPayload serialized with model_dump(mode="json")
    taxonomy_data = Column(JSONType, nullable=False)

    usage_count = Column(Integer, default=1, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )
