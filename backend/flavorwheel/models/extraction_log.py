"""AI extraction log model."""
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text

from flavorwheel.database import Base, JSONType


class ExtractionLog(Base):
    """Append-only audit record of one AI extraction attempt."""

    __tablename__ = "ai_extraction_logs"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(64), nullable=True, index=True)
    tasting_id = Column(String(64), nullable=True, index=True)
    source_type = Column(String(32), nullable=True)
    input_text = Column(Text, nullable=False)
    input_category = Column(String(255), nullable=True)
    model_used = Column(String(100), nullable=True)
    prompt_version = Column(String(20), nullable=True)
    tokens_used = Column(Integer, nullable=True)
    processing_time_ms = Column(Integer, nullable=True)
    descriptors_extracted = Column(Integer, nullable=True)
    extraction_successful = Column(Boolean, default=True, nullable=False)
    error_message = Column(Text, nullable=True)
    raw_ai_response = Column(JSONType, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
