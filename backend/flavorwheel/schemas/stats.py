"""Extraction statistics schemas."""
from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field

StatsPeriod = Literal["1d", "7d", "30d"]


class DailyExtractionStats(BaseModel):
    """Attempts and outcomes for one calendar day."""

    day: date
    attempts: int
    successful: int
    tokens_used: int
    descriptors_extracted: int


class ExtractionStats(BaseModel):
    """Summary of AI extraction attempts over a period."""

    period: StatsPeriod
    since: datetime
    total_attempts: int = 0
    successful_attempts: int = 0
    failed_attempts: int = 0
    success_rate: float = 0.0
    total_tokens: int = 0
    avg_processing_time_ms: float | None = None
    total_descriptors: int = 0
    avg_descriptors_per_extraction: float | None = None
    daily: list[DailyExtractionStats] = Field(default_factory=list)
