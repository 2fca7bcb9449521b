"""Extraction statistics API router."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from flavorwheel.database import get_db
from flavorwheel.schemas.stats import ExtractionStats, StatsPeriod
from flavorwheel.services.extraction_stats import extraction_stats

router = APIRouter()


@router.get("/admin/extraction-stats", response_model=ExtractionStats)
def get_extraction_stats(period: StatsPeriod = "7d", db: Session = Depends(get_db)):
    """Summarize AI extraction attempts over the last day, week or month."""
    return extraction_stats(db, period)
