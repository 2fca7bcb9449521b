"""Summary statistics over AI extraction logs."""
from collections import OrderedDict
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from flavorwheel.models.extraction_log import ExtractionLog
from flavorwheel.schemas.stats import DailyExtractionStats, ExtractionStats

PERIOD_DAYS = {"1d": 1, "7d": 7, "30d": 30}


def extraction_stats(db: Session, period: str = "7d", now: Optional[datetime] = None) -> ExtractionStats:
    """Summarize extraction attempts logged within ``period``.

    Args:
        db: Database session
        period: One of "1d", "7d", "30d"
        now: Reference time (defaults to the current UTC time)

    Returns:
        ExtractionStats with totals and a per-day breakdown, oldest day first
    """
    if period not in PERIOD_DAYS:
        raise ValueError(f"Unknown period: {period}")

    since = (now or datetime.utcnow()) - timedelta(days=PERIOD_DAYS[period])
    logs = (
        db.query(ExtractionLog)
        .filter(ExtractionLog.created_at >= since)
        .order_by(ExtractionLog.created_at)
        .all()
    )

    stats = ExtractionStats(period=period, since=since)
    if not logs:
        return stats

    successful = [log for log in logs if log.extraction_successful]
    timings = [log.processing_time_ms for log in logs if log.processing_time_ms is not None]

    stats.total_attempts = len(logs)
    stats.successful_attempts = len(successful)
    stats.failed_attempts = len(logs) - len(successful)
    stats.success_rate = round(len(successful) / len(logs), 3)
    stats.total_tokens = sum(log.tokens_used or 0 for log in logs)
    stats.avg_processing_time_ms = round(sum(timings) / len(timings), 1) if timings else None
    stats.total_descriptors = sum(log.descriptors_extracted or 0 for log in successful)
    if successful:
        stats.avg_descriptors_per_extraction = round(stats.total_descriptors / len(successful), 2)

    days: "OrderedDict[object, DailyExtractionStats]" = OrderedDict()
    for log in logs:
        day = log.created_at.date()
        bucket = days.get(day)
        if bucket is None:
            bucket = days[day] = DailyExtractionStats(
                day=day, attempts=0, successful=0, tokens_used=0, descriptors_extracted=0
            )
        bucket.attempts += 1
        bucket.tokens_used += log.tokens_used or 0
        if log.extraction_successful:
            bucket.successful += 1
            bucket.descriptors_extracted += log.descriptors_extracted or 0
    stats.daily = list(days.values())
    return stats
