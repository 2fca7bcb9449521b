"""Tests for extraction log statistics."""
from datetime import datetime, timedelta

import pytest

from flavorwheel.models import ExtractionLog
from flavorwheel.services.extraction_stats import extraction_stats

NOW = datetime(2024, 5, 10, 12, 0, 0)


def log(db, created_at, successful=True, tokens=100, descriptors=4, ms=800):
    db.add(ExtractionLog(
        user_id="u1",
        input_text="honey",
        model_used="claude-3-haiku-20240307",
        tokens_used=tokens,
        processing_time_ms=ms,
        descriptors_extracted=descriptors if successful else 0,
        extraction_successful=successful,
        error_message=None if successful else "timed out",
        created_at=created_at,
    ))
    db.commit()


def test_empty_period(db):
    stats = extraction_stats(db, "7d", now=NOW)

    assert stats.total_attempts == 0
    assert stats.success_rate == 0.0
    assert stats.since == NOW - timedelta(days=7)


def test_summary_and_daily_buckets(db):
    log(db, NOW - timedelta(days=2), tokens=100, descriptors=4, ms=1000)
    log(db, NOW - timedelta(days=2, hours=1), tokens=200, descriptors=6, ms=500)
    log(db, NOW - timedelta(days=1), successful=False, tokens=0, ms=None)
    log(db, NOW - timedelta(days=10))

    stats = extraction_stats(db, "7d", now=NOW)

    assert stats.total_attempts == 3
    assert stats.successful_attempts == 2
    assert stats.failed_attempts == 1
    assert stats.success_rate == pytest.approx(0.667)
    assert stats.total_tokens == 300
    assert stats.avg_processing_time_ms == 750.0
    assert stats.total_descriptors == 10
    assert stats.avg_descriptors_per_extraction == 5.0
    assert [bucket.attempts for bucket in stats.daily] == [2, 1]
    assert stats.daily[0].descriptors_extracted == 10
    assert stats.daily[1].successful == 0


def test_period_limits_window(db):
    log(db, NOW - timedelta(days=2))

    assert extraction_stats(db, "1d", now=NOW).total_attempts == 0
    assert extraction_stats(db, "30d", now=NOW).total_attempts == 1


def test_unknown_period(db):
    with pytest.raises(ValueError):
        extraction_stats(db, "90d", now=NOW)
