"""Analytics API router — snapshots, overview KPIs, trends, segments and insights.

Handlers are plain functions: the work is CPU-bound, so FastAPI runs them in
its threadpool instead of on the event loop.
"""

from __future__ import annotations

import hashlib
import json
import logging
from collections.abc import Callable
from dataclasses import asdict
from typing import TypeVar

from fastapi import APIRouter, Depends, HTTPException

from hotel_analytics.analytics.aggregator import MetricsAggregator
from hotel_analytics.analytics.cache import SnapshotCache
from hotel_analytics.api.deps import get_aggregator, get_snapshot_cache
from hotel_analytics.exceptions import InvalidInputError
from hotel_analytics.schemas.analytics import (
    AnalyticsWindow,
    DailyBucket,
    Insight,
    MetricsSnapshot,
    OccupancyProfile,
    Overview,
    SeasonalityProfile,
    SegmentBreakdown,
    SnapshotRequest,
)
from hotel_analytics.schemas.reservation import Reservation

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/analytics", tags=["analytics"])

T = TypeVar("T")


def _reservations(body: SnapshotRequest) -> list[Reservation]:
    """Apply the caller-side cancelled filter."""
    if body.exclude_cancelled:
        return [r for r in body.reservations if r.status != "cancelled"]
    return list(body.reservations)


def _run(operation: Callable[[], T]) -> T:
    """Translate analytics input errors into 422 responses."""
    try:
        return operation()
    except InvalidInputError as exc:
        raise HTTPException(
            status_code=422,
            detail=str(exc),
        ) from exc


def snapshot_cache_key(body: SnapshotRequest, window: AnalyticsWindow, aggregator: MetricsAggregator) -> str:
    """Digest of everything that determines a snapshot's content.

    ``window`` must already be resolved so that a request without a reference
    date is not served yesterday's snapshot after midnight.
    """
    payload = {
        "request": json.loads(body.model_dump_json(exclude={"window"})),
        "window": json.loads(window.model_dump_json()),
        "timezone": aggregator.timezone_name,
        "room_count_fallback": aggregator.room_count_fallback,
        "strict": aggregator.strict if body.strict is None else body.strict,
        "thresholds": asdict(aggregator.thresholds),
    }
    encoded = json.dumps(payload, sort_keys=True).encode("utf-8")
    return hashlib.sha256(encoded).hexdigest()


@router.post("/snapshot", response_model=MetricsSnapshot)
def create_snapshot(
    body: SnapshotRequest,
    aggregator: MetricsAggregator = Depends(get_aggregator),
    cache: SnapshotCache = Depends(get_snapshot_cache),
) -> MetricsSnapshot:
    """Compute (or reuse) the full analytics snapshot for the posted records."""
    window = aggregator.resolve_window(body.window)
    key = snapshot_cache_key(body, window, aggregator)
    cached = cache.get(key)
    if cached is not None:
        return cached

    snapshot = _run(
        lambda: aggregator.snapshot(
            _reservations(body),
            body.rooms,
            window,
            thresholds=body.thresholds,
            strict=body.strict,
        )
    )
    cache.set(key, snapshot)
    logger.info(
        "Computed analytics snapshot: %d reservations, %d-day window ending %s",
        snapshot.overview.total_bookings,
        snapshot.window.days,
        snapshot.window.reference_date,
    )
    return snapshot


@router.post("/overview", response_model=Overview)
def get_overview(
    body: SnapshotRequest,
    aggregator: MetricsAggregator = Depends(get_aggregator),
) -> Overview:
    """Overview KPIs only."""
    return _run(
        lambda: aggregator.compute_overview(_reservations(body), body.rooms, body.window, strict=body.strict)
    )


@router.post("/daily-trend", response_model=list[DailyBucket])
def get_daily_trend(
    body: SnapshotRequest,
    aggregator: MetricsAggregator = Depends(get_aggregator),
) -> list[DailyBucket]:
    """One bucket per day of the requested window, oldest first."""
    return list(
        _run(lambda: aggregator.compute_daily_trend(_reservations(body), body.window, strict=body.strict))
    )


@router.post("/segments", response_model=SegmentBreakdown)
def get_segments(
    body: SnapshotRequest,
    aggregator: MetricsAggregator = Depends(get_aggregator),
) -> SegmentBreakdown:
    """Value-based and purpose-based segment statistics."""
    return _run(lambda: aggregator.compute_segment_breakdown(_reservations(body), strict=body.strict))


@router.post("/insights", response_model=list[Insight])
def get_insights(
    body: SnapshotRequest,
    aggregator: MetricsAggregator = Depends(get_aggregator),
) -> list[Insight]:
    """Threshold flags derived from the overview KPIs."""
    overview = _run(
        lambda: aggregator.compute_overview(_reservations(body), body.rooms, body.window, strict=body.strict)
    )
    return list(aggregator.compute_insights(overview, body.thresholds))


@router.post("/occupancy", response_model=OccupancyProfile)
def get_occupancy(
    body: SnapshotRequest,
    aggregator: MetricsAggregator = Depends(get_aggregator),
) -> OccupancyProfile:
    """Rooms occupied on each night of the window."""
    return _run(lambda: aggregator.compute_occupancy_profile(_reservations(body), body.rooms, body.window))


@router.post("/seasonality", response_model=SeasonalityProfile)
def get_seasonality(
    body: SnapshotRequest,
    aggregator: MetricsAggregator = Depends(get_aggregator),
) -> SeasonalityProfile:
    """Check-ins by month and by weekday."""
    return aggregator.compute_seasonality(_reservations(body))
