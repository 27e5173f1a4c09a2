"""Pydantic schemas for Hotel Analytics."""

from hotel_analytics.schemas.analytics import (
    MAX_WINDOW_DAYS,
    AnalyticsWindow,
    DailyBucket,
    DailyOccupancy,
    Insight,
    MetricsSnapshot,
    MonthlyCancellation,
    OccupancyProfile,
    Overview,
    PerformanceMetrics,
    PeriodComparison,
    ResolvedWindow,
    RoomTypeRevenue,
    SeasonalityProfile,
    SegmentBreakdown,
    SegmentStats,
    SnapshotRequest,
)
from hotel_analytics.schemas.reservation import RESERVATION_STATUSES, Reservation, ReservationStatus, Room

__all__ = [
    "MAX_WINDOW_DAYS",
    "AnalyticsWindow",
    "DailyBucket",
    "DailyOccupancy",
    "Insight",
    "MetricsSnapshot",
    "MonthlyCancellation",
    "OccupancyProfile",
    "Overview",
    "PerformanceMetrics",
    "PeriodComparison",
    "RESERVATION_STATUSES",
    "Reservation",
    "ReservationStatus",
    "ResolvedWindow",
    "Room",
    "RoomTypeRevenue",
    "SeasonalityProfile",
    "SegmentBreakdown",
    "SegmentStats",
    "SnapshotRequest",
]
