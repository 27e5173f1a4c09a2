"""Pydantic v2 schemas for analytics requests and snapshots.

Every output model is frozen: a snapshot is computed fresh from its inputs
and never mutated afterwards.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from hotel_analytics.config import MAX_WINDOW_DAYS, InsightThresholds
from hotel_analytics.schemas.reservation import Reservation, Room

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class AnalyticsWindow(BaseModel):
    """The trailing window a snapshot covers.

    ``reference_date`` is the last day of the window (inclusive) and defaults
    to today in the aggregator's timezone; ``days`` is capped at
    ``MAX_WINDOW_DAYS``. ``room_count_fallback`` replaces
    the aggregator default when the room list is empty.
    """

    days: int = Field(30, ge=1, le=MAX_WINDOW_DAYS)
    reference_date: date | None = None
    room_count_fallback: int | None = Field(None, ge=1)


class SnapshotRequest(BaseModel):
    """Body accepted by the analytics endpoints."""

    reservations: list[Reservation] = Field(default_factory=list)
    rooms: list[Room] = Field(default_factory=list)
    window: AnalyticsWindow | None = None  # None -> configured default length
    thresholds: InsightThresholds | None = None
    strict: bool | None = None  # None -> configured default
    exclude_cancelled: bool = False


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class Overview(BaseModel):
    """Aggregate KPIs over the full reservation set."""

    total_revenue: Decimal
    total_bookings: int
    average_booking_value: Decimal
    occupancy_rate: Decimal  # percentage 0-100
    average_stay_nights: Decimal
    cancellation_rate: Decimal  # percentage 0-100
    repeat_guest_rate: Decimal  # percentage 0-100
    total_guests: int

    model_config = ConfigDict(frozen=True)


class DailyBucket(BaseModel):
    """Check-in activity for one calendar day."""

    date: date
    revenue: Decimal
    booking_count: int
    guest_count: int
    average_value: Decimal

    model_config = ConfigDict(frozen=True)


class SegmentStats(BaseModel):
    count: int
    total_revenue: Decimal
    average_spend: Decimal

    model_config = ConfigDict(frozen=True)


class SegmentBreakdown(BaseModel):
    """Two independent classifications of the same reservations.

    ``by_value`` holds ``high_value``/``regular``/``budget`` and
    ``by_purpose`` holds ``leisure``/``business``; each reservation is
    counted once in each mapping.
    """

    by_value: dict[str, SegmentStats]
    by_purpose: dict[str, SegmentStats]

    model_config = ConfigDict(frozen=True)


class Insight(BaseModel):
    kind: Literal["low-occupancy", "high-cancellation", "strong-loyalty"]
    message: str
    severity: Literal["info", "warning"]

    model_config = ConfigDict(frozen=True)


class PerformanceMetrics(BaseModel):
    """Revenue-management KPIs (RevPAR, ADR, lead time)."""

    revpar: Decimal
    adr: Decimal
    total_nights: int
    total_guests: int
    average_lead_time_days: Decimal

    model_config = ConfigDict(frozen=True)


class RoomTypeRevenue(BaseModel):
    room_type: str
    booking_count: int
    revenue: Decimal
    share: Decimal  # percentage of total revenue

    model_config = ConfigDict(frozen=True)


class MonthlyCancellation(BaseModel):
    month: str  # YYYY-MM of check-in
    total: int
    cancelled: int
    rate: Decimal

    model_config = ConfigDict(frozen=True)


class PeriodComparison(BaseModel):
    """Current window against the equally long window right before it."""

    current_bookings: int
    previous_bookings: int
    booking_change: Decimal  # percentage
    current_revenue: Decimal
    previous_revenue: Decimal
    revenue_change: Decimal  # percentage

    model_config = ConfigDict(frozen=True)


class DailyOccupancy(BaseModel):
    date: date
    occupied_rooms: int
    available_rooms: int
    occupancy_rate: Decimal  # percentage 0-100

    model_config = ConfigDict(frozen=True)


class OccupancyProfile(BaseModel):
    """Night-by-night room occupancy over the window."""

    days: tuple[DailyOccupancy, ...]
    current: Decimal  # rate on the reference date
    average: Decimal
    maximum: Decimal
    minimum: Decimal
    weekday_average: Decimal
    weekend_average: Decimal

    model_config = ConfigDict(frozen=True)


class SeasonalityProfile(BaseModel):
    """Check-in counts by calendar month and by weekday, zero-filled."""

    by_month: dict[str, int]
    by_weekday: dict[str, int]
    peak_month: str | None
    peak_weekday: str | None

    model_config = ConfigDict(frozen=True)


class ResolvedWindow(BaseModel):
    days: int
    start_date: date
    reference_date: date
    timezone: str

    model_config = ConfigDict(frozen=True)


class MetricsSnapshot(BaseModel):
    """Everything the dashboard renders, computed in one pass."""

    computed_at: datetime
    window: ResolvedWindow
    room_count: int
    room_count_fallback_used: bool
    overview: Overview
    daily_trend: tuple[DailyBucket, ...]
    segment_breakdown: SegmentBreakdown
    insights: tuple[Insight, ...]
    performance: PerformanceMetrics
    status_counts: dict[str, int]
    room_type_revenue: tuple[RoomTypeRevenue, ...]
    monthly_cancellations: tuple[MonthlyCancellation, ...]
    period_comparison: PeriodComparison
    occupancy_profile: OccupancyProfile
    seasonality: SeasonalityProfile

    model_config = ConfigDict(frozen=True)
