"""MetricsAggregator: turns reservation and room records into a MetricsSnapshot.

The aggregator holds configuration only. Every call works on the collections
it is given and returns new objects, so one instance may be shared between
threads or tasks as long as callers do not mutate the inputs mid-call.
"""

import logging
from collections.abc import Callable, Sequence
from datetime import date, datetime, timezone

from hotel_analytics.analytics.breakdowns import (
    compute_monthly_cancellations,
    compute_room_type_revenue,
    compute_seasonality,
    compute_status_counts,
)
from hotel_analytics.analytics.common import check_stays, resolve_timezone, window_start
from hotel_analytics.analytics.insights import compute_insights
from hotel_analytics.analytics.overview import compute_overview
from hotel_analytics.analytics.performance import compute_performance
from hotel_analytics.analytics.segments import compute_segment_breakdown
from hotel_analytics.analytics.trends import (
    compute_daily_trend,
    compute_occupancy_profile,
    compute_period_comparison,
)
from hotel_analytics.config import DEFAULT_THRESHOLDS, MAX_WINDOW_DAYS, InsightThresholds, Settings, settings
from hotel_analytics.exceptions import InvalidInputError
from hotel_analytics.schemas.analytics import (
    AnalyticsWindow,
    DailyBucket,
    Insight,
    MetricsSnapshot,
    OccupancyProfile,
    Overview,
    ResolvedWindow,
    SeasonalityProfile,
    SegmentBreakdown,
)
from hotel_analytics.schemas.reservation import Reservation, Room

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class MetricsAggregator:
    """Computes analytics snapshots with a fixed timezone, fallback and thresholds.

    Args:
        timezone_name: IANA zone used for day boundaries. Defaults to UTC.
        room_count_fallback: Room count assumed when the room list is empty.
        window_days: Window length used when a call passes no window.
        strict: Raise ``InvalidInputError`` for stays whose check-out is not
            after check-in instead of counting them as one night.
        thresholds: Insight thresholds.
        clock: Returns the current aware datetime; used for ``computed_at``
            and for the default reference date.
    """

    def __init__(
        self,
        *,
        timezone_name: str = "UTC",
        room_count_fallback: int = 30,
        window_days: int = 30,
        strict: bool = False,
        thresholds: InsightThresholds = DEFAULT_THRESHOLDS,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        if room_count_fallback <= 0:
            raise InvalidInputError(f"room_count_fallback must be positive, got {room_count_fallback}")
        if not 1 <= window_days <= MAX_WINDOW_DAYS:
            raise InvalidInputError(f"window_days must be between 1 and {MAX_WINDOW_DAYS}, got {window_days}")
        self.timezone_name = timezone_name
        self.tz = resolve_timezone(timezone_name)
        self.room_count_fallback = room_count_fallback
        self.window_days = window_days
        self.strict = strict
        self.thresholds = thresholds
        self.clock = clock

    @classmethod
    def from_settings(cls, config: Settings | None = None, **overrides) -> "MetricsAggregator":
        """Build an aggregator from application settings; keyword overrides win."""
        config = config or settings
        options = {
            "timezone_name": config.analytics_timezone,
            "room_count_fallback": config.analytics_room_count_fallback,
            "window_days": config.analytics_window_days,
            "strict": config.analytics_strict_validation,
            "thresholds": InsightThresholds.from_settings(config),
        }
        options.update(overrides)
        return cls(**options)

    # ------------------------------------------------------------------
    # Window helpers
    # ------------------------------------------------------------------

    def room_count(self, rooms: Sequence[Room], fallback: int | None = None) -> tuple[int, bool]:
        """Return ``(room_count, fallback_used)``."""
        if rooms:
            return len(rooms), False
        count = fallback or self.room_count_fallback
        logger.info("No rooms supplied; assuming %d rooms for occupancy and RevPAR", count)
        return count, True

    def resolve_window(self, window: AnalyticsWindow | None = None) -> AnalyticsWindow:
        """Fill in the default length and pin the reference date."""
        window = window or AnalyticsWindow(days=self.window_days)
        return window.model_copy(update={"reference_date": self.reference_date(window)})

    def reference_date(self, window: AnalyticsWindow | None = None) -> date:
        if window is not None and window.reference_date is not None:
            return window.reference_date
        return self.clock().astimezone(self.tz).date()

    def _check(self, reservations: Sequence[Reservation], strict: bool | None) -> None:
        check_stays(reservations, strict=self.strict if strict is None else strict)

    # ------------------------------------------------------------------
    # Individual operations
    # ------------------------------------------------------------------

    def compute_overview(
        self,
        reservations: Sequence[Reservation],
        rooms: Sequence[Room] = (),
        window: AnalyticsWindow | None = None,
        *,
        strict: bool | None = None,
    ) -> Overview:
        window = self.resolve_window(window)
        room_count, _ = self.room_count(rooms, window.room_count_fallback)
        return compute_overview(
            list(reservations),
            room_count=room_count,
            window_days=window.days,
            strict=self.strict if strict is None else strict,
        )

    def compute_daily_trend(
        self,
        reservations: Sequence[Reservation],
        window: AnalyticsWindow | None = None,
        *,
        strict: bool | None = None,
    ) -> tuple[DailyBucket, ...]:
        reservations = list(reservations)
        self._check(reservations, strict)
        window = self.resolve_window(window)
        return compute_daily_trend(reservations, window.days, window.reference_date, self.tz)

    def compute_segment_breakdown(
        self,
        reservations: Sequence[Reservation],
        *,
        strict: bool | None = None,
    ) -> SegmentBreakdown:
        reservations = list(reservations)
        self._check(reservations, strict)
        return compute_segment_breakdown(reservations, self.tz)

    def compute_insights(
        self,
        overview: Overview,
        thresholds: InsightThresholds | None = None,
    ) -> tuple[Insight, ...]:
        return compute_insights(overview, thresholds or self.thresholds)

    def compute_occupancy_profile(
        self,
        reservations: Sequence[Reservation],
        rooms: Sequence[Room] = (),
        window: AnalyticsWindow | None = None,
    ) -> OccupancyProfile:
        window = self.resolve_window(window)
        room_count, _ = self.room_count(rooms, window.room_count_fallback)
        return compute_occupancy_profile(
            list(reservations), room_count, window.days, window.reference_date, self.tz
        )

    def compute_seasonality(self, reservations: Sequence[Reservation]) -> SeasonalityProfile:
        return compute_seasonality(list(reservations), self.tz)

    # ------------------------------------------------------------------
    # Full snapshot
    # ------------------------------------------------------------------

    def snapshot(
        self,
        reservations: Sequence[Reservation],
        rooms: Sequence[Room] = (),
        window: AnalyticsWindow | None = None,
        *,
        thresholds: InsightThresholds | None = None,
        strict: bool | None = None,
    ) -> MetricsSnapshot:
        """Compute every view over the same inputs.

        Raises:
            InvalidInputError: In strict mode, for a stay whose check-out is
                not after its check-in; or when the window would start before
                the first representable calendar day.
        """
        reservations = list(reservations)
        rooms = list(rooms)
        window = self.resolve_window(window)
        reference = window.reference_date
        start = window_start(window.days, reference)
        room_count, fallback_used = self.room_count(rooms, window.room_count_fallback)

        overview = compute_overview(
            reservations,
            room_count=room_count,
            window_days=window.days,
            strict=self.strict if strict is None else strict,
        )

        snapshot = MetricsSnapshot(
            computed_at=self.clock(),
            window=ResolvedWindow(
                days=window.days,
                start_date=start,
                reference_date=reference,
                timezone=self.timezone_name,
            ),
            room_count=room_count,
            room_count_fallback_used=fallback_used,
            overview=overview,
            daily_trend=compute_daily_trend(reservations, window.days, reference, self.tz),
            segment_breakdown=compute_segment_breakdown(reservations, self.tz),
            insights=compute_insights(overview, thresholds or self.thresholds),
            performance=compute_performance(reservations, room_count=room_count, window_days=window.days),
            status_counts=compute_status_counts(reservations),
            room_type_revenue=compute_room_type_revenue(reservations, rooms),
            monthly_cancellations=compute_monthly_cancellations(reservations, self.tz),
            period_comparison=compute_period_comparison(reservations, window.days, reference, self.tz),
            occupancy_profile=compute_occupancy_profile(
                reservations, room_count, window.days, reference, self.tz
            ),
            seasonality=compute_seasonality(reservations, self.tz),
        )
        logger.debug(
            "Computed snapshot over %d reservations and %d rooms (%d-day window ending %s)",
            len(reservations),
            len(rooms),
            window.days,
            reference,
        )
        return snapshot
