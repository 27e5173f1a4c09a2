"""Pure, synchronous analytics over reservation and room records."""

from hotel_analytics.analytics.aggregator import MetricsAggregator
from hotel_analytics.analytics.breakdowns import (
    compute_monthly_cancellations,
    compute_room_type_revenue,
    compute_seasonality,
    compute_status_counts,
)
from hotel_analytics.analytics.cache import SnapshotCache
from hotel_analytics.analytics.insights import compute_insights
from hotel_analytics.analytics.overview import compute_overview
from hotel_analytics.analytics.performance import compute_performance
from hotel_analytics.analytics.segments import compute_segment_breakdown
from hotel_analytics.analytics.trends import (
    compute_daily_trend,
    compute_occupancy_profile,
    compute_period_comparison,
)

__all__ = [
    "MetricsAggregator",
    "SnapshotCache",
    "compute_daily_trend",
    "compute_insights",
    "compute_monthly_cancellations",
    "compute_occupancy_profile",
    "compute_overview",
    "compute_performance",
    "compute_period_comparison",
    "compute_room_type_revenue",
    "compute_seasonality",
    "compute_segment_breakdown",
    "compute_status_counts",
]
