"""Threshold rules that flag noteworthy conditions in an overview."""

from hotel_analytics.config import DEFAULT_THRESHOLDS, InsightThresholds
from hotel_analytics.schemas.analytics import Insight, Overview


def compute_insights(
    overview: Overview,
    thresholds: InsightThresholds = DEFAULT_THRESHOLDS,
) -> tuple[Insight, ...]:
    """Evaluate every rule against ``overview``; the order of the rules is stable.

    Comparisons are strict: a KPI exactly on its threshold does not fire.
    """
    insights: list[Insight] = []

    if overview.occupancy_rate < thresholds.low_occupancy_threshold:
        insights.append(
            Insight(
                kind="low-occupancy",
                message=(
                    f"Occupancy rate is {overview.occupancy_rate:.1f}%, "
                    f"below the {thresholds.low_occupancy_threshold:g}% threshold"
                ),
                severity="warning",
            )
        )

    if overview.cancellation_rate > thresholds.high_cancellation_threshold:
        insights.append(
            Insight(
                kind="high-cancellation",
                message=(
                    f"Cancellation rate is {overview.cancellation_rate:.1f}%, "
                    f"above the {thresholds.high_cancellation_threshold:g}% threshold"
                ),
                severity="warning",
            )
        )

    if overview.repeat_guest_rate > thresholds.loyalty_threshold:
        insights.append(
            Insight(
                kind="strong-loyalty",
                message=f"{overview.repeat_guest_rate:.1f}% of guests are repeat visitors",
                severity="info",
            )
        )

    return tuple(insights)
