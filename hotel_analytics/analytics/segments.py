"""Value-based and purpose-based guest segmentation."""

from collections.abc import Sequence
from datetime import timezone, tzinfo
from decimal import Decimal

from hotel_analytics.analytics.common import ZERO, local_day, ratio
from hotel_analytics.schemas.analytics import SegmentBreakdown, SegmentStats
from hotel_analytics.schemas.reservation import Reservation

VALUE_SEGMENTS = ("high_value", "regular", "budget")
PURPOSE_SEGMENTS = ("leisure", "business")

HIGH_VALUE_FACTOR = Decimal("1.5")
REGULAR_FACTOR = Decimal("0.8")
LEISURE_PARTY_SIZE = 2  # parties larger than this are treated as leisure

_SATURDAY, _SUNDAY = 5, 6


def value_segment(amount: Decimal, mean: Decimal) -> str:
    if amount > mean * HIGH_VALUE_FACTOR:
        return "high_value"
    if amount > mean * REGULAR_FACTOR:
        return "regular"
    return "budget"


def purpose_segment(reservation: Reservation, tz: tzinfo = timezone.utc) -> str:
    """Weekend check-ins and larger parties are leisure; the rest business."""
    weekend = local_day(reservation.check_in_date, tz).weekday() in (_SATURDAY, _SUNDAY)
    if weekend or reservation.party_size > LEISURE_PARTY_SIZE:
        return "leisure"
    return "business"


def _stats(amounts: list[Decimal]) -> SegmentStats:
    total = sum(amounts, ZERO)
    return SegmentStats(count=len(amounts), total_revenue=total, average_spend=ratio(total, len(amounts)))


def compute_segment_breakdown(
    reservations: Sequence[Reservation],
    tz: tzinfo = timezone.utc,
) -> SegmentBreakdown:
    """Classify every reservation once per axis.

    Value thresholds are relative to the mean ``total_amount`` of the input.
    All five segment names are always present, with zero stats when empty.
    """
    mean = ratio(sum((r.total_amount for r in reservations), ZERO), len(reservations))

    by_value: dict[str, list[Decimal]] = {name: [] for name in VALUE_SEGMENTS}
    by_purpose: dict[str, list[Decimal]] = {name: [] for name in PURPOSE_SEGMENTS}
    for reservation in reservations:
        by_value[value_segment(reservation.total_amount, mean)].append(reservation.total_amount)
        by_purpose[purpose_segment(reservation, tz)].append(reservation.total_amount)

    return SegmentBreakdown(
        by_value={name: _stats(amounts) for name, amounts in by_value.items()},
        by_purpose={name: _stats(amounts) for name, amounts in by_purpose.items()},
    )
