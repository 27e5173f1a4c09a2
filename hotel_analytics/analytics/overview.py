"""Overview KPIs: revenue, occupancy, stay length, cancellations, loyalty."""

from collections import Counter
from collections.abc import Sequence
from decimal import Decimal

from hotel_analytics.analytics.common import ZERO, check_stays, percentage, ratio, stay_nights
from hotel_analytics.schemas.analytics import Overview
from hotel_analytics.schemas.reservation import Reservation

_HUNDRED = Decimal("100")


def _repeat_guest_rate(reservations: Sequence[Reservation]) -> Decimal:
    """Share of keyed guests with more than one reservation."""
    bookings_per_guest = Counter(r.guest_key for r in reservations if r.guest_key)
    repeat_guests = sum(1 for count in bookings_per_guest.values() if count > 1)
    return percentage(repeat_guests, len(bookings_per_guest))


def compute_overview(
    reservations: Sequence[Reservation],
    *,
    room_count: int,
    window_days: int,
    strict: bool = False,
) -> Overview:
    """Aggregate KPIs over every reservation passed in.

    Cancelled reservations count towards revenue and nights; callers that
    want them excluded filter before calling. ``room_count`` must already
    include any fallback for an empty room list. Occupancy is clamped to
    0-100 and every ratio is zero on an empty denominator.

    Raises:
        InvalidInputError: In strict mode, for a stay whose check-out is not
            after its check-in.
    """
    check_stays(reservations, strict=strict)

    total_bookings = len(reservations)
    total_revenue = sum((r.total_amount for r in reservations), ZERO)
    nights = [stay_nights(r) for r in reservations]
    cancelled = sum(1 for r in reservations if r.status == "cancelled")

    occupancy = percentage(sum(nights), room_count * window_days)
    occupancy = min(max(occupancy, ZERO), _HUNDRED)

    return Overview(
        total_revenue=total_revenue,
        total_bookings=total_bookings,
        average_booking_value=ratio(total_revenue, total_bookings),
        occupancy_rate=occupancy,
        average_stay_nights=ratio(sum(nights), total_bookings),
        cancellation_rate=percentage(cancelled, total_bookings),
        repeat_guest_rate=_repeat_guest_rate(reservations),
        total_guests=sum(r.party_size for r in reservations),
    )
