"""Revenue-management KPIs: RevPAR, ADR and booking lead time."""

from collections.abc import Sequence

from hotel_analytics.analytics.common import ZERO, lead_time_days, ratio, stay_nights
from hotel_analytics.schemas.analytics import PerformanceMetrics
from hotel_analytics.schemas.reservation import Reservation


def compute_performance(
    reservations: Sequence[Reservation],
    *,
    room_count: int,
    window_days: int,
) -> PerformanceMetrics:
    """RevPAR over the available room-nights of the window, ADR over nights sold.

    Lead time is averaged over reservations that carry ``created_at`` only;
    bookings recorded after check-in count as zero days.
    """
    total_revenue = sum((r.total_amount for r in reservations), ZERO)
    total_nights = sum(stay_nights(r) for r in reservations)
    lead_times = [days for days in map(lead_time_days, reservations) if days is not None]

    return PerformanceMetrics(
        revpar=ratio(total_revenue, room_count * window_days),
        adr=ratio(total_revenue, total_nights),
        total_nights=total_nights,
        total_guests=sum(r.party_size for r in reservations),
        average_lead_time_days=ratio(sum(lead_times), len(lead_times)),
    )
