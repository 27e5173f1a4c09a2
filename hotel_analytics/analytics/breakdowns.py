"""Categorical breakdowns: by status, by room type, cancellations by month and
check-in seasonality."""

from collections import Counter, defaultdict
from collections.abc import Sequence
from datetime import timezone, tzinfo
from decimal import Decimal

from hotel_analytics.analytics.common import ZERO, local_day, percentage
from hotel_analytics.schemas.analytics import MonthlyCancellation, RoomTypeRevenue, SeasonalityProfile
from hotel_analytics.schemas.reservation import RESERVATION_STATUSES, Reservation, Room

UNASSIGNED_ROOM_TYPE = "unassigned"

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def compute_status_counts(reservations: Sequence[Reservation]) -> dict[str, int]:
    """Reservation count per status, including statuses with no reservations."""
    counts = Counter(r.status for r in reservations)
    return {status: counts.get(status, 0) for status in RESERVATION_STATUSES}


def compute_room_type_revenue(
    reservations: Sequence[Reservation],
    rooms: Sequence[Room],
) -> tuple[RoomTypeRevenue, ...]:
    """Revenue per room category, largest first.

    Reservations without a ``room_id``, or pointing at a room not in
    ``rooms``, are grouped under ``"unassigned"``.
    """
    room_types = {room.id: room.type for room in rooms}
    revenue: dict[str, Decimal] = defaultdict(lambda: ZERO)
    bookings: dict[str, int] = defaultdict(int)

    for reservation in reservations:
        room_type = room_types.get(reservation.room_id, UNASSIGNED_ROOM_TYPE)
        revenue[room_type] += reservation.total_amount
        bookings[room_type] += 1

    total = sum(revenue.values(), ZERO)
    ordered = sorted(revenue, key=lambda name: (-revenue[name], name))
    return tuple(
        RoomTypeRevenue(
            room_type=name,
            booking_count=bookings[name],
            revenue=revenue[name],
            share=percentage(revenue[name], total),
        )
        for name in ordered
    )


def compute_monthly_cancellations(
    reservations: Sequence[Reservation],
    tz: tzinfo = timezone.utc,
) -> tuple[MonthlyCancellation, ...]:
    """Cancellation rate per check-in month (``YYYY-MM``), oldest month first."""
    totals: Counter[str] = Counter()
    cancelled: Counter[str] = Counter()

    for reservation in reservations:
        month = local_day(reservation.check_in_date, tz).strftime("%Y-%m")
        totals[month] += 1
        if reservation.status == "cancelled":
            cancelled[month] += 1

    return tuple(
        MonthlyCancellation(
            month=month,
            total=totals[month],
            cancelled=cancelled[month],
            rate=percentage(cancelled[month], totals[month]),
        )
        for month in sorted(totals)
    )


def _peak(counts: dict[str, int]) -> str | None:
    """Key with the highest count; the earliest key wins ties. None when all are zero."""
    best = max(counts.values(), default=0)
    if best == 0:
        return None
    return next(name for name, count in counts.items() if count == best)


def compute_seasonality(
    reservations: Sequence[Reservation],
    tz: tzinfo = timezone.utc,
) -> SeasonalityProfile:
    """Check-ins per calendar month and per weekday, across all years.

    Both mappings list every month and weekday in calendar order, zero-filled.
    """
    by_month = dict.fromkeys(MONTH_NAMES, 0)
    by_weekday = dict.fromkeys(WEEKDAY_NAMES, 0)

    for reservation in reservations:
        day = local_day(reservation.check_in_date, tz)
        by_month[MONTH_NAMES[day.month - 1]] += 1
        by_weekday[WEEKDAY_NAMES[day.weekday()]] += 1

    return SeasonalityProfile(
        by_month=by_month,
        by_weekday=by_weekday,
        peak_month=_peak(by_month),
        peak_weekday=_peak(by_weekday),
    )
