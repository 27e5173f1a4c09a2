"""Time-series views: the per-day trend, the occupancy profile and the
period-over-period comparison."""

from collections import defaultdict
from collections.abc import Sequence
from datetime import date, timezone, tzinfo
from decimal import Decimal

from hotel_analytics.analytics.common import (
    ONE_DAY,
    ZERO,
    local_day,
    percent_change,
    percentage,
    ratio,
    window_days,
    window_start,
)
from hotel_analytics.schemas.analytics import DailyBucket, DailyOccupancy, OccupancyProfile, PeriodComparison
from hotel_analytics.schemas.reservation import Reservation

_HUNDRED = Decimal("100")
WEEKEND_DAYS = (5, 6)  # Saturday, Sunday


def compute_daily_trend(
    reservations: Sequence[Reservation],
    days: int,
    reference_date: date,
    tz: tzinfo = timezone.utc,
) -> tuple[DailyBucket, ...]:
    """One bucket per calendar day of the window, oldest first.

    Reservations are bucketed by check-in day in ``tz``; check-ins outside
    the window are ignored and days without check-ins are zero-filled, so the
    result always holds exactly ``days`` buckets.
    """
    calendar = window_days(days, reference_date)
    revenue: dict[date, Decimal] = defaultdict(lambda: ZERO)
    bookings: dict[date, int] = defaultdict(int)
    guests: dict[date, int] = defaultdict(int)

    for reservation in reservations:
        day = local_day(reservation.check_in_date, tz)
        revenue[day] += reservation.total_amount
        bookings[day] += 1
        guests[day] += reservation.party_size

    return tuple(
        DailyBucket(
            date=day,
            revenue=revenue.get(day, ZERO),
            booking_count=bookings.get(day, 0),
            guest_count=guests.get(day, 0),
            average_value=ratio(revenue.get(day, ZERO), bookings.get(day, 0)),
        )
        for day in calendar
    )


def _occupies(check_in: date, check_out: date, day: date) -> bool:
    # A stay that does not move forward still holds its room on the check-in day.
    return day == check_in or check_in <= day < check_out


def _mean(values: Sequence[Decimal]) -> Decimal:
    return ratio(sum(values, ZERO), len(values))


def compute_occupancy_profile(
    reservations: Sequence[Reservation],
    room_count: int,
    days: int,
    reference_date: date,
    tz: tzinfo = timezone.utc,
) -> OccupancyProfile:
    """Rooms held on each night of the window, with summary statistics.

    A room counts as occupied on day ``d`` when ``check_in <= d < check_out``
    (local days in ``tz``). Cancelled reservations hold no room. Daily rates
    are capped at 100 when more stays overlap than there are rooms.
    """
    calendar = window_days(days, reference_date)
    stays = [
        (local_day(r.check_in_date, tz), local_day(r.check_out_date, tz))
        for r in reservations
        if r.status != "cancelled"
    ]

    daily = []
    for day in calendar:
        occupied = sum(1 for check_in, check_out in stays if _occupies(check_in, check_out, day))
        daily.append(
            DailyOccupancy(
                date=day,
                occupied_rooms=occupied,
                available_rooms=max(room_count - occupied, 0),
                occupancy_rate=min(percentage(occupied, room_count), _HUNDRED),
            )
        )

    rates = [entry.occupancy_rate for entry in daily]
    weekday_rates = [e.occupancy_rate for e in daily if e.date.weekday() not in WEEKEND_DAYS]
    weekend_rates = [e.occupancy_rate for e in daily if e.date.weekday() in WEEKEND_DAYS]

    return OccupancyProfile(
        days=tuple(daily),
        current=rates[-1] if rates else ZERO,
        average=_mean(rates),
        maximum=max(rates, default=ZERO),
        minimum=min(rates, default=ZERO),
        weekday_average=_mean(weekday_rates),
        weekend_average=_mean(weekend_rates),
    )


def _window_totals(
    reservations: Sequence[Reservation],
    start: date,
    end: date,
    tz: tzinfo,
) -> tuple[int, Decimal]:
    """Booking count and revenue for check-ins within [start, end]."""
    count = 0
    revenue = ZERO
    for reservation in reservations:
        if start <= local_day(reservation.check_in_date, tz) <= end:
            count += 1
            revenue += reservation.total_amount
    return count, revenue


def compute_period_comparison(
    reservations: Sequence[Reservation],
    days: int,
    reference_date: date,
    tz: tzinfo = timezone.utc,
) -> PeriodComparison:
    """Compare the trend window with the equally long window before it."""
    current_start = window_start(days, reference_date)
    previous_start = window_start(2 * days, reference_date)
    previous_end = current_start - ONE_DAY

    current_count, current_revenue = _window_totals(reservations, current_start, reference_date, tz)
    previous_count, previous_revenue = _window_totals(reservations, previous_start, previous_end, tz)

    return PeriodComparison(
        current_bookings=current_count,
        previous_bookings=previous_count,
        booking_change=percent_change(current_count, previous_count),
        current_revenue=current_revenue,
        previous_revenue=previous_revenue,
        revenue_change=percent_change(current_revenue, previous_revenue),
    )
