"""Date, stay-length and ratio helpers shared by the analytics modules.

Day boundaries: a plain ``date`` is taken as-is; a ``datetime`` is converted
to the analytics timezone before truncation, and naive datetimes are assumed
to be UTC.
"""

import logging
import math
from collections.abc import Iterable
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from decimal import Decimal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from hotel_analytics.exceptions import InvalidInputError
from hotel_analytics.schemas.reservation import Reservation

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)
ZERO = Decimal("0")


def resolve_timezone(name: str) -> tzinfo:
    """Look up an IANA timezone, raising InvalidInputError for unknown names."""
    if name.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise InvalidInputError(f"Unknown timezone: {name!r}") from exc


def to_utc_datetime(value: date | datetime) -> datetime:
    """Normalise a date or datetime to an aware UTC datetime."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    return datetime.combine(value, time.min, tzinfo=timezone.utc)


def local_day(value: date | datetime, tz: tzinfo = timezone.utc) -> date:
    """Truncate a date or datetime to its calendar day in ``tz``."""
    if isinstance(value, datetime):
        return to_utc_datetime(value).astimezone(tz).date()
    return value


def stay_nights(reservation: Reservation) -> int:
    """Nights sold by a reservation: the day difference rounded up, at least 1."""
    check_in = to_utc_datetime(reservation.check_in_date)
    check_out = to_utc_datetime(reservation.check_out_date)
    if check_out <= check_in:
        return 1
    return max(1, math.ceil((check_out - check_in) / ONE_DAY))


def check_stays(reservations: Iterable[Reservation], *, strict: bool = False) -> None:
    """Reject (strict) or report (lenient) stays that do not move forward in time.

    In lenient mode such stays are counted as a single night by
    :func:`stay_nights`; here they are only logged.
    """
    for reservation in reservations:
        check_in = to_utc_datetime(reservation.check_in_date)
        check_out = to_utc_datetime(reservation.check_out_date)
        if check_out > check_in:
            continue
        if strict:
            raise InvalidInputError(
                f"Reservation {reservation.id} checks out on or before its check-in date",
                reservation_id=reservation.id,
            )
        logger.warning(
            "Reservation %s checks out on or before check-in; counting it as a 1-night stay",
            reservation.id,
        )


def lead_time_days(reservation: Reservation) -> int | None:
    """Days between booking and check-in, clamped at zero. None without ``created_at``."""
    if reservation.created_at is None:
        return None
    created = to_utc_datetime(reservation.created_at)
    check_in = to_utc_datetime(reservation.check_in_date)
    return max(0, math.ceil((check_in - created) / ONE_DAY))


def ratio(numerator: Decimal | int, denominator: Decimal | int) -> Decimal:
    """``numerator / denominator``, or zero when the denominator is zero."""
    if not denominator:
        return ZERO
    return Decimal(numerator) / Decimal(denominator)


def percentage(numerator: Decimal | int, denominator: Decimal | int) -> Decimal:
    """``numerator / denominator * 100``, or zero when the denominator is zero."""
    if not denominator:
        return ZERO
    return Decimal(numerator) * 100 / Decimal(denominator)


def percent_change(current: Decimal | int, previous: Decimal | int) -> Decimal:
    """Relative change in percent; 100 when growing from nothing, 0 when both are empty."""
    if previous:
        return (Decimal(current) - Decimal(previous)) * 100 / Decimal(previous)
    return Decimal("100") if current else ZERO


def window_start(days: int, reference_date: date) -> date:
    """First day of the ``days``-long window ending at ``reference_date``.

    Raises:
        InvalidInputError: For a negative length, or a window that would start
            before the first representable calendar day.
    """
    if days < 0:
        raise InvalidInputError(f"Window length must not be negative, got {days}")
    try:
        return reference_date - timedelta(days=days - 1)
    except OverflowError as exc:
        raise InvalidInputError(
            f"A {days}-day window ending {reference_date.isoformat()} starts before the supported calendar"
        ) from exc


def window_days(days: int, reference_date: date) -> list[date]:
    """The ``days`` calendar days ending at ``reference_date`` inclusive, ascending."""
    start = window_start(days, reference_date)
    return [start + timedelta(days=offset) for offset in range(days)]
