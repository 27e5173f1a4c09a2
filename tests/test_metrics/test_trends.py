"""Unit tests for the daily trend, the occupancy profile and the period comparison."""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest

from hotel_analytics.analytics.trends import (
    compute_daily_trend,
    compute_occupancy_profile,
    compute_period_comparison,
)
from hotel_analytics.exceptions import InvalidInputError

REFERENCE_DATE = date(2024, 3, 15)


class TestCoverage:
    """The trend always holds exactly one bucket per day of the window."""

    @pytest.mark.parametrize("days", [1, 7, 30, 90])
    def test_empty_input_fills_every_day(self, days):
        trend = compute_daily_trend([], days, REFERENCE_DATE)
        assert len(trend) == days
        assert all(bucket.revenue == 0 and bucket.booking_count == 0 for bucket in trend)

    @pytest.mark.parametrize("days", [1, 7, 30])
    def test_bucket_count_independent_of_reservations(self, make_reservation, days):
        reservations = [make_reservation(check_in=REFERENCE_DATE - timedelta(days=i)) for i in range(45)]
        assert len(compute_daily_trend(reservations, days, REFERENCE_DATE)) == days

    def test_zero_day_window_is_empty(self):
        assert compute_daily_trend([], 0, REFERENCE_DATE) == ()

    def test_negative_window_rejected(self):
        with pytest.raises(InvalidInputError):
            compute_daily_trend([], -1, REFERENCE_DATE)

    def test_window_before_first_calendar_day_rejected(self):
        with pytest.raises(InvalidInputError):
            compute_daily_trend([], 7, date(1, 1, 3))

    def test_oversized_window_rejected_before_building_buckets(self):
        with pytest.raises(InvalidInputError):
            compute_daily_trend([], 800_000, REFERENCE_DATE)

    def test_window_ends_on_reference_date_ascending(self):
        trend = compute_daily_trend([], 7, REFERENCE_DATE)
        assert trend[0].date == date(2024, 3, 9)
        assert trend[-1].date == REFERENCE_DATE
        dates = [bucket.date for bucket in trend]
        assert dates == sorted(dates)


class TestBucketContents:
    def test_bucket_aggregates_check_ins_of_the_day(self, make_reservation):
        reservations = [
            make_reservation(check_in=date(2024, 3, 14), total_amount=100, adults=2),
            make_reservation(check_in=date(2024, 3, 14), total_amount=300, adults=1, children=2),
            make_reservation(check_in=date(2024, 3, 12), total_amount=50),
        ]
        trend = {bucket.date: bucket for bucket in compute_daily_trend(reservations, 7, REFERENCE_DATE)}

        day = trend[date(2024, 3, 14)]
        assert day.revenue == Decimal("400")
        assert day.booking_count == 2
        assert day.guest_count == 5
        assert day.average_value == Decimal("200")

        empty = trend[date(2024, 3, 13)]
        assert empty.booking_count == 0
        assert empty.average_value == 0

    def test_revenue_conserved_for_check_ins_inside_window(self, make_reservation):
        inside = [
            make_reservation(check_in=REFERENCE_DATE - timedelta(days=offset), total_amount=10 * (offset + 1))
            for offset in range(7)
        ]
        outside = [
            make_reservation(check_in=REFERENCE_DATE - timedelta(days=7), total_amount=999),
            make_reservation(check_in=REFERENCE_DATE + timedelta(days=1), total_amount=999),
        ]
        trend = compute_daily_trend(inside + outside, 7, REFERENCE_DATE)
        assert sum(bucket.revenue for bucket in trend) == sum(r.total_amount for r in inside)


class TestTimezones:
    def test_naive_datetimes_are_utc(self, make_reservation):
        reservation = make_reservation(check_in=datetime(2024, 3, 14, 23, 30))
        trend = compute_daily_trend([reservation], 3, REFERENCE_DATE)
        assert {bucket.date: bucket.booking_count for bucket in trend}[date(2024, 3, 14)] == 1

    def test_buckets_follow_configured_timezone(self, make_reservation):
        # 23:30 UTC on the 14th is already the 15th in Bali (UTC+8).
        reservation = make_reservation(check_in=datetime(2024, 3, 14, 23, 30, tzinfo=timezone.utc))
        trend = compute_daily_trend([reservation], 3, REFERENCE_DATE, ZoneInfo("Asia/Makassar"))
        counts = {bucket.date: bucket.booking_count for bucket in trend}
        assert counts[date(2024, 3, 15)] == 1
        assert counts[date(2024, 3, 14)] == 0

    def test_plain_dates_are_not_shifted(self, make_reservation):
        reservation = make_reservation(check_in=date(2024, 3, 14))
        trend = compute_daily_trend([reservation], 3, REFERENCE_DATE, ZoneInfo("America/New_York"))
        assert {bucket.date: bucket.booking_count for bucket in trend}[date(2024, 3, 14)] == 1


class TestPeriodComparison:
    def test_counts_current_and_previous_windows(self, make_reservation):
        reservations = [
            # current window: 2024-03-09 .. 2024-03-15
            make_reservation(check_in=date(2024, 3, 9), total_amount=100),
            make_reservation(check_in=date(2024, 3, 15), total_amount=200),
            make_reservation(check_in=date(2024, 3, 12), total_amount=300),
            # previous window: 2024-03-02 .. 2024-03-08
            make_reservation(check_in=date(2024, 3, 2), total_amount=200),
            make_reservation(check_in=date(2024, 3, 8), total_amount=200),
            # outside both
            make_reservation(check_in=date(2024, 3, 1), total_amount=1000),
        ]
        comparison = compute_period_comparison(reservations, 7, REFERENCE_DATE)
        assert comparison.current_bookings == 3
        assert comparison.previous_bookings == 2
        assert comparison.booking_change == Decimal("50")
        assert comparison.current_revenue == Decimal("600")
        assert comparison.previous_revenue == Decimal("400")
        assert comparison.revenue_change == Decimal("50")

    def test_growth_from_nothing_is_one_hundred_percent(self, make_reservation):
        comparison = compute_period_comparison([make_reservation()], 7, REFERENCE_DATE)
        assert comparison.previous_bookings == 0
        assert comparison.booking_change == Decimal("100")

    def test_empty_input_has_no_change(self):
        comparison = compute_period_comparison([], 7, REFERENCE_DATE)
        assert comparison.booking_change == 0
        assert comparison.revenue_change == 0

    def test_decline_is_negative(self, make_reservation):
        reservations = [make_reservation(check_in=date(2024, 3, 5)) for _ in range(4)]
        reservations.append(make_reservation(check_in=date(2024, 3, 14)))
        comparison = compute_period_comparison(reservations, 7, REFERENCE_DATE)
        assert comparison.booking_change == Decimal("-75")

    def test_previous_window_before_first_calendar_day_rejected(self):
        # The current window fits; the one before it would start before year 1.
        with pytest.raises(InvalidInputError):
            compute_period_comparison([], 7, date(1, 1, 10))


class TestOccupancyProfile:
    def test_rooms_held_each_night(self, make_reservation):
        # Window 2024-03-09 (Sat) .. 2024-03-15 (Fri), four rooms.
        reservations = [
            make_reservation(check_in=date(2024, 3, 10), check_out=date(2024, 3, 12)),
            make_reservation(check_in=date(2024, 3, 11), check_out=date(2024, 3, 16)),
            make_reservation(check_in=date(2024, 3, 5), check_out=date(2024, 3, 10)),
            make_reservation(check_in=date(2024, 3, 11), check_out=date(2024, 3, 13), status="cancelled"),
        ]
        profile = compute_occupancy_profile(reservations, 4, 7, REFERENCE_DATE)

        assert [entry.date for entry in profile.days] == [date(2024, 3, 9) + timedelta(days=i) for i in range(7)]
        assert [entry.occupied_rooms for entry in profile.days] == [1, 1, 2, 1, 1, 1, 1]
        assert profile.days[2].available_rooms == 2
        assert profile.days[2].occupancy_rate == Decimal("50")
        assert profile.current == Decimal("25")
        assert profile.maximum == Decimal("50")
        assert profile.minimum == Decimal("25")
        assert profile.average == Decimal("200") / 7
        assert profile.weekend_average == Decimal("25")
        assert profile.weekday_average == Decimal("30")

    def test_check_out_day_is_free(self, make_reservation):
        reservation = make_reservation(check_in=date(2024, 3, 13), check_out=date(2024, 3, 15))
        profile = compute_occupancy_profile([reservation], 1, 3, REFERENCE_DATE)
        assert [entry.occupied_rooms for entry in profile.days] == [1, 1, 0]

    def test_inverted_stay_holds_check_in_day(self, make_reservation):
        reservation = make_reservation(check_in=date(2024, 3, 14), check_out=date(2024, 3, 14))
        profile = compute_occupancy_profile([reservation], 1, 3, REFERENCE_DATE)
        assert [entry.occupied_rooms for entry in profile.days] == [0, 1, 0]

    def test_overbooking_caps_rate(self, make_reservation):
        reservations = [make_reservation(check_in=REFERENCE_DATE) for _ in range(3)]
        profile = compute_occupancy_profile(reservations, 2, 1, REFERENCE_DATE)
        assert profile.days[0].occupied_rooms == 3
        assert profile.days[0].available_rooms == 0
        assert profile.current == Decimal("100")

    def test_empty_input_is_all_zero(self):
        profile = compute_occupancy_profile([], 10, 7, REFERENCE_DATE)
        assert len(profile.days) == 7
        assert profile.average == 0
        assert profile.maximum == 0
        assert profile.weekend_average == 0

    def test_zero_day_window(self):
        profile = compute_occupancy_profile([], 10, 0, REFERENCE_DATE)
        assert profile.days == ()
        assert profile.current == 0

    def test_days_follow_configured_timezone(self, make_reservation):
        # Checks in at 23:30 UTC on the 13th, which is the 14th in Bali (UTC+8).
        reservation = make_reservation(
            check_in=datetime(2024, 3, 13, 23, 30, tzinfo=timezone.utc),
            check_out=datetime(2024, 3, 14, 23, 30, tzinfo=timezone.utc),
        )
        profile = compute_occupancy_profile([reservation], 1, 3, REFERENCE_DATE, ZoneInfo("Asia/Makassar"))
        assert [entry.occupied_rooms for entry in profile.days] == [0, 1, 0]
