"""Shared test configuration and fixtures.

All tests run against a fixed clock: "now" is 2024-03-15 12:00 UTC, a Friday.
"""

import itertools
from collections.abc import AsyncGenerator, Callable
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from hotel_analytics.analytics.aggregator import MetricsAggregator
from hotel_analytics.analytics.cache import SnapshotCache
from hotel_analytics.api.deps import get_aggregator, get_snapshot_cache
from hotel_analytics.main import app
from hotel_analytics.schemas.reservation import Reservation, Room

FIXED_NOW = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)
REFERENCE_DATE = FIXED_NOW.date()


def fixed_clock() -> datetime:
    return FIXED_NOW


# ---------------------------------------------------------------------------
# Record factories
# ---------------------------------------------------------------------------


@pytest.fixture
def make_reservation() -> Callable[..., Reservation]:
    """Return a factory building reservations with sensible defaults.

    ``nights`` sets the check-out relative to check-in unless ``check_out``
    is given explicitly.
    """
    ids = itertools.count(1)

    def _make(
        check_in: date | datetime = REFERENCE_DATE,
        nights: int = 2,
        total_amount: str | int = "100",
        status: str = "confirmed",
        adults: int = 1,
        children: int = 0,
        guest_key: str | None = None,
        room_id: str | None = None,
        created_at: date | datetime | None = None,
        check_out: date | datetime | None = None,
    ) -> Reservation:
        return Reservation(
            id=f"res-{next(ids)}",
            check_in_date=check_in,
            check_out_date=check_out if check_out is not None else check_in + timedelta(days=nights),
            created_at=created_at,
            total_amount=Decimal(str(total_amount)),
            status=status,
            adults=adults,
            children=children,
            guest_key=guest_key,
            room_id=room_id,
        )

    return _make


@pytest.fixture
def rooms() -> list[Room]:
    """Ten rooms: six Standard, three Deluxe, one Suite."""
    types = ["Standard"] * 6 + ["Deluxe"] * 3 + ["Suite"]
    return [Room(id=f"room-{i}", type=room_type, base_price=Decimal("100")) for i, room_type in enumerate(types, 1)]


@pytest.fixture
def aggregator() -> MetricsAggregator:
    """A UTC aggregator with the documented defaults and a fixed clock."""
    return MetricsAggregator(clock=fixed_clock)


# ---------------------------------------------------------------------------
# HTTP client
# ---------------------------------------------------------------------------


@pytest.fixture
def snapshot_cache() -> SnapshotCache:
    return SnapshotCache(ttl_seconds=60, max_entries=8)


@pytest_asyncio.fixture
async def client(snapshot_cache: SnapshotCache) -> AsyncGenerator[AsyncClient, None]:
    """Provide an httpx AsyncClient with a fresh cache and a fixed-clock aggregator."""
    app.dependency_overrides[get_snapshot_cache] = lambda: snapshot_cache
    app.dependency_overrides[get_aggregator] = lambda: MetricsAggregator(clock=fixed_clock)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

    app.dependency_overrides.clear()
