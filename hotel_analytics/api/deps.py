"""Shared API dependencies — single import point for all routers.

Re-exports configuration and analytics dependencies so that router modules
can import everything they need from one place::

    from hotel_analytics.api.deps import get_aggregator, get_snapshot_cache
"""

from fastapi import Depends, Request

from hotel_analytics.analytics.aggregator import MetricsAggregator
from hotel_analytics.analytics.cache import SnapshotCache
from hotel_analytics.config import Settings, get_settings


def get_aggregator(config: Settings = Depends(get_settings)) -> MetricsAggregator:
    """Build an aggregator configured from the application settings."""
    return MetricsAggregator.from_settings(config)


def get_snapshot_cache(request: Request) -> SnapshotCache:
    """Return the snapshot cache created in the application lifespan."""
    return request.app.state.snapshot_cache


__all__ = [
    "get_aggregator",
    "get_settings",
    "get_snapshot_cache",
]
