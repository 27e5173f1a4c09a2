"""Application configuration using pydantic-settings."""

from dataclasses import dataclass
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

MAX_WINDOW_DAYS = 3660  # about ten years of daily buckets


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "Hotel Analytics"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"  # development, staging, production

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Analytics defaults
    analytics_timezone: str = "UTC"
    analytics_window_days: int = 30
    analytics_room_count_fallback: int = 30
    analytics_strict_validation: bool = False

    # Insight thresholds (percentages)
    low_occupancy_threshold: float = 60
    high_cancellation_threshold: float = 15
    loyalty_threshold: float = 25

    # Snapshot cache
    snapshot_cache_ttl_seconds: float = 300
    snapshot_cache_max_entries: int = 256

    # Frontend
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
    ]

    @model_validator(mode="after")
    def _validate_timezone(self) -> "Settings":
        """Reject timezone names the zoneinfo database does not know."""
        if self.analytics_timezone.upper() == "UTC":
            return self
        try:
            ZoneInfo(self.analytics_timezone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown ANALYTICS_TIMEZONE: {self.analytics_timezone!r}") from exc
        return self

    @model_validator(mode="after")
    def _validate_analytics_defaults(self) -> "Settings":
        """Window length and room fallback are used as divisors, so both must be positive."""
        if not 1 <= self.analytics_window_days <= MAX_WINDOW_DAYS:
            raise ValueError(f"ANALYTICS_WINDOW_DAYS must be between 1 and {MAX_WINDOW_DAYS}")
        if self.analytics_room_count_fallback <= 0:
            raise ValueError("ANALYTICS_ROOM_COUNT_FALLBACK must be a positive room count")
        if self.snapshot_cache_max_entries <= 0:
            raise ValueError("SNAPSHOT_CACHE_MAX_ENTRIES must be positive")
        return self


settings = Settings()


def get_settings() -> Settings:
    """Return the process settings; overridable as a FastAPI dependency."""
    return settings


@dataclass(frozen=True)
class InsightThresholds:
    """Percentage thresholds that turn overview KPIs into insight flags."""

    low_occupancy_threshold: float = 60  # occupancy below this -> warning
    high_cancellation_threshold: float = 15  # cancellations above this -> warning
    loyalty_threshold: float = 25  # repeat guests above this -> info

    @classmethod
    def from_settings(cls, config: Settings | None = None) -> "InsightThresholds":
        config = config or settings
        return cls(
            low_occupancy_threshold=config.low_occupancy_threshold,
            high_cancellation_threshold=config.high_cancellation_threshold,
            loyalty_threshold=config.loyalty_threshold,
        )


DEFAULT_THRESHOLDS = InsightThresholds()
