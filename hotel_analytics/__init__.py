"""Hotel Analytics: occupancy, revenue and trend metrics over reservation records."""

__version__ = "0.1.0"
