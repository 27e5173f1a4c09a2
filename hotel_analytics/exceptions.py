"""Exceptions raised by the analytics layer."""


class AnalyticsError(Exception):
    """Base class for analytics errors."""


class InvalidInputError(AnalyticsError, ValueError):
    """Input the aggregator refuses to compute over.

    Raised for a reservation whose check-out is not after its check-in when
    strict validation is enabled, and for malformed window arguments.
    """

    def __init__(self, message: str, reservation_id: str | None = None) -> None:
        super().__init__(message)
        self.reservation_id = reservation_id
